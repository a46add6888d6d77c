"""Read nodes and ways from OSM files using :mod:`osmium`.

:class:`OsmReader` turns the object stream of ``osmium.FileProcessor`` into
:class:`~osm_svg.entities.PointEntity` and
:class:`~osm_svg.entities.LineEntity` records.  osmium reuses its buffers,
so every object is copied into a plain record before it is handed on.  Each
``iter_*`` call opens the file again, which lets the pipeline make one pass
for the node index and a second one for the ways.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator

import osmium

from .entities import LineEntity, PointEntity
from .errors import InputReadError
from .utils.logging import get_logger

LOGGER = get_logger(__name__)


class OsmReader:
    """Entity source backed by an ``.osm.pbf`` (or any osmium readable) file."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        if not self._path.exists():
            raise InputReadError(f"Input file '{self._path}' does not exist")
        if not self._path.is_file():
            raise InputReadError(f"Input path '{self._path}' is not a file")

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    def iter_points(self) -> Iterator[PointEntity]:
        """Yield every node with a valid location."""

        skipped = 0
        for node in self._objects(osmium.osm.NODE):
            location = node.location
            if not location.valid():
                skipped += 1
                continue
            yield PointEntity(node.id, location.lat, location.lon)
        if skipped:
            LOGGER.debug("Skipped %d nodes without a valid location", skipped)

    # ------------------------------------------------------------------
    def iter_lines(self) -> Iterator[LineEntity]:
        """Yield every way with its node references and tags."""

        for way in self._objects(osmium.osm.WAY):
            yield LineEntity(
                way.id,
                tuple(node.ref for node in way.nodes),
                tuple((tag.k, tag.v) for tag in way.tags),
            )

    # ------------------------------------------------------------------
    def _objects(self, entities: Any) -> Iterator[Any]:
        try:
            for obj in osmium.FileProcessor(str(self._path), entities):
                yield obj
        except (RuntimeError, OSError) as exc:
            raise InputReadError(f"Failed to decode '{self._path}': {exc}") from exc


__all__ = ["OsmReader"]
