"""Turn a slice of OSM data into an SVG document.

The :class:`RenderPipeline` runs five phases in order:

1. project every node into a full :class:`PointIndex` (parallel),
2. select the nodes strictly inside the bounding region,
3. render every way with at least one selected node (parallel),
4. overlay a coordinate grid,
5. serialize the layered document.

Phase 3 needs both indexes: the selected one decides whether a way is drawn,
the full one supplies the coordinates of its whole vertex chain.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional
from xml.sax.saxutils import escape

from .config import SVG_NAMESPACE, XLINK_NAMESPACE, RenderSettings
from .drawing import DrawingAccumulator
from .entities import EntitySource, LineEntity, PointEntity
from .errors import OutputWriteError
from .geometry import BoundingRegion
from .osm_reader import OsmReader
from .parallel import par_map_reduce
from .point_index import Coordinate, PointIndex
from .projection import RijksdriehoekProjector
from .style import PATTERN_DEFS, StyleResolver, StyleTable, load_style_table
from .utils.logging import get_logger

LOGGER = get_logger(__name__)

Projector = Callable[[float, float], Coordinate]

_ATTRIBUTE_ENTITIES = {'"': "&quot;"}


class RenderPipeline:
    """Render ways touching ``region`` with the styles from ``style_table``."""

    def __init__(
        self,
        region: BoundingRegion,
        style_table: StyleTable,
        *,
        project: Optional[Projector] = None,
        settings: Optional[RenderSettings] = None,
    ) -> None:
        if project is None:
            project = RijksdriehoekProjector()
        self._region = region
        self._resolver = StyleResolver(style_table)
        self._project = project
        self._settings = settings or RenderSettings()

    @property
    def region(self) -> BoundingRegion:
        return self._region

    @property
    def settings(self) -> RenderSettings:
        return self._settings

    # ------------------------------------------------------------------
    def run(self, source: EntitySource) -> str:
        """Execute every phase against ``source`` and return the SVG text."""

        full_index = self.build_index(source.iter_points())
        selected = self.select(full_index)
        LOGGER.debug("Indexed %d nodes, %d inside %s", len(full_index), len(selected), self._region)

        drawing = self.render_ways(source.iter_lines(), full_index, selected)
        LOGGER.debug("Rendered %d elements", len(drawing))

        self.add_grid(drawing)
        return self.serialize(drawing)

    # ------------------------------------------------------------------
    def build_index(self, points: Iterable[PointEntity]) -> PointIndex:
        return PointIndex.build_from(
            points,
            self._project,
            max_workers=self._settings.max_workers,
            chunk_size=self._settings.chunk_size,
        )

    def select(self, full_index: PointIndex) -> PointIndex:
        return full_index.filter(self._region)

    # ------------------------------------------------------------------
    def render_ways(
        self,
        lines: Iterable[LineEntity],
        full_index: PointIndex,
        selected: PointIndex,
    ) -> DrawingAccumulator:
        """Render every way in parallel and merge the partial drawings."""

        def fold(drawing: DrawingAccumulator, line: LineEntity) -> DrawingAccumulator:
            for priority, element in self.render_way(line, full_index, selected):
                drawing.append(priority, element)
            return drawing

        return par_map_reduce(
            lines,
            fold,
            DrawingAccumulator,
            DrawingAccumulator.combine,
            max_workers=self._settings.max_workers,
            chunk_size=self._settings.chunk_size,
        )

    # ------------------------------------------------------------------
    def render_way(
        self,
        line: LineEntity,
        full_index: PointIndex,
        selected: PointIndex,
    ) -> list[tuple[int, str]]:
        """Return the ``(priority, element)`` pairs for a single way.

        A way is drawn when at least one of its nodes is selected, and then
        with its complete vertex chain.  Every tag that resolves to a style
        produces its own ``<path>``.
        """

        if not any(selected.contains(ref) for ref in line.refs):
            return []

        description = escape(line.tag_description())
        elements: list[tuple[int, str]] = []
        path_d: Optional[str] = None
        for key, value in line.tags:
            rule = self._resolver.resolve(key, value)
            if rule is None:
                continue
            if path_d is None:
                path_d = full_index.path_definition(line.refs)
            style = escape(rule.style, _ATTRIBUTE_ENTITIES)
            elements.append(
                (
                    rule.priority,
                    f'<path d="{path_d}" id="{line.id}" style="{style}">'
                    f"<desc>{description}</desc></path>",
                )
            )

        if not elements:
            LOGGER.debug("Missing id:%s %s nodes:%s", line.id, description, len(line.refs))
        return elements

    # ------------------------------------------------------------------
    def add_grid(self, drawing: DrawingAccumulator) -> None:
        """Append vertical and horizontal grid lines above the map content."""

        region = self._region
        spacing = self._settings.grid_spacing
        priority = self._settings.grid_priority

        for x in range(region.x_min, region.x_max, spacing):
            drawing.append(priority, _grid_line(x, region.y_min, x, region.y_max))
        for y in range(region.y_min, region.y_max, spacing):
            drawing.append(priority, _grid_line(region.x_min, y, region.x_max, y))

    # ------------------------------------------------------------------
    def serialize(self, drawing: DrawingAccumulator) -> str:
        """Wrap the drawing in an ``<svg>`` root sized to the region.

        The ``viewBox`` starts at ``-y_max`` because every ``y`` in the body
        is negated.
        """

        region = self._region
        return (
            "<svg\n"
            f'  width="{region.width}" \n'
            f'  height="{region.height}" \n'
            f'  viewBox="{region.x_min} -{region.y_max} {region.width} {region.height}" \n'
            f'  xmlns="{SVG_NAMESPACE}" \n'
            f'  xmlns:xlink="{XLINK_NAMESPACE}" \n'
            ">\n"
            f"{PATTERN_DEFS}\n"
            f"{drawing}"
            "</svg>\n"
        )


def _grid_line(x1: int, y1: int, x2: int, y2: int) -> str:
    return f'<line x1="{x1}" y1="-{y1}" x2="{x2}" y2="-{y2}" stroke="black" />'


# ---------------------------------------------------------------------------
# Plumbing
# ---------------------------------------------------------------------------


def convert(
    region: BoundingRegion,
    input_path: Path | str,
    output_path: Path | str,
    style_path: Path | str | None = None,
    *,
    settings: Optional[RenderSettings] = None,
    project: Optional[Projector] = None,
) -> Path:
    """Render ``input_path`` inside ``region`` and write the SVG to ``output_path``.

    Raises
    ------
    InputReadError
        The input file is missing or cannot be decoded.
    StyleLoadError
        ``style_path`` is given but unreadable or invalid.
    OutputWriteError
        The document cannot be written.
    """

    reader = OsmReader(input_path)
    style_table = load_style_table(style_path) if style_path is not None else StyleTable.default()
    pipeline = RenderPipeline(region, style_table, project=project, settings=settings)
    document = pipeline.run(reader)

    target = Path(output_path)
    try:
        target.write_text(document, encoding="utf8")
    except OSError as exc:
        raise OutputWriteError(f"Unable to write SVG to '{target}'") from exc

    LOGGER.debug("Wrote %d bytes to %s", len(document), target)
    return target


__all__ = ["Projector", "RenderPipeline", "convert"]
