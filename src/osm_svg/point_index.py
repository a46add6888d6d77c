"""Index of projected node coordinates keyed by node identifier."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple

from .entities import PointEntity
from .geometry import BoundingRegion
from .parallel import par_map_reduce

Coordinate = Tuple[int, int]

# Ways may reference nodes that are not part of the extract.  Those vertices
# are drawn at the origin instead of failing the whole way.
DEFAULT_COORDINATE: Coordinate = (0, 0)


class PointIndex:
    """Mapping from node id to projected ``(x, y)`` coordinate.

    Indexes are built per worker and merged with :meth:`combine`, which is a
    key-wise union.  On duplicate ids the right-hand operand wins; extracts
    never contain duplicate node ids, so the merge order does not change the
    result in practice.
    """

    __slots__ = ("_coords",)

    def __init__(self, coords: Optional[Mapping[int, Coordinate]] = None) -> None:
        self._coords: Dict[int, Coordinate] = dict(coords) if coords else {}

    # ------------------------------------------------------------------
    @classmethod
    def one(cls, node_id: int, x: int, y: int) -> "PointIndex":
        return cls({node_id: (x, y)})

    # ------------------------------------------------------------------
    @classmethod
    def build_from(
        cls,
        points: Iterable[PointEntity],
        project: Callable[[float, float], Coordinate],
        *,
        max_workers: int = 4,
        chunk_size: int = 1000,
    ) -> "PointIndex":
        """Project every point and merge the per-chunk indexes."""

        def fold(index: PointIndex, point: PointEntity) -> PointIndex:
            # ``index`` is private to the worker folding this chunk.
            index._coords[point.id] = project(point.lat, point.lon)
            return index

        return par_map_reduce(
            points,
            fold,
            cls,
            cls.combine,
            max_workers=max_workers,
            chunk_size=chunk_size,
        )

    # ------------------------------------------------------------------
    def combine(self, other: "PointIndex") -> "PointIndex":
        """Return the key-wise union of both indexes."""

        merged = dict(self._coords)
        merged.update(other._coords)
        return PointIndex(merged)

    # ------------------------------------------------------------------
    def filter(self, region: BoundingRegion) -> "PointIndex":
        """Return a new index with the points strictly inside ``region``."""

        return PointIndex(
            {node_id: (x, y) for node_id, (x, y) in self._coords.items() if region.is_inside(x, y)}
        )

    def contains(self, node_id: int) -> bool:
        return node_id in self._coords

    def lookup(self, node_id: int) -> Coordinate:
        """Total lookup: unknown ids resolve to :data:`DEFAULT_COORDINATE`."""

        return self._coords.get(node_id, DEFAULT_COORDINATE)

    # ------------------------------------------------------------------
    def path_definition(self, refs: Iterable[int]) -> str:
        """Build an SVG path ``d`` attribute for the vertex chain ``refs``.

        The first vertex becomes a move-to, the rest line-to commands.  The
        projection's ``y`` grows northwards while SVG grows downwards, hence
        the negated ``y``.
        """

        parts = []
        for position, node_id in enumerate(refs):
            x, y = self.lookup(node_id)
            command = "M" if position == 0 else "L"
            parts.append(f"{command} {x} -{y} ")
        return "".join(parts)

    # ------------------------------------------------------------------
    def as_dict(self) -> Dict[int, Coordinate]:
        return dict(self._coords)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._coords

    def __len__(self) -> int:
        return len(self._coords)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointIndex):
            return NotImplemented
        return self._coords == other._coords

    def __repr__(self) -> str:
        return f"PointIndex({len(self._coords)} points)"


__all__ = ["DEFAULT_COORDINATE", "Coordinate", "PointIndex"]
