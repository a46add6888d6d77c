"""Plain records produced by the entity reader."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol


@dataclass(frozen=True)
class PointEntity:
    """A node: identifier plus WGS84 coordinate."""

    id: int
    lat: float
    lon: float


@dataclass(frozen=True)
class LineEntity:
    """A way: identifier, ordered node references and tag pairs."""

    id: int
    refs: tuple[int, ...]
    tags: tuple[tuple[str, str], ...] = ()

    def tag_description(self) -> str:
        """Concatenate every tag as ``key:value; `` in source order."""

        return "".join(f"{key}:{value}; " for key, value in self.tags)


class EntitySource(Protocol):
    """Anything the pipeline can read points and ways from.

    Each call starts a fresh pass over the data.
    """

    def iter_points(self) -> Iterator[PointEntity]:
        ...

    def iter_lines(self) -> Iterator[LineEntity]:
        ...


__all__ = ["EntitySource", "LineEntity", "PointEntity"]
