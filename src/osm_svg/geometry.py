"""Planar geometry helpers for selecting a slice of the map."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidRegionError


@dataclass(frozen=True)
class BoundingRegion:
    """Axis-aligned rectangle in projected coordinates.

    The rectangle is described by its origin ``(x, y)`` and its size
    ``(w, h)``.  Coordinates use the projection's orientation where ``y``
    grows northwards; the SVG serializer flips the sign when it writes the
    document.
    """

    x: int
    y: int
    w: int
    h: int

    def __post_init__(self) -> None:
        for name in ("x", "y", "w", "h"):
            if getattr(self, name) < 0:
                raise InvalidRegionError(f"Region component '{name}' must be non-negative")

    @property
    def x_min(self) -> int:
        return self.x

    @property
    def y_min(self) -> int:
        return self.y

    @property
    def x_max(self) -> int:
        return self.x + self.w

    @property
    def y_max(self) -> int:
        return self.y + self.h

    @property
    def width(self) -> int:
        return self.w

    @property
    def height(self) -> int:
        return self.h

    def is_inside(self, x: int, y: int) -> bool:
        """Return ``True`` when ``(x, y)`` lies strictly inside the rectangle.

        Points on the boundary are outside.
        """

        return self.x_min < x < self.x_max and self.y_min < y < self.y_max


__all__ = ["BoundingRegion"]
