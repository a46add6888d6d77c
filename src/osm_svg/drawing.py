"""Priority bucketed collection of serialized SVG elements."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple


class DrawingAccumulator:
    """SVG elements grouped by paint priority.

    Workers each fill their own accumulator and the partial results are
    merged with :meth:`combine`.  Serialization walks the buckets in
    ascending priority and keeps the append order inside a bucket.
    """

    __slots__ = ("_buckets",)

    def __init__(self, buckets: Optional[Dict[int, List[str]]] = None) -> None:
        self._buckets: Dict[int, List[str]] = {
            priority: list(lines) for priority, lines in (buckets or {}).items()
        }

    @classmethod
    def one(cls, priority: int, element: str) -> "DrawingAccumulator":
        return cls({priority: [element]})

    # ------------------------------------------------------------------
    def append(self, priority: int, element: str) -> None:
        """Add ``element`` at the end of the ``priority`` bucket."""

        self._buckets.setdefault(priority, []).append(element)

    def combine(self, other: "DrawingAccumulator") -> "DrawingAccumulator":
        """Return a new accumulator holding both operands' elements.

        Buckets present in both are concatenated, ``self`` first.  Neither
        operand is modified.
        """

        merged = DrawingAccumulator(self._buckets)
        for priority, lines in other._buckets.items():
            merged._buckets.setdefault(priority, []).extend(lines)
        return merged

    # ------------------------------------------------------------------
    def priorities(self) -> List[int]:
        return sorted(self._buckets)

    def bucket(self, priority: int) -> List[str]:
        return list(self._buckets.get(priority, ()))

    def ordered(self) -> Iterator[Tuple[int, str]]:
        """Yield ``(priority, element)`` in paint order."""

        for priority in self.priorities():
            for element in self._buckets[priority]:
                yield priority, element

    def __iter__(self) -> Iterator[str]:
        return (element for _, element in self.ordered())

    def __len__(self) -> int:
        return sum(len(lines) for lines in self._buckets.values())

    def __bool__(self) -> bool:
        return any(self._buckets.values())

    def __str__(self) -> str:
        return "".join(f"{element}\n" for element in self)

    def __repr__(self) -> str:
        return f"DrawingAccumulator({len(self)} elements in {len(self._buckets)} buckets)"


__all__ = ["DrawingAccumulator"]
