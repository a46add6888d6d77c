"""Tests for DrawingAccumulator ordering and merging."""

from __future__ import annotations

from osm_svg.drawing import DrawingAccumulator


class TestOrdering:
    def test_ascending_priority(self):
        drawing = DrawingAccumulator()
        drawing.append(5, "a")
        drawing.append(100, "b")
        drawing.append(11, "c")
        assert list(drawing.ordered()) == [(5, "a"), (11, "c"), (100, "b")]

    def test_bucket_keeps_append_order(self):
        drawing = DrawingAccumulator()
        drawing.append(100, "road-1")
        drawing.append(5, "forest")
        drawing.append(100, "road-2")
        drawing.append(11, "track")
        drawing.append(100, "road-3")
        assert list(drawing) == ["forest", "track", "road-1", "road-2", "road-3"]

    def test_str_one_element_per_line(self):
        drawing = DrawingAccumulator.one(2, "<x/>")
        drawing.append(1, "<y/>")
        assert str(drawing) == "<y/>\n<x/>\n"

    def test_empty(self):
        drawing = DrawingAccumulator()
        assert not drawing
        assert len(drawing) == 0
        assert str(drawing) == ""


class TestCombine:
    def test_contains_both_operands(self):
        left = DrawingAccumulator({5: ["a"], 100: ["b"]})
        right = DrawingAccumulator({11: ["c"], 100: ["d"]})
        merged = left.combine(right)
        assert merged.priorities() == [5, 11, 100]
        assert merged.bucket(100) == ["b", "d"]
        assert len(merged) == 4

    def test_operands_untouched(self):
        left = DrawingAccumulator.one(1, "a")
        right = DrawingAccumulator.one(1, "b")
        left.combine(right)
        assert left.bucket(1) == ["a"]
        assert right.bucket(1) == ["b"]

    def test_associative(self):
        a = DrawingAccumulator({1: ["a1"], 2: ["a2"]})
        b = DrawingAccumulator({2: ["b2"]})
        c = DrawingAccumulator({1: ["c1"], 3: ["c3"]})
        left = a.combine(b).combine(c)
        right = a.combine(b.combine(c))
        assert list(left.ordered()) == list(right.ordered())

    def test_empty_is_identity(self):
        drawing = DrawingAccumulator({3: ["x", "y"]})
        assert list(drawing.combine(DrawingAccumulator()).ordered()) == list(drawing.ordered())
        assert list(DrawingAccumulator().combine(drawing).ordered()) == list(drawing.ordered())
