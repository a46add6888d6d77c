"""Tests for PointIndex construction, merging and path output."""

from __future__ import annotations

import itertools
import random

import pytest

from osm_svg.entities import PointEntity
from osm_svg.geometry import BoundingRegion
from osm_svg.point_index import DEFAULT_COORDINATE, PointIndex


def _points(count: int) -> list[PointEntity]:
    rng = random.Random(42)
    return [PointEntity(i, lat=rng.uniform(0, 5000), lon=rng.uniform(0, 5000)) for i in range(1, count + 1)]


class TestCombine:
    def test_union(self):
        merged = PointIndex.one(1, 10, 20).combine(PointIndex.one(2, 30, 40))
        assert merged.as_dict() == {1: (10, 20), 2: (30, 40)}

    def test_operands_untouched(self):
        left = PointIndex.one(1, 10, 20)
        right = PointIndex.one(2, 30, 40)
        left.combine(right)
        assert len(left) == 1
        assert len(right) == 1

    def test_duplicate_last_combined_wins(self):
        merged = PointIndex.one(1, 10, 20).combine(PointIndex.one(1, 99, 99))
        assert merged.lookup(1) == (99, 99)

    def test_empty_is_identity(self):
        index = PointIndex.one(3, 1, 2)
        assert index.combine(PointIndex()) == index
        assert PointIndex().combine(index) == index

    def test_associative_and_commutative_for_disjoint_keys(self):
        parts = [PointIndex.one(i, i, i * 2) for i in range(1, 6)]
        expected = PointIndex({i: (i, i * 2) for i in range(1, 6)})
        for order in itertools.permutations(parts):
            left_fold = order[0]
            for part in order[1:]:
                left_fold = left_fold.combine(part)
            assert left_fold == expected
        right_nested = parts[0].combine(parts[1].combine(parts[2].combine(parts[3].combine(parts[4]))))
        assert right_nested == expected


class TestBuildFrom:
    def test_projects_every_point(self, planar):
        index = PointIndex.build_from([PointEntity(1, lat=500.0, lon=250.0)], planar)
        assert index.as_dict() == {1: (250, 500)}

    @pytest.mark.parametrize("chunk_size,max_workers", [(1, 1), (1, 8), (7, 3), (64, 2), (10_000, 4)])
    def test_partitioning_does_not_change_result(self, planar, chunk_size, max_workers):
        points = _points(500)
        expected = PointIndex({p.id: planar(p.lat, p.lon) for p in points})
        index = PointIndex.build_from(points, planar, max_workers=max_workers, chunk_size=chunk_size)
        assert index == expected

    def test_accepts_lazy_iterator(self, planar):
        points = _points(50)
        index = PointIndex.build_from(iter(points), planar, chunk_size=8)
        assert len(index) == 50

    def test_empty_input(self, planar):
        assert len(PointIndex.build_from([], planar)) == 0


class TestFilter:
    def test_strict_interior(self):
        index = PointIndex(
            {
                1: (0, 500),  # left edge
                2: (1000, 500),  # right edge
                3: (500, 0),  # bottom edge
                4: (500, 1000),  # top edge
                5: (1, 1),
                6: (999, 999),
                7: (500, 500),
                8: (2000, 2000),
            }
        )
        selected = index.filter(BoundingRegion(0, 0, 1000, 1000))
        assert selected.as_dict() == {5: (1, 1), 6: (999, 999), 7: (500, 500)}

    def test_receiver_unchanged(self):
        index = PointIndex({1: (5, 5), 2: (5000, 5000)})
        index.filter(BoundingRegion(0, 0, 10, 10))
        assert len(index) == 2


class TestLookup:
    def test_contains(self):
        index = PointIndex.one(-4, 1, 1)
        assert index.contains(-4)
        assert -4 in index
        assert not index.contains(4)

    def test_missing_id_uses_default(self):
        assert PointIndex().lookup(123) == DEFAULT_COORDINATE == (0, 0)


class TestPathDefinition:
    def test_single_point(self):
        assert PointIndex.one(1, 500, 500).path_definition([1]) == "M 500 -500 "

    def test_move_then_lines(self):
        index = PointIndex({1: (10, 20), 2: (30, 40), 3: (50, 60)})
        assert index.path_definition([1, 2, 3, 1]) == "M 10 -20 L 30 -40 L 50 -60 L 10 -20 "

    def test_missing_reference_drawn_at_origin(self):
        index = PointIndex({1: (10, 20)})
        assert index.path_definition([1, 99]) == "M 10 -20 L 0 -0 "

    def test_empty_chain(self):
        assert PointIndex.one(1, 1, 1).path_definition([]) == ""
