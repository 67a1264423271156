"""Tests for footprint collision checks."""

import itertools

import pytest

from building_wireframe.models import Placement, PlacementError
from building_wireframe.placement import (
    collision_flags,
    collision_pairs,
    find_collisions,
    overlaps,
)


class TestScenarios:

    def test_close_buildings_collide(self):
        placements = [
            {"x": 10, "z": 10, "width": 1, "depth": 1},
            {"x": 10.4, "z": 10, "width": 1, "depth": 1},
        ]
        assert collision_flags(placements) == [True, True]
        assert len(find_collisions(placements)) == 2

    def test_touching_buildings_do_not_collide(self):
        placements = [
            {"x": 10, "z": 10, "width": 1, "depth": 1},
            {"x": 11, "z": 10, "width": 1, "depth": 1},
        ]
        assert collision_flags(placements) == [False, False]
        assert find_collisions(placements) == []

    def test_sample_map_is_clear(self):
        placements = [{"x": 10, "z": 10}, {"x": 20, "z": 20}, {"x": 30, "z": 30}]
        assert find_collisions(placements) == []


class TestOverlap:

    def test_boundary_is_exclusive(self):
        a = Placement(0.0, 0.0, width=2.0, depth=2.0)
        assert not overlaps(a, Placement(1.5, 0.0, width=1.0, depth=1.0))
        assert overlaps(a, Placement(1.499, 0.0, width=1.0, depth=1.0))

    def test_both_axes_must_overlap(self):
        a = Placement(0.0, 0.0)
        assert not overlaps(a, Placement(0.5, 3.0))
        assert not overlaps(a, Placement(3.0, 0.5))
        assert overlaps(a, Placement(0.5, 0.5))

    def test_z_boundary_is_exclusive(self):
        assert not overlaps(Placement(0.0, 0.0), Placement(0.0, -1.0))

    def test_large_footprint_swallows_small(self):
        assert overlaps(Placement(0.0, 0.0, width=10.0, depth=10.0), Placement(3.0, -2.0))

    def test_symmetric(self):
        placements = [
            Placement(0.0, 0.0, 2.0, 3.0),
            Placement(1.2, 2.0),
            Placement(-1.4, 0.5, 1.0, 1.0),
            Placement(5.0, 5.0, 4.0, 0.5),
            Placement(3.2, 5.1),
        ]
        for a, b in itertools.permutations(placements, 2):
            assert overlaps(a, b) == overlaps(b, a)


class TestCollisionSets:

    def test_self_is_excluded(self):
        assert collision_flags([Placement(0.0, 0.0)]) == [False]

    def test_identical_placements_collide(self):
        assert collision_flags([Placement(1.0, 1.0), Placement(1.0, 1.0)]) == [True, True]

    def test_only_colliding_reported_in_input_order(self):
        placements = [
            Placement(0.0, 0.0, id="a"),
            Placement(20.0, 20.0, id="b"),
            Placement(0.5, 0.0, id="c"),
        ]
        assert [p.id for p in find_collisions(placements)] == ["a", "c"]

    def test_pairs(self):
        placements = [Placement(0.0, 0.0), Placement(0.5, 0.0), Placement(0.9, 0.0), Placement(9.0, 9.0)]
        assert collision_pairs(placements) == [(0, 1), (0, 2), (1, 2)]
        assert collision_flags(placements) == [True, True, True, False]

    def test_pairs_skip_touching_neighbours(self):
        placements = [Placement(0.0, 0.0), Placement(0.5, 0.0), Placement(1.0, 0.0), Placement(9.0, 9.0)]
        assert collision_pairs(placements) == [(0, 1), (1, 2)]
        assert collision_flags(placements) == [True, True, True, False]

    def test_missing_footprint_defaults_to_one(self):
        assert collision_flags([{"x": 0, "z": 0}, {"x": 0.99, "z": 0}]) == [True, True]
        assert collision_flags([{"x": 0, "z": 0}, {"x": 1.0, "z": 0}]) == [False, False]

    def test_missing_z_raises(self):
        with pytest.raises(PlacementError, match=r"placements\[1\]\.z: Field required"):
            find_collisions([{"x": 0, "z": 0}, {"x": 1}])

    def test_missing_x_raises(self):
        with pytest.raises(PlacementError, match=r"placements\[0\]\.x: Field required"):
            find_collisions([{"z": 4}, {"x": 1, "z": 1}])

    @pytest.mark.parametrize("width", [0, -5, "wide", True])
    def test_bad_width_raises(self, width):
        with pytest.raises(PlacementError, match=r"placements\[1\]\.width"):
            find_collisions([{"x": 0, "z": 0}, {"x": 3, "z": 3, "width": width}])
        with pytest.raises(PlacementError, match=r"placements\[0\]\.width"):
            collision_pairs([{"x": 0, "z": 0, "width": width}])

    def test_empty(self):
        assert find_collisions([]) == []
        assert collision_pairs([]) == []

    def test_inputs_are_not_mutated(self):
        placements = [{"x": 10, "z": 10}, {"x": 10.4, "z": 10}]
        find_collisions(placements)
        assert placements == [{"x": 10, "z": 10}, {"x": 10.4, "z": 10}]
