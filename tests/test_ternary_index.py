"""
Tests for the ternary index.

These tests verify:
1. Point insertion, removal and membership
2. Cube queries agree with a brute-force scan
3. Ordered iteration and arena reuse
"""

import itertools
import random

import pytest

from sop_minimization.cube import Cube
from sop_minimization.ternary_index import ComplementIndex, TernaryIndex


def brute_within(points, cube):
    return sorted(p for p in points if cube.covers(p))


# =============================================================================
# POINT OPERATIONS
# =============================================================================

class TestPointOperations:
    """Test insert, remove and membership."""

    def test_insert_and_contains(self):
        index = TernaryIndex(3)
        assert index.insert(0b010)
        assert 0b010 in index
        assert 0b011 not in index
        assert len(index) == 1

    def test_duplicate_insert(self):
        index = TernaryIndex(3, [2])
        assert not index.insert(2)
        assert len(index) == 1

    def test_remove(self):
        index = TernaryIndex(3, [2, 7])
        assert index.remove(2)
        assert not index.remove(2)
        assert 2 not in index
        assert list(index) == [7]

    def test_remove_all_releases_nodes(self):
        index = TernaryIndex(3, range(8))
        assert index.node_count == 15
        for m in range(8):
            index.remove(m)
        assert index.is_empty()
        assert index.node_count == 1

    def test_nodes_are_reused(self):
        index = TernaryIndex(3, range(8))
        arena_size = len(index._count)
        for m in range(8):
            index.remove(m)
        for m in range(8):
            index.insert(m)
        assert len(index._count) == arena_size
        assert list(index) == list(range(8))

    def test_out_of_range_minterm(self):
        index = TernaryIndex(2)
        with pytest.raises(ValueError, match="out of range"):
            index.insert(4)
        with pytest.raises(ValueError, match="out of range"):
            index.remove(-1)
        assert 4 not in index

    def test_iteration_is_ascending(self):
        index = TernaryIndex(3, [5, 1, 7, 3])
        assert list(index) == [1, 3, 5, 7]

    def test_first(self):
        index = TernaryIndex(3, [6, 3, 5])
        assert index.first() == 3
        index.remove(3)
        assert index.first() == 5

    def test_empty_index(self):
        index = TernaryIndex(3)
        assert index.is_empty()
        assert index.first() is None
        assert list(index) == []
        assert not index.contains_within(Cube.universe(3))
        assert index.find_within(Cube.universe(3)) is None
        assert index.count_within(Cube.universe(3)) == 0

    def test_zero_variables(self):
        index = TernaryIndex(0)
        assert not index.contains_within(Cube.universe(0))
        assert index.insert(0)
        assert index.contains_within(Cube.universe(0))
        assert index.first() == 0
        assert index.remove(0)
        assert index.is_empty()


# =============================================================================
# CUBE QUERIES
# =============================================================================

class TestCubeQueries:
    """Test containment queries against cubes."""

    def test_contains_within(self):
        index = TernaryIndex(3, [0b010, 0b111])
        assert index.contains_within(Cube.from_string("0--"))
        assert not index.contains_within(Cube.from_string("1-0"))
        assert index.contains_within(Cube.from_string("---"))
        assert index.contains_within(Cube.from_string("11-"))
        assert not index.contains_within(Cube.from_string("000"))

    def test_find_within_returns_smallest(self):
        index = TernaryIndex(3, [0b111, 0b010, 0b110])
        assert index.find_within(Cube.from_string("-1-")) == 0b010
        assert index.find_within(Cube.from_string("11-")) == 0b110
        assert index.find_within(Cube.from_string("0-1")) is None

    def test_points_within(self):
        index = TernaryIndex(3, [0b111, 0b010, 0b110, 0b001])
        assert list(index.points_within(Cube.from_string("-1-"))) == [2, 6, 7]

    def test_count_within(self):
        index = TernaryIndex(3, [0b111, 0b010, 0b110, 0b001])
        assert index.count_within(Cube.from_string("---")) == 4
        assert index.count_within(Cube.from_string("--0")) == 2

    def test_remove_within(self):
        index = TernaryIndex(3, range(8))
        removed = index.remove_within(Cube.from_string("--1"))
        assert removed == [1, 3, 5, 7]
        assert list(index) == [0, 2, 4, 6]

    def test_width_mismatch(self):
        index = TernaryIndex(3, [1])
        with pytest.raises(ValueError, match="variables"):
            index.contains_within(Cube.from_string("0-"))

    def test_agrees_with_linear_scan(self):
        """Every query over every 5-variable cube matches a scan."""
        rng = random.Random(1)
        points = rng.sample(range(32), 11)
        index = TernaryIndex(5, points)

        for chars in itertools.product("01-", repeat=5):
            cube = Cube.from_string("".join(chars))
            expected = brute_within(points, cube)
            assert index.contains_within(cube) == bool(expected)
            assert list(index.points_within(cube)) == expected
            assert index.count_within(cube) == len(expected)
            assert index.find_within(cube) == (expected[0] if expected else None)

    def test_queries_after_removals(self):
        rng = random.Random(7)
        points = set(rng.sample(range(64), 30))
        index = TernaryIndex(6, points)
        for p in rng.sample(sorted(points), 15):
            index.remove(p)
            points.discard(p)

        for text in ["------", "1-----", "-0-1--", "11--00", "0-0-0-"]:
            cube = Cube.from_string(text)
            assert list(index.points_within(cube)) == brute_within(points, cube)


# =============================================================================
# COMPLEMENT VIEW
# =============================================================================

class TestComplementIndex:
    """Test queries over the points missing from an index."""

    def test_membership_and_iteration(self):
        comp = ComplementIndex(TernaryIndex(2, [1, 2]))
        assert list(comp) == [0, 3]
        assert len(comp) == 2
        assert 0 in comp
        assert 1 not in comp
        assert 4 not in comp

    def test_cube_queries(self):
        comp = ComplementIndex(TernaryIndex(2, [1, 2]))
        assert comp.contains_within(Cube.from_string("0-"))
        assert comp.find_within(Cube.from_string("0-")) == 0
        assert comp.find_within(Cube.from_string("1-")) == 3
        assert not comp.contains_within(Cube.from_string("01"))
        assert comp.find_within(Cube.from_string("01")) is None

    def test_full_index_has_empty_complement(self):
        comp = ComplementIndex(TernaryIndex(2, range(4)))
        assert comp.is_empty()
        assert not comp.contains_within(Cube.universe(2))

    def test_matches_brute_force(self):
        rng = random.Random(3)
        points = set(rng.sample(range(32), 12))
        comp = ComplementIndex(TernaryIndex(5, points))
        missing = [m for m in range(32) if m not in points]
        for trits in itertools.product("01-", repeat=5):
            cube = Cube.from_string("".join(trits))
            inside = brute_within(missing, cube)
            assert comp.contains_within(cube) == bool(inside)
            assert comp.find_within(cube) == (inside[0] if inside else None)

    def test_wide_index_stays_sparse(self):
        index = TernaryIndex(40, [0, (1 << 40) - 1])
        comp = ComplementIndex(index)
        assert len(comp) == (1 << 40) - 2
        assert comp.find_within(Cube.universe(40)) == 1
        assert not comp.contains_within(Cube.from_minterm(0, 40))
