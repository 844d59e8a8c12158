"""
Tests for minterm expansion into prime implicants.
"""

import pytest

from sop_minimization.cube import Cube
from sop_minimization.expansion import (
    check_order,
    expand_cube,
    expand_minterm,
    is_prime,
    rotated_orders,
)
from sop_minimization.ternary_index import ComplementIndex, TernaryIndex


def off_index(n_vars, *patterns):
    return TernaryIndex(n_vars, [int(p, 2) for p in patterns])


class TestExpandMinterm:
    """Test single-pass expansion."""

    def test_xnor_points_do_not_expand(self):
        off = off_index(2, "01", "10")
        assert expand_minterm(0b00, off).to_cube_str() == "00"
        assert expand_minterm(0b11, off).to_cube_str() == "11"

    def test_relaxes_second_variable(self):
        off = off_index(2, "10", "11")
        assert expand_minterm(0b00, off).to_cube_str() == "0-"

    def test_single_point_function(self):
        off = off_index(3, *[format(m, "03b") for m in range(7)])
        assert expand_minterm(0b111, off).to_cube_str() == "111"

    def test_empty_offset_gives_universe(self):
        assert expand_minterm(0, TernaryIndex(4)) == Cube.universe(4)

    def test_zero_variables(self):
        assert expand_minterm(0, TernaryIndex(0)) == Cube.universe(0)

    def test_ascending_order_is_default(self):
        """Variable 0 is tried first: 00 grows to -0, not 0-."""
        off = off_index(2, "11")
        assert expand_minterm(0b00, off).to_cube_str() == "-0"

    def test_custom_order(self):
        off = off_index(2, "11")
        assert expand_minterm(0b00, off, order=[1, 0]).to_cube_str() == "0-"

    def test_relaxations_compound(self):
        """Later candidates are built on the relaxed cube, not the seed."""
        # OFF = {011}: from 000, relax A -> -00, relax B -> --0, relax C -> --- hits 011
        off = off_index(3, "011")
        assert expand_minterm(0b000, off).to_cube_str() == "--0"

    def test_result_is_prime(self):
        off = off_index(4, "0011", "0110", "1100", "1111", "1001")
        for seed in [0, 1, 2, 4, 5, 8, 10]:
            prime = expand_minterm(seed, off)
            assert prime.covers(seed)
            assert is_prime(prime, off)


class TestExpandCube:
    """Test expansion from arbitrary cubes."""

    def test_expand_cube(self):
        off = off_index(3, "111")
        assert expand_cube(Cube.from_string("0-0"), off).to_cube_str() == "--0"

    def test_cube_hitting_offset_rejected(self):
        off = off_index(2, "11")
        with pytest.raises(ValueError, match="intersects the OFF-set"):
            expand_cube(Cube.from_string("1-"), off)

    def test_bad_order_rejected(self):
        with pytest.raises(ValueError, match="permutation"):
            expand_minterm(0, TernaryIndex(3), order=[0, 1, 1])


class TestHelpers:
    """Test primality check and variable orders."""

    def test_is_prime(self):
        off = off_index(2, "11")
        assert is_prime(Cube.from_string("-0"), off)
        assert not is_prime(Cube.from_string("00"), off)
        assert not is_prime(Cube.from_string("1-"), off)

    def test_rotated_orders(self):
        assert rotated_orders(3) == [[0, 1, 2], [1, 2, 0], [2, 0, 1]]
        assert rotated_orders(3, 1) == [[0, 1, 2]]
        assert rotated_orders(2, 5) == [[0, 1], [1, 0]]
        assert rotated_orders(0) == [[]]

    def test_check_order(self):
        assert check_order((2, 0, 1), 3) == [2, 0, 1]
        with pytest.raises(ValueError):
            check_order([0, 1], 3)


class TestImplicitOffset:
    """Expansion against the complement of the ON-set."""

    def test_same_primes_as_explicit_offset(self):
        on = [0b000, 0b001, 0b011, 0b111]
        explicit = TernaryIndex(3, [m for m in range(8) if m not in on])
        implicit = ComplementIndex(TernaryIndex(3, on))
        for seed in on:
            assert expand_minterm(seed, implicit) == expand_minterm(seed, explicit)
            assert is_prime(expand_minterm(seed, implicit), implicit)
