"""
Tests for the validated input model.

These tests verify:
1. Invalid data cannot enter the minimizer
2. Rejections name the offending minterm
3. All input forms build the same function
"""

import pytest

from sop_minimization.errors import (
    IncompleteSpecification,
    InconsistentSpecification,
    MalformedInput,
    MinimizationError,
)
from sop_minimization.truth_tables import (
    BooleanFunction,
    bits_to_minterm,
    minterm_to_bits,
    parse_minterm,
    print_truth_table,
)


# =============================================================================
# VALIDATION
# =============================================================================

class TestValidation:
    """Test that malformed and inconsistent input is rejected."""

    def test_wrong_length(self):
        with pytest.raises(MalformedInput, match="expected 2 characters") as exc:
            BooleanFunction.from_minterms(2, ["0"], ["01", "10", "11"])
        assert exc.value.minterm == "0"

    def test_bad_character(self):
        with pytest.raises(MalformedInput, match="invalid character"):
            BooleanFunction.from_minterms(2, ["0x"], implicit_offset=True)

    def test_dont_care_not_allowed_in_minterms(self):
        with pytest.raises(MalformedInput):
            BooleanFunction.from_minterms(2, ["0-"], implicit_offset=True)

    def test_negative_variable_count(self):
        with pytest.raises(MalformedInput, match="non-negative integer"):
            BooleanFunction.from_minterms(-1, [])

    def test_inconsistent(self):
        with pytest.raises(InconsistentSpecification) as exc:
            BooleanFunction.from_minterms(2, ["00", "11"], ["00", "01", "10"])
        assert exc.value.minterm == "00"

    def test_incomplete(self):
        with pytest.raises(IncompleteSpecification, match="'10'") as exc:
            BooleanFunction.from_minterms(2, ["00"], ["01"])
        assert exc.value.minterm == "10"
        assert exc.value.missing == 2

    def test_errors_share_base_class(self):
        with pytest.raises(MinimizationError):
            BooleanFunction.from_minterms(2, ["00"], ["01"])

    def test_implicit_offset(self):
        f = BooleanFunction.from_minterms(3, ["111"], implicit_offset=True)
        assert f.on_set == (7,)
        assert f.implicit_offset
        assert f.off_set == ()
        assert f.off_count == 7
        assert list(f.off_points()) == list(range(7))

    def test_implicit_offset_is_not_materialized(self):
        f = BooleanFunction.from_minterms(28, ["1" * 28, "0" * 28], implicit_offset=True)
        assert f.off_set == ()
        assert f.off_count == (1 << 28) - 2
        assert not f.evaluate(5)

    def test_complete_input_is_explicit(self):
        f = BooleanFunction.from_minterms(1, ["1"], ["0"], implicit_offset=True)
        assert not f.implicit_offset
        assert f.off_set == (0,)

    def test_duplicates_are_merged(self):
        f = BooleanFunction.from_minterms(1, ["1", "1"], ["0"])
        assert f.on_set == (1,)

    def test_var_names_length_checked(self):
        with pytest.raises(MalformedInput, match="variable names"):
            BooleanFunction.from_minterms(2, ["00"], implicit_offset=True, var_names=["A"])


# =============================================================================
# INPUT FORMS
# =============================================================================

class TestInputForms:
    """Test the constructors."""

    def test_from_minterms(self):
        f = BooleanFunction.from_minterms(2, ["00", "11"], ["01", "10"])
        assert f.n_vars == 2
        assert f.on_set == (0, 3)
        assert f.off_set == (1, 2)
        assert f.var_names == ["A", "B"]

    def test_from_truth_table(self):
        f = BooleanFunction.from_truth_table("0110")
        assert f.n_vars == 2
        assert f.on_set == (1, 2)
        assert f.to_truth_table() == "0110"

    def test_truth_table_single_entry(self):
        f = BooleanFunction.from_truth_table("1")
        assert f.n_vars == 0
        assert f.on_set == (0,)

    def test_truth_table_length(self):
        with pytest.raises(MalformedInput, match="power of two"):
            BooleanFunction.from_truth_table("011")

    def test_truth_table_character(self):
        with pytest.raises(MalformedInput, match="invalid character"):
            BooleanFunction.from_truth_table("01-0")

    def test_from_cubes(self):
        f = BooleanFunction.from_cubes(3, ["1--"])
        assert f.on_set == (4, 5, 6, 7)
        assert list(f.off_points()) == [0, 1, 2, 3]

    def test_from_cubes_overlap(self):
        with pytest.raises(InconsistentSpecification) as exc:
            BooleanFunction.from_cubes(2, ["0-", "11"], ["-0"])
        assert exc.value.minterm == "00"

    def test_from_cubes_explicit_complete(self):
        with pytest.raises(IncompleteSpecification):
            BooleanFunction.from_cubes(2, ["0-"], ["10"], implicit_offset=False)

    def test_from_pla_lines(self):
        lines = [
            ".i 3",
            ".o 1",
            "11- 1",
            "# comment",
            "",
            "000 0   # trailing comment",
            ".e",
        ]
        f = BooleanFunction.from_pla_lines(lines)
        assert f.n_vars == 3
        assert f.on_set == (6, 7)
        assert f.off_set == (0,)
        assert list(f.off_points()) == [0, 1, 2, 3, 4, 5]

    def test_pla_variable_names(self):
        f = BooleanFunction.from_pla_lines([".ilb x y", "1- 1"])
        assert f.var_names == ["x", "y"]

    def test_pla_bad_line(self):
        with pytest.raises(MalformedInput, match="<cube> <0|1>"):
            BooleanFunction.from_pla_lines(["01 2"])

    def test_pla_empty(self):
        with pytest.raises(MalformedInput, match="no cubes"):
            BooleanFunction.from_pla_lines(["# nothing"])

    def test_same_function_from_every_form(self):
        a = BooleanFunction.from_minterms(2, ["00", "01", "10"], ["11"])
        b = BooleanFunction.from_truth_table("1110")
        c = BooleanFunction.from_cubes(2, ["0-", "-0"])
        assert a == b == c


# =============================================================================
# HELPERS
# =============================================================================

class TestHelpers:
    """Test evaluation and bit conversion."""

    def test_evaluate(self):
        f = BooleanFunction.from_truth_table("0110")
        assert [f.evaluate(m) for m in range(4)] == [False, True, True, False]

    def test_evaluate_out_of_range(self):
        f = BooleanFunction.from_truth_table("0110")
        with pytest.raises(ValueError):
            f.evaluate(4)

    def test_index_builders(self):
        f = BooleanFunction.from_truth_table("0110")
        assert list(f.on_index()) == [1, 2]
        assert list(f.off_index()) == [0, 3]

    def test_string_views(self):
        f = BooleanFunction.from_truth_table("0110")
        assert f.on_strings() == ["01", "10"]
        assert f.off_strings() == ["00", "11"]

    def test_bits(self):
        assert minterm_to_bits(6, 3) == (1, 1, 0)
        assert bits_to_minterm((1, 1, 0)) == 6
        assert parse_minterm("110", 3) == 6
        assert parse_minterm("", 0) == 0

    def test_print_truth_table(self, capsys):
        print_truth_table(BooleanFunction.from_truth_table("0110"))
        out = capsys.readouterr().out
        assert "A B | F" in out
        assert "0 1 | 1" in out
