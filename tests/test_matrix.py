"""Tests for the PayoffMatrix model.

Tests cover:
1. Construction - labels, defaults, row/label mismatch
2. Queries - row/column extremes and out-of-range faults
3. Validity predicate - unset, short and non-finite cells
4. Editing helpers - with_value coercion and immutability
5. Serialization - to_dict layout
"""

import math

import pytest
from pydantic import ValidationError

from decision_criteria.models.matrix import (
    EXAMPLE_DATA,
    PayoffMatrix,
    default_state_label,
    default_strategy_label,
)


# =============================================================================
# Construction Tests
# =============================================================================


class TestConstruction:
    """Tests for building matrices."""

    def test_create_zero_filled(self) -> None:
        """create() builds a zero matrix with default labels."""
        matrix = PayoffMatrix.create(3, 2)

        assert matrix.strategies == ["Strategy A", "Strategy B", "Strategy C"]
        assert matrix.states == ["State 1", "State 2"]
        assert matrix.data == [[0.0, 0.0], [0.0, 0.0], [0.0, 0.0]]
        assert matrix.is_valid()

    def test_create_negative_dimensions_rejected(self) -> None:
        """Negative dimensions raise ValueError."""
        with pytest.raises(ValueError, match="non-negative"):
            PayoffMatrix.create(-1, 2)

    def test_create_zero_dimensions(self) -> None:
        """A 0x0 matrix is legal and empty."""
        matrix = PayoffMatrix.create(0, 0)
        assert matrix.is_empty()
        assert matrix.strategies_count == 0
        assert matrix.states_count == 0

    def test_row_count_must_match_labels(self) -> None:
        """Each row needs a strategy label."""
        with pytest.raises(ValidationError, match="rows but"):
            PayoffMatrix(strategies=["A"], states=["S1"], data=[[1.0], [2.0]])

    def test_integers_coerced_to_float(self, scenario_matrix) -> None:
        """Integer payoffs are stored as floats."""
        assert all(isinstance(cell, float) for row in scenario_matrix.data for cell in row)

    def test_non_numeric_cell_rejected(self) -> None:
        """Cells that are not numbers fail validation."""
        with pytest.raises(ValidationError):
            PayoffMatrix(strategies=["A"], states=["S1"], data=[["lots"]])

    def test_matrix_is_frozen(self, scenario_matrix) -> None:
        """Attributes cannot be reassigned."""
        with pytest.raises(ValidationError):
            scenario_matrix.strategies = ["X"]

    def test_example_matrix(self) -> None:
        """example() loads the 4x4 demonstration data."""
        matrix = PayoffMatrix.example()

        assert matrix.strategies == ["Region 1", "Region 2", "Region 3", "Region 4"]
        assert matrix.states == ["Indicator 1", "Indicator 2", "Indicator 3", "Indicator 4"]
        assert matrix.data == [[float(x) for x in row] for row in EXAMPLE_DATA]
        assert matrix.is_valid()


class TestDefaultLabels:
    """Tests for generated row and column labels."""

    @pytest.mark.parametrize(
        "index,expected",
        [(0, "Strategy A"), (25, "Strategy Z"), (26, "Strategy AA"), (27, "Strategy AB")],
    )
    def test_strategy_labels(self, index: int, expected: str) -> None:
        assert default_strategy_label(index) == expected

    def test_state_labels_are_one_based(self) -> None:
        assert default_state_label(0) == "State 1"
        assert default_state_label(9) == "State 10"


# =============================================================================
# Query Tests
# =============================================================================


class TestQueries:
    """Tests for row and column queries."""

    def test_row_min_and_max(self, scenario_matrix) -> None:
        assert [scenario_matrix.row_min(i) for i in range(4)] == [320, 300, 200, 300]
        assert [scenario_matrix.row_max(i) for i in range(4)] == [780, 900, 950, 850]

    def test_column_max(self, scenario_matrix) -> None:
        assert [scenario_matrix.column_max(j) for j in range(4)] == [900, 950, 850, 700]

    def test_row_and_column(self, scenario_matrix) -> None:
        assert scenario_matrix.row(1) == [900, 400, 300, 700]
        assert scenario_matrix.column(2) == [640, 300, 200, 850]

    def test_row_returns_copy(self, scenario_matrix) -> None:
        """Mutating a returned row leaves the matrix untouched."""
        row = scenario_matrix.row(0)
        row[0] = -1
        assert scenario_matrix.data[0][0] == 320

    @pytest.mark.parametrize("index", [-1, 4, 100])
    def test_row_out_of_range_raises(self, scenario_matrix, index: int) -> None:
        """Nonexistent rows are a programming fault."""
        with pytest.raises(IndexError):
            scenario_matrix.row_min(index)

    @pytest.mark.parametrize("index", [-1, 4])
    def test_column_out_of_range_raises(self, scenario_matrix, index: int) -> None:
        with pytest.raises(IndexError):
            scenario_matrix.column_max(index)

    def test_row_min_of_empty_row_raises(self) -> None:
        matrix = PayoffMatrix.create(2, 0)
        with pytest.raises(ValueError):
            matrix.row_min(0)


# =============================================================================
# Validity Tests
# =============================================================================


class TestValidity:
    """Tests for is_valid() and is_empty()."""

    def test_valid_matrix(self, scenario_matrix) -> None:
        assert scenario_matrix.is_valid()
        assert not scenario_matrix.is_empty()

    def test_unset_cell_invalid(self) -> None:
        matrix = PayoffMatrix(strategies=["A"], states=["S1", "S2"], data=[[1.0, None]])
        assert not matrix.is_valid()

    def test_short_row_invalid(self) -> None:
        matrix = PayoffMatrix(strategies=["A", "B"], states=["S1", "S2"], data=[[1.0, 2.0], [3.0]])
        assert not matrix.is_valid()

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_cell_invalid(self, value: float) -> None:
        matrix = PayoffMatrix(strategies=["A"], states=["S1"], data=[[value]])
        assert not matrix.is_valid()

    def test_empty_matrix_is_valid_but_empty(self, empty_matrix) -> None:
        assert empty_matrix.is_valid()
        assert empty_matrix.is_empty()

    def test_strategies_without_states_empty(self) -> None:
        assert PayoffMatrix.create(3, 0).is_empty()


# =============================================================================
# Editing Tests
# =============================================================================


class TestWithValue:
    """Tests for with_value()."""

    def test_sets_value_on_copy(self, scenario_matrix) -> None:
        updated = scenario_matrix.with_value(0, 0, 999)

        assert updated.data[0][0] == 999.0
        assert scenario_matrix.data[0][0] == 320

    def test_parses_numeric_strings(self, scenario_matrix) -> None:
        assert scenario_matrix.with_value(1, 1, "12.5").data[1][1] == 12.5

    @pytest.mark.parametrize("value", ["abc", None, "nan", ""])
    def test_unparseable_stored_as_zero(self, scenario_matrix, value) -> None:
        assert scenario_matrix.with_value(2, 3, value).data[2][3] == 0.0

    def test_pads_short_rows(self) -> None:
        matrix = PayoffMatrix(strategies=["A"], states=["S1", "S2", "S3"], data=[[]])
        updated = matrix.with_value(0, 2, 5)

        assert updated.data == [[None, None, 5.0]]
        assert not updated.is_valid()

    def test_out_of_range_raises(self, scenario_matrix) -> None:
        with pytest.raises(IndexError):
            scenario_matrix.with_value(0, 4, 1.0)


class TestSerialization:
    """Tests for to_dict()."""

    def test_to_dict_layout(self, scenario_matrix) -> None:
        data = scenario_matrix.to_dict()

        assert data["strategies"] == ["A", "B", "C", "D"]
        assert data["states"] == ["S1", "S2", "S3", "S4"]
        assert data["data"][3] == [500, 550, 850, 300]
        assert data["dimensions"] == {"strategies": 4, "states": 4}

    def test_model_validate_ignores_dimensions(self, scenario_matrix) -> None:
        """A serialized matrix can be loaded back with pydantic."""
        loaded = PayoffMatrix.model_validate(scenario_matrix.to_dict())
        assert loaded == scenario_matrix
