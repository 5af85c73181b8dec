"""Payoff matrix model for decision analysis.

A payoff matrix is a table of strategies (rows) against states of nature
(columns). Each cell holds the payoff a strategy yields when the given state
occurs.

The matrix is allowed to exist in a partially filled state (cells set to
None, rows shorter than the state list) so that it can be built up cell by
cell. Criteria only evaluate a matrix for which is_valid() holds and treat
anything else as undetermined.

Queries:
- row_min(i) / row_max(i): extremes of a strategy's payoffs
- column_max(j): best payoff achievable in state j
- is_valid(): every cell present and finite
"""

from __future__ import annotations

import math
import string

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Demonstration data set: four regions scored on four indicators
EXAMPLE_DATA: list[list[float]] = [
    [713, 839, 1007, 1133],
    [857, 806, 974, 1100],
    [1049, 998, 930, 1056],
    [1193, 1142, 1074, 1023],
]


def default_strategy_label(index: int) -> str:
    """Label for the strategy at a row index.

    Examples:
        >>> default_strategy_label(0)
        'Strategy A'
        >>> default_strategy_label(27)
        'Strategy AB'
    """
    letters = ""
    n = index
    while True:
        n, remainder = divmod(n, 26)
        letters = string.ascii_uppercase[remainder] + letters
        if n == 0:
            break
        n -= 1
    return f"Strategy {letters}"


def default_state_label(index: int) -> str:
    """Label for the state of nature at a column index (1-based)."""
    return f"State {index + 1}"


class PayoffMatrix(BaseModel):
    """Strategies x states table of payoffs.

    Attributes:
        strategies: Row labels, one per strategy
        states: Column labels, one per state of nature
        data: Payoff rows in strategy order; None marks an unset cell
    """

    model_config = ConfigDict(frozen=True)

    strategies: list[str] = Field(default_factory=list)
    states: list[str] = Field(default_factory=list)
    data: list[list[float | None]] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_row_labels(self) -> "PayoffMatrix":
        if len(self.data) != len(self.strategies):
            raise ValueError(
                f"Matrix has {len(self.data)} rows but {len(self.strategies)} strategy labels"
            )
        return self

    @classmethod
    def create(cls, strategies_count: int, states_count: int) -> "PayoffMatrix":
        """Build a zero-filled matrix with default labels.

        Raises:
            ValueError: If either dimension is negative
        """
        if strategies_count < 0 or states_count < 0:
            raise ValueError(
                f"Dimensions must be non-negative, got {strategies_count}x{states_count}"
            )
        return cls(
            strategies=[default_strategy_label(i) for i in range(strategies_count)],
            states=[default_state_label(j) for j in range(states_count)],
            data=[[0.0] * states_count for _ in range(strategies_count)],
        )

    @classmethod
    def example(cls) -> "PayoffMatrix":
        """Load the 4x4 demonstration matrix."""
        return cls(
            strategies=[f"Region {i + 1}" for i in range(len(EXAMPLE_DATA))],
            states=[f"Indicator {j + 1}" for j in range(len(EXAMPLE_DATA[0]))],
            data=[list(map(float, row)) for row in EXAMPLE_DATA],
        )

    @property
    def strategies_count(self) -> int:
        return len(self.strategies)

    @property
    def states_count(self) -> int:
        return len(self.states)

    def _check_row_index(self, row_index: int) -> None:
        if not 0 <= row_index < self.strategies_count:
            raise IndexError(
                f"Strategy index {row_index} out of range for {self.strategies_count} strategies"
            )

    def _check_column_index(self, col_index: int) -> None:
        if not 0 <= col_index < self.states_count:
            raise IndexError(
                f"State index {col_index} out of range for {self.states_count} states"
            )

    def row(self, row_index: int) -> list[float | None]:
        """Payoffs of one strategy across all states."""
        self._check_row_index(row_index)
        return list(self.data[row_index])

    def column(self, col_index: int) -> list[float | None]:
        """Payoffs of every strategy in one state (None where a row is short)."""
        self._check_column_index(col_index)
        return [row[col_index] if col_index < len(row) else None for row in self.data]

    def row_min(self, row_index: int) -> float:
        """Worst payoff of a strategy.

        Raises:
            IndexError: If the row does not exist
            ValueError: If the row is empty
        """
        return min(self.row(row_index))

    def row_max(self, row_index: int) -> float:
        """Best payoff of a strategy.

        Raises:
            IndexError: If the row does not exist
            ValueError: If the row is empty
        """
        return max(self.row(row_index))

    def column_max(self, col_index: int) -> float:
        """Best payoff any strategy achieves in a state.

        Raises:
            IndexError: If the column does not exist
            ValueError: If there are no strategies
        """
        return max(self.column(col_index))

    def is_valid(self) -> bool:
        """Check that the matrix is rectangular and every cell is a finite number."""
        if len(self.data) != self.strategies_count:
            return False
        for row in self.data:
            if len(row) != self.states_count:
                return False
            for cell in row:
                if cell is None or not math.isfinite(cell):
                    return False
        return True

    def is_empty(self) -> bool:
        """True when there is nothing to evaluate (no strategies or no states)."""
        return self.strategies_count == 0 or self.states_count == 0

    def with_value(self, row_index: int, col_index: int, value: object) -> "PayoffMatrix":
        """Return a copy with one cell replaced.

        Values that do not parse as a number (or parse to NaN) are stored as 0.0.
        Short rows are padded with None up to the target column.
        """
        self._check_row_index(row_index)
        self._check_column_index(col_index)
        try:
            parsed = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            parsed = 0.0
        if math.isnan(parsed):
            parsed = 0.0

        data = [list(row) for row in self.data]
        target = data[row_index]
        if len(target) <= col_index:
            target.extend([None] * (col_index + 1 - len(target)))
        target[col_index] = parsed
        return self.model_copy(update={"data": data})

    def to_dict(self) -> dict:
        """Serialize matrix data with its dimensions."""
        return {
            "strategies": list(self.strategies),
            "states": list(self.states),
            "data": [list(row) for row in self.data],
            "dimensions": {
                "strategies": self.strategies_count,
                "states": self.states_count,
            },
        }
