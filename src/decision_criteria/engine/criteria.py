"""Classical decision criteria over a payoff matrix.

Each criterion scores every strategy and picks the optimal one:

- Wald (maximin): best of the worst cases, argmax of row minima
- Maximax: best of the best cases, argmax of row maxima
- Savage (minimax regret): argmin of the largest regret per strategy,
  where regret = column maximum - payoff
- Hurwitz(alpha): argmax of alpha * row max + (1 - alpha) * row min
- Bayes(p): argmax of the expected payoff under state probabilities p
- Laplace: Bayes with equal probabilities 1/N

Ties go to the first strategy in row order. Every tied index is still
reported in CriterionResult.tied_indices.

A matrix with no strategies, no states, or unset/non-finite cells produces
an undetermined result instead of an error. Malformed parameters raise
InvalidParameterError.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import ClassVar, Protocol, runtime_checkable

from decision_criteria.engine.errors import InvalidParameterError
from decision_criteria.models.matrix import PayoffMatrix
from decision_criteria.models.results import (
    UNDETERMINED,
    CriterionResult,
    CriterionType,
    StrategyTrace,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class Criterion(Protocol):
    """Protocol for decision criteria.

    Implementations are immutable and side-effect free: calculate() may be
    called any number of times on any matrix.
    """

    type: CriterionType
    name: str
    description: str

    def calculate(self, matrix: PayoffMatrix) -> CriterionResult:
        """Score every strategy of the matrix and select the optimal one."""
        ...


def _is_evaluable(matrix: PayoffMatrix) -> bool:
    return not matrix.is_empty() and matrix.is_valid()


def _undetermined(criterion: Criterion) -> CriterionResult:
    return CriterionResult(
        name=criterion.name,
        type=criterion.type,
        description=criterion.description,
        strategy=UNDETERMINED,
    )


def select_optimal(values: Sequence[float], minimize: bool = False) -> tuple[int, float, tuple[int, ...]]:
    """Pick the optimal score, first index wins on ties.

    Args:
        values: One score per strategy (must be non-empty)
        minimize: Select the smallest score instead of the largest

    Returns:
        Tuple of (index, value, all indices reaching the value)

    Examples:
        >>> select_optimal([3.0, 5.0, 5.0])
        (1, 5.0, (1, 2))
        >>> select_optimal([3.0, 5.0, 3.0], minimize=True)
        (0, 3.0, (0, 2))
    """
    target = min(values) if minimize else max(values)
    index = list(values).index(target)
    tied = tuple(i for i, value in enumerate(values) if value == target)
    return index, target, tied


def _build_result(
    criterion: Criterion,
    matrix: PayoffMatrix,
    values: list[float],
    calculations: list[StrategyTrace],
    minimize: bool = False,
    column_maxima: Sequence[float] = (),
) -> CriterionResult:
    index, optimal_value, tied = select_optimal(values, minimize=minimize)
    strategy = matrix.strategies[index] or UNDETERMINED
    if len(tied) > 1:
        logger.debug(f"{criterion.name}: tie between strategies {list(tied)}, selecting {index}")
    logger.debug(f"{criterion.name}: optimal strategy {strategy!r} with value {optimal_value}")
    return CriterionResult(
        name=criterion.name,
        type=criterion.type,
        description=criterion.description,
        values=tuple(values),
        optimal_index=index,
        optimal_value=optimal_value,
        strategy=strategy,
        calculations=tuple(calculations),
        column_maxima=tuple(column_maxima),
        tied_indices=tied,
    )


@dataclass(frozen=True)
class WaldCriterion:
    """Wald (maximin) criterion.

    Extreme pessimism: assumes the worst state will occur for whatever
    strategy is chosen, and picks the strategy whose worst case is best.
    """

    type: ClassVar[CriterionType] = CriterionType.WALD
    name: ClassVar[str] = "Wald criterion (maximin)"
    description: ClassVar[str] = (
        "Extreme pessimism: guarantees the best outcome under the worst conditions."
    )

    def calculate(self, matrix: PayoffMatrix) -> CriterionResult:
        if not _is_evaluable(matrix):
            return _undetermined(self)

        values = []
        calculations = []
        for i, strategy in enumerate(matrix.strategies):
            min_value = matrix.row_min(i)
            values.append(min_value)
            calculations.append(
                StrategyTrace(strategy=strategy, value=min_value, inputs=tuple(matrix.row(i)), minimum=min_value)
            )
        return _build_result(self, matrix, values, calculations)


@dataclass(frozen=True)
class MaximaxCriterion:
    """Maximax criterion.

    Extreme optimism: picks the strategy with the highest attainable payoff.
    """

    type: ClassVar[CriterionType] = CriterionType.MAXIMAX
    name: ClassVar[str] = "Maximax criterion"
    description: ClassVar[str] = (
        "Extreme optimism: aims for the largest possible payoff."
    )

    def calculate(self, matrix: PayoffMatrix) -> CriterionResult:
        if not _is_evaluable(matrix):
            return _undetermined(self)

        values = []
        calculations = []
        for i, strategy in enumerate(matrix.strategies):
            max_value = matrix.row_max(i)
            values.append(max_value)
            calculations.append(
                StrategyTrace(strategy=strategy, value=max_value, inputs=tuple(matrix.row(i)), maximum=max_value)
            )
        return _build_result(self, matrix, values, calculations)


@dataclass(frozen=True)
class SavageCriterion:
    """Savage (minimax regret) criterion.

    Two passes over the matrix:
    1. colMax[j] = max over strategies of data[i][j]
    2. regret r[i][j] = colMax[j] - data[i][j]; score_i = max_j r[i][j]

    The strategy with the smallest maximum regret is selected. Regrets are
    never negative since colMax[j] is the maximum of its own column.
    """

    type: ClassVar[CriterionType] = CriterionType.SAVAGE
    name: ClassVar[str] = "Savage criterion (minimax regret)"
    description: ClassVar[str] = (
        "Minimizes the largest regret: a compromise between optimism and pessimism."
    )

    def calculate(self, matrix: PayoffMatrix) -> CriterionResult:
        if not _is_evaluable(matrix):
            return _undetermined(self)

        column_maxima = [matrix.column_max(j) for j in range(matrix.states_count)]

        values = []
        calculations = []
        for i, strategy in enumerate(matrix.strategies):
            row = matrix.row(i)
            regrets = tuple(column_maxima[j] - row[j] for j in range(matrix.states_count))
            max_regret = max(regrets)
            values.append(max_regret)
            calculations.append(
                StrategyTrace(strategy=strategy, value=max_regret, inputs=regrets, maximum=max_regret)
            )
        return _build_result(self, matrix, values, calculations, minimize=True, column_maxima=column_maxima)


@dataclass(frozen=True)
class HurwitzCriterion:
    """Hurwitz criterion with optimism coefficient alpha.

    score_i = alpha * rowMax[i] + (1 - alpha) * rowMin[i]

    alpha = 1 reduces to Maximax, alpha = 0 to Wald.
    """

    alpha: float = 0.5

    type: ClassVar[CriterionType] = CriterionType.HURWITZ
    description: ClassVar[str] = (
        "Weighs the best and worst outcome of each strategy by the decision maker's optimism."
    )

    def __post_init__(self) -> None:
        """Validate alpha is a number in [0, 1]."""
        if isinstance(self.alpha, bool) or not isinstance(self.alpha, (int, float)):
            raise InvalidParameterError(f"alpha must be a number, got {self.alpha!r}")
        if not 0.0 <= self.alpha <= 1.0:
            raise InvalidParameterError(f"alpha must be in [0, 1], got {self.alpha}")

    @property
    def name(self) -> str:
        return f"Hurwitz criterion (α={self.alpha})"

    def calculate(self, matrix: PayoffMatrix) -> CriterionResult:
        if not _is_evaluable(matrix):
            return _undetermined(self)

        values = []
        calculations = []
        for i, strategy in enumerate(matrix.strategies):
            min_value = matrix.row_min(i)
            max_value = matrix.row_max(i)
            hurwitz_value = self.alpha * max_value + (1 - self.alpha) * min_value
            values.append(hurwitz_value)
            calculations.append(
                StrategyTrace(
                    strategy=strategy,
                    value=hurwitz_value,
                    inputs=tuple(matrix.row(i)),
                    weights=(self.alpha, 1 - self.alpha),
                    minimum=min_value,
                    maximum=max_value,
                )
            )
        return _build_result(self, matrix, values, calculations)


@dataclass(frozen=True)
class BayesCriterion:
    """Bayes criterion (maximum expected payoff).

    score_i = sum_j data[i][j] * p[j]

    The probability vector must have one entry per state. It is used as
    given: normalizing it to sum to 1 is the caller's responsibility.
    """

    probabilities: tuple[float, ...]

    type: ClassVar[CriterionType] = CriterionType.BAYES
    name: ClassVar[str] = "Bayes criterion (maximum expected value)"
    description: ClassVar[str] = (
        "Maximizes the expected payoff under known state probabilities."
    )

    def __post_init__(self) -> None:
        """Coerce probabilities to a tuple of floats."""
        if isinstance(self.probabilities, (str, bytes)) or not isinstance(self.probabilities, Sequence):
            raise InvalidParameterError(
                f"probabilities must be a sequence of numbers, got {type(self.probabilities).__name__}"
            )
        coerced = []
        for p in self.probabilities:
            if isinstance(p, bool) or not isinstance(p, (int, float)) or not math.isfinite(p):
                raise InvalidParameterError(f"probabilities must be finite numbers, got {p!r}")
            coerced.append(float(p))
        object.__setattr__(self, "probabilities", tuple(coerced))

    def calculate(self, matrix: PayoffMatrix) -> CriterionResult:
        if len(self.probabilities) != matrix.states_count:
            raise InvalidParameterError(
                f"Expected {matrix.states_count} probabilities (one per state), got {len(self.probabilities)}"
            )
        if not _is_evaluable(matrix):
            return _undetermined(self)

        values = []
        calculations = []
        for i, strategy in enumerate(matrix.strategies):
            row = matrix.row(i)
            expected = 0.0
            for payoff, p in zip(row, self.probabilities):
                expected += payoff * p
            values.append(expected)
            calculations.append(
                StrategyTrace(strategy=strategy, value=expected, inputs=tuple(row), weights=self.probabilities)
            )
        return _build_result(self, matrix, values, calculations)


@dataclass(frozen=True)
class LaplaceCriterion:
    """Laplace criterion (equally likely states).

    Evaluated as a BayesCriterion with p[j] = 1/N, so the two always agree.
    """

    type: ClassVar[CriterionType] = CriterionType.LAPLACE
    name: ClassVar[str] = "Laplace criterion (equally likely states)"
    description: ClassVar[str] = (
        "Bayes criterion with equal probabilities, for when nothing is known about the states."
    )

    def calculate(self, matrix: PayoffMatrix) -> CriterionResult:
        n = matrix.states_count
        uniform = BayesCriterion(probabilities=tuple([1.0 / n] * n) if n else ())
        result = uniform.calculate(matrix)
        return replace(result, name=self.name, type=self.type, description=self.description)
