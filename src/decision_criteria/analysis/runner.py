"""Runs every criterion of an analysis mode and aggregates the outcome.

Modes:
- uncertainty: Wald, Maximax, Savage, Hurwitz(alpha)
- risk: Bayes(probabilities), Laplace

Each criterion is evaluated in isolation. A criterion that raises a
CriterionError is recorded as an undetermined recommendation carrying the
error message, and the remaining criteria still run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from decision_criteria.analysis.aggregator import ResultsAggregator
from decision_criteria.config import get_default_alpha, get_probability_tolerance
from decision_criteria.engine.errors import CriterionError
from decision_criteria.engine.factory import create_criterion, criteria_for_mode
from decision_criteria.models.matrix import PayoffMatrix
from decision_criteria.models.results import (
    UNDETERMINED,
    AnalysisStatistics,
    CriterionResult,
    CriterionType,
    FinalRecommendation,
    Recommendation,
)

logger = logging.getLogger(__name__)


class AnalysisMode(Enum):
    """Decision conditions."""

    UNCERTAINTY = "uncertainty"
    RISK = "risk"


class AnalysisRequest(BaseModel):
    """Validated parameters for one analysis run.

    Attributes:
        mode: Decision conditions
        alpha: Hurwitz optimism coefficient in [0, 1] (uncertainty only)
        probabilities: State probabilities (risk only); must sum to 1 within
            the configured tolerance
    """

    model_config = ConfigDict(frozen=True)

    mode: AnalysisMode
    alpha: float = Field(default_factory=get_default_alpha)
    probabilities: list[float] | None = None

    @field_validator("alpha")
    @classmethod
    def validate_alpha(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"alpha must be in [0, 1], got {v}")
        return v

    @field_validator("probabilities")
    @classmethod
    def validate_probabilities_non_negative(cls, v: list[float] | None) -> list[float] | None:
        if v is not None and any(p < 0 for p in v):
            raise ValueError("probabilities must be non-negative")
        return v

    @model_validator(mode="after")
    def validate_probabilities_sum(self) -> "AnalysisRequest":
        if self.mode != AnalysisMode.RISK:
            return self
        if self.probabilities is None:
            raise ValueError("probabilities are required for risk analysis")
        total = sum(self.probabilities)
        tolerance = get_probability_tolerance()
        if abs(total - 1.0) > tolerance:
            raise ValueError(f"Probabilities must sum to 1 (±{tolerance}), got {total:.3f}")
        return self

    def normalized_probabilities(self) -> list[float] | None:
        """Probabilities rescaled to sum to exactly 1."""
        if self.probabilities is None:
            return None
        total = sum(self.probabilities)
        if total == 0:
            return list(self.probabilities)
        return [p / total for p in self.probabilities]

    def params_for(self, criterion_type: CriterionType) -> dict[str, Any]:
        """Factory parameters for one criterion of this run."""
        if criterion_type == CriterionType.HURWITZ:
            return {"alpha": self.alpha}
        if criterion_type == CriterionType.BAYES:
            return {"probabilities": self.normalized_probabilities()}
        return {}


@dataclass(frozen=True)
class AnalysisReport:
    """Everything produced by one analysis run.

    Attributes:
        request: The parameters the run used
        results: Results of the criteria that evaluated without error
        recommendations: One per criterion, in evaluation order
        statistics: Aggregator snapshot after the run
    """

    request: AnalysisRequest
    results: tuple[CriterionResult, ...]
    recommendations: tuple[Recommendation, ...]
    statistics: AnalysisStatistics

    @property
    def final(self) -> FinalRecommendation:
        return self.statistics.most_frequent

    def failed_criteria(self) -> list[Recommendation]:
        """Recommendations that carry an evaluation error."""
        return [rec for rec in self.recommendations if isinstance(rec.details, dict) and "error" in rec.details]


def _fallback_name(criterion_type: CriterionType) -> str:
    return f"{criterion_type.value.capitalize()} criterion"


def run_analysis(
    matrix: PayoffMatrix,
    request: AnalysisRequest,
    aggregator: ResultsAggregator | None = None,
) -> AnalysisReport:
    """Evaluate all criteria of the requested mode against a matrix.

    The aggregator is cleared before the run. Pass one in to keep access to
    it afterwards; otherwise a fresh one is used.

    Args:
        matrix: Payoff matrix to evaluate
        request: Mode and parameters
        aggregator: Aggregator to fill (optional)

    Returns:
        AnalysisReport with per-criterion results and aggregated statistics
    """
    if aggregator is None:
        aggregator = ResultsAggregator()
    aggregator.clear()
    aggregator.set_analysis_type(request.mode.value)

    if matrix.is_empty() or not matrix.is_valid():
        logger.warning(
            f"Matrix {matrix.strategies_count}x{matrix.states_count} is empty or not fully numeric; "
            "criteria will be undetermined"
        )

    results = []
    for criterion_type in criteria_for_mode(request.mode):
        try:
            criterion = create_criterion(criterion_type, request.params_for(criterion_type))
            result = criterion.calculate(matrix)
        except CriterionError as e:
            logger.warning(f"Error calculating {criterion_type.value}: {e}")
            aggregator.add_recommendation(
                _fallback_name(criterion_type),
                UNDETERMINED,
                criterion_type,
                {"error": str(e)},
            )
            continue
        results.append(result)
        aggregator.add_result(result)

    statistics = aggregator.get_statistics()
    logger.info(
        f"{request.mode.value} analysis: {statistics.valid_recommendations}/{statistics.total_criteria} "
        f"criteria recommend a strategy, final={statistics.most_frequent.strategy}"
    )
    return AnalysisReport(
        request=request,
        results=tuple(results),
        recommendations=tuple(aggregator.get_all_recommendations()),
        statistics=statistics,
    )


def analyze_uncertainty(matrix: PayoffMatrix, alpha: float | None = None) -> AnalysisReport:
    """Run the uncertainty criteria (Wald, Maximax, Savage, Hurwitz)."""
    if alpha is None:
        request = AnalysisRequest(mode=AnalysisMode.UNCERTAINTY)
    else:
        request = AnalysisRequest(mode=AnalysisMode.UNCERTAINTY, alpha=alpha)
    return run_analysis(matrix, request)


def analyze_risk(matrix: PayoffMatrix, probabilities: list[float]) -> AnalysisReport:
    """Run the risk criteria (Bayes, Laplace)."""
    return run_analysis(matrix, AnalysisRequest(mode=AnalysisMode.RISK, probabilities=probabilities))
