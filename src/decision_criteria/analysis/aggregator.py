"""Aggregation of criterion recommendations into a final verdict.

The aggregator records one recommendation per evaluated criterion, counts
how often each strategy is recommended and derives a final recommendation
with a confidence band:

- high: the winner is recommended by at least 70% of criteria
- low: the winner is recommended by at most 30% of criteria
- medium: anything in between

Undetermined recommendations count towards the total but never towards a
strategy. The aggregator accepts any input and never raises.

States:
- Idle: no recommendations, analysis type unset (after construction or clear())
- Accumulating: at least one recommendation recorded
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from decision_criteria.models.results import (
    UNDETERMINED,
    AnalysisStatistics,
    Confidence,
    CriterionResult,
    CriterionType,
    FinalRecommendation,
    Recommendation,
)

logger = logging.getLogger(__name__)

HIGH_CONFIDENCE_THRESHOLD = 70.0
LOW_CONFIDENCE_THRESHOLD = 30.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values.

    Examples:
        >>> round_half_up(62.5)
        63
        >>> round_half_up(33.333)
        33
    """
    return math.floor(value + 0.5)


def classify_confidence(percentage: float) -> Confidence:
    """Map the winner's share of recommendations to a confidence band.

    The high threshold is checked before the low one.
    """
    if percentage >= HIGH_CONFIDENCE_THRESHOLD:
        return Confidence.HIGH
    if percentage <= LOW_CONFIDENCE_THRESHOLD:
        return Confidence.LOW
    return Confidence.MEDIUM


def _coerce_details(details: Any) -> CriterionResult | dict[str, Any]:
    if details is None:
        return {}
    if isinstance(details, CriterionResult):
        return details
    if isinstance(details, Mapping):
        return {str(key): value for key, value in details.items()}
    return {"value": str(details)}


def _coerce_criterion_type(criterion_type: Any) -> CriterionType | str:
    if isinstance(criterion_type, CriterionType):
        return criterion_type
    try:
        return CriterionType(str(criterion_type).lower())
    except ValueError:
        return str(criterion_type) if criterion_type is not None else ""


class ResultsAggregator:
    """Collects recommendations for one analysis session.

    Not thread-safe: concurrent analyses must use separate instances.

    Usage:
        aggregator = ResultsAggregator()
        aggregator.set_analysis_type("uncertainty")
        aggregator.add_result(WaldCriterion().calculate(matrix))
        final = aggregator.get_final_recommendation()
    """

    def __init__(self) -> None:
        self._recommendations: list[Recommendation] = []
        self.analysis_type: str | None = None
        self.timestamp: datetime | None = None

    @property
    def is_idle(self) -> bool:
        return not self._recommendations and self.analysis_type is None

    def set_analysis_type(self, analysis_type: str) -> None:
        """Tag the session with its mode and stamp it. Existing recommendations are kept."""
        analysis_type = getattr(analysis_type, "value", analysis_type)
        self.analysis_type = str(analysis_type) if analysis_type is not None else None
        self.timestamp = datetime.now()

    def add_recommendation(
        self,
        criterion_name: str,
        strategy: str | None,
        criterion_type: CriterionType | str,
        details: CriterionResult | dict[str, Any] | None = None,
    ) -> Recommendation:
        """Record a criterion's recommendation.

        A missing or empty strategy is recorded as UNDETERMINED. Details that are
        neither a CriterionResult nor a mapping are kept as {"value": str(details)}.

        Returns:
            The recorded Recommendation
        """
        recommendation = Recommendation(
            id=len(self._recommendations) + 1,
            criterion_name=str(criterion_name) if criterion_name is not None else "",
            strategy=strategy if isinstance(strategy, str) and strategy else UNDETERMINED,
            criterion_type=_coerce_criterion_type(criterion_type),
            details=_coerce_details(details),
        )
        self._recommendations.append(recommendation)
        logger.debug(
            f"Recorded recommendation #{recommendation.id}: "
            f"{recommendation.criterion_name} -> {recommendation.strategy}"
        )
        return recommendation

    def add_result(self, result: CriterionResult) -> Recommendation:
        """Record a CriterionResult as a recommendation."""
        return self.add_recommendation(result.name, result.strategy, result.type, result)

    def get_all_recommendations(self) -> list[Recommendation]:
        return list(self._recommendations)

    def get_recommendations_by_type(self, criterion_type: CriterionType | str) -> list[Recommendation]:
        """Recommendations produced by one kind of criterion."""
        wanted = _coerce_criterion_type(criterion_type)
        return [rec for rec in self._recommendations if rec.criterion_type == wanted]

    def get_frequency_analysis(self) -> dict[str, int]:
        """Count recommendations per strategy, ignoring undetermined ones.

        Keys appear in order of first recommendation. Sort by count
        descending for display.
        """
        frequency: dict[str, int] = {}
        for rec in self._recommendations:
            if rec.is_determined:
                frequency[rec.strategy] = frequency.get(rec.strategy, 0) + 1
        return frequency

    def get_final_recommendation(self) -> FinalRecommendation:
        """Derive the most recommended strategy and its confidence band.

        The winner is the most frequent strategy; among equally frequent
        strategies the one recommended first wins.
        """
        total = len(self._recommendations)
        frequency = self.get_frequency_analysis()
        if not frequency:
            return FinalRecommendation(
                strategy=None,
                frequency=0,
                total=total,
                percentage=0,
                confidence=Confidence.LOW,
            )

        # sorted() is stable, so first-seen order breaks ties
        entries = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
        strategy, count = entries[0]
        percentage = round_half_up(count / total * 100)

        has_tie = len(entries) > 1 and entries[1][1] == count
        alternatives = tuple(name for name, freq in entries if freq == count) if has_tie else ()

        return FinalRecommendation(
            strategy=strategy,
            frequency=count,
            total=total,
            percentage=percentage,
            confidence=classify_confidence(percentage),
            has_tie=has_tie,
            alternatives=alternatives,
        )

    def has_conflicts(self) -> bool:
        """True if more than one strategy shares the highest frequency."""
        counts = list(self.get_frequency_analysis().values())
        if not counts:
            return False
        max_count = max(counts)
        return sum(1 for count in counts if count == max_count) > 1

    def get_statistics(self) -> AnalysisStatistics:
        """Snapshot of the session for display or export."""
        frequency = self.get_frequency_analysis()
        valid = sum(1 for rec in self._recommendations if rec.is_determined)
        return AnalysisStatistics(
            total_criteria=len(self._recommendations),
            valid_recommendations=valid,
            unique_strategies=len(frequency),
            most_frequent=self.get_final_recommendation(),
            distribution=frequency,
            analysis_type=self.analysis_type,
            timestamp=self.timestamp or datetime.now(),
        )

    def clear(self) -> None:
        """Discard all recommendations and return to Idle."""
        self._recommendations = []
        self.analysis_type = None
        self.timestamp = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the session: statistics, recommendations and metadata."""
        return {
            "statistics": self.get_statistics().to_dict(),
            "recommendations": [rec.to_dict() for rec in self._recommendations],
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "analysisType": self.analysis_type,
        }

    def export_to_json(self, indent: int = 2) -> str:
        """Serialize the session to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)
