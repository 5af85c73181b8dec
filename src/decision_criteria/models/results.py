"""Result types produced by criteria and the results aggregator.

CriterionResult and StrategyTrace are plain frozen dataclasses: they are
produced by the engine and never parsed from untrusted input. The statistics
snapshot is a pydantic model because it is the stable export contract and is
serialized with camelCase keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Strategy name used when a criterion cannot recommend anything
UNDETERMINED = "undetermined"


class CriterionType(Enum):
    """Closed set of decision criteria.

    Uncertainty criteria (no probabilities known):
    - WALD, MAXIMAX, SAVAGE, HURWITZ

    Risk criteria (state probabilities known or assumed):
    - BAYES, LAPLACE
    """

    WALD = "wald"
    MAXIMAX = "maximax"
    SAVAGE = "savage"
    HURWITZ = "hurwitz"
    BAYES = "bayes"
    LAPLACE = "laplace"


class Confidence(Enum):
    """Confidence band of the final recommendation."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class StrategyTrace:
    """Intermediate arithmetic for one strategy, kept for audit and display.

    Attributes:
        strategy: Strategy name
        value: Score the criterion assigned to the strategy
        inputs: Payoff row (regret row for Savage)
        weights: Probabilities (Bayes/Laplace) or (alpha, 1 - alpha) (Hurwitz)
        minimum: Row minimum where the criterion uses it
        maximum: Row maximum where the criterion uses it
    """

    strategy: str
    value: float
    inputs: tuple[float, ...] = ()
    weights: tuple[float, ...] = ()
    minimum: float | None = None
    maximum: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategy": self.strategy,
            "value": self.value,
            "inputs": list(self.inputs),
            "weights": list(self.weights),
            "minimum": self.minimum,
            "maximum": self.maximum,
        }


@dataclass(frozen=True)
class CriterionResult:
    """Outcome of applying one criterion to a payoff matrix.

    When several strategies reach the optimum, the first one in row order
    is selected; all of them are listed in tied_indices.
    """

    name: str
    type: CriterionType
    description: str = ""
    values: tuple[float, ...] = ()
    optimal_index: int | None = None
    optimal_value: float | None = None
    strategy: str = UNDETERMINED
    calculations: tuple[StrategyTrace, ...] = ()
    column_maxima: tuple[float, ...] = ()
    tied_indices: tuple[int, ...] = ()

    @property
    def is_determined(self) -> bool:
        return self.optimal_index is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "values": list(self.values),
            "optimalIndex": self.optimal_index,
            "optimalValue": self.optimal_value,
            "strategy": self.strategy,
            "calculations": [trace.to_dict() for trace in self.calculations],
            "columnMaxima": list(self.column_maxima),
            "tiedIndices": list(self.tied_indices),
        }


@dataclass(frozen=True)
class Recommendation:
    """One criterion's recommendation as recorded by the aggregator.

    Attributes:
        id: 1-based position in the aggregator's list
        criterion_name: Human-readable criterion name
        strategy: Recommended strategy or UNDETERMINED
        criterion_type: Criterion kind (a plain string when the caller passed one
            that is not a known CriterionType)
        details: The full CriterionResult, or {"error": message} on failure
        timestamp: When the recommendation was recorded
    """

    id: int
    criterion_name: str
    strategy: str
    criterion_type: CriterionType | str
    details: CriterionResult | dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_determined(self) -> bool:
        return self.strategy != UNDETERMINED

    def to_dict(self) -> dict[str, Any]:
        if isinstance(self.criterion_type, CriterionType):
            type_value = self.criterion_type.value
        else:
            type_value = self.criterion_type
        if isinstance(self.details, CriterionResult):
            details = self.details.to_dict()
        else:
            details = dict(self.details)
        return {
            "id": self.id,
            "criterion": self.criterion_name,
            "strategy": self.strategy,
            "type": type_value,
            "details": details,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class FinalRecommendation:
    """Aggregated verdict over all recorded recommendations."""

    strategy: str | None
    frequency: int
    total: int
    percentage: int
    confidence: Confidence
    has_tie: bool = False
    alternatives: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategy": self.strategy,
            "frequency": self.frequency,
            "total": self.total,
            "percentage": self.percentage,
            "confidence": self.confidence.value,
            "hasTie": self.has_tie,
            "alternatives": list(self.alternatives),
        }


class AnalysisStatistics(BaseModel):
    """Read-only snapshot of an aggregator.

    Exported with camelCase keys: totalCriteria, validRecommendations,
    uniqueStrategies, mostFrequent, distribution, analysisType, timestamp.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    total_criteria: int
    valid_recommendations: int
    unique_strategies: int
    most_frequent: FinalRecommendation
    distribution: dict[str, int]
    analysis_type: str | None = None
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys and an ISO-8601 timestamp."""
        data = self.model_dump(by_alias=True, mode="json", exclude={"most_frequent"})
        data["mostFrequent"] = self.most_frequent.to_dict()
        return data
