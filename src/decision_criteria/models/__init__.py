"""Data models: the payoff matrix and the result types built from it."""

from .matrix import PayoffMatrix, default_state_label, default_strategy_label
from .results import (
    UNDETERMINED,
    AnalysisStatistics,
    Confidence,
    CriterionResult,
    CriterionType,
    FinalRecommendation,
    Recommendation,
    StrategyTrace,
)

__all__ = [
    # Enums
    "CriterionType",
    "Confidence",
    # Matrix
    "PayoffMatrix",
    "default_strategy_label",
    "default_state_label",
    # Results
    "CriterionResult",
    "StrategyTrace",
    "Recommendation",
    "FinalRecommendation",
    "AnalysisStatistics",
    "UNDETERMINED",
]
