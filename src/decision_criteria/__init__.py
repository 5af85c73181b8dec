"""Decision analysis under uncertainty and risk.

Applies classical decision criteria (Wald, Maximax, Savage, Hurwitz, Bayes,
Laplace) to a payoff matrix and aggregates their recommendations into a
final verdict with a confidence band.

Usage:
    from decision_criteria import AnalysisMode, AnalysisRequest, PayoffMatrix, run_analysis

    matrix = PayoffMatrix.example()
    report = run_analysis(matrix, AnalysisRequest(mode=AnalysisMode.UNCERTAINTY, alpha=0.6))
    print(report.final.strategy, report.final.confidence.value)
"""

__version__ = "2.0.0"

from decision_criteria.analysis import (
    AnalysisMode,
    AnalysisReport,
    AnalysisRequest,
    ResultsAggregator,
    analyze_risk,
    analyze_uncertainty,
    run_analysis,
)
from decision_criteria.engine import (
    Criterion,
    CriterionError,
    InvalidParameterError,
    MissingParameterError,
    UnknownCriterionError,
    create_criterion,
)
from decision_criteria.models import (
    UNDETERMINED,
    Confidence,
    CriterionResult,
    CriterionType,
    FinalRecommendation,
    PayoffMatrix,
)

__all__ = [
    "__version__",
    # Models
    "PayoffMatrix",
    "CriterionResult",
    "CriterionType",
    "Confidence",
    "FinalRecommendation",
    "UNDETERMINED",
    # Engine
    "Criterion",
    "create_criterion",
    "CriterionError",
    "InvalidParameterError",
    "MissingParameterError",
    "UnknownCriterionError",
    # Analysis
    "AnalysisMode",
    "AnalysisRequest",
    "AnalysisReport",
    "ResultsAggregator",
    "run_analysis",
    "analyze_uncertainty",
    "analyze_risk",
]
