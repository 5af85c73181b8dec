"""Aggregation and orchestration of criterion results."""

from decision_criteria.analysis.aggregator import (
    ResultsAggregator,
    classify_confidence,
    round_half_up,
)
from decision_criteria.analysis.formatting import format_number, format_report, format_trace
from decision_criteria.analysis.runner import (
    AnalysisMode,
    AnalysisReport,
    AnalysisRequest,
    analyze_risk,
    analyze_uncertainty,
    run_analysis,
)

__all__ = [
    "ResultsAggregator",
    "classify_confidence",
    "round_half_up",
    "AnalysisMode",
    "AnalysisReport",
    "AnalysisRequest",
    "analyze_risk",
    "analyze_uncertainty",
    "run_analysis",
    "format_number",
    "format_report",
    "format_trace",
]
