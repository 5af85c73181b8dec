"""Export of a finished analysis as a JSON document.

Document layout:
    {
        "matrix": {strategies, states, data, dimensions},
        "analysis": {type, alpha, probabilities},
        "results": {statistics, recommendations, timestamp, analysisType},
        "timestamp": ISO-8601,
        "version": package version
    }

alpha is null for risk analyses and probabilities is null for uncertainty
analyses.
"""

import json
from datetime import datetime

from decision_criteria import __version__
from decision_criteria.analysis.runner import AnalysisMode, AnalysisReport
from decision_criteria.models.matrix import PayoffMatrix


def build_export_document(matrix: PayoffMatrix, report: AnalysisReport) -> dict:
    """Assemble the export document for a matrix and its analysis."""
    request = report.request
    statistics = report.statistics
    is_risk = request.mode == AnalysisMode.RISK
    return {
        "matrix": matrix.to_dict(),
        "analysis": {
            "type": request.mode.value,
            "alpha": None if is_risk else request.alpha,
            "probabilities": list(request.probabilities) if is_risk and request.probabilities else None,
        },
        "results": {
            "statistics": statistics.to_dict(),
            "recommendations": [rec.to_dict() for rec in report.recommendations],
            "timestamp": statistics.timestamp.isoformat(),
            "analysisType": statistics.analysis_type,
        },
        "timestamp": datetime.now().isoformat(),
        "version": __version__,
    }


def export_to_json(matrix: PayoffMatrix, report: AnalysisReport, indent: int = 2) -> str:
    """Serialize the export document to a JSON string."""
    return json.dumps(build_export_document(matrix, report), indent=indent)
