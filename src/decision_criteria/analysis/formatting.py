"""Human-readable rendering of criterion traces and analysis reports.

Formatting never feeds back into computed values: precision only affects
display.
"""

from __future__ import annotations

from decision_criteria.analysis.runner import AnalysisMode, AnalysisReport
from decision_criteria.config import get_precision
from decision_criteria.models.results import CriterionResult, CriterionType, StrategyTrace

PROBABILITY_PRECISION = 3


def format_number(value: float | None, precision: int | None = None) -> str:
    """Format a number, dropping decimals for whole values.

    Examples:
        >>> format_number(320.0)
        '320'
        >>> format_number(562.5, 2)
        '562.50'
    """
    if value is None:
        return "-"
    if precision is None:
        precision = get_precision()
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.{precision}f}"


def _join(values: tuple[float, ...], precision: int) -> str:
    return ", ".join(format_number(v, precision) for v in values)


def _format_strategy_line(result: CriterionResult, trace: StrategyTrace, precision: int) -> str:
    value = format_number(trace.value, precision)
    if result.type == CriterionType.WALD:
        formula = f"min({_join(trace.inputs, precision)}) = {value}"
    elif result.type in (CriterionType.MAXIMAX, CriterionType.SAVAGE):
        formula = f"max({_join(trace.inputs, precision)}) = {value}"
    elif result.type == CriterionType.HURWITZ:
        alpha, complement = trace.weights
        formula = (
            f"{format_number(alpha, precision)} × {format_number(trace.maximum, precision)} + "
            f"{complement:.{precision}f} × {format_number(trace.minimum, precision)} = {value}"
        )
    else:
        terms = " + ".join(
            f"{format_number(x, precision)} × {p:.{PROBABILITY_PRECISION}f}"
            for x, p in zip(trace.inputs, trace.weights)
        )
        formula = f"{terms} = {trace.value:.{precision}f}"
    return f"{trace.strategy}: {formula}"


def format_trace(result: CriterionResult, precision: int | None = None) -> list[str]:
    """Render a criterion's calculation trace, one line per step.

    Savage results start with a line listing the column maxima. The last
    line names the selected strategy, or reports that none was determined.
    """
    if precision is None:
        precision = get_precision()

    lines = []
    if result.column_maxima:
        maxima = ", ".join(
            f"max(column {j + 1}) = {format_number(v, precision)}" for j, v in enumerate(result.column_maxima)
        )
        lines.append(f"Column maxima: {maxima}")
    for trace in result.calculations:
        lines.append(_format_strategy_line(result, trace, precision))

    if result.is_determined:
        verdict = f"Optimal: {result.strategy} ({format_number(result.optimal_value, precision)})"
        if len(result.tied_indices) > 1:
            verdict += f", tie between {len(result.tied_indices)} strategies resolved to the first"
        lines.append(verdict)
    else:
        lines.append("Optimal: undetermined")
    return lines


def format_report(report: AnalysisReport, precision: int | None = None) -> str:
    """Render a complete analysis as a text report."""
    if precision is None:
        precision = get_precision()

    stats = report.statistics
    final = stats.most_frequent
    lines = ["=" * 70, f"DECISION ANALYSIS ({report.request.mode.value.upper()})", "=" * 70]

    if report.request.probabilities is not None and report.request.mode == AnalysisMode.RISK:
        probabilities = ", ".join(f"{p:.{PROBABILITY_PRECISION}f}" for p in report.request.probabilities)
        lines.append(f"Probabilities: {probabilities}")
    else:
        lines.append(f"Alpha: {report.request.alpha}")

    for rec in report.recommendations:
        lines.append("")
        lines.append("-" * 70)
        lines.append(f"{rec.criterion_name}: {rec.strategy}")
        lines.append("-" * 70)
        if isinstance(rec.details, CriterionResult):
            lines.extend(f"  {line}" for line in format_trace(rec.details, precision))
        elif "error" in rec.details:
            lines.append(f"  [ERROR] {rec.details['error']}")

    lines.append("")
    lines.append("=" * 70)
    lines.append("FREQUENCY")
    lines.append("=" * 70)
    for strategy, count in sorted(stats.distribution.items(), key=lambda item: item[1], reverse=True):
        lines.append(f"  {strategy}: {count}/{stats.total_criteria}")

    lines.append("")
    if final.strategy is None:
        lines.append("Final recommendation: none (no criterion determined a strategy)")
    else:
        lines.append(
            f"Final recommendation: {final.strategy} "
            f"({final.frequency}/{final.total}, {final.percentage}%, confidence {final.confidence.value})"
        )
    if final.has_tie:
        lines.append(f"Tie between: {', '.join(final.alternatives)}")
    return "\n".join(lines)
