"""Command line interface for decision-criteria.

Usage:
    # Analyze a matrix under uncertainty (Wald, Maximax, Savage, Hurwitz)
    decision-criteria analyze matrix.json --mode uncertainty --alpha 0.6

    # Analyze under risk (Bayes, Laplace)
    decision-criteria analyze matrix.json --mode risk --probabilities 0.1 0.2 0.3 0.4

    # JSON export, optionally saved to the reports directory
    decision-criteria analyze matrix.json --mode uncertainty --format json --save

    # Print the demonstration matrix, list criteria or saved reports
    decision-criteria example > matrix.json
    decision-criteria criteria
    decision-criteria reports

Matrix files contain {"strategies": [...], "states": [...], "data": [[...], ...]}.
An exported report (with a top-level "matrix" key) is accepted as well.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from decision_criteria.analysis.formatting import format_report
from decision_criteria.analysis.runner import AnalysisMode, AnalysisRequest, run_analysis
from decision_criteria.config import configure_logging
from decision_criteria.engine.factory import available_criteria
from decision_criteria.models.matrix import PayoffMatrix
from decision_criteria.storage import build_export_document, get_report_repository

logger = logging.getLogger(__name__)


def non_negative_int(value: str) -> int:
    """argparse type for counts that must be 0 or greater."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def load_matrix(path: Path) -> PayoffMatrix:
    """Load a payoff matrix from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file isn't valid JSON
        pydantic.ValidationError: If the content isn't a payoff matrix
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and isinstance(data.get("matrix"), dict):
        data = data["matrix"]
    matrix = PayoffMatrix.model_validate(data)
    logger.debug(f"Loaded {matrix.strategies_count}x{matrix.states_count} matrix from {path}")
    return matrix


def cmd_analyze(args: argparse.Namespace) -> int:
    """Run an analysis and print or write the result."""
    if not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        matrix = load_matrix(args.input)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {args.input}: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"Error: Invalid payoff matrix in {args.input}:\n{e}", file=sys.stderr)
        return 1

    if not matrix.is_valid():
        print("Error: Please fill every matrix cell with a valid number", file=sys.stderr)
        return 1

    request_fields = {"mode": AnalysisMode(args.mode)}
    if args.alpha is not None:
        request_fields["alpha"] = args.alpha
    if args.probabilities is not None:
        request_fields["probabilities"] = args.probabilities
    try:
        request = AnalysisRequest(**request_fields)
    except ValidationError as e:
        print(f"Error: Invalid analysis parameters:\n{e}", file=sys.stderr)
        return 1

    report = run_analysis(matrix, request)
    document = build_export_document(matrix, report)

    if args.format == "json":
        output = json.dumps(document, indent=2)
    else:
        output = format_report(report, precision=args.precision)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        print(f"Analysis written to {args.output}")
    else:
        print(output)

    if args.save:
        report_id = get_report_repository(args.reports_path).save_report(document)
        print(f"Report saved as {report_id}")

    return 0


def cmd_example(args: argparse.Namespace) -> int:
    """Print the demonstration matrix as JSON."""
    matrix = PayoffMatrix.example()
    print(json.dumps(matrix.model_dump(), indent=2))
    return 0


def cmd_criteria(args: argparse.Namespace) -> int:
    """List the available criteria."""
    for info in available_criteria():
        print(f"{info['type']:<10} {info['name']}")
        print(f"{'':<10} {info['description']}")
    return 0


def cmd_reports(args: argparse.Namespace) -> int:
    """List saved reports."""
    reports = get_report_repository(args.reports_path).list_reports()
    if not reports:
        print("No saved reports")
        return 0
    for report in reports:
        print(f"{report['id']}  {report['analysis_type'] or '-':<12} {report['strategy'] or '-'}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="decision-criteria",
        description="Evaluate a payoff matrix with classical decision criteria.",
        epilog="""
Confidence bands (share of criteria recommending the final strategy):
  - high: 70% or more
  - low: 30% or less
  - medium: in between
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze a payoff matrix")
    analyze.add_argument(
        "input",
        type=Path,
        help="Path to payoff matrix JSON file",
    )
    analyze.add_argument(
        "-m", "--mode",
        choices=[mode.value for mode in AnalysisMode],
        required=True,
        help="Decision conditions",
    )
    analyze.add_argument(
        "-a", "--alpha",
        type=float,
        default=None,
        help="Hurwitz optimism coefficient in [0, 1] (uncertainty mode)",
    )
    analyze.add_argument(
        "-p", "--probabilities",
        type=float,
        nargs="+",
        default=None,
        help="State probabilities summing to 1 (risk mode)",
    )
    analyze.add_argument(
        "-f", "--format",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)",
    )
    analyze.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output path for the analysis (default: stdout)",
    )
    analyze.add_argument(
        "--precision",
        type=non_negative_int,
        default=None,
        help="Decimals shown in text output (default: from environment or 2)",
    )
    analyze.add_argument(
        "--save",
        action="store_true",
        help="Save the JSON export to the reports directory",
    )
    analyze.add_argument(
        "--reports-path",
        type=Path,
        default=None,
        help="Reports directory (default: from environment or ./reports)",
    )
    analyze.set_defaults(handler=cmd_analyze)

    example = subparsers.add_parser("example", help="Print the demonstration matrix")
    example.set_defaults(handler=cmd_example)

    criteria = subparsers.add_parser("criteria", help="List available criteria")
    criteria.set_defaults(handler=cmd_criteria)

    reports = subparsers.add_parser("reports", help="List saved reports")
    reports.add_argument(
        "--reports-path",
        type=Path,
        default=None,
        help="Reports directory (default: from environment or ./reports)",
    )
    reports.set_defaults(handler=cmd_reports)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the decision-criteria command.

    Returns:
        Exit code (0 for success, 1 for invalid input)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else None)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
