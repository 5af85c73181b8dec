"""Command line interface for decision-criteria.

Run with:
    decision-criteria analyze matrix.json --mode uncertainty
or:
    python -m decision_criteria.cli.app analyze matrix.json --mode uncertainty
"""

from decision_criteria.cli.app import build_parser, load_matrix, main

__all__ = ["build_parser", "load_matrix", "main"]
