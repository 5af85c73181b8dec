"""Storage module for decision-criteria.

Exports finished analyses as JSON documents and persists them as report
files.

Usage:
    from decision_criteria.storage import build_export_document, get_report_repository

    repo = get_report_repository()
    report_id = repo.save_report(build_export_document(matrix, report))

Configuration via environment variables:
    DECISION_CRITERIA_REPORTS_PATH: Path to reports directory (default: "reports")
"""

from .config import get_report_repository
from .export import build_export_document, export_to_json
from .file_repo import FileReportRepository, new_report_id
from .repository import ReportRepository

__all__ = [
    # Abstract interface
    "ReportRepository",
    # File implementation
    "FileReportRepository",
    "new_report_id",
    # Export
    "build_export_document",
    "export_to_json",
    # Factory
    "get_report_repository",
]
