"""Factory for the configured report repository."""

from pathlib import Path

from decision_criteria.config import get_reports_path

from .file_repo import FileReportRepository
from .repository import ReportRepository


def get_report_repository(reports_path: str | Path | None = None) -> ReportRepository:
    """Factory function to create the report repository.

    Args:
        reports_path: Reports directory. If None, uses environment config.

    Returns:
        ReportRepository instance
    """
    if reports_path is None:
        reports_path = get_reports_path()
    return FileReportRepository(reports_path)
