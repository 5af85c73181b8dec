"""Abstract repository interface for saved analysis reports.

A report is the JSON-compatible document produced by
decision_criteria.storage.export.build_export_document.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ReportRepository(ABC):
    """Abstract base class for report storage."""

    @abstractmethod
    def save_report(self, document: dict) -> str:
        """Persist a report document.

        Args:
            document: Export document

        Returns:
            ID of the saved report
        """
        pass

    @abstractmethod
    def load_report(self, report_id: str) -> Optional[dict]:
        """Load a report by ID.

        Args:
            report_id: ID returned by save_report

        Returns:
            Report document, or None if not found
        """
        pass

    @abstractmethod
    def list_reports(self) -> list[dict]:
        """Return metadata for all saved reports.

        Returns:
            List of dicts containing: {id, analysis_type, strategy, timestamp}
        """
        pass

    @abstractmethod
    def delete_report(self, report_id: str) -> bool:
        """Delete a report.

        Args:
            report_id: ID of report to delete

        Returns:
            True if deleted, False if not found
        """
        pass
