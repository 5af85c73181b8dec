"""File-based report repository using JSON files.

Each report is stored as one JSON file in the reports directory, named
decision-analysis-<date>-<hex>.json.
"""

import json
import logging
import re
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from .repository import ReportRepository

logger = logging.getLogger(__name__)

REPORT_ID_PATTERN = re.compile(r"^[a-z0-9-]+$")


def new_report_id(now: datetime | None = None) -> str:
    """Generate a report ID from the current date and a random suffix.

    Examples:
        >>> new_report_id(datetime(2024, 3, 1)).startswith("decision-analysis-2024-03-01-")
        True
    """
    now = now or datetime.now()
    return f"decision-analysis-{now:%Y-%m-%d}-{uuid.uuid4().hex[:8]}"


class FileReportRepository(ReportRepository):
    """JSON file-based report repository."""

    def __init__(self, reports_path: str | Path = "reports"):
        """Initialize repository.

        Args:
            reports_path: Path to reports directory
        """
        self.reports_path = Path(reports_path)
        self.reports_path.mkdir(parents=True, exist_ok=True)

    def _get_report_path(self, report_id: str) -> Path:
        """Get path to report file.

        Raises:
            ValueError: If the ID contains characters outside [a-z0-9-]
        """
        if not REPORT_ID_PATTERN.match(report_id):
            raise ValueError(f"Invalid report ID: {report_id!r}")
        return self.reports_path / f"{report_id}.json"

    def save_report(self, document: dict) -> str:
        """Save report, return ID."""
        report_id = new_report_id()
        path = self._get_report_path(report_id)
        with open(path, "w", encoding="utf-8") as f:
            json.dump({**document, "id": report_id}, f, indent=2)
        logger.info(f"Saved report {report_id} to {path}")
        return report_id

    def load_report(self, report_id: str) -> Optional[dict]:
        """Load complete report by ID."""
        path = self._get_report_path(report_id)
        if not path.exists():
            return None
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    def list_reports(self) -> list[dict]:
        """Return metadata for all saved reports, newest first.

        Files that are not valid JSON objects are skipped with a warning.
        """
        reports = []
        for path in self.reports_path.glob("*.json"):
            try:
                with open(path, encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Skipping unreadable report {path.name}: {e}")
                continue
            if not isinstance(data, dict):
                logger.warning(f"Skipping report {path.name}: not a JSON object")
                continue
            statistics = data.get("results", {}).get("statistics", {})
            reports.append({
                "id": path.stem,
                "analysis_type": data.get("analysis", {}).get("type"),
                "strategy": statistics.get("mostFrequent", {}).get("strategy"),
                "timestamp": data.get("timestamp", ""),
            })
        return sorted(reports, key=lambda x: x["timestamp"], reverse=True)

    def delete_report(self, report_id: str) -> bool:
        """Delete report file."""
        path = self._get_report_path(report_id)
        if path.exists():
            path.unlink()
            return True
        return False
