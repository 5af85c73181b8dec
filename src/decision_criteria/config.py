"""Configuration for decision-criteria.

Settings come from environment variables, falling back to the defaults
below when a variable is unset or malformed.

Environment variables:
    DECISION_CRITERIA_LOG_LEVEL: Logging level name (default: "WARNING")
    DECISION_CRITERIA_DEFAULT_ALPHA: Hurwitz optimism coefficient (default: 0.5)
    DECISION_CRITERIA_PROBABILITY_TOLERANCE: Allowed |sum(p) - 1| (default: 0.01)
    DECISION_CRITERIA_PRECISION: Decimals shown in text reports (default: 2)
    DECISION_CRITERIA_REPORTS_PATH: Directory for saved reports (default: "reports")
"""

import logging
import os

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_ALPHA = 0.5
DEFAULT_PROBABILITY_TOLERANCE = 0.01
DEFAULT_PRECISION = 2
DEFAULT_REPORTS_PATH = "reports"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _get_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_log_level() -> int:
    """Get configured logging level from environment."""
    name = os.environ.get("DECISION_CRITERIA_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.getLevelName(DEFAULT_LOG_LEVEL)


def get_default_alpha() -> float:
    """Get the default Hurwitz alpha, clamped to [0, 1]."""
    alpha = _get_float("DECISION_CRITERIA_DEFAULT_ALPHA", DEFAULT_ALPHA)
    return max(0.0, min(1.0, alpha))


def get_probability_tolerance() -> float:
    """Get the allowed deviation of a probability vector's sum from 1."""
    tolerance = _get_float("DECISION_CRITERIA_PROBABILITY_TOLERANCE", DEFAULT_PROBABILITY_TOLERANCE)
    return tolerance if tolerance >= 0 else DEFAULT_PROBABILITY_TOLERANCE


def get_precision() -> int:
    """Get the number of decimals used when formatting numbers for display."""
    precision = _get_float("DECISION_CRITERIA_PRECISION", DEFAULT_PRECISION)
    return int(precision) if precision >= 0 else DEFAULT_PRECISION


def get_reports_path() -> str:
    """Get configured reports directory from environment."""
    return os.environ.get("DECISION_CRITERIA_REPORTS_PATH", DEFAULT_REPORTS_PATH)


def configure_logging(level: int | None = None) -> None:
    """Set up root logging for command line use.

    Args:
        level: Logging level. If None, uses environment config.
    """
    logging.basicConfig(
        level=get_log_level() if level is None else level,
        format=LOG_FORMAT,
    )
