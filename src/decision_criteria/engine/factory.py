"""Criterion factory.

Maps a criterion identifier and a parameter bag to a constructed criterion.
Identifiers are the CriterionType values and are matched case-insensitively.

Parameters:
- hurwitz: "alpha" (default 0.5)
- bayes: "probabilities" (required, one per state, not normalized here)
- wald, maximax, savage, laplace: none
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from decision_criteria.engine.criteria import (
    BayesCriterion,
    Criterion,
    HurwitzCriterion,
    LaplaceCriterion,
    MaximaxCriterion,
    SavageCriterion,
    WaldCriterion,
)
from decision_criteria.engine.errors import MissingParameterError, UnknownCriterionError
from decision_criteria.models.results import CriterionType

logger = logging.getLogger(__name__)

DEFAULT_ALPHA = 0.5

# Registry of all criteria by type
CRITERIA: dict[CriterionType, type] = {
    CriterionType.WALD: WaldCriterion,
    CriterionType.MAXIMAX: MaximaxCriterion,
    CriterionType.SAVAGE: SavageCriterion,
    CriterionType.HURWITZ: HurwitzCriterion,
    CriterionType.BAYES: BayesCriterion,
    CriterionType.LAPLACE: LaplaceCriterion,
}

# Criteria applicable to each analysis mode, in evaluation order
UNCERTAINTY_CRITERIA: tuple[CriterionType, ...] = (
    CriterionType.WALD,
    CriterionType.MAXIMAX,
    CriterionType.SAVAGE,
    CriterionType.HURWITZ,
)
RISK_CRITERIA: tuple[CriterionType, ...] = (
    CriterionType.BAYES,
    CriterionType.LAPLACE,
)


def parse_criterion_type(criterion_type: CriterionType | str) -> CriterionType:
    """Resolve an identifier to a CriterionType.

    Raises:
        UnknownCriterionError: If the identifier is not one of the six criteria

    Examples:
        >>> parse_criterion_type("WALD")
        <CriterionType.WALD: 'wald'>
    """
    if isinstance(criterion_type, CriterionType):
        return criterion_type
    if not isinstance(criterion_type, str):
        raise UnknownCriterionError(f"Unknown criterion type: {criterion_type!r}")
    try:
        return CriterionType(criterion_type.strip().lower())
    except ValueError:
        raise UnknownCriterionError(f"Unknown criterion type: {criterion_type}") from None


def create_criterion(
    criterion_type: CriterionType | str,
    params: Mapping[str, Any] | None = None,
) -> Criterion:
    """Build a criterion from its identifier and parameters.

    This is the main entry point for criterion construction. Probabilities
    are passed through unchanged; checking that they sum to 1 is left to the
    caller.

    Args:
        criterion_type: CriterionType or its case-insensitive string value
        params: Criterion parameters ("alpha" for hurwitz, "probabilities" for bayes)

    Returns:
        A criterion ready to calculate()

    Raises:
        UnknownCriterionError: If the identifier is not recognized
        MissingParameterError: If bayes is requested without probabilities
        InvalidParameterError: If a parameter has the wrong shape
    """
    kind = parse_criterion_type(criterion_type)
    params = params or {}
    criterion_cls = CRITERIA[kind]

    if kind == CriterionType.HURWITZ:
        alpha = params.get("alpha")
        criterion = criterion_cls(alpha=DEFAULT_ALPHA if alpha is None else alpha)
    elif kind == CriterionType.BAYES:
        probabilities = params.get("probabilities")
        if probabilities is None:
            raise MissingParameterError("Probabilities required for Bayes criterion")
        criterion = criterion_cls(probabilities=probabilities)
    else:
        criterion = criterion_cls()

    logger.debug(f"Created {criterion.name}")
    return criterion


def criteria_for_mode(mode: str) -> tuple[CriterionType, ...]:
    """Criteria evaluated for an analysis mode ("uncertainty" or "risk").

    Raises:
        ValueError: If the mode is not recognized
    """
    mode_key = getattr(mode, "value", mode)
    if mode_key == "uncertainty":
        return UNCERTAINTY_CRITERIA
    if mode_key == "risk":
        return RISK_CRITERIA
    raise ValueError(f"Unknown analysis mode: {mode}")


def available_criteria() -> list[dict[str, str]]:
    """Describe every registered criterion.

    Returns:
        List of dicts with keys: type, name, description
    """
    catalog = []
    for kind, criterion_cls in CRITERIA.items():
        if kind == CriterionType.HURWITZ:
            criterion = criterion_cls(alpha=DEFAULT_ALPHA)
        elif kind == CriterionType.BAYES:
            criterion = criterion_cls(probabilities=())
        else:
            criterion = criterion_cls()
        catalog.append({
            "type": kind.value,
            "name": criterion.name,
            "description": criterion.description,
        })
    return catalog
