"""Criteria evaluation engine.

This module contains:
- criteria: the six decision criteria and the Criterion protocol
- factory: construction of criteria from an identifier and parameters
- errors: exceptions raised by criteria and the factory

Usage:
    from decision_criteria.engine import create_criterion
    from decision_criteria.models import PayoffMatrix

    criterion = create_criterion("hurwitz", {"alpha": 0.7})
    result = criterion.calculate(PayoffMatrix.example())
    print(result.strategy, result.values)
"""

from decision_criteria.engine.criteria import (
    BayesCriterion,
    Criterion,
    HurwitzCriterion,
    LaplaceCriterion,
    MaximaxCriterion,
    SavageCriterion,
    WaldCriterion,
    select_optimal,
)
from decision_criteria.engine.errors import (
    CriterionError,
    InvalidParameterError,
    MissingParameterError,
    UnknownCriterionError,
)
from decision_criteria.engine.factory import (
    CRITERIA,
    RISK_CRITERIA,
    UNCERTAINTY_CRITERIA,
    available_criteria,
    create_criterion,
    criteria_for_mode,
    parse_criterion_type,
)

__all__ = [
    # Criteria
    "Criterion",
    "WaldCriterion",
    "MaximaxCriterion",
    "SavageCriterion",
    "HurwitzCriterion",
    "BayesCriterion",
    "LaplaceCriterion",
    "select_optimal",
    # Factory
    "CRITERIA",
    "UNCERTAINTY_CRITERIA",
    "RISK_CRITERIA",
    "available_criteria",
    "create_criterion",
    "criteria_for_mode",
    "parse_criterion_type",
    # Errors
    "CriterionError",
    "InvalidParameterError",
    "MissingParameterError",
    "UnknownCriterionError",
]
