"""Exceptions raised by criteria and the criterion factory.

All of them derive from ValueError so callers that already guard parameter
validation with ``except ValueError`` keep working.
"""


class CriterionError(ValueError):
    """Base class for criterion construction and evaluation faults."""


class InvalidParameterError(CriterionError):
    """A criterion parameter is missing or has the wrong shape."""


class MissingParameterError(InvalidParameterError):
    """A parameter required by the criterion was not supplied."""


class UnknownCriterionError(CriterionError):
    """The requested criterion identifier is not recognized."""
