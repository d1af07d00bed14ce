"""Exceptions raised by the failure criteria.

Only physically inconsistent material input propagates out of
``Criterion.evaluate``; numeric degeneracies of the stress state are resolved
inside the criteria.
"""

from __future__ import annotations

from typing import Optional


class FailureCriterionError(Exception):
    """Base class for all errors raised by plyfailure."""


class MaterialConfigurationError(FailureCriterionError, ValueError):
    """The supplied material data cannot be evaluated by a criterion.

    Raised for negative strengths, zero strengths used as divisors, invalid
    criterion parameters and negative discriminants in closed-form solutions.
    """


class MissingParameterError(MaterialConfigurationError):
    """A criterion-specific additional value is not defined for a material."""

    def __init__(self, key: str, material: Optional[str] = None) -> None:
        self.key: str = key
        self.material: Optional[str] = material
        where = f" for material '{material}'" if material else ""
        super().__init__(f"Additional value '{key}' is not defined{where}")
