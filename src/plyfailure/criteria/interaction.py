"""Fiber failure with shear coupling, shared by Chang-Chang and Tsai-Wu."""

from plyfailure.data_utils import StrengthProperties
from plyfailure.math_utils import positive_root
from plyfailure.result import (
    FIBER_COMPRESSION,
    FIBER_TENSION,
    FailureMode,
    ReserveFactorResult,
)


def fiber_failure(
    strength: StrengthProperties, sigma1: float, tau12: float, beta: float
) -> ReserveFactorResult:
    """Fiber reserve factor of the quadratic interaction criteria.

    Tension solves ``(sigma1/R11t)**2 * R**2 + beta*tau12/S * R = 1``;
    compression is the plain strength ratio ``R11c / |sigma1|``.
    """
    if sigma1 >= 0.0:
        q = (sigma1 / strength.R11t) ** 2
        linear = beta * tau12 / strength.S
        return ReserveFactorResult.of(
            positive_root(q, linear), FailureMode.FIBER_FAILURE, FIBER_TENSION
        )
    return ReserveFactorResult.of(
        strength.R11c / abs(sigma1), FailureMode.FIBER_FAILURE, FIBER_COMPRESSION
    )
