import math
from dataclasses import dataclass

from plyfailure.criteria.base import Criterion, CriterionParameters
from plyfailure.criteria.interaction import fiber_failure
from plyfailure.data_utils import MaterialStrengthProfile, StrengthProperties
from plyfailure.math_utils import positive_root
from plyfailure.result import (
    MATRIX_COMPRESSION,
    MATRIX_TENSION,
    FailureMode,
    ReserveFactorResult,
)
from plyfailure.state import StressStrainState


@dataclass(frozen=True)
class ChangChangParameters(CriterionParameters):
    """Chang-Chang constants.

    Attributes:
        beta: Weighting of the shear term in the fiber tension mode.
    """

    prefix = "chang_chang"

    beta: float


def matrix_failure(
    strength: StrengthProperties, sigma2: float, tau12: float
) -> ReserveFactorResult:
    """Matrix reserve factor, split by the sign of sigma2."""
    S = strength.S
    if sigma2 >= 0.0:
        m = (sigma2 / strength.Yt) ** 2 + (tau12 / S) ** 2
        reserve = math.inf if m == 0.0 else math.sqrt(1.0 / m)
        return ReserveFactorResult.of(reserve, FailureMode.MATRIX_FAILURE, MATRIX_TENSION)

    q = 0.25 * (sigma2 / S) ** 2 + (tau12 / S) ** 2
    linear = (0.25 * strength.Yc / (S * S) - 1.0 / strength.Yc) * sigma2
    return ReserveFactorResult.of(
        positive_root(q, linear), FailureMode.MATRIX_FAILURE, MATRIX_COMPRESSION
    )


class ChangChang(Criterion[ChangChangParameters]):
    """Chang-Chang criterion as used by LS-DYNA MAT054.

    Quadratic interaction of normal and shear stress for fiber tension and for
    both matrix modes; fiber compression is a maximum stress check.
    """

    name = "chang-chang"
    display_name = "Chang-Chang"
    description = "Quadratic stress interaction with shear-coupled fiber tension (MAT054)"
    parameters_type = ChangChangParameters
    required_strengths = ("R11t", "R11c", "Yt", "Yc", "S")

    def _evaluate(
        self,
        profile: MaterialStrengthProfile,
        state: StressStrainState,
        parameters: ChangChangParameters,
    ) -> ReserveFactorResult:
        result = fiber_failure(profile.strength, state.sigma1, state.tau12, parameters.beta)
        return result.governing(matrix_failure(profile.strength, state.sigma2, state.tau12))
