from dataclasses import dataclass

from plyfailure.criteria.base import Criterion, CriterionParameters
from plyfailure.criteria.interaction import fiber_failure
from plyfailure.data_utils import MaterialStrengthProfile, StrengthProperties
from plyfailure.math_utils import positive_root
from plyfailure.result import MATRIX, FailureMode, ReserveFactorResult
from plyfailure.state import StressStrainState


@dataclass(frozen=True)
class TsaiWuParameters(CriterionParameters):
    prefix = "tsai_wu"

    beta: float


def matrix_failure(
    strength: StrengthProperties, sigma2: float, tau12: float
) -> ReserveFactorResult:
    """Asymmetric quadratic matrix check; the linear term carries the tension/compression split."""
    Yt, Yc, S = strength.Yt, strength.Yc, strength.S
    q = sigma2 * sigma2 / (Yt * Yc) + (tau12 / S) ** 2
    linear = (Yc - Yt) * sigma2 / (Yc * Yt)
    return ReserveFactorResult.of(positive_root(q, linear), FailureMode.MATRIX_FAILURE, MATRIX)


class TsaiWu(Criterion[TsaiWuParameters]):
    """Tsai-Wu type criterion as used by LS-DYNA MAT055."""

    name = "tsai-wu"
    display_name = "Tsai-Wu"
    description = "Shear-coupled fiber check with asymmetric Tsai-Wu matrix interaction (MAT055)"
    parameters_type = TsaiWuParameters
    required_strengths = ("R11t", "R11c", "Yt", "Yc", "S")

    def _evaluate(
        self,
        profile: MaterialStrengthProfile,
        state: StressStrainState,
        parameters: TsaiWuParameters,
    ) -> ReserveFactorResult:
        result = fiber_failure(profile.strength, state.sigma1, state.tau12, parameters.beta)
        return result.governing(matrix_failure(profile.strength, state.sigma2, state.tau12))
