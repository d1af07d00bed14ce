import logging
import math
from dataclasses import dataclass, field

from plyfailure.criteria.action_plane import (
    DEFAULT_FRACTURE_ANGLE_DEG,
    FracturePlane,
    check_fracture_angle,
    kink_band_angle,
)
from plyfailure.criteria.base import Criterion, CriterionParameters
from plyfailure.data_utils import MaterialStrengthProfile
from plyfailure.errors import MaterialConfigurationError
from plyfailure.math_utils import positive_root
from plyfailure.result import (
    FIBER_COMPRESSION,
    FIBER_TENSION,
    MATRIX_COMPRESSION,
    MATRIX_TENSION,
    SENTINEL_RESERVE_FACTOR,
    FailureMode,
    ReserveFactorResult,
)
from plyfailure.state import StressStrainState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DaimlerCamanhoParameters(CriterionParameters):
    """Daimler-Camanho constants.

    Attributes:
        g1c: Mode I critical energy release rate.
        g2c: Mode II critical energy release rate.
        alpha0_deg: Fracture angle under pure transverse compression in degrees.
    """

    prefix = "daimler_camanho"

    g1c: float
    g2c: float
    alpha0_deg: float = field(default=DEFAULT_FRACTURE_ANGLE_DEG, metadata={"key": "alpha0"})

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.g1c < 0 or self.g2c <= 0:
            raise MaterialConfigurationError(
                f"Energy release rates must satisfy g1c >= 0 and g2c > 0, "
                f"got g1c={self.g1c}, g2c={self.g2c}"
            )
        check_fracture_angle(self.alpha0_deg, "DaimlerCamanhoParameters")


def _ratio_law(strength: float, denominator: float) -> float:
    """``strength / denominator`` or the sentinel when the mechanism is not activated."""
    if denominator > 0:
        return strength / denominator
    logger.debug(f"Non-positive denominator {denominator:g}, substituting sentinel")
    return SENTINEL_RESERVE_FACTOR


class DaimlerCamanho(Criterion[DaimlerCamanhoParameters]):
    """LaRC based criterion of the LS-DYNA Daimler-Camanho damage model.

    The fracture plane angle is fixed (53 degrees by default); fiber compression
    is evaluated in a kink band rotated by the analytical misalignment angle.
    """

    name = "daimler-camanho"
    display_name = "Daimler-Camanho"
    description = "Action-plane criterion with fixed fracture angle and kink-band fiber compression"
    parameters_type = DaimlerCamanhoParameters
    required_strengths = ("R11t", "R11c", "Yt", "Yc", "S")
    required_elastic = ("E1",)

    def _evaluate(
        self,
        profile: MaterialStrengthProfile,
        state: StressStrainState,
        parameters: DaimlerCamanhoParameters,
    ) -> ReserveFactorResult:
        strength = profile.strength
        plane = FracturePlane.from_strengths(strength.Yc, strength.S, parameters.alpha0_deg)
        s1, s2, t12 = state.stress

        # stresses in the kink band
        phi = kink_band_angle(plane.R_L, strength.R11c, plane.eta_L)
        sin_phi, cos_phi = math.sin(phi), math.cos(phi)
        sig_2m = sin_phi**2 * s1 + cos_phi**2 * s2 - 2 * sin_phi * cos_phi * abs(t12)
        tau_12m = (s2 - s1) * sin_phi * cos_phi + abs(t12) * (cos_phi**2 - sin_phi**2)

        if s1 > 0.0:
            if state.epsilon1 == 0.0:
                # unstrained fibers
                reserve = math.inf
            else:
                reserve = _ratio_law(strength.R11t, abs(profile.elastic.E1) * state.epsilon1)
            result = ReserveFactorResult.of(reserve, FailureMode.FIBER_FAILURE, FIBER_TENSION)
        else:
            reserve = _ratio_law(plane.R_L, abs(tau_12m) + plane.eta_L * sig_2m)
            result = ReserveFactorResult.of(reserve, FailureMode.FIBER_FAILURE, FIBER_COMPRESSION)

        if s2 >= 0.0:
            matrix = self._matrix_tension(profile, plane, parameters, s2, t12)
        else:
            matrix = self._matrix_compression(plane, s2, t12)
        return result.governing(matrix)

    @staticmethod
    def _matrix_tension(
        profile: MaterialStrengthProfile,
        plane: FracturePlane,
        parameters: DaimlerCamanhoParameters,
        s2: float,
        t12: float,
    ) -> ReserveFactorResult:
        Yt = profile.strength.Yt
        g = parameters.g1c / parameters.g2c
        q = g * (s2 / Yt) ** 2 + (t12 / plane.R_L) ** 2
        linear = (1 - g) * s2 / Yt
        return ReserveFactorResult.of(
            positive_root(q, linear), FailureMode.MATRIX_FAILURE, MATRIX_TENSION
        )

    @staticmethod
    def _matrix_compression(plane: FracturePlane, s2: float, t12: float) -> ReserveFactorResult:
        a = plane.alpha0

        # fracture plane at 0 degrees
        reserve = _ratio_law(plane.R_L, abs(t12) + plane.eta_L * s2)

        # fracture plane at alpha0
        theta = math.atan(-abs(t12) / (s2 * math.sin(a)))
        tau_t_eff = -s2 * math.cos(a) * (math.sin(a) - plane.eta_T * math.cos(a) * math.cos(theta))
        tau_t_eff = max(tau_t_eff, 0.0)
        tau_l_eff = math.cos(a) * abs(t12 + plane.eta_L * s2 * math.cos(a) * math.sin(theta))
        f = (tau_t_eff / plane.R_T) ** 2 + (tau_l_eff / plane.R_L) ** 2
        if f > 0.0:
            reserve = min(reserve, 1.0 / math.sqrt(f))

        return ReserveFactorResult.of(reserve, FailureMode.MATRIX_FAILURE, MATRIX_COMPRESSION)
