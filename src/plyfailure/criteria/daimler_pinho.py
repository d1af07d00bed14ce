import logging
import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike, NDArray

from plyfailure.criteria.action_plane import FracturePlane, check_fracture_angle, kink_band_angle
from plyfailure.criteria.base import Criterion, CriterionParameters
from plyfailure.data_utils import MaterialStrengthProfile
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

# Candidate fracture planes, 1 degree apart over [0, 180).
FRACTURE_PLANE_ANGLES_DEG: NDArray[np.float64] = np.arange(180, dtype=float)


@dataclass(frozen=True)
class DaimlerPinhoParameters(CriterionParameters):
    """Daimler-Pinho constants.

    Attributes:
        alpha0_deg: Fracture angle under pure transverse compression in degrees,
            rounded up to the next whole degree before use.
    """

    prefix = "daimler_pinho"

    alpha0_deg: float = field(metadata={"key": "alpha0"})

    def __post_init__(self) -> None:
        super().__post_init__()
        check_fracture_angle(self.fracture_angle_deg, "DaimlerPinhoParameters")

    @property
    def fracture_angle_deg(self) -> int:
        return math.ceil(self.alpha0_deg)


def kink_band_rotation(
    s1: float, s2: float, t12: float, theta_c: float, R11c: float, G12: float
) -> float:
    """Rotation of the kink band: initial misalignment plus the load induced shear rotation.

    The sign follows the in-plane shear stress; zero shear rotates positively.
    """
    theta_i = theta_c - theta_c * R11c / G12
    denom = G12 + s1 - s2
    gamma_i = (theta_i * G12 + abs(t12)) / denom - theta_i if denom != 0.0 else 0.0
    rotation = theta_i + gamma_i
    if t12 != 0.0:
        return math.copysign(1.0, t12) * rotation
    return rotation


def plane_reserve_factors(
    sig_n: NDArray[np.float64],
    tau_t: NDArray[np.float64],
    tau_l: NDArray[np.float64],
    tension: NDArray[np.bool_],
    plane: FracturePlane,
    Yt: float,
) -> NDArray[np.float64]:
    """Reserve factor on each candidate plane.

    Planes flagged in ``tension`` use the quadratic interaction of normal and
    shear tractions; the others use shear tractions against friction-augmented
    strengths. Unloaded planes get ``inf``.
    """
    f = np.empty_like(sig_n)
    t = tension
    f[t] = (sig_n[t] / Yt) ** 2 + (tau_t[t] / plane.R_T) ** 2 + (tau_l[t] / plane.R_L) ** 2
    c = ~tension
    f[c] = (tau_t[c] / (plane.R_T - plane.eta_T * sig_n[c])) ** 2 + (
        tau_l[c] / (plane.R_L - plane.eta_L * sig_n[c])
    ) ** 2

    reserve = np.full_like(f, np.inf)
    loaded = f > 0.0
    reserve[loaded] = 1.0 / np.sqrt(f[loaded])
    return reserve


class DaimlerPinho(Criterion[DaimlerPinhoParameters]):
    """LaRC based criterion of the LS-DYNA Daimler-Pinho damage model (plane stress).

    Fiber compression and matrix failure search the critical fracture plane
    over the candidate angles ``angles_deg``; fiber compression does so inside
    the kink band rotated by initial misalignment plus shear rotation.
    """

    name = "daimler-pinho"
    display_name = "Daimler-Pinho"
    description = (
        "Action-plane criterion with fracture plane search and kink-band fiber compression"
    )
    parameters_type = DaimlerPinhoParameters
    required_strengths = ("R11t", "R11c", "Yt", "Yc", "S")
    required_elastic = ("G12",)

    def __init__(
        self,
        parameters: Optional[DaimlerPinhoParameters] = None,
        angles_deg: Optional[ArrayLike] = None,
    ) -> None:
        super().__init__(parameters)
        angles = FRACTURE_PLANE_ANGLES_DEG if angles_deg is None else np.asarray(angles_deg, float)
        if angles.ndim != 1 or angles.size == 0:
            raise ValueError("angles_deg must be a non-empty 1-D sequence of angles in degrees")
        self.angles_deg: NDArray[np.float64] = angles

    def _evaluate(
        self,
        profile: MaterialStrengthProfile,
        state: StressStrainState,
        parameters: DaimlerPinhoParameters,
    ) -> ReserveFactorResult:
        strength = profile.strength
        plane = FracturePlane.from_strengths(
            strength.Yc, strength.S, parameters.fracture_angle_deg
        )
        s1, s2, t12 = state.stress
        alpha = np.deg2rad(self.angles_deg)

        if s1 >= 0.0:
            reserve = strength.R11t / s1 if s1 > 0.0 else math.inf
            result = ReserveFactorResult.of(reserve, FailureMode.FIBER_FAILURE, FIBER_TENSION)
        else:
            result = self._fiber_compression(profile, plane, state, alpha)

        return result.governing(self._matrix(plane, strength.Yt, s2, t12, alpha, result))

    def _fiber_compression(
        self,
        profile: MaterialStrengthProfile,
        plane: FracturePlane,
        state: StressStrainState,
        alpha: NDArray[np.float64],
    ) -> ReserveFactorResult:
        s1, s2, t12 = state.stress
        theta_c = kink_band_angle(plane.R_L, profile.strength.R11c, plane.eta_L)
        theta = kink_band_rotation(s1, s2, t12, theta_c, profile.strength.R11c, profile.elastic.G12)

        # stresses in the kink band
        sig_1m = (s1 + s2) / 2 + (s1 + s2) / 2 * math.cos(2 * theta) + t12 * math.sin(2 * theta)
        sig_2m = s1 + s2 - sig_1m
        tau_12m = -(s1 - s2) / 2 * math.sin(2 * theta) + t12 * math.cos(2 * theta)

        sig_n = sig_2m / 2 + sig_2m / 2 * np.cos(2 * alpha)
        tau_t = sig_2m / 2 + sig_2m / 2 * np.sin(2 * alpha)
        tau_l = tau_12m * np.cos(alpha)
        reserve = plane_reserve_factors(sig_n, tau_t, tau_l, sig_n > 0, plane, profile.strength.Yt)

        i = int(np.argmin(reserve))
        logger.debug(f"Kink band rotation {theta:.4g} rad, critical plane {self.angles_deg[i]} deg")
        return ReserveFactorResult.of(
            min(SENTINEL_RESERVE_FACTOR, float(reserve[i])),
            FailureMode.FIBER_FAILURE,
            FIBER_COMPRESSION,
        )

    def _matrix(
        self,
        plane: FracturePlane,
        Yt: float,
        s2: float,
        t12: float,
        alpha: NDArray[np.float64],
        fiber: ReserveFactorResult,
    ) -> ReserveFactorResult:
        sig_n = s2 / 2 + s2 / 2 * np.cos(2 * alpha)
        tau_t = -s2 / 2 * np.sin(2 * alpha)
        tau_l = t12 * np.cos(alpha)
        tension = sig_n >= 0
        reserve = plane_reserve_factors(sig_n, tau_t, tau_l, tension, plane, Yt)

        tension_min = float(reserve[tension].min()) if tension.any() else math.inf
        friction_min = float(reserve[~tension].min()) if (~tension).any() else math.inf

        # matrix failure only governs below both the sentinel and the fiber result
        limit = min(SENTINEL_RESERVE_FACTOR, fiber.minimal_reserve_factor)
        if tension_min <= friction_min:
            candidate = ReserveFactorResult.of(
                tension_min, FailureMode.MATRIX_FAILURE, MATRIX_TENSION
            )
        else:
            candidate = ReserveFactorResult.of(
                friction_min, FailureMode.MATRIX_FAILURE, MATRIX_COMPRESSION
            )
        if candidate.minimal_reserve_factor < limit:
            return candidate
        return ReserveFactorResult.no_failure()
