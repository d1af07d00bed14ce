"""Fracture-plane quantities shared by the action-plane (LaRC/Puck type) criteria.

The fracture angle ``alpha0`` is the angle of the matrix fracture plane under
pure transverse compression. From it follow the transverse shear strength of
the fracture plane and the friction coefficients that strengthen the plane
under compressive normal stress.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from plyfailure.errors import MaterialConfigurationError

DEFAULT_FRACTURE_ANGLE_DEG = 53.0


def check_fracture_angle(alpha0_deg: float, owner: str) -> None:
    """Reject fracture angles outside [45, 90) degrees.

    Below 45 degrees the friction coefficients turn negative and the friction
    augmented strengths can vanish under compression.
    """
    if not 45.0 <= alpha0_deg < 90.0:
        raise MaterialConfigurationError(
            f"{owner}: fracture angle alpha0 must lie in [45, 90) degrees, got {alpha0_deg}"
        )


@dataclass(frozen=True)
class FracturePlane:
    """Strengths and friction coefficients of the fracture plane.

    Attributes:
        alpha0: Fracture angle under pure transverse compression in radians.
        R_T: Transverse shear strength of the fracture plane.
        R_L: Longitudinal shear strength (the in-plane shear strength S).
        eta_T: Transverse friction coefficient.
        eta_L: Longitudinal friction coefficient.
    """

    alpha0: float
    R_T: float
    R_L: float
    eta_T: float
    eta_L: float

    @classmethod
    def from_strengths(cls, Yc: float, S: float, alpha0_deg: float) -> FracturePlane:
        a = math.radians(alpha0_deg)
        R_T = Yc * math.cos(a) * (math.sin(a) + math.cos(a) / math.tan(2 * a))
        eta_T = -1.0 / math.tan(2 * a)
        eta_L = -(S * math.cos(2 * a)) / (Yc * math.cos(a) * math.cos(a))
        return cls(alpha0=a, R_T=R_T, R_L=S, eta_T=eta_T, eta_L=eta_L)


def kink_band_angle(R_L: float, R11c: float, eta_L: float) -> float:
    """Fiber misalignment angle of the kink band at fiber compression failure, in radians.

    Raises:
        MaterialConfigurationError: If shear strength, fiber compressive strength
            and friction coefficient admit no real kink angle.
    """
    ratio = R_L / R11c
    d = ratio + eta_L
    radicand = 1.0 - 4.0 * d * ratio
    if radicand < 0.0:
        raise MaterialConfigurationError(
            f"No kink-band angle for S={R_L}, R11c={R11c}, eta_L={eta_L:.4g}: "
            f"radicand {radicand:.4g} is negative"
        )
    if d == 0.0:
        return math.atan(ratio)
    return math.atan((1.0 - math.sqrt(radicand)) / (2.0 * d))
