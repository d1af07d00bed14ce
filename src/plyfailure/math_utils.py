import math

import numpy as np
from numpy.typing import NDArray

from plyfailure.data_utils import ElasticProperties
from plyfailure.errors import MaterialConfigurationError


def rotation_matrix(theta: float) -> NDArray[np.float64]:
    """Return the 3x3 stress rotation matrix for a given angle in radians."""
    c = np.cos(theta)
    s = np.sin(theta)
    return np.array(
        [
            [c**2, s**2, 2 * c * s],
            [s**2, c**2, -2 * c * s],
            [-c * s, c * s, c**2 - s**2],
        ]
    )


def strain_rotation_matrix(theta: float) -> NDArray[np.float64]:
    """Return the 3x3 rotation matrix for engineering strains (gamma12) in radians."""
    c = np.cos(theta)
    s = np.sin(theta)
    return np.array(
        [
            [c**2, s**2, c * s],
            [s**2, c**2, -c * s],
            [-2 * c * s, 2 * c * s, c**2 - s**2],
        ]
    )


def reduced_stiffness(elastic: ElasticProperties) -> NDArray[np.float64]:
    """Plane-stress reduced stiffness matrix Q in ply axes."""
    denom = 1.0 - elastic.v12 * elastic.v21
    if denom <= 0:
        raise MaterialConfigurationError(
            f"Poisson's ratios v12={elastic.v12}, v21={elastic.v21} give a singular stiffness"
        )
    Q11 = elastic.E1 / denom
    Q22 = elastic.E2 / denom
    Q12 = elastic.v12 * elastic.E2 / denom
    Q66 = elastic.G12
    return np.array([[Q11, Q12, 0.0], [Q12, Q22, 0.0], [0.0, 0.0, Q66]], dtype=float)


def transformed_reduced_stiffness(
    elastic: ElasticProperties, theta_deg: float
) -> NDArray[np.float64]:
    """Reduced stiffness Qbar of a ply rotated by ``theta_deg`` into laminate axes."""
    m = np.cos(np.deg2rad(theta_deg))
    n = np.sin(np.deg2rad(theta_deg))

    Q = reduced_stiffness(elastic)
    Q11, Q12, Q22, Q66 = Q[0, 0], Q[0, 1], Q[1, 1], Q[2, 2]

    m2, n2 = m * m, n * n
    m4, n4 = m2 * m2, n2 * n2

    Qxx = Q11 * m4 + 2.0 * (Q12 + 2.0 * Q66) * m2 * n2 + Q22 * n4
    Qxy = (Q11 + Q22 - 4.0 * Q66) * m2 * n2 + Q12 * (m4 + n4)
    Qyy = Q11 * n4 + 2.0 * (Q12 + 2.0 * Q66) * m2 * n2 + Q22 * m4
    Qxs = (Q11 - Q12 - 2.0 * Q66) * n * m2 * m + (Q12 - Q22 + 2.0 * Q66) * n2 * n * m
    Qys = (Q11 - Q12 - 2.0 * Q66) * m * n2 * n + (Q12 - Q22 + 2.0 * Q66) * m2 * m * n
    Qss = (Q11 + Q22 - 2.0 * Q12 - 2.0 * Q66) * n2 * m2 + Q66 * (n4 + m4)

    return np.array([[Qxx, Qxy, Qxs], [Qxy, Qyy, Qys], [Qxs, Qys, Qss]], dtype=float)


def positive_root(quadratic: float, linear: float) -> float:
    """Positive root R of ``quadratic * R**2 + linear * R - 1 = 0``.

    This is the reserve factor of a quadratic interaction law whose failure
    index is ``quadratic * R**2 + linear * R``.

    Args:
        quadratic: Coefficient of the quadratic stress terms.
        linear: Coefficient of the linear stress terms.

    Returns:
        The reserve factor, or ``math.inf`` when the quadratic terms vanish
        (no stress in the channel).

    Raises:
        MaterialConfigurationError: If the discriminant is negative.
    """
    if quadratic == 0.0:
        return math.inf
    discriminant = linear * linear + 4.0 * quadratic
    if discriminant < 0.0:
        raise MaterialConfigurationError(
            f"Negative discriminant {discriminant:g} in quadratic reserve factor solution"
        )
    root = math.sqrt(discriminant)
    # conjugate form, free of cancellation for a dominant positive linear term
    if linear > 0.0:
        return 2.0 / (root + linear)
    return (root - linear) / (2.0 * quadratic)
