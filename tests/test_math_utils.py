import math

import numpy as np
import pytest

from plyfailure.data.materials import T700
from plyfailure.data_utils import ElasticProperties
from plyfailure.errors import MaterialConfigurationError
from plyfailure.math_utils import (
    positive_root,
    reduced_stiffness,
    rotation_matrix,
    strain_rotation_matrix,
    transformed_reduced_stiffness,
)


@pytest.mark.parametrize(
    "quadratic, linear, expected",
    [
        (1.0, 0.0, 1.0),
        (0.25, 0.0, 2.0),
        (2.0, -1.0, 1.0),
        (0.0, 0.5, math.inf),
    ],
)
def test_positive_root(quadratic, linear, expected) -> None:
    root = positive_root(quadratic, linear)
    assert root == pytest.approx(expected)
    if math.isfinite(root):
        assert quadratic * root**2 + linear * root == pytest.approx(1.0)


def test_negative_discriminant_is_fatal() -> None:
    with pytest.raises(MaterialConfigurationError, match="discriminant"):
        positive_root(-1.0, 0.0)


def test_reduced_stiffness_inverts_compliance() -> None:
    elastic = T700.elastic
    Q = reduced_stiffness(elastic)
    compliance = np.array(
        [
            [1 / elastic.E1, -elastic.v12 / elastic.E1, 0.0],
            [-elastic.v12 / elastic.E1, 1 / elastic.E2, 0.0],
            [0.0, 0.0, 1 / elastic.G12],
        ]
    )
    np.testing.assert_allclose(Q @ compliance, np.eye(3), atol=1e-12)


def test_singular_poisson_ratios_are_rejected() -> None:
    with pytest.raises(MaterialConfigurationError):
        reduced_stiffness(ElasticProperties(E1=10.0, E2=10.0, G12=5.0, v12=1.0))


def test_transformed_stiffness_at_zero_degrees_is_reduced_stiffness() -> None:
    np.testing.assert_allclose(
        transformed_reduced_stiffness(T700.elastic, 0.0), reduced_stiffness(T700.elastic)
    )


def test_transformed_stiffness_at_90_degrees_swaps_axes() -> None:
    Q = reduced_stiffness(T700.elastic)
    Qbar = transformed_reduced_stiffness(T700.elastic, 90.0)
    assert Qbar[0, 0] == pytest.approx(Q[1, 1])
    assert Qbar[1, 1] == pytest.approx(Q[0, 0])
    assert Qbar[2, 2] == pytest.approx(Q[2, 2])


@pytest.mark.parametrize("theta_deg", [0.0, 30.0, 45.0, -60.0])
def test_transformed_stiffness_matches_rotation(theta_deg) -> None:
    theta = np.deg2rad(theta_deg)
    T = rotation_matrix(theta)
    expected = np.linalg.inv(T) @ reduced_stiffness(T700.elastic) @ strain_rotation_matrix(theta)
    np.testing.assert_allclose(
        transformed_reduced_stiffness(T700.elastic, theta_deg), expected, rtol=1e-9, atol=1e-6
    )


@pytest.mark.parametrize("quadratic", [1e-19, 1e-25, 1e-40])
def test_positive_root_with_dominant_linear_term(quadratic) -> None:
    # root tends to 1/linear as the quadratic term vanishes
    root = positive_root(quadratic, 0.25)
    assert root == pytest.approx(4.0)
    assert quadratic * root**2 + 0.25 * root == pytest.approx(1.0)
