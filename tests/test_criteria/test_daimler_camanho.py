import math
from dataclasses import replace

import pytest

from plyfailure.criteria.action_plane import FracturePlane, kink_band_angle
from plyfailure.criteria.daimler_camanho import DaimlerCamanho, DaimlerCamanhoParameters
from plyfailure.data.materials import T700
from plyfailure.errors import MaterialConfigurationError, MissingParameterError
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

STRENGTH = T700.strength

# At 45 degrees both friction coefficients vanish.
FRICTIONLESS = DaimlerCamanhoParameters(g1c=0.28, g2c=0.79, alpha0_deg=45.0)


def _state(s1: float, s2: float, t12: float) -> StressStrainState:
    return StressStrainState((s1, s2, t12), (0.0, 0.0, 0.0))


@pytest.fixture
def criterion() -> DaimlerCamanho:
    return DaimlerCamanho()


def test_fracture_plane_at_53_degrees() -> None:
    plane = FracturePlane.from_strengths(STRENGTH.Yc, STRENGTH.S, 53.0)
    a = math.radians(53.0)
    assert plane.alpha0 == pytest.approx(a)
    assert plane.R_L == STRENGTH.S
    assert plane.eta_T == pytest.approx(-1.0 / math.tan(2 * a))
    assert plane.eta_T > 0.0
    assert plane.eta_L > 0.0
    # R_T is the shear traction on the fracture plane at pure transverse compression
    assert plane.R_T == pytest.approx(
        STRENGTH.Yc * math.cos(a) * (math.sin(a) - plane.eta_T * math.cos(a))
    )


def test_friction_vanishes_at_45_degrees() -> None:
    plane = FracturePlane.from_strengths(STRENGTH.Yc, STRENGTH.S, 45.0)
    assert plane.eta_T == pytest.approx(0.0, abs=1e-12)
    assert plane.eta_L == pytest.approx(0.0, abs=1e-12)
    assert plane.R_T == pytest.approx(STRENGTH.Yc / 2)


def test_pure_transverse_compression_fails_at_unity(criterion) -> None:
    result = criterion.evaluate(T700, _state(0.0, -STRENGTH.Yc, 0.0))
    assert result.minimal_reserve_factor == pytest.approx(1.0)
    assert result.failure_mode is FailureMode.MATRIX_FAILURE
    assert result.failure_name == MATRIX_COMPRESSION


def test_pure_shear_fails_in_matrix_tension(criterion) -> None:
    result = criterion.evaluate(T700, _state(0.0, 0.0, STRENGTH.S))
    assert result.minimal_reserve_factor == pytest.approx(1.0)
    assert result.failure_name == MATRIX_TENSION


def test_pure_transverse_tension_fails_at_unity(criterion) -> None:
    result = criterion.evaluate(T700, _state(0.0, STRENGTH.Yt, 0.0))
    assert result.minimal_reserve_factor == pytest.approx(1.0)
    assert result.failure_name == MATRIX_TENSION


def test_fiber_tension_uses_strain(criterion) -> None:
    state = StressStrainState.from_stress((STRENGTH.R11t, 0.0, 0.0), T700.elastic)
    result = criterion.evaluate(T700, state)
    assert result.minimal_reserve_factor == pytest.approx(1.0)
    assert result.failure_mode is FailureMode.FIBER_FAILURE
    assert result.failure_name == FIBER_TENSION


def test_fiber_tension_without_elongation_is_no_fiber_failure(criterion) -> None:
    state = StressStrainState((500.0, 0.0, 0.0), (0.0, 0.0, 0.0))
    assert criterion.evaluate(T700, state) == ReserveFactorResult.no_failure()

    sheared = criterion.evaluate(T700, StressStrainState((500.0, 0.0, 50.0), (0.0, 0.0, 0.0)))
    assert sheared.failure_mode is FailureMode.MATRIX_FAILURE


def test_fiber_tension_with_contraction_gives_sentinel(criterion) -> None:
    state = StressStrainState((500.0, 0.0, 0.0), (-1e-4, 0.0, 0.0))
    result = criterion.evaluate(T700, state)
    assert result.minimal_reserve_factor == SENTINEL_RESERVE_FACTOR
    assert result.failure_name == FIBER_TENSION


def test_frictionless_fiber_compression_reduces_to_kink_band_shear() -> None:
    s1, t12 = -1000.0, 10.0
    r = STRENGTH.S / STRENGTH.R11c
    phi = math.atan((1 - math.sqrt(1 - 4 * r * r)) / (2 * r))
    tau_12m = -s1 * math.sin(phi) * math.cos(phi) + t12 * (
        math.cos(phi) ** 2 - math.sin(phi) ** 2
    )

    result = DaimlerCamanho(FRICTIONLESS).evaluate(T700, _state(s1, 0.0, t12))
    assert result.minimal_reserve_factor == pytest.approx(STRENGTH.S / abs(tau_12m), rel=1e-9)
    assert result.failure_name == FIBER_COMPRESSION


def test_frictionless_matrix_compression_reduces_to_quadratic_shear() -> None:
    s2, t12 = -100.0, 30.0
    on_zero_plane = STRENGTH.S / abs(t12)
    on_fracture_plane = 1 / math.sqrt(
        (abs(s2) / STRENGTH.Yc) ** 2 + (abs(t12) / (math.sqrt(2) * STRENGTH.S)) ** 2
    )

    result = DaimlerCamanho(FRICTIONLESS).evaluate(T700, _state(0.0, s2, t12))
    assert result.minimal_reserve_factor == pytest.approx(
        min(on_zero_plane, on_fracture_plane), rel=1e-9
    )
    assert result.failure_name == MATRIX_COMPRESSION


def test_energy_release_ratio_shifts_matrix_tension() -> None:
    state = _state(0.0, 40.0, 60.0)
    brittle = DaimlerCamanho(DaimlerCamanhoParameters(g1c=0.1, g2c=1.0)).evaluate(T700, state)
    equal = DaimlerCamanho(DaimlerCamanhoParameters(g1c=1.0, g2c=1.0)).evaluate(T700, state)

    expected = 1 / math.sqrt((40.0 / STRENGTH.Yt) ** 2 + (60.0 / STRENGTH.S) ** 2)
    assert equal.minimal_reserve_factor == pytest.approx(expected)
    assert brittle.minimal_reserve_factor != pytest.approx(expected)


def test_alpha0_defaults_to_53_degrees(criterion) -> None:
    material = replace(
        T700,
        additional_values={"daimler_camanho.g1c": 0.28, "daimler_camanho.g2c": 0.79},
    )
    state = _state(-300.0, -80.0, 40.0)
    assert criterion.evaluate(material, state) == criterion.evaluate(T700, state)


def test_missing_energy_release_rate(criterion) -> None:
    material = replace(T700, additional_values={"daimler_camanho.g1c": 0.28})
    with pytest.raises(MissingParameterError) as excinfo:
        criterion.evaluate(material, _state(0.0, 10.0, 0.0))
    assert excinfo.value.key == "daimler_camanho.g2c"
    assert excinfo.value.material == "T700"


def test_impossible_kink_band_is_fatal(criterion) -> None:
    # shear strength equal to fiber compressive strength leaves no real kink angle
    material = replace(T700, strength=replace(STRENGTH, S=STRENGTH.R11c))
    with pytest.raises(MaterialConfigurationError, match="kink-band"):
        criterion.evaluate(material, _state(-100.0, 0.0, 0.0))

    outcome = criterion.try_evaluate(material, _state(-100.0, 0.0, 0.0))
    assert not outcome.ok
    assert isinstance(outcome.error, MaterialConfigurationError)


def test_kink_band_angle_limit_without_denominator() -> None:
    assert kink_band_angle(0.1, 1.0, -0.1) == pytest.approx(math.atan(0.1))
