import math
from dataclasses import dataclass, field, fields

from plyfailure.errors import MaterialConfigurationError, MissingParameterError


@dataclass(frozen=True)
class ElasticProperties:
    """Orthotropic in-plane elastic properties of a unidirectional lamina.

    Attributes:
        E1: Modulus along fiber direction 1 (MPa or consistent units).
        E2: Modulus transverse to fiber direction 2.
        G12: In-plane shear modulus.
        v12: Major Poisson's ratio (strain in 2 due to stress in 1).
    """

    E1: float
    E2: float
    G12: float
    v12: float

    @property
    def v21(self) -> float:
        return self.v12 * self.E2 / self.E1


@dataclass(frozen=True)
class StrengthProperties:
    """Lamina strengths used by the ply failure criteria.

    All values are magnitudes; compressive strengths are stored positive.

    Attributes:
        R11t: Longitudinal tensile strength.
        R11c: Longitudinal compressive strength (positive magnitude).
        Yt: Transverse tensile strength.
        Yc: Transverse compressive strength (positive magnitude).
        S: In-plane shear strength.
    """

    R11t: float
    R11c: float
    Yt: float
    Yc: float
    S: float

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if math.isnan(value) or value < 0:
                raise MaterialConfigurationError(
                    f"Strength {f.name} must be a non-negative magnitude, got {value}"
                )


@dataclass(frozen=True)
class MaterialStrengthProfile:
    """Material definition consumed by the failure criteria.

    Attributes:
        name: Name of the material.
        elastic: Elastic properties, needed for strain-based checks and kink-band rotation.
        strength: Strength magnitudes.
        additional_values: Criterion-scoped constants keyed as ``"<criterion>.<name>"``,
            e.g. ``"chang_chang.beta"`` or ``"daimler_pinho.alpha0"``.
    """

    name: str
    elastic: ElasticProperties
    strength: StrengthProperties
    additional_values: dict[str, float] = field(default_factory=dict)

    def additional_value(self, key: str) -> float:
        """Return the additional value stored under ``key``.

        Raises:
            MissingParameterError: If the material does not define ``key``.
        """
        try:
            return float(self.additional_values[key])
        except KeyError:
            raise MissingParameterError(key, self.name) from None

    def with_additional_values(self, values: dict[str, float]) -> "MaterialStrengthProfile":
        """Copy of this profile with extra or overridden additional values."""
        merged = dict(self.additional_values)
        merged.update(values)
        return MaterialStrengthProfile(self.name, self.elastic, self.strength, merged)
