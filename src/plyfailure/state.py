from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

import numpy as np
from numpy.typing import NDArray

from plyfailure.data_utils import ElasticProperties
from plyfailure.math_utils import reduced_stiffness, rotation_matrix, strain_rotation_matrix

Vector3 = tuple[float, float, float]
ArrayLike3 = Union[Sequence[float], NDArray[np.float64]]


def _as_vector3(values: ArrayLike3, label: str) -> Vector3:
    arr = np.asarray(values, dtype=float).ravel()
    if arr.shape != (3,):
        raise ValueError(f"{label} must have exactly 3 components, got shape {arr.shape}")
    return (float(arr[0]), float(arr[1]), float(arr[2]))


@dataclass(frozen=True)
class StressStrainState:
    """Mechanical state of one ply in its local (1, 2) fiber axes.

    Attributes:
        stress: (sigma1, sigma2, tau12); sigma1 along the fiber.
        strain: (epsilon1, epsilon2, gamma12), engineering shear strain.

    Accepts any 3-element sequence or an array of shape (3,) or (3, 1).
    """

    stress: Vector3
    strain: Vector3

    def __post_init__(self) -> None:
        object.__setattr__(self, "stress", _as_vector3(self.stress, "stress"))
        object.__setattr__(self, "strain", _as_vector3(self.strain, "strain"))

    @property
    def sigma1(self) -> float:
        return self.stress[0]

    @property
    def sigma2(self) -> float:
        return self.stress[1]

    @property
    def tau12(self) -> float:
        return self.stress[2]

    @property
    def epsilon1(self) -> float:
        return self.strain[0]

    @property
    def is_unloaded(self) -> bool:
        """True when all three stress components are exactly zero."""
        return self.stress[0] == 0.0 and self.stress[1] == 0.0 and self.stress[2] == 0.0

    def scaled(self, factor: float) -> StressStrainState:
        """State with stress and strain multiplied by ``factor`` (linear elastic scaling)."""
        return StressStrainState(
            tuple(factor * s for s in self.stress), tuple(factor * e for e in self.strain)
        )

    @classmethod
    def from_stress(cls, stress: ArrayLike3, elastic: ElasticProperties) -> StressStrainState:
        """Build a state from ply stresses, deriving strains from the reduced compliance."""
        sigma = np.asarray(_as_vector3(stress, "stress"))
        epsilon = np.linalg.solve(reduced_stiffness(elastic), sigma)
        return cls(sigma, epsilon)

    @classmethod
    def from_strain(cls, strain: ArrayLike3, elastic: ElasticProperties) -> StressStrainState:
        """Build a state from ply strains, deriving stresses from the reduced stiffness."""
        epsilon = np.asarray(_as_vector3(strain, "strain"))
        sigma = reduced_stiffness(elastic) @ epsilon
        return cls(sigma, epsilon)

    @classmethod
    def from_global(
        cls, stress_xy: ArrayLike3, strain_xy: ArrayLike3, theta_deg: float
    ) -> StressStrainState:
        """Rotate laminate-axis stress and strain of a ply at ``theta_deg`` into ply axes."""
        theta = np.deg2rad(theta_deg)
        sigma = rotation_matrix(theta) @ np.asarray(_as_vector3(stress_xy, "stress"))
        epsilon = strain_rotation_matrix(theta) @ np.asarray(_as_vector3(strain_xy, "strain"))
        return cls(sigma, epsilon)
