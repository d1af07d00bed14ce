import logging
from collections.abc import Iterable
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from plyfailure.criteria.base import Criterion
from plyfailure.data_utils import MaterialStrengthProfile
from plyfailure.math_utils import transformed_reduced_stiffness
from plyfailure.result import FailureMode, ReserveFactorResult
from plyfailure.state import StressStrainState

logger = logging.getLogger(__name__)


class Lamina:
    """A single ply together with the failure criterion selected for it.

    The lamina holds its state in laminate axes, as delivered by a laminate
    stress recovery, and rotates it into fiber axes for the criterion.

    Attributes:
        t: Ply thickness.
        theta_deg: Ply orientation angle in degrees (0 aligns material-1 with x-axis).
        material: Strength profile of the ply material.
        criterion: Failure criterion used for this ply.
        epsilon: Current strain vector in laminate axes (shape (3, 1) or (3,)).
        sigma: Current stress vector in laminate axes (shape (3, 1) or (3,)).
        failure_indicators: Inverse reserve factor keyed by the governing failure mode
            of the last failure analysis.
    """

    def __init__(
        self,
        t: float,
        theta_deg: float,
        material: MaterialStrengthProfile,
        criterion: Criterion,
        sigma: Optional[NDArray[np.float64]] = None,
        epsilon: Optional[NDArray[np.float64]] = None,
    ) -> None:
        self.t: float = t
        self.theta_deg: float = theta_deg
        self.material: MaterialStrengthProfile = material
        self.criterion: Criterion = criterion

        self.epsilon: Optional[NDArray[np.float64]] = epsilon
        self.sigma: Optional[NDArray[np.float64]] = sigma
        self.failure_indicators: dict[str, float] = {}

        self.Qbar: NDArray[np.float64] = transformed_reduced_stiffness(material.elastic, theta_deg)
        self.Sbar: NDArray[np.float64] = np.linalg.inv(self.Qbar)

    # --- Analysis ---------------------------------------------------------
    def stress_analysis(self) -> NDArray[np.float64]:
        """Compute laminate-axis stress vector from current laminate-axis strains.

        Requires self.epsilon to be set (shape (3,) or (3,1)).
        """
        if self.epsilon is None:
            raise ValueError("epsilon (strain state) must be set before stress analysis")
        eps = self.epsilon.reshape(3, 1) if self.epsilon.ndim == 1 else self.epsilon
        self.sigma = self.Qbar @ eps
        return self.sigma

    def local_state(self) -> StressStrainState:
        """Stress and strain in fiber axes; a missing half follows from Qbar/Sbar."""
        if self.sigma is None and self.epsilon is None:
            raise ValueError("sigma or epsilon must be set before failure analysis")
        sigma = self.sigma if self.sigma is not None else self.Qbar @ np.ravel(self.epsilon)
        epsilon = self.epsilon if self.epsilon is not None else self.Sbar @ np.ravel(self.sigma)
        return StressStrainState.from_global(sigma, epsilon, self.theta_deg)

    # --- Failure criteria -------------------------------------------------
    def failure_analysis(self) -> ReserveFactorResult:
        """Evaluate the ply's criterion and update ``failure_indicators``."""
        result = self.criterion.evaluate(self.material, self.local_state())
        if result.failure_mode is FailureMode.NONE:
            self.failure_indicators = {}
        else:
            self.failure_indicators = {result.failure_mode.value: result.failure_indicator}
        return result


def critical_lamina(laminas: Iterable[Lamina]) -> tuple[Lamina, ReserveFactorResult]:
    """Return the ply with the lowest reserve factor and its result.

    Ties keep the first ply in stacking order.
    """
    critical: Optional[tuple[Lamina, ReserveFactorResult]] = None
    for lamina in laminas:
        result = lamina.failure_analysis()
        if critical is None or result.minimal_reserve_factor < critical[1].minimal_reserve_factor:
            critical = (lamina, result)
    if critical is None:
        raise ValueError("critical_lamina needs at least one lamina")
    logger.debug(
        f"Critical ply at {critical[0].theta_deg} deg: {critical[1]}"
    )
    return critical
