from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from plyfailure.errors import MaterialConfigurationError

# Reserve factor substituted when a ratio law has a non-positive denominator,
# i.e. the mechanism cannot be activated by the current stress state.
SENTINEL_RESERVE_FACTOR = 9999.0

FIBER_TENSION = "Fiber failure (tension)"
FIBER_COMPRESSION = "Fiber failure (compression)"
MATRIX_TENSION = "Matrix failure (tension)"
MATRIX_COMPRESSION = "Matrix failure (compression)"
MATRIX = "Matrix failure"


class FailureMode(Enum):
    NONE = "none"
    FIBER_FAILURE = "fiber_failure"
    MATRIX_FAILURE = "matrix_failure"


@dataclass(frozen=True)
class ReserveFactorResult:
    """Outcome of one criterion evaluation.

    Attributes:
        minimal_reserve_factor: Load multiplier to failure over all mechanisms the
            criterion checks; ``math.inf`` when no mechanism governs.
        failure_mode: Governing mode, ``FailureMode.NONE`` without failure.
        failure_name: Label of the governing sub-mechanism, empty for ``NONE``.
    """

    minimal_reserve_factor: float
    failure_mode: FailureMode
    failure_name: str

    @classmethod
    def no_failure(cls) -> ReserveFactorResult:
        return cls(math.inf, FailureMode.NONE, "")

    @classmethod
    def of(cls, reserve_factor: float, mode: FailureMode, name: str) -> ReserveFactorResult:
        """Result for one mechanism; an infinite reserve factor collapses to ``no_failure``."""
        if math.isinf(reserve_factor):
            return cls.no_failure()
        return cls(float(reserve_factor), mode, name)

    @property
    def failure_indicator(self) -> float:
        """Inverse of the reserve factor (1.0 at failure, 0.0 without any failure)."""
        if math.isinf(self.minimal_reserve_factor):
            return 0.0
        if self.minimal_reserve_factor == 0.0:
            return math.inf
        return 1.0 / self.minimal_reserve_factor

    def governing(self, candidate: ReserveFactorResult) -> ReserveFactorResult:
        """Return ``candidate`` if it is strictly more critical than this result."""
        if candidate.minimal_reserve_factor < self.minimal_reserve_factor:
            return candidate
        return self

    def __str__(self) -> str:
        if self.failure_mode is FailureMode.NONE:
            return "RF = inf (no failure)"
        return f"RF = {self.minimal_reserve_factor:.4f} ({self.failure_name})"


@dataclass(frozen=True)
class EvaluationOutcome:
    """Tagged result of ``Criterion.try_evaluate``: either a result or a configuration error."""

    result: Optional[ReserveFactorResult] = None
    error: Optional[MaterialConfigurationError] = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            raise ValueError("EvaluationOutcome needs exactly one of result or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ReserveFactorResult:
        """Return the result or raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.result  # type: ignore[return-value]
