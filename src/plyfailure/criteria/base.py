from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import MISSING, dataclass, fields
from typing import Any, ClassVar, Generic, Optional, TypeVar

from plyfailure.data_utils import MaterialStrengthProfile
from plyfailure.errors import MaterialConfigurationError
from plyfailure.result import EvaluationOutcome, ReserveFactorResult
from plyfailure.state import StressStrainState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CriterionParameters:
    """Typed, validated constants of one failure criterion.

    Subclasses set ``prefix``; a field is looked up in a material's additional
    values under ``"<prefix>.<key>"`` where ``key`` defaults to the field name
    and may be overridden through ``field(metadata={"key": ...})``.
    """

    prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value):
                raise MaterialConfigurationError(
                    f"{type(self).__name__}.{f.name} must be finite, got {value}"
                )

    @classmethod
    def key(cls, field_name: str) -> str:
        for f in fields(cls):
            if f.name == field_name:
                return f"{cls.prefix}.{f.metadata.get('key', f.name)}"
        raise AttributeError(f"{cls.__name__} has no parameter '{field_name}'")

    @classmethod
    def from_profile(cls, profile: MaterialStrengthProfile) -> Any:
        """Read the parameters from a material's additional values.

        Fields without a default must be present; fields with a default fall
        back to it.

        Raises:
            MissingParameterError: If a required value is not defined.
        """
        values = {}
        for f in fields(cls):
            key = cls.key(f.name)
            if key in profile.additional_values or f.default is MISSING:
                values[f.name] = profile.additional_value(key)
        return cls(**values)


P = TypeVar("P", bound=CriterionParameters)


class Criterion(ABC, Generic[P]):
    """Ply failure criterion.

    ``evaluate`` is a pure function of the material and the stress/strain
    state; instances only hold immutable parameters and can be shared freely.

    Subclasses must define:
    - ``name``: registry key
    - ``parameters_type``: the ``CriterionParameters`` subclass they consume
    - ``_evaluate``: the criterion itself, called for loaded states only
    """

    name: ClassVar[str]
    display_name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    parameters_type: ClassVar[type[CriterionParameters]]
    # Strengths and moduli the criterion divides by, as attribute names on
    # StrengthProperties / ElasticProperties.
    required_strengths: ClassVar[tuple[str, ...]] = ()
    required_elastic: ClassVar[tuple[str, ...]] = ()

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        for attribute in ("name", "parameters_type"):
            if attribute not in cls.__dict__:
                raise TypeError(f"Criterion subclass {cls.__name__} must define `{attribute}`")

    def __init__(self, parameters: Optional[P] = None) -> None:
        self.parameters: Optional[P] = parameters

    def __repr__(self) -> str:
        return f"{type(self).__name__}(parameters={self.parameters!r})"

    def resolve_parameters(self, profile: MaterialStrengthProfile) -> P:
        """Parameters given at construction, otherwise those stored on the material."""
        if self.parameters is not None:
            return self.parameters
        return self.parameters_type.from_profile(profile)  # type: ignore[return-value]

    def check_material(self, profile: MaterialStrengthProfile) -> None:
        """Reject zero values of every strength or modulus the criterion divides by."""
        for attr in self.required_strengths:
            if getattr(profile.strength, attr) == 0.0:
                raise MaterialConfigurationError(
                    f"{self.display_name}: strength {attr} of material '{profile.name}' is zero"
                )
        for attr in self.required_elastic:
            if getattr(profile.elastic, attr) == 0.0:
                raise MaterialConfigurationError(
                    f"{self.display_name}: elastic property {attr} of material "
                    f"'{profile.name}' is zero"
                )

    def evaluate(
        self, profile: MaterialStrengthProfile, state: StressStrainState
    ) -> ReserveFactorResult:
        """Reserve factor and governing failure mechanism of one ply.

        Args:
            profile: Material strengths, stiffnesses and criterion constants.
            state: Ply stress and strain in fiber axes.

        Returns:
            A fresh ``ReserveFactorResult``; ``no_failure()`` for an unloaded ply.

        Raises:
            MaterialConfigurationError: If the material data is inconsistent or
                a required criterion constant is missing.
        """
        if state.is_unloaded:
            return ReserveFactorResult.no_failure()

        try:
            self.check_material(profile)
            parameters = self.resolve_parameters(profile)
            result = self._evaluate(profile, state, parameters)
        except MaterialConfigurationError as e:
            logger.error(f"{self.display_name} failed for material '{profile.name}': {e}")
            raise

        logger.debug(f"{self.display_name} stress={state.stress}: {result}")
        return result

    def try_evaluate(
        self, profile: MaterialStrengthProfile, state: StressStrainState
    ) -> EvaluationOutcome:
        """Like ``evaluate`` but returns configuration errors instead of raising them."""
        try:
            return EvaluationOutcome(result=self.evaluate(profile, state))
        except MaterialConfigurationError as e:
            return EvaluationOutcome(error=e)

    @abstractmethod
    def _evaluate(
        self, profile: MaterialStrengthProfile, state: StressStrainState, parameters: P
    ) -> ReserveFactorResult:
        raise NotImplementedError("Subclasses must implement `_evaluate`")
