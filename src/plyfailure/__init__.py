"""Top-level package for plyfailure.

Reserve-factor evaluation of unidirectional composite plies with the
Chang-Chang, Tsai-Wu, Daimler-Camanho and Daimler-Pinho failure criteria.
"""


# Public API re-exports
# Set global numpy print options for nicer matrix printing across the project
import numpy as np

from .criteria.chang_chang import ChangChang, ChangChangParameters
from .criteria.daimler_camanho import DaimlerCamanho, DaimlerCamanhoParameters
from .criteria.daimler_pinho import DaimlerPinho, DaimlerPinhoParameters
from .criteria.registry import available_criteria, get_criterion
from .criteria.tsai_wu import TsaiWu, TsaiWuParameters
from .data_utils import ElasticProperties, MaterialStrengthProfile, StrengthProperties
from .errors import FailureCriterionError, MaterialConfigurationError, MissingParameterError
from .lamina import Lamina, critical_lamina
from .result import EvaluationOutcome, FailureMode, ReserveFactorResult
from .state import StressStrainState

np.set_printoptions(precision=3, suppress=True, linewidth=120)

__all__ = [
    "ChangChang",
    "ChangChangParameters",
    "DaimlerCamanho",
    "DaimlerCamanhoParameters",
    "DaimlerPinho",
    "DaimlerPinhoParameters",
    "ElasticProperties",
    "EvaluationOutcome",
    "FailureCriterionError",
    "FailureMode",
    "Lamina",
    "MaterialConfigurationError",
    "MaterialStrengthProfile",
    "MissingParameterError",
    "ReserveFactorResult",
    "StrengthProperties",
    "StressStrainState",
    "TsaiWu",
    "TsaiWuParameters",
    "available_criteria",
    "critical_lamina",
    "get_criterion",
]
