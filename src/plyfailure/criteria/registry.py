from typing import Optional

from plyfailure.criteria.base import Criterion, CriterionParameters
from plyfailure.criteria.chang_chang import ChangChang
from plyfailure.criteria.daimler_camanho import DaimlerCamanho
from plyfailure.criteria.daimler_pinho import DaimlerPinho
from plyfailure.criteria.tsai_wu import TsaiWu

CRITERIA: dict[str, type[Criterion]] = {
    criterion.name: criterion for criterion in (ChangChang, TsaiWu, DaimlerCamanho, DaimlerPinho)
}


def available_criteria() -> list[str]:
    return sorted(CRITERIA)


def get_criterion(name: str, parameters: Optional[CriterionParameters] = None) -> Criterion:
    """Instantiate a registered criterion by name.

    Args:
        name: Registry key, e.g. ``"chang-chang"``.
        parameters: Optional typed parameters; without them the criterion reads
            its constants from the material at evaluation time.

    Raises:
        KeyError: If no criterion is registered under ``name``.
    """
    try:
        criterion_cls = CRITERIA[name]
    except KeyError:
        raise KeyError(
            f"Unknown failure criterion '{name}', choose from {', '.join(available_criteria())}"
        ) from None
    if parameters is not None and not isinstance(parameters, criterion_cls.parameters_type):
        raise TypeError(
            f"{criterion_cls.__name__} expects {criterion_cls.parameters_type.__name__}, "
            f"got {type(parameters).__name__}"
        )
    return criterion_cls(parameters)
