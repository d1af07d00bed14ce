"""Command-line interface for the plyfailure package.

Evaluates a single ply stress state with one of the registered failure
criteria against a material preset.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from .criteria.registry import CRITERIA, available_criteria, get_criterion
from .data.materials import DEFAULT_MATERIAL, MATERIALS
from .errors import MaterialConfigurationError
from .logging_config import setup_logging
from .state import StressStrainState


def _parse_param(text: str) -> tuple[str, float]:
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{text}'")
    try:
        return key.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"value of '{key}' is not a number: '{value}'") from None


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI.

    Returns:
        An argparse.ArgumentParser configured for the CLI.
    """
    parser = argparse.ArgumentParser(prog="plyfailure", description="Ply failure criteria CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List the available failure criteria")

    evaluate = subparsers.add_parser("evaluate", help="Evaluate one ply stress state")
    evaluate.add_argument(
        "--criterion", required=True, choices=available_criteria(), help="Criterion name"
    )
    evaluate.add_argument(
        "--material",
        default=DEFAULT_MATERIAL.name,
        choices=sorted(MATERIALS),
        help=f"Material preset (default: {DEFAULT_MATERIAL.name})",
    )
    evaluate.add_argument(
        "--stress",
        nargs=3,
        type=float,
        required=True,
        metavar=("S1", "S2", "T12"),
        help="Ply stresses in fiber axes",
    )
    evaluate.add_argument(
        "--strain",
        nargs=3,
        type=float,
        metavar=("E1", "E2", "G12"),
        help="Ply strains; derived from the stresses when omitted",
    )
    evaluate.add_argument(
        "--param",
        action="append",
        type=_parse_param,
        default=[],
        metavar="KEY=VALUE",
        help="Add or override an additional value, e.g. daimler_pinho.alpha0=53",
    )
    evaluate.add_argument("--verbose", action="store_true", help="Enable debug logging")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entrypoint for the CLI.

    Args:
        argv: Optional iterable of arguments, defaults to sys.argv if None.

    Returns:
        Process exit code (0 on success, 2 on a material configuration error).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "list":
        for name in available_criteria():
            print(f"{name:<16} {CRITERIA[name].display_name}")
        return 0

    if args.command == "evaluate":
        setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
        material = MATERIALS[args.material]
        if args.param:
            material = material.with_additional_values(dict(args.param))
        try:
            if args.strain is None:
                state = StressStrainState.from_stress(args.stress, material.elastic)
            else:
                state = StressStrainState(args.stress, args.strain)
            result = get_criterion(args.criterion).evaluate(material, state)
        except MaterialConfigurationError as e:
            print(f"error: {e}")
            return 2

        print(f"criterion:      {CRITERIA[args.criterion].display_name}")
        print(f"material:       {material.name}")
        print(f"reserve factor: {result.minimal_reserve_factor:.6g}")
        print(f"failure mode:   {result.failure_mode.value}")
        print(f"failure name:   {result.failure_name or '-'}")
        return 0

    parser.print_help()
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
