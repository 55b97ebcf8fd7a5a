# src/shell/cli.py
"""Command line entry point: `matrix-calc`.

Subcommands:
- shell   (default) interactive menu session
- compute one operation over matrix files, result printed to stdout
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

import pydantic

from src.core.domain.errors import MatrixError
from src.core.domain.matrix import format_value
from src.core.formats.parser import read_matrix
from src.core.formats.serializer import SaveMode, save_matrix
from src.core.math.matrix_ops import Operation, apply_operation
from src.shell.logging_config import setup_logging
from src.shell.session import MatrixSession
from src.shell.settings import LOG_LEVELS, CalculatorSettings, load_settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MATRIX_ERROR = 1
EXIT_USAGE_ERROR = 2

OPERATION_NAMES = {
    "add": Operation.ADD,
    "subtract": Operation.SUBTRACT,
    "multiply": Operation.MULTIPLY,
    "scale": Operation.SCALAR,
    "det": Operation.DETERMINANT,
}

BINARY_OPERATIONS = (Operation.ADD, Operation.SUBTRACT, Operation.MULTIPLY)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matrix-calc", description="Arithmetic over dense matrices stored in text files"
    )
    parser.add_argument("--config", help="path to a JSON config file")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="logging level")
    parser.add_argument("--log-file", help="append logs to this file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="also write logs to stderr"
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("shell", help="interactive menu session (default)")

    compute = subparsers.add_parser("compute", help="run one operation over matrix files")
    compute.add_argument("operation", choices=list(OPERATION_NAMES), help="operation to perform")
    compute.add_argument("first", help="file with the first matrix")
    compute.add_argument("second", nargs="?", help="file with the second matrix")
    compute.add_argument("--scalar", type=float, help="scalar for the 'scale' operation")
    compute.add_argument("-o", "--output", help="save the result matrix to this file")
    compute.add_argument(
        "--mode",
        choices=[mode.value for mode in SaveMode],
        default=SaveMode.NEW.value,
        help="save into a new file or overwrite an existing one (default: new)",
    )
    return parser


def apply_overrides(settings: CalculatorSettings, args: argparse.Namespace) -> CalculatorSettings:
    """Command line flags take precedence over the config file."""
    update = {}
    if args.log_level:
        update["log_level"] = args.log_level
    if args.log_file:
        update["log_file"] = args.log_file
    if args.verbose:
        update["log_to_console"] = True
    if not update:
        return settings
    # model_copy(update=...) skips validation
    return CalculatorSettings.model_validate({**settings.model_dump(), **update})


def run_compute(args: argparse.Namespace) -> int:
    operation = OPERATION_NAMES[args.operation]

    if operation in BINARY_OPERATIONS and args.second is None:
        print(f"matrix-calc: '{args.operation}' requires a second matrix file", file=sys.stderr)
        return EXIT_USAGE_ERROR
    if operation is Operation.SCALAR and args.scalar is None:
        print("matrix-calc: 'scale' requires --scalar", file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        first = read_matrix(args.first)
        second = read_matrix(args.second) if operation in BINARY_OPERATIONS else None
        result = apply_operation(operation, first, second, scalar=args.scalar)
        logger.info("Performed %s", args.operation)
        if not result.is_finite:
            print("matrix-calc: warning: result contains non-finite values", file=sys.stderr)
            logger.warning("%s produced non-finite values", args.operation)

        if result.matrix is None:
            print(format_value(result.scalar))
            return EXIT_OK

        print(result.matrix.to_text())
        if args.output:
            saved_path = save_matrix(result.matrix, args.output, mode=SaveMode(args.mode))
            logger.info("Result saved to file: %s", saved_path)
    except MatrixError as e:
        print(f"matrix-calc: {e}", file=sys.stderr)
        logger.error("%s failed: %s", args.operation, e)
        return EXIT_MATRIX_ERROR

    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = apply_overrides(load_settings(args.config), args)
        setup_logging(settings.log_level_value, settings.log_file, console=settings.log_to_console)
    except (OSError, json.JSONDecodeError, pydantic.ValidationError) as e:
        print(f"matrix-calc: invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    if args.command == "compute":
        return run_compute(args)
    return MatrixSession(settings).run()


if __name__ == "__main__":
    sys.exit(main())
