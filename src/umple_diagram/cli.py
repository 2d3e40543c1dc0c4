"""umple-diagram — render an Umple model to an SVG diagram.

Usage:
    # Folder mode (organized output with all files)
    umple-diagram --input model.ump --output ./diagrams --name "light-controller"

    # Exact path mode (single SVG file only)
    umple-diagram --input model.ump --output ./my-diagram.svg

Exit 0 on success; 1 missing dependencies or flags; 2 umple validation or
compilation failed; 3 SVG generation failed or unsupported diagram type.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from umple_diagram import __version__
from umple_diagram.pipeline.diagram_types import DEFAULT_DIAGRAM_TYPE, SUPPORTED_DIAGRAM_TYPES
from umple_diagram.pipeline.errors import (
    EXIT_MISSING_DEPS,
    EXIT_SUCCESS,
    DiagramError,
    ValidationFailedError,
)
from umple_diagram.pipeline.generator import DiagramGenerator, InvocationRequest
from umple_diagram.utils.config import ConfigError, ConfigLoader, ToolchainConfig
from umple_diagram.utils.logging import get_logger, set_log_level

logger = get_logger(__name__)

_EPILOG = f"""\
Modes:
  Folder mode: When --name is specified or --output is not a .svg path
               Creates organized folder with .ump, .gv, and .svg files
  Exact path:  When --output ends with .svg and no --name is given
               Saves only the SVG to the exact specified path

Suboptions (state-machine only):
  hideactions, hideguards, showtransitionlabels, showguardlabels

Exit Codes:
  0  Success
  1  Missing dependencies (umple or dot) or required flags
  2  Umple validation/compilation failed
  3  SVG generation failed or unsupported diagram type

Supported diagram types: {", ".join(SUPPORTED_DIAGRAM_TYPES)}
"""


class UsageError(Exception):
    """Raised instead of argparse's print-and-exit on bad arguments."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="umple-diagram",
        description="Generate an SVG diagram from an Umple model using umple and Graphviz.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("positional_input", nargs="?", metavar="INPUT",
                        help="Input .ump file (used when --input is absent)")
    parser.add_argument("-i", "--input", dest="input_path", help="Input .ump file (required)")
    parser.add_argument(
        "-o", "--output", dest="output_path",
        help="Output path: directory for folder mode, or .svg file for exact path mode (required)",
    )
    parser.add_argument(
        "-n", "--name", dest="output_name",
        help="Diagram name for folder mode (optional, triggers folder mode)",
    )
    parser.add_argument(
        "-t", "--type", dest="diagram_type", default=DEFAULT_DIAGRAM_TYPE,
        help=f"Diagram type: {DEFAULT_DIAGRAM_TYPE} (default), class-diagram",
    )
    parser.add_argument(
        "-s", "--suboption", dest="suboptions", action="append", default=[],
        metavar="OPT", help="Diagram generator suboption (repeatable)",
    )
    parser.add_argument("--json", dest="json_output", action="store_true", help="JSON output")
    parser.add_argument("-c", "--config", dest="config_path",
                        help="YAML toolchain config (default: configs/toolchain.yaml)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Emit debug-level JSON logs on stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-h", "--help", action="store_true", help="Show help")
    return parser


_VALUE_FLAGS = (
    ("input_path", "--input"),
    ("output_path", "--output"),
    ("output_name", "--name"),
    ("diagram_type", "--type"),
    ("config_path", "--config"),
)


def _empty_option(args: argparse.Namespace) -> str | None:
    """Flag given with an empty value, e.g. ``-n ""``."""
    for dest, flag in _VALUE_FLAGS:
        if getattr(args, dest) == "":
            return flag
    if any(opt == "" for opt in args.suboptions):
        return "--suboption"
    return None


def build_generator(config: ToolchainConfig) -> DiagramGenerator:
    return DiagramGenerator.from_config(config)


def _fail(message: str, code: int) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return code


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        parser.print_help(sys.stderr)
        return EXIT_MISSING_DEPS

    if args.help:
        parser.print_help(sys.stdout)
        return EXIT_SUCCESS

    if args.verbose:
        set_log_level(logging.DEBUG)

    empty_flag = _empty_option(args)
    if empty_flag is not None:
        print(f"Error: Missing value for {empty_flag}", file=sys.stderr)
        parser.print_help(sys.stderr)
        return EXIT_MISSING_DEPS

    input_path = args.input_path or args.positional_input
    if not input_path or not args.output_path:
        print("Error: --input and --output are required", file=sys.stderr)
        parser.print_help(sys.stderr)
        return EXIT_MISSING_DEPS

    try:
        config = ConfigLoader().load_toolchain_config(args.config_path)
    except ConfigError as exc:
        return _fail(str(exc), EXIT_MISSING_DEPS)

    request = InvocationRequest.build(
        input_path=input_path,
        output_path=args.output_path,
        diagram_type=args.diagram_type,
        suboptions=args.suboptions,
        output_name=args.output_name,
        json_output=args.json_output,
    )

    try:
        report = build_generator(config).run(request)
    except ValidationFailedError as exc:
        if exc.output is not None:
            print(str(exc), file=sys.stderr)
            print(exc.output, file=sys.stderr)
            return exc.exit_code
        return _fail(str(exc), exc.exit_code)
    except DiagramError as exc:
        return _fail(str(exc), exc.exit_code)

    logger.debug("Generation complete", mode=report.mode.value, image=report.files.image)
    print(report.to_json() if request.json_output else report.to_text())
    return EXIT_SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
