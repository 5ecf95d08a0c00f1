#!/usr/bin/env python3

import argparse
import logging
import sys
from pathlib import Path

import colorama

import mzinspect
from mzinspect.analysis import ReportWriter, analyze_mz_executable
from mzinspect.formats import (
    MZError,
    MZSignatureMismatchError,
    is_mz_executable,
    open_executable,
)
from mzinspect.project.config import load_config
from mzinspect.project.error import MZInspectConfigException
from mzinspect.project.logging import argparse_add_logging_args, argparse_parse_logging

logger = logging.getLogger(__name__)

colorama.just_fix_windows_console()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        allow_abbrev=False,
        description="Print the MZ header, relocation table and DOS interrupt calls of a DOS executable.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {mzinspect.VERSION}"
    )
    parser.add_argument(
        "paths", metavar="<executable_file>", type=Path, nargs="*", help="DOS .EXE"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        metavar="<file>",
        help="Read settings from this YAML file",
    )
    parser.add_argument(
        "--no-color", "-n", action="store_true", help="Do not color the output"
    )
    argparse_add_logging_args(parser)

    args = parser.parse_args(argv)

    # argparse would exit with code 2 for a missing positional argument.
    if not args.paths:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: missing <executable_file>", file=sys.stderr)
        raise SystemExit(1)

    return args


def inspect_file(filepath: Path, writer: ReportWriter, code_window: int) -> bool:
    """Analyze one file. Returns False if the analysis failed."""
    try:
        with open_executable(filepath) as f:
            if not is_mz_executable(f):
                writer.line("This file does not appear to be a valid MZ executable.")
                return False

            analyze_mz_executable(f, writer, code_window=code_window)
    except MZSignatureMismatchError as e:
        writer.line(str(e))
        return False
    except MZError as e:
        logger.error("%s: %s", filepath, e)
        return False

    return True


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    argparse_parse_logging(args)

    try:
        config = load_config(args.config)
    except MZInspectConfigException as e:
        logger.error("%s", e.args[0])
        return 1

    # Keep reports saved to a file free of ANSI codes.
    plain = args.no_color or not sys.stdout.isatty()
    writer = ReportWriter(sys.stdout, plain=plain)
    show_names = len(args.paths) > 1
    failed = False

    for filepath in args.paths:
        if show_names:
            writer.line(f"{filepath}:")

        if not inspect_file(filepath, writer, config.code_window):
            failed = True

    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
