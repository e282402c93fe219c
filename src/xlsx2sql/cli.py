"""
Command-line interface for xlsx2sql.

Usage:
  xlsx2sql [FILE] [-f FILE] [-o OUTPUT] [--best-effort] [--log-level LEVEL]

When no file is given, workbooks in the current directory are listed and
one is chosen interactively. Output defaults to the input path with a .sql
suffix; pass ``-o -`` to print the SQL to stdout.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from xlsx2sql import __version__
from xlsx2sql.config import Settings
from xlsx2sql.config import settings as app_settings
from xlsx2sql.output.writer import OutputDestination, OutputWriter
from xlsx2sql.services.converter import ConversionService, default_output_path
from xlsx2sql.services.file_validator import find_workbooks
from xlsx2sql.services.statement_builder import StatementBuilder
from xlsx2sql.utils.exceptions import (
    InputSelectionError,
    NoInputFilesError,
    Xlsx2SqlError,
)
from xlsx2sql.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xlsx2sql",
        description="Convert xlsx files to SQL INSERT statements",
    )
    parser.add_argument("file", nargs="?", metavar="FILE", help="Input XLSX file path")
    parser.add_argument(
        "-f",
        "--file",
        dest="file_option",
        metavar="FILE",
        help="Input XLSX file path (alternative to positional argument)",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        help="Output SQL file path, or - for stdout "
        "(default: input filename with .sql extension)",
    )
    parser.add_argument(
        "--best-effort",
        action="store_true",
        help="Skip sheets with no rows or blank headers instead of failing",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: from XLSX2SQL_LOG_LEVEL)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def select_input_file(
    directory: Path,
    extensions: Sequence[str],
    prompt: Callable[[str], str] = input,
) -> Path:
    """Pick a workbook from ``directory``.

    A single candidate is returned directly; several are offered as a
    numbered menu on stderr.

    Raises:
        NoInputFilesError: If the directory holds no workbooks.
        InputSelectionError: If the choice is invalid or input ends.
    """
    candidates = find_workbooks(directory, extensions)
    if not candidates:
        raise NoInputFilesError(str(directory))

    if len(candidates) == 1:
        print(f"Found Excel file: {candidates[0]}", file=sys.stderr)
        return candidates[0]

    print("Select an Excel file to convert:", file=sys.stderr)
    for index, candidate in enumerate(candidates, start=1):
        print(f"  {index}) {candidate.name}", file=sys.stderr)

    try:
        answer = prompt(f"Enter a number [1-{len(candidates)}]: ").strip()
    except (EOFError, KeyboardInterrupt) as e:
        raise InputSelectionError("No file selected") from e

    if not answer.isdigit() or not 1 <= int(answer) <= len(candidates):
        raise InputSelectionError(
            f"Invalid selection: {answer!r}",
            details={"choices": len(candidates)},
        )
    return candidates[int(answer) - 1]


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute a conversion from parsed arguments; returns the exit code."""
    input_path = args.file or args.file_option
    if input_path is None:
        path = select_input_file(Path.cwd(), settings.supported_extensions_list)
    else:
        path = Path(input_path)

    if args.output is not None:
        destination = OutputDestination.parse(args.output)
    else:
        destination = OutputDestination.file(
            default_output_path(path, settings.output_suffix)
        )

    service = ConversionService(
        builder=StatementBuilder(atomic=settings.atomic and not args.best_effort),
        writer=OutputWriter(encoding=settings.output_encoding),
        extensions=settings.supported_extensions_list,
    )
    result = service.convert_to(path, destination)

    for skipped in result.skipped_sheets:
        print(f"Skipped sheet '{skipped.name}': {skipped.error}", file=sys.stderr)
    if not destination.is_stdout:
        print(
            f"Wrote {len(result.statements)} statement(s), "
            f"{result.row_count} row(s) to {destination}",
            file=sys.stderr,
        )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = app_settings
    configure_logging(args.log_level or settings.log_level)
    logger.debug("Settings loaded", **settings.to_safe_dict())

    try:
        return run(args, settings)
    except Xlsx2SqlError as e:
        if settings.debug:
            logger.exception(
                "Conversion failed", error_code=e.error_code.value, details=e.details
            )
        print(f"Error: {e}", file=sys.stderr)
        return e.get_exit_code()


if __name__ == "__main__":
    sys.exit(main())
