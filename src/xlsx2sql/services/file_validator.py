"""Pre-flight checks and discovery for input workbooks.

Only the file extension is inspected; decoding problems surface later as
WorkbookReadError from the reader.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from xlsx2sql.utils.exceptions import InputFileNotFoundError, UnsupportedFormatError
from xlsx2sql.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("xlsx", "xlsm", "xls")


def _normalize(extensions: Iterable[str]) -> set[str]:
    return {ext.lstrip(".").lower() for ext in extensions}


def validate_file_exists(path: Path) -> None:
    """Raise InputFileNotFoundError unless ``path`` is an existing file."""
    if not path.is_file():
        raise InputFileNotFoundError(str(path))


def validate_file_format(
    path: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS
) -> None:
    """Raise UnsupportedFormatError unless ``path`` has an accepted extension."""
    allowed = _normalize(extensions)
    extension = path.suffix.lstrip(".").lower()
    if not extension or extension not in allowed:
        raise UnsupportedFormatError(
            f"Unsupported file format: {path.name or path} "
            f"(expected one of: {', '.join(sorted(allowed))})",
            extension=extension or None,
            file_path=str(path),
        )


def validate_input(path: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> None:
    validate_file_exists(path)
    validate_file_format(path, extensions)
    logger.debug("Input validated", path=str(path))


def find_workbooks(
    directory: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS
) -> list[Path]:
    """List workbook files directly inside ``directory``, sorted by name.

    Office lock files (``~$name.xlsx``) are ignored.
    """
    allowed = _normalize(extensions)
    found = sorted(
        entry
        for entry in directory.iterdir()
        if entry.is_file()
        and entry.suffix.lstrip(".").lower() in allowed
        and not entry.name.startswith("~$")
    )
    logger.debug("Workbooks discovered", directory=str(directory), count=len(found))
    return found
