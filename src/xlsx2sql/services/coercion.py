"""Coercion of raw spreadsheet cells into SQL values.

Every raw cell kind maps to exactly one SQL value kind. Coercion never
fails: error markers become NULL, and a date serial that cannot be
decoded is kept as a plain number.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import assert_never

from xlsx2sql.models import (
    NULL,
    SqlBoolean,
    SqlDateTime,
    SqlInteger,
    SqlNumber,
    SqlText,
    SqlValue,
)
from xlsx2sql.workbook import (
    BoolCell,
    DateTimeCell,
    DateTimeIsoCell,
    DurationIsoCell,
    EmptyCell,
    ErrorCell,
    FloatCell,
    IntCell,
    RawCell,
    TextCell,
)

# Day zero of spreadsheet serial dates. Using 1899-12-30 rather than
# 1900-01-01 absorbs the phantom 1900-02-29 for every date after it.
SPREADSHEET_EPOCH = datetime(1899, 12, 30)

SECONDS_PER_DAY = 86400


def excel_serial_to_datetime(serial: float) -> datetime:
    """Decode a spreadsheet serial into a naive datetime.

    The integer part counts days from the epoch and the fraction is the
    time of day, rounded to the nearest second.

    Raises:
        ValueError: If the serial is NaN or infinite.
        OverflowError: If the result falls outside the datetime range.
    """
    if not math.isfinite(serial):
        raise ValueError(f"Cannot decode non-finite date serial: {serial}")

    days = math.floor(serial)
    seconds = round((serial - days) * SECONDS_PER_DAY)
    return SPREADSHEET_EPOCH + timedelta(days=days, seconds=seconds)


def coerce(cell: RawCell) -> SqlValue:
    """Map one raw cell to its SQL value."""
    match cell:
        case EmptyCell():
            return NULL
        case TextCell(value=value):
            return SqlText(value)
        case FloatCell(value=value):
            return SqlNumber(value)
        case IntCell(value=value):
            return SqlInteger(value)
        case BoolCell(value=value):
            return SqlBoolean(value)
        case ErrorCell():
            return NULL
        case DateTimeIsoCell(value=value):
            return SqlDateTime(value)
        case DurationIsoCell(value=value):
            return SqlText(value)
        case DateTimeCell(serial=serial):
            try:
                decoded = excel_serial_to_datetime(serial)
            except (OverflowError, ValueError):
                return SqlNumber(serial)
            return SqlDateTime(decoded.isoformat(sep=" "))
        case _:
            assert_never(cell)


def coerce_row(row: tuple[RawCell, ...]) -> tuple[SqlValue, ...]:
    return tuple(coerce(cell) for cell in row)
