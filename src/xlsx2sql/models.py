"""SQL value and statement models produced from workbook contents."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class SqlNull:
    """SQL NULL."""


@dataclass(frozen=True)
class SqlText:
    """A character string literal."""

    value: str


@dataclass(frozen=True)
class SqlNumber:
    """A floating-point numeric literal."""

    value: float


@dataclass(frozen=True)
class SqlInteger:
    """An integer numeric literal."""

    value: int


@dataclass(frozen=True)
class SqlBoolean:
    """A boolean, rendered as 1 or 0."""

    value: bool


@dataclass(frozen=True)
class SqlDateTime:
    """A datetime literal.

    Holds either ``YYYY-MM-DD HH:MM:SS`` decoded from a spreadsheet serial,
    or an ISO 8601 string copied verbatim from the workbook.
    """

    value: str


SqlValue = SqlNull | SqlText | SqlNumber | SqlInteger | SqlBoolean | SqlDateTime

NULL = SqlNull()


@dataclass(frozen=True)
class SqlStatement:
    """One multi-row INSERT for a single table.

    Every row must hold exactly one value per column.
    """

    table_name: str
    columns: tuple[str, ...]
    values: tuple[tuple[SqlValue, ...], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "values", tuple(tuple(row) for row in self.values))
        width = len(self.columns)
        for index, row in enumerate(self.values):
            if len(row) != width:
                raise ValueError(
                    f"Row {index} of table '{self.table_name}' has {len(row)} "
                    f"values, expected {width}"
                )

    @property
    def row_count(self) -> int:
        return len(self.values)


def decimal_text(value: float) -> str:
    """Render a finite float as plain decimal text.

    Integral values drop the fractional part (``3.0`` -> ``"3"``) and no
    exponent notation is produced (``1e20`` -> ``"100000000000000000000"``).
    Non-finite values fall back to ``repr``.
    """
    if not math.isfinite(value):
        return repr(value)
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")
