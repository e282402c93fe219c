"""Dataclasses representing a decoded workbook and its raw cell values."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from xlsx2sql.models import decimal_text
from xlsx2sql.utils.exceptions import EmptySheetError, MissingHeadersError


@dataclass(frozen=True)
class EmptyCell:
    """A cell with no value."""

    def __str__(self) -> str:
        return ""


@dataclass(frozen=True)
class TextCell:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FloatCell:
    value: float

    def __str__(self) -> str:
        return decimal_text(self.value)


@dataclass(frozen=True)
class IntCell:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BoolCell:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class DateTimeCell:
    """A date, time or datetime stored as a spreadsheet serial.

    The serial counts days since 1899-12-30; the fraction is the time of day.
    """

    serial: float

    def __str__(self) -> str:
        return decimal_text(self.serial)


@dataclass(frozen=True)
class DateTimeIsoCell:
    """A datetime already stored as an ISO 8601 string."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DurationIsoCell:
    """A duration stored as an ISO 8601 string such as ``PT1H30M``."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ErrorCell:
    """A formula error marker such as ``#DIV/0!``."""

    code: str

    def __str__(self) -> str:
        return self.code


RawCell = (
    EmptyCell
    | TextCell
    | FloatCell
    | IntCell
    | BoolCell
    | DateTimeCell
    | DateTimeIsoCell
    | DurationIsoCell
    | ErrorCell
)

EMPTY = EmptyCell()


@dataclass(frozen=True)
class SheetData:
    """A single named worksheet: a rectangular grid of raw cells.

    The first row is taken as the header row; every later row is data.
    """

    name: str
    grid: tuple[tuple[RawCell, ...], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "grid", tuple(tuple(row) for row in self.grid))

    @classmethod
    def from_rows(cls, name: str, rows: Sequence[Sequence[RawCell]]) -> SheetData:
        return cls(name=name, grid=tuple(tuple(row) for row in rows))

    @property
    def row_count(self) -> int:
        return len(self.grid)

    @property
    def column_count(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def get_columns(self) -> list[str]:
        """Derive column names from the first row.

        Raises:
            EmptySheetError: If the grid has no rows.
            MissingHeadersError: If every header is blank.
        """
        if not self.grid:
            raise EmptySheetError(sheet_name=self.name)

        columns: list[str] = []
        for cell in self.grid[0]:
            match cell:
                case TextCell(value=value):
                    columns.append(value)
                case EmptyCell():
                    columns.append("")
                case _:
                    columns.append(str(cell))

        if all(not column.strip() for column in columns):
            raise MissingHeadersError(sheet_name=self.name)

        return columns

    def get_data_rows(self) -> Iterator[tuple[RawCell, ...]]:
        """Iterate every row after the header row.

        Each call returns a fresh iterator, so the rows can be walked again.
        """
        return iter(self.grid[1:])


@dataclass(frozen=True)
class WorkbookData:
    """An ordered collection of sheets decoded from one workbook file."""

    sheets: tuple[SheetData, ...] = field(default_factory=tuple)
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "sheets", tuple(self.sheets))

    @property
    def sheet_names(self) -> list[str]:
        return [sheet.name for sheet in self.sheets]
