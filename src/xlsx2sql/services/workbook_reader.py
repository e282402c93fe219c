"""Native Excel workbook reader producing raw cell grids.

OOXML workbooks (``.xlsx``, ``.xlsm``) are decoded with openpyxl and legacy
BIFF workbooks (``.xls``) with xlrd. Both paths produce the same RawCell
grids, trimmed to the used range.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Any

import xlrd
from openpyxl import load_workbook
from openpyxl.cell import Cell
from openpyxl.utils.datetime import to_excel
from openpyxl.worksheet.worksheet import Worksheet
from xlrd.biffh import error_text_from_code

from xlsx2sql.utils.exceptions import InputFileNotFoundError, WorkbookReadError
from xlsx2sql.utils.logging import ProgressTracker, get_logger
from xlsx2sql.workbook import (
    EMPTY,
    BoolCell,
    DateTimeCell,
    DurationIsoCell,
    ErrorCell,
    FloatCell,
    IntCell,
    RawCell,
    SheetData,
    TextCell,
    WorkbookData,
)

logger = get_logger(__name__)

XLS_SUFFIX = ".xls"

# Days between the 1899-12-30 and 1904-01-01 date epochs.
MAC_EPOCH_OFFSET = 1462


@dataclass
class WorkbookReadOptions:
    """Options controlling workbook reading."""

    sheet_names: list[str] | None = None
    max_rows: int | None = None
    max_columns: int | None = None


class WorkbookReader:
    """Decode Excel workbooks into SheetData grids.

    Cached formula results are read, never the formulas themselves.
    """

    def read(
        self, file_path: Path, options: WorkbookReadOptions | None = None
    ) -> WorkbookData:
        """Read every worksheet of a workbook, in workbook order.

        Sheets that cannot be turned into a cell grid, such as chartsheets,
        are skipped.

        Raises:
            InputFileNotFoundError: If the file does not exist.
            WorkbookReadError: If the file cannot be opened, or a selected
                sheet does not exist.
        """
        if not file_path.exists():
            raise InputFileNotFoundError(str(file_path))

        opts = options or WorkbookReadOptions()
        if self._is_xls(file_path):
            sheets = self._read_xls(file_path, opts)
        else:
            sheets = self._read_xlsx(file_path, opts)
        return WorkbookData(sheets=sheets, source=str(file_path))

    def get_sheet_names(self, file_path: Path) -> list[str]:
        """List all sheet names in a workbook."""
        if not file_path.exists():
            raise InputFileNotFoundError(str(file_path))

        if self._is_xls(file_path):
            book = self._open_xls(file_path)
            try:
                return list(book.sheet_names())
            finally:
                book.release_resources()

        workbook = self._open_xlsx(file_path, read_only=True)
        try:
            return list(workbook.sheetnames)
        finally:
            workbook.close()

    # ------------------------------------------------------------------ #
    # OOXML (openpyxl)
    # ------------------------------------------------------------------ #

    def _read_xlsx(self, file_path: Path, opts: WorkbookReadOptions) -> list[SheetData]:
        workbook = self._open_xlsx(file_path)
        try:
            names = self._select_sheets(file_path, workbook.sheetnames, opts)
            tracker = ProgressTracker(logger, "Reading sheets", total=len(names))
            sheets: list[SheetData] = []
            for name in names:
                sheet = workbook[name]
                if not isinstance(sheet, Worksheet):
                    logger.warning(
                        "Skipping sheet without a cell grid",
                        sheet=name,
                        sheet_type=type(sheet).__name__,
                    )
                else:
                    try:
                        rows = [
                            [self._build_cell(cell) for cell in row]
                            for row in sheet.iter_rows(
                                max_row=opts.max_rows, max_col=opts.max_columns
                            )
                        ]
                        sheets.append(self._make_sheet(name, rows))
                    except Exception as e:
                        logger.warning(
                            "Skipping unreadable sheet", sheet=name, error=str(e)
                        )
                tracker.update(details=name)
            tracker.complete()
        finally:
            workbook.close()
        return sheets

    @staticmethod
    def _open_xlsx(file_path: Path, read_only: bool = False) -> Any:
        try:
            return load_workbook(filename=file_path, data_only=True, read_only=read_only)
        except Exception as e:
            raise WorkbookReadError(str(file_path), str(e)) from e

    @staticmethod
    def _build_cell(cell: Cell) -> RawCell:
        """Map an openpyxl cell value to its raw cell kind."""
        value = cell.value
        if value is None:
            return EMPTY
        if cell.data_type == "e":
            return ErrorCell(str(value))
        if isinstance(value, bool):
            return BoolCell(value)
        if isinstance(value, int):
            return IntCell(value)
        if isinstance(value, float):
            return FloatCell(value)
        if isinstance(value, timedelta):
            return DurationIsoCell(timedelta_to_iso(value))
        if isinstance(value, (datetime, date, time)):
            serial = to_excel(value)
            if serial is None or not math.isfinite(serial):
                return EMPTY
            return DateTimeCell(float(serial))
        return TextCell(str(value))

    # ------------------------------------------------------------------ #
    # Legacy BIFF (xlrd)
    # ------------------------------------------------------------------ #

    def _read_xls(self, file_path: Path, opts: WorkbookReadOptions) -> list[SheetData]:
        book = self._open_xls(file_path)
        try:
            names = self._select_sheets(file_path, book.sheet_names(), opts)
            tracker = ProgressTracker(logger, "Reading sheets", total=len(names))
            sheets: list[SheetData] = []
            for name in names:
                try:
                    sheet = book.sheet_by_name(name)
                    nrows = _limit(sheet.nrows, opts.max_rows)
                    ncols = _limit(sheet.ncols, opts.max_columns)
                    rows = [
                        [
                            self._build_xls_cell(sheet.cell(r, c), book.datemode)
                            for c in range(ncols)
                        ]
                        for r in range(nrows)
                    ]
                    sheets.append(self._make_sheet(name, rows))
                except Exception as e:
                    logger.warning("Skipping unreadable sheet", sheet=name, error=str(e))
                tracker.update(details=name)
            tracker.complete()
        finally:
            book.release_resources()
        return sheets

    @staticmethod
    def _open_xls(file_path: Path) -> Any:
        try:
            return xlrd.open_workbook(filename=str(file_path), on_demand=True)
        except Exception as e:
            raise WorkbookReadError(str(file_path), str(e)) from e

    @staticmethod
    def _build_xls_cell(cell: Any, datemode: int) -> RawCell:
        """Map an xlrd cell to its raw cell kind.

        Date serials are rebased onto the 1899-12-30 epoch for 1904-mode
        workbooks.
        """
        ctype, value = cell.ctype, cell.value
        if ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
            return EMPTY
        if ctype == xlrd.XL_CELL_TEXT:
            return TextCell(value)
        if ctype == xlrd.XL_CELL_NUMBER:
            return FloatCell(float(value))
        if ctype == xlrd.XL_CELL_DATE:
            serial = float(value)
            if datemode == 1:
                serial += MAC_EPOCH_OFFSET
            return DateTimeCell(serial)
        if ctype == xlrd.XL_CELL_BOOLEAN:
            return BoolCell(bool(value))
        if ctype == xlrd.XL_CELL_ERROR:
            return ErrorCell(error_text_from_code.get(value, f"#ERR{value}"))
        return TextCell(str(value))

    # ------------------------------------------------------------------ #
    # Shared helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _is_xls(file_path: Path) -> bool:
        return file_path.suffix.lower() == XLS_SUFFIX

    @staticmethod
    def _select_sheets(
        file_path: Path, available: Iterable[str], opts: WorkbookReadOptions
    ) -> list[str]:
        names = list(available)
        if opts.sheet_names is None:
            return names
        missing = [n for n in opts.sheet_names if n not in names]
        if missing:
            raise WorkbookReadError(
                str(file_path), f"sheet(s) not found: {', '.join(missing)}"
            )
        return [n for n in names if n in opts.sheet_names]

    def _make_sheet(self, name: str, rows: list[list[RawCell]]) -> SheetData:
        grid = self._trim(rows)
        logger.debug(
            "Sheet read",
            sheet=name,
            rows=len(grid),
            columns=len(grid[0]) if grid else 0,
        )
        return SheetData.from_rows(name, grid)

    @staticmethod
    def _trim(rows: list[list[RawCell]]) -> list[list[RawCell]]:
        """Cut leading and trailing blank rows and columns, padding ragged rows."""
        width = max((len(row) for row in rows), default=0)
        padded = [row + [EMPTY] * (width - len(row)) for row in rows]

        used_rows = [i for i, row in enumerate(padded) if any(c != EMPTY for c in row)]
        if not used_rows:
            return []
        padded = padded[used_rows[0] : used_rows[-1] + 1]

        used_cols = [
            j for j in range(width) if any(row[j] != EMPTY for row in padded)
        ]
        first, last = used_cols[0], used_cols[-1]
        return [row[first : last + 1] for row in padded]


def _limit(count: int, maximum: int | None) -> int:
    return count if maximum is None else min(count, maximum)


def timedelta_to_iso(value: timedelta) -> str:
    """Format a timedelta as an ISO 8601 duration, e.g. ``P1DT2H30M``."""
    total = value.total_seconds()
    sign = "-" if total < 0 else ""
    total = abs(total)

    days, remainder = divmod(total, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    date_part = f"{int(days)}D" if days else ""
    time_part = ""
    if hours:
        time_part += f"{int(hours)}H"
    if minutes:
        time_part += f"{int(minutes)}M"
    if seconds or not (days or hours or minutes):
        seconds_text = f"{seconds:.6f}".rstrip("0").rstrip(".")
        time_part += f"{seconds_text}S"

    return f"{sign}P{date_part}" + (f"T{time_part}" if time_part else "")
