from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest
from openpyxl import Workbook

from xlsx2sql.workbook import EMPTY, IntCell, SheetData, TextCell, WorkbookData

WorkbookFactory = Callable[..., Path]


@pytest.fixture
def people_sheet() -> SheetData:
    """Sheet with an id/name header and two data rows."""
    return SheetData.from_rows(
        "people",
        [
            [TextCell("id"), TextCell("name")],
            [IntCell(1), TextCell("Ann")],
            [IntCell(2), TextCell("Bea")],
        ],
    )


@pytest.fixture
def people_workbook(people_sheet: SheetData) -> WorkbookData:
    return WorkbookData(sheets=[people_sheet])


@pytest.fixture
def header_only_sheet() -> SheetData:
    return SheetData.from_rows("headers", [[TextCell("a"), TextCell("b")]])


@pytest.fixture
def blank_header_sheet() -> SheetData:
    return SheetData.from_rows(
        "blank",
        [
            [EMPTY, TextCell("  ")],
            [IntCell(1), TextCell("data")],
        ],
    )


@pytest.fixture
def make_xlsx(tmp_path: Path) -> WorkbookFactory:
    """Write a real .xlsx file from ``{sheet_name: rows}`` and return its path."""

    def _make(
        sheets: dict[str, Sequence[Sequence[Any]]],
        name: str = "book.xlsx",
    ) -> Path:
        wb = Workbook()
        wb.remove(wb.active)
        for title, rows in sheets.items():
            ws = wb.create_sheet(title)
            for row in rows:
                ws.append(list(row))
        path = tmp_path / name
        wb.save(path)
        wb.close()
        return path

    return _make
