"""Assemble INSERT statements from the sheets of a workbook."""

from __future__ import annotations

from dataclasses import dataclass, field

from xlsx2sql.models import SqlStatement
from xlsx2sql.services.coercion import coerce_row
from xlsx2sql.utils.exceptions import NoDataError, ParseError
from xlsx2sql.workbook import SheetData, WorkbookData


@dataclass
class SkippedSheet:
    """A sheet left out of the output in best-effort mode."""

    name: str
    error: ParseError


@dataclass
class BuildReport:
    """Statements built from a workbook plus the sheets that were skipped."""

    statements: list[SqlStatement] = field(default_factory=list)
    skipped_sheets: list[SkippedSheet] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return sum(statement.row_count for statement in self.statements)


class StatementBuilder:
    """Build one SqlStatement per sheet that has headers and data rows.

    In atomic mode (the default) a sheet with no rows or blank headers
    aborts the whole build. With ``atomic=False`` such sheets are skipped
    and listed in the report instead.
    """

    def __init__(self, atomic: bool = True) -> None:
        self.atomic = atomic

    def build(self, workbook: WorkbookData) -> list[SqlStatement]:
        """Build statements for every sheet, in workbook order.

        Raises:
            EmptySheetError: A sheet has no rows (atomic mode only).
            MissingHeadersError: A sheet's header row is blank (atomic mode only).
            NoDataError: No sheet produced a statement.
        """
        return self.build_report(workbook).statements

    def build_report(self, workbook: WorkbookData) -> BuildReport:
        report = BuildReport()

        for sheet in workbook.sheets:
            try:
                statement = self.build_sheet(sheet)
            except ParseError as e:
                if self.atomic:
                    raise
                report.skipped_sheets.append(SkippedSheet(name=sheet.name, error=e))
                continue
            if statement is not None:
                report.statements.append(statement)

        if not report.statements:
            raise NoDataError(sheet_count=len(workbook.sheets))

        return report

    @staticmethod
    def build_sheet(sheet: SheetData) -> SqlStatement | None:
        """Build the statement for a single sheet.

        Returns None when the sheet has headers but no data rows.
        """
        columns = sheet.get_columns()
        if not columns:
            return None

        values = [coerce_row(row) for row in sheet.get_data_rows()]
        if not values:
            return None

        return SqlStatement(table_name=sheet.name, columns=columns, values=values)
