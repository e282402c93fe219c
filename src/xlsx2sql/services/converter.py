"""Workbook-to-SQL conversion orchestration.

This module ties the pipeline together:
1. Validates the input path and extension
2. Reads the workbook into raw cell grids
3. Builds one INSERT statement per sheet with data
4. Renders the statements to SQL text
5. Optionally writes the text to a file or stdout
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from xlsx2sql.generator.formatter import SqlFormatter
from xlsx2sql.models import SqlStatement
from xlsx2sql.output.writer import OutputDestination, OutputWriter
from xlsx2sql.services.file_validator import DEFAULT_EXTENSIONS, validate_input
from xlsx2sql.services.statement_builder import SkippedSheet, StatementBuilder
from xlsx2sql.services.workbook_reader import WorkbookReader
from xlsx2sql.utils.exceptions import Xlsx2SqlError
from xlsx2sql.utils.logging import (
    LogContext,
    PerformanceMetrics,
    get_logger,
    timed_operation,
)

logger = get_logger(__name__)


@dataclass
class ConversionResult:
    """Outcome of converting one workbook."""

    source: Path
    sql: str
    statements: list[SqlStatement]
    skipped_sheets: list[SkippedSheet] = field(default_factory=list)
    metrics: PerformanceMetrics | None = None
    destination: OutputDestination | None = None

    @property
    def row_count(self) -> int:
        return sum(statement.row_count for statement in self.statements)

    @property
    def table_names(self) -> list[str]:
        return [statement.table_name for statement in self.statements]


class ConversionService:
    """Convert spreadsheet workbooks into SQL INSERT text."""

    def __init__(
        self,
        reader: WorkbookReader | None = None,
        builder: StatementBuilder | None = None,
        writer: OutputWriter | None = None,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ) -> None:
        self.reader = reader or WorkbookReader()
        self.builder = builder or StatementBuilder()
        self.writer = writer or OutputWriter()
        self.extensions = tuple(extensions)

    def convert(self, path: Path) -> ConversionResult:
        """Convert a workbook to SQL text without writing it anywhere.

        Raises:
            Xlsx2SqlError: Any input, parse or generation failure.
        """
        with LogContext(run_id=uuid.uuid4().hex[:8], workbook=path.name):
            with timed_operation(logger, "conversion") as metrics:
                try:
                    validate_input(path, self.extensions)

                    logger.info("Reading workbook", path=str(path))
                    workbook = self.reader.read(path)
                    metrics.sheets_processed = len(workbook.sheets)

                    report = self.builder.build_report(workbook)
                    for skipped in report.skipped_sheets:
                        logger.warning(
                            "Sheet skipped",
                            sheet=skipped.name,
                            error_code=skipped.error.error_code.value,
                            reason=skipped.error.message,
                        )

                    sql = SqlFormatter.format_statements(report.statements)
                except Xlsx2SqlError as e:
                    metrics.finish()
                    logger.log_conversion_result(
                        source=str(path),
                        success=False,
                        duration_seconds=metrics.duration_seconds,
                        statements=0,
                        rows=0,
                        error_code=e.error_code.value,
                    )
                    raise

                metrics.sheets_skipped = len(report.skipped_sheets)
                metrics.statements_generated = len(report.statements)
                metrics.rows_converted = report.row_count
                metrics.bytes_written = len(sql.encode("utf-8"))

            logger.log_conversion_result(
                source=str(path),
                success=True,
                duration_seconds=metrics.duration_seconds,
                statements=len(report.statements),
                rows=report.row_count,
                skipped_sheets=[s.name for s in report.skipped_sheets],
            )

        return ConversionResult(
            source=path,
            sql=sql,
            statements=report.statements,
            skipped_sheets=report.skipped_sheets,
            metrics=metrics,
        )

    def convert_to(
        self, path: Path, destination: OutputDestination
    ) -> ConversionResult:
        """Convert a workbook and write the SQL to ``destination``.

        Nothing is written when conversion fails.
        """
        result = self.convert(path)
        self.writer.write(result.sql, destination)
        result.destination = destination
        return result


def default_output_path(input_path: Path, suffix: str = ".sql") -> Path:
    """Return the input path with its extension replaced by ``suffix``."""
    return input_path.with_suffix(suffix)
