"""Services for xlsx2sql."""

from xlsx2sql.services.coercion import coerce
from xlsx2sql.services.converter import ConversionResult, ConversionService
from xlsx2sql.services.statement_builder import BuildReport, StatementBuilder
from xlsx2sql.services.workbook_reader import WorkbookReader

__all__ = [
    "BuildReport",
    "ConversionResult",
    "ConversionService",
    "StatementBuilder",
    "WorkbookReader",
    "coerce",
]
