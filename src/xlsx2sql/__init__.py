"""xlsx2sql - Convert spreadsheet workbooks into SQL INSERT statements."""

from xlsx2sql.generator.formatter import SqlFormatter
from xlsx2sql.services.converter import ConversionResult, ConversionService
from xlsx2sql.services.statement_builder import StatementBuilder
from xlsx2sql.workbook import SheetData, WorkbookData

__all__ = [
    "ConversionResult",
    "ConversionService",
    "SheetData",
    "SqlFormatter",
    "StatementBuilder",
    "WorkbookData",
    "main",
]
__version__ = "0.1.6"


def main() -> None:
    """Run the command-line interface."""
    import sys

    from xlsx2sql.cli import main as cli_main

    sys.exit(cli_main())
