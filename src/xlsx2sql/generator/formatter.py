"""SQL text rendering for INSERT statements.

Identifiers are wrapped in backticks. Embedded backticks are not doubled,
so a sheet or column name containing one produces malformed SQL.

String literals are single-quoted with every ``'`` doubled, which is the
only escaping applied to cell text. Backslashes pass through unchanged. That
is safe for standard SQL and for MySQL with ``NO_BACKSLASH_ESCAPES``, but
under MySQL's default ``sql_mode`` a backslash escapes the next character:
``\\';`` renders as ``'\\'';`` and the literal closes early.

Datetime values are quoted without escaping because they are either
decoded by this package or copied from ISO-typed cells.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import assert_never

from xlsx2sql.models import (
    SqlBoolean,
    SqlDateTime,
    SqlInteger,
    SqlNull,
    SqlNumber,
    SqlStatement,
    SqlText,
    SqlValue,
    decimal_text,
)

STATEMENT_SEPARATOR = "\n\n"


class SqlFormatter:
    """Stateless helpers that turn statement records into SQL text."""

    @staticmethod
    def format_identifier(name: str) -> str:
        return f"`{name}`"

    @staticmethod
    def escape_string(s: str) -> str:
        return s.replace("'", "''")

    @staticmethod
    def format_string_literal(s: str) -> str:
        return f"'{SqlFormatter.escape_string(s)}'"

    @staticmethod
    def format_value(value: SqlValue) -> str:
        """Render one SQL value as a literal.

        Non-finite numbers have no SQL literal and render as NULL.
        """
        match value:
            case SqlNull():
                return "NULL"
            case SqlText(value=text):
                return SqlFormatter.format_string_literal(text)
            case SqlNumber(value=number):
                if not math.isfinite(number):
                    return "NULL"
                return decimal_text(number)
            case SqlInteger(value=integer):
                return str(integer)
            case SqlBoolean(value=flag):
                return "1" if flag else "0"
            case SqlDateTime(value=dt):
                return f"'{dt}'"
            case _:
                assert_never(value)

    @staticmethod
    def format_row(row: Iterable[SqlValue]) -> str:
        return "(" + ",".join(SqlFormatter.format_value(v) for v in row) + ")"

    @staticmethod
    def format_statement(statement: SqlStatement) -> str:
        """Render a statement as a single multi-row INSERT.

        Example:
            INSERT INTO `people` (`id`, `name`) VALUES
            (1,'Ann'),
            (2,'Bea');
        """
        table_name = SqlFormatter.format_identifier(statement.table_name)
        columns = ", ".join(
            SqlFormatter.format_identifier(column) for column in statement.columns
        )
        values = ",\n".join(SqlFormatter.format_row(row) for row in statement.values)
        return f"INSERT INTO {table_name} ({columns}) VALUES\n{values};"

    @staticmethod
    def format_statements(statements: Iterable[SqlStatement]) -> str:
        """Render statements in order, separated by a blank line."""
        rendered = [SqlFormatter.format_statement(s) for s in statements]
        if not rendered:
            return ""
        return STATEMENT_SEPARATOR.join(rendered) + "\n"
