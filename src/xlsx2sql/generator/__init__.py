"""SQL generation: rendering statement records as INSERT text."""

from xlsx2sql.generator.formatter import SqlFormatter

__all__ = ["SqlFormatter"]
