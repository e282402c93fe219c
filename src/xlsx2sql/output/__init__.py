"""Output module for writing generated SQL."""

from xlsx2sql.output.writer import OutputDestination, OutputWriter

__all__ = ["OutputDestination", "OutputWriter"]
