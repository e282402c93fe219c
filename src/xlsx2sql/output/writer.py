"""Writers for rendered SQL text."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from xlsx2sql.utils.exceptions import OutputWriteError
from xlsx2sql.utils.logging import get_logger

logger = get_logger(__name__)

STDOUT_MARKER = "-"


@dataclass(frozen=True)
class OutputDestination:
    """Where SQL text goes: a file path, or standard output when path is None."""

    path: Path | None = None

    @classmethod
    def file(cls, path: Path) -> OutputDestination:
        return cls(path=path)

    @classmethod
    def stdout(cls) -> OutputDestination:
        return cls(path=None)

    @classmethod
    def parse(cls, value: str) -> OutputDestination:
        """Build a destination from a CLI value, ``-`` meaning stdout."""
        if value == STDOUT_MARKER:
            return cls.stdout()
        return cls.file(Path(value))

    @property
    def is_stdout(self) -> bool:
        return self.path is None

    def __str__(self) -> str:
        return "<stdout>" if self.path is None else str(self.path)


class OutputWriter:
    """Write SQL text to a file or a text stream."""

    def __init__(self, encoding: str = "utf-8", stream: TextIO | None = None) -> None:
        """Initialize the writer.

        Args:
            encoding: Encoding for file output.
            stream: Stream used for stdout destinations (defaults to sys.stdout).
        """
        self.encoding = encoding
        self._stream = stream

    def write(self, content: str, destination: OutputDestination) -> int:
        """Write ``content`` to ``destination``.

        Returns:
            Number of characters written.

        Raises:
            OutputWriteError: If the file or stream cannot be written.
        """
        if destination.path is None:
            stream = self._stream or sys.stdout
            try:
                stream.write(content)
                stream.flush()
            except OSError as e:
                raise OutputWriteError(str(destination), str(e)) from e
        else:
            try:
                destination.path.write_text(content, encoding=self.encoding)
            except (OSError, UnicodeEncodeError) as e:
                raise OutputWriteError(str(destination), str(e)) from e

        logger.info("SQL written", destination=str(destination), chars=len(content))
        return len(content)
