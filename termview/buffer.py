"""Line storage for a single document."""

from __future__ import annotations

import logging
import os
from typing import BinaryIO, Optional, Union

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", BinaryIO]


class InvalidPositionError(AssertionError, IndexError):
    """An edit was requested outside the buffer.

    Callers (the viewport) are responsible for only issuing in-bounds
    requests, so this signals a bug in the caller rather than bad input.
    """


def split_lines(text: str) -> list[str]:
    """Split decoded text into lines with their terminators stripped.

    A trailing terminator does not produce an extra empty line, and empty
    text yields a single empty line.
    """
    if not text:
        return [""]
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class Buffer:
    lines: list[str]
    path: Optional[str]

    def __init__(self, lines: Optional[list[str]] = None, path: Optional[str] = None):
        self.lines = list(lines) if lines else [""]
        self.path = path

    @classmethod
    def from_text(cls, text: str, path: Optional[str] = None) -> "Buffer":
        return cls(split_lines(text), path=path)

    @classmethod
    def load(cls, source: Source) -> "Buffer":
        """Read and decode a UTF-8 source into a buffer.

        Args:
            source: Filesystem path or binary file object

        Raises:
            OSError: The source cannot be opened or read
            UnicodeDecodeError: The source is not valid UTF-8
        """
        if isinstance(source, (str, os.PathLike)):
            path = os.fspath(source)
            with open(path, 'rb') as f:
                data = f.read()
        else:
            path = getattr(source, 'name', None)
            if not isinstance(path, str):
                path = None
            data = source.read()
        text = data.decode('utf-8')
        buffer = cls.from_text(text, path=path)
        logger.debug(f"Loaded {buffer.line_count()} lines from {path or 'stream'}")
        return buffer

    def line_count(self) -> int:
        return len(self.lines)

    def line(self, index: int) -> str:
        """Return line `index`, or an empty string when out of range."""
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return ""

    def _check_line(self, line_index: int) -> str:
        if not 0 <= line_index < len(self.lines):
            raise InvalidPositionError(
                f"line {line_index} outside buffer of {len(self.lines)} lines")
        return self.lines[line_index]

    def _check_position(self, line_index: int, column_index: int, append: bool = True) -> str:
        line = self._check_line(line_index)
        limit = len(line) if append else len(line) - 1
        if not 0 <= column_index <= limit:
            raise InvalidPositionError(
                f"column {column_index} outside line {line_index} of length {len(line)}")
        return line

    def insert_codepoint(self, codepoint: str, line_index: int, column_index: int) -> None:
        """Insert one codepoint, shifting the rest of the line right."""
        if len(codepoint) != 1:
            raise ValueError(f"expected a single codepoint, got {codepoint!r}")
        if codepoint == "\n":
            raise ValueError("line feeds are inserted with split_line")
        line = self._check_position(line_index, column_index)
        self.lines[line_index] = line[:column_index] + codepoint + line[column_index:]
        logger.debug(f"Inserted {codepoint!r} at {line_index}:{column_index}")

    def delete_codepoint(self, line_index: int, column_index: int) -> str:
        """Remove and return the codepoint at the given position."""
        line = self._check_position(line_index, column_index, append=False)
        self.lines[line_index] = line[:column_index] + line[column_index + 1:]
        logger.debug(f"Deleted {line[column_index]!r} at {line_index}:{column_index}")
        return line[column_index]

    def split_line(self, line_index: int, column_index: int) -> None:
        """Break a line in two; the tail becomes the following line."""
        line = self._check_position(line_index, column_index)
        self.lines[line_index:line_index + 1] = [line[:column_index], line[column_index:]]
        logger.debug(f"Split line {line_index} at column {column_index}")

    def join_line(self, line_index: int) -> None:
        """Append the following line to `line_index` and remove it."""
        line = self._check_line(line_index)
        if line_index + 1 >= len(self.lines):
            raise InvalidPositionError(f"line {line_index} has no following line to join")
        self.lines[line_index:line_index + 2] = [line + self.lines[line_index + 1]]
        logger.debug(f"Joined line {line_index + 1} onto line {line_index}")
