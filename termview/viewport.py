"""Viewport onto a buffer: scrolling, cursor tracking and rendering.

The cursor is stored in screen space (relative to the window origin); the
buffer position it refers to is always derived from origin + cursor. Every
command mutates the cursor freely and then calls `adjust()`, which scrolls
and clamps until the invariants hold again:

- the cursor's line exists in the buffer
- the cursor's column is at most one past the end of that line
- the origin never scrolls before the first line/column or further than
  needed to show the last line (buffer-wide) or column (line-relative)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .buffer import Buffer
from .constants import EditorConstants
from .surface import Surface

logger = logging.getLogger(__name__)

TAB_WIDTH = EditorConstants.TAB_WIDTH


@dataclass(frozen=True)
class ViewportState:
    start_line: int = 0
    start_column: int = 0
    height: int = 0
    width: int = 0
    cursor_x: int = 0
    cursor_y: int = 0


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _scroll(cursor: int, origin: int, extent: int) -> tuple[int, int]:
    """Move origin until cursor falls inside [0, extent); return (cursor, origin)."""
    if extent > 0 and cursor >= extent:
        overflow = cursor - extent + 1
        origin += overflow
        cursor -= overflow
    if cursor < 0:
        origin += cursor
        cursor = 0
    return cursor, origin


def _clamp_origin(cursor: int, origin: int, upper: int) -> tuple[int, int]:
    """Clamp origin to [0, upper] keeping the cursor on the same buffer index."""
    clamped = _clamp(origin, 0, upper)
    return cursor + origin - clamped, clamped


class Viewport:
    """A window of `height` rows by `width` columns onto a buffer."""

    buffer: Buffer
    surface: Surface

    def __init__(self, buffer: Buffer, surface: Surface):
        self.buffer = buffer
        self.surface = surface
        width, height = surface.size()
        self._width = max(0, width)
        self._height = max(0, height)
        self._start_line = 0
        self._start_column = 0
        self._cursor_x = 0
        self._cursor_y = 0

    # --- Read-only view of the state ---

    @property
    def start_line(self) -> int:
        return self._start_line

    @property
    def start_column(self) -> int:
        return self._start_column

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def cursor_x(self) -> int:
        return self._cursor_x

    @property
    def cursor_y(self) -> int:
        return self._cursor_y

    @property
    def buffer_line(self) -> int:
        return self._start_line + self._cursor_y

    @property
    def buffer_column(self) -> int:
        return self._start_column + self._cursor_x

    @property
    def state(self) -> ViewportState:
        return ViewportState(
            start_line=self._start_line,
            start_column=self._start_column,
            height=self._height,
            width=self._width,
            cursor_x=self._cursor_x,
            cursor_y=self._cursor_y,
        )

    # --- Rendering ---

    def render(self, surface: Optional[Surface] = None) -> None:
        """Redraw the whole window and place the cursor.

        Tabs expand to TAB_WIDTH blank cells; anything reaching the right
        edge, including part of a tab, is clipped.
        """
        if surface is None:
            surface = self.surface
        surface.clear()
        line_count = self.buffer.line_count()
        for y in range(self._height):
            index = self._start_line + y
            if index >= line_count:
                break
            x = 0
            for codepoint in self.buffer.line(index)[self._start_column:]:
                if x >= self._width:
                    break
                if codepoint == "\t":
                    for _ in range(min(TAB_WIDTH, self._width - x)):
                        surface.set_cell(x, y, " ")
                        x += 1
                else:
                    surface.set_cell(x, y, codepoint)
                    x += 1
        surface.reveal_cursor(self._cursor_x, self._cursor_y)

    # --- Invariant restoration ---

    def _cursor_line_index(self, line_count: int) -> int:
        y = _clamp(self._cursor_y, 0, max(0, self._height - 1))
        return min(self._start_line + y, line_count - 1)

    def adjust(self) -> None:
        """Scroll and clamp until origin and cursor are valid again.

        Vertical bounds come from the whole buffer, horizontal bounds from the
        line under the cursor. Running this on an already valid viewport
        changes nothing.
        """
        line_count = self.buffer.line_count()

        self._cursor_y, self._start_line = _scroll(
            self._cursor_y, self._start_line, self._height)
        self._cursor_y, self._start_line = _clamp_origin(
            self._cursor_y, self._start_line, max(0, line_count - max(self._height, 1)))

        line_length = len(self.buffer.line(self._cursor_line_index(line_count)))
        self._cursor_x, self._start_column = _scroll(
            self._cursor_x, self._start_column, self._width)
        # One column past the end stays reachable for appending
        self._cursor_x, self._start_column = _clamp_origin(
            self._cursor_x, self._start_column, max(0, line_length + 1 - max(self._width, 1)))

        self._cursor_x = _clamp(self._cursor_x, 0, max(0, self._width - 1))
        self._cursor_y = _clamp(self._cursor_y, 0, max(0, self._height - 1))

        if self._start_line + self._cursor_y >= line_count:
            self._cursor_y = line_count - 1 - self._start_line
        line_length = len(self.buffer.line(self._start_line + self._cursor_y))
        if self._start_column + self._cursor_x > line_length:
            self._cursor_x = line_length - self._start_column

    def _commit(self, action: str) -> None:
        self.adjust()
        logger.debug(f"{action}: {self.state}")
        self.render()

    # --- Commands ---

    def move_up(self) -> None:
        self._cursor_y -= 1
        self._commit("move_up")

    def move_down(self) -> None:
        self._cursor_y += 1
        self._commit("move_down")

    def move_left(self) -> None:
        self._cursor_x -= 1
        self._commit("move_left")

    def move_right(self) -> None:
        self._cursor_x += 1
        self._commit("move_right")

    def insert(self, codepoint: str) -> None:
        """Insert a codepoint under the cursor and step past it."""
        if codepoint == "\n":
            self.insert_newline()
            return
        self.buffer.insert_codepoint(codepoint, self.buffer_line, self.buffer_column)
        self._cursor_x += 1
        self._commit("insert")

    def insert_newline(self) -> None:
        """Split the line at the cursor and move to the start of the new line."""
        self.buffer.split_line(self.buffer_line, self.buffer_column)
        self._cursor_y += 1
        self._cursor_x = -self._start_column
        self._commit("insert_newline")

    def backspace(self) -> bool:
        """Delete left of the cursor, joining onto the previous line at column 0.

        Returns False when the cursor is at the start of the buffer and
        nothing was deleted.
        """
        line, column = self.buffer_line, self.buffer_column
        edited = True
        if column > 0:
            self.buffer.delete_codepoint(line, column - 1)
            self._cursor_x -= 1
        elif line > 0:
            join_column = len(self.buffer.line(line - 1))
            self.buffer.join_line(line - 1)
            self._cursor_y -= 1
            self._cursor_x = join_column - self._start_column
        else:
            edited = False
        self._commit("backspace")
        return edited

    def jump_to(self, line: int, column: int = 0) -> None:
        """Put the cursor on a buffer position, scrolling it into view."""
        self._cursor_y = line - self._start_line
        self._cursor_x = column - self._start_column
        self._commit("jump_to")

    def resize(self, width: int, height: int) -> None:
        self._width = max(0, width)
        self._height = max(0, height)
        self._commit("resize")
