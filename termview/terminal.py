"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional
import logging
import sys
import select

from .surface import Surface

logger = logging.getLogger(__name__)


class TerminalInterface(Surface):
    """Handles terminal I/O using Blessed.

    Acts as the viewport's surface: cells are collected into a frame between
    `clear()` and `reveal_cursor()`, and `reveal_cursor()` writes only the
    rows that changed since the previous frame.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None, status_line: bool = True):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.status_line = status_line
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False
        # Frame being composed and the one last written
        self._cells: list[list[str]] = []
        self._frame_size: tuple[int, int] = (0, 0)
        self._last_rows: list[str] | None = None
        self._last_status: str | None = None
        self._cursor: tuple[int, int] = (0, 0)

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        self.invalidate_frame()
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception as e:
                # curtsies cannot take over stdin when it is not a tty (CI, pipes);
                # the editor then runs without keyboard input.
                logger.warning(f"Keyboard input unavailable: {e}")
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception as e:
                # Teardown should never crash the app
                logger.warning(f"Failed to restore keyboard mode: {e}")
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def invalidate_frame(self) -> None:
        """Forget the last frame so the next one repaints from a clean slate."""
        self._last_rows = None
        self._last_status = None

    # --- Surface ---

    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def clear(self) -> None:
        width, height = self.size()
        width, height = max(0, width), max(0, height)
        self._frame_size = (width, height)
        self._cells = [[" "] * width for _ in range(height)]

    def set_cell(self, x: int, y: int, codepoint: str) -> None:
        width, height = self._frame_size
        if 0 <= y < height and 0 <= x < width:
            self._cells[y][x] = codepoint

    def reveal_cursor(self, x: int, y: int) -> None:
        """Write the composed frame, diffed against the last one, then move the cursor."""
        rows = [''.join(row) for row in self._cells]
        if self._last_rows is None or len(self._last_rows) != len(rows) or \
                any(len(old) != len(new) for old, new in zip(self._last_rows, rows)):
            print(self.term.home + self.term.clear, end='')
            self._last_rows = [None] * len(rows)
            self._last_status = None
        for row_index, row in enumerate(rows):
            if row != self._last_rows[row_index]:
                print(self.term.move(row_index, 0) + row, end='')
                self._last_rows[row_index] = row
        self._cursor = (x, y)
        print(self.term.move(y, x) + self.term.normal_cursor, end='', flush=True)

    # --- Status line ---

    def draw_status(self, text: str) -> None:
        """Draw the status line and put the cursor back where it was."""
        if not self.status_line:
            return
        status = text[:self.term.width].ljust(self.term.width)
        if status != self._last_status:
            print(self.term.move(self.term.height - 1, 0) + self.term.reverse + status + self.term.normal, end='')
            self._last_status = status
        x, y = self._cursor
        print(self.term.move(y, x), end='', flush=True)

    # --- Input ---

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key token as a string, or None when nothing arrived
            or no input source is active.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))  # blocks
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        if self.status_line:
            return self.term.height - 1  # Reserve one line for status
        return self.term.height
