"""Drawing surface the viewport renders onto."""

from abc import ABC, abstractmethod
from typing import Optional


class Surface(ABC):
    """A grid of character cells plus a visible cursor.

    The viewport only issues declarative draw calls against this interface
    and never reads back what was drawn.
    """

    @abstractmethod
    def clear(self) -> None:
        """Blank every cell."""

    @abstractmethod
    def set_cell(self, x: int, y: int, codepoint: str) -> None:
        """Put one codepoint at column x, row y."""

    @abstractmethod
    def reveal_cursor(self, x: int, y: int) -> None:
        """Show the cursor at column x, row y.

        Called once at the end of every render pass, so implementations may
        treat it as the point to flush the frame.
        """

    @abstractmethod
    def size(self) -> tuple[int, int]:
        """Return (width, height) in cells."""


class MemorySurface(Surface):
    """Surface backed by an in-memory cell grid."""

    def __init__(self, width: int = 80, height: int = 24):
        self.width = width
        self.height = height
        self.cells: list[list[str]] = []
        self.cursor: Optional[tuple[int, int]] = None
        self.clear_count = 0
        self.frame_count = 0
        self.clear()
        self.clear_count = 0

    def clear(self) -> None:
        self.cells = [[" "] * self.width for _ in range(self.height)]
        self.clear_count += 1

    def set_cell(self, x: int, y: int, codepoint: str) -> None:
        # Writes outside the grid are dropped
        if 0 <= y < self.height and 0 <= x < self.width:
            self.cells[y][x] = codepoint

    def reveal_cursor(self, x: int, y: int) -> None:
        self.cursor = (x, y)
        self.frame_count += 1

    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def resize(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.clear()

    def rows(self) -> list[str]:
        """Return each row of the grid as a string."""
        return [''.join(row) for row in self.cells]
