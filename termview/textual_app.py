"""Textual front end driving the same buffer and viewport."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widget import Widget

from .buffer import Buffer
from .commands import is_insertable
from .constants import EditorConstants
from .surface import MemorySurface
from .viewport import Viewport

logger = logging.getLogger(__name__)

# Textual key names handled without a character payload
KEY_ACTIONS = {
    "up": "move_up",
    "down": "move_down",
    "left": "move_left",
    "right": "move_right",
    "enter": "insert_newline",
    "backspace": "backspace",
}

EDITING_ACTIONS = {"insert_newline", "backspace"}


class TextualSurface(MemorySurface):
    """Cell grid a widget paints from, cursor cell in reverse video."""

    def to_text(self) -> Text:
        text = Text()
        rows = self.rows()
        for y, row in enumerate(rows):
            if self.cursor is not None and self.cursor[1] == y and 0 <= self.cursor[0] < len(row):
                x = self.cursor[0]
                text.append(row[:x])
                text.append(row[x], style="reverse")
                text.append(row[x + 1:])
            else:
                text.append(row)
            if y < len(rows) - 1:
                text.append("\n")
        return text


def document_label(buffer: Buffer, modified: bool) -> str:
    """Name shown for a document, with ` *` once it has been edited."""
    label = buffer.path or EditorConstants.NO_NAME_LABEL
    if modified:
        label += " *"
    return label


class ViewportWidget(Widget, can_focus=True):
    """Widget showing a buffer through a Viewport."""

    def __init__(self, buffer: Buffer, initial_line: Optional[int] = None,
                 on_modified: Optional[Callable[[], None]] = None, **kwargs):
        super().__init__(**kwargs)
        self.cell_surface = TextualSurface(0, 0)
        self.buffer_view = Viewport(buffer, self.cell_surface)
        self.modified = False
        self._on_modified = on_modified
        # Applied once the widget knows its size
        self._initial_line = initial_line

    def render(self) -> Text:
        return self.cell_surface.to_text()

    def on_resize(self, event: events.Resize) -> None:
        width, height = event.size.width, event.size.height
        logger.debug(f"Widget resized to {width}x{height}")
        self.cell_surface.resize(width, height)
        self.buffer_view.resize(width, height)
        if self._initial_line is not None:
            self.buffer_view.jump_to(self._initial_line, 0)
            self._initial_line = None
        self.refresh()

    def on_key(self, event: events.Key) -> None:
        if self.handle_key(event.key, event.character):
            event.prevent_default()
            event.stop()
            self.refresh()

    def handle_key(self, key: str, character: Optional[str]) -> bool:
        """Run the viewport command for a key; return whether it was handled."""
        action = KEY_ACTIONS.get(key)
        if action is not None:
            result = getattr(self.buffer_view, action)()
            # backspace reports False when there was nothing to delete
            if action in EDITING_ACTIONS and result is not False:
                self._mark_modified()
            return True
        if key == "tab":
            character = "\t"
        if character and is_insertable(character):
            self.buffer_view.insert(character)
            self._mark_modified()
            return True
        return False

    def _mark_modified(self) -> None:
        if self.modified:
            return
        self.modified = True
        if self._on_modified is not None:
            self._on_modified()


class TermviewApp(App):
    """Textual application around a single ViewportWidget."""

    CSS = """
    ViewportWidget {
        width: 100%;
        height: 100%;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, document: Optional[Buffer] = None, initial_line: Optional[int] = None):
        super().__init__()
        self.document = document or Buffer()
        self.initial_line = initial_line

    def compose(self) -> ComposeResult:
        yield ViewportWidget(self.document, initial_line=self.initial_line,
                             on_modified=self.show_modified)

    def on_mount(self) -> None:
        self.sub_title = document_label(self.document, modified=False)
        self.query_one(ViewportWidget).focus()

    def show_modified(self) -> None:
        self.sub_title = document_label(self.document, modified=True)
