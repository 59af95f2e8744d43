"""Main editor controller: event loop around a buffer and its viewport."""

import logging
import os
import sys
import select
import signal
import termios
from typing import Optional

from .buffer import Buffer
from .commands import CommandRegistry
from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent
from .settings import Settings, get_settings
from .terminal import TerminalInterface
from .viewport import Viewport

logger = logging.getLogger(__name__)


class Editor:
    """Terminal editor application controller."""

    def __init__(self, settings: Optional[Settings] = None,
                 terminal: Optional[TerminalInterface] = None):
        """Initialize the editor components."""
        self.settings = settings or get_settings()
        self.terminal = terminal or TerminalInterface(status_line=self.settings.show_status_line)
        self.keyboard = KeyboardHandler(self.terminal)
        self.buffer = Buffer()
        self.viewport = Viewport(self.buffer, self.terminal)
        self.command_registry = CommandRegistry()
        self.running = False
        self.modified = False
        self.new_file = False
        self.initial_line: Optional[int] = None  # 0-based line to jump to on start
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def load_file(self, filename: str):
        """Load a file into the editor.

        A missing file opens an empty buffer bound to that name; any other
        I/O or decode error propagates to the caller.
        """
        try:
            self.buffer = Buffer.load(filename)
            self.new_file = False
        except FileNotFoundError:
            logger.info(f"{filename} does not exist, starting a new file")
            self.buffer = Buffer(path=filename)
            self.new_file = True
        self.viewport = Viewport(self.buffer, self.terminal)
        self.modified = False

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.running = True

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        try:
            with self.terminal.term.cbreak():
                old_settings = None
                try:
                    old_settings = termios.tcgetattr(sys.stdin)
                    new_settings = list(old_settings)
                    # Disable IXON/IXOFF so Ctrl-Q reaches us instead of the tty
                    new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
                except (termios.error, AttributeError, OSError) as e:
                    logger.debug(f"Could not adjust tty flags: {e}")

                self._handle_resize_event()
                if self.initial_line is not None:
                    self.viewport.jump_to(self.initial_line, 0)
                    self._draw_status()

                while self.running:
                    # Wait for input on stdin or resize pipe
                    ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                    if self._resize_pipe_r in ready:
                        os.read(self._resize_pipe_r, 1024)
                        if self.running:
                            self._handle_resize_event()
                    elif 0 in ready:
                        key_event = self.keyboard.get_key_event(timeout=0)
                        if key_event:
                            self._handle_key_event(key_event)

                if old_settings:
                    try:
                        termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                    except (termios.error, OSError) as e:
                        logger.debug(f"Could not restore tty flags: {e}")

        except KeyboardInterrupt:
            logger.info("Interrupted, leaving editor")
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()

    def _handle_resize_event(self):
        """Refit the viewport to the terminal and repaint everything."""
        width, height = self.terminal.size()
        logger.debug(f"Resize to {width}x{height}")
        self.terminal.invalidate_frame()
        self.viewport.resize(width, height)
        self._draw_status()

    def _handle_key_event(self, key_event: KeyEvent):
        """Dispatch a keyboard event to its command."""
        logger.debug(f"Key event: {key_event}")
        if self.command_registry.execute(self, key_event):
            self.modified = True
        if self.running:
            self._draw_status()

    def status_text(self) -> str:
        """Compose the status line for the current document and cursor."""
        name = self.buffer.path or EditorConstants.NO_NAME_LABEL
        if self.new_file:
            name += " " + EditorConstants.NEW_FILE_LABEL
        if self.modified:
            name += " *"
        position = f"Ln {self.viewport.buffer_line + 1}, Col {self.viewport.buffer_column + 1}"
        return f" {name}  {position}  {EditorConstants.STATUS_HINT}"

    def _draw_status(self):
        self.terminal.draw_status(self.status_text())
