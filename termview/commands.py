"""Command pattern mapping key events onto viewport commands."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
import logging

from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent

logger = logging.getLogger(__name__)


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._move(editor)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor'):
        """Perform the movement."""


class UpCommand(MovementCommand):
    def _move(self, editor):
        editor.viewport.move_up()


class DownCommand(MovementCommand):
    def _move(self, editor):
        editor.viewport.move_down()


class LeftCommand(MovementCommand):
    def _move(self, editor):
        editor.viewport.move_left()


class RightCommand(MovementCommand):
    def _move(self, editor):
        editor.viewport.move_right()


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        return self._edit(editor, key_event)

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Perform the edit and report whether the buffer changed."""


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.viewport.insert(key_event.value)
        return True


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.viewport.insert_newline()
        return True


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.viewport.backspace()


class QuitCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.running = False
        return False


def is_insertable(value: str) -> bool:
    """Whether a regular key's value is a single codepoint we can insert."""
    return len(value) == 1 and (value == '\t' or value.isprintable())


class CommandRegistry:
    """Registry of commands keyed by (KeyType, value)."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        self.register((KeyType.SPECIAL, 'up'), UpCommand())
        self.register((KeyType.SPECIAL, 'down'), DownCommand())
        self.register((KeyType.SPECIAL, 'left'), LeftCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCommand())

        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())

        self.register((KeyType.CTRL, 'q'), QuitCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        if key_event.key_type == KeyType.REGULAR and is_insertable(key_event.value):
            return InsertTextCommand().execute(editor, key_event)

        logger.debug(f"No command bound to {key_event.raw!r}")
        return False
