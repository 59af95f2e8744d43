"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum

class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"

@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The token as reported by curtsies
    is_ctrl: bool = False


class KeyboardHandler:
    """Turns curtsies key tokens from the terminal into KeyEvents."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token such as 'a', '<UP>' or '<Ctrl-q>'."""
        key_str = str(key)

        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            name = key_str[1:-1].lower().replace('+', '-')
            parts = name.split('-')
            base = parts[-1]
            mods = set(parts[:-1])
            if base in ('pageup', 'page_up'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down'):
                base = 'page_down'

            if not mods:
                if base in ('space', 'spacebar', 'spc'):
                    return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=key_str)
                if base == 'tab':
                    return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
                if base in ('esc', 'escape'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
            if 'ctrl' in mods and len(base) == 1:
                # Ctrl-J / Ctrl-M are how terminals report enter
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
            # Unknown tokens are kept as specials so they can be ignored by name
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str == '\t':
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
            if key_str in ('\r', '\n'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                return KeyEvent(key_type=KeyType.CTRL, value=chr(ord('a') + o - 1),
                                raw=key_str, is_ctrl=True)
            if key_str == '\x1b':
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)
