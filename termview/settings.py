"""User settings for the termview editor.

Settings are read from a JSON object stored in the OS-appropriate config
directory. Anything missing, malformed or invalid falls back to defaults so
a broken settings file never prevents the editor from starting.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    log_level: str = EditorConstants.DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None
    show_status_line: bool = True

    def resolved_log_file(self) -> Path:
        """Return the configured log file or the per-user default."""
        if self.log_file:
            return Path(self.log_file).expanduser()
        log_dir = Path(platformdirs.user_log_dir(EditorConstants.APP_NAME))
        return log_dir / EditorConstants.LOG_FILE_NAME


def validate_setting(key: str, value: Any) -> bool:
    """Check one setting value; unknown keys are accepted for forward compatibility."""
    if key == 'log_level':
        return isinstance(value, str) and value.upper() in LOG_LEVELS
    if key == 'log_file':
        return value is None or isinstance(value, str)
    if key == 'show_status_line':
        return isinstance(value, bool)
    return True


class SettingsStore:
    """Loads settings from `settings.json` in the user config directory."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = config_dir or Path(
            platformdirs.user_config_dir(EditorConstants.APP_NAME))
        self._settings_file = self._config_dir / "settings.json"

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _read_raw(self) -> Dict[str, Any]:
        if not self._settings_file.exists():
            return {}
        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    def load(self) -> Settings:
        settings = Settings()
        known = {field.name for field in fields(Settings)}
        for key, value in self._read_raw().items():
            if key not in known:
                continue
            if not validate_setting(key, value):
                logger.warning(f"Ignoring invalid value for setting {key}: {value!r}")
                continue
            if key == 'log_level':
                value = value.upper()
            setattr(settings, key, value)
        return settings


# Global instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = SettingsStore().load()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
