"""File logging for the editor.

The terminal is in fullscreen mode while the editor runs, so log records go
to a file instead of stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .constants import EditorConstants
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Optional[Settings] = None) -> Optional[Path]:
    """Attach a file handler to the package logger.

    Returns the log file path, or None if the file could not be opened (the
    editor still runs, just without a log).
    """
    settings = settings or get_settings()
    package_logger = logging.getLogger(EditorConstants.APP_NAME)
    path = settings.resolved_log_file()

    for handler in list(package_logger.handlers):
        if isinstance(handler, logging.FileHandler):
            package_logger.removeHandler(handler)
            handler.close()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding='utf-8')
    except OSError as e:
        package_logger.addHandler(logging.NullHandler())
        logger.warning(f"Could not open log file {path}: {e}")
        return None

    handler.setFormatter(logging.Formatter(EditorConstants.LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(settings.log_level)
    package_logger.propagate = False
    logger.debug(f"Logging to {path} at {settings.log_level}")
    return path
