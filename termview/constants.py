"""Constants and configuration for the termview editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Rendering
    TAB_WIDTH = 8  # Blank cells written for one horizontal tab

    # Status line
    STATUS_HINT = "Ctrl-Q to quit"
    NEW_FILE_LABEL = "[new file]"
    NO_NAME_LABEL = "[no name]"

    # Logging
    APP_NAME = "termview"
    LOG_FILE_NAME = "termview.log"
    DEFAULT_LOG_LEVEL = "WARNING"
    LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status messages
    LOAD_ERROR_MESSAGE = "Error loading file: {}"
