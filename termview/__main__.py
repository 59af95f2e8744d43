"""termview CLI entry point.

Allows running via `python -m termview` and provides the console script
defined in `pyproject.toml`.

Usage:
    termview [--version] [--textual] [+LINE] [FILE]
"""

from __future__ import annotations

import importlib.metadata
import sys
from typing import Optional

from .constants import EditorConstants


def get_version_string() -> str:
    try:
        return importlib.metadata.version(EditorConstants.APP_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def parse_args(args: list[str]) -> tuple[Optional[str], Optional[int], bool]:
    """Split argv into (filename, 0-based start line, use textual)."""
    filename = None
    start_line = None
    use_textual = False
    for arg in args:
        if arg == '--textual':
            use_textual = True
        elif arg.startswith('+') and arg[1:].isdigit():
            start_line = max(0, int(arg[1:]) - 1)
        else:
            filename = arg
    return filename, start_line, use_textual


def main() -> None:
    # Very small arg parsing to support version, front end choice and an optional filename
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    filename, start_line, use_textual = parse_args(args)

    from .logs import configure_logging
    configure_logging()

    # Lazy import to avoid importing UI deps for --version
    if use_textual:
        from .buffer import Buffer
        from .textual_app import TermviewApp
        try:
            document = Buffer.load(filename) if filename else Buffer()
        except FileNotFoundError:
            document = Buffer(path=filename)
        except (OSError, UnicodeDecodeError) as e:
            print(EditorConstants.LOAD_ERROR_MESSAGE.format(e), file=sys.stderr)
            sys.exit(1)
        TermviewApp(document, initial_line=start_line).run()
        return

    from .editor import Editor
    editor = Editor()
    if filename:
        try:
            editor.load_file(filename)
        except (OSError, UnicodeDecodeError) as e:
            print(EditorConstants.LOAD_ERROR_MESSAGE.format(e), file=sys.stderr)
            sys.exit(1)
    editor.initial_line = start_line
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
