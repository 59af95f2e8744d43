import sys
from unittest.mock import patch

import pytest

from termview import __main__ as cli


def test_parse_args():
    assert cli.parse_args([]) == (None, None, False)
    assert cli.parse_args(["notes.txt"]) == ("notes.txt", None, False)
    assert cli.parse_args(["+12", "notes.txt"]) == ("notes.txt", 11, False)
    assert cli.parse_args(["--textual", "+0", "a.txt"]) == ("a.txt", 0, True)


def test_version_flag(capsys):
    with patch.object(sys, 'argv', ['termview', '--version']), \
            patch.object(cli, 'get_version_string', return_value='1.2.3'):
        cli.main()
    assert capsys.readouterr().out.strip() == '1.2.3'


def test_load_error_exits_with_message(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_bytes(b"\xff\xfe")
    with patch.object(sys, 'argv', ['termview', str(path)]), \
            patch('termview.logs.configure_logging'), \
            patch('termview.editor.Editor.run') as mock_run:
        with pytest.raises(SystemExit) as exc_info:
            cli.main()
    assert exc_info.value.code == 1
    assert "Error loading file:" in capsys.readouterr().err
    mock_run.assert_not_called()


def test_missing_file_opens_editor(tmp_path):
    path = tmp_path / "new.txt"
    with patch.object(sys, 'argv', ['termview', '+3', str(path)]), \
            patch('termview.logs.configure_logging'), \
            patch('termview.editor.get_settings') as mock_settings, \
            patch('termview.editor.Editor.run', autospec=True) as mock_run:
        mock_settings.return_value.show_status_line = True
        cli.main()
    editor = mock_run.call_args.args[0]
    assert editor.new_file is True
    assert editor.initial_line == 2
