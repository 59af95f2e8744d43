"""Editing through the viewport: insertion, newlines and backspace."""

import pytest

from termview import Buffer, MemorySurface, Viewport


def make_viewport(lines, width=10, height=4):
    surface = MemorySurface(width=width, height=height)
    return Viewport(Buffer(lines), surface), surface


def test_insert_round_trip():
    """The inserted codepoint lands at the old column, the rest shifts right."""
    v, _ = make_viewport(["abcdef"])
    v.jump_to(0, 2)
    line, column = v.buffer_line, v.buffer_column
    v.insert("Z")
    assert v.buffer.line(line) == "abZcdef"
    assert v.buffer.line(line)[column] == "Z"
    assert v.buffer_column == column + 1


def test_typing_builds_a_line():
    v, surface = make_viewport([""])
    for ch in "hello":
        v.insert(ch)
    assert v.buffer.lines == ["hello"]
    assert v.buffer_column == 5
    assert surface.rows()[0] == "hello     "
    assert surface.cursor == (5, 0)


def test_typing_past_right_edge_scrolls():
    v, surface = make_viewport([""], width=4, height=1)
    for ch in "abcdef":
        v.insert(ch)
    assert v.buffer.line(0) == "abcdef"
    assert v.buffer_column == 6
    assert (v.start_column, v.cursor_x) == (3, 3)
    assert surface.rows() == ["def "]


def test_insert_on_later_line_after_scroll():
    v, _ = make_viewport(["a", "b", "c", "d", "e"], width=4, height=2)
    for _ in range(3):
        v.move_down()
    assert (v.start_line, v.cursor_y) == (2, 1)
    v.insert("!")
    assert v.buffer.lines == ["a", "b", "c", "!d", "e"]


def test_insert_newline_splits_line():
    v, _ = make_viewport(["abcd"])
    v.jump_to(0, 2)
    v.insert_newline()
    assert v.buffer.lines == ["ab", "cd"]
    assert (v.buffer_line, v.buffer_column) == (1, 0)


def test_insert_line_feed_codepoint_splits_line():
    v, _ = make_viewport(["abcd"])
    v.jump_to(0, 4)
    v.insert("\n")
    assert v.buffer.lines == ["abcd", ""]
    assert (v.buffer_line, v.buffer_column) == (1, 0)


def test_insert_newline_resets_horizontal_scroll():
    v, _ = make_viewport(["abcdefgh"], width=4, height=3)
    v.jump_to(0, 8)
    assert v.start_column == 5
    v.insert_newline()
    assert v.buffer.lines == ["abcdefgh", ""]
    assert v.start_column == 0
    assert (v.cursor_x, v.cursor_y) == (0, 1)


def test_insert_newline_at_bottom_scrolls():
    v, _ = make_viewport(["a", "b"], width=4, height=2)
    v.move_down()
    v.insert_newline()
    assert v.buffer.line_count() == 3
    assert v.start_line == 1
    assert v.buffer_line == 2


def test_backspace_deletes_left_of_cursor():
    v, _ = make_viewport(["abc"])
    v.jump_to(0, 2)
    v.backspace()
    assert v.buffer.lines == ["ac"]
    assert v.buffer_column == 1


def test_backspace_at_line_start_joins_lines():
    v, _ = make_viewport(["ab", "cd"])
    v.move_down()
    v.backspace()
    assert v.buffer.lines == ["abcd"]
    assert (v.buffer_line, v.buffer_column) == (0, 2)


def test_backspace_at_buffer_start_does_nothing():
    v, surface = make_viewport(["ab"])
    before = v.state
    v.backspace()
    assert v.buffer.lines == ["ab"]
    assert v.state == before
    assert surface.frame_count == 1


def test_backspace_keeps_cursor_on_append_position_when_scrolled():
    v, _ = make_viewport(["abcdefghij"], width=4, height=1)
    v.jump_to(0, 10)
    assert (v.start_column, v.cursor_x) == (7, 3)
    v.backspace()
    assert v.buffer.line(0) == "abcdefghi"
    assert v.buffer_column == 9
    v.backspace()
    assert v.buffer_column == 8


def test_backspace_join_onto_long_line_scrolls_to_join_point():
    v, _ = make_viewport(["abcdefgh", "xy"], width=4, height=2)
    v.move_down()
    v.backspace()
    assert v.buffer.lines == ["abcdefghxy"]
    assert v.buffer_column == 8
    assert v.start_column + v.cursor_x == 8
    assert v.cursor_x <= 3


def test_insert_rejects_multiple_codepoints():
    v, _ = make_viewport(["ab"])
    with pytest.raises(ValueError):
        v.insert("xy")
    assert v.buffer.lines == ["ab"]


def test_backspace_reports_whether_it_edited():
    v, _ = make_viewport(["ab", "c"])
    assert v.backspace() is False
    v.move_down()
    assert v.backspace() is True
    assert v.backspace() is True
    assert v.buffer.lines == ["ac"]
