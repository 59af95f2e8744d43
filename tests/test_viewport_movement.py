"""Cursor movement and scrolling through the viewport."""

from termview import Buffer, MemorySurface, Viewport


def make_viewport(lines, width=5, height=2):
    surface = MemorySurface(width=width, height=height)
    return Viewport(Buffer(lines), surface), surface


def test_new_viewport_starts_at_origin():
    v, _ = make_viewport(["abc", "de", "f"])
    assert (v.start_line, v.start_column) == (0, 0)
    assert (v.cursor_x, v.cursor_y) == (0, 0)
    assert (v.width, v.height) == (5, 2)


def test_move_down_past_window_scrolls_one_line():
    """Moving below the last visible row brings the next line into view."""
    v, surface = make_viewport(["abc", "de", "f"])
    v.move_down()
    assert v.cursor_y == 1
    assert v.buffer_line == 1

    v.move_down()
    assert v.start_line == 1
    assert (v.cursor_x, v.cursor_y) == (0, 1)
    assert v.buffer_line == 2
    assert surface.rows() == ["de   ", "f    "]


def test_move_down_at_end_of_buffer_is_noop():
    v, _ = make_viewport(["abc", "de", "f"])
    v.move_down()
    v.move_down()
    v.move_right()
    before = v.state
    assert v.buffer_column == 1  # append position of "f"

    v.move_down()
    assert v.state == before
    v.move_down()
    assert v.state == before


def test_move_up_at_top_is_noop():
    v, _ = make_viewport(["abc", "de", "f"])
    before = v.state
    v.move_up()
    assert v.state == before


def test_move_up_scrolls_back():
    v, _ = make_viewport(["abc", "de", "f"])
    v.move_down()
    v.move_down()
    assert v.start_line == 1
    v.move_up()
    assert (v.start_line, v.cursor_y) == (1, 0)
    v.move_up()
    assert (v.start_line, v.cursor_y) == (0, 0)
    assert v.buffer_line == 0


def test_move_down_in_short_buffer_stops_at_last_line():
    """A buffer shorter than the window keeps its trailing rows blank."""
    v, surface = make_viewport(["abc", "de", "f"], height=10)
    for _ in range(5):
        v.move_down()
    assert v.start_line == 0
    assert v.cursor_y == 2
    assert surface.rows()[3:] == ["     "] * 7


def test_move_left_at_column_zero_is_noop():
    v, _ = make_viewport(["abc"])
    before = v.state
    v.move_left()
    assert v.state == before


def test_move_right_stops_at_append_position():
    v, _ = make_viewport(["abc"], width=10)
    for _ in range(6):
        v.move_right()
    assert v.buffer_column == 3
    assert v.cursor_x == 3


def test_move_right_past_window_scrolls_horizontally():
    v, surface = make_viewport(["abcdef"], width=4, height=3)
    for _ in range(3):
        v.move_right()
    assert (v.start_column, v.cursor_x) == (0, 3)

    v.move_right()
    assert v.start_column == 1
    assert v.cursor_x == 3
    assert v.buffer_column == 4
    assert surface.rows()[0] == "bcde"


def test_horizontal_scroll_is_bounded_by_current_line():
    v, _ = make_viewport(["abcdef"], width=4, height=3)
    for _ in range(20):
        v.move_right()
    # One cell past the end stays visible for appending
    assert v.start_column == 3
    assert v.cursor_x == 3
    assert v.buffer_column == 6


def test_move_left_scrolls_back():
    v, _ = make_viewport(["abcdefgh"], width=4, height=1)
    for _ in range(8):
        v.move_right()
    assert (v.start_column, v.cursor_x) == (5, 3)
    for _ in range(3):
        v.move_left()
    assert (v.start_column, v.cursor_x) == (5, 0)
    v.move_left()
    assert (v.start_column, v.cursor_x) == (4, 0)
    assert v.buffer_column == 4


def test_moving_onto_shorter_line_clamps_column():
    v, _ = make_viewport(["abcdef", "ab"], width=10, height=5)
    for _ in range(5):
        v.move_right()
    v.move_down()
    assert v.buffer_line == 1
    assert v.buffer_column == 2
    # No remembered column: moving back up keeps the clamped column
    v.move_up()
    assert v.buffer_column == 2


def test_moving_onto_shorter_line_resets_horizontal_scroll():
    v, surface = make_viewport(["abcdefgh", "ab"], width=4, height=2)
    for _ in range(8):
        v.move_right()
    assert v.start_column == 5
    v.move_down()
    assert v.start_column == 0
    assert (v.cursor_x, v.cursor_y) == (2, 1)
    assert surface.rows() == ["abcd", "ab  "]


def test_moving_onto_line_that_still_needs_scroll():
    v, _ = make_viewport(["a" * 20, "b" * 15], width=10, height=2)
    for _ in range(20):
        v.move_right()
    assert (v.start_column, v.cursor_x) == (11, 9)
    v.move_down()
    assert v.start_column == 6
    assert v.buffer_column == 15
    assert v.cursor_x == 9


def test_jump_to_scrolls_target_into_view():
    v, _ = make_viewport([f"line {i}" for i in range(20)], width=10, height=5)
    v.jump_to(12, 3)
    assert v.buffer_line == 12
    assert v.buffer_column == 3
    assert v.start_line == 8
    assert v.cursor_y == 4

    v.jump_to(0)
    assert (v.start_line, v.cursor_y, v.buffer_column) == (0, 0, 0)


def test_jump_to_past_end_lands_on_last_line():
    v, _ = make_viewport(["ab", "cd", "ef"], width=10, height=2)
    v.jump_to(50, 50)
    assert v.buffer_line == 2
    assert v.buffer_column == 2
    assert v.start_line == 1


def test_every_command_renders_once():
    v, surface = make_viewport(["abc", "de", "f"], width=5, height=2)
    commands = [
        v.move_down, v.move_up, v.move_right, v.move_left,
        lambda: v.insert("x"), v.insert_newline, v.backspace,
        lambda: v.resize(6, 3), lambda: v.jump_to(1, 1),
    ]
    for count, command in enumerate(commands, start=1):
        command()
        assert surface.frame_count == count
        assert surface.clear_count == count
