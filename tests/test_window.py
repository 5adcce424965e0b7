import pytest

from slurmterm.window import Attr, Window


def test_new_window_is_blank():
    win = Window(3, 5)
    assert win.lines() == [" " * 5] * 3
    assert win.cursor == (0, 0)


@pytest.mark.parametrize("size", [(0, 5), (3, 0), (-1, 4)])
def test_invalid_size_rejected(size):
    with pytest.raises(ValueError):
        Window(*size)


def test_add_char_writes_and_advances():
    win = Window(2, 5)
    win.add_char("a")
    win.add_char("b")
    assert win.row_text(0) == "ab".ljust(5)
    assert win.cursor == (0, 2)


def test_add_char_wraps_at_line_end():
    win = Window(2, 3)
    for ch in "abcd":
        win.add_char(ch)
    assert win.lines() == ["abc", "d".ljust(3)]
    assert win.cursor == (1, 1)


def test_add_char_stays_in_bottom_right_corner():
    win = Window(1, 2)
    for ch in "xyz":
        win.add_char(ch)
    assert win.row_text(0) == "xz"
    assert win.cursor == (0, 1)


def test_add_char_rejects_multiple_characters():
    with pytest.raises(ValueError):
        Window(1, 4).add_char("ab")


def test_move_out_of_range_keeps_cursor():
    win = Window(2, 4)
    win.move(1, 3)
    with pytest.raises(IndexError):
        win.move(2, 0)
    with pytest.raises(IndexError):
        win.move(0, -1)
    assert win.cursor == (1, 3)


def test_add_char_records_attributes():
    win = Window(1, 4)
    win.attrs = Attr.BOLD | Attr.UNDERLINE
    win.color_pair = 3
    win.add_char("q")
    cell = win.cell(0, 0)
    assert cell.char == "q"
    assert cell.attrs == Attr.BOLD | Attr.UNDERLINE
    assert cell.color_pair == 3


def test_clear_blanks_and_homes():
    win = Window(2, 3)
    for ch in "abcd":
        win.add_char(ch)
    win.clear()
    assert win.lines() == [" " * 3] * 2
    assert win.cursor == (0, 0)


def test_clear_to_eol():
    win = Window(2, 4)
    for ch in "abcdef":
        win.add_char(ch)
    win.move(0, 2)
    win.clear_to_eol()
    assert win.lines() == ["ab".ljust(4), "ef".ljust(4)]


def test_clear_to_bottom():
    win = Window(3, 2)
    for ch in "abcdef":
        win.add_char(ch)
    win.move(1, 1)
    win.clear_to_bottom()
    assert win.lines() == ["ab", "c ", "  "]


def test_scroll_up_and_down():
    win = Window(3, 2)
    for ch in "aabbcc":
        win.add_char(ch)
    win.scroll(1)
    assert win.lines() == ["bb", "cc", "  "]
    win.scroll(-2)
    assert win.lines() == ["  ", "  ", "bb"]


def test_scroll_more_than_height_blanks_everything():
    win = Window(2, 2)
    win.add_char("x")
    win.scroll(10)
    assert win.lines() == ["  ", "  "]


def test_resize_keeps_content_and_clamps_cursor():
    win = Window(3, 4)
    for ch in "abcdefgh":
        win.add_char(ch)
    win.move(2, 3)
    win.resize(2, 2)
    assert win.lines() == ["ab", "ef"]
    assert win.cursor == (1, 1)
    win.resize(3, 3)
    assert win.lines() == ["ab ", "ef ", "   "]
    with pytest.raises(ValueError):
        win.resize(0, 3)


def test_row_text_out_of_range():
    with pytest.raises(IndexError):
        Window(2, 2).row_text(2)