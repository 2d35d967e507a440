import io

import pytest

from duotris.piece import FILLED_CELL
from duotris.terminal import (
    CLEAR_SCREEN,
    HIDE_CURSOR,
    SHOW_CURSOR,
    Terminal,
)


def make(keys=()):
    out = io.StringIO()
    return Terminal(output=out, keys=keys), out


def test_write_passes_text_through():
    term, out = make()
    term.write("hello")
    assert out.getvalue() == "hello"


def test_goto_positions_cursor():
    term, out = make()
    term.goto(1, 2)
    assert out.getvalue() == "\x1b[3;2H"


def test_clear_writes_clear_sequence():
    term, out = make()
    term.clear()
    assert out.getvalue() == CLEAR_SCREEN


def test_draw_point_filled_and_empty():
    term, out = make()
    term.draw_point(0, 0, True)
    filled = out.getvalue()
    assert FILLED_CELL in filled
    term2, out2 = make()
    term2.draw_point(0, 0, False)
    assert FILLED_CELL not in out2.getvalue()
    assert out2.getvalue().endswith(" ")


def test_context_manager_hides_and_shows_cursor():
    term, out = make()
    with term as entered:
        assert entered is term
    text = out.getvalue()
    assert text.startswith(HIDE_CURSOR)
    assert text.endswith(SHOW_CURSOR)


def test_scripted_keys_in_order():
    term, _ = make(["a", "b"])
    assert term.key_available() is True
    assert term.read_key() == "a"
    assert term.read_key() == "b"
    assert term.key_available() is False


def test_none_marks_a_pause():
    term, _ = make(["a", None, "b"])
    assert term.read_key() == "a"
    assert term.key_available() is False
    assert term.key_available() is True
    assert term.read_key() == "b"


def test_read_key_skips_pauses():
    term, _ = make([None, None, "q"])
    assert term.read_key() == "q"


def test_read_key_raises_when_script_is_exhausted():
    term, _ = make([])
    with pytest.raises(EOFError):
        term.read_key()