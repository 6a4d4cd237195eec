import io

import pytest

from minishell.console import Console


def make_console(text=""):
    out = io.StringIO()
    return Console(io.StringIO(text), out), out


def test_read_chars_in_order():
    console, _ = make_console("ab")
    assert console.read_char() == "a"
    assert console.read_char() == "b"


def test_read_past_end_raises_eof():
    console, _ = make_console("x")
    console.read_char()
    with pytest.raises(EOFError):
        console.read_char()


def test_write_char_and_write():
    console, out = make_console()
    console.write_char("h")
    console.write("ello")
    assert out.getvalue() == "hello"


def test_backspace_sequence():
    console, out = make_console()
    console.write("ab")
    console.backspace()
    assert out.getvalue() == "ab\b \b"


def test_empty_write_produces_nothing():
    console, out = make_console()
    console.write("")
    assert out.getvalue() == ""