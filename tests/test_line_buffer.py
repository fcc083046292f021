import pytest

from minishell.line_buffer import LineBuffer


def test_append_and_str():
    buf = LineBuffer()
    buf.append("ec")
    buf.append("ho")
    assert str(buf) == "echo"
    assert len(buf) == len("echo")


def test_insert_middle_and_end():
    buf = LineBuffer()
    buf.append("ac")
    buf.insert(1, "b")
    assert str(buf) == "abc"
    buf.insert(len(buf), "de")
    assert str(buf) == "abcde"
    buf.insert(0, ">")
    assert str(buf) == ">abcde"


def test_insert_out_of_range():
    buf = LineBuffer()
    buf.append("ab")
    with pytest.raises(IndexError):
        buf.insert(3, "x")
    with pytest.raises(IndexError):
        buf.insert(-1, "x")


def test_remove_before_end_and_start():
    buf = LineBuffer()
    buf.append("abc")
    buf.remove_before(3)
    assert str(buf) == "ab"
    buf.remove_before(1)
    assert str(buf) == "b"


def test_remove_before_middle():
    buf = LineBuffer()
    buf.append("abc")
    buf.remove_before(2)
    assert str(buf) == "ac"


def test_remove_before_zero_is_noop():
    buf = LineBuffer()
    buf.remove_before(0)
    assert str(buf) == ""
    buf.append("x")
    buf.remove_before(0)
    assert str(buf) == "x"


def test_remove_before_out_of_range():
    buf = LineBuffer()
    buf.append("x")
    with pytest.raises(IndexError):
        buf.remove_before(2)


def test_insert_then_remove_round_trip():
    buf = LineBuffer()
    buf.append("hello")
    buf.insert(2, "Z")
    buf.remove_before(3)
    assert str(buf) == "hello"


def test_clear():
    buf = LineBuffer()
    buf.append("something")
    buf.clear()
    assert str(buf) == ""
    assert len(buf) == 0