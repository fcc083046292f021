import pytest

from minishell.environment import Environment
from minishell.utils import (
    error_message,
    expand_wildcard,
    export_listing,
    find_executable,
    parse_long_long,
    wildcard_match,
)


def test_parse_simple_numbers():
    assert parse_long_long("42") == int("42")
    assert parse_long_long("+7") == int("7")
    assert parse_long_long("-15") == -int("15")


def test_parse_limits():
    assert parse_long_long("9223372036854775807") == 9223372036854775807
    assert parse_long_long("-9223372036854775808") == -9223372036854775808


@pytest.mark.parametrize(
    "text",
    [
        "9223372036854775808",
        "-9223372036854775809",
        "12a",
        "+-5",
        "abc",
        "00000000000000000005",
        "1900000000000000000",
    ],
)
def test_parse_rejects(text):
    with pytest.raises(ValueError):
        parse_long_long(text)


def test_parse_leading_zeros_within_length():
    assert parse_long_long("0007") == int("7")


def test_export_listing_sorted():
    lines = export_listing(["b=2", "a=1", "A"])
    assert lines == ["declare -x A", "declare -x a=1", "declare -x b=2"]


def test_export_listing_empty():
    assert export_listing([]) == []


def test_error_message():
    assert (
        error_message("ls", ": command not found\n")
        == "minishell: ls: command not found\n"
    )


def test_find_executable_in_path(tmp_path):
    (tmp_path / "tool").write_text("")
    env = Environment.from_strings([f"PATH=/nonexistent_dir_xyz:{tmp_path}:"])
    assert find_executable("tool", env) == f"{tmp_path}/tool"


def test_find_executable_relative_and_absolute_returned_as_is():
    env = Environment.from_strings([])
    assert find_executable("./run", env) == "./run"
    assert find_executable("/bin/sh", env) == "/bin/sh"


def test_find_executable_missing(tmp_path):
    env = Environment.from_strings([f"PATH={tmp_path}"])
    assert find_executable("absent", env) is None
    assert find_executable("absent", Environment.from_strings([])) is None


@pytest.mark.parametrize(
    "pattern, name, expected",
    [
        ("*.py", "a.py", True),
        ("*", "anything", True),
        ("a*c", "abbc", True),
        ("a*", "a", True),
        ("a*", "b", False),
        ("*.py", "a.pyc", False),
        ("abc", "abc", True),
        ("abc", "abd", False),
        ("**b", "xb", False),
    ],
)
def test_wildcard_match(pattern, name, expected):
    assert wildcard_match(pattern, name) is expected


def test_expand_wildcard_skips_hidden(tmp_path):
    for name in ["a.txt", "b.txt", ".hidden.txt", "c.py"]:
        (tmp_path / name).write_text("")
    assert sorted(expand_wildcard("*.txt", str(tmp_path))) == ["a.txt", "b.txt"]


def test_expand_wildcard_missing_directory(tmp_path):
    assert expand_wildcard("*", str(tmp_path / "nope")) == []