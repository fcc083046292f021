"""Helpers shared by the shell: number parsing, listings, lookup and globbing."""

from __future__ import annotations

import os
from typing import Iterable, Optional

from minishell.environment import Environment

PROMPT = "minishell: "

_LONG_LONG_MAX = "9223372036854775807"
_LONG_LONG_MIN_ABS = "9223372036854775808"
_MAX_DIGITS = 19


def _within_limit(digits: str, negative: bool) -> bool:
    limit = _LONG_LONG_MIN_ABS if negative else _LONG_LONG_MAX
    return all(d <= lim for d, lim in zip(digits, limit))


def parse_long_long(text: str) -> int:
    """Parse a signed 64-bit integer as the ``exit`` builtin does.

    Raises ValueError when the text is not such a number.
    """
    negative = text.startswith("-")
    digits = text[1:] if text[:1] in ("-", "+") else text
    significant = digits.lstrip("0")
    if len(digits) > _MAX_DIGITS or not all("0" <= c <= "9" for c in significant):
        raise ValueError(f"numeric argument required: {text}")
    if len(digits) == _MAX_DIGITS and not _within_limit(digits, negative):
        raise ValueError(f"numeric argument required: {text}")
    number = int(digits) if digits else 0
    return -number if negative else number


def _byte_key(text: str) -> bytes:
    return text.encode("utf-8", "surrogateescape")


def export_listing(entries: Iterable[str]) -> list[str]:
    """Return ``declare -x`` lines for *entries*, sorted bytewise."""
    return [f"declare -x {entry}" for entry in sorted(entries, key=_byte_key)]


def error_message(name: str, message: str) -> str:
    """Compose an error message prefixed with the shell prompt."""
    return f"{PROMPT}{name}{message}"


def find_executable(name: str, env: Environment) -> Optional[str]:
    """Locate *name* in the directories of ``PATH``.

    Names starting with ``/`` or ``.`` are returned unchanged.
    """
    if name.startswith(("/", ".")):
        return name
    path = env.get("PATH")
    if path is None:
        return None
    for directory in filter(None, path.split(":")):
        try:
            entries = os.listdir(directory)
        except OSError:
            continue
        if name in entries:
            return f"{directory}/{name}"
    return None


def _matches(pattern: str, name: str) -> bool:
    common = 0
    for p_char, n_char in zip(pattern, name):
        if p_char != n_char:
            break
        common += 1
    pattern, name = pattern[common:], name[common:]
    if not pattern and not name:
        return True
    if not pattern.startswith("*"):
        return False
    rest = pattern[1:]
    if rest and any(
        char == rest[0] and _matches(rest, name[offset:])
        for offset, char in enumerate(name)
    ):
        return True
    return _matches(rest, "")


def wildcard_match(pattern: str, name: str) -> bool:
    """Return True if *name* matches *pattern*, where ``*`` is the only wildcard."""
    return _matches(pattern, name)


def expand_wildcard(pattern: str, directory: Optional[str] = None) -> list[str]:
    """List the non-hidden entries of *directory* (default: cwd) matching *pattern*."""
    try:
        entries = os.listdir(directory if directory is not None else os.getcwd())
    except OSError:
        return []
    return [
        entry
        for entry in entries
        if not entry.startswith(".") and wildcard_match(pattern, entry)
    ]