"""Command history kept per nesting level of the shell, backed by files."""

from __future__ import annotations

import os
from typing import Iterable, Optional, Union

from minishell.environment import Environment

HISTORY_FNAME = "history/history_term"
_LEVEL_VARIABLE = "MINISHLVL"
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def _program_directory(program_name: Optional[str]) -> Optional[str]:
    if not program_name:
        return None
    name = program_name.lstrip(" \t")
    if name.startswith("."):
        name = name[1:]
        if name.startswith("/"):
            name = name[1:]
    slash = name.rfind("/")
    if slash < 0:
        return None
    return name[: slash + 1]


def history_file_name(level: Union[str, int], program_name: Optional[str]) -> str:
    """Path of the history file for shell *level*, beside the program."""
    path = os.getcwd() + "/" + (_program_directory(program_name) or "")
    return f"{path}{HISTORY_FNAME}{level}"


def next_shell_level(env: Environment) -> str:
    """Raise ``MINISHLVL`` by one (wrapping after 9) and return the new value."""
    level = env.get(_LEVEL_VARIABLE)
    if level is None:
        env.set(_LEVEL_VARIABLE, "0")
        return "0"
    first = level[:1] or "\0"
    if first < "9":
        level = chr(ord(first) + 1) + level[1:]
    else:
        print("minishell: max mshlvl is 9, history will be override")
        level = "0" + level[1:]
    env.replace(_LEVEL_VARIABLE, level)
    return level


def _read_lines(path: str) -> list[str]:
    try:
        with open(path, "a+", encoding=_ENCODING, errors=_ERRORS) as handle:
            handle.seek(0)
            text = handle.read()
    except OSError:
        return []
    # Text after the last newline is not a complete entry.
    return text.split("\n")[:-1]


class History:
    """Entries newest first, with a cursor for arrow-key browsing.

    The first ``own_count`` entries belong to this shell level and are
    written back to ``path``.
    """

    def __init__(
        self, path: str, entries: Iterable[str] = (), own_count: int = 0
    ) -> None:
        self.path = path
        self.entries = list(entries)
        self.own_count = own_count
        self._cursor = 0

    @classmethod
    def load(cls, program_name: Optional[str], env: Environment) -> "History":
        """Read the history of this level and of every lower level."""
        level = next_shell_level(env)[:1] or "\0"
        path = history_file_name(level, program_name)
        entries: list[str] = []
        own_count = 0
        for code in range(ord(level), ord("0") - 1, -1):
            lines = _read_lines(history_file_name(chr(code), program_name))
            if chr(code) == level:
                own_count = len(lines)
            entries.extend(lines)
        return cls(path, entries, own_count)

    def up(self) -> Optional[str]:
        """Return the entry under the cursor and step to an older one."""
        if not self.entries:
            return None
        line = self.entries[self._cursor]
        if self._cursor + 1 < len(self.entries):
            self._cursor += 1
        return line

    def down(self, current_line: str) -> Optional[str]:
        """Step towards newer entries; None means back to an empty line."""
        if not self.entries or self._cursor == 0:
            return None
        last = self._cursor == len(self.entries) - 1
        if last and current_line == self.entries[self._cursor]:
            return self.entries[self._cursor - 1]
        self._cursor -= 1
        return self.entries[self._cursor - 1] if self._cursor > 0 else None

    def add(self, line: str) -> None:
        """Record *line* as newest unless it repeats the newest, then save."""
        if self.entries and self.entries[0] == line:
            return
        self.entries.insert(0, line)
        self.own_count += 1
        self._save()

    def reset(self) -> None:
        """Move the cursor back to the newest entry."""
        self._cursor = 0

    def _save(self) -> None:
        own = self.entries[: self.own_count]
        try:
            with open(self.path, "w", encoding=_ENCODING, errors=_ERRORS) as handle:
                handle.writelines(f"{line}\n" for line in own)
        except OSError:
            pass