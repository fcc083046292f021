"""Raw terminal mode and the interactive line editor."""

from __future__ import annotations

import io
import os
import shutil
import sys
import termios
from typing import Optional, TextIO

from minishell.history import History
from minishell.line_buffer import LineBuffer
from minishell.utils import PROMPT

PROMPT_SIZE = len(PROMPT)
BUF_SIZE = 8

KEY_UP = "\x1b[A"
KEY_DOWN = "\x1b[B"
KEY_RIGHT = "\x1b[C"
KEY_LEFT = "\x1b[D"

_SAVE = "\x1b7"
_RESTORE = "\x1b8"
_CLEAR_EOS = "\x1b[J"
_UP = "\x1b[A"
_DOWN = "\x1b[B"
_RIGHT = "\x1b[C"
_LEFT = "\x1b[D"


def keys_match(received: str, expected: str) -> bool:
    """Compare a key sequence, letting ``[`` stand for ``O`` of keypad mode."""
    if len(received) != len(expected):
        return False
    return all(r == e or (r == "[" and e == "O") for r, e in zip(received, expected))


class RawMode:
    """Context manager that turns off echo, line buffering and signal keys."""

    def __init__(self, fd: int = 0) -> None:
        self.fd = fd
        self._saved: Optional[list] = None

    def __enter__(self) -> "RawMode":
        self._saved = termios.tcgetattr(self.fd)
        attrs = [list(a) if isinstance(a, list) else a for a in self._saved]
        attrs[3] &= ~(termios.ECHO | termios.ICANON | termios.ISIG)
        attrs[6][termios.VMIN] = 1
        attrs[6][termios.VTIME] = 0
        termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
        return self

    def __exit__(self, *args) -> bool:
        if self._saved is not None:
            termios.tcsetattr(self.fd, termios.TCSANOW, self._saved)
            self._saved = None
        return False


def _split_keys(data: str) -> list[str]:
    keys = []
    index = 0
    while index < len(data):
        if data[index] == "\x1b" and index + 2 < len(data) + 0 and data[index + 1] in "[O":
            keys.append(data[index : index + 3])
            index += 3
        else:
            keys.append(data[index])
            index += 1
    return keys


class LineEditor:
    """Reads one line at a time with cursor keys, backspace and history."""

    def __init__(
        self,
        history: History,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.history = history
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout
        self._line = LineBuffer()
        self._pos = 0
        self._pending: list[str] = []

    def _read(self) -> str:
        try:
            fd = self._in.fileno()
        except (AttributeError, io.UnsupportedOperation):
            return self._in.read(BUF_SIZE)
        return os.read(fd, BUF_SIZE).decode("utf-8", "replace")

    def _next_key(self) -> Optional[str]:
        while not self._pending:
            data = self._read()
            if not data:
                return None
            self._pending.extend(_split_keys(data))
        return self._pending.pop(0)

    def _write(self, text: str) -> None:
        self._out.write(text)

    @staticmethod
    def _columns() -> int:
        return max(shutil.get_terminal_size().columns, 2)

    def _replace(self, text: Optional[str]) -> None:
        self._write(_RESTORE + _CLEAR_EOS)
        self._line.clear()
        if text:
            self._line.append(text)
            self._write(text)
        self._pos = len(self._line)

    def _left(self) -> None:
        if not self._pos:
            return
        cols = self._columns()
        if (self._pos + PROMPT_SIZE) % cols == 0:
            self._write(_UP + _RIGHT * cols)
        else:
            self._write(_LEFT)
        self._pos -= 1

    def _right(self) -> None:
        if self._pos >= len(self._line):
            return
        cols = self._columns()
        if (self._pos + 1 + PROMPT_SIZE) % cols == 0:
            self._write(_DOWN + _LEFT * cols)
        else:
            self._write(_RIGHT)
        self._pos += 1

    def _redraw(self, new_pos: int) -> None:
        cols = self._columns()
        self._write(_RESTORE + _CLEAR_EOS + str(self._line) + _RESTORE)
        for step in range(new_pos):
            if (step + PROMPT_SIZE) % (cols - 1) == 0:
                self._write(_DOWN + _LEFT * cols)
            else:
                self._write(_RIGHT)
        self._pos = new_pos

    def _insert(self, char: str) -> None:
        self._line.insert(self._pos, char)
        self._redraw(self._pos + 1)

    def _delete(self) -> None:
        if self._pos:
            self._line.remove_before(self._pos)
            self._redraw(self._pos - 1)

    def read_line(self) -> Optional[str]:
        """Read a line; "" after Ctrl-C, None at end of input."""
        self._write(PROMPT + _SAVE)
        self._out.flush()
        self._line.clear()
        self._pos = 0
        while True:
            key = self._next_key()
            if key is None:
                return str(self._line) if len(self._line) else None
            if key in ("\n", "\r"):
                self._write("\n")
                self._out.flush()
                return str(self._line)
            if key == "\x03":
                self._write("\n")
                self._out.flush()
                return ""
            if key == "\x04":
                if self._pos == 0:
                    return None
            elif keys_match(key, KEY_UP):
                self._replace(self.history.up())
            elif keys_match(key, KEY_DOWN):
                self._replace(self.history.down(str(self._line)))
            elif keys_match(key, KEY_LEFT):
                self._left()
            elif keys_match(key, KEY_RIGHT):
                self._right()
            elif key in ("\x7f", "\b"):
                self._delete()
            elif " " <= key <= "~":
                self._insert(key)
            self._out.flush()