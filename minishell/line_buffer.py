"""Editable text of the line being typed at the prompt."""

from __future__ import annotations


class LineBuffer:
    """A growable line of text edited at arbitrary positions."""

    def __init__(self) -> None:
        self._text = ""

    def __str__(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def append(self, text: str) -> None:
        """Add *text* at the end."""
        self._text += text

    def insert(self, position: int, text: str) -> None:
        """Insert *text* before *position*; raise IndexError when out of range."""
        if not 0 <= position <= len(self._text):
            raise IndexError(f"position {position} out of range")
        self._text = self._text[:position] + text + self._text[position:]

    def remove_before(self, position: int) -> None:
        """Delete the character just before *position*; position 0 does nothing."""
        if position == 0:
            return
        if not 0 < position <= len(self._text):
            raise IndexError(f"position {position} out of range")
        self._text = self._text[: position - 1] + self._text[position:]

    def clear(self) -> None:
        """Empty the buffer."""
        self._text = ""