"""Split a command line into words and operators, and validate the result."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Sequence

SYNTAX_ERROR_STATUS = 258


class TokenType(IntEnum):
    """Kinds of tokens; redirection values match the redirection kinds."""

    REDIRECT_IN = 1
    REDIRECT_OUT = 2
    REDIRECT_APPEND = 3
    PIPE = 4
    SEMICOLON = 7
    WORD = 8


_REDIRECTIONS = frozenset(
    {TokenType.REDIRECT_IN, TokenType.REDIRECT_OUT, TokenType.REDIRECT_APPEND}
)


@dataclass(frozen=True)
class Token:
    """A word or operator from the command line.

    ``expand_env`` marks words holding an unquoted or double-quoted ``$``;
    ``wildcard`` marks words holding an unquoted ``*``.
    """

    type: TokenType
    text: str
    expand_env: bool = False
    wildcard: bool = False

    @property
    def is_word(self) -> bool:
        return self.type == TokenType.WORD

    @property
    def is_redirection(self) -> bool:
        return self.type in _REDIRECTIONS


class ShellSyntaxError(Exception):
    """A command line that cannot be run; ``status`` is the new exit status, if any."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class _State(Enum):
    NORMAL = "normal"
    SINGLE = "single"
    DOUBLE = "double"


class _Lexer:
    def __init__(self, line: str) -> None:
        self._line = line
        self._index = 0
        self._state = _State.NORMAL
        self._tokens: list[Token] = []
        self._chars: list[str] = []
        self._env = False
        self._wildcard = False

    def _peek(self) -> str:
        return self._line[self._index + 1 : self._index + 2]

    def _add(self, char: str, *, env: bool = False, wildcard: bool = False) -> None:
        self._chars.append(char)
        self._env |= env
        self._wildcard |= wildcard

    def _end_word(self) -> None:
        if self._chars:
            self._tokens.append(
                Token(TokenType.WORD, "".join(self._chars), self._env, self._wildcard)
            )
        self._chars = []
        self._env = False
        self._wildcard = False

    def _operator(self, kind: TokenType, text: str) -> None:
        self._end_word()
        self._tokens.append(Token(kind, text))

    def _normal(self, char: str) -> None:
        if char == '"':
            self._state = _State.DOUBLE
        elif char == "'":
            self._state = _State.SINGLE
        elif char == "<":
            self._operator(TokenType.REDIRECT_IN, char)
        elif char == ">" and self._peek() == ">":
            self._index += 1
            self._operator(TokenType.REDIRECT_APPEND, ">>")
        elif char == ">":
            self._operator(TokenType.REDIRECT_OUT, char)
        elif char in " \t":
            self._end_word()
        elif char == ";":
            self._operator(TokenType.SEMICOLON, char)
        elif char == "|":
            self._operator(TokenType.PIPE, char)
        elif char == "*":
            self._add(char, wildcard=True)
        elif char == "\\":
            escaped = self._peek()
            self._index += 1
            if escaped:
                self._add(escaped)
        elif char == "$":
            if self._peek() not in ("'", '"'):
                self._add(char, env=True)
        else:
            self._add(char)

    def _double(self, char: str) -> None:
        if char == '"':
            self._state = _State.NORMAL
        elif char == "$":
            self._add(char, env=True)
        elif char == "\\" and self._peek() in ('"', "\\") and self._peek():
            self._index += 1
            self._add(self._line[self._index])
        else:
            self._add(char)

    def _single(self, char: str) -> None:
        if char == "'":
            self._state = _State.NORMAL
        else:
            self._add(char)

    def run(self) -> list[Token]:
        handlers = {
            _State.NORMAL: self._normal,
            _State.DOUBLE: self._double,
            _State.SINGLE: self._single,
        }
        while self._index < len(self._line):
            handlers[self._state](self._line[self._index])
            self._index += 1
        if self._state is not _State.NORMAL:
            raise ShellSyntaxError("syntax error: open quote")
        self._end_word()
        return self._tokens


def tokenize(line: str) -> list[Token]:
    """Split *line* into tokens; raise ShellSyntaxError on an unclosed quote."""
    return _Lexer(line).run()


def _unexpected(token: Token) -> ShellSyntaxError:
    return ShellSyntaxError(
        f"syntax error near unexpected token `{token.text}'", SYNTAX_ERROR_STATUS
    )


def check_tokens(tokens: Sequence[Token]) -> None:
    """Raise ShellSyntaxError if the operators in *tokens* are misplaced."""
    if not tokens:
        return
    first = tokens[0]
    if first.type in (TokenType.SEMICOLON, TokenType.PIPE):
        raise _unexpected(first)
    for earlier, later in zip(tokens, tokens[1:]):
        if earlier.is_redirection and (not later.is_word or later.wildcard):
            raise _unexpected(earlier)
        if not earlier.is_word and later.type == TokenType.SEMICOLON:
            raise _unexpected(earlier)
    last = tokens[-1]
    if last.is_redirection or last.type == TokenType.PIPE:
        raise _unexpected(last)


def parse(line: str) -> list[Token]:
    """Tokenize *line* and validate it."""
    tokens = tokenize(line)
    check_tokens(tokens)
    return tokens