"""Turn validated tokens into statements of piped commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable

from minishell.tokenizer import ShellSyntaxError, Token, TokenType


class RedirectionType(IntEnum):
    """How a redirection opens its file."""

    INPUT = 1
    OUTPUT = 2
    APPEND = 3


@dataclass(frozen=True)
class Redirection:
    filename: str
    type: RedirectionType


@dataclass
class Command:
    """One simple command of a pipeline."""

    argv: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)
    pipe_in: bool = False
    pipe_out: bool = False


def split_statements(tokens: Iterable[Token]) -> list[list[Token]]:
    """Split *tokens* at semicolons, dropping empty statements."""
    statements: list[list[Token]] = []
    current: list[Token] = []
    for token in tokens:
        if token.type == TokenType.SEMICOLON:
            if current:
                statements.append(current)
            current = []
        else:
            current.append(token)
    if current:
        statements.append(current)
    return statements


def build_pipeline(tokens: Iterable[Token]) -> list[Command]:
    """Build the commands of one statement, split at pipes.

    Raises ValueError if the tokens hold a semicolon.
    """
    commands: list[Command] = []
    current = None
    stream = iter(tokens)
    for token in stream:
        if token.type == TokenType.SEMICOLON:
            raise ValueError("a pipeline cannot contain a semicolon")
        if current is None:
            current = Command(pipe_in=bool(commands))
            commands.append(current)
        if token.type == TokenType.PIPE:
            current.pipe_out = True
            current = None
        elif token.is_redirection:
            target = next(stream, None)
            if target is None or not target.is_word:
                raise ShellSyntaxError(
                    f"syntax error near unexpected token `{token.text}'", 258
                )
            current.redirections.append(
                Redirection(target.text, RedirectionType(int(token.type)))
            )
        else:
            current.argv.append(token.text)
    return commands