"""Variable and wildcard expansion of parsed words."""

from __future__ import annotations

import dataclasses
import re
from typing import Iterable

from minishell.environment import Environment
from minishell.tokenizer import Token, TokenType
from minishell.utils import expand_wildcard

_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _substitute(rest: str, env: Environment, last_status: int) -> tuple[str, str]:
    """Expand the reference following a ``$``; return its value and the rest."""
    if rest.startswith("?"):
        return str(last_status), rest[1:]
    match = _NAME.match(rest)
    if match:
        return env.get(match.group()) or "", rest[match.end():]
    if not rest or rest.startswith('"'):
        return "$", rest
    return "", rest


def expand_variables(text: str, env: Environment, last_status: int) -> str:
    """Replace ``$NAME`` and ``$?`` references in *text*."""
    parts = []
    rest = text
    while True:
        before, dollar, rest = rest.partition("$")
        parts.append(before)
        if not dollar:
            break
        value, rest = _substitute(rest, env, last_status)
        parts.append(value)
    return "".join(parts)


def expand_tokens(
    tokens: Iterable[Token], env: Environment, last_status: int
) -> list[Token]:
    """Expand variables, then wildcards, in the words of *tokens*.

    A wildcard word with no matches in the current directory is kept as is.
    """
    result: list[Token] = []
    for token in tokens:
        if token.expand_env:
            token = dataclasses.replace(
                token,
                text=expand_variables(token.text, env, last_status),
                expand_env=False,
            )
        if token.wildcard:
            matches = expand_wildcard(token.text)
            if matches:
                result.extend(Token(TokenType.WORD, name) for name in matches)
                continue
        result.append(token)
    return result