import pytest

from minishell.environment import Environment
from minishell.expansion import expand_tokens, expand_variables
from minishell.tokenizer import TokenType, tokenize


@pytest.fixture
def env():
    return Environment.from_strings(["HOME=/home/user", "USER=bob", "P=a"])


def texts(tokens):
    return [token.text for token in tokens]


def test_variable(env):
    assert expand_variables("$HOME", env, 0) == "/home/user"


def test_last_status(env):
    assert expand_variables("$?", env, 42) == "42"


def test_unknown_variable_is_empty(env):
    assert expand_variables("$NOPE", env, 0) == ""


def test_lone_dollar_kept(env):
    assert expand_variables("$", env, 0) == "$"


def test_dollar_before_non_name_is_dropped(env):
    assert expand_variables("$1x", env, 0) == "1x"


def test_variable_inside_text(env):
    assert expand_variables("a$USER-b", env, 0) == "abob-b"


def test_text_without_dollar_unchanged(env):
    assert expand_variables("plain", env, 7) == "plain"


def test_expand_tokens_env(env):
    tokens = expand_tokens(tokenize("echo $HOME"), env, 0)
    assert texts(tokens) == ["echo", "/home/user"]
    assert not any(token.expand_env for token in tokens)


def test_single_quoted_not_expanded(env):
    assert texts(expand_tokens(tokenize("'$HOME'"), env, 0)) == ["$HOME"]


def test_operators_pass_through(env):
    tokens = tokenize("a | b ; c")
    assert expand_tokens(tokens, env, 0) == tokens


@pytest.fixture
def sources(tmp_path, monkeypatch):
    for name in ("a.c", "b.c", "c.h", ".hidden.c"):
        (tmp_path / name).write_text("")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_wildcard_expansion(env, sources):
    tokens = expand_tokens(tokenize("ls *.c"), env, 0)
    assert tokens[0].text == "ls"
    assert sorted(texts(tokens[1:])) == ["a.c", "b.c"]
    assert all(token.type == TokenType.WORD for token in tokens)


def test_wildcard_without_match_is_kept(env, sources):
    assert texts(expand_tokens(tokenize("*.zzz"), env, 0)) == ["*.zzz"]


def test_env_expanded_before_wildcard(env, sources):
    assert texts(expand_tokens(tokenize("$P*"), env, 0)) == ["a.c"]


def test_quoted_star_not_globbed(env, sources):
    assert texts(expand_tokens(tokenize("'*.c'"), env, 0)) == ["*.c"]