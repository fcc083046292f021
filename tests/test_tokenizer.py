import pytest

from minishell.tokenizer import (
    ShellSyntaxError,
    Token,
    TokenType,
    check_tokens,
    parse,
    tokenize,
)


def texts(tokens):
    return [item.text for item in tokens]


def test_words_split_on_spaces_and_tabs():
    tokens = tokenize("echo  hello\tworld")
    assert texts(tokens) == ["echo", "hello", "world"]
    assert all(item.type == TokenType.WORD for item in tokens)


def test_operators():
    tokens = tokenize("cat < in > out >> log | wc ; ls")
    assert [item.type for item in tokens] == [
        TokenType.WORD,
        TokenType.REDIRECT_IN,
        TokenType.WORD,
        TokenType.REDIRECT_OUT,
        TokenType.WORD,
        TokenType.REDIRECT_APPEND,
        TokenType.WORD,
        TokenType.PIPE,
        TokenType.WORD,
        TokenType.SEMICOLON,
        TokenType.WORD,
    ]
    assert tokens[5].text == ">>"


def test_operators_need_no_spaces():
    assert texts(tokenize("a|b;c>d")) == ["a", "|", "b", ";", "c", ">", "d"]


def test_quotes_keep_spaces():
    assert texts(tokenize("echo 'a b' \"c d\"")) == ["echo", "a b", "c d"]


def test_adjacent_quoted_parts_join():
    assert texts(tokenize("a'b'\"c\"")) == ["abc"]


def test_single_quotes_do_not_mark_env():
    first = tokenize("'$HOME'")[0]
    assert first.text == "$HOME"
    assert first.expand_env is False


def test_double_quotes_mark_env():
    first = tokenize('"$HOME"')[0]
    assert first.text == "$HOME"
    assert first.expand_env is True


def test_dollar_before_quote_is_dropped():
    first = tokenize('$"abc"')[0]
    assert first.text == "abc"
    assert first.expand_env is False


def test_backslash_escapes_in_normal_mode():
    first = tokenize(r"a\ b\$")[0]
    assert first.text == "a b$"
    assert first.expand_env is False


def test_backslash_in_double_quotes():
    assert tokenize(r'"a\"b"')[0].text == 'a"b'
    assert tokenize(r'"a\\b"')[0].text == "a\\b"
    assert tokenize(r'"a\nb"')[0].text == r"a\nb"


def test_wildcard_flag_only_unquoted():
    assert tokenize("*.c")[0].wildcard is True
    assert tokenize("'*.c'")[0].wildcard is False


def test_empty_quotes_vanish():
    assert texts(tokenize("echo '' x \"\"")) == ["echo", "x"]


def test_empty_line():
    assert tokenize("") == []
    assert tokenize("   ") == []


@pytest.mark.parametrize("line", ["echo 'abc", 'echo "abc', "'a\"b"])
def test_open_quote(line):
    with pytest.raises(ShellSyntaxError, match="open quote") as info:
        tokenize(line)
    assert info.value.status is None


@pytest.mark.parametrize(
    "line, culprit",
    [
        ("; a", ";"),
        ("| a", "|"),
        ("a |", "|"),
        ("a >", ">"),
        ("a > | b", ">"),
        ("a ; ; b", ";"),
        ("a | ; b", "|"),
        ("cat > *.c", ">"),
        ("cat < < f", "<"),
    ],
)
def test_syntax_errors(line, culprit):
    with pytest.raises(ShellSyntaxError) as info:
        parse(line)
    assert str(info.value) == f"syntax error near unexpected token `{culprit}'"
    assert info.value.status == 258


@pytest.mark.parametrize("line", ["a ; b", "a ;", "a || b", "cat < in > out", ""])
def test_valid_lines(line):
    assert parse(line) == tokenize(line)


def test_check_tokens_accepts_quoted_star_after_redirect():
    tokens = tokenize("cat > '*.c'")
    check_tokens(tokens)
    assert tokens[-1] == Token(TokenType.WORD, "*.c")