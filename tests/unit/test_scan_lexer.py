"""Tests for the lossless source tokenizer."""

from __future__ import annotations

import pytest

from scan.lexer import tokenize_source
from scan.tokens import TokenKind

_TRICKY_SOURCES = (
    "",
    "console.log('x');\n",
    "a();\r\n  console.log(1);\r\nb();\r\n",
    "const s = 'unterminated console.log(",
    "/* never closed console.log(1)",
    "// trailing comment without newline",
    "`a${ {b: `c${console.log(1)}`} }d`",
    "`unterminated ${console.log(1)",
    "const re = 'it\\'s'; console . log ( x ) ;\t\n",
    "x = a ? b : c; éè = '☃';\n",
    "}}}{{{ ` ${ } ` ) ( ",
)


@pytest.mark.parametrize("source", _TRICKY_SOURCES)
def test_tokens_concatenate_to_source(source: str) -> None:
    """Ensure token texts reproduce the input exactly, malformed or not."""
    tokens = tokenize_source(source)
    assert "".join(token.text for token in tokens) == source
    offset = 0
    for token in tokens:
        assert token.start_offset == offset
        assert token.end_offset == offset + len(token.text)
        offset = token.end_offset
    assert offset == len(source)


def test_call_tokens_are_classified() -> None:
    """Ensure receiver, method and punctuation get their own kinds."""
    tokens = tokenize_source("console.log(value)")
    assert [token.kind for token in tokens] == [
        TokenKind.RECEIVER,
        TokenKind.DOT,
        TokenKind.METHOD,
        TokenKind.PAREN_OPEN,
        TokenKind.IDENTIFIER,
        TokenKind.PAREN_CLOSE,
    ]


def test_unknown_method_is_plain_identifier() -> None:
    """Ensure names outside the allow-list are not method tokens."""
    tokens = tokenize_source("console.customThing()")
    assert tokens[2].kind is TokenKind.IDENTIFIER


def test_custom_receiver_and_methods() -> None:
    """Ensure receiver and allow-list are inputs, not constants."""
    tokens = tokenize_source("logger.debug(x); console.log(y)", receiver="logger", methods=["debug"])
    kinds = {token.text: token.kind for token in tokens}
    assert kinds["logger"] is TokenKind.RECEIVER
    assert kinds["debug"] is TokenKind.METHOD
    assert kinds["console"] is TokenKind.IDENTIFIER
    assert kinds["log"] is TokenKind.IDENTIFIER


def test_strings_and_comments_are_single_tokens() -> None:
    """Ensure call-like text inside literals and comments stays atomic."""
    source = "'console.log(1)' \"console.log(2)\" // console.log(3)\n/* console.log(4) */"
    tokens = tokenize_source(source)
    significant = [token for token in tokens if token.kind is not TokenKind.WHITESPACE]
    assert [token.kind for token in significant] == [
        TokenKind.STRING,
        TokenKind.STRING,
        TokenKind.COMMENT,
        TokenKind.COMMENT,
    ]


def test_escaped_quote_does_not_end_string() -> None:
    """Ensure a backslash-escaped quote stays inside the string."""
    tokens = tokenize_source("'it\\'s console.log(1)' + x")
    assert tokens[0].kind is TokenKind.STRING
    assert tokens[0].text == "'it\\'s console.log(1)'"


def test_template_expression_is_code() -> None:
    """Ensure `${...}` contents are tokenized as code between template text."""
    tokens = tokenize_source("`a ${console.log(x)} b`")
    assert tokens[0].kind is TokenKind.TEMPLATE
    assert tokens[0].text == "`a ${"
    assert tokens[1].kind is TokenKind.RECEIVER
    assert tokens[-1].kind is TokenKind.TEMPLATE
    assert tokens[-1].text == "} b`"


def test_object_literal_inside_template_expression() -> None:
    """Ensure braces inside an interpolation do not end it early."""
    tokens = tokenize_source("`${ {a: 1} } tail`")
    assert tokens[-1].kind is TokenKind.TEMPLATE
    assert tokens[-1].text == "} tail`"


def test_line_numbers_advance_per_newline() -> None:
    """Ensure tokens carry the 0-based line they start on."""
    tokens = tokenize_source("a\n/* x\ny */\nconsole.log(1)")
    receiver = next(token for token in tokens if token.kind is TokenKind.RECEIVER)
    assert receiver.start_line == 3


def test_newline_is_its_own_whitespace_token() -> None:
    """Ensure line breaks are not merged into surrounding whitespace."""
    tokens = tokenize_source("  \n  x")
    assert [token.text for token in tokens] == ["  ", "\n", "  ", "x"]
    assert all(token.is_trivia for token in tokens[:3])
