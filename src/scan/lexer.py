"""Lossless lexical scanner for JavaScript-family source text.

The scanner is deliberately shallow: it knows just enough about strings,
comments and template literals to keep call-like text inside them from
looking like code. It never raises on malformed input; unterminated
constructs extend to the end of the text.
"""

from __future__ import annotations

import string
from collections.abc import Iterable

from scan.methods import DEFAULT_RECEIVER, normalize_methods
from scan.tokens import Token, TokenKind

_IDENT_START = frozenset(string.ascii_letters + "_$")
_IDENT_PART = _IDENT_START | frozenset(string.digits)

_SINGLE_CHAR_KINDS: dict[str, TokenKind] = {
    "(": TokenKind.PAREN_OPEN,
    ")": TokenKind.PAREN_CLOSE,
    ".": TokenKind.DOT,
}


class _Lexer:
    """Single-pass cursor over one source text."""

    def __init__(self, text: str, *, receiver: str, methods: frozenset[str]) -> None:
        self._text = text
        self._size = len(text)
        self._receiver = receiver
        self._methods = methods
        self._pos = 0
        self._line = 0
        self._tokens: list[Token] = []
        # Brace depth inside each open `${ ... }` template expression.
        self._template_depths: list[int] = []

    def run(self) -> list[Token]:
        while self._pos < self._size:
            self._step()
        return self._tokens

    def _emit(self, kind: TokenKind, start: int, end: int) -> None:
        start_line = self._line
        self._pos = end
        self._tokens.append(
            Token(
                kind=kind,
                text=self._text[start:end],
                start_offset=start,
                end_offset=end,
                start_line=start_line,
            )
        )
        self._line += self._text.count("\n", start, end)

    def _step(self) -> None:
        text = self._text
        pos = self._pos
        char = text[pos]
        if char == "\n":
            self._emit(TokenKind.WHITESPACE, pos, pos + 1)
            return
        if char.isspace():
            self._lex_whitespace(pos)
            return
        follower = text[pos + 1 : pos + 2]
        if char == "/" and follower == "/":
            end = text.find("\n", pos + 2)
            self._emit(TokenKind.COMMENT, pos, self._size if end == -1 else end)
            return
        if char == "/" and follower == "*":
            end = text.find("*/", pos + 2)
            self._emit(TokenKind.COMMENT, pos, self._size if end == -1 else end + 2)
            return
        if char in {"'", '"'}:
            self._lex_quoted(pos, char)
            return
        if char == "`":
            self._lex_template_text(pos)
            return
        if char in _IDENT_START:
            self._lex_identifier(pos)
            return
        if self._template_depths and char in {"{", "}"}:
            if char == "}" and self._template_depths[-1] == 0:
                self._template_depths.pop()
                self._lex_template_text(pos)
                return
            self._template_depths[-1] += 1 if char == "{" else -1
        self._emit(_SINGLE_CHAR_KINDS.get(char, TokenKind.OTHER), pos, pos + 1)

    def _lex_whitespace(self, start: int) -> None:
        end = start
        while end < self._size and self._text[end] != "\n" and self._text[end].isspace():
            end += 1
        self._emit(TokenKind.WHITESPACE, start, end)

    def _lex_quoted(self, start: int, quote: str) -> None:
        text = self._text
        pos = start + 1
        while pos < self._size:
            char = text[pos]
            if char == "\\":
                pos += 2
                continue
            pos += 1
            if char == quote:
                break
        self._emit(TokenKind.STRING, start, min(pos, self._size))

    def _lex_template_text(self, start: int) -> None:
        """Consume template text opened by a backtick or a closing ``}``.

        Stops after the closing backtick, or after ``${`` in which case the
        cursor returns to code mode with a new expression depth pushed.
        """
        text = self._text
        pos = start + 1
        while pos < self._size:
            char = text[pos]
            if char == "\\":
                pos += 2
                continue
            if char == "`":
                pos += 1
                break
            if char == "$" and text[pos + 1 : pos + 2] == "{":
                pos += 2
                self._template_depths.append(0)
                break
            pos += 1
        self._emit(TokenKind.TEMPLATE, start, min(pos, self._size))

    def _lex_identifier(self, start: int) -> None:
        text = self._text
        end = start + 1
        while end < self._size and text[end] in _IDENT_PART:
            end += 1
        value = text[start:end]
        if value == self._receiver:
            kind = TokenKind.RECEIVER
        elif value in self._methods:
            kind = TokenKind.METHOD
        else:
            kind = TokenKind.IDENTIFIER
        self._emit(kind, start, end)


def tokenize_source(
    text: str,
    *,
    receiver: str = DEFAULT_RECEIVER,
    methods: Iterable[str] | None = None,
) -> list[Token]:
    """Convert source text into a flat, lossless token list.

    Parameters
    ----------
    text
        Full text of one source file.
    receiver
        Identifier classified as the diagnostic receiver.
    methods
        Method allow-list; ``None`` selects the default console methods.

    Returns
    -------
    list[Token]
        Contiguous tokens whose texts concatenate back to ``text``.
    """
    lexer = _Lexer(text, receiver=receiver, methods=normalize_methods(methods))
    return lexer.run()


__all__ = ["tokenize_source"]
