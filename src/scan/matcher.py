"""Locate ``receiver.method(...)`` call expressions in a token stream."""

from __future__ import annotations

import re
from collections.abc import Sequence

from scan.tokens import ATOMIC_KINDS, Token, TokenKind
from serde_msgspec import StructBaseHotPath

PREVIEW_LIMIT = 100
_PREVIEW_ELLIPSIS = "..."
_WHITESPACE_RE = re.compile(r"\s+")


class Match(StructBaseHotPath, frozen=True):
    """A located diagnostic call expression.

    Parameters
    ----------
    start_offset
        Offset of the receiver token.
    end_offset
        Exclusive end of the call, including an absorbed ``;``.
    start_line
        0-based line of the receiver token.
    method_name
        Allow-listed method that was called.
    preview
        Collapsed, length-capped rendering of the matched text.
    """

    start_offset: int
    end_offset: int
    start_line: int
    method_name: str
    preview: str


def build_preview(text: str, start: int, end: int) -> str:
    """Return a single-line preview of ``text[start:end]``.

    Returns
    -------
    str
        Whitespace-collapsed text capped at ``PREVIEW_LIMIT`` characters.
    """
    preview = _WHITESPACE_RE.sub(" ", text[start:end]).strip()
    if len(preview) > PREVIEW_LIMIT:
        return preview[: PREVIEW_LIMIT - len(_PREVIEW_ELLIPSIS)] + _PREVIEW_ELLIPSIS
    return preview


def _next_significant(tokens: Sequence[Token], index: int) -> int | None:
    for position in range(index, len(tokens)):
        if not tokens[position].is_trivia:
            return position
    return None


def _expect(tokens: Sequence[Token], index: int, kind: TokenKind) -> int | None:
    position = _next_significant(tokens, index)
    if position is None or tokens[position].kind is not kind:
        return None
    return position


def find_closing_paren(tokens: Sequence[Token], open_index: int) -> int | None:
    """Return the index of the paren closing ``tokens[open_index]``.

    Strings, templates and comments are single tokens, so parentheses
    inside them are never counted.

    Returns
    -------
    int | None
        Index of the matching close paren, or ``None`` when unbalanced.
    """
    depth = 1
    for position in range(open_index + 1, len(tokens)):
        kind = tokens[position].kind
        if kind in ATOMIC_KINDS:
            continue
        if kind is TokenKind.PAREN_OPEN:
            depth += 1
        elif kind is TokenKind.PAREN_CLOSE:
            depth -= 1
            if depth == 0:
                return position
    return None


def _terminator_end(tokens: Sequence[Token], close_index: int) -> int:
    end = tokens[close_index].end_offset
    position = _next_significant(tokens, close_index + 1)
    if position is not None and tokens[position].text == ";":
        return tokens[position].end_offset
    return end


def find_matches(tokens: Sequence[Token], *, text: str | None = None) -> list[Match]:
    """Return all non-overlapping call matches in source order.

    Parameters
    ----------
    tokens
        Lossless token stream from ``tokenize_source``.
    text
        Original text; rebuilt from the tokens when omitted.

    Returns
    -------
    list[Match]
        Matches ordered by start offset.
    """
    source = text if text is not None else "".join(token.text for token in tokens)
    matches: list[Match] = []
    index = 0
    while index < len(tokens):
        receiver = tokens[index]
        if receiver.kind is not TokenKind.RECEIVER:
            index += 1
            continue
        dot_index = _expect(tokens, index + 1, TokenKind.DOT)
        method_index = (
            _expect(tokens, dot_index + 1, TokenKind.METHOD) if dot_index is not None else None
        )
        open_index = (
            _expect(tokens, method_index + 1, TokenKind.PAREN_OPEN)
            if method_index is not None
            else None
        )
        close_index = find_closing_paren(tokens, open_index) if open_index is not None else None
        if method_index is None or close_index is None:
            index += 1
            continue
        end = _terminator_end(tokens, close_index)
        matches.append(
            Match(
                start_offset=receiver.start_offset,
                end_offset=end,
                start_line=receiver.start_line,
                method_name=tokens[method_index].text,
                preview=build_preview(source, receiver.start_offset, end),
            )
        )
        index = close_index + 1
    return matches


__all__ = ["PREVIEW_LIMIT", "Match", "build_preview", "find_closing_paren", "find_matches"]
