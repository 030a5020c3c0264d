"""Token contract emitted by the lexical scanner."""

from __future__ import annotations

from enum import StrEnum

from serde_msgspec import StructBaseHotPath


class TokenKind(StrEnum):
    """Lexical category of a token."""

    RECEIVER = "identifier-receiver"
    METHOD = "identifier-method"
    IDENTIFIER = "identifier-other"
    DOT = "dot"
    PAREN_OPEN = "paren-open"
    PAREN_CLOSE = "paren-close"
    STRING = "string-literal"
    TEMPLATE = "template-literal"
    COMMENT = "comment"
    WHITESPACE = "whitespace"
    OTHER = "other-char"


# Tokens skipped when looking for the next meaningful token.
TRIVIA_KINDS: frozenset[TokenKind] = frozenset({TokenKind.WHITESPACE, TokenKind.COMMENT})

# Tokens consumed whole; parentheses inside them never affect nesting.
ATOMIC_KINDS: frozenset[TokenKind] = frozenset(
    {TokenKind.STRING, TokenKind.TEMPLATE, TokenKind.COMMENT}
)


class Token(StructBaseHotPath, frozen=True):
    """A contiguous slice of source text.

    Parameters
    ----------
    kind
        Lexical category.
    text
        Exact source substring.
    start_offset
        Inclusive start offset into the source.
    end_offset
        Exclusive end offset into the source.
    start_line
        0-based line on which the token begins.
    """

    kind: TokenKind
    text: str
    start_offset: int
    end_offset: int
    start_line: int

    @property
    def is_trivia(self) -> bool:
        """Return True for whitespace and comments.

        Returns
        -------
        bool
            ``True`` when the token carries no code.
        """
        return self.kind in TRIVIA_KINDS


__all__ = ["ATOMIC_KINDS", "TRIVIA_KINDS", "Token", "TokenKind"]
