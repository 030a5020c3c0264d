"""Value types produced by the removal classifier."""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol

from serde_msgspec import StructBaseStrict


class RemovalContext(StrEnum):
    """Syntactic context detected around a diagnostic call."""

    ARROW_BODY = "arrow-body"
    TERNARY_CONSEQUENT = "ternary-consequent"
    TERNARY_ALTERNATE = "ternary-alternate"
    RETURN_VALUE = "return-value"
    LOGICAL_OPERAND = "logical-operand"
    COMMA_FIRST = "comma-first"
    COMMA_LAST = "comma-last"
    EXPRESSION_SLOT = "expression-slot"
    CALLBACK_ARGUMENT = "callback-argument"
    WHOLE_LINE = "whole-line"
    LINE_START = "line-start"
    LINE_END = "line-end"
    FALLBACK = "fallback"


class SpanLike(Protocol):
    """Anything carrying absolute start/end offsets (e.g. ``scan.Match``)."""

    @property
    def start_offset(self) -> int: ...

    @property
    def end_offset(self) -> int: ...


class MatchSpan(StructBaseStrict, frozen=True):
    """Plain offset span for callers that do not hold a ``Match``."""

    start_offset: int
    end_offset: int


class TextRange(StructBaseStrict, frozen=True):
    """Half-open absolute offset range to delete or replace."""

    start: int
    end: int


class SourceLine(StructBaseStrict, frozen=True):
    """The line (or lines) enclosing a match span.

    Parameters
    ----------
    text
        Line text without the trailing line break. A span crossing lines
        yields every line it touches.
    start_offset
        Absolute offset of the first character of ``text``.
    line_break
        The break that ends the last line (``"\\n"``, ``"\\r\\n"`` or ``""``
        at end of input).
    """

    text: str
    start_offset: int
    line_break: str = ""

    @property
    def end_offset(self) -> int:
        """Return the absolute offset just before the line break.

        Returns
        -------
        int
            End of the line text.
        """
        return self.start_offset + len(self.text)

    @property
    def end_with_break(self) -> int:
        """Return the absolute offset just after the line break.

        Returns
        -------
        int
            End of the line including its break.
        """
        return self.end_offset + len(self.line_break)


class RemovalStrategy(StructBaseStrict, frozen=True):
    """Classifier verdict for one match.

    Parameters
    ----------
    range
        Offsets to delete; may extend beyond the match span.
    replacement
        Literal to substitute, or ``None`` for pure deletion.
    risk_flag
        True when the call sat in an expression position.
    classification
        Detected syntactic context.
    justification
        Human-readable reason for the verdict.
    """

    range: TextRange
    classification: RemovalContext
    justification: str
    replacement: str | None = None
    risk_flag: bool = False


__all__ = [
    "MatchSpan",
    "RemovalContext",
    "RemovalStrategy",
    "SourceLine",
    "SpanLike",
    "TextRange",
]
