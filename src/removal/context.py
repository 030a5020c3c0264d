"""Build the local text view the classifier reasons over."""

from __future__ import annotations

from removal.strategy import SourceLine, SpanLike
from serde_msgspec import StructBaseStrict

DEFAULT_LOOKBEHIND_CHARS = 100
DEFAULT_LOOKAHEAD_CHARS = 50


class LineContext(StructBaseStrict, frozen=True):
    """Enclosing line plus bounded windows around it."""

    line: SourceLine
    lookbehind: str = ""
    lookahead: str = ""


def enclosing_line(text: str, span: SpanLike) -> SourceLine:
    """Return the line(s) of ``text`` touched by ``span``.

    Returns
    -------
    SourceLine
        Line view from the start of the first line to the end of the last.
    """
    line_start = text.rfind("\n", 0, span.start_offset) + 1
    newline = text.find("\n", span.end_offset)
    if newline == -1:
        return SourceLine(text=text[line_start:], start_offset=line_start, line_break="")
    line_end = newline
    line_break = "\n"
    if line_end - 1 >= span.end_offset and text[line_end - 1] == "\r":
        line_end -= 1
        line_break = "\r\n"
    return SourceLine(
        text=text[line_start:line_end],
        start_offset=line_start,
        line_break=line_break,
    )


def build_line_context(
    text: str,
    span: SpanLike,
    *,
    lookbehind_chars: int = DEFAULT_LOOKBEHIND_CHARS,
    lookahead_chars: int = DEFAULT_LOOKAHEAD_CHARS,
) -> LineContext:
    """Return the enclosing line and lookbehind/lookahead windows for a span.

    Returns
    -------
    LineContext
        Inputs for ``plan_removal``.
    """
    line = enclosing_line(text, span)
    behind_start = max(0, line.start_offset - lookbehind_chars)
    ahead_start = line.end_with_break
    return LineContext(
        line=line,
        lookbehind=text[behind_start : line.start_offset],
        lookahead=text[ahead_start : ahead_start + lookahead_chars],
    )


__all__ = [
    "DEFAULT_LOOKAHEAD_CHARS",
    "DEFAULT_LOOKBEHIND_CHARS",
    "LineContext",
    "build_line_context",
    "enclosing_line",
]
