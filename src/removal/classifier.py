"""Context classification for safe removal of diagnostic calls.

Each rule inspects the text around a call and either returns a strategy or
declines. Rules are tried in order and the first verdict wins: the
expression-position rules come before the whitespace-driven statement rules
because a call used as a value cannot simply disappear.

The checks are textual, not syntactic. They can misfire on deeply nested
mixed literals (for example a ``?`` from an unrelated ternary sitting inside
the lookbehind window of an object property value).
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from removal.strategy import (
    RemovalContext,
    RemovalStrategy,
    SourceLine,
    SpanLike,
    TextRange,
)

UNDEFINED_LITERAL = "undefined"
EMPTY_BLOCK_LITERAL = "{}"
NULL_LITERAL = "null"
NOOP_CALLBACK_LITERAL = "() => {}"

_RETURN_RE = re.compile(r"(?:^|[^\w$])return$")
_CALLEE_RE = re.compile(r"(?<![\w$])(?P<name>[A-Za-z_$][\w$]*)\s*\($")
# Words that take a parenthesized operand but never a callback.
_KEYWORDS_BEFORE_PAREN = frozenset(
    {
        "await",
        "case",
        "catch",
        "delete",
        "for",
        "if",
        "in",
        "new",
        "of",
        "return",
        "switch",
        "typeof",
        "void",
        "while",
        "with",
        "yield",
    }
)
# A `?` that is not part of `?.` or `??`.
_QUESTION_RE = re.compile(r"(?<!\?)\?(?![.?])")
_LOGICAL_OPERATORS = ("||", "&&", "??")
_HORIZONTAL_SPACE = " \t"


@dataclass(frozen=True)
class _CallView:
    line: SourceLine
    start: int
    end: int
    before: str
    after: str
    preceding: str
    preceding_origin: int
    following: str
    following_origin: int
    call_text: str

    @property
    def terminated(self) -> bool:
        return self.call_text.endswith(";")

    @property
    def prev(self) -> str:
        return self.preceding.rstrip()

    @property
    def next(self) -> str:
        return self.following.lstrip()

    def call_range(self) -> TextRange:
        return TextRange(start=self.start, end=self.end)

    def value(self, literal: str) -> str:
        return f"{literal};" if self.terminated else literal


def _expression(
    view: _CallView,
    literal: str,
    classification: RemovalContext,
    justification: str,
) -> RemovalStrategy:
    return RemovalStrategy(
        range=view.call_range(),
        replacement=view.value(literal),
        risk_flag=True,
        classification=classification,
        justification=justification,
    )


def _arrow_body(view: _CallView) -> RemovalStrategy | None:
    if not view.prev.endswith("=>"):
        return None
    return _expression(
        view,
        EMPTY_BLOCK_LITERAL,
        RemovalContext.ARROW_BODY,
        "Call is the body of a brace-less arrow function; an empty block keeps the arrow valid.",
    )


def _ternary_consequent(view: _CallView) -> RemovalStrategy | None:
    prev = view.prev
    if not prev.endswith("?") or prev.endswith("??"):
        return None
    return _expression(
        view,
        UNDEFINED_LITERAL,
        RemovalContext.TERNARY_CONSEQUENT,
        "Call is the consequent of a ternary expression.",
    )


def _nearest_question(text: str) -> int:
    position = -1
    for found in _QUESTION_RE.finditer(text):
        position = found.start()
    return position


def _ternary_alternate(view: _CallView) -> RemovalStrategy | None:
    prev = view.prev
    if not prev.endswith(":"):
        return None
    head = prev[:-1]
    question = _nearest_question(head)
    if question == -1 or head.rfind("{") > question:
        return None
    return _expression(
        view,
        UNDEFINED_LITERAL,
        RemovalContext.TERNARY_ALTERNATE,
        "Call is the alternate of a ternary expression.",
    )


def _return_value(view: _CallView) -> RemovalStrategy | None:
    if _RETURN_RE.search(view.prev) is None:
        return None
    return _expression(
        view,
        UNDEFINED_LITERAL,
        RemovalContext.RETURN_VALUE,
        "Call result is returned; the return keeps an explicit undefined value.",
    )


def _logical_operand(view: _CallView) -> RemovalStrategy | None:
    if not view.prev.endswith(_LOGICAL_OPERATORS):
        return None
    return _expression(
        view,
        UNDEFINED_LITERAL,
        RemovalContext.LOGICAL_OPERAND,
        "Call is the right operand of a logical operator.",
    )


def _comma_first(view: _CallView) -> RemovalStrategy | None:
    if not (view.prev.endswith("(") and view.next.startswith(",")):
        return None
    following = view.following
    position = len(following) - len(following.lstrip()) + 1
    while position < len(following) and following[position] in _HORIZONTAL_SPACE:
        position += 1
    return RemovalStrategy(
        range=TextRange(start=view.start, end=view.following_origin + position),
        risk_flag=True,
        classification=RemovalContext.COMMA_FIRST,
        justification="Call leads a comma sequence; the following comma is removed with it.",
    )


def _comma_last(view: _CallView) -> RemovalStrategy | None:
    prev = view.prev
    if not (prev.endswith(",") and view.next.startswith(")")):
        return None
    return RemovalStrategy(
        range=TextRange(start=view.preceding_origin + len(prev) - 1, end=view.end),
        risk_flag=True,
        classification=RemovalContext.COMMA_LAST,
        justification="Call ends a comma sequence; the preceding comma is removed with it.",
    )


def _expression_slot(view: _CallView) -> RemovalStrategy | None:
    if view.terminated:
        return None
    if not (view.before.rstrip().endswith("{") and view.after.lstrip().startswith("}")):
        return None
    return _expression(
        view,
        NULL_LITERAL,
        RemovalContext.EXPRESSION_SLOT,
        "Call fills an interpolation slot that must keep a value.",
    )


def _callback_argument(view: _CallView) -> RemovalStrategy | None:
    prev = view.prev
    callee = _CALLEE_RE.search(prev)
    if callee is None or not view.next.startswith(")"):
        return None
    is_member = prev[: callee.start("name")].rstrip().endswith(".")
    if callee.group("name") in _KEYWORDS_BEFORE_PAREN and not is_member:
        return _expression(
            view,
            UNDEFINED_LITERAL,
            RemovalContext.CALLBACK_ARGUMENT,
            "Call is the parenthesized operand of a keyword and is replaced with undefined.",
        )
    return _expression(
        view,
        NOOP_CALLBACK_LITERAL,
        RemovalContext.CALLBACK_ARGUMENT,
        "Call is the sole argument of another call and may be used as a callback value.",
    )


def _whole_line(view: _CallView) -> RemovalStrategy | None:
    if view.before.strip() or view.after.strip():
        return None
    return RemovalStrategy(
        range=TextRange(start=view.line.start_offset, end=view.line.end_with_break),
        classification=RemovalContext.WHOLE_LINE,
        justification="Call is the only statement on its line.",
    )


def _line_start(view: _CallView) -> RemovalStrategy | None:
    if view.before.strip():
        return None
    return RemovalStrategy(
        range=TextRange(start=view.line.start_offset, end=view.end),
        classification=RemovalContext.LINE_START,
        justification="Call starts its line; indentation through the call is removed.",
    )


def _line_end(view: _CallView) -> RemovalStrategy | None:
    if view.after.strip() not in {"", ";"}:
        return None
    return RemovalStrategy(
        range=TextRange(start=view.start, end=view.line.end_with_break),
        classification=RemovalContext.LINE_END,
        justification="Call ends its line; the call through the line break is removed.",
    )


def _fallback(view: _CallView) -> RemovalStrategy:
    return RemovalStrategy(
        range=view.call_range(),
        classification=RemovalContext.FALLBACK,
        justification="Call sits between other code on its line; only the call is removed.",
    )


_RULES: tuple[Callable[[_CallView], RemovalStrategy | None], ...] = (
    _arrow_body,
    _ternary_consequent,
    _ternary_alternate,
    _return_value,
    _logical_operand,
    _comma_first,
    _comma_last,
    _expression_slot,
    _callback_argument,
    _whole_line,
    _line_start,
    _line_end,
)


def plan_removal(
    line: SourceLine,
    span: SpanLike,
    lookbehind: str = "",
    lookahead: str = "",
) -> RemovalStrategy | None:
    """Decide how to remove one call without breaking the surrounding code.

    Parameters
    ----------
    line
        Line(s) enclosing the span.
    span
        Absolute offsets of the matched call.
    lookbehind
        Text immediately before ``line`` (bounded window).
    lookahead
        Text immediately after the line break of ``line`` (bounded window).

    Returns
    -------
    RemovalStrategy | None
        The first matching verdict, or ``None`` when the span does not lie
        inside ``line`` (stale position).
    """
    start_rel = span.start_offset - line.start_offset
    end_rel = span.end_offset - line.start_offset
    if start_rel < 0 or end_rel > len(line.text) or start_rel >= end_rel:
        return None
    before = line.text[:start_rel]
    after = line.text[end_rel:]
    view = _CallView(
        line=line,
        start=span.start_offset,
        end=span.end_offset,
        before=before,
        after=after,
        preceding=lookbehind + before,
        preceding_origin=line.start_offset - len(lookbehind),
        following=after + line.line_break + lookahead,
        following_origin=span.end_offset,
        call_text=line.text[start_rel:end_rel],
    )
    for rule in _RULES:
        strategy = rule(view)
        if strategy is not None:
            return strategy
    return _fallback(view)


__all__ = [
    "EMPTY_BLOCK_LITERAL",
    "NOOP_CALLBACK_LITERAL",
    "NULL_LITERAL",
    "UNDEFINED_LITERAL",
    "plan_removal",
]
