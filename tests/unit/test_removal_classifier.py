"""Tests for context classification of diagnostic calls."""

from __future__ import annotations

import pytest

from removal import (
    MatchSpan,
    RemovalContext,
    RemovalStrategy,
    SourceLine,
    build_line_context,
    plan_removal,
)
from scan import scan_text


def _classify(source: str, index: int = 0) -> RemovalStrategy:
    match = scan_text(source)[index]
    context = build_line_context(source, match)
    strategy = plan_removal(context.line, match, context.lookbehind, context.lookahead)
    assert strategy is not None
    return strategy


def _apply(source: str, strategy: RemovalStrategy) -> str:
    replacement = strategy.replacement or ""
    return source[: strategy.range.start] + replacement + source[strategy.range.end :]


@pytest.mark.parametrize(
    ("source", "classification", "expected"),
    [
        (
            "const f = () => console.log('x');",
            RemovalContext.ARROW_BODY,
            "const f = () => {};",
        ),
        (
            "const v = cond ? console.log(a) : b;",
            RemovalContext.TERNARY_CONSEQUENT,
            "const v = cond ? undefined : b;",
        ),
        (
            "const v = cond ? a : console.log(b);",
            RemovalContext.TERNARY_ALTERNATE,
            "const v = cond ? a : undefined;",
        ),
        (
            "  return console.log(x);\n",
            RemovalContext.RETURN_VALUE,
            "  return undefined;\n",
        ),
        (
            "ready && console.log('ok');",
            RemovalContext.LOGICAL_OPERAND,
            "ready && undefined;",
        ),
        (
            "const x = y ?? console.log(z);",
            RemovalContext.LOGICAL_OPERAND,
            "const x = y ?? undefined;",
        ),
        (
            "(console.log(a), run());",
            RemovalContext.COMMA_FIRST,
            "(run());",
        ),
        (
            "(run(), console.log(a));",
            RemovalContext.COMMA_LAST,
            "(run());",
        ),
        (
            "<div>{console.log(x)}</div>",
            RemovalContext.EXPRESSION_SLOT,
            "<div>{null}</div>",
        ),
        (
            "setTimeout(console.log('done'));",
            RemovalContext.CALLBACK_ARGUMENT,
            "setTimeout(() => {});",
        ),
        (
            "function f() {\n  console.log('x');\n}\n",
            RemovalContext.WHOLE_LINE,
            "function f() {\n}\n",
        ),
        (
            "console.log(a); next();\n",
            RemovalContext.LINE_START,
            " next();\n",
        ),
        (
            "next(); console.log(a);\nrest();\n",
            RemovalContext.LINE_END,
            "next(); rest();\n",
        ),
        (
            "foo(); console.log(a); bar();\n",
            RemovalContext.FALLBACK,
            "foo();  bar();\n",
        ),
    ],
)
def test_classification_and_rewrite(
    source: str,
    classification: RemovalContext,
    expected: str,
) -> None:
    """Ensure each context gets its strategy and rewrites as documented."""
    strategy = _classify(source)
    assert strategy.classification is classification
    assert _apply(source, strategy) == expected


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("if (console.log(x)) { y(); }", "if (undefined) { y(); }"),
        ("while (console.log(x)) {}", "while (undefined) {}"),
        ("  return (console.log(x));\n", "  return (undefined);\n"),
        ("const t = typeof(console.log(x));", "const t = typeof(undefined);"),
    ],
)
def test_keyword_operand_gets_undefined(source: str, expected: str) -> None:
    """Ensure a keyword before the paren is not treated as a callee."""
    strategy = _classify(source)
    assert strategy.classification is RemovalContext.CALLBACK_ARGUMENT
    assert strategy.risk_flag is True
    assert _apply(source, strategy) == expected


def test_member_named_like_keyword_keeps_callback() -> None:
    """Ensure a method such as catch still receives a no-op callback."""
    source = "promise.catch(console.error(e));"
    assert _apply(source, _classify(source)) == "promise.catch(() => {});"


def test_arrow_body_preserves_terminator_and_is_risky() -> None:
    """Ensure the arrow placeholder keeps the statement's semicolon."""
    strategy = _classify("const f = () => console.log('x');")
    assert strategy.replacement == "{};"
    assert strategy.risk_flag is True


def test_ternary_consequent_replacement() -> None:
    """Ensure the consequent slot gets a bare undefined."""
    strategy = _classify("const v = cond ? console.log(a) : b;")
    assert strategy.replacement == "undefined"
    assert strategy.risk_flag is True


def test_object_literal_value_is_not_ternary() -> None:
    """Ensure a property value without an enclosing ? is not an alternate."""
    strategy = _classify("const o = { debug: console.log(a) };")
    assert strategy.classification is not RemovalContext.TERNARY_ALTERNATE
    assert strategy.classification is RemovalContext.FALLBACK


def test_optional_chaining_is_not_a_ternary() -> None:
    """Ensure `?.` before an object property does not look like a ternary."""
    strategy = _classify("const o = { a: b?.c, d: console.log(x) };")
    assert strategy.classification is not RemovalContext.TERNARY_ALTERNATE


def test_multiline_ternary_uses_lookbehind() -> None:
    """Ensure a ternary split across lines is recognized from the window."""
    source = "const v = cond\n  ? a\n  : console.log(b);\n"
    strategy = _classify(source)
    assert strategy.classification is RemovalContext.TERNARY_ALTERNATE
    assert _apply(source, strategy) == "const v = cond\n  ? a\n  : undefined;\n"


def test_whole_line_spans_line_and_break() -> None:
    """Ensure whole-line removal has no replacement and eats the break."""
    source = "a();\n  console.log('x');\nb();\n"
    strategy = _classify(source)
    assert strategy.replacement is None
    assert strategy.risk_flag is False
    assert strategy.range.start == len("a();\n")
    assert strategy.range.end == len("a();\n  console.log('x');\n")


def test_whole_line_keeps_crlf_pairs_intact() -> None:
    """Ensure CRLF line breaks are removed as a unit."""
    source = "a();\r\n  console.log(1);\r\nb();\r\n"
    strategy = _classify(source)
    assert strategy.classification is RemovalContext.WHOLE_LINE
    assert _apply(source, strategy) == "a();\r\nb();\r\n"


def test_block_on_one_line_is_not_an_expression_slot() -> None:
    """Ensure a terminated call in a one-line block is a statement."""
    strategy = _classify("if (x) { console.log(1); }")
    assert strategy.classification is RemovalContext.FALLBACK


def test_trailing_comment_is_preserved() -> None:
    """Ensure an end-of-line comment stays when the call is removed."""
    source = "  console.log(1); // debug\n"
    strategy = _classify(source)
    assert strategy.classification is RemovalContext.LINE_START
    assert _apply(source, strategy) == " // debug\n"


def test_stale_span_returns_none() -> None:
    """Ensure a span outside the supplied line yields no strategy."""
    line = SourceLine(text="foo();", start_offset=0)
    assert plan_removal(line, MatchSpan(start_offset=10, end_offset=20)) is None
    assert plan_removal(line, MatchSpan(start_offset=3, end_offset=3)) is None
