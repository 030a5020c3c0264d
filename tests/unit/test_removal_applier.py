"""Tests for back-to-front application of removal strategies."""

from __future__ import annotations

import logging

import pytest

from removal import (
    PlannedRemoval,
    RemovalContext,
    RemovalStrategy,
    TextRange,
    apply_removals,
    plan_file_removals,
    remove_diagnostics,
)
from scan import scan_text
from scan.matcher import Match


def test_multiple_lines_removed_in_one_pass() -> None:
    """Ensure offsets stay valid while several calls are removed."""
    source = (
        "function f(a) {\n"
        "  console.log('start');\n"
        "  const b = a + 1;\n"
        "  console.debug(b);\n"
        "  return b;\n"
        "}\n"
    )
    outcome = remove_diagnostics(source)
    assert outcome.text == "function f(a) {\n  const b = a + 1;\n  return b;\n}\n"
    assert len(outcome.applied) == 2
    assert outcome.risky_count == 0
    assert outcome.deferred == ()


def test_applied_removals_are_reported_in_source_order() -> None:
    """Ensure dispositions come back sorted by position."""
    outcome = remove_diagnostics("console.log(1);\nconsole.warn(2);\n")
    assert [item.match.method_name for item in outcome.applied] == ["log", "warn"]
    assert outcome.text == ""


def test_overlapping_ranges_are_deferred() -> None:
    """Ensure a range reaching into rewritten text is left for a later run."""
    source = "foo(console.log(a), console.log(b));\n"
    outcome = remove_diagnostics(source)
    assert len(outcome.applied) == 1
    assert outcome.applied[0].strategy.classification is RemovalContext.COMMA_LAST
    assert len(outcome.deferred) == 1
    assert outcome.deferred[0].strategy.classification is RemovalContext.COMMA_FIRST
    assert outcome.text == "foo(console.log(a));\n"


def test_second_run_finishes_deferred_work() -> None:
    """Ensure re-running converges and then leaves the text alone."""
    source = "foo(console.log(a), console.log(b));\n"
    first = remove_diagnostics(source)
    second = remove_diagnostics(first.text)
    assert second.text == "foo(() => {});\n"
    third = remove_diagnostics(second.text)
    assert third.text == second.text
    assert third.applied == ()


@pytest.mark.parametrize(
    "source",
    [
        "function f() {\n  console.log('x');\n}\n",
        "console.log(a); next();\n",
        "next(); console.log(a);\nrest();\n",
        "const f = () => console.log('x');",
        "const v = c ? console.log(a) : b;",
        "const v = c ? a : console.log(b);",
        "  return console.log(x);\n",
        "ready && console.log('ok');",
        "<div>{console.log(x)}</div>",
        "setTimeout(console.log('done'));",
        "if (console.log(x)) { y(); }",
    ],
)
def test_single_run_leaves_nothing_to_find(source: str) -> None:
    """Ensure one pass removes every call in each context."""
    first = remove_diagnostics(source)
    assert first.deferred == ()
    assert scan_text(first.text) == []
    assert remove_diagnostics(first.text).text == first.text


def test_skip_risky_leaves_expression_calls() -> None:
    """Ensure risky strategies are skipped on request and reported."""
    source = "const f = () => console.log('x');\nconsole.log('y');\n"
    outcome = remove_diagnostics(source, skip_risky=True)
    assert outcome.text == "const f = () => console.log('x');\n"
    assert len(outcome.skipped_risky) == 1
    assert outcome.skipped_risky[0].strategy.classification is RemovalContext.ARROW_BODY
    assert outcome.risky_count == 0


def test_risky_removals_are_counted() -> None:
    """Ensure the risky counter tracks placeholder substitutions."""
    outcome = remove_diagnostics("const v = ok ? console.log(1) : 2;\n")
    assert outcome.text == "const v = ok ? undefined : 2;\n"
    assert outcome.risky_count == 1


def test_no_matches_returns_text_unchanged() -> None:
    """Ensure clean input passes through untouched."""
    source = "const message = 'console.log(x)';\n"
    outcome = remove_diagnostics(source)
    assert outcome.text == source
    assert outcome.applied == ()


def test_stale_match_is_dropped_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    """Ensure a match that no longer fits its text is skipped, not applied."""
    stale = Match(
        start_offset=40,
        end_offset=60,
        start_line=0,
        method_name="log",
        preview="console.log(x);",
    )
    with caplog.at_level(logging.WARNING, logger="removal.applier"):
        planned = plan_file_removals("short();\n", [stale])
    assert planned == []
    assert "stale match" in caplog.text


def test_apply_removals_accepts_any_order() -> None:
    """Ensure input order does not change the result."""
    source = "a(); console.log(1); b(); console.log(2); c();\n"
    planned = plan_file_removals(source, scan_text(source))
    forward = apply_removals(source, planned)
    backward = apply_removals(source, list(reversed(planned)))
    assert forward.text == backward.text == "a();  b();  c();\n"


def test_apply_removals_uses_replacement_literal() -> None:
    """Ensure a strategy's replacement is written in place of its range."""
    source = "x = console.log(1);"
    match = scan_text(source)[0]
    strategy = RemovalStrategy(
        range=TextRange(start=match.start_offset, end=match.end_offset),
        classification=RemovalContext.FALLBACK,
        justification="test",
        replacement="0;",
    )
    outcome = apply_removals(source, [PlannedRemoval(match=match, strategy=strategy)])
    assert outcome.text == "x = 0;"
