"""Tests for diagnostic call extraction."""

from __future__ import annotations

import logging

import pytest

from scan import scan_text
from scan.matcher import PREVIEW_LIMIT, build_preview


def test_balanced_nesting_matches_outer_call() -> None:
    """Ensure inner parentheses do not end the match early."""
    source = "console.log(foo(bar(1,2), [3,4]))"
    matches = scan_text(source)
    assert len(matches) == 1
    assert matches[0].start_offset == 0
    assert matches[0].end_offset == len(source)


def test_terminator_is_absorbed_without_trailing_space() -> None:
    """Ensure the following semicolon joins the match but spaces do not."""
    matches = scan_text("console.log('x');  ")
    assert len(matches) == 1
    assert matches[0].end_offset == len("console.log('x');")


def test_terminator_after_comment_is_absorbed() -> None:
    """Ensure trivia between the call and its semicolon is skipped."""
    source = "console.log(1) /* why */ ;"
    assert scan_text(source)[0].end_offset == len(source)


@pytest.mark.parametrize(
    "source",
    [
        'const s = "console.log(x)";',
        "const s = 'console.log(x)';",
        "const s = `console.log(x)`;",
        "// console.log(x)",
        "/* console.log(x) */",
        "console.customThing(1);",
        "const f = console.log;",
        "console.log(unbalanced",
        "myconsole.log(1); console_log(2);",
    ],
)
def test_look_alikes_are_ignored(source: str) -> None:
    """Ensure calls inside literals, comments or with bad shape never match."""
    assert scan_text(source) == []


@pytest.mark.parametrize(
    ("source", "prefix"),
    [
        ("const console = { log() {} }; console.log(1);", "const console = { log() {} }; "),
        ("window.console.log(1);", "window."),
    ],
)
def test_receiver_is_matched_by_name_only(source: str, prefix: str) -> None:
    """Ensure shadowed and member-access receivers still match by spelling."""
    matches = scan_text(source)
    assert len(matches) == 1
    assert matches[0].start_offset == len(prefix)
    assert source[matches[0].start_offset : matches[0].end_offset] == "console.log(1);"


def test_template_expression_call_matches_once() -> None:
    """Ensure a call inside an interpolation is found exactly once."""
    source = "const s = `${console.log(x)}`;"
    matches = scan_text(source)
    assert len(matches) == 1
    assert source[matches[0].start_offset : matches[0].end_offset] == "console.log(x)"


def test_chained_call_matches_only_console_part() -> None:
    """Ensure a trailing member call stays outside the match."""
    matches = scan_text("console.log(a).foo();")
    assert len(matches) == 1
    assert matches[0].end_offset == len("console.log(a)")
    assert matches[0].preview == "console.log(a)"


def test_nested_diagnostic_calls_are_not_double_counted() -> None:
    """Ensure scanning resumes after the outer call's closing paren."""
    matches = scan_text("console.log(console.error(1)); console.warn(2);")
    assert [match.method_name for match in matches] == ["log", "warn"]


def test_unbalanced_candidate_resumes_at_next_receiver() -> None:
    """Ensure an unbalanced call does not hide later calls."""
    source = "console.log(a\nconsole.info(b);\n"
    matches = scan_text(source)
    assert len(matches) == 1
    assert matches[0].method_name == "info"
    assert matches[0].start_line == 1


def test_whitespace_and_comments_inside_call_shape() -> None:
    """Ensure trivia between receiver, dot, method and paren is allowed."""
    matches = scan_text("console /* a */ . \n log ( 1 )")
    assert len(matches) == 1
    assert matches[0].method_name == "log"


def test_matches_are_ordered_and_disjoint() -> None:
    """Ensure matches never overlap and come back in source order."""
    source = (
        "console.log(1); if (x) { console.warn('a(b'); }\n"
        "const y = `${console.debug(2)}`; console.table([1, 2]);\n"
    )
    matches = scan_text(source)
    assert [match.method_name for match in matches] == ["log", "warn", "debug", "table"]
    for earlier, later in zip(matches, matches[1:], strict=False):
        assert earlier.end_offset <= later.start_offset


def test_custom_receiver_and_methods() -> None:
    """Ensure receiver and method allow-list are configurable."""
    matches = scan_text("logger.debug(x); console.log(y);", receiver="logger", methods=["debug"])
    assert [match.method_name for match in matches] == ["debug"]


def test_preview_collapses_whitespace_and_truncates() -> None:
    """Ensure previews are single-line and capped."""
    source = "console.log(\n    'a',\n    'b'\n);"
    assert scan_text(source)[0].preview == "console.log( 'a', 'b' );"
    long_source = f"console.log('{'x' * 300}')"
    preview = build_preview(long_source, 0, len(long_source))
    assert len(preview) == PREVIEW_LIMIT
    assert preview.endswith("...")


def test_scan_text_never_raises(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Ensure an internal failure is logged and reported as no matches."""

    def _boom(*_args: object, **_kwargs: object) -> list[object]:
        msg = "invariant broken"
        raise RuntimeError(msg)

    monkeypatch.setattr("scan.find_matches", _boom)
    with caplog.at_level(logging.ERROR, logger="scan"):
        assert scan_text("console.log(1);") == []
    assert "scan failed" in caplog.text
