"""Apply removal strategies to a document back to front."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from removal.classifier import plan_removal
from removal.context import (
    DEFAULT_LOOKAHEAD_CHARS,
    DEFAULT_LOOKBEHIND_CHARS,
    build_line_context,
)
from removal.strategy import RemovalStrategy
from scan import scan_text
from scan.matcher import Match
from scan.methods import DEFAULT_RECEIVER
from serde_msgspec import StructBaseStrict

logger = logging.getLogger(__name__)


class PlannedRemoval(StructBaseStrict, frozen=True):
    """A match paired with the strategy chosen for it."""

    match: Match
    strategy: RemovalStrategy


class RemovalOutcome(StructBaseStrict, frozen=True):
    """Result of applying planned removals to one document.

    Parameters
    ----------
    text
        Rewritten document text.
    applied
        Removals written into ``text``, in source order.
    deferred
        Removals skipped because their range overlapped an applied one.
    skipped_risky
        Risky removals left untouched on request.
    """

    text: str
    applied: tuple[PlannedRemoval, ...] = ()
    deferred: tuple[PlannedRemoval, ...] = ()
    skipped_risky: tuple[PlannedRemoval, ...] = ()

    @property
    def risky_count(self) -> int:
        """Return how many applied removals substituted a placeholder.

        Returns
        -------
        int
            Count of applied removals carrying the risk flag.
        """
        return sum(1 for item in self.applied if item.strategy.risk_flag)


def plan_file_removals(
    text: str,
    matches: Iterable[Match],
    *,
    lookbehind_chars: int = DEFAULT_LOOKBEHIND_CHARS,
    lookahead_chars: int = DEFAULT_LOOKAHEAD_CHARS,
) -> list[PlannedRemoval]:
    """Classify every match of one document.

    Returns
    -------
    list[PlannedRemoval]
        Matches with their strategies; stale matches are dropped.
    """
    planned: list[PlannedRemoval] = []
    for match in matches:
        context = build_line_context(
            text,
            match,
            lookbehind_chars=lookbehind_chars,
            lookahead_chars=lookahead_chars,
        )
        strategy = plan_removal(context.line, match, context.lookbehind, context.lookahead)
        if strategy is None:
            logger.warning(
                "Dropping stale match at offsets %d-%d (%s).",
                match.start_offset,
                match.end_offset,
                match.preview,
            )
            continue
        planned.append(PlannedRemoval(match=match, strategy=strategy))
    return planned


def apply_removals(
    text: str,
    planned: Sequence[PlannedRemoval],
    *,
    skip_risky: bool = False,
) -> RemovalOutcome:
    """Apply removals strictly in descending match order.

    Editing from the end of the document keeps every offset computed for an
    earlier span valid. A range reaching into text already rewritten is
    deferred instead of applied.

    Returns
    -------
    RemovalOutcome
        Rewritten text and the per-removal disposition.
    """
    ordered = sorted(planned, key=lambda item: item.match.start_offset, reverse=True)
    result = text
    floor = len(text)
    applied: list[PlannedRemoval] = []
    deferred: list[PlannedRemoval] = []
    skipped: list[PlannedRemoval] = []
    for item in ordered:
        strategy = item.strategy
        if skip_risky and strategy.risk_flag:
            skipped.append(item)
            continue
        if strategy.range.end > floor:
            logger.debug(
                "Deferring overlapping removal at offsets %d-%d.",
                strategy.range.start,
                strategy.range.end,
            )
            deferred.append(item)
            continue
        replacement = strategy.replacement or ""
        result = result[: strategy.range.start] + replacement + result[strategy.range.end :]
        floor = strategy.range.start
        applied.append(item)
    return RemovalOutcome(
        text=result,
        applied=tuple(reversed(applied)),
        deferred=tuple(reversed(deferred)),
        skipped_risky=tuple(reversed(skipped)),
    )


def remove_diagnostics(
    text: str,
    *,
    receiver: str = DEFAULT_RECEIVER,
    methods: Iterable[str] | None = None,
    lookbehind_chars: int = DEFAULT_LOOKBEHIND_CHARS,
    lookahead_chars: int = DEFAULT_LOOKAHEAD_CHARS,
    skip_risky: bool = False,
) -> RemovalOutcome:
    """Scan, classify and rewrite one document in a single call.

    Returns
    -------
    RemovalOutcome
        Rewritten text and the per-removal disposition.
    """
    matches = scan_text(text, receiver=receiver, methods=methods)
    planned = plan_file_removals(
        text,
        matches,
        lookbehind_chars=lookbehind_chars,
        lookahead_chars=lookahead_chars,
    )
    return apply_removals(text, planned, skip_risky=skip_risky)


__all__ = [
    "PlannedRemoval",
    "RemovalOutcome",
    "apply_removals",
    "plan_file_removals",
    "remove_diagnostics",
]
