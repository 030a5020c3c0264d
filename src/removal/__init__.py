"""Context-aware removal planning and application."""

from removal.applier import (
    PlannedRemoval,
    RemovalOutcome,
    apply_removals,
    plan_file_removals,
    remove_diagnostics,
)
from removal.classifier import plan_removal
from removal.context import LineContext, build_line_context
from removal.strategy import (
    MatchSpan,
    RemovalContext,
    RemovalStrategy,
    SourceLine,
    TextRange,
)

__all__ = [
    "LineContext",
    "MatchSpan",
    "PlannedRemoval",
    "RemovalContext",
    "RemovalOutcome",
    "RemovalStrategy",
    "SourceLine",
    "TextRange",
    "apply_removals",
    "build_line_context",
    "plan_file_removals",
    "plan_removal",
    "remove_diagnostics",
]
