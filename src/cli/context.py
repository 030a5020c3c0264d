"""Run context for CLI command injection."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from core_types import JsonValue
from workspace.session import CleanupSession

if TYPE_CHECKING:
    from cli.config_source import ConfigWithSources


@dataclass(frozen=True)
class RunContext:
    """Injected run context for CLI commands.

    Parameters
    ----------
    run_id
        Run identifier for the CLI invocation.
    log_level
        Logging level applied to the invocation.
    config_contents
        Configured values grouped by table, without defaults.
    config_sources
        Optional configuration source metadata for display/debugging.
    session
        Scan/backup state shared by the commands of this invocation.
    """

    run_id: str
    log_level: str
    config_contents: Mapping[str, JsonValue] = field(default_factory=dict)
    config_sources: ConfigWithSources | None = None
    session: CleanupSession = field(default_factory=CleanupSession)


__all__ = ["RunContext"]
