"""CLI result contract for structured command returns."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


@dataclass(frozen=True)
class CliResult:
    """Structured result from CLI command execution.

    Parameters
    ----------
    exit_code
        Integer exit code for the command.
    summary
        Optional one-line summary of the result.
    details
        Extra lines printed below the summary (warnings, skipped files).
    artifacts
        Mapping of artifact names to paths written (report, backup).
    metrics
        Mapping of counter names to values.
    """

    exit_code: int
    summary: str | None = None
    details: tuple[str, ...] = ()
    artifacts: Mapping[str, Path] = field(default_factory=dict)
    metrics: Mapping[str, int] = field(default_factory=dict)

    @classmethod
    def success(
        cls,
        *,
        summary: str | None = None,
        details: Sequence[str] = (),
        artifacts: Mapping[str, Path] | None = None,
        metrics: Mapping[str, int] | None = None,
    ) -> CliResult:
        """Create a successful result.

        Returns
        -------
        CliResult
            Success result with exit code 0.
        """
        return cls(
            exit_code=ExitCode.SUCCESS,
            summary=summary,
            details=tuple(details),
            artifacts=artifacts or {},
            metrics=metrics or {},
        )

    @classmethod
    def error(
        cls,
        exit_code: ExitCode | int,
        *,
        summary: str | None = None,
        details: Sequence[str] = (),
        metrics: Mapping[str, int] | None = None,
    ) -> CliResult:
        """Create an error result.

        Returns
        -------
        CliResult
            Error result with the specified exit code.
        """
        return cls(
            exit_code=int(exit_code),
            summary=summary,
            details=tuple(details),
            metrics=metrics or {},
        )

    @property
    def ok(self) -> bool:
        """Return True when the result indicates success."""
        return self.exit_code == ExitCode.SUCCESS


__all__ = ["CliResult"]
