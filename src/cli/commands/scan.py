"""Preview diagnostic calls without modifying files."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated, Literal

from cyclopts import Parameter

from cli.config_loader import load_effective_config
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import output_group
from cli.result import CliResult
from serde_msgspec import dumps_json
from workspace.options import pipeline_options_from_config
from workspace.pipeline import WorkspaceScan, scan_workspace
from workspace.report import render_scan_markdown, render_scan_text

type OutputFormat = Literal["text", "json", "markdown"]


def _render(scan: WorkspaceScan, output_format: OutputFormat) -> str:
    if output_format == "json":
        return dumps_json(scan, pretty=True).decode("utf-8") + "\n"
    if output_format == "markdown":
        return render_scan_markdown(scan)
    return render_scan_text(scan)


def scan_command(
    root: Annotated[
        Path,
        Parameter(help="Directory to scan."),
    ] = Path(),
    *,
    output_format: Annotated[
        Literal["text", "json", "markdown"],
        Parameter(
            name="--format",
            help="Output format for the findings.",
            group=output_group,
        ),
    ] = "text",
    check: Annotated[
        bool,
        Parameter(
            name="--check",
            help="Exit with status 5 when any diagnostic call is found.",
            negative=(),
            group=output_group,
        ),
    ] = False,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> CliResult:
    """List every removable diagnostic call under ROOT.

    Returns
    -------
    CliResult
        Summary of the scan.
    """
    config = run_context.config_contents if run_context is not None else load_effective_config(None)
    options = pipeline_options_from_config(config)
    session = run_context.session if run_context is not None else None
    scan = scan_workspace(root, options=options, session=session)
    sys.stdout.write(_render(scan, output_format))

    metrics = {
        "files_scanned": scan.scanned,
        "files_skipped": scan.skipped,
        "files_with_findings": len(scan.files),
        "matches": scan.total_matches,
    }
    details: tuple[str, ...] = tuple(
        f"{error.rel_path}: {error.message}" for error in scan.errors
    )
    summary: str | None = (
        f"Found {scan.total_matches} diagnostic call(s) in {len(scan.files)} file(s) "
        f"({scan.scanned} scanned, {scan.skipped} skipped)."
    )
    if output_format == "json":
        # stdout carries only the JSON document
        summary = None
        details = ()
    if check and scan.total_matches:
        return CliResult.error(
            ExitCode.FINDINGS_PRESENT,
            summary=summary,
            details=details,
            metrics=metrics,
        )
    return CliResult.success(summary=summary, details=details, metrics=metrics)


__all__ = ["scan_command"]
