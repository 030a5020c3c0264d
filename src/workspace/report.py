"""Markdown and plain-text renderings of scan and cleanup results."""

from __future__ import annotations

from workspace.pipeline import CleanupReport, WorkspaceScan


def _cell(value: str) -> str:
    return value.replace("\\", "\\\\").replace("|", "\\|").replace("`", "'")


def render_scan_text(scan: WorkspaceScan) -> str:
    """Render findings one per line as ``path:line  method  preview``.

    Returns
    -------
    str
        Plain-text listing, ending with a newline when non-empty.
    """
    lines = [
        f"{findings.rel_path}:{match.start_line + 1}  {match.method_name}  {match.preview}"
        for findings in scan.files
        for match in findings.matches
    ]
    return "".join(f"{line}\n" for line in lines)


def render_scan_markdown(scan: WorkspaceScan) -> str:
    """Render a scan as a Markdown summary and findings table.

    Returns
    -------
    str
        Markdown document.
    """
    lines = [
        "# Diagnostic call scan",
        "",
        f"- Root: `{scan.root}`",
        f"- Files scanned: {scan.scanned}",
        f"- Files skipped: {scan.skipped}",
        f"- Files with findings: {len(scan.files)}",
        f"- Calls found: {scan.total_matches}",
        "",
    ]
    if scan.files:
        lines.extend(["| File | Line | Method | Preview |", "| --- | ---: | --- | --- |"])
        lines.extend(
            f"| {_cell(findings.rel_path)} | {match.start_line + 1} | "
            f"{match.method_name} | {_cell(match.preview)} |"
            for findings in scan.files
            for match in findings.matches
        )
        lines.append("")
    if scan.errors:
        lines.extend(["## Errors", ""])
        lines.extend(
            f"- {_cell(error.rel_path)} ({error.stage}): {error.message}" for error in scan.errors
        )
        lines.append("")
    return "\n".join(lines)


def render_cleanup_markdown(report: CleanupReport) -> str:
    """Render a cleanup run as a Markdown summary and removals table.

    Returns
    -------
    str
        Markdown document.
    """
    title = "# Diagnostic call cleanup (dry run)" if report.dry_run else "# Diagnostic call cleanup"
    lines = [
        title,
        "",
        f"- Root: `{report.root}`",
        f"- Files changed: {report.files_changed}",
        f"- Calls removed: {report.total_removed}",
        f"- Placeholder substitutions: {report.total_risky}",
    ]
    if report.backup_dir is not None:
        lines.append(f"- Backup: `{report.backup_dir}`")
    lines.append("")
    records = [(item.rel_path, record) for item in report.files for record in item.removals]
    if records:
        lines.extend(
            [
                "| File | Line | Method | Classification | Risk |",
                "| --- | ---: | --- | --- | --- |",
            ]
        )
        lines.extend(
            f"| {_cell(rel_path)} | {record.line} | {record.method_name} | "
            f"{record.classification} | {'yes' if record.risk_flag else ''} |"
            for rel_path, record in records
        )
        lines.append("")
    held_back = [item for item in report.files if item.deferred or item.skipped_risky]
    if held_back:
        lines.extend(["## Left in place", ""])
        lines.extend(
            f"- {_cell(item.rel_path)}: {item.deferred} overlapping, "
            f"{item.skipped_risky} risky"
            for item in held_back
        )
        lines.append("")
    if report.errors:
        lines.extend(["## Errors", ""])
        lines.extend(
            f"- {_cell(error.rel_path)} ({error.stage}): {error.message}" for error in report.errors
        )
        lines.append("")
    return "\n".join(lines)


__all__ = ["render_cleanup_markdown", "render_scan_markdown", "render_scan_text"]
