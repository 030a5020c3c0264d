"""Main application setup for the nologs CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Literal

from cyclopts import App, Parameter

from cli.commands.version import get_version
from cli.config_loader import DEFAULT_LOG_LEVEL
from cli.config_provider import resolve_config
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import session_group
from cli.result_action import cli_result_action
from cli.telemetry import invoke_with_telemetry
from utils.uuid_factory import uuid7_str
from workspace.session import CleanupSession

_LOGGER = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_HELP_EPILOGUE = """
Examples:
  nologs scan .                          List diagnostic calls under the current directory
  nologs scan src --format markdown      Markdown table of findings
  nologs scan . --check                  Exit with status 5 when calls are found (CI)
  nologs clean . --dry-run               Show what would be removed
  nologs clean . --yes --report out.md   Remove calls and write a report
  nologs restore ~/.no-logs-backup/<id>  Put files back from a snapshot

Environment Variables:
  NOLOGS_LOG_LEVEL   Default log level (DEBUG, INFO, WARNING, ERROR)

Tips:
  Use `nologs config show --with-sources` to see config precedence.
"""

app = App(
    name="nologs",
    help="Find and remove console diagnostic calls from JavaScript/TypeScript sources.",
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(
        show_default=True,
        show_env_var=True,
    ),
    result_action=cli_result_action,
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)

app.meta.group_parameters = session_group


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    config_file: Annotated[
        str | None,
        Parameter(
            name="--config",
            help="Path to a nologs.toml or pyproject.toml (overrides default search).",
            group=session_group,
        ),
    ] = None
    run_id: Annotated[
        str | None,
        Parameter(
            name="--run-id",
            help="Explicit run identifier (UUID7 generated if not provided).",
            group=session_group,
        ),
    ] = None
    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None,
        Parameter(
            name="--log-level",
            help="Logging verbosity level (default: config log_level, else INFO).",
            env_var="NOLOGS_LOG_LEVEL",
            group=session_group,
        ),
    ] = None


_DEFAULT_SESSION_OPTIONS = SessionOptions()


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
) -> int:
    """Meta launcher for config selection and context injection.

    Returns
    -------
    int
        Exit status code from command execution.
    """
    logging.basicConfig(level=session.log_level or DEFAULT_LOG_LEVEL)
    try:
        config_resolution = resolve_config(session.config_file)
    except (OSError, ValueError, TypeError) as exc:
        _LOGGER.error("Configuration error: %s", exc)
        return int(ExitCode.from_exception(exc))

    config_contents = dict(config_resolution.contents)
    configured_level = config_contents.get("log_level")
    log_level = session.log_level or (
        configured_level if isinstance(configured_level, str) else DEFAULT_LOG_LEVEL
    )
    if log_level not in LOG_LEVELS:
        _LOGGER.error("Unsupported log level %r.", log_level)
        return int(ExitCode.CONFIG_ERROR)
    logging.getLogger().setLevel(log_level)

    run_context = RunContext(
        run_id=session.run_id or uuid7_str(),
        log_level=log_level,
        config_contents=config_contents,
        config_sources=config_resolution.sources,
        session=CleanupSession(),
    )
    exit_code, _event = invoke_with_telemetry(
        app,
        list(tokens),
        run_context=run_context,
    )
    return exit_code


# Lazy-loaded commands
app.command("cli.commands.scan:scan_command", name="scan")
app.command("cli.commands.clean:clean_command", name="clean")
app.command("cli.commands.restore:restore_command", name="restore")

_config_app = App(name="config", help="Configuration management.")
_config_app.command("cli.commands.config:show_config", name="show")
_config_app.command("cli.commands.config:init_config", name="init")
app.command(_config_app, alias="cfg")
app.command("cli.commands.version:version_command", name="version", alias="v")


def main() -> None:
    """Run the nologs CLI."""
    app.meta()


__all__ = ["app", "main"]
