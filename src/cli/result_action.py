"""Result action handler for Cyclopts integration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.text import Text

from cli.exit_codes import ExitCode
from cli.result import CliResult

if TYPE_CHECKING:
    from cyclopts import App


def _console(*, stderr: bool = False) -> Console:
    return Console(stderr=stderr, highlight=False, soft_wrap=True)


def cli_result_action(
    app: App,
    cmd: object,
    result: Any,
) -> int:
    """Handle command results and convert to exit codes.

    This function is registered as the ``result_action`` for the CLI app.
    Summaries and details go to stdout for successful results and to stderr
    otherwise.

    Parameters
    ----------
    app
        The Cyclopts application instance.
    cmd
        The resolved command that was executed.
    result
        The return value from the command function.

    Returns
    -------
    int
        Exit code for the process.
    """
    _ = app, cmd
    if result is None:
        return ExitCode.SUCCESS

    if isinstance(result, bool):
        return ExitCode.SUCCESS if result else ExitCode.GENERAL_ERROR

    if isinstance(result, int):
        return result

    if isinstance(result, CliResult):
        console = _console(stderr=not result.ok)
        if result.summary:
            style = None if result.ok else "bold red"
            console.print(Text(result.summary, style=style))
        for line in result.details:
            console.print(Text(f"  {line}"))
        for name, path in sorted(result.artifacts.items()):
            console.print(Text(f"{name}: {path}", style="dim"))
        return int(result.exit_code)

    _console(stderr=True).print(
        Text(f"Unexpected command return type: {type(result).__name__} (value: {result!r})")
    )
    return ExitCode.GENERAL_ERROR


__all__ = ["cli_result_action"]
