"""Result action handler for Cyclopts integration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.console import Console

from cli.exit_codes import ExitCode
from cli.result import CliResult

if TYPE_CHECKING:
    from cyclopts import App


def render_result(result: CliResult, console: Console) -> None:
    """Print a command result."""
    if result.summary:
        style = None if result.ok else "bold red"
        console.print(result.summary, style=style, highlight=False)
    for name, path in sorted(result.artifacts.items()):
        console.print(f"  {name}: {path}", highlight=False)
    for name, count in sorted(result.counts.items()):
        console.print(f"  {name}: {count}", highlight=False)


def cli_result_action(
    app: App,
    cmd: object,
    result: Any,
) -> int:
    """Normalize command return values to exit codes.

    Returns
    -------
    int
        Exit code for the process.
    """
    _ = app, cmd
    if result is None:
        return ExitCode.SUCCESS
    if isinstance(result, CliResult):
        render_result(result, Console(stderr=not result.ok))
        return int(result.exit_code)
    if isinstance(result, int):
        return result
    Console(stderr=True).print(f"Unexpected command return type: {type(result).__name__}")
    return ExitCode.GENERAL_ERROR


__all__ = ["cli_result_action", "render_result"]
