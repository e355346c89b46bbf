"""Run one todo export cycle."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from cli.context import RunContext, current_run_context
from cli.exit_codes import ExitCode
from cli.result import CliResult
from content.converter import converter_for
from content.errors import ContentError
from content.formats import WireFormat
from exporter.staleness import ExportOutcome
from exporter.todos import todo_exporter
from records.todos import Todo


def export_todos_command(
    source: Annotated[Path, Parameter(help="File holding a list of todos (any format).")],
    *,
    output: Annotated[
        Path | None,
        Parameter(name=["--output", "-o"], help="Export file (default: configured todos path)."),
    ] = None,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> CliResult:
    """Load todos from a file and export them as a JSON array.

    Returns
    -------
    CliResult
        Export outcome.
    """
    target = output or (run_context or current_run_context()).paths.todos
    try:
        todos = converter_for(list[Todo], WireFormat.from_extension(source)).decode(
            source.read_bytes()
        )
    except (ContentError, OSError) as exc:
        return CliResult.from_error(exc, summary=f"Cannot load todos from {source}: {exc}")
    outcome = todo_exporter(lambda: todos, target).tick()
    if outcome is ExportOutcome.FAILED:
        return CliResult(exit_code=ExitCode.EXPORT_FAILED, summary=f"Export to {target} failed.")
    if outcome is ExportOutcome.WRITTEN:
        return CliResult.success(
            summary=f"Exported {len(todos)} todos.",
            artifacts={"todos": target},
        )
    return CliResult.success(summary=f"Nothing exported ({outcome.value}).")


__all__ = ["export_todos_command"]
