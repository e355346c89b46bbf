"""Run the book importer once."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from cli.context import RunContext, current_run_context
from cli.exit_codes import ExitCode
from cli.result import CliResult
from importer.books import import_books
from store.memory import book_store


def import_books_command(
    directory: Annotated[
        Path | None,
        Parameter(help="Folder with <title>.yaml files (default: configured books path)."),
    ] = None,
    *,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> CliResult:
    """Import every book file from a folder and report what happened.

    Returns
    -------
    CliResult
        Counts of imported and skipped files.
    """
    folder = directory or (run_context or current_run_context()).paths.books
    if not folder.is_dir():
        return CliResult(
            exit_code=ExitCode.IO_ERROR,
            summary=f"Book folder does not exist: {folder}",
        )
    store = book_store()
    report = import_books(folder, store)
    counts = {"imported": len(report.imported), "skipped": len(report.skipped)}
    if report.skipped:
        names = ", ".join(path.name for path, _ in report.skipped)
        return CliResult(
            exit_code=ExitCode.DECODE_ERROR,
            summary=f"Imported {len(store)} books from {folder}; skipped {names}.",
            counts=counts,
        )
    return CliResult.success(summary=f"Imported {len(store)} books from {folder}.", counts=counts)


__all__ = ["import_books_command"]
