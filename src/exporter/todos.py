"""Scheduled JSON export of all todos."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from config import TodosExportSpec
from content.converter import Converter
from content.formats import WireFormat
from content.temporal import TemporalValue
from exporter.staleness import ExportScheduler, StalenessExporter
from records.todos import Todo
from store.protocol import RecordStore

logger = logging.getLogger(__name__)

TODOS_JSON: Converter[list[Todo]] = Converter.for_type(list[Todo], WireFormat.JSON)


def _changed(todo: Todo) -> TemporalValue | None:
    return todo.changed


def todo_exporter(
    fetch: Callable[[], Sequence[Todo]],
    target: Path,
    *,
    enabled: bool = True,
) -> StalenessExporter[Todo]:
    """Return an exporter writing every todo from ``fetch`` as one JSON array.

    ``fetch`` is usually a store's ``list_all``.

    Returns
    -------
    StalenessExporter[Todo]
        Exporter bound to ``fetch`` and ``target``.
    """
    return StalenessExporter(
        fetch=fetch,
        changed_of=_changed,
        converter=TODOS_JSON,
        target=target,
        enabled=enabled,
        span_name="todos.export",
    )


def start_todo_export(
    store: RecordStore[int | None, Todo],
    target: Path,
    settings: TodosExportSpec,
) -> ExportScheduler | None:
    """Start the scheduled todo export when ``settings.enabled`` is set.

    Returns
    -------
    ExportScheduler | None
        Running scheduler, or ``None`` when the export is disabled.
    """
    if not settings.enabled:
        logger.info("Scheduled todo export is disabled.")
        return None
    exporter = todo_exporter(store.list_all, target)
    scheduler = ExportScheduler(
        exporter=exporter,
        fixed_rate_s=settings.fixed_rate_s,
        initial_delay_s=settings.initial_delay_s,
        name="todos-export",
    )
    logger.info(
        "Exporting todos to %s every %.1fs (first run in %.1fs)",
        target,
        settings.fixed_rate_s,
        settings.initial_delay_s,
    )
    return scheduler.start()


__all__ = ["TODOS_JSON", "start_todo_export", "todo_exporter"]
