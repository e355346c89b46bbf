"""Staleness-driven snapshot exporters."""

from exporter.staleness import ExportOutcome, ExportPhase, ExportScheduler, StalenessExporter
from exporter.todos import start_todo_export, todo_exporter

__all__ = [
    "ExportOutcome",
    "ExportPhase",
    "ExportScheduler",
    "StalenessExporter",
    "start_todo_export",
    "todo_exporter",
]
