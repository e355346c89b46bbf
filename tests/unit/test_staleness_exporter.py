"""Tests for the staleness-driven snapshot exporter and its scheduler."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from pathlib import Path

import msgspec
import pytest

from config import TodosExportSpec
from content.temporal import TemporalValue
from exporter.staleness import ExportOutcome, ExportPhase, ExportScheduler, StalenessExporter
from exporter.todos import TODOS_JSON, start_todo_export, todo_exporter
from records.todos import Todo
from store.memory import todo_store
from tests.test_helpers.samples import sample_todo

CHANGED_AT = 100
EXPORTED_AT = 200
LATER = 300
WAIT_TIMEOUT_S = 5.0
FAST_RATE_S = 0.01


class FixedClock:
    """Clock returning a settable instant."""

    def __init__(self, seconds: int) -> None:
        self.seconds = seconds

    def __call__(self) -> TemporalValue:
        return TemporalValue(self.seconds)


def _exporter(todos: list[Todo], target: Path) -> StalenessExporter[Todo]:
    exporter = todo_exporter(lambda: todos, target)
    exporter.clock = FixedClock(EXPORTED_AT)
    return exporter


def _wait_for(predicate: Callable[[], bool], timeout_s: float = WAIT_TIMEOUT_S) -> bool:
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_first_tick_writes_snapshot(tmp_path: Path) -> None:
    """The first non-empty tick always writes a JSON array."""
    todos = [sample_todo(1, changed=CHANGED_AT), sample_todo(2, changed=CHANGED_AT)]
    target = tmp_path / "todos.json"
    exporter = _exporter(todos, target)
    assert exporter.last_export is None
    assert exporter.tick() is ExportOutcome.WRITTEN
    assert exporter.last_export == TemporalValue(EXPORTED_AT)
    assert TODOS_JSON.decode(target.read_bytes()) == todos
    assert isinstance(msgspec.json.decode(target.read_bytes()), list)


def test_unchanged_collection_is_not_rewritten(tmp_path: Path) -> None:
    """Ticks without newer changes leave the file alone."""
    todos = [sample_todo(1, changed=CHANGED_AT)]
    target = tmp_path / "todos.json"
    exporter = _exporter(todos, target)
    exporter.tick()
    target.write_bytes(b"sentinel")
    assert exporter.tick() is ExportOutcome.UP_TO_DATE
    assert exporter.tick() is ExportOutcome.UP_TO_DATE
    assert target.read_bytes() == b"sentinel"


def test_newer_change_triggers_rewrite(tmp_path: Path) -> None:
    """A change stamped after the last export is written on the next tick."""
    todos = [sample_todo(1, changed=CHANGED_AT)]
    target = tmp_path / "todos.json"
    exporter = _exporter(todos, target)
    exporter.tick()
    todos.append(sample_todo(2, changed=LATER, title="new"))
    assert exporter.tick() is ExportOutcome.WRITTEN
    assert len(TODOS_JSON.decode(target.read_bytes())) == len(todos)


def test_change_in_export_second_waits(tmp_path: Path) -> None:
    """A stamp equal to the last export is not newer."""
    todos = [sample_todo(1, changed=CHANGED_AT)]
    exporter = _exporter(todos, tmp_path / "todos.json")
    exporter.tick()
    todos[0] = sample_todo(1, changed=EXPORTED_AT)
    assert exporter.tick() is ExportOutcome.UP_TO_DATE


def test_empty_collection(tmp_path: Path) -> None:
    """Nothing is written for an empty collection."""
    target = tmp_path / "todos.json"
    exporter = _exporter([], target)
    assert exporter.tick() is ExportOutcome.EMPTY
    assert not target.exists()
    assert exporter.last_export is None


def test_disabled_exporter_reads_nothing(tmp_path: Path) -> None:
    """A disabled exporter never calls fetch."""
    calls: list[int] = []

    def fetch() -> list[Todo]:
        calls.append(1)
        return [sample_todo()]

    exporter = todo_exporter(fetch, tmp_path / "todos.json", enabled=False)
    assert exporter.tick() is ExportOutcome.DISABLED
    assert calls == []


def test_existing_file_is_fully_replaced(tmp_path: Path) -> None:
    """A longer previous snapshot leaves no trailing bytes."""
    target = tmp_path / "todos.json"
    target.write_bytes(b"x" * 100_000)
    exporter = _exporter([Todo(title="t", changed=TemporalValue(CHANGED_AT))], target)
    exporter.tick()
    assert TODOS_JSON.decode(target.read_bytes())[0].title == "t"
    assert [p.name for p in tmp_path.iterdir()] == ["todos.json"]


def test_write_failure_is_contained(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """A failed write is logged, keeps last_export and is retried."""
    target = tmp_path / "missing" / "todos.json"
    exporter = _exporter([sample_todo(changed=CHANGED_AT)], target)
    with caplog.at_level(logging.ERROR, logger="exporter.staleness"):
        assert exporter.tick() is ExportOutcome.FAILED
    assert exporter.last_export is None
    assert exporter.phase is ExportPhase.IDLE
    assert exporter.last_outcome is ExportOutcome.FAILED
    assert "failed" in caplog.text
    target.parent.mkdir()
    assert exporter.tick() is ExportOutcome.WRITTEN
    assert target.exists()


def test_overlapping_tick_is_skipped(tmp_path: Path) -> None:
    """A tick started while another runs returns immediately."""
    nested: list[ExportOutcome] = []
    phases: list[ExportPhase] = []
    todos = [sample_todo(changed=CHANGED_AT)]

    def fetch() -> list[Todo]:
        phases.append(exporter.phase)
        nested.append(exporter.tick())
        return todos

    exporter = todo_exporter(fetch, tmp_path / "todos.json")
    assert exporter.tick() is ExportOutcome.WRITTEN
    assert nested == [ExportOutcome.SKIPPED_BUSY]
    assert phases == [ExportPhase.CHECKING]
    assert exporter.phase is ExportPhase.IDLE


def test_scheduler_ticks_until_stopped(tmp_path: Path) -> None:
    """The scheduler writes the snapshot and stops on request."""
    target = tmp_path / "todos.json"
    exporter = _exporter([sample_todo(changed=CHANGED_AT)], target)
    scheduler = ExportScheduler(exporter=exporter, fixed_rate_s=FAST_RATE_S).start()
    try:
        assert _wait_for(target.exists)
        assert scheduler.running
        with pytest.raises(RuntimeError, match="already running"):
            scheduler.start()
    finally:
        scheduler.stop(timeout_s=WAIT_TIMEOUT_S)
    assert not scheduler.running


def test_scheduler_stops_during_initial_delay(tmp_path: Path) -> None:
    """Stopping before the first tick means no tick runs."""
    ticked = threading.Event()

    def fetch() -> list[Todo]:
        ticked.set()
        return []

    exporter = todo_exporter(fetch, tmp_path / "todos.json")
    scheduler = ExportScheduler(
        exporter=exporter,
        fixed_rate_s=FAST_RATE_S,
        initial_delay_s=WAIT_TIMEOUT_S * 10,
    ).start()
    scheduler.stop(timeout_s=WAIT_TIMEOUT_S)
    assert not scheduler.running
    assert not ticked.is_set()


def test_scheduler_survives_tick_errors(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """An exception inside a tick is logged and the loop keeps going."""
    calls: list[int] = []

    def fetch() -> list[Todo]:
        calls.append(1)
        raise RuntimeError("store unavailable")

    exporter = todo_exporter(fetch, tmp_path / "todos.json")
    scheduler = ExportScheduler(exporter=exporter, fixed_rate_s=FAST_RATE_S)
    with caplog.at_level(logging.ERROR, logger="exporter.staleness"):
        scheduler.start()
        try:
            assert _wait_for(lambda: len(calls) >= 2)
        finally:
            scheduler.stop(timeout_s=WAIT_TIMEOUT_S)
    assert "store unavailable" in caplog.text


def test_scheduler_rejects_non_positive_rate(tmp_path: Path) -> None:
    """A zero rate cannot be scheduled."""
    scheduler = ExportScheduler(exporter=_exporter([], tmp_path / "t.json"), fixed_rate_s=0)
    with pytest.raises(ValueError, match="fixed_rate_s"):
        scheduler.start()


def test_start_todo_export_respects_settings(tmp_path: Path) -> None:
    """The todo export only starts when enabled and exports the store."""
    store = todo_store()
    store.save(Todo(title="persisted"))
    target = tmp_path / "todos.json"
    assert start_todo_export(store, target, TodosExportSpec()) is None
    settings = TodosExportSpec(enabled=True, fixed_rate_s=FAST_RATE_S, initial_delay_s=0.0)
    scheduler = start_todo_export(store, target, settings)
    assert scheduler is not None
    try:
        assert _wait_for(target.exists)
    finally:
        scheduler.stop(timeout_s=WAIT_TIMEOUT_S)
    assert [todo.title for todo in TODOS_JSON.decode(target.read_bytes())] == ["persisted"]


def test_last_export_not_before_tick_start(tmp_path: Path) -> None:
    """With the real clock the recorded export time is at least the tick start."""
    exporter = todo_exporter(lambda: [sample_todo(changed=CHANGED_AT)], tmp_path / "todos.json")
    started = TemporalValue.now()
    assert exporter.tick() is ExportOutcome.WRITTEN
    assert exporter.last_export is not None
    assert exporter.last_export >= started
