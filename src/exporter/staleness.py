"""Staleness-driven snapshot export.

Each ``tick`` reads the whole collection, finds its most recent change stamp
and rewrites the snapshot file only when that stamp is strictly newer than the
last successful export. Ticks never overlap: a tick that finds another one in
progress returns immediately.

Change stamps have second precision, so a change landing in the same second
as a successful export is not newer than it and waits for the next change.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from content.converter import Converter
from content.temporal import TemporalValue
from obs.tracing import ScopeName, get_tracer
from utils.file_io import write_atomic

logger = logging.getLogger(__name__)
tracer = get_tracer(ScopeName.EXPORTER)


class ExportPhase(StrEnum):
    """Where the exporter is within a tick."""

    IDLE = "idle"
    CHECKING = "checking"
    WRITING = "writing"
    FAILED = "failed"


class ExportOutcome(StrEnum):
    """Result of one tick."""

    DISABLED = "disabled"
    SKIPPED_BUSY = "skipped_busy"
    EMPTY = "empty"
    UP_TO_DATE = "up_to_date"
    WRITTEN = "written"
    FAILED = "failed"


@dataclass
class StalenessExporter[R]:
    """Write ``fetch()`` to ``target`` whenever it has changed.

    Parameters
    ----------
    fetch
        Returns every record of the collection.
    changed_of
        Returns the change stamp of one record (``None`` when never stored).
    converter
        Converter for the whole collection, e.g. ``list[Todo]`` as JSON.
    target
        Snapshot file; created when absent and fully replaced otherwise.
    enabled
        Disabled exporters never read or write anything.
    span_name
        Name of the span opened for each tick.
    """

    fetch: Callable[[], Sequence[R]]
    changed_of: Callable[[R], TemporalValue | None]
    converter: Converter[list[R]]
    target: Path
    enabled: bool = True
    span_name: str = "export"
    clock: Callable[[], TemporalValue] = TemporalValue.now
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _phase: ExportPhase = field(default=ExportPhase.IDLE, repr=False)
    _last_export: TemporalValue | None = field(default=None, repr=False)
    _last_outcome: ExportOutcome | None = field(default=None, repr=False)

    @property
    def phase(self) -> ExportPhase:
        return self._phase

    @property
    def last_export(self) -> TemporalValue | None:
        """Time of the last successful write; ``None`` until one happens."""
        return self._last_export

    @property
    def last_outcome(self) -> ExportOutcome | None:
        return self._last_outcome

    def tick(self) -> ExportOutcome:
        """Run one export cycle.

        Returns
        -------
        ExportOutcome
            What the cycle did.
        """
        if not self.enabled:
            return ExportOutcome.DISABLED
        if not self._lock.acquire(blocking=False):
            logger.debug("Export of %s still running; skipping tick.", self.target)
            return ExportOutcome.SKIPPED_BUSY
        try:
            with tracer.start_as_current_span(self.span_name) as span:
                outcome = self._run_cycle()
                span.set_attribute("export.outcome", outcome.value)
                span.set_attribute("export.target", str(self.target))
            self._last_outcome = outcome
            return outcome
        finally:
            self._phase = ExportPhase.IDLE
            self._lock.release()

    def _run_cycle(self) -> ExportOutcome:
        self._phase = ExportPhase.CHECKING
        records = list(self.fetch())
        if not records:
            return ExportOutcome.EMPTY
        if not self._is_stale(records):
            return ExportOutcome.UP_TO_DATE
        self._phase = ExportPhase.WRITING
        logger.info("Exporting %d records to %s", len(records), self.target)
        payload = self.converter.encode(records)
        try:
            write_atomic(self.target, payload)
        except OSError:
            self._phase = ExportPhase.FAILED
            logger.exception("Export to %s failed", self.target)
            return ExportOutcome.FAILED
        self._last_export = self.clock()
        return ExportOutcome.WRITTEN

    def _is_stale(self, records: Sequence[R]) -> bool:
        if self._last_export is None:
            return True
        stamps = [stamp for stamp in map(self.changed_of, records) if stamp is not None]
        if not stamps:
            return False
        return max(stamps) > self._last_export


@dataclass
class ExportScheduler:
    """Background loop calling ``exporter.tick()`` at a fixed rate.

    The first tick runs after ``initial_delay_s``; afterwards ticks start every
    ``fixed_rate_s`` seconds, measured from the start of the previous tick.
    """

    exporter: StalenessExporter[object]
    fixed_rate_s: float
    initial_delay_s: float = 0.0
    name: str = "exporter"
    stop_event: threading.Event = field(default_factory=threading.Event)
    thread: threading.Thread | None = None

    def start(self) -> ExportScheduler:
        """Start the loop thread.

        Returns
        -------
        ExportScheduler
            This scheduler, for chaining.

        Raises
        ------
        RuntimeError
            Raised when the loop is already running.
        """
        if self.running:
            msg = f"Scheduler {self.name!r} is already running."
            raise RuntimeError(msg)
        if self.fixed_rate_s <= 0:
            msg = f"fixed_rate_s must be positive, got {self.fixed_rate_s}."
            raise ValueError(msg)
        self.stop_event.clear()
        self.thread = threading.Thread(target=self._loop, name=self.name, daemon=True)
        self.thread.start()
        return self

    def stop(self, *, timeout_s: float | None = None) -> None:
        """Stop the loop and wait for the thread to finish."""
        self.stop_event.set()
        if self.thread is not None:
            self.thread.join(timeout=timeout_s)

    @property
    def running(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def _loop(self) -> None:
        if self.stop_event.wait(self.initial_delay_s):
            return
        while True:
            started = time.monotonic()
            try:
                self.exporter.tick()
            except Exception:
                logger.exception("Scheduled export %r raised", self.name)
            elapsed = time.monotonic() - started
            if self.stop_event.wait(max(self.fixed_rate_s - elapsed, 0.0)):
                return


__all__ = ["ExportOutcome", "ExportPhase", "ExportScheduler", "StalenessExporter"]
