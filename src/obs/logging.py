"""Logging helpers with OpenTelemetry trace correlation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from opentelemetry import trace

if TYPE_CHECKING:

    class _TraceRecord(logging.LogRecord):
        trace_id: str | None
        span_id: str | None


TRACE_LOG_FORMAT = (
    "%(asctime)s %(levelname)s [trace_id=%(trace_id)s span_id=%(span_id)s] %(name)s: %(message)s"
)


class TraceContextFilter(logging.Filter):
    """Attach trace/span IDs to log records when available."""

    @staticmethod
    def filter(record: logging.LogRecord) -> bool:
        """Inject trace/span IDs into the log record when available.

        Returns
        -------
        bool
            True to keep the log record.
        """
        context = trace.get_current_span().get_span_context()
        trace_record = cast("_TraceRecord", record)
        if context is None or not context.is_valid:
            trace_record.trace_id = None
            trace_record.span_id = None
            return True
        trace_record.trace_id = f"{context.trace_id:032x}"
        trace_record.span_id = f"{context.span_id:016x}"
        return True


class TraceContextFormatter(logging.Formatter):
    """Formatter that tolerates records logged before the filter ran."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "trace_id"):
            record.trace_id = None
        if not hasattr(record, "span_id"):
            record.span_id = None
        return super().format(record)


def configure_logging(
    level: int | str = logging.INFO,
    *,
    logger: logging.Logger | None = None,
    fmt: str | None = None,
) -> logging.Logger:
    """Install a trace-aware stream handler on ``logger`` (default: root).

    Calling this more than once replaces the formatter on existing handlers
    instead of stacking new ones.

    Returns
    -------
    logging.Logger
        The configured logger.
    """
    target = logger or logging.getLogger()
    target.setLevel(level)
    formatter = TraceContextFormatter(fmt or TRACE_LOG_FORMAT)
    if not target.handlers:
        target.addHandler(logging.StreamHandler())
    for handler in target.handlers:
        handler.setFormatter(formatter)
        if not any(isinstance(existing, TraceContextFilter) for existing in handler.filters):
            handler.addFilter(TraceContextFilter())
    return target


__all__ = [
    "TRACE_LOG_FORMAT",
    "TraceContextFilter",
    "TraceContextFormatter",
    "configure_logging",
]
