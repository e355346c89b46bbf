"""Logging and tracing helpers."""

from obs.logging import TraceContextFilter, TraceContextFormatter, configure_logging
from obs.tracing import ScopeName, get_tracer

__all__ = [
    "ScopeName",
    "TraceContextFilter",
    "TraceContextFormatter",
    "configure_logging",
    "get_tracer",
]
