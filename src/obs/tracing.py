"""OpenTelemetry tracer access for the service's background jobs."""

from __future__ import annotations

from enum import StrEnum
from importlib.metadata import PackageNotFoundError, version

from opentelemetry import trace


class ScopeName(StrEnum):
    """Instrumentation scopes."""

    EXPORTER = "comfortable.exporter"
    IMPORTER = "comfortable.importer"
    CLI = "comfortable.cli"


def _instrumentation_version() -> str | None:
    try:
        return version("comfortable-data")
    except PackageNotFoundError:
        return None


def get_tracer(scope: ScopeName) -> trace.Tracer:
    """Return the tracer for ``scope``.

    Without a configured SDK this is the API's no-op tracer.
    """
    return trace.get_tracer(scope.value, _instrumentation_version())


__all__ = ["ScopeName", "get_tracer"]
