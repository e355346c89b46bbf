"""Run context shared by CLI commands."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass

from config import ResolvedConfig, ServicePaths, load_service_config


@dataclass(frozen=True)
class RunContext:
    """Per-invocation context built by the meta launcher.

    Parameters
    ----------
    log_level
        Logging level applied to the invocation.
    config
        Resolved service configuration.
    config_file
        Explicit ``--config`` path, if one was given.
    """

    log_level: str
    config: ResolvedConfig
    config_file: str | None = None

    @property
    def paths(self) -> ServicePaths:
        return ServicePaths.from_spec(self.config.spec)


_RUN_CONTEXT: ContextVar[RunContext | None] = ContextVar("comfortable.run_context", default=None)


def set_run_context(context: RunContext) -> None:
    """Install ``context`` for the commands run by this invocation."""
    _RUN_CONTEXT.set(context)


def current_run_context() -> RunContext:
    """Return the installed context, or one built from the default config lookup.

    Returns
    -------
    RunContext
        Context for the running command.
    """
    context = _RUN_CONTEXT.get()
    if context is None:
        context = RunContext(log_level="INFO", config=load_service_config())
        _RUN_CONTEXT.set(context)
    return context


__all__ = ["RunContext", "current_run_context", "set_run_context"]
