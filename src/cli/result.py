"""Structured command results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from cli.exit_codes import ExitCode


@dataclass(frozen=True)
class CliResult:
    """Structured result from CLI command execution.

    Parameters
    ----------
    exit_code
        Exit code for the command.
    summary
        Optional human-readable summary of the result.
    artifacts
        Files written by the command, by name.
    counts
        Named counters (records imported, files skipped, ...).
    """

    exit_code: ExitCode
    summary: str | None = None
    artifacts: Mapping[str, Path] = field(default_factory=dict)
    counts: Mapping[str, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.exit_code is ExitCode.SUCCESS

    @classmethod
    def success(
        cls,
        *,
        summary: str | None = None,
        artifacts: Mapping[str, Path] | None = None,
        counts: Mapping[str, int] | None = None,
    ) -> CliResult:
        """Create a successful result.

        Returns
        -------
        CliResult
            Result with ``ExitCode.SUCCESS``.
        """
        return cls(
            exit_code=ExitCode.SUCCESS,
            summary=summary,
            artifacts=dict(artifacts or {}),
            counts=dict(counts or {}),
        )

    @classmethod
    def from_error(cls, exc: BaseException, *, summary: str | None = None) -> CliResult:
        """Create a failed result classified from ``exc``.

        Returns
        -------
        CliResult
            Result carrying the exit code for ``exc``.
        """
        return cls(exit_code=ExitCode.from_exception(exc), summary=summary or str(exc))


__all__ = ["CliResult"]
