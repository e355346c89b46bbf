"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from config import ENV_OVERRIDES


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every COMFORTABLE_* override from the environment.

    Returns
    -------
    pytest.MonkeyPatch
        The monkeypatch fixture, for further changes.
    """
    for override in ENV_OVERRIDES:
        monkeypatch.delenv(override.env_var, raising=False)
    monkeypatch.delenv("COMFORTABLE_LOG_LEVEL", raising=False)
    return monkeypatch
