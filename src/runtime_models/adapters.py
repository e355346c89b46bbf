"""Centralized TypeAdapter instances for runtime validation."""

from __future__ import annotations

from pydantic import TypeAdapter

from runtime_models.service import ServiceConfigRuntime

SERVICE_CONFIG_ADAPTER = TypeAdapter(ServiceConfigRuntime)

__all__ = ["SERVICE_CONFIG_ADAPTER"]
