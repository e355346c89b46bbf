"""Runtime validation models for config boundaries."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from runtime_models.adapters import SERVICE_CONFIG_ADAPTER
    from runtime_models.service import RuntimeBase, ServiceConfigRuntime

__all__ = [
    "SERVICE_CONFIG_ADAPTER",
    "RuntimeBase",
    "ServiceConfigRuntime",
]

_EXPORT_MAP: dict[str, tuple[str, str]] = {
    "SERVICE_CONFIG_ADAPTER": ("runtime_models.adapters", "SERVICE_CONFIG_ADAPTER"),
    "RuntimeBase": ("runtime_models.service", "RuntimeBase"),
    "ServiceConfigRuntime": ("runtime_models.service", "ServiceConfigRuntime"),
}


def __getattr__(name: str) -> object:
    target = _EXPORT_MAP.get(name)
    if target is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    module_name, attr_name = target
    value = getattr(importlib.import_module(module_name), attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(__all__)
