"""MessagePack extension codes for msgspec serialization."""

from __future__ import annotations

TEMPORAL_VALUE_EXT_CODE: int = 1

__all__ = ["TEMPORAL_VALUE_EXT_CODE"]
