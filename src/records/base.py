"""Base struct shared by every stored record."""

from __future__ import annotations

from serde_msgspec import StructBaseCompat


class RecordBase(StructBaseCompat, rename="camel"):
    """Frozen, keyword-only record with camelCase wire names."""


__all__ = ["RecordBase"]
