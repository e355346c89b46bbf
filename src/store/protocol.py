"""Record store interface."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class RecordStore[K, R](Protocol):
    """Keyed collection of records of one kind."""

    def save(self, record: R) -> R:
        """Create or replace ``record`` and return the stored value."""
        ...

    def get(self, key: K) -> R | None:
        """Return the record stored under ``key``, if any."""
        ...

    def list_all(self) -> list[R]:
        """Return every stored record."""
        ...

    def filter(self, predicate: Callable[[R], bool]) -> list[R]:
        """Return the stored records matching ``predicate``."""
        ...

    def delete(self, key: K) -> bool:
        """Remove ``key`` and report whether it existed."""
        ...

    def __len__(self) -> int: ...


__all__ = ["RecordStore"]
