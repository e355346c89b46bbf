"""Key/value registry protocol and the two base implementations used here.

``MutableRegistry`` backs registries that grow at runtime (field codecs).
``ImmutableRegistry`` backs closed tables fixed at import time (wire formats).
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Protocol, TypeVar, runtime_checkable

K = TypeVar("K")
V = TypeVar("V")


@runtime_checkable
class Registry(Protocol[K, V]):
    """Read side shared by every registry."""

    @abstractmethod
    def get(self, key: K) -> V | None:
        """Retrieve a value by key, or None if not found."""

    @abstractmethod
    def __contains__(self, key: K) -> bool:
        """Check if key is registered."""

    @abstractmethod
    def __iter__(self) -> Iterator[K]:
        """Iterate over registered keys."""

    @abstractmethod
    def __len__(self) -> int:
        """Return count of registered items."""


@dataclass
class MutableRegistry[K, V]:
    """Dict-backed registry that rejects silent overwrites."""

    _entries: dict[K, V] = field(default_factory=dict)

    def register(self, key: K, value: V, *, overwrite: bool = False) -> None:
        """Register ``value`` under ``key``.

        Raises
        ------
        ValueError
            Raised when ``key`` is taken and ``overwrite`` is false.
        """
        if key in self._entries and not overwrite:
            msg = f"Key {key!r} already registered. Use overwrite=True."
            raise ValueError(msg)
        self._entries[key] = value

    def get(self, key: K) -> V | None:
        return self._entries.get(key)

    def __contains__(self, key: K) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> Iterator[tuple[K, V]]:
        """Iterate over key/value pairs in registration order."""
        return iter(self._entries.items())


@dataclass(frozen=True)
class ImmutableRegistry[K, V]:
    """Frozen registry built once from a mapping."""

    _entries: tuple[tuple[K, V], ...]

    def get(self, key: K) -> V | None:
        for k, v in self._entries:
            if k == key:
                return v
        return None

    def require(self, key: K) -> V:
        """Return the value for ``key``.

        Raises
        ------
        KeyError
            Raised when ``key`` is not registered.
        """
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __contains__(self, key: K) -> bool:
        return any(k == key for k, _ in self._entries)

    def __iter__(self) -> Iterator[K]:
        return (k for k, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> Iterator[tuple[K, V]]:
        """Iterate over key/value pairs in declaration order."""
        return iter(self._entries)

    @classmethod
    def from_dict(cls, data: Mapping[K, V]) -> ImmutableRegistry[K, V]:
        """Create an immutable registry from a mapping.

        Returns
        -------
        ImmutableRegistry[K, V]
            Frozen registry containing the mapping entries.
        """
        return cls(tuple(data.items()))


__all__ = [
    "ImmutableRegistry",
    "MutableRegistry",
    "Registry",
]
