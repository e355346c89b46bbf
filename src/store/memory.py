"""Thread-safe in-memory record stores."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

import msgspec

from content.temporal import TemporalValue
from records.books import Book, book_key
from records.movies import Movie, MovieKey, movie_key
from records.todos import Todo, todo_key

logger = logging.getLogger(__name__)


@dataclass
class InMemoryRecordStore[K, R]:
    """Dict-backed store keyed by ``key_fn``.

    ``prepare`` runs on every save while the lock is held and receives the
    record plus the previously stored value (or ``None``).
    """

    key_fn: Callable[[R], K]
    prepare: Callable[[R, R | None], R] | None = None
    _records: dict[K, R] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def save(self, record: R) -> R:
        with self._lock:
            previous = self._records.get(self.key_fn(record))
            if self.prepare is not None:
                record = self.prepare(record, previous)
            key = self.key_fn(record)
            self._records[key] = record
        logger.debug("Stored %s %r", type(record).__name__, key)
        return record

    def get(self, key: K) -> R | None:
        with self._lock:
            return self._records.get(key)

    def list_all(self) -> list[R]:
        with self._lock:
            return list(self._records.values())

    def filter(self, predicate: Callable[[R], bool]) -> list[R]:
        return [record for record in self.list_all() if predicate(record)]

    def delete(self, key: K) -> bool:
        with self._lock:
            return self._records.pop(key, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


def _todo_stamper() -> Callable[[Todo, Todo | None], Todo]:
    highest = 0

    def _prepare(todo: Todo, previous: Todo | None) -> Todo:
        nonlocal highest
        now = TemporalValue.now()
        if todo.id is None:
            todo = msgspec.structs.replace(todo, id=highest + 1)
        highest = max(highest, todo.id or 0)
        if previous is not None and previous.created is not None:
            todo = msgspec.structs.replace(todo, created=previous.created)
        return todo.touched(now)

    return _prepare


def book_store() -> InMemoryRecordStore[str, Book]:
    """Return an empty book store keyed by ISBN."""
    return InMemoryRecordStore(key_fn=book_key)


def movie_store() -> InMemoryRecordStore[MovieKey, Movie]:
    """Return an empty movie store keyed by title, original title and year."""
    return InMemoryRecordStore(key_fn=movie_key)


def todo_store() -> InMemoryRecordStore[int | None, Todo]:
    """Return an empty todo store.

    Saving assigns a numeric id to new todos, keeps the first ``created``
    stamp and sets ``changed`` to the current time.
    """
    return InMemoryRecordStore(key_fn=todo_key, prepare=_todo_stamper())


__all__ = ["InMemoryRecordStore", "book_store", "movie_store", "todo_store"]
