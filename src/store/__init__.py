"""Record stores."""

from store.memory import InMemoryRecordStore, book_store, movie_store, todo_store
from store.protocol import RecordStore

__all__ = ["InMemoryRecordStore", "RecordStore", "book_store", "movie_store", "todo_store"]
