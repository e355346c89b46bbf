"""Tests for the in-memory record stores."""

from __future__ import annotations

import threading

import msgspec
import pytest

from content.temporal import TemporalValue
from records.todos import Todo
from store.memory import book_store, movie_store, todo_store
from store.protocol import RecordStore
from tests.test_helpers.samples import sample_book, sample_movie

FIRST_SAVE = 1_000
SECOND_SAVE = 2_000
THREADS = 8
SAVES_PER_THREAD = 25


class StepClock:
    """Stand-in for ``TemporalValue.now`` with a movable instant."""

    def __init__(self, seconds: int) -> None:
        self.seconds = seconds

    def __call__(self) -> TemporalValue:
        return TemporalValue(self.seconds)


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> StepClock:
    step = StepClock(FIRST_SAVE)
    monkeypatch.setattr(TemporalValue, "now", staticmethod(step))
    return step


def test_stores_satisfy_protocol() -> None:
    """Every factory returns a RecordStore."""
    for store in (book_store(), movie_store(), todo_store()):
        assert isinstance(store, RecordStore)


def test_book_store_crud() -> None:
    """Books are keyed by ISBN and replaced on save."""
    store = book_store()
    book = sample_book()
    store.save(book)
    store.save(msgspec.structs.replace(book, rating="gut"))
    assert len(store) == 1
    stored = store.get(book.isbn)
    assert stored is not None
    assert stored.rating == "gut"
    assert store.filter(lambda b: b.pages > 0) == [stored]
    assert store.delete(book.isbn)
    assert not store.delete(book.isbn)
    assert store.list_all() == []


def test_movie_store_composite_key() -> None:
    """Movies with the same title but different years are distinct."""
    store = movie_store()
    movie = sample_movie()
    remake = msgspec.structs.replace(movie, year_of_publication=2030)
    store.save(movie)
    store.save(remake)
    assert len(store) == 2
    assert store.get(("Alien", "Alien", 1979)) == movie


def test_todo_store_assigns_ids_and_stamps(clock: StepClock) -> None:
    """New todos get ids; created stays fixed while changed moves."""
    store = todo_store()
    first = store.save(Todo(title="one"))
    second = store.save(Todo(title="two"))
    assert (first.id, second.id) == (1, 2)
    assert first.created == first.changed == TemporalValue(FIRST_SAVE)

    clock.seconds = SECOND_SAVE
    updated = store.save(msgspec.structs.replace(first, title="one!", created=None))
    assert updated.id == first.id
    assert updated.created == TemporalValue(FIRST_SAVE)
    assert updated.changed == TemporalValue(SECOND_SAVE)
    assert len(store) == 2


def test_todo_store_respects_explicit_ids(clock: StepClock) -> None:
    """Explicit ids are kept and later ids continue above them."""
    store = todo_store()
    store.save(Todo(title="imported", id=10))
    assert store.save(Todo(title="next")).id == 11


def test_concurrent_saves_get_unique_ids() -> None:
    """Ids stay unique when many threads save at once."""
    store = todo_store()

    def worker() -> None:
        for index in range(SAVES_PER_THREAD):
            store.save(Todo(title=f"todo {index}"))

    threads = [threading.Thread(target=worker) for _ in range(THREADS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    ids = {todo.id for todo in store.list_all()}
    assert len(ids) == THREADS * SAVES_PER_THREAD


def test_touched_keeps_created_and_moves_changed(clock: StepClock) -> None:
    """``touched`` fills a missing created stamp once and always moves changed."""
    fresh = Todo(title="t").touched()
    assert fresh.created == fresh.changed == TemporalValue(FIRST_SAVE)

    later = fresh.touched(TemporalValue(SECOND_SAVE))
    assert later.created == TemporalValue(FIRST_SAVE)
    assert later.changed == TemporalValue(SECOND_SAVE)
    assert fresh.changed == TemporalValue(FIRST_SAVE)
