"""Book records."""

from __future__ import annotations

from content.binary_asset import BinaryAsset
from content.temporal import TemporalValue
from records.base import RecordBase


class Author(RecordBase):
    """Book author identified by full name."""

    full_name: str


class Publisher(RecordBase):
    """Book publisher; ``created`` is stamped when first stored."""

    full_name: str
    created: TemporalValue | None = None


class Tag(RecordBase):
    """Free-form label shared by books, movies and todos."""

    name: str


class Book(RecordBase):
    """Book record keyed by ISBN."""

    isbn: str
    title: str
    original_title: str = ""
    series: str = ""
    publisher: Publisher | None = None
    year_of_publication: int = 0
    authors: tuple[Author, ...] = ()
    pages: int = 0
    description: str = ""
    tags: tuple[Tag, ...] = ()
    rating: str = ""
    cover: BinaryAsset | None = None


def book_key(book: Book) -> str:
    """Return the store key of ``book``."""
    return book.isbn


__all__ = ["Author", "Book", "Publisher", "Tag", "book_key"]
