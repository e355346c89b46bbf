"""File-based bulk import of books.

Every ``<title>.yaml`` in the import folder holds one book. A sibling
``<title>.jpg`` is attached as the book's cover.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import msgspec

from content.binary_asset import BinaryAsset
from content.converter import Converter
from content.errors import DecodeError
from content.formats import WireFormat
from obs.tracing import ScopeName, get_tracer
from records.books import Book
from store.protocol import RecordStore

logger = logging.getLogger(__name__)
tracer = get_tracer(ScopeName.IMPORTER)

BOOK_EXTENSION = ".yaml"
COVER_EXTENSION = ".jpg"
COVER_CONTENT_TYPE = "image/jpeg"

BOOK_YAML: Converter[Book] = Converter.for_type(Book, WireFormat.YAML)


@dataclass(frozen=True)
class ImportReport:
    """Files imported and files skipped (with the reason) by one run."""

    imported: tuple[Path, ...] = ()
    skipped: tuple[tuple[Path, str], ...] = ()
    enabled: bool = True

    @property
    def total(self) -> int:
        return len(self.imported) + len(self.skipped)


@dataclass
class _ReportBuilder:
    imported: list[Path] = field(default_factory=list)
    skipped: list[tuple[Path, str]] = field(default_factory=list)

    def build(self) -> ImportReport:
        return ImportReport(imported=tuple(self.imported), skipped=tuple(self.skipped))


def read_book(path: Path) -> Book:
    """Decode one book file and attach its cover when present.

    Returns
    -------
    Book
        Decoded book.

    Raises
    ------
    OSError
        Raised when the book or cover file cannot be read.
    DecodeError
        Raised when the YAML does not describe a book.
    """
    book = BOOK_YAML.decode(path.read_bytes())
    cover_path = path.with_suffix(COVER_EXTENSION)
    if cover_path.is_file():
        cover = BinaryAsset.from_file(cover_path, COVER_CONTENT_TYPE)
        book = msgspec.structs.replace(book, cover=cover)
    return book


def import_books(
    directory: Path,
    store: RecordStore[str, Book],
    *,
    enabled: bool = True,
) -> ImportReport:
    """Import every book file in ``directory`` into ``store``.

    Unreadable or malformed files are logged and skipped; the remaining files
    are still imported.

    Returns
    -------
    ImportReport
        Which files were imported and which were skipped.
    """
    if not enabled:
        logger.info("Automatic book import is disabled!")
        return ImportReport(enabled=False)
    report = _ReportBuilder()
    with tracer.start_as_current_span("books.import") as span:
        span.set_attribute("import.directory", str(directory))
        try:
            entries = sorted(directory.glob(f"*{BOOK_EXTENSION}"))
        except OSError:
            logger.exception("Cannot list %s", directory)
            return report.build()
        for entry in entries:
            logger.info("Trying to import %s", entry)
            try:
                book = read_book(entry)
            except (OSError, DecodeError) as exc:
                logger.error("Skipping %s: %s", entry, exc)
                report.skipped.append((entry, str(exc)))
                continue
            store.save(book)
            report.imported.append(entry)
        span.set_attribute("import.imported", len(report.imported))
        span.set_attribute("import.skipped", len(report.skipped))
    return report.build()


__all__ = ["BOOK_YAML", "ImportReport", "import_books", "read_book"]
