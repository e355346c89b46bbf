"""Bulk importers."""

from importer.books import ImportReport, import_books, read_book

__all__ = ["ImportReport", "import_books", "read_book"]
