"""Domain services: catalog client, filter engine, membership view, statistics."""

from goodbooks.services.catalog import (
    GoogleBooksCatalog,
    catalog_book_to_book,
    google_books_catalog,
    manual_book,
)
from goodbooks.services.library import LibraryFilter, filter_books
from goodbooks.services.shelves import ShelfCount, ShelfMembershipView
from goodbooks.services.statistics import ReadingStats, YearlyGoal, compute_reading_stats

__all__ = [
    "GoogleBooksCatalog",
    "catalog_book_to_book",
    "google_books_catalog",
    "manual_book",
    "LibraryFilter",
    "filter_books",
    "ShelfCount",
    "ShelfMembershipView",
    "ReadingStats",
    "YearlyGoal",
    "compute_reading_stats",
]
