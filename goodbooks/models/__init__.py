"""SQLAlchemy models."""

from goodbooks.models.base import Base
from goodbooks.models.book import BOOK_FIELDS, Book, ReadingStatus
from goodbooks.models.shelf import Membership, Shelf, book_shelves

__all__ = [
    "Base",
    "Book",
    "BOOK_FIELDS",
    "ReadingStatus",
    "Shelf",
    "Membership",
    "book_shelves",
]
