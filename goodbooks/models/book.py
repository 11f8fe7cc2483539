"""Book model and reading status."""

import enum

from sqlalchemy import Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from goodbooks.models.base import Base, TimestampMixin


class ReadingStatus(str, enum.Enum):
    """Reading progress of a tracked book. A missing status means PENDING."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


# Columns overwritten by an upsert (everything except the primary key and timestamps)
BOOK_FIELDS = (
    "title",
    "subtitle",
    "authors",
    "description",
    "page_count",
    "thumbnail_url",
    "isbn10",
    "isbn13",
    "status",
    "start_date",
    "end_date",
    "rating",
    "notes",
)


class Book(Base, TimestampMixin):
    """A catalog entry the user has chosen to track."""

    __tablename__ = "books"

    # Catalog identifier, or manual_<unix-seconds> for hand-entered books
    id: Mapped[str] = mapped_column(String(100), primary_key=True)

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    subtitle: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # Author names joined by ", " (not normalized)
    authors: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    page_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    thumbnail_url: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    isbn10: Mapped[str | None] = mapped_column(String(20), nullable=True)
    isbn13: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # User tracking
    status: Mapped[ReadingStatus | None] = mapped_column(
        Enum(ReadingStatus, native_enum=False, length=20),
        default=ReadingStatus.PENDING,
        nullable=True,
        index=True,
    )
    # ISO YYYY-MM-DD, kept as text so string order equals date order
    start_date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    end_date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    @property
    def effective_status(self) -> ReadingStatus:
        """Status with the implicit PENDING default applied."""
        return ReadingStatus(self.status) if self.status else ReadingStatus.PENDING

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title={self.title})>"
