"""Shelf model and the book/shelf membership table."""

from dataclasses import dataclass

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column

from goodbooks.models.base import Base, TimestampMixin

# Association table
book_shelves = Table(
    "book_shelves",
    Base.metadata,
    Column("book_id", String(100), ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("shelf_id", Integer, ForeignKey("shelves.id", ondelete="CASCADE"), primary_key=True),
)


class Shelf(Base, TimestampMixin):
    """User-defined named collection of books."""

    __tablename__ = "shelves"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    color_hex: Mapped[int] = mapped_column(Integer, nullable=False)  # signed 32-bit ARGB

    def __repr__(self) -> str:
        return f"<Shelf(id={self.id}, name={self.name})>"


@dataclass(frozen=True)
class Membership:
    """One row of book_shelves."""

    book_id: str
    shelf_id: int
