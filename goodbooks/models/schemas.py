"""Pydantic schemas for API validation and serialization."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from goodbooks.constants import DEFAULT_SHELF_COLOR, RATING_MAX, RATING_MIN
from goodbooks.models.book import ReadingStatus
from goodbooks.utils.dates import parse_iso_date

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def _validate_iso_date(v: str | None) -> str | None:
    if v is None or v == "":
        return None
    parse_iso_date(v)
    return v


# Shelf schemas
class ShelfCreate(BaseModel):
    """Shelf creation schema."""

    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    color_hex: int = Field(default=DEFAULT_SHELF_COLOR, ge=INT32_MIN, le=INT32_MAX)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()


class ShelfRead(BaseModel):
    """Shelf read schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    color_hex: int


class ShelfCountRead(BaseModel):
    """Shelf with its member count."""

    shelf: ShelfRead
    count: int


# Book schemas
class BookRead(BaseModel):
    """Book read schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    subtitle: str | None = None
    authors: str | None = None
    description: str | None = None
    page_count: int | None = None
    thumbnail_url: str | None = None
    isbn10: str | None = None
    isbn13: str | None = None
    status: ReadingStatus | None = None
    start_date: str | None = None
    end_date: str | None = None
    rating: int | None = None
    notes: str | None = None


class LibraryBookRead(BookRead):
    """Book annotated with the shelves it belongs to."""

    shelves: list[ShelfRead] = []


class ManualBookCreate(BaseModel):
    """Manual entry form. Only the title is required."""

    title: str = Field(min_length=1, max_length=500)
    author: str = ""
    pages: str = ""
    isbn: str = ""
    description: str = ""

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v


class StatusUpdate(BaseModel):
    """Partial status update (status and both dates)."""

    status: ReadingStatus
    start_date: str | None = None
    end_date: str | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def validate_dates(cls, v: str | None) -> str | None:
        return _validate_iso_date(v)


class RatingUpdate(BaseModel):
    """Rating assignment."""

    rating: int = Field(ge=RATING_MIN, le=RATING_MAX)


class FinishReading(RatingUpdate):
    """Finish-reading request carrying the final rating."""

    pass


# Stats schemas
class BookSummary(BaseModel):
    """Minimal book reference used in records."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    page_count: int | None = None


class AuthorCountRead(BaseModel):
    """Most read author."""

    name: str
    count: int


class StatsRead(BaseModel):
    """Reading statistics response."""

    total_books: int
    books_read: int
    books_reading: int
    books_pending: int
    total_pages_read: int
    books_read_this_year: int
    average_rating: float
    top_author: AuthorCountRead | None
    longest_book: BookSummary | None
    shortest_book: BookSummary | None
    average_days_per_book: int
    yearly_goal: int
    yearly_goal_progress: int


class YearlyGoalUpdate(BaseModel):
    """Yearly reading challenge update."""

    goal: int = Field(ge=1)
