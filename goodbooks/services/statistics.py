"""Statistics engine: reading habits and records over the completed books."""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from goodbooks.constants import AUTHOR_SEPARATOR, DEFAULT_YEARLY_GOAL
from goodbooks.models.book import Book, ReadingStatus
from goodbooks.utils.dates import parse_iso_date


@dataclass(frozen=True)
class AuthorCount:
    """Most read author and the number of completed books by them."""

    name: str
    count: int


@dataclass(frozen=True)
class ReadingStats:
    """Summary metrics, recomputed in full on every load."""

    total_books: int = 0
    books_read: int = 0
    books_reading: int = 0
    books_pending: int = 0
    total_pages_read: int = 0
    books_read_this_year: int = 0
    average_rating: float = 0.0
    top_author: AuthorCount | None = None
    longest_book: Book | None = None
    shortest_book: Book | None = None
    average_days_per_book: int = 0
    yearly_goal: int = DEFAULT_YEARLY_GOAL

    def __post_init__(self) -> None:
        if self.yearly_goal <= 0:
            raise ValueError(f"yearly goal must be positive, got {self.yearly_goal}")

    @property
    def yearly_goal_progress(self) -> int:
        """Percentage of the yearly goal reached, capped at 100."""
        return min(100, self.books_read_this_year * 100 // self.yearly_goal)


class YearlyGoal:
    """Session-scoped yearly reading challenge."""

    def __init__(self, value: int = DEFAULT_YEARLY_GOAL) -> None:
        self._value = DEFAULT_YEARLY_GOAL
        self.value = value

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, new_goal: int) -> None:
        if new_goal <= 0:
            raise ValueError(f"yearly goal must be positive, got {new_goal}")
        self._value = new_goal


def round_half_up(value: float, digits: int = 1) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def average_rating(completed: Sequence[Book]) -> float:
    """Mean of positive ratings, one decimal, 0.0 when nothing is rated."""
    ratings = [b.rating for b in completed if b.rating is not None and b.rating > 0]
    if not ratings:
        return 0.0
    return round_half_up(sum(ratings) / len(ratings))


def top_author(completed: Sequence[Book]) -> AuthorCount | None:
    """Author appearing in most completed books.

    The authors field is split on ", " only. Ties go to the author seen first.
    """
    counts: dict[str, int] = {}
    for book in completed:
        if not book.authors:
            continue
        for name in book.authors.split(AUTHOR_SEPARATOR):
            if name:
                counts[name] = counts.get(name, 0) + 1
    if not counts:
        return None
    # max() keeps the first maximal entry in insertion order
    name, count = max(counts.items(), key=lambda item: item[1])
    return AuthorCount(name=name, count=count)


def longest_book(completed: Sequence[Book]) -> Book | None:
    """Book with most pages; missing page counts compare as 0."""
    if not completed:
        return None
    return max(completed, key=lambda b: b.page_count or 0)


def shortest_book(completed: Sequence[Book]) -> Book | None:
    """Book with fewest pages, ignoring books with no or zero pages."""
    candidates = [b for b in completed if (b.page_count or 0) > 0]
    if not candidates:
        return None
    return min(candidates, key=lambda b: b.page_count)


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        return None


def average_days_per_book(completed: Sequence[Book]) -> int:
    """Floored mean reading span in days, at least 1 when any book qualifies.

    Books with a missing or malformed date, or ending before they start,
    are left out entirely.
    """
    total_days = 0
    count = 0
    for book in completed:
        start = _parse_date(book.start_date)
        end = _parse_date(book.end_date)
        if start is None or end is None:
            continue
        days = (end - start).days
        if days >= 0:
            total_days += days
            count += 1
    if count == 0:
        return 0
    return max(1, total_days // count)


def compute_reading_stats(
    books: Sequence[Book],
    today: date | None = None,
    yearly_goal: int = DEFAULT_YEARLY_GOAL,
) -> ReadingStats:
    """Aggregate the whole library into ReadingStats.

    Raises:
        ValueError: if yearly_goal is not positive.
    """
    current_year = str((today or date.today()).year)
    completed = [b for b in books if b.status == ReadingStatus.COMPLETED]

    return ReadingStats(
        total_books=len(books),
        books_read=len(completed),
        books_reading=sum(1 for b in books if b.status == ReadingStatus.IN_PROGRESS),
        books_pending=sum(1 for b in books if b.status is None or b.status == ReadingStatus.PENDING),
        total_pages_read=sum(b.page_count or 0 for b in completed),
        books_read_this_year=sum(
            1 for b in completed if b.end_date is not None and b.end_date.startswith(current_year)
        ),
        average_rating=average_rating(completed),
        top_author=top_author(completed),
        longest_book=longest_book(completed),
        shortest_book=shortest_book(completed),
        average_days_per_book=average_days_per_book(completed),
        yearly_goal=yearly_goal,
    )
