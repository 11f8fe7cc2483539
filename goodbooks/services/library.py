"""Library filter engine.

Pure functions narrowing an in-memory book collection for display. Every
filter field is optional and all active fields are AND'd together; the
result keeps the input order.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Protocol, TypeVar

from goodbooks.models.book import ReadingStatus


class FilterableBook(Protocol):
    title: str
    authors: str | None
    status: ReadingStatus | str | None
    page_count: int | None
    end_date: str | None


Predicate = Callable[[FilterableBook], bool]
T = TypeVar("T", bound=FilterableBook)


@dataclass(frozen=True)
class LibraryFilter:
    """Filter settings for the library view.

    Blank strings disable ``search_text`` and the date bounds.
    """

    status: ReadingStatus | None = None
    search_text: str | None = None
    min_pages: int | None = None
    max_pages: int | None = None
    start_date_bound: str | None = None
    end_date_bound: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.predicates()

    def predicates(self) -> list[Predicate]:
        """Active predicates for these settings."""
        active: list[Predicate] = []

        if self.status is not None:
            status = ReadingStatus(self.status)
            active.append(lambda b: b.status == status)

        if self.search_text and self.search_text.strip():
            needle = self.search_text.casefold()
            active.append(
                lambda b: needle in b.title.casefold()
                or (b.authors is not None and needle in b.authors.casefold())
            )

        # Missing page counts compare as 0
        if self.min_pages is not None:
            min_pages = self.min_pages
            active.append(lambda b: (b.page_count or 0) >= min_pages)
        if self.max_pages is not None:
            max_pages = self.max_pages
            active.append(lambda b: (b.page_count or 0) <= max_pages)

        # ISO YYYY-MM-DD strings sort chronologically
        if self.start_date_bound and self.start_date_bound.strip():
            lower = self.start_date_bound.strip()
            active.append(lambda b: b.end_date is not None and b.end_date >= lower)
        if self.end_date_bound and self.end_date_bound.strip():
            upper = self.end_date_bound.strip()
            active.append(lambda b: b.end_date is not None and b.end_date <= upper)

        return active

    def matches(self, book: FilterableBook) -> bool:
        return all(predicate(book) for predicate in self.predicates())

    def with_changes(self, **changes) -> "LibraryFilter":
        """Copy with some fields changed."""
        return replace(self, **changes)


def filter_books(books: Iterable[T], *filters: LibraryFilter) -> list[T]:
    """Books matching every given filter, in their original order.

    Passing several filters is the same as applying them one after another.
    """
    predicates = [p for criteria in filters for p in criteria.predicates()]
    return [book for book in books if all(p(book) for p in predicates)]


def parse_optional_int(value: str | None) -> int | None:
    """Lenient integer parse used for text inputs: invalid or blank gives None."""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None

