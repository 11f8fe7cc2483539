"""Observable state containers, one per screen responsibility.

Each container holds a snapshot pulled from the repository, exposes the
derived fields (filtered books, shelf counts, stats...) and notifies its
subscribers after every change. Derived fields are recomputed from scratch
on ``reload()``.
"""

from collections.abc import Callable
from dataclasses import replace
from datetime import date

from goodbooks.db.repository import BookRepository
from goodbooks.models.book import Book, ReadingStatus
from goodbooks.models.catalog import CatalogBook
from goodbooks.models.shelf import Shelf
from goodbooks.services import reading
from goodbooks.services.catalog import catalog_book_to_book, manual_book
from goodbooks.services.library import LibraryFilter, filter_books, parse_optional_int
from goodbooks.services.shelves import ShelfCount, ShelfMembershipView
from goodbooks.services.statistics import ReadingStats, YearlyGoal, compute_reading_stats
from goodbooks.utils.logging import get_logger

logger = get_logger(__name__)

Listener = Callable[["ObservableState"], None]
Today = Callable[[], date]


class ObservableState:
    """Minimal subscription support."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)


class LibraryState(ObservableState):
    """Library screen: filtered books, shelf counts and reading actions."""

    def __init__(self, repository: BookRepository, today: Today = date.today) -> None:
        super().__init__()
        self.repository = repository
        self._today = today
        self.all_books: list[Book] = []
        self.books: list[Book] = []
        self.filter = LibraryFilter()
        self.shelves: list[ShelfCount] = []
        self.books_to_shelves: dict[str, list[Shelf]] = {}
        self.is_loading = False

    async def reload(self) -> None:
        """Pull books, shelves and memberships, then recompute every derived field."""
        self.is_loading = True
        try:
            view = await ShelfMembershipView.load(self.repository)
        finally:
            self.is_loading = False
        self.all_books = list(view.books)
        self.shelves = view.shelf_counts()
        self.books_to_shelves = view.books_to_shelves()
        self._apply_filters()

    def _apply_filters(self) -> None:
        self.books = filter_books(self.all_books, self.filter)
        self._notify()

    # Filters

    def set_status_filter(self, status: ReadingStatus | None) -> None:
        """Select a status; selecting the active one again clears it."""
        new_status = None if status == self.filter.status else status
        self.filter = self.filter.with_changes(status=new_status)
        self._apply_filters()

    def set_search_query(self, query: str) -> None:
        self.filter = self.filter.with_changes(search_text=query)
        self._apply_filters()

    def set_advanced_filters(self, min_pages: str, max_pages: str, start: str, end: str) -> None:
        """Page and date filters as typed; unparseable page numbers are ignored."""
        self.filter = self.filter.with_changes(
            min_pages=parse_optional_int(min_pages),
            max_pages=parse_optional_int(max_pages),
            start_date_bound=start.strip() or None,
            end_date_bound=end.strip() or None,
        )
        self._apply_filters()

    def clear_filters(self) -> None:
        self.filter = LibraryFilter()
        self._apply_filters()

    # Actions

    async def start_reading(self, book_id: str) -> None:
        """Mark as in progress from today; any previous end date is cleared."""
        await reading.start_reading(self.repository, book_id, self._today())
        await self.reload()

    async def finish_reading(self, book_id: str, rating: int) -> None:
        """Mark as completed today, keeping the recorded start date, and rate it."""
        await reading.finish_reading(self.repository, book_id, rating, self._today())
        await self.reload()

    async def delete_book(self, book_id: str) -> None:
        await self.repository.delete_book_by_id(book_id)
        await self.reload()

    async def create_shelf(self, name: str, description: str | None, color_hex: int) -> Shelf:
        shelf = await self.repository.create_shelf(name, description, color_hex)
        await self.reload()
        return shelf

    async def delete_shelf(self, shelf_id: int) -> None:
        await self.repository.delete_shelf(shelf_id)
        await self.reload()


class ShelfDetailState(ObservableState):
    """Shelf detail screen: members and the books that can still be added."""

    def __init__(self, repository: BookRepository, shelf_id: int) -> None:
        super().__init__()
        self.repository = repository
        self.shelf_id = shelf_id
        self.shelf: Shelf | None = None
        self.books_in_shelf: list[Book] = []
        self.available_books: list[Book] = []

    async def reload(self) -> None:
        view = await ShelfMembershipView.load(self.repository)
        self.shelf = next((s for s in view.shelves if s.id == self.shelf_id), None)
        self.books_in_shelf = view.books_in_shelf(self.shelf_id)
        self.available_books = view.available_books_for_shelf(self.shelf_id)
        self._notify()

    async def add_book(self, book_id: str) -> None:
        if self.shelf is None:
            return
        await self.repository.add_book_to_shelf(book_id, self.shelf_id)
        await self.reload()

    async def remove_book(self, book_id: str) -> None:
        if self.shelf is None:
            return
        await self.repository.remove_book_from_shelf(book_id, self.shelf_id)
        await self.reload()


class StatsState(ObservableState):
    """Statistics screen."""

    def __init__(
        self,
        repository: BookRepository,
        yearly_goal: YearlyGoal | None = None,
        today: Today = date.today,
    ) -> None:
        super().__init__()
        self.repository = repository
        self.yearly_goal = yearly_goal or YearlyGoal()
        self._today = today
        self.stats = ReadingStats(yearly_goal=self.yearly_goal.value)

    async def reload(self) -> None:
        books = await self.repository.get_all_books()
        self.stats = compute_reading_stats(books, today=self._today(), yearly_goal=self.yearly_goal.value)
        self._notify()

    def update_yearly_goal(self, new_goal: int) -> None:
        """Change the goal; raises ValueError for non-positive values."""
        self.yearly_goal.value = new_goal
        self.stats = replace(self.stats, yearly_goal=new_goal)
        self._notify()


class SearchState(ObservableState):
    """Catalog search screen with save actions."""

    def __init__(self, repository: BookRepository) -> None:
        super().__init__()
        self.repository = repository
        self.query = ""
        self.results: list[CatalogBook] = []
        self.is_loading = False
        self.error_message: str | None = None
        self.selected: CatalogBook | None = None
        self._generation = 0

    def set_query(self, query: str) -> None:
        self.query = query
        self._notify()

    async def search(self) -> None:
        """Run the catalog search for the current query.

        Only the most recent search may publish results; a slower earlier
        response is dropped.
        """
        if not self.query.strip():
            return
        self._generation += 1
        generation = self._generation
        self.is_loading = True
        self.error_message = None
        self._notify()
        result = await self.repository.search_remote_books_result(self.query)
        if generation != self._generation:
            logger.debug("Dropping stale search response")
            return
        if result.failed:
            self.error_message = f"Search failed: {result.error}"
        else:
            self.results = result.items
        self.is_loading = False
        self._notify()

    def select(self, item: CatalogBook | None) -> None:
        self.selected = item
        self._notify()

    async def save_selected(self) -> Book | None:
        """Save the selected result into the library as a pending book."""
        if self.selected is None:
            return None
        return await self.repository.insert_book(catalog_book_to_book(self.selected))

    async def save_manual(
        self,
        title: str,
        author: str = "",
        pages: str = "",
        isbn: str = "",
        description: str = "",
    ) -> Book:
        """Save a hand-entered book; an existing book is never overwritten."""
        return await self.repository.insert_new_book(
            manual_book(title, author=author, pages=pages, isbn=isbn, description=description)
        )
