"""Book repository: the single gateway to the persistent store and the catalog.

Every method opens its own session and commits before returning, so each
call is one transaction. Sequences of calls (insert a book, then shelve it)
are not atomic as a whole.
"""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from goodbooks.errors import CatalogSearchError, InvalidDateRangeError, StorageError
from goodbooks.models.book import BOOK_FIELDS, Book, ReadingStatus
from goodbooks.models.catalog import CatalogBook
from goodbooks.models.shelf import Membership, Shelf, book_shelves
from goodbooks.utils.dates import parse_iso_date
from goodbooks.utils.logging import LogContext, get_logger

logger = get_logger(__name__)

CatalogSearch = Callable[[str], Awaitable[list[CatalogBook]]]


@dataclass
class CatalogSearchResult:
    """Outcome of a fail-soft catalog search; `error` is set when the catalog failed."""

    items: list[CatalogBook] = field(default_factory=list)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def secure_url(url: str | None) -> str | None:
    """Rewrite an ``http:`` URL to ``https:``."""
    if url and url.startswith("http:"):
        return "https:" + url[len("http:"):]
    return url


def check_date_range(start_date: str | None, end_date: str | None) -> None:
    """Raise InvalidDateRangeError when end_date precedes start_date.

    Values that do not parse as ISO dates are not checked.
    """
    if not start_date or not end_date:
        return
    try:
        start = parse_iso_date(start_date)
        end = parse_iso_date(end_date)
    except ValueError:
        return
    if end < start:
        raise InvalidDateRangeError(f"end date {end_date} is before start date {start_date}")


class BookRepository:
    """CRUD and membership operations over books and shelves."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        catalog_search: CatalogSearch | None = None,
    ) -> None:
        self._session_maker = session_maker
        self._catalog_search = catalog_search

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Session scope that commits on success and maps driver errors."""
        async with self._session_maker() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                LogContext(logger, operation=operation).error(f"Storage failure: {e}")
                raise StorageError(f"{operation} failed: {e}") from e

    # -------------------------------------------------------------------------
    # Books
    # -------------------------------------------------------------------------

    async def get_all_books(self) -> list[Book]:
        """Return every stored book in insertion order."""
        async with self._session("get_all_books") as session:
            result = await session.execute(select(Book).order_by(Book.created_at, Book.id))
            return list(result.scalars().all())

    async def get_book(self, book_id: str) -> Book | None:
        """Get a single book by id."""
        async with self._session("get_book") as session:
            return await session.get(Book, book_id)

    async def insert_book(self, book: Book) -> Book:
        """Insert a book, or overwrite every field of the existing one with the same id."""
        book.thumbnail_url = secure_url(book.thumbnail_url)
        async with self._session("insert_book") as session:
            existing = await session.get(Book, book.id)
            if existing is None:
                stored = Book(id=book.id, **{f: getattr(book, f) for f in BOOK_FIELDS})
                session.add(stored)
                LogContext(logger, book=book.id).debug("Inserted book")
            else:
                for name in BOOK_FIELDS:
                    setattr(existing, name, getattr(book, name))
                stored = existing
                LogContext(logger, book=book.id).debug("Overwrote existing book")
            await session.flush()
            return stored

    async def insert_new_book(self, book: Book) -> Book:
        """Insert a book without ever overwriting one.

        When the id is taken, a numeric suffix is appended (``manual_1700000000_2``).
        """
        book.thumbnail_url = secure_url(book.thumbnail_url)
        async with self._session("insert_new_book") as session:
            book_id = book.id
            suffix = 1
            while await session.get(Book, book_id) is not None:
                suffix += 1
                book_id = f"{book.id}_{suffix}"
            stored = Book(id=book_id, **{f: getattr(book, f) for f in BOOK_FIELDS})
            session.add(stored)
            await session.flush()
            LogContext(logger, book=book_id).debug("Inserted new book")
            return stored

    async def delete_book_by_id(self, book_id: str) -> None:
        """Delete a book and its shelf memberships. Missing ids are ignored."""
        async with self._session("delete_book_by_id") as session:
            # Explicit so engines without FK enforcement stay consistent
            await session.execute(delete(book_shelves).where(book_shelves.c.book_id == book_id))
            result = await session.execute(delete(Book).where(Book.id == book_id))
            if result.rowcount:
                LogContext(logger, book=book_id).info("Deleted book")

    async def update_book_status(
        self,
        book_id: str,
        status: ReadingStatus | str | None,
        start_date: str | None,
        end_date: str | None,
    ) -> None:
        """Set status, start date and end date. Rating and notes are untouched."""
        check_date_range(start_date, end_date)
        async with self._session("update_book_status") as session:
            await session.execute(
                update(Book)
                .where(Book.id == book_id)
                .values(
                    status=ReadingStatus(status) if status else None,
                    start_date=start_date,
                    end_date=end_date,
                )
            )

    async def update_book_rating(self, book_id: str, rating: int | None) -> None:
        """Set the rating only."""
        async with self._session("update_book_rating") as session:
            await session.execute(update(Book).where(Book.id == book_id).values(rating=rating))

    # -------------------------------------------------------------------------
    # Shelves
    # -------------------------------------------------------------------------

    async def get_all_shelves(self) -> list[Shelf]:
        """Return every shelf ordered by id."""
        async with self._session("get_all_shelves") as session:
            result = await session.execute(select(Shelf).order_by(Shelf.id))
            return list(result.scalars().all())

    async def get_shelf(self, shelf_id: int) -> Shelf | None:
        """Get a single shelf by id."""
        async with self._session("get_shelf") as session:
            return await session.get(Shelf, shelf_id)

    async def create_shelf(self, name: str, description: str | None, color_hex: int) -> Shelf:
        """Create a shelf and return it with its assigned id."""
        async with self._session("create_shelf") as session:
            shelf = Shelf(name=name, description=description, color_hex=color_hex)
            session.add(shelf)
            await session.flush()
            LogContext(logger, shelf=shelf.id).info(f"Created shelf '{name}'")
            return shelf

    async def delete_shelf(self, shelf_id: int) -> None:
        """Delete a shelf and its memberships. Member books are kept."""
        async with self._session("delete_shelf") as session:
            await session.execute(delete(book_shelves).where(book_shelves.c.shelf_id == shelf_id))
            result = await session.execute(delete(Shelf).where(Shelf.id == shelf_id))
            if result.rowcount:
                LogContext(logger, shelf=shelf_id).info("Deleted shelf")

    async def get_books_in_shelf(self, shelf_id: int) -> list[Book]:
        """Books that belong to the shelf."""
        async with self._session("get_books_in_shelf") as session:
            result = await session.execute(
                select(Book)
                .join(book_shelves, Book.id == book_shelves.c.book_id)
                .where(book_shelves.c.shelf_id == shelf_id)
                .order_by(Book.created_at, Book.id)
            )
            return list(result.scalars().all())

    async def count_books_in_shelf(self, shelf_id: int) -> int:
        """Number of books in the shelf, counted in SQL."""
        async with self._session("count_books_in_shelf") as session:
            result = await session.execute(
                select(func.count()).select_from(book_shelves).where(book_shelves.c.shelf_id == shelf_id)
            )
            return result.scalar() or 0

    async def add_book_to_shelf(self, book_id: str, shelf_id: int) -> None:
        """Add a membership. Existing memberships and unknown ids are ignored."""
        async with self._session("add_book_to_shelf") as session:
            book = await session.get(Book, book_id)
            shelf = await session.get(Shelf, shelf_id)
            if book is None or shelf is None:
                LogContext(logger, book=book_id, shelf=shelf_id).debug(
                    "Skipping membership for missing book or shelf"
                )
                return
            existing = await session.execute(
                select(book_shelves.c.book_id).where(
                    book_shelves.c.book_id == book_id,
                    book_shelves.c.shelf_id == shelf_id,
                )
            )
            if existing.first() is not None:
                return
            await session.execute(insert(book_shelves).values(book_id=book_id, shelf_id=shelf_id))

    async def remove_book_from_shelf(self, book_id: str, shelf_id: int) -> None:
        """Remove a membership if present."""
        async with self._session("remove_book_from_shelf") as session:
            await session.execute(
                delete(book_shelves).where(
                    book_shelves.c.book_id == book_id,
                    book_shelves.c.shelf_id == shelf_id,
                )
            )

    async def get_memberships(self) -> list[Membership]:
        """Every (book_id, shelf_id) pair."""
        async with self._session("get_memberships") as session:
            result = await session.execute(
                select(book_shelves.c.book_id, book_shelves.c.shelf_id).order_by(
                    book_shelves.c.shelf_id, book_shelves.c.book_id
                )
            )
            return [Membership(book_id=row.book_id, shelf_id=row.shelf_id) for row in result.all()]

    # -------------------------------------------------------------------------
    # Remote catalog
    # -------------------------------------------------------------------------

    async def search_remote_books(self, query: str) -> list[CatalogBook]:
        """Search the remote catalog. Failures are logged and yield an empty list."""
        result = await self.search_remote_books_result(query)
        return result.items

    async def search_remote_books_result(self, query: str) -> CatalogSearchResult:
        """Search the remote catalog, reporting a failure instead of raising it."""
        log = LogContext(logger, query=query)
        if self._catalog_search is None:
            log.warning("No catalog configured, returning empty search result")
            return CatalogSearchResult(error="no catalog configured")
        try:
            return CatalogSearchResult(items=await self._catalog_search(query))
        except CatalogSearchError as e:
            log.warning(f"Catalog search failed: {e}")
            return CatalogSearchResult(error=str(e))
        except Exception as e:
            log.exception(f"Unexpected catalog error: {e}")
            return CatalogSearchResult(error=str(e) or type(e).__name__)
