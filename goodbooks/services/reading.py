"""Reading workflow transitions (start / finish)."""

from datetime import date

from goodbooks.db.repository import BookRepository
from goodbooks.models.book import Book, ReadingStatus
from goodbooks.utils.logging import LogContext, get_logger

logger = get_logger(__name__)


async def start_reading(repository: BookRepository, book_id: str, today: date) -> Book | None:
    """IN_PROGRESS from today; a previous end date is cleared. Returns the updated book."""
    await repository.update_book_status(
        book_id, ReadingStatus.IN_PROGRESS, start_date=today.isoformat(), end_date=None
    )
    LogContext(logger, book=book_id).info("Started reading")
    return await repository.get_book(book_id)


async def finish_reading(
    repository: BookRepository, book_id: str, rating: int, today: date
) -> Book | None:
    """COMPLETED today with the given rating, keeping the recorded start date.

    Returns None when the book does not exist.
    """
    book = await repository.get_book(book_id)
    if book is None:
        return None
    await repository.update_book_status(
        book_id, ReadingStatus.COMPLETED, start_date=book.start_date, end_date=today.isoformat()
    )
    await repository.update_book_rating(book_id, rating)
    LogContext(logger, book=book_id).info(f"Finished reading, rated {rating}")
    return await repository.get_book(book_id)
