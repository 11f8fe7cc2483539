"""Library book API endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from goodbooks.api.dependencies import get_repository, get_today
from goodbooks.db import BookRepository
from goodbooks.models.book import ReadingStatus
from goodbooks.models.catalog import CatalogBook
from goodbooks.models.schemas import (
    BookRead,
    FinishReading,
    LibraryBookRead,
    ManualBookCreate,
    RatingUpdate,
    ShelfRead,
    StatusUpdate,
)
from goodbooks.services.catalog import catalog_book_to_book, manual_book
from goodbooks.services.library import LibraryFilter, filter_books
from goodbooks.services.reading import finish_reading, start_reading
from goodbooks.services.shelves import ShelfMembershipView

router = APIRouter()

Repository = Annotated[BookRepository, Depends(get_repository)]


@router.get("", response_model=list[LibraryBookRead])
async def list_books(
    repository: Repository,
    status: Annotated[ReadingStatus | None, Query()] = None,
    q: Annotated[str | None, Query(max_length=200)] = None,
    min_pages: Annotated[int | None, Query(ge=0)] = None,
    max_pages: Annotated[int | None, Query(ge=0)] = None,
    start_date: Annotated[str | None, Query()] = None,
    end_date: Annotated[str | None, Query()] = None,
) -> list[LibraryBookRead]:
    """List the library, filtered, each book tagged with its shelves."""
    view = await ShelfMembershipView.load(repository)
    criteria = LibraryFilter(
        status=status,
        search_text=q,
        min_pages=min_pages,
        max_pages=max_pages,
        start_date_bound=start_date,
        end_date_bound=end_date,
    )
    shelves_by_book = view.books_to_shelves()

    return [
        LibraryBookRead(
            **BookRead.model_validate(book).model_dump(),
            shelves=[ShelfRead.model_validate(s) for s in shelves_by_book.get(book.id, [])],
        )
        for book in filter_books(view.books, criteria)
    ]


@router.get("/{book_id}", response_model=BookRead)
async def get_book(book_id: str, repository: Repository) -> BookRead:
    """Get a single book."""
    book = await repository.get_book(book_id)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return BookRead.model_validate(book)


@router.post("", response_model=BookRead, status_code=201)
async def create_manual_book(data: ManualBookCreate, repository: Repository) -> BookRead:
    """Register a book by hand."""
    book = manual_book(
        data.title,
        author=data.author,
        pages=data.pages,
        isbn=data.isbn,
        description=data.description,
    )
    stored = await repository.insert_new_book(book)
    return BookRead.model_validate(stored)


@router.post("/from-catalog", response_model=BookRead, status_code=201)
async def save_catalog_book(item: CatalogBook, repository: Repository) -> BookRead:
    """Save a catalog search result as a pending book."""
    stored = await repository.insert_book(catalog_book_to_book(item))
    return BookRead.model_validate(stored)


@router.delete("/{book_id}", status_code=204)
async def delete_book(book_id: str, repository: Repository) -> Response:
    """Delete a book and its shelf memberships."""
    await repository.delete_book_by_id(book_id)
    return Response(status_code=204)


@router.post("/{book_id}/start", response_model=BookRead)
async def start_book(
    book_id: str,
    repository: Repository,
    today: Annotated[date, Depends(get_today)],
) -> BookRead:
    """Start reading today."""
    book = await start_reading(repository, book_id, today)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return BookRead.model_validate(book)


@router.post("/{book_id}/finish", response_model=BookRead)
async def finish_book(
    book_id: str,
    data: FinishReading,
    repository: Repository,
    today: Annotated[date, Depends(get_today)],
) -> BookRead:
    """Finish reading today and rate the book."""
    book = await finish_reading(repository, book_id, data.rating, today)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return BookRead.model_validate(book)


@router.patch("/{book_id}/status", status_code=204)
async def update_status(book_id: str, data: StatusUpdate, repository: Repository) -> Response:
    """Set status and reading dates."""
    await repository.update_book_status(book_id, data.status, data.start_date, data.end_date)
    return Response(status_code=204)


@router.patch("/{book_id}/rating", status_code=204)
async def update_rating(book_id: str, data: RatingUpdate, repository: Repository) -> Response:
    """Set the rating."""
    await repository.update_book_rating(book_id, data.rating)
    return Response(status_code=204)
