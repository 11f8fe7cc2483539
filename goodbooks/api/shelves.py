"""Shelf API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response

from goodbooks.api.dependencies import get_repository
from goodbooks.db import BookRepository
from goodbooks.models.schemas import BookRead, ShelfCountRead, ShelfCreate, ShelfRead
from goodbooks.services.shelves import ShelfMembershipView

router = APIRouter()

Repository = Annotated[BookRepository, Depends(get_repository)]


async def _require_shelf(repository: BookRepository, shelf_id: int) -> None:
    if await repository.get_shelf(shelf_id) is None:
        raise HTTPException(status_code=404, detail="Shelf not found")


@router.get("", response_model=list[ShelfCountRead])
async def list_shelves(repository: Repository) -> list[ShelfCountRead]:
    """All shelves with their member counts."""
    view = await ShelfMembershipView.load(repository)
    return [
        ShelfCountRead(shelf=ShelfRead.model_validate(item.shelf), count=item.count)
        for item in view.shelf_counts()
    ]


@router.post("", response_model=ShelfRead, status_code=201)
async def create_shelf(data: ShelfCreate, repository: Repository) -> ShelfRead:
    """Create a shelf."""
    shelf = await repository.create_shelf(data.name, data.description, data.color_hex)
    return ShelfRead.model_validate(shelf)


@router.delete("/{shelf_id}", status_code=204)
async def delete_shelf(shelf_id: int, repository: Repository) -> Response:
    """Delete a shelf. Its books stay in the library."""
    await repository.delete_shelf(shelf_id)
    return Response(status_code=204)


@router.get("/{shelf_id}/books", response_model=list[BookRead])
async def list_shelf_books(shelf_id: int, repository: Repository) -> list[BookRead]:
    """Books in a shelf."""
    await _require_shelf(repository, shelf_id)
    books = await repository.get_books_in_shelf(shelf_id)
    return [BookRead.model_validate(book) for book in books]


@router.get("/{shelf_id}/available", response_model=list[BookRead])
async def list_available_books(shelf_id: int, repository: Repository) -> list[BookRead]:
    """Books that are not in the shelf yet."""
    await _require_shelf(repository, shelf_id)
    view = await ShelfMembershipView.load(repository)
    return [BookRead.model_validate(book) for book in view.available_books_for_shelf(shelf_id)]


@router.put("/{shelf_id}/books/{book_id}", status_code=204)
async def add_book(shelf_id: int, book_id: str, repository: Repository) -> Response:
    """Put a book on a shelf (idempotent)."""
    await repository.add_book_to_shelf(book_id, shelf_id)
    return Response(status_code=204)


@router.delete("/{shelf_id}/books/{book_id}", status_code=204)
async def remove_book(shelf_id: int, book_id: str, repository: Repository) -> Response:
    """Take a book off a shelf."""
    await repository.remove_book_from_shelf(book_id, shelf_id)
    return Response(status_code=204)
