"""Remote catalog search endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from goodbooks.api.dependencies import get_repository
from goodbooks.constants import SEARCH_MAX_LENGTH, SEARCH_MIN_LENGTH
from goodbooks.db import BookRepository
from goodbooks.models.catalog import CatalogBook

router = APIRouter()


@router.get("", response_model=list[CatalogBook])
async def search_catalog(
    q: Annotated[str, Query(min_length=SEARCH_MIN_LENGTH, max_length=SEARCH_MAX_LENGTH)],
    repository: Annotated[BookRepository, Depends(get_repository)],
) -> list[CatalogBook]:
    """Search the remote catalog. Catalog failures give an empty list."""
    if not q.strip():
        return []
    return await repository.search_remote_books(q.strip())
