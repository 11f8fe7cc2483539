"""Main API router."""

from fastapi import APIRouter

from goodbooks.api.books import router as books_router
from goodbooks.api.search import router as search_router
from goodbooks.api.shelves import router as shelves_router
from goodbooks.api.stats import router as stats_router

api_router = APIRouter(prefix="/api")

api_router.include_router(books_router, prefix="/books", tags=["books"])
api_router.include_router(search_router, prefix="/search", tags=["search"])
api_router.include_router(shelves_router, prefix="/shelves", tags=["shelves"])
api_router.include_router(stats_router, prefix="/stats", tags=["stats"])
