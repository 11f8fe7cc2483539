"""Database module."""

from goodbooks.db.database import (
    async_session_maker,
    create_engine_for,
    create_session_maker,
    engine,
    init_db,
)
from goodbooks.db.repository import BookRepository, CatalogSearch, CatalogSearchResult

__all__ = [
    "async_session_maker",
    "create_engine_for",
    "create_session_maker",
    "engine",
    "init_db",
    "BookRepository",
    "CatalogSearch",
    "CatalogSearchResult",
]
