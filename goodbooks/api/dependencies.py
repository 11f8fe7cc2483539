"""FastAPI dependencies shared by the routers."""

from datetime import date
from functools import lru_cache

from goodbooks.config import get_settings
from goodbooks.db import BookRepository, async_session_maker
from goodbooks.services.catalog import google_books_catalog
from goodbooks.services.statistics import YearlyGoal


@lru_cache
def get_repository() -> BookRepository:
    """Process-wide repository bound to the configured database and catalog."""
    return BookRepository(async_session_maker, catalog_search=google_books_catalog.search)


@lru_cache
def get_yearly_goal() -> YearlyGoal:
    """Yearly goal held in memory for the lifetime of the process."""
    return YearlyGoal(get_settings().default_yearly_goal)


def get_today() -> date:
    """Current local date (overridable in tests)."""
    return date.today()
