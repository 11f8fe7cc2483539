"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from goodbooks.api.dependencies import get_repository, get_today, get_yearly_goal
from goodbooks.db.database import create_engine_for, create_session_maker
from goodbooks.db.repository import BookRepository
from goodbooks.main import app
from goodbooks.models import Base
from goodbooks.services.statistics import YearlyGoal
from tests.factories import TODAY, FakeCatalog, make_catalog_book

# Test database URL (uses in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory engine shared by every session of one test."""
    engine = create_engine_for(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_maker(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_maker(test_engine)


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    return FakeCatalog(results=[make_catalog_book()])


@pytest.fixture
def repository(
    session_maker: async_sessionmaker[AsyncSession], fake_catalog: FakeCatalog
) -> BookRepository:
    """Repository over the test database and the fake catalog."""
    return BookRepository(session_maker, catalog_search=fake_catalog.search)


@pytest.fixture
def yearly_goal() -> YearlyGoal:
    return YearlyGoal(12)


@pytest_asyncio.fixture
async def client(
    repository: BookRepository, yearly_goal: YearlyGoal
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client bound to the test repository."""
    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_yearly_goal] = lambda: yearly_goal
    app.dependency_overrides[get_today] = lambda: TODAY

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
