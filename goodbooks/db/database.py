"""Database engine construction and session management."""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from goodbooks.config import get_settings

settings = get_settings()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless this pragma is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_for(url: str, **kwargs) -> AsyncEngine:
    """Create an async engine for the given URL.

    The single storage entry point: the platform supplies the connection URL,
    everything else is engine-agnostic.
    """
    engine = create_async_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory used by the repository."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = create_engine_for(
    settings.database_url_async,
    echo=False,
    pool_pre_ping=True,
)

async_session_maker = create_session_maker(engine)


async def init_db(target: AsyncEngine | None = None) -> None:
    """Initialize database (create tables if needed)."""
    from goodbooks.models import Base

    async with (target or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

