"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from goodbooks.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_sqlite_url_uses_aiosqlite(self):
        settings = Settings(database_url="sqlite:///./library.db")
        assert settings.database_url_async == "sqlite+aiosqlite:///./library.db"

    def test_postgres_url_uses_asyncpg(self):
        settings = Settings(database_url="postgresql://u:p@db/goodbooks")
        assert settings.database_url_async == "postgresql+asyncpg://u:p@db/goodbooks"

    def test_explicit_driver_is_kept(self):
        settings = Settings(database_url="sqlite+aiosqlite:///:memory:")
        assert settings.database_url_async == "sqlite+aiosqlite:///:memory:"

    def test_yearly_goal_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(default_yearly_goal=0)

    def test_environment_flags(self):
        assert Settings(app_env="production").is_production
        assert Settings(app_env="development").is_development
