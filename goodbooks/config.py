"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"
    app_name: str = "GoodBooks"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Database
    database_url: str = "sqlite:///./goodbooks.db"

    # Remote catalog (Google Books)
    catalog_api_url: str = "https://www.googleapis.com/books/v1"
    catalog_max_results: int = 20
    catalog_timeout: float = 15.0
    catalog_max_retries: int = 2

    # Statistics
    default_yearly_goal: int = 12

    @field_validator("default_yearly_goal", "catalog_max_results")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Reject zero or negative counts."""
        if v <= 0:
            raise ValueError("value must be a positive integer")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def database_url_async(self) -> str:
        """Get async database URL (aiosqlite for SQLite, asyncpg for Postgres)."""
        url = str(self.database_url)
        if url.startswith("sqlite://"):
            return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
