"""
Application settings and configuration management.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from nudex_catalog import __version__

DEFAULT_DATABASE_URL = "postgresql+asyncpg://localhost:5432/nudex_catalog"


def normalize_database_url(url: str) -> str:
    """Rewrite plain PostgreSQL URLs to use the asyncpg driver."""
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://") :]
    if url.startswith("postgresql://"):
        return "postgresql+asyncpg://" + url[len("postgresql://") :]
    return url


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = Field(default="nudex-catalog")
    app_version: str = Field(default=__version__)
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8081)

    # Database
    database_url: str = Field(default="")
    postgres_url: str = Field(default="")  # Legacy name, used when DATABASE_URL is unset
    db_pool_size: int = Field(default=10, ge=1)
    db_max_overflow: int = Field(default=10, ge=0)
    db_pool_timeout: float = Field(default=10.0, gt=0)  # Seconds to wait for a pooled connection
    db_command_timeout: float = Field(default=15.0, gt=0)  # Per-statement timeout (asyncpg)
    db_log_queries: bool = Field(default=False)
    create_tables_on_startup: bool = Field(default=False)
    seed_on_startup: bool = Field(default=False)

    # Cache side channel
    redis_url: str = Field(default="redis://localhost:6379")

    # Internal routes
    api_key: str = Field(default="default_api_key")

    # Queries
    default_page_size: int = Field(default=10, ge=0)
    max_page_size: int = Field(default=100, ge=1)

    # View accounting
    view_drain_timeout: float = Field(default=5.0, ge=0)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @property
    def effective_database_url(self) -> str:
        """Get the async database URL, falling back to POSTGRES_URL and the default."""
        url = self.database_url or self.postgres_url or DEFAULT_DATABASE_URL
        return normalize_database_url(url)

    @property
    def is_postgresql(self) -> bool:
        """Check if database is PostgreSQL."""
        return self.effective_database_url.startswith("postgresql")

    @property
    def is_sqlite(self) -> bool:
        """Check if database is SQLite."""
        return self.effective_database_url.startswith("sqlite")

    @property
    def cache_enabled(self) -> bool:
        """Whether a cache URL is configured."""
        return bool(self.redis_url.strip())

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()


# Global settings instance
settings = get_settings()
