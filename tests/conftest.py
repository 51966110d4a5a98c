"""
Pytest configuration and fixtures for nudex-catalog tests.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.config.database import DatabaseManager
from nudex_catalog.config.settings import Settings
from nudex_catalog.container import Container

TEST_API_KEY = "test_api_key"


@pytest.fixture
def mock_settings() -> Settings:
    """Settings pointing at an in-memory SQLite database with no cache."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        redis_url="",
        api_key=TEST_API_KEY,
    )


@pytest.fixture
def mock_session() -> MagicMock:
    """Create mock async session."""
    return MagicMock(spec=AsyncSession)


@pytest.fixture
def sqlite_settings(tmp_path: Path) -> Settings:
    """Settings for a throwaway SQLite database file."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        redis_url="",
        api_key=TEST_API_KEY,
        view_drain_timeout=10.0,
    )


@pytest.fixture
async def sqlite_container(
    sqlite_settings: Settings,
) -> AsyncGenerator[Container, None]:
    """
    Provide a container backed by a fresh SQLite database.

    Tables are created up front; pending view increments are drained and
    the engine disposed afterwards.
    """
    container = Container(sqlite_settings, db_manager=DatabaseManager(sqlite_settings))
    await container.db_manager.create_tables()
    try:
        yield container
    finally:
        await container.shutdown()
