"""
Fixtures for API tests.

The app is built around a real Container, but the session and the
services are replaced through ``dependency_overrides`` so no database is
touched.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from nudex_catalog.api.deps import get_db, get_query_service, get_upsert_service
from nudex_catalog.api.main import create_app
from nudex_catalog.config.settings import Settings
from nudex_catalog.container import Container
from nudex_catalog.services.catalog_query_service import CatalogQueryService
from nudex_catalog.services.upsert_service import VideoUpsertService


@pytest.fixture
def container(mock_settings: Settings) -> Container:
    return Container(mock_settings)


@pytest.fixture
def query_service() -> MagicMock:
    service = MagicMock(spec=CatalogQueryService)
    for name in (
        "get_by_id",
        "search",
        "list_videos",
        "by_category_slug",
        "by_producer_slug",
        "random_sample",
        "list_producers",
        "list_categories",
    ):
        setattr(service, name, AsyncMock())
    return service


@pytest.fixture
def upsert_service() -> MagicMock:
    service = MagicMock(spec=VideoUpsertService)
    service.upsert = AsyncMock()
    return service


@pytest.fixture
def app(
    container: Container,
    mock_session: MagicMock,
    query_service: MagicMock,
    upsert_service: MagicMock,
) -> FastAPI:
    app = create_app(container=container)

    async def override_get_db() -> AsyncGenerator[MagicMock, None]:
        yield mock_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_query_service] = lambda: query_service
    app.dependency_overrides[get_upsert_service] = lambda: upsert_service
    return app


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the app without starting its lifespan."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client
