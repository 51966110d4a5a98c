"""FastAPI dependencies for API endpoints."""

from __future__ import annotations

import secrets
from collections.abc import AsyncGenerator
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.container import Container
from nudex_catalog.exceptions import AuthenticationError
from nudex_catalog.services.catalog_query_service import CatalogQueryService
from nudex_catalog.services.upsert_service import VideoUpsertService


def get_container(request: Request) -> Container:
    """Return the process-wide container created by the app lifespan."""
    return request.app.state.container  # type: ignore[no-any-return]


async def get_db(
    container: Container = Depends(get_container),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for database session.

    Yields an async SQLAlchemy session that auto-commits on success
    and rolls back on exception.

    Yields
    ------
    AsyncSession
        An async SQLAlchemy session for database operations.
    """
    async with container.db_manager.session_scope() as session:
        yield session


def get_query_service(
    container: Container = Depends(get_container),
) -> CatalogQueryService:
    """Dependency for the catalog query service."""
    return container.create_query_service()


def get_upsert_service(
    container: Container = Depends(get_container),
) -> VideoUpsertService:
    """Dependency for the video upsert service."""
    return container.create_upsert_service()


async def require_api_key(
    x_api_key: Optional[str] = Header(default=None),
    container: Container = Depends(get_container),
) -> None:
    """
    Dependency to require the shared internal API key.

    Raises
    ------
    AuthenticationError
        If the ``X-API-Key`` header is missing or does not match.
    """
    expected = container.settings.api_key
    if not x_api_key or not secrets.compare_digest(
        x_api_key.encode("utf-8"), expected.encode("utf-8")
    ):
        raise AuthenticationError("Invalid API key")
