"""Health check endpoint - no authentication required."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from nudex_catalog import __version__
from nudex_catalog.api.deps import get_container
from nudex_catalog.container import Container

CONNECTED = "connected"
DISCONNECTED = "disconnected"


class HealthStatus(BaseModel):
    """Application health status."""

    status: str  # "healthy", "unhealthy"
    timestamp: datetime
    version: str
    database: str  # "connected", "disconnected"
    redis: str  # "connected", "disconnected"


router = APIRouter()


@router.get("/health", response_model=HealthStatus)
async def health_check(
    container: Container = Depends(get_container),
) -> HealthStatus:
    """
    Report liveness of the store and the cache.

    The cache is optional: an unreachable cache is reported but does not
    make the service unhealthy.
    """
    database_ok = await container.db_manager.ping()
    redis_ok = await container.cache_manager.ping()

    return HealthStatus(
        status="healthy" if database_ok else "unhealthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        database=CONNECTED if database_ok else DISCONNECTED,
        redis=CONNECTED if redis_ok else DISCONNECTED,
    )
