"""Producer directory endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.api.deps import get_db, get_query_service
from nudex_catalog.api.routers.responses import LIST_ERRORS
from nudex_catalog.api.schemas.catalog import ProducerListResponse
from nudex_catalog.services.catalog_query_service import CatalogQueryService

router = APIRouter()


@router.get("/producers", response_model=ProducerListResponse, responses=LIST_ERRORS)
async def list_producers(
    session: AsyncSession = Depends(get_db),
    service: CatalogQueryService = Depends(get_query_service),
) -> ProducerListResponse:
    """List every producer ordered by name."""
    producers = await service.list_producers(session)
    return ProducerListResponse(producers=producers)
