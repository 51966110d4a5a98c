"""Category directory endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.api.deps import get_db, get_query_service
from nudex_catalog.api.routers.responses import LIST_ERRORS
from nudex_catalog.api.schemas.catalog import CategoryListResponse
from nudex_catalog.services.catalog_query_service import CatalogQueryService

router = APIRouter()


@router.get(
    "/categories", response_model=CategoryListResponse, responses=LIST_ERRORS
)
async def list_categories(
    session: AsyncSession = Depends(get_db),
    service: CatalogQueryService = Depends(get_query_service),
) -> CategoryListResponse:
    """List every category ordered by name."""
    categories = await service.list_categories(session)
    return CategoryListResponse(categories=categories)
