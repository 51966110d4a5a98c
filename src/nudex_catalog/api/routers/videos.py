"""Video discovery endpoints.

Static paths (``/videos/search``, ``/videos/category/...``,
``/videos/producer/...``) are registered before ``/videos/{video_id}`` so
they are never captured as ids. Pagination parameters are taken as raw
strings and normalized by the query service.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.api.deps import get_db, get_query_service
from nudex_catalog.api.routers.responses import GET_ITEM_ERRORS, LIST_ERRORS
from nudex_catalog.models.video import (
    CategoryVideos,
    ProducerVideos,
    VideoPage,
    VideoRead,
    VideoSample,
)
from nudex_catalog.services.catalog_query_service import CatalogQueryService

router = APIRouter()

LIMIT_DESCRIPTION = "Maximum number of videos (default 10, capped at 100)"


@router.get("/videos/search", response_model=VideoPage, responses=LIST_ERRORS)
async def search_videos(
    q: str = Query(default="", description="Substring matched against title or description"),
    limit: Optional[str] = Query(default=None, description=LIMIT_DESCRIPTION),
    offset: Optional[str] = Query(default=None, description="Number of videos to skip"),
    session: AsyncSession = Depends(get_db),
    service: CatalogQueryService = Depends(get_query_service),
) -> VideoPage:
    """Case-insensitive substring search; an empty query lists the catalog."""
    return await service.search(session, q, limit=limit, offset=offset)


@router.get(
    "/videos/category/{slug}", response_model=CategoryVideos, responses=LIST_ERRORS
)
async def videos_by_category(
    slug: str = Path(..., description="Category slug (exact match)"),
    limit: Optional[str] = Query(default=None, description=LIMIT_DESCRIPTION),
    session: AsyncSession = Depends(get_db),
    service: CatalogQueryService = Depends(get_query_service),
) -> CategoryVideos:
    """Videos in a category; an unknown slug returns an empty list."""
    return await service.by_category_slug(session, slug, limit=limit)


@router.get(
    "/videos/producer/{slug}", response_model=ProducerVideos, responses=LIST_ERRORS
)
async def videos_by_producer(
    slug: str = Path(..., description="Producer slug (exact match)"),
    limit: Optional[str] = Query(default=None, description=LIMIT_DESCRIPTION),
    session: AsyncSession = Depends(get_db),
    service: CatalogQueryService = Depends(get_query_service),
) -> ProducerVideos:
    """Videos by a producer; an unknown slug returns an empty list."""
    return await service.by_producer_slug(session, slug, limit=limit)


@router.get("/videos/{video_id}", response_model=VideoRead, responses=GET_ITEM_ERRORS)
async def get_video(
    video_id: str = Path(..., description="Video ID"),
    session: AsyncSession = Depends(get_db),
    service: CatalogQueryService = Depends(get_query_service),
) -> VideoRead:
    """
    Get one video with its producer and category.

    Counts a view in the background; the response shows the count from
    before this request.

    Raises
    ------
    NotFoundError
        If the video doesn't exist (404).
    """
    return await service.get_by_id(session, video_id)


@router.get("/videos", response_model=VideoSample, responses=LIST_ERRORS)
async def random_videos(
    limit: Optional[str] = Query(
        default=None, description="Maximum number of videos (default 10, not capped)"
    ),
    session: AsyncSession = Depends(get_db),
    service: CatalogQueryService = Depends(get_query_service),
) -> VideoSample:
    """A random selection of videos in no particular order."""
    return await service.random_sample(session, limit=limit)
