"""Internal write endpoints, guarded by the shared API key."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.api.deps import get_db, get_upsert_service, require_api_key
from nudex_catalog.api.routers.responses import UPSERT_ERRORS
from nudex_catalog.api.schemas.catalog import UpsertResponse
from nudex_catalog.exceptions import ValidationError
from nudex_catalog.services.upsert_service import VideoUpsertService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_api_key)])


@router.post(
    "/internal/videos/upsert", response_model=UpsertResponse, responses=UPSERT_ERRORS
)
async def upsert_video(
    request: Request,
    session: AsyncSession = Depends(get_db),
    service: VideoUpsertService = Depends(get_upsert_service),
) -> UpsertResponse:
    """
    Create or fully replace a video.

    The body is validated by the upsert service rather than by FastAPI so
    that an invalid payload is reported as 400 instead of 422.

    Raises
    ------
    ValidationError
        If the body is not JSON or a field is invalid (400).
    AuthenticationError
        If ``X-API-Key`` is missing or wrong (401).
    RepositoryError
        If the store rejects the write (500).
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(
            message="Request body must be valid JSON",
            errors=[{"loc": ["body"], "msg": str(e), "type": "json_invalid"}],
        ) from e

    video = await service.upsert(session, payload)
    return UpsertResponse(video=video)
