"""
Video upsert handler.

The catalog's only write path: validates an incoming payload and
replaces the stored video with it, creating the video when it does not
exist yet.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Mapping, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.exceptions import ValidationError
from nudex_catalog.models.video import VideoRead, VideoUpsert
from nudex_catalog.repositories.video_repository import VideoRepository
from nudex_catalog.services.relationship_resolver import RelationshipResolver

logger = logging.getLogger(__name__)

UpsertPayload = Union[VideoUpsert, Mapping[str, Any]]


def _field_errors(exc: PydanticValidationError) -> List[Dict[str, Any]]:
    return [
        {
            "loc": ["body", *[str(part) for part in error["loc"]]],
            "msg": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


def parse_upsert_payload(payload: UpsertPayload) -> VideoUpsert:
    """
    Validate a raw upsert payload.

    Raises
    ------
    ValidationError
        If the payload is not an object or any field is invalid; the first
        offending field is reported as ``field_name``.
    """
    if isinstance(payload, VideoUpsert):
        return payload
    if not isinstance(payload, Mapping):
        raise ValidationError(
            message="Request body must be a JSON object",
            invalid_value=payload,
            errors=[
                {"loc": ["body"], "msg": "Input should be an object", "type": "dict_type"}
            ],
        )

    try:
        return VideoUpsert.model_validate(dict(payload))
    except PydanticValidationError as e:
        first = e.errors()[0]
        field_name = str(first["loc"][0]) if first["loc"] else None
        raise ValidationError(
            message=(
                f"Invalid {field_name}: {first['msg']}" if field_name else first["msg"]
            ),
            field_name=field_name,
            invalid_value=payload.get(field_name) if field_name else None,
            errors=_field_errors(e),
        ) from e


class VideoUpsertService:
    """
    Create-or-replace writes for videos.

    A replace overwrites every field of the stored video: fields missing
    from the payload are cleared to their defaults, not merged with the
    previous record.
    """

    def __init__(
        self,
        video_repository: VideoRepository,
        resolver: RelationshipResolver,
    ) -> None:
        self.video_repository = video_repository
        self.resolver = resolver

    async def upsert(self, session: AsyncSession, payload: UpsertPayload) -> VideoRead:
        """
        Validate and persist a video.

        Parameters
        ----------
        session : AsyncSession
            Database session; the caller owns commit/rollback
        payload : UpsertPayload
            Raw mapping or an already-validated VideoUpsert. A missing id
            is replaced by a new UUID4.

        Returns
        -------
        VideoRead
            The persisted video with producer and category resolved

        Raises
        ------
        ValidationError
            If the payload is invalid; nothing is written
        RepositoryError
            If the store rejects the write, e.g. an unknown producer or
            category reference
        """
        video_in = parse_upsert_payload(payload)
        values = video_in.model_dump()
        if not values.get("id"):
            values["id"] = str(uuid.uuid4())

        stored = await self.video_repository.replace(session, values)
        logger.info("Upserted video %s", stored.id)
        return await self.resolver.resolve_one(session, stored)
