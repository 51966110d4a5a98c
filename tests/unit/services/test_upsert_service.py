"""
Tests for VideoUpsertService.
"""

from __future__ import annotations

import uuid
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.db.models import Video as VideoDB
from nudex_catalog.exceptions import RepositoryError, ValidationError
from nudex_catalog.models.video import VideoRead, VideoUpsert
from nudex_catalog.repositories.video_repository import VideoRepository
from nudex_catalog.services.relationship_resolver import RelationshipResolver
from nudex_catalog.services.upsert_service import VideoUpsertService, parse_upsert_payload



def _stored(values: dict[str, Any]) -> VideoDB:
    return VideoDB(**values)


@pytest.fixture
def video_repository() -> MagicMock:
    repo = MagicMock(spec=VideoRepository)
    repo.replace = AsyncMock(side_effect=lambda _session, values: _stored(values))
    return repo


@pytest.fixture
def resolver() -> MagicMock:
    resolver = MagicMock(spec=RelationshipResolver)
    resolver.resolve_one = AsyncMock(
        side_effect=lambda _session, row: VideoRead.model_validate(row)
    )
    return resolver


@pytest.fixture
def service(video_repository: MagicMock, resolver: MagicMock) -> VideoUpsertService:
    return VideoUpsertService(video_repository=video_repository, resolver=resolver)


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=AsyncSession)


class TestParseUpsertPayload:
    """Payload validation happens before any store access."""

    @pytest.mark.parametrize("title", ["", "   "])
    def test_blank_title_rejected(self, title: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_upsert_payload({"title": title, "url": "https://x/v.mp4"})

        assert exc_info.value.field_name == "title"
        assert exc_info.value.invalid_value == title
        assert exc_info.value.errors[0]["loc"] == ["body", "title"]

    def test_missing_url_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_upsert_payload({"title": "A video"})

        assert exc_info.value.field_name == "url"

    def test_negative_counter_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_upsert_payload({"title": "t", "url": "u", "views": -1})

        assert exc_info.value.field_name == "views"

    def test_non_object_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_upsert_payload(["not", "an", "object"])  # type: ignore[arg-type]

    def test_blank_ids_treated_as_absent(self) -> None:
        payload = parse_upsert_payload(
            {"id": " ", "title": "t", "url": "u", "producer_id": "", "category_id": ""}
        )

        assert payload.id is None
        assert payload.producer_id is None
        assert payload.category_id is None

    def test_unknown_fields_ignored(self) -> None:
        payload = parse_upsert_payload({"title": "t", "url": "u", "rating": 5})
        assert not hasattr(payload, "rating")

    def test_validated_model_passed_through(self) -> None:
        payload = VideoUpsert(title="t", url="u")
        assert parse_upsert_payload(payload) is payload


class TestUpsert:
    """Tests for upsert."""

    async def test_generates_uuid_when_id_missing(
        self, service: VideoUpsertService, session: MagicMock, video_repository: MagicMock
    ) -> None:
        result = await service.upsert(session, {"title": "New", "url": "https://x/n.mp4"})

        assert uuid.UUID(result.id).version == 4
        (_, values), _ = video_repository.replace.call_args
        assert values["id"] == result.id

    async def test_generated_ids_are_unique(
        self, service: VideoUpsertService, session: MagicMock
    ) -> None:
        ids = {
            (await service.upsert(session, {"title": "t", "url": "u"})).id
            for _ in range(20)
        }
        assert len(ids) == 20

    async def test_replace_receives_every_field(
        self, service: VideoUpsertService, session: MagicMock, video_repository: MagicMock
    ) -> None:
        await service.upsert(session, {"id": "v1", "title": "Only title", "url": "u"})

        (_, values), _ = video_repository.replace.call_args
        assert values == {
            "id": "v1",
            "title": "Only title",
            "description": None,
            "url": "u",
            "thumbnail": None,
            "duration": 0,
            "views": 0,
            "producer_id": None,
            "category_id": None,
        }

    async def test_invalid_payload_never_touches_store(
        self, service: VideoUpsertService, session: MagicMock, video_repository: MagicMock
    ) -> None:
        with pytest.raises(ValidationError):
            await service.upsert(session, {"id": "v1", "title": "", "url": "u"})

        video_repository.replace.assert_not_awaited()

    async def test_store_failure_propagates(
        self, service: VideoUpsertService, session: MagicMock, video_repository: MagicMock
    ) -> None:
        video_repository.replace = AsyncMock(
            side_effect=RepositoryError(operation="replace", entity_type="Video")
        )

        with pytest.raises(RepositoryError):
            await service.upsert(
                session, {"title": "t", "url": "u", "producer_id": "missing"}
            )

    async def test_result_is_resolved(
        self, service: VideoUpsertService, session: MagicMock, resolver: MagicMock
    ) -> None:
        result = await service.upsert(session, {"id": "v1", "title": "t", "url": "u"})

        assert result.id == "v1"
        resolver.resolve_one.assert_awaited_once()
