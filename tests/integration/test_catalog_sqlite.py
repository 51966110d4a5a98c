"""
End-to-end catalog behaviour against a real SQLite database.

Each read after a write uses a fresh session so results come from the
database rather than a session's identity map.
"""

from __future__ import annotations

import asyncio
import uuid

import pytest

from nudex_catalog.container import Container
from nudex_catalog.exceptions import NotFoundError, RepositoryError, ValidationError
from nudex_catalog.services.seeding import SEED_VIDEO_COUNT

pytestmark = pytest.mark.integration


@pytest.fixture
async def seeded(sqlite_container: Container) -> Container:
    async with sqlite_container.db_manager.session_scope() as session:
        await sqlite_container.create_seeder().seed(session)
    return sqlite_container


async def _views(container: Container, video_id: str) -> int:
    async with container.db_manager.session_scope() as session:
        video = await container.create_video_repository().get(session, video_id)
        assert video is not None
        return video.views


async def _any_video_id(container: Container) -> str:
    async with container.db_manager.session_scope() as session:
        page = await container.create_query_service().list_videos(session, limit=1)
    return page.videos[0].id


class TestViewAccounting:
    """Views are counted in the background, exactly once per read."""

    async def test_read_returns_count_before_increment(self, seeded: Container) -> None:
        video_id = await _any_video_id(seeded)
        service = seeded.create_query_service()

        async with seeded.db_manager.session_scope() as session:
            first = await service.get_by_id(session, video_id)
        await seeded.view_counter.drain(timeout=10)
        async with seeded.db_manager.session_scope() as session:
            second = await service.get_by_id(session, video_id)
        await seeded.view_counter.drain(timeout=10)

        assert second.views == first.views + 1
        assert await _views(seeded, video_id) == first.views + 2

    async def test_concurrent_reads_are_all_counted(self, seeded: Container) -> None:
        video_id = await _any_video_id(seeded)
        before = await _views(seeded, video_id)

        async def read() -> None:
            async with seeded.db_manager.session_scope() as session:
                await seeded.create_query_service().get_by_id(session, video_id)

        await asyncio.gather(*(read() for _ in range(10)))
        assert await seeded.view_counter.drain(timeout=10) == 0

        assert await _views(seeded, video_id) == before + 10

    async def test_unknown_id_counts_nothing(self, seeded: Container) -> None:
        async with seeded.db_manager.session_scope() as session:
            with pytest.raises(NotFoundError):
                await seeded.create_query_service().get_by_id(session, "missing")

        assert seeded.view_counter.pending == 0


class TestDiscovery:
    """Search, browse and sampling over the seeded catalog."""

    async def test_blank_search_equals_listing(self, seeded: Container) -> None:
        service = seeded.create_query_service()
        async with seeded.db_manager.session_scope() as session:
            searched = await service.search(session, "   ", limit=5, offset=3)
            listed = await service.list_videos(session, limit=5, offset=3)

        assert [v.id for v in searched.videos] == [v.id for v in listed.videos]
        assert searched.query == ""

    async def test_search_is_case_insensitive(self, seeded: Container) -> None:
        async with seeded.db_manager.session_scope() as session:
            page = await seeded.create_query_service().search(session, "EPIC")

        titles = {v.title for v in page.videos}
        assert {"Epic Action Sequence", "Epic Adventure"} <= titles

    async def test_search_matches_description(self, seeded: Container) -> None:
        async with seeded.db_manager.session_scope() as session:
            page = await seeded.create_query_service().search(
                session, "mind-blowing"
            )

        assert [v.title for v in page.videos] == ["Epic Action Sequence"]

    async def test_search_treats_wildcards_literally(self, seeded: Container) -> None:
        async with seeded.db_manager.session_scope() as session:
            page = await seeded.create_query_service().search(session, "%")

        assert page.videos == []

    async def test_results_are_resolved(self, seeded: Container) -> None:
        async with seeded.db_manager.session_scope() as session:
            page = await seeded.create_query_service().search(
                session, "Comedy Gold"
            )

        video = page.videos[0]
        assert video.producer is not None
        assert video.producer.slug == "redcam-productions"
        assert video.category is not None
        assert video.category.slug == "comedy"

    async def test_browse_by_category(self, seeded: Container) -> None:
        async with seeded.db_manager.session_scope() as session:
            result = await seeded.create_query_service().by_category_slug(
                session, "action", limit=100
            )

        assert result.category == "action"
        assert len(result.videos) == 5
        assert all(v.category and v.category.slug == "action" for v in result.videos)

    async def test_browse_by_producer_respects_limit(self, seeded: Container) -> None:
        async with seeded.db_manager.session_scope() as session:
            result = await seeded.create_query_service().by_producer_slug(
                session, "nudex-studios", limit=3
            )

        assert len(result.videos) == 3

    async def test_unknown_slug_is_empty(self, seeded: Container) -> None:
        async with seeded.db_manager.session_scope() as session:
            result = await seeded.create_query_service().by_category_slug(
                session, "does-not-exist"
            )

        assert result.videos == []

    @pytest.mark.parametrize("limit,expected", [(5, 5), (100, SEED_VIDEO_COUNT), (0, 0)])
    async def test_random_sample_size(
        self, seeded: Container, limit: int, expected: int
    ) -> None:
        async with seeded.db_manager.session_scope() as session:
            sample = await seeded.create_query_service().random_sample(
                session, limit=limit
            )

        ids = [v.id for v in sample.videos]
        assert len(ids) == expected
        assert len(set(ids)) == expected

    async def test_oversized_offset_returns_empty_page(self, seeded: Container) -> None:
        async with seeded.db_manager.session_scope() as session:
            page = await seeded.create_query_service().search(
                session, "", limit="5", offset="9" * 30
            )

        assert page.videos == []
        assert page.limit == 5

    async def test_random_sample_beyond_page_size(self, seeded: Container) -> None:
        upserts = seeded.create_upsert_service()
        async with seeded.db_manager.session_scope() as session:
            for i in range(130):
                await upserts.upsert(
                    session, {"title": f"Extra {i}", "url": f"https://x/{i}.mp4"}
                )

        service = seeded.create_query_service()
        async with seeded.db_manager.session_scope() as session:
            sample = await service.random_sample(session, limit=150)
            everything = await service.random_sample(session, limit="9" * 30)

        assert len({v.id for v in sample.videos}) == 150
        assert len(everything.videos) == SEED_VIDEO_COUNT + 130

    async def test_directories_ordered_by_name(self, seeded: Container) -> None:
        service = seeded.create_query_service()
        async with seeded.db_manager.session_scope() as session:
            producers = await service.list_producers(session)
            categories = await service.list_categories(session)

        assert [p.name for p in producers] == ["NUDEX Studios", "RedCam Productions"]
        assert [c.name for c in categories] == [
            "Action",
            "Comedy",
            "Documentary",
            "Drama",
        ]


class TestUpsert:
    """The create-or-replace write path."""

    async def test_create_without_id(self, seeded: Container) -> None:
        async with seeded.db_manager.session_scope() as session:
            video = await seeded.create_upsert_service().upsert(
                session, {"title": "Fresh Upload", "url": "https://x/fresh.mp4"}
            )

        assert uuid.UUID(video.id).version == 4
        async with seeded.db_manager.session_scope() as session:
            assert await seeded.create_video_repository().count(session) == (
                SEED_VIDEO_COUNT + 1
            )

    async def test_replace_clears_missing_fields(self, seeded: Container) -> None:
        service = seeded.create_upsert_service()
        async with seeded.db_manager.session_scope() as session:
            await service.upsert(
                session,
                {"id": "v-replace", "title": "Old", "url": "u", "description": "gone soon"},
            )
        async with seeded.db_manager.session_scope() as session:
            await service.upsert(session, {"id": "v-replace", "title": "New", "url": "u"})

        async with seeded.db_manager.session_scope() as session:
            stored = await seeded.create_video_repository().get(session, "v-replace")

        assert stored is not None
        assert stored.title == "New"
        assert stored.description is None

    async def test_empty_title_writes_nothing(self, seeded: Container) -> None:
        with pytest.raises(ValidationError):
            async with seeded.db_manager.session_scope() as session:
                await seeded.create_upsert_service().upsert(
                    session, {"title": "", "url": "u"}
                )

        async with seeded.db_manager.session_scope() as session:
            assert await seeded.create_video_repository().count(session) == (
                SEED_VIDEO_COUNT
            )

    async def test_unknown_producer_is_rejected(self, seeded: Container) -> None:
        with pytest.raises(RepositoryError):
            async with seeded.db_manager.session_scope() as session:
                await seeded.create_upsert_service().upsert(
                    session, {"id": "v-orphan", "title": "t", "url": "u", "producer_id": "ghost"}
                )

        async with seeded.db_manager.session_scope() as session:
            assert await seeded.create_video_repository().get(session, "v-orphan") is None


async def test_seed_is_idempotent(seeded: Container) -> None:
    async with seeded.db_manager.session_scope() as session:
        result = await seeded.create_seeder().seed(session)

    assert result.skipped is True
    async with seeded.db_manager.session_scope() as session:
        assert await seeded.create_video_repository().count(session) == SEED_VIDEO_COUNT
