"""
Tests for RelationshipResolver.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.models.video import VideoRead
from nudex_catalog.repositories.category_repository import CategoryRepository
from nudex_catalog.repositories.producer_repository import ProducerRepository
from nudex_catalog.services.relationship_resolver import RelationshipResolver
from tests.factories.category_factory import make_category_row
from tests.factories.producer_factory import make_producer_row
from tests.factories.video_factory import make_video_row

pytestmark = pytest.mark.asyncio


@pytest.fixture
def producer_repository() -> MagicMock:
    repo = MagicMock(spec=ProducerRepository)
    repo.get_many = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def category_repository() -> MagicMock:
    repo = MagicMock(spec=CategoryRepository)
    repo.get_many = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def resolver(
    producer_repository: MagicMock, category_repository: MagicMock
) -> RelationshipResolver:
    return RelationshipResolver(producer_repository, category_repository)


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=AsyncSession)


class TestResolve:
    """Tests for batched resolution."""

    async def test_empty_input_issues_no_lookups(
        self,
        resolver: RelationshipResolver,
        session: MagicMock,
        producer_repository: MagicMock,
        category_repository: MagicMock,
    ) -> None:
        assert await resolver.resolve(session, []) == []
        producer_repository.get_many.assert_not_awaited()
        category_repository.get_many.assert_not_awaited()

    async def test_one_lookup_per_table_regardless_of_video_count(
        self,
        resolver: RelationshipResolver,
        session: MagicMock,
        producer_repository: MagicMock,
        category_repository: MagicMock,
    ) -> None:
        producer = make_producer_row(id="p1", slug="studio-a")
        category = make_category_row(id="c1", slug="action")
        producer_repository.get_many.return_value = [producer]
        category_repository.get_many.return_value = [category]
        videos = [
            make_video_row(id=f"v{i}", producer_id="p1", category_id="c1")
            for i in range(25)
        ]

        resolved = await resolver.resolve(session, videos)

        assert len(resolved) == 25
        producer_repository.get_many.assert_awaited_once_with(session, {"p1"})
        category_repository.get_many.assert_awaited_once_with(session, {"c1"})
        assert all(v.producer is not None and v.producer.slug == "studio-a" for v in resolved)
        assert all(v.category is not None and v.category.slug == "action" for v in resolved)

    async def test_preserves_input_order(
        self, resolver: RelationshipResolver, session: MagicMock
    ) -> None:
        videos = [make_video_row(id=i) for i in ("z", "a", "m")]

        resolved = await resolver.resolve(session, videos)

        assert [v.id for v in resolved] == ["z", "a", "m"]
        assert all(isinstance(v, VideoRead) for v in resolved)

    async def test_absent_references_skip_lookups(
        self,
        resolver: RelationshipResolver,
        session: MagicMock,
        producer_repository: MagicMock,
        category_repository: MagicMock,
    ) -> None:
        video = make_video_row(id="v1", producer_id=None, category_id=None)

        resolved = await resolver.resolve(session, [video])

        assert resolved[0].producer is None
        assert resolved[0].category is None
        producer_repository.get_many.assert_not_awaited()
        category_repository.get_many.assert_not_awaited()

    async def test_dangling_reference_resolves_to_none(
        self,
        resolver: RelationshipResolver,
        session: MagicMock,
        category_repository: MagicMock,
    ) -> None:
        category_repository.get_many.return_value = [make_category_row(id="c1")]
        video = make_video_row(id="v1", producer_id="gone", category_id="c1")

        resolved = await resolver.resolve(session, [video])

        assert resolved[0].producer is None
        assert resolved[0].producer_id == "gone"
        assert resolved[0].category is not None

    async def test_resolve_one(
        self,
        resolver: RelationshipResolver,
        session: MagicMock,
        producer_repository: MagicMock,
    ) -> None:
        producer_repository.get_many.return_value = [make_producer_row(id="p1")]

        resolved = await resolver.resolve_one(session, make_video_row(id="v1", producer_id="p1"))

        assert resolved.id == "v1"
        assert resolved.producer is not None and resolved.producer.id == "p1"
