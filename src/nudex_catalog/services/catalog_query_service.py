"""
Catalog query engine.

Every read operation the catalog exposes: lookup by id (with view
accounting), substring search, unfiltered listing, browse by category or
producer slug, random sampling and the producer/category directories.
All video results are relationship-resolved before they are returned.
"""

from __future__ import annotations

import logging
import random
import uuid
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.exceptions import NotFoundError
from nudex_catalog.models.category import Category
from nudex_catalog.models.producer import Producer
from nudex_catalog.models.video import (
    CategoryVideos,
    ProducerVideos,
    VideoPage,
    VideoRead,
    VideoSample,
)
from nudex_catalog.repositories.category_repository import CategoryRepository
from nudex_catalog.repositories.producer_repository import ProducerRepository
from nudex_catalog.repositories.video_repository import VideoRepository
from nudex_catalog.services.pagination import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    normalize_limit,
    normalize_pagination,
)
from nudex_catalog.services.relationship_resolver import RelationshipResolver
from nudex_catalog.services.view_accounting import ViewCounter

logger = logging.getLogger(__name__)


class CatalogQueryService:
    """
    Read-side service for the video catalog.

    Limits and offsets may be passed raw (strings, None, negatives); they
    are normalized rather than rejected.

    Parameters
    ----------
    video_repository : VideoRepository
        Repository for video rows
    producer_repository : ProducerRepository
        Repository for producer rows
    category_repository : CategoryRepository
        Repository for category rows
    resolver : RelationshipResolver
        Attaches producers and categories to videos
    view_counter : Optional[ViewCounter]
        Receives one increment per successful ``get_by_id``; None disables
        view accounting
    default_limit : int
        Page size used when a limit is absent or malformed
    max_limit : int
        Largest page size served
    rng : Optional[random.Random]
        Source of randomness for sampling
    """

    def __init__(
        self,
        video_repository: VideoRepository,
        producer_repository: ProducerRepository,
        category_repository: CategoryRepository,
        resolver: RelationshipResolver,
        view_counter: Optional[ViewCounter] = None,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.video_repository = video_repository
        self.producer_repository = producer_repository
        self.category_repository = category_repository
        self.resolver = resolver
        self.view_counter = view_counter
        self.default_limit = default_limit
        self.max_limit = max_limit
        self._rng = rng or random.Random()

    def _pagination(self, limit: Any, offset: Any = None) -> tuple[int, int]:
        return normalize_pagination(
            limit, offset, default_limit=self.default_limit, max_limit=self.max_limit
        )

    def _limit(self, limit: Any) -> int:
        return normalize_limit(limit, default=self.default_limit, max_limit=self.max_limit)

    async def get_by_id(self, session: AsyncSession, video_id: str) -> VideoRead:
        """
        Get one video by exact id and count the view.

        The returned record reflects the state before this view was
        counted; the increment is applied in the background.

        Raises
        ------
        NotFoundError
            If no video has this id
        """
        video = await self.video_repository.get(session, video_id)
        if video is None:
            raise NotFoundError(resource_type="Video", identifier=video_id)

        resolved = await self.resolver.resolve_one(session, video)
        if self.view_counter is not None:
            self.view_counter.record_view(video.id)
        return resolved

    async def search(
        self,
        session: AsyncSession,
        text: Optional[str],
        limit: Any = None,
        offset: Any = None,
    ) -> VideoPage:
        """
        Case-insensitive substring search over title or description.

        Blank text returns the same page as :meth:`list_videos`.
        """
        query = (text or "").strip()
        page_limit, page_offset = self._pagination(limit, offset)
        rows = await self.video_repository.search(
            session, query, limit=page_limit, offset=page_offset
        )
        videos = await self.resolver.resolve(session, rows)
        logger.debug("Search %r returned %d videos", query, len(videos))
        return VideoPage(
            videos=videos, query=query, limit=page_limit, offset=page_offset
        )

    async def list_videos(
        self, session: AsyncSession, limit: Any = None, offset: Any = None
    ) -> VideoPage:
        """Get one page of the unfiltered catalog, newest first."""
        page_limit, page_offset = self._pagination(limit, offset)
        rows = await self.video_repository.list_page(
            session, limit=page_limit, offset=page_offset
        )
        videos = await self.resolver.resolve(session, rows)
        return VideoPage(videos=videos, limit=page_limit, offset=page_offset)

    async def by_category_slug(
        self, session: AsyncSession, slug: str, limit: Any = None
    ) -> CategoryVideos:
        """Get videos in the category with this exact slug; unknown slugs yield none."""
        rows = await self.video_repository.find_by_category_slug(
            session, slug, limit=self._limit(limit)
        )
        videos = await self.resolver.resolve(session, rows)
        return CategoryVideos(videos=videos, category=slug)

    async def by_producer_slug(
        self, session: AsyncSession, slug: str, limit: Any = None
    ) -> ProducerVideos:
        """Get videos by the producer with this exact slug; unknown slugs yield none."""
        rows = await self.video_repository.find_by_producer_slug(
            session, slug, limit=self._limit(limit)
        )
        videos = await self.resolver.resolve(session, rows)
        return ProducerVideos(videos=videos, producer=slug)

    async def random_sample(
        self, session: AsyncSession, limit: Any = None
    ) -> VideoSample:
        """
        Get up to ``limit`` randomly chosen videos.

        Draws a random UUID pivot and reads forward from it on the
        primary-key index, wrapping around to the start, then shuffles the
        result. Uniform when ids are generated UUIDs; caller-chosen ids
        skew the distribution. Each sample is one contiguous run of the id
        order (wrapping once), so videos far apart in id order never appear
        together in a small sample.

        The page-size cap does not apply: the result size is
        min(limit, catalog size) and carries no ordering guarantee.
        """
        sample_limit = normalize_limit(limit, default=self.default_limit, max_limit=None)
        if sample_limit == 0:
            return VideoSample(videos=[])

        pivot = str(uuid.UUID(int=self._rng.getrandbits(128), version=4))
        rows = await self.video_repository.sample_from_pivot(
            session, pivot, limit=sample_limit
        )
        self._rng.shuffle(rows)
        videos = await self.resolver.resolve(session, rows)
        return VideoSample(videos=videos)

    async def list_producers(self, session: AsyncSession) -> List[Producer]:
        """Get every producer ordered by name."""
        rows = await self.producer_repository.get_all(session)
        return [Producer.model_validate(row) for row in rows]

    async def list_categories(self, session: AsyncSession) -> List[Category]:
        """Get every category ordered by name."""
        rows = await self.category_repository.get_all(session)
        return [Category.model_validate(row) for row in rows]
