"""
Relationship resolution for video reads.

Attaches each video's producer and category from the store in batches:
one ``IN`` query per related table per call, however many videos are
being resolved.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set

from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.db.models import Category as CategoryDB
from nudex_catalog.db.models import Producer as ProducerDB
from nudex_catalog.db.models import Video as VideoDB
from nudex_catalog.models.category import Category
from nudex_catalog.models.producer import Producer
from nudex_catalog.models.video import VideoRead
from nudex_catalog.repositories.category_repository import CategoryRepository
from nudex_catalog.repositories.producer_repository import ProducerRepository

logger = logging.getLogger(__name__)


def _referenced_ids(values: Iterable[Optional[str]]) -> Set[str]:
    return {value for value in values if value}


class RelationshipResolver:
    """
    Resolves video foreign keys into embedded producer/category records.

    A reference that is absent or points at a missing row resolves to
    None; dangling references are not errors.
    """

    def __init__(
        self,
        producer_repository: ProducerRepository,
        category_repository: CategoryRepository,
    ) -> None:
        self.producer_repository = producer_repository
        self.category_repository = category_repository

    async def _load_producers(
        self, session: AsyncSession, ids: Set[str]
    ) -> Dict[str, Producer]:
        if not ids:
            return {}
        rows: List[ProducerDB] = await self.producer_repository.get_many(session, ids)
        return {row.id: Producer.model_validate(row) for row in rows}

    async def _load_categories(
        self, session: AsyncSession, ids: Set[str]
    ) -> Dict[str, Category]:
        if not ids:
            return {}
        rows: List[CategoryDB] = await self.category_repository.get_many(session, ids)
        return {row.id: Category.model_validate(row) for row in rows}

    async def resolve(
        self, session: AsyncSession, videos: Sequence[VideoDB]
    ) -> List[VideoRead]:
        """
        Attach producer and category to every video.

        Parameters
        ----------
        session : AsyncSession
            Database session
        videos : Sequence[VideoDB]
            Stored videos, in the order they should be returned

        Returns
        -------
        List[VideoRead]
            Resolved videos in input order
        """
        if not videos:
            return []

        producers = await self._load_producers(
            session, _referenced_ids(v.producer_id for v in videos)
        )
        categories = await self._load_categories(
            session, _referenced_ids(v.category_id for v in videos)
        )

        resolved: List[VideoRead] = []
        for video in videos:
            read = VideoRead.model_validate(video)
            if video.producer_id:
                read.producer = producers.get(video.producer_id)
                if read.producer is None:
                    logger.debug(
                        "Video %s references missing producer %s",
                        video.id,
                        video.producer_id,
                    )
            if video.category_id:
                read.category = categories.get(video.category_id)
                if read.category is None:
                    logger.debug(
                        "Video %s references missing category %s",
                        video.id,
                        video.category_id,
                    )
            resolved.append(read)
        return resolved

    async def resolve_one(self, session: AsyncSession, video: VideoDB) -> VideoRead:
        """Resolve a single video."""
        resolved = await self.resolve(session, [video])
        return resolved[0]
