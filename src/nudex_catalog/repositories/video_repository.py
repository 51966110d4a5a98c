"""
Video repository for catalog discovery queries.

Handles paginated listing, substring search, browse-by-slug joins and
index-probing random samples over the videos table.
"""

from __future__ import annotations

from typing import Any, List

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.db.models import Category as CategoryDB
from nudex_catalog.db.models import Producer as ProducerDB
from nudex_catalog.db.models import Video as VideoDB
from nudex_catalog.models.video import VideoUpsert
from nudex_catalog.repositories.base import BaseSQLAlchemyRepository

LIKE_ESCAPE = "\\"

# Deterministic ordering shared by every paged listing
LISTING_ORDER = (VideoDB.created_at.desc(), VideoDB.id.asc())


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the text matches literally."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class VideoRepository(BaseSQLAlchemyRepository[VideoDB, VideoUpsert]):
    """Repository for video discovery and write operations."""

    def __init__(self) -> None:
        """Initialize repository with Video model."""
        super().__init__(VideoDB)

    async def _all(self, session: AsyncSession, query: Select[Any]) -> List[VideoDB]:
        async with self._store_errors("find"):
            result = await session.execute(query)
            return list(result.scalars().all())

    async def list_page(
        self, session: AsyncSession, *, limit: int, offset: int = 0
    ) -> List[VideoDB]:
        """
        Get one page of the unfiltered catalog.

        Parameters
        ----------
        session : AsyncSession
            Database session
        limit : int
            Maximum number of results to return
        offset : int
            Number of results to skip

        Returns
        -------
        List[VideoDB]
            Videos ordered newest first, ties broken by id
        """
        return await self.find(
            session, limit=limit, offset=offset, order_by=LISTING_ORDER
        )

    async def search(
        self, session: AsyncSession, text: str, *, limit: int, offset: int = 0
    ) -> List[VideoDB]:
        """
        Case-insensitive substring search over title or description.

        Parameters
        ----------
        session : AsyncSession
            Database session
        text : str
            Substring to look for; blank text returns the unfiltered page
        limit : int
            Maximum number of results to return
        offset : int
            Number of results to skip

        Returns
        -------
        List[VideoDB]
            Matching videos in listing order
        """
        text = text.strip()
        if not text:
            return await self.list_page(session, limit=limit, offset=offset)

        pattern = f"%{escape_like(text)}%"
        return await self.find(
            session,
            or_(
                VideoDB.title.ilike(pattern, escape=LIKE_ESCAPE),
                VideoDB.description.ilike(pattern, escape=LIKE_ESCAPE),
            ),
            limit=limit,
            offset=offset,
            order_by=LISTING_ORDER,
        )

    async def find_by_category_slug(
        self, session: AsyncSession, slug: str, *, limit: int
    ) -> List[VideoDB]:
        """Get videos whose category has exactly this slug."""
        query = (
            select(VideoDB)
            .join(CategoryDB, CategoryDB.id == VideoDB.category_id)
            .where(CategoryDB.slug == slug)
            .order_by(*LISTING_ORDER)
            .limit(limit)
        )
        return await self._all(session, query)

    async def find_by_producer_slug(
        self, session: AsyncSession, slug: str, *, limit: int
    ) -> List[VideoDB]:
        """Get videos whose producer has exactly this slug."""
        query = (
            select(VideoDB)
            .join(ProducerDB, ProducerDB.id == VideoDB.producer_id)
            .where(ProducerDB.slug == slug)
            .order_by(*LISTING_ORDER)
            .limit(limit)
        )
        return await self._all(session, query)

    async def sample_from_pivot(
        self, session: AsyncSession, pivot: str, *, limit: int
    ) -> List[VideoDB]:
        """
        Read up to ``limit`` videos starting at a key pivot, wrapping around.

        Two bounded range scans on the primary-key index: ids at or after
        the pivot, then ids before it if the first scan came up short. The
        result size is min(limit, number of videos).

        Parameters
        ----------
        session : AsyncSession
            Database session
        pivot : str
            Primary-key value to start scanning from
        limit : int
            Maximum number of results to return

        Returns
        -------
        List[VideoDB]
            Videos in primary-key order starting at the pivot
        """
        if limit <= 0:
            return []

        videos = await self.find(
            session, VideoDB.id >= pivot, limit=limit, order_by=(VideoDB.id,)
        )
        if len(videos) < limit:
            videos += await self.find(
                session,
                VideoDB.id < pivot,
                limit=limit - len(videos),
                order_by=(VideoDB.id,),
            )
        return videos
