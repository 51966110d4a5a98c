"""
Producer repository implementation.

Provides data access for content producers, including lookup by slug.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.db.models import Producer as ProducerDB
from nudex_catalog.models.producer import ProducerCreate
from nudex_catalog.repositories.base import BaseSQLAlchemyRepository


class ProducerRepository(BaseSQLAlchemyRepository[ProducerDB, ProducerCreate]):
    """Repository for producer operations."""

    def __init__(self) -> None:
        super().__init__(ProducerDB)

    async def get_by_slug(
        self, session: AsyncSession, slug: str
    ) -> Optional[ProducerDB]:
        """
        Get producer by slug.

        Parameters
        ----------
        session : AsyncSession
            The database session.
        slug : str
            The producer slug (exact match).

        Returns
        -------
        Optional[ProducerDB]
            The producer if found, None otherwise.
        """
        producers = await self.find(session, ProducerDB.slug == slug, limit=1)
        return producers[0] if producers else None

    async def get_all(self, session: AsyncSession) -> List[ProducerDB]:
        """Get all producers ordered by name."""
        return await self.find(session, order_by=(ProducerDB.name, ProducerDB.id))
