"""
Category repository implementation.

Provides data access for browseable categories, including lookup by slug.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.db.models import Category as CategoryDB
from nudex_catalog.models.category import CategoryCreate
from nudex_catalog.repositories.base import BaseSQLAlchemyRepository


class CategoryRepository(BaseSQLAlchemyRepository[CategoryDB, CategoryCreate]):
    """Repository for category operations."""

    def __init__(self) -> None:
        super().__init__(CategoryDB)

    async def get_by_slug(
        self, session: AsyncSession, slug: str
    ) -> Optional[CategoryDB]:
        """
        Get category by slug.

        Parameters
        ----------
        session : AsyncSession
            The database session.
        slug : str
            The category slug (exact match).

        Returns
        -------
        Optional[CategoryDB]
            The category if found, None otherwise.
        """
        categories = await self.find(session, CategoryDB.slug == slug, limit=1)
        return categories[0] if categories else None

    async def get_all(self, session: AsyncSession) -> List[CategoryDB]:
        """Get all categories ordered by name."""
        return await self.find(session, order_by=(CategoryDB.name, CategoryDB.id))
