"""
Base repository interface and implementation.

Provides the store contract shared by every catalog table: lookup by id,
filtered/ordered/paginated finds, create, full-record replace and atomic
counter increments.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterable, Sequence
from contextlib import asynccontextmanager
from typing import Any, Dict, Generic, List, Optional, TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import DeclarativeBase

from nudex_catalog.exceptions import RepositoryError

# Type variables for generic repository
ModelType = TypeVar("ModelType", bound=DeclarativeBase)
CreateSchemaType = TypeVar("CreateSchemaType")

# Columns managed by the store itself; never written by replace()
STORE_MANAGED_COLUMNS = frozenset({"created_at", "updated_at"})


class BaseRepository(ABC, Generic[ModelType, CreateSchemaType]):
    """
    Base repository interface defining the catalog store contract.

    This abstract base class provides a consistent interface for all repositories
    following the Repository pattern.
    """

    @abstractmethod
    async def get(self, session: AsyncSession, id: Any) -> Optional[ModelType]:
        """Get entity by ID."""
        pass

    @abstractmethod
    async def find(
        self,
        session: AsyncSession,
        *conditions: Any,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order_by: Sequence[Any] = (),
    ) -> List[ModelType]:
        """Find entities matching conditions, ordered and paginated."""
        pass

    @abstractmethod
    async def create(
        self, session: AsyncSession, *, obj_in: CreateSchemaType
    ) -> ModelType:
        """Create a new entity."""
        pass

    @abstractmethod
    async def replace(
        self, session: AsyncSession, values: Dict[str, Any]
    ) -> ModelType:
        """Create or fully overwrite an entity keyed by primary key."""
        pass

    @abstractmethod
    async def increment_field(
        self, session: AsyncSession, id: Any, field: str, delta: int = 1
    ) -> bool:
        """Atomically add delta to a numeric column."""
        pass


class BaseSQLAlchemyRepository(BaseRepository[ModelType, CreateSchemaType]):
    """
    Base SQLAlchemy repository implementation.

    All catalog tables use a string ``id`` primary key, so lookups are
    implemented once here. Every SQLAlchemy failure is re-raised as
    RepositoryError.
    """

    def __init__(self, model: type[ModelType]):
        self.model = model

    @property
    def entity_type(self) -> str:
        """Entity name used in error reporting."""
        return self.model.__name__

    @asynccontextmanager
    async def _store_errors(self, operation: str) -> AsyncIterator[None]:
        """Translate SQLAlchemy failures into RepositoryError."""
        try:
            yield
        except SQLAlchemyError as e:
            raise RepositoryError(
                message=f"Failed to {operation} {self.entity_type}",
                operation=operation,
                entity_type=self.entity_type,
                original_error=e,
            ) from e

    async def get(self, session: AsyncSession, id: Any) -> Optional[ModelType]:
        """Get entity by primary key."""
        async with self._store_errors("get"):
            result = await session.execute(
                select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
            )
            return result.scalar_one_or_none()

    async def get_many(
        self, session: AsyncSession, ids: Iterable[Any]
    ) -> List[ModelType]:
        """Get every entity whose primary key is in ids, in one query."""
        unique_ids = sorted(set(ids))
        if not unique_ids:
            return []
        async with self._store_errors("get_many"):
            result = await session.execute(
                select(self.model).where(self.model.id.in_(unique_ids))  # type: ignore[attr-defined]
            )
            return list(result.scalars().all())

    async def find(
        self,
        session: AsyncSession,
        *conditions: Any,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order_by: Sequence[Any] = (),
    ) -> List[ModelType]:
        """Find entities matching all conditions."""
        query = select(self.model)
        if conditions:
            query = query.where(*conditions)
        if order_by:
            query = query.order_by(*order_by)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        async with self._store_errors("find"):
            result = await session.execute(query)
            return list(result.scalars().all())

    async def get_all(self, session: AsyncSession) -> List[ModelType]:
        """Get every entity ordered by primary key."""
        return await self.find(session, order_by=(self.model.id,))  # type: ignore[attr-defined]

    async def create(
        self, session: AsyncSession, *, obj_in: CreateSchemaType
    ) -> ModelType:
        """Create a new entity in the database."""
        if hasattr(obj_in, "model_dump"):
            # Pydantic model
            obj_data = obj_in.model_dump()
        else:
            # Dictionary or other object
            obj_data = obj_in if isinstance(obj_in, dict) else obj_in.__dict__

        async with self._store_errors("create"):
            db_obj = self.model(**obj_data)
            session.add(db_obj)
            await session.flush()
            await session.refresh(db_obj)
            return db_obj

    def _replaceable_values(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Expand values to every writable column.

        Columns missing from values fall back to their scalar default, or
        NULL, so that a replace never merges with the previous record.
        """
        full: Dict[str, Any] = {}
        for column in self.model.__table__.columns:  # type: ignore[attr-defined]
            if column.key in STORE_MANAGED_COLUMNS:
                continue
            if column.key in values:
                full[column.key] = values[column.key]
            elif column.default is not None and column.default.is_scalar:
                full[column.key] = column.default.arg
            else:
                full[column.key] = None
        return full

    async def replace(
        self, session: AsyncSession, values: Dict[str, Any]
    ) -> ModelType:
        """Create the entity if absent, otherwise overwrite every column."""
        async with self._store_errors("replace"):
            merged = await session.merge(self.model(**self._replaceable_values(values)))
            await session.flush()
            await session.refresh(merged)
            return merged

    async def increment_field(
        self, session: AsyncSession, id: Any, field: str, delta: int = 1
    ) -> bool:
        """
        Add delta to a numeric column with a single UPDATE statement.

        The new value is computed by the database (``field = field + delta``)
        so concurrent increments never overwrite each other.

        Returns
        -------
        bool
            True if a row with that id was updated.
        """
        column = getattr(self.model, field)
        stmt = (
            update(self.model)
            .where(self.model.id == id)  # type: ignore[attr-defined]
            .values({field: column + delta})
            .execution_options(synchronize_session=False)
        )
        async with self._store_errors("increment"):
            result = await session.execute(stmt)
            return bool(result.rowcount)

    async def count(self, session: AsyncSession) -> int:
        """Count total number of entities."""
        async with self._store_errors("count"):
            result = await session.execute(select(func.count()).select_from(self.model))
            return result.scalar() or 0
