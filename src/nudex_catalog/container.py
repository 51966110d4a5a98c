"""
Dependency Injection Container for nudex-catalog.

One Container is created per process. It owns the long-lived handles
(database engine and connection pool, cache client, view counter) and
wires repositories and services on demand.

Usage
-----
    >>> container = Container(settings)
    >>> await container.startup()
    >>> service = container.create_query_service()
    >>> await container.shutdown()

Design Principles
-----------------
- Repository and service factories return new instances each call (transient)
- Handles owning external resources are created once and closed at shutdown
- The API stores the container on ``app.state`` so tests can swap it
"""

from __future__ import annotations

import logging
from typing import Optional

from nudex_catalog.config.cache import CacheManager
from nudex_catalog.config.database import DatabaseManager
from nudex_catalog.config.settings import Settings, get_settings
from nudex_catalog.repositories import (
    CategoryRepository,
    ProducerRepository,
    VideoRepository,
)
from nudex_catalog.services.catalog_query_service import CatalogQueryService
from nudex_catalog.services.relationship_resolver import RelationshipResolver
from nudex_catalog.services.seeding import CatalogSeeder
from nudex_catalog.services.upsert_service import VideoUpsertService
from nudex_catalog.services.view_accounting import ViewCounter

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency injection container for nudex-catalog.

    Parameters
    ----------
    settings : Optional[Settings]
        Application settings; loaded from the environment when omitted
    db_manager : Optional[DatabaseManager]
        Database handle; built from settings when omitted
    cache_manager : Optional[CacheManager]
        Cache handle; built from settings when omitted
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        db_manager: Optional[DatabaseManager] = None,
        cache_manager: Optional[CacheManager] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.db_manager = db_manager or DatabaseManager(self.settings)
        self.cache_manager = cache_manager or CacheManager(self.settings.redis_url)
        self._view_counter: Optional[ViewCounter] = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def startup(self) -> None:
        """Open process-wide handles and run optional bootstrap steps."""
        self.db_manager.get_engine()
        self.cache_manager.get_client()

        if self.settings.create_tables_on_startup:
            logger.info("Creating catalog tables")
            await self.db_manager.create_tables()

        if self.settings.seed_on_startup:
            async with self.db_manager.session_scope() as session:
                await self.create_seeder().seed(session)

        logger.info(
            "Catalog container started (sqlite=%s, cache=%s)",
            self.settings.is_sqlite,
            self.cache_manager.enabled,
        )

    async def shutdown(self) -> None:
        """Drain pending view increments, then close every handle."""
        if self._view_counter is not None:
            await self._view_counter.drain(timeout=self.settings.view_drain_timeout)
            # Bound to the session factory of the engine closed below
            self._view_counter = None
        await self.cache_manager.close()
        await self.db_manager.close()
        logger.info("Catalog container stopped")

    # -------------------------------------------------------------------------
    # Repository Factory Methods (Transient - new instance per call)
    # -------------------------------------------------------------------------

    def create_video_repository(self) -> VideoRepository:
        """Create a new VideoRepository instance."""
        return VideoRepository()

    def create_producer_repository(self) -> ProducerRepository:
        """Create a new ProducerRepository instance."""
        return ProducerRepository()

    def create_category_repository(self) -> CategoryRepository:
        """Create a new CategoryRepository instance."""
        return CategoryRepository()

    # -------------------------------------------------------------------------
    # Service Factory Methods
    # -------------------------------------------------------------------------

    @property
    def view_counter(self) -> ViewCounter:
        """The process-wide view counter (created on first use)."""
        if self._view_counter is None:
            self._view_counter = ViewCounter(
                session_factory=self.db_manager.get_session_factory(),
                video_repository=self.create_video_repository(),
            )
        return self._view_counter

    def create_relationship_resolver(self) -> RelationshipResolver:
        """Create a RelationshipResolver wired to fresh repositories."""
        return RelationshipResolver(
            producer_repository=self.create_producer_repository(),
            category_repository=self.create_category_repository(),
        )

    def create_query_service(self) -> CatalogQueryService:
        """
        Create a CatalogQueryService with wired dependencies.

        The service shares the container's view counter so every pending
        increment is drained at shutdown.

        Returns
        -------
        CatalogQueryService
            A new query service instance.
        """
        return CatalogQueryService(
            video_repository=self.create_video_repository(),
            producer_repository=self.create_producer_repository(),
            category_repository=self.create_category_repository(),
            resolver=self.create_relationship_resolver(),
            view_counter=self.view_counter,
            default_limit=self.settings.default_page_size,
            max_limit=self.settings.max_page_size,
        )

    def create_upsert_service(self) -> VideoUpsertService:
        """Create a VideoUpsertService with wired dependencies."""
        return VideoUpsertService(
            video_repository=self.create_video_repository(),
            resolver=self.create_relationship_resolver(),
        )

    def create_seeder(self) -> CatalogSeeder:
        """Create a CatalogSeeder with wired dependencies."""
        return CatalogSeeder(
            video_repository=self.create_video_repository(),
            producer_repository=self.create_producer_repository(),
            category_repository=self.create_category_repository(),
        )
