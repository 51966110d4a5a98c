"""
Service layer for nudex-catalog.

Provides the catalog's business logic on top of the repositories:
queries, relationship resolution, view accounting, upserts and seeding.
"""

from .catalog_query_service import CatalogQueryService
from .relationship_resolver import RelationshipResolver
from .seeding import CatalogSeeder, SeedResult
from .upsert_service import VideoUpsertService
from .view_accounting import ViewCounter

__all__ = [
    "CatalogQueryService",
    "CatalogSeeder",
    "RelationshipResolver",
    "SeedResult",
    "VideoUpsertService",
    "ViewCounter",
]
