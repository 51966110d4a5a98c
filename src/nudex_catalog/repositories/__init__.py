"""
Repository layer for data access patterns.

This module provides repository interfaces and implementations following
the Repository pattern for clean separation of domain logic and data persistence.
"""

from .base import BaseRepository, BaseSQLAlchemyRepository
from .category_repository import CategoryRepository
from .producer_repository import ProducerRepository
from .video_repository import VideoRepository

__all__ = [
    "BaseRepository",
    "BaseSQLAlchemyRepository",
    "CategoryRepository",
    "ProducerRepository",
    "VideoRepository",
]
