"""
Data models module for nudex-catalog.

Defines Pydantic models for videos, producers and categories, used for
validation, relationship-resolved reads and JSON serialization.
"""

from __future__ import annotations

from .category import Category, CategoryBase, CategoryCreate
from .producer import Producer, ProducerBase, ProducerCreate
from .video import (
    CategoryVideos,
    ProducerVideos,
    Video,
    VideoPage,
    VideoRead,
    VideoSample,
    VideoUpsert,
)

__all__ = [
    "Category",
    "CategoryBase",
    "CategoryCreate",
    "CategoryVideos",
    "Producer",
    "ProducerBase",
    "ProducerCreate",
    "ProducerVideos",
    "Video",
    "VideoPage",
    "VideoRead",
    "VideoSample",
    "VideoUpsert",
]
