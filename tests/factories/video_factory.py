"""
Factory definitions for video models.

Provides factory-boy factories for upsert payloads and helpers that turn
them into database rows or read models.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

import factory
from factory import LazyFunction, Sequence

from nudex_catalog.db.models import Video as VideoDB
from nudex_catalog.models.video import VideoUpsert


class VideoUpsertFactory(factory.Factory):
    """Factory for VideoUpsert payloads."""

    class Meta:
        model = VideoUpsert

    id = LazyFunction(lambda: str(uuid.uuid4()))
    title = Sequence(lambda n: f"Test Video {n}")
    description = LazyFunction(lambda: "Mind-blowing action with stunning visuals")
    url = Sequence(lambda n: f"https://example.com/video{n}.mp4")
    thumbnail = LazyFunction(lambda: "/placeholder-video.jpg")
    duration = LazyFunction(lambda: 180)
    views = LazyFunction(lambda: 1250)
    producer_id = LazyFunction(lambda: None)
    category_id = LazyFunction(lambda: None)


def make_video_row(**overrides: Any) -> VideoDB:
    """Build an unsaved video row with every column populated."""
    row = VideoDB(**VideoUpsertFactory.build(**overrides).model_dump())
    row.created_at = datetime(2024, 1, 15, tzinfo=timezone.utc)
    row.updated_at = datetime(2024, 1, 15, tzinfo=timezone.utc)
    return row
