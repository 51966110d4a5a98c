"""
Bootstrap seeding for an empty catalog.

Populates a fresh database with a small demo catalog: four categories,
two producers and twenty videos spread across them.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections import Counter
from typing import List, Optional

from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.db.models import Category as CategoryDB
from nudex_catalog.db.models import Producer as ProducerDB
from nudex_catalog.models.category import CategoryCreate
from nudex_catalog.models.producer import ProducerCreate
from nudex_catalog.repositories.category_repository import CategoryRepository
from nudex_catalog.repositories.producer_repository import ProducerRepository
from nudex_catalog.repositories.video_repository import VideoRepository

logger = logging.getLogger(__name__)

SEED_CATEGORIES = [
    ("Action", "action", "💥"),
    ("Comedy", "comedy", "😂"),
    ("Drama", "drama", "🎭"),
    ("Documentary", "documentary", "📹"),
]

SEED_PRODUCERS = [
    {
        "name": "NUDEX Studios",
        "slug": "nudex-studios",
        "description": "Premium content creators",
        "avatar": "/placeholder-avatar.jpg",
        "specialties": ["Action", "Drama"],
        "rating": 4.8,
        "followers": 125000,
    },
    {
        "name": "RedCam Productions",
        "slug": "redcam-productions",
        "description": "Independent filmmakers",
        "avatar": "/placeholder-avatar.jpg",
        "specialties": ["Documentary", "Comedy"],
        "rating": 4.6,
        "followers": 89000,
    },
]

SEED_TITLES = [
    "Dramatic Masterpiece",
    "Action Packed",
    "Documentary Truth",
    "Comedy Central",
    "Epic Adventure",
    "Thriller Night",
    "Romance Story",
    "Sci-Fi Future",
    "Horror Tales",
    "Musical Journey",
    "Sports Highlights",
    "Travel Diary",
    "Cooking Show",
    "Tech Review",
    "Gaming Session",
    "Art Tutorial",
    "Fashion Show",
    "News Report",
    "Interview Special",
    "Behind Scenes",
]

SEED_VIDEO_COUNT = 20
THUMBNAIL_PLACEHOLDER = "/placeholder-video.jpg"


class SeedResult(BaseModel):
    """Result of a seeding run."""

    producers: int = 0
    categories: int = 0
    videos: int = 0
    skipped: bool = False
    duration_seconds: float = 0.0
    errors: list[str] = Field(default_factory=list)

    @property
    def total_created(self) -> int:
        """Total records created."""
        return self.producers + self.categories + self.videos


def build_seed_videos(
    producer_ids: List[str], category_ids: List[str]
) -> List[dict]:
    """
    Build the demo video payloads.

    The first two videos are hand-written; the rest are generated from
    ``SEED_TITLES``, cycling through producers and categories.
    """
    videos = [
        {
            "title": "Epic Action Sequence",
            "description": "Mind-blowing action with stunning visuals",
            "url": "https://example.com/video1.mp4",
            "duration": 180,
            "views": 1250,
            "producer_id": producer_ids[0],
            "category_id": category_ids[0],
        },
        {
            "title": "Comedy Gold",
            "description": "Hilarious comedy sketch",
            "url": "https://example.com/video2.mp4",
            "duration": 240,
            "views": 980,
            "producer_id": producer_ids[1 % len(producer_ids)],
            "category_id": category_ids[1 % len(category_ids)],
        },
    ]
    for i in range(2, SEED_VIDEO_COUNT):
        title = SEED_TITLES[i]
        videos.append(
            {
                "title": title,
                "description": f"Amazing {title} content",
                "url": f"https://example.com/video{i + 1}.mp4",
                "duration": 120 + i * 15,
                "views": 500 + i * 100,
                "producer_id": producer_ids[i % len(producer_ids)],
                "category_id": category_ids[i % len(category_ids)],
            }
        )
    for video in videos:
        video["id"] = str(uuid.uuid4())
        video["thumbnail"] = THUMBNAIL_PLACEHOLDER
    return videos


class CatalogSeeder:
    """Seeds the demo catalog into an empty database."""

    def __init__(
        self,
        video_repository: Optional[VideoRepository] = None,
        producer_repository: Optional[ProducerRepository] = None,
        category_repository: Optional[CategoryRepository] = None,
    ) -> None:
        self.video_repository = video_repository or VideoRepository()
        self.producer_repository = producer_repository or ProducerRepository()
        self.category_repository = category_repository or CategoryRepository()

    async def seed(self, session: AsyncSession, force: bool = False) -> SeedResult:
        """
        Seed the catalog.

        Parameters
        ----------
        session : AsyncSession
            Database session; the caller owns commit/rollback
        force : bool
            Seed even if videos already exist. Producers and categories are
            reused by slug so a forced run never violates slug uniqueness.

        Returns
        -------
        SeedResult
            What was created, or ``skipped=True`` when the catalog already
            has videos
        """
        start_time = time.time()
        result = SeedResult()

        existing = await self.video_repository.count(session)
        if existing and not force:
            logger.info("Catalog already has %d videos, skipping seed", existing)
            result.skipped = True
            return result

        categories: List[CategoryDB] = []
        for name, slug, icon in SEED_CATEGORIES:
            category = await self.category_repository.get_by_slug(session, slug)
            if category is None:
                category = await self.category_repository.create(
                    session,
                    obj_in=CategoryCreate(
                        id=str(uuid.uuid4()),
                        name=name,
                        slug=slug,
                        description=f"{name} videos",
                        icon=icon,
                    ),
                )
                result.categories += 1
            categories.append(category)

        producers: List[ProducerDB] = []
        for data in SEED_PRODUCERS:
            producer = await self.producer_repository.get_by_slug(session, data["slug"])
            if producer is None:
                producer = await self.producer_repository.create(
                    session, obj_in=ProducerCreate(id=str(uuid.uuid4()), **data)
                )
                result.producers += 1
            producers.append(producer)

        videos = build_seed_videos(
            [p.id for p in producers], [c.id for c in categories]
        )
        for video in videos:
            await self.video_repository.create(session, obj_in=video)
            result.videos += 1

        producer_counts = Counter(v["producer_id"] for v in videos)
        for producer in producers:
            producer.video_count += producer_counts[producer.id]
        category_counts = Counter(v["category_id"] for v in videos)
        for category in categories:
            category.video_count += category_counts[category.id]
        await session.flush()

        result.duration_seconds = time.time() - start_time
        logger.info(
            "Seeded %d categories, %d producers and %d videos",
            result.categories,
            result.producers,
            result.videos,
        )
        return result
