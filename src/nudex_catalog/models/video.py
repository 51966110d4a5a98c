"""
Video models for catalog reads and writes.

Defines the upsert payload, the stored video record, the
relationship-resolved read model and the result sets returned by catalog
queries.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .category import Category
from .producer import Producer


class VideoBase(BaseModel):
    """Base model for video data."""

    title: str = Field(..., description="Video title")
    description: Optional[str] = Field(default=None, description="Video description")
    url: str = Field(..., description="Playback URL")
    thumbnail: Optional[str] = Field(default=None, description="Thumbnail reference")
    duration: int = Field(default=0, ge=0, description="Duration in seconds")
    views: int = Field(default=0, ge=0, description="View count")
    producer_id: Optional[str] = Field(
        default=None, max_length=64, description="Producer reference"
    )
    category_id: Optional[str] = Field(
        default=None, max_length=64, description="Category reference"
    )


class VideoUpsert(VideoBase):
    """Payload for the create-or-replace write path.

    Every field not present is cleared on replace; ``id`` is generated when
    absent.
    """

    id: Optional[str] = Field(default=None, max_length=64, description="Video ID")

    @field_validator("title", "url")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        """Validate required text fields are not blank."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("id", "producer_id", "category_id", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat empty identifiers as absent."""
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    model_config = ConfigDict(extra="ignore")


class Video(VideoBase):
    """Stored video record with timestamps."""

    id: str
    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)

    model_config = ConfigDict(
        from_attributes=True,  # Enable ORM mode for SQLAlchemy compatibility
    )


class VideoRead(Video):
    """Video with its producer and category attached.

    ``producer``/``category`` are None when the reference is absent or
    dangling.
    """

    producer: Optional[Producer] = Field(default=None)
    category: Optional[Category] = Field(default=None)


class VideoPage(BaseModel):
    """A page of videos with the echoed query parameters."""

    videos: List[VideoRead] = Field(default_factory=list)
    query: str = Field(default="")
    limit: int
    offset: int


class CategoryVideos(BaseModel):
    """Videos in a category, keyed by the requested slug."""

    videos: List[VideoRead] = Field(default_factory=list)
    category: str


class ProducerVideos(BaseModel):
    """Videos by a producer, keyed by the requested slug."""

    videos: List[VideoRead] = Field(default_factory=list)
    producer: str


class VideoSample(BaseModel):
    """Randomly sampled videos in no particular order."""

    videos: List[VideoRead] = Field(default_factory=list)
