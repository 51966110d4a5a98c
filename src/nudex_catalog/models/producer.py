"""
Producer models.

Defines Pydantic models for content producers with validation and
serialization support.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .slugs import validate_slug


class ProducerBase(BaseModel):
    """Base model for producers."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    slug: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Unique, URL-safe lookup key",
    )
    description: Optional[str] = Field(default=None, description="Producer bio")
    avatar: Optional[str] = Field(default=None, description="Avatar image reference")
    specialties: List[str] = Field(
        default_factory=list, description="Specialty tags, e.g. genres"
    )
    rating: float = Field(default=0.0, ge=0.0, le=5.0, description="Rating 0.0-5.0")
    followers: int = Field(default=0, ge=0, description="Follower count")
    video_count: int = Field(default=0, ge=0, description="Denormalized video count")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate producer name is not empty."""
        if not v or not v.strip():
            raise ValueError("Producer name cannot be empty")
        return v.strip()

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        """Validate slug format."""
        return validate_slug(v)

    @field_validator("specialties", mode="before")
    @classmethod
    def parse_specialties(cls, v: Any) -> Any:
        """Accept specialties as a list or as a serialized JSON array."""
        if v is None:
            return []
        if isinstance(v, str):
            if not v.strip():
                return []
            parsed = json.loads(v)
            if not isinstance(parsed, list):
                raise ValueError("Specialties must be a JSON array")
            return parsed
        return v


class ProducerCreate(ProducerBase):
    """Model for creating producers."""

    id: str = Field(..., min_length=1, max_length=64)


class Producer(ProducerBase):
    """Full producer model with timestamps."""

    id: str
    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)

    model_config = ConfigDict(
        from_attributes=True,  # Enable ORM mode for SQLAlchemy compatibility
    )
