"""
Category models.

Defines Pydantic models for browseable video categories.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .slugs import validate_slug


class CategoryBase(BaseModel):
    """Base model for categories."""

    name: str = Field(..., min_length=1, max_length=255, description="Category name")
    slug: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Unique, URL-safe lookup key",
    )
    description: Optional[str] = Field(default=None)
    icon: Optional[str] = Field(default=None, max_length=32, description="Icon glyph")
    video_count: int = Field(default=0, ge=0, description="Denormalized video count")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate category name is not empty."""
        if not v or not v.strip():
            raise ValueError("Category name cannot be empty")
        return v.strip()

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        """Validate slug format."""
        return validate_slug(v)


class CategoryCreate(CategoryBase):
    """Model for creating categories."""

    id: str = Field(..., min_length=1, max_length=64)


class Category(CategoryBase):
    """Full category model with timestamps."""

    id: str
    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)

    model_config = ConfigDict(
        from_attributes=True,  # Enable ORM mode for SQLAlchemy compatibility
    )
