"""
Database models for nudex-catalog.

This module declares the storage schema for the catalog: videos, producers
and categories. Relationships are plain foreign-key columns; related records
are attached at read time by the relationship resolver rather than through
ORM loader options.
"""

from __future__ import annotations

import datetime
from typing import Optional

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class Producer(Base):
    """Content producer (studio or creator)."""

    __tablename__ = "producers"
    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_producers_rating_range"),
        CheckConstraint("followers >= 0", name="ck_producers_followers_non_negative"),
        CheckConstraint("video_count >= 0", name="ck_producers_video_count_non_negative"),
    )

    # Primary key
    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    # Producer metadata
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    avatar: Mapped[Optional[str]] = mapped_column(String(500))
    specialties: Mapped[Optional[list]] = mapped_column(JSON)  # JSON array of tags

    # Engagement
    rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    followers: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    video_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Timestamps
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Category(Base):
    """Browseable video category."""

    __tablename__ = "categories"
    __table_args__ = (
        CheckConstraint("video_count >= 0", name="ck_categories_video_count_non_negative"),
    )

    # Primary key
    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    # Category metadata
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    icon: Mapped[Optional[str]] = mapped_column(String(32))
    video_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Timestamps
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Video(Base):
    """Video asset with optional producer and category references."""

    __tablename__ = "videos"
    __table_args__ = (
        CheckConstraint("duration >= 0", name="ck_videos_duration_non_negative"),
        CheckConstraint("views >= 0", name="ck_videos_views_non_negative"),
        Index("ix_videos_created_at", "created_at"),
    )

    # Primary key
    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    # Video metadata
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    url: Mapped[str] = mapped_column(String(1000), nullable=False)
    thumbnail: Mapped[Optional[str]] = mapped_column(String(1000))
    duration: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False
    )  # Duration in seconds

    # Engagement metrics
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Foreign keys
    producer_id: Mapped[Optional[str]] = mapped_column(
        String(64), ForeignKey("producers.id"), index=True
    )
    category_id: Mapped[Optional[str]] = mapped_column(
        String(64), ForeignKey("categories.id"), index=True
    )

    # Timestamps
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
