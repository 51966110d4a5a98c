"""Database schema for nudex-catalog."""

from nudex_catalog.db.models import Base, Category, Producer, Video

__all__ = ["Base", "Category", "Producer", "Video"]
