"""Response envelopes for the catalog endpoints.

Video result sets (``VideoPage``, ``CategoryVideos``, ``ProducerVideos``,
``VideoSample``) are served as-is from the service layer; the directory
listings and the upsert acknowledgement are wrapped here.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from nudex_catalog.models.category import Category
from nudex_catalog.models.producer import Producer
from nudex_catalog.models.video import VideoRead

UPSERT_SUCCESS_MESSAGE = "Video upserted successfully"


class ProducerListResponse(BaseModel):
    """Every producer in the catalog."""

    producers: List[Producer] = Field(default_factory=list)


class CategoryListResponse(BaseModel):
    """Every category in the catalog."""

    categories: List[Category] = Field(default_factory=list)


class UpsertResponse(BaseModel):
    """Acknowledgement of a successful upsert."""

    video: VideoRead
    message: str = Field(default=UPSERT_SUCCESS_MESSAGE)
