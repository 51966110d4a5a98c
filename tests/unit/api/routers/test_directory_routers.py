"""
Tests for the producer and category directory endpoints.
"""

from __future__ import annotations

from unittest.mock import MagicMock

from httpx import AsyncClient

from nudex_catalog.models.category import Category
from nudex_catalog.models.producer import Producer


async def test_list_producers(async_client: AsyncClient, query_service: MagicMock) -> None:
    query_service.list_producers.return_value = [
        Producer(id="p1", name="NUDEX Studios", slug="nudex-studios", rating=4.8),
    ]

    response = await async_client.get("/producers")

    assert response.status_code == 200
    producers = response.json()["producers"]
    assert producers[0]["slug"] == "nudex-studios"
    assert producers[0]["rating"] == 4.8


async def test_list_categories(async_client: AsyncClient, query_service: MagicMock) -> None:
    query_service.list_categories.return_value = [
        Category(id="c1", name="Action", slug="action", icon="💥"),
        Category(id="c2", name="Comedy", slug="comedy"),
    ]

    response = await async_client.get("/categories")

    assert response.status_code == 200
    assert [c["name"] for c in response.json()["categories"]] == ["Action", "Comedy"]


async def test_empty_directory(async_client: AsyncClient, query_service: MagicMock) -> None:
    query_service.list_categories.return_value = []

    response = await async_client.get("/categories")

    assert response.json() == {"categories": []}
