"""Slug validation shared by producers and categories."""

from __future__ import annotations

import re

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def validate_slug(value: str) -> str:
    """Return the stripped slug, or raise ValueError if it is not URL-safe."""
    if not value or not value.strip():
        raise ValueError("Slug cannot be empty")
    slug = value.strip()
    if not SLUG_PATTERN.match(slug):
        raise ValueError(
            "Slug must be lowercase letters, digits and single hyphens"
        )
    return slug
