"""
nudex-catalog - Video content catalog service.

Stores video assets linked to producers and categories and serves discovery
queries (search, browse by category or producer, random sampling) plus an
internal upsert path and best-effort view-count accounting.
"""

from __future__ import annotations

__version__ = "1.0.0"
__author__ = "nudex"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__license__"]
