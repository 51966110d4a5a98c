"""
Configuration management module for nudex-catalog.

Handles application settings, environment variables, database connection
management and the optional cache client.
"""

from __future__ import annotations

__all__: list[str] = []
