"""
Optional cache side channel.

The catalog does not read from or write to the cache; the client is created
once per process so the health check can report its liveness.
"""

from __future__ import annotations

import logging
from typing import Optional

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class CacheManager:
    """Owns the process-wide Redis client."""

    def __init__(self, url: str, socket_timeout: float = 2.0) -> None:
        self._url = url.strip()
        self._socket_timeout = socket_timeout
        self._client: Optional[Redis] = None

    @property
    def enabled(self) -> bool:
        """Whether a cache URL was configured."""
        return bool(self._url)

    def get_client(self) -> Optional[Redis]:
        """Get or lazily create the Redis client (None when disabled)."""
        if not self.enabled:
            return None
        if self._client is None:
            self._client = Redis.from_url(
                self._url,
                socket_timeout=self._socket_timeout,
                socket_connect_timeout=self._socket_timeout,
            )
        return self._client

    async def ping(self) -> bool:
        """
        Probe cache liveness.

        Returns
        -------
        bool
            True if the server answered PING, False if disabled or unreachable.
        """
        client = self.get_client()
        if client is None:
            return False
        try:
            return bool(await client.ping())
        except Exception as e:
            logger.warning("Cache ping failed: %s", e)
            return False

    async def close(self) -> None:
        """Close the client connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
