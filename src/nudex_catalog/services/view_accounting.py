"""
Best-effort view-count accounting.

Each single-video read schedules one increment that runs on its own
session in a background task, so the read path never waits on the write
and the write survives cancellation of the request that caused it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Set

from sqlalchemy.ext.asyncio import AsyncSession

from nudex_catalog.exceptions import AccountingFailure
from nudex_catalog.repositories.video_repository import VideoRepository

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AsyncSession]


class ViewCounter:
    """
    Dispatches fire-and-forget view increments.

    Increments are applied as ``views = views + 1`` by the store, so N
    concurrent reads of a video add exactly N views. A failed increment
    is logged and dropped; it is never retried.

    Parameters
    ----------
    session_factory : SessionFactory
        Produces a fresh session for each increment
    video_repository : VideoRepository
        Repository used to apply the increment
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        video_repository: VideoRepository,
    ) -> None:
        self._session_factory = session_factory
        self.video_repository = video_repository
        self._pending: Set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        """Number of increments scheduled but not yet finished."""
        return len(self._pending)

    def record_view(self, video_id: str) -> asyncio.Task[None]:
        """
        Schedule one view increment for a video and return immediately.

        Must be called from a running event loop.
        """
        task = asyncio.create_task(
            self._increment(video_id), name=f"record-view-{video_id}"
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _increment(self, video_id: str) -> None:
        try:
            async with self._session_factory() as session:
                try:
                    matched = await self.video_repository.increment_field(
                        session, video_id, "views", 1
                    )
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
            if not matched:
                logger.debug("View increment matched no video %s", video_id)
        except asyncio.CancelledError:
            logger.warning("View increment for video %s was cancelled", video_id)
            raise
        except Exception as e:
            failure = AccountingFailure(video_id, original_error=e)
            logger.warning(str(failure))

    async def drain(self, timeout: float | None = None) -> int:
        """
        Wait for pending increments to finish.

        Parameters
        ----------
        timeout : float | None
            Seconds to wait before giving up; None waits indefinitely

        Returns
        -------
        int
            Number of increments still pending when the wait ended
        """
        if not self._pending:
            return 0
        pending = set(self._pending)
        logger.info("Draining %d pending view increments", len(pending))
        _, not_done = await asyncio.wait(pending, timeout=timeout)
        if not_done:
            logger.warning(
                "%d view increments still pending after %.1fs",
                len(not_done),
                timeout or 0.0,
            )
        return len(not_done)
