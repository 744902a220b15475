"""
Background expiry sweeping.

Periodically drops entries whose TTL has elapsed so their bytes are
reclaimed even if nobody reads them again. The sweeper is an asyncio task
owned by one cache instance and must be stopped explicitly on shutdown.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ttl_cache.store import CacheStore

logger = logging.getLogger(__name__)


class ExpirySweeper:
    def __init__(self, store: CacheStore, *, interval: float) -> None:
        self._store = store
        self._interval = float(interval)
        self._task: Optional[asyncio.Task] = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self) -> int:
        before = self._store.occupied_bytes
        removed = self._store.sweep_expired()
        if removed:
            logger.info(
                "Swept %d expired cache entries (%d bytes)",
                removed, before - self._store.occupied_bytes,
            )
        return removed

    def start(self) -> None:
        # Needs a running event loop; calling twice keeps the first task.
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())
        logger.debug("Cache sweeper started (every %.1fs)", self._interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            # Only the sweeper task's own cancellation is expected here
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
        logger.debug("Cache sweeper stopped")

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self.run_once()
            except Exception:
                # Keep sweeping; a failed pass only delays reclamation
                logger.exception("Cache sweep failed")
