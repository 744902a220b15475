"""Memoize async producers through a CacheStore.

A hit returns the cached value without calling the producer. A miss awaits
the producer and caches a non-None result. Failures propagate unchanged and
are never cached, so the next call retries.

There is no single-flight de-duplication: two callers missing the same key
at the same time will both run the producer, and the last `set` wins.
Callers that need at-most-once behavior should keep their own map of
in-flight tasks on top of this.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, TypeVar

from ttl_cache.store import CacheStore

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def cached_call(
    store: CacheStore,
    key: str,
    producer: Callable[[], Awaitable[T]],
    ttl: Optional[float] = None,
) -> T:
    cached = store.get(key)
    if cached is not None:
        return cached

    try:
        result = await producer()
    except Exception:
        logger.error("Cached call failed for key %s", key, exc_info=True)
        raise

    if result is not None:
        store.set(key, result, ttl)

    return result
