"""MemoryCache: one self-contained, memory-bounded TTL cache instance.

Bundles a CacheStore, its expiry sweeper, the memoization wrapper and the
introspection helpers behind a single object with an explicit lifecycle.
Independent instances share no state, so tests and services can each own
one.

    async with MemoryCache(CacheConfig(max_bytes=10_000_000)) as cache:
        docs = await cache.cached_call("docs:resource:42", fetch_docs, ttl=60)
"""

from __future__ import annotations

import re
from typing import Any, Awaitable, Callable, List, Optional, TypeVar, Union

from ttl_cache.interfaces import SizeEstimator
from ttl_cache.memo import cached_call
from ttl_cache.models import CacheConfig, CacheStats
from ttl_cache.stats import collect_stats, keys_by_pattern
from ttl_cache.store import CacheStore
from ttl_cache.sweeper import ExpirySweeper

T = TypeVar("T")


class MemoryCache:
    """In-process cache with per-entry TTLs and a hard byte ceiling.

    Purpose:
      - get/set/has/remove/clear/extend_ttl on individual keys
      - cached_call(key, producer, ttl) to memoize async producers
      - get_stats() and get_keys_by_pattern() for visibility

    Key behavior:
      - Expired entries read as None and are removed on access and by a
        background sweep (start() / close()).
      - Inserts that would overflow max_bytes purge the lowest-value entries.
      - Values larger than max_entry_fraction of capacity are not cached.
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        *,
        estimator: Optional[SizeEstimator] = None,
    ) -> None:
        self._config = config or CacheConfig.from_env()
        self._store = CacheStore(self._config, estimator=estimator)
        self._sweeper = ExpirySweeper(self._store, interval=self._config.sweep_interval)

    async def __aenter__(self) -> "MemoryCache":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def config(self) -> CacheConfig:
        return self._config

    @property
    def store(self) -> CacheStore:
        return self._store

    @property
    def sweeper(self) -> ExpirySweeper:
        return self._sweeper

    def __len__(self) -> int:
        return len(self._store)

    def start(self) -> None:
        self._sweeper.start()

    async def close(self) -> None:
        await self._sweeper.stop()

    def get(self, key: str) -> Optional[Any]:
        return self._store.get(key)

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> bool:
        return self._store.set(key, value, ttl)

    def has(self, key: str) -> bool:
        return self._store.has(key)

    def remove(self, key: str) -> bool:
        return self._store.remove(key)

    def clear(self) -> None:
        self._store.clear()

    def extend_ttl(self, key: str, additional: float = 0.0) -> bool:
        return self._store.extend_ttl(key, additional)

    async def cached_call(
        self,
        key: str,
        producer: Callable[[], Awaitable[T]],
        ttl: Optional[float] = None,
    ) -> T:
        return await cached_call(self._store, key, producer, ttl)

    def sweep(self) -> int:
        return self._sweeper.run_once()

    def get_stats(self) -> CacheStats:
        return collect_stats(self._store)

    def get_keys_by_pattern(self, pattern: Union[str, re.Pattern[str]]) -> List[str]:
        return keys_by_pattern(self._store, pattern)

    def invalidate_pattern(self, pattern: Union[str, re.Pattern[str]]) -> int:
        return self._store.remove_by_pattern(pattern)


def create_cache(
    config: Optional[CacheConfig] = None,
    *,
    estimator: Optional[SizeEstimator] = None,
) -> MemoryCache:
    # Must be called from inside a running event loop
    cache = MemoryCache(config, estimator=estimator)
    cache.start()
    return cache
