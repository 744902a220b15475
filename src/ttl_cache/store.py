"""Memory-bounded in-memory TTL store.

Maps keys to entries carrying their own TTL, an estimated footprint and
access statistics, and keeps an exact running total of occupied bytes.
Expired entries are dropped lazily on access and in bulk by the sweeper.
When an insert would push the total past capacity, the lowest-value
entries are purged first (see eviction.py).

All mutations are plain synchronous code: under asyncio nothing can
interleave with them, so no lock is needed. Callers driving a store from
several OS threads must serialize access themselves.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from ttl_cache.eviction import purge
from ttl_cache.interfaces import SizeEstimator
from ttl_cache.models import CacheConfig
from ttl_cache.sizing import JsonSizeEstimator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CacheEntry:
    # Times are time.monotonic() seconds
    key: str
    value: Any
    inserted_at: float
    ttl: float
    size: int
    access_count: int
    last_accessed: float

    @property
    def expires_at(self) -> float:
        return self.inserted_at + self.ttl

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class CacheStore:
    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        *,
        estimator: Optional[SizeEstimator] = None,
    ) -> None:
        self._config = config or CacheConfig()
        self._estimator = estimator or JsonSizeEstimator(
            fallback_bytes=self._config.fallback_entry_bytes
        )
        self._entries: Dict[str, CacheEntry] = {}
        self._occupied_bytes = 0

    @property
    def config(self) -> CacheConfig:
        return self._config

    @property
    def occupied_bytes(self) -> int:
        return self._occupied_bytes

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        # Resident check only; does not apply lazy expiry
        return key in self._entries

    def items(self) -> Iterator[Tuple[str, CacheEntry]]:
        return iter(list(self._entries.items()))

    def _live_entry(self, key: str, now: float) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.is_expired(now):
            self._drop(key)
            return None

        return entry

    def _drop(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.pop(key, None)
        if entry is not None:
            self._occupied_bytes -= entry.size
        return entry

    def get(self, key: str) -> Optional[Any]:
        now = time.monotonic()
        entry = self._live_entry(key, now)
        if entry is None:
            return None

        entry.access_count += 1
        entry.last_accessed = now
        return entry.value

    def has(self, key: str) -> bool:
        return self._live_entry(key, time.monotonic()) is not None

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> bool:
        # Storing None means "clear this key"
        if value is None:
            self._drop(key)
            return False

        ttl = self._config.default_ttl if ttl is None else float(ttl)
        size = self._estimator.estimate(value)

        if size > self._config.max_entry_bytes:
            logger.debug(
                "Refusing to cache %s: %d bytes exceeds the %.0f byte entry limit",
                key, size, self._config.max_entry_bytes,
            )
            return False

        now = time.monotonic()
        existing = self._entries.get(key)
        delta = size - (existing.size if existing is not None else 0)

        max_bytes = self._config.max_bytes
        if self._occupied_bytes + delta > max_bytes:
            # Free down to the purge threshold, plus headroom so marginal
            # overflows don't trigger a purge on every insert
            target = (
                self._occupied_bytes + delta - max_bytes * self._config.purge_threshold
            ) * self._config.purge_headroom
            result = purge(self._entries, target, now)
            self._occupied_bytes -= result.freed_bytes
            logger.info(
                "Purged %d cache entries (%d bytes) to make room for %s",
                len(result.evicted), result.freed_bytes, key,
            )

        # The purge may already have evicted the old entry for this key
        self._drop(key)

        self._entries[key] = CacheEntry(
            key=key,
            value=value,
            inserted_at=now,
            ttl=ttl,
            size=size,
            access_count=1,
            last_accessed=now,
        )
        self._occupied_bytes += size
        return True

    def remove(self, key: str) -> bool:
        return self._drop(key) is not None

    def clear(self) -> None:
        self._entries.clear()
        self._occupied_bytes = 0

    def extend_ttl(self, key: str, additional: float = 0.0) -> bool:
        """Restart the TTL window of a live entry.

        `inserted_at` is reset to now, so the entry gets a full `ttl` again
        from this moment. `additional` is not added to the deadline; repeated
        short extensions behave like full resets.
        """
        now = time.monotonic()
        entry = self._live_entry(key, now)
        if entry is None:
            return False

        entry.inserted_at = now
        logger.debug("Extended TTL for %s (requested +%.3fs)", key, additional)
        return True

    def sweep_expired(self) -> int:
        now = time.monotonic()

        # Collect first; the dict can't change size while iterating
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            self._drop(key)

        return len(expired)

    def remove_by_pattern(self, pattern: Union[str, re.Pattern[str]]) -> int:
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        matched = [key for key in self._entries if regex.search(key)]
        for key in matched:
            self._drop(key)
        return len(matched)
