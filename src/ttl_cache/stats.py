"""Read-only introspection over a CacheStore.

Reports occupancy, the age of the oldest resident entry, key counts per
prefix (the part of the key before the first ':') and the mean access
count. Nothing here mutates the store or applies lazy expiry.
"""

from __future__ import annotations

import re
import time
from collections import Counter
from typing import List, Union

from ttl_cache.models import CacheStats
from ttl_cache.store import CacheStore


def key_prefix(key: str) -> str:
    return key.split(":", 1)[0] or "unknown"


def collect_stats(store: CacheStore) -> CacheStats:
    now = time.monotonic()
    oldest = now
    prefixes: Counter = Counter()
    total_access = 0

    entries = list(store.items())
    for key, entry in entries:
        oldest = min(oldest, entry.inserted_at)
        prefixes[key_prefix(key)] += 1
        total_access += entry.access_count

    max_bytes = store.config.max_bytes
    count = len(entries)

    return CacheStats(
        total_items=count,
        current_size_bytes=store.occupied_bytes,
        max_size_bytes=max_bytes,
        usage_percentage=store.occupied_bytes / max_bytes * 100,
        oldest_item_age=now - oldest,
        keys_by_prefix=dict(prefixes),
        average_access_count=total_access / count if count else 0.0,
    )


def keys_by_pattern(store: CacheStore, pattern: Union[str, re.Pattern[str]]) -> List[str]:
    # Invalid string patterns raise re.error to the caller
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    return [key for key, _ in store.items() if regex.search(key)]
