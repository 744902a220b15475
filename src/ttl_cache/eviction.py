"""Value-based eviction for capacity pressure.

Each resident entry gets a composite score that blends access frequency
(LFU), recency (LRU) and remaining lifetime. Lower scores are evicted first:

    score = log1p(access_count) - minutes_since_last_access + remaining_ttl_ratio

The purge removes entries in ascending score order until the requested
number of bytes has been freed or nothing is left. It never raises.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Tuple

if TYPE_CHECKING:
    from ttl_cache.store import CacheEntry


@dataclass(frozen=True, slots=True)
class PurgeResult:
    evicted: List[str]
    freed_bytes: int


def score_entry(entry: "CacheEntry", now: float) -> float:
    recency = max(0.0, (now - entry.last_accessed) / 60.0)
    frequency = math.log1p(entry.access_count)
    if entry.ttl > 0:
        ttl_ratio = (entry.inserted_at + entry.ttl - now) / entry.ttl
    else:
        ttl_ratio = 0.0
    return frequency - recency + ttl_ratio


def rank_entries(entries: Dict[str, "CacheEntry"], now: float) -> List[Tuple[float, str]]:
    """Return (score, key) pairs sorted from least to most valuable."""
    ranked = [(score_entry(entry, now), key) for key, entry in entries.items()]
    ranked.sort(key=lambda pair: pair[0])
    return ranked


def purge(entries: Dict[str, "CacheEntry"], target_bytes: float, now: float) -> PurgeResult:
    """Delete the lowest-scoring entries from `entries` until `target_bytes` are freed.

    The caller owns the running size total and must subtract
    `PurgeResult.freed_bytes` from it once.
    """
    if not entries:
        return PurgeResult(evicted=[], freed_bytes=0)

    evicted: List[str] = []
    freed = 0
    for _, key in rank_entries(entries, now):
        entry = entries.pop(key)
        evicted.append(key)
        freed += entry.size
        if freed >= target_bytes:
            break

    return PurgeResult(evicted=evicted, freed_bytes=freed)
