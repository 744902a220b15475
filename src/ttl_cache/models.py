"""Immutable dataclasses shared across the cache package.

Includes the per-instance configuration (CacheConfig) and the read-only
statistics snapshot (CacheStats) returned by the introspection API.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict

import config

from ttl_cache.errors import ValidationError


@dataclass(frozen=True)
class CacheConfig:
    """Tuning knobs for one cache instance.

    Field groups:
    - Lifetimes (seconds): default_ttl, sweep_interval
    - Capacity: max_bytes, max_entry_fraction
    - Purge: purge_threshold, purge_headroom
    - Sizing: fallback_entry_bytes
    """

    default_ttl: float = 5 * 60.0
    sweep_interval: float = 60.0

    max_bytes: int = 100 * 1024 * 1024
    max_entry_fraction: float = 0.2

    purge_threshold: float = 0.8
    purge_headroom: float = 1.2

    fallback_entry_bytes: int = 1024

    def __post_init__(self) -> None:
        if self.max_bytes <= 0:
            raise ValidationError("max_bytes must be positive")
        if self.default_ttl <= 0:
            raise ValidationError("default_ttl must be positive")
        if self.sweep_interval <= 0:
            raise ValidationError("sweep_interval must be positive")
        if not 0 < self.purge_threshold <= 1:
            raise ValidationError("purge_threshold must be in (0, 1]")
        if not 0 < self.max_entry_fraction <= 1:
            raise ValidationError("max_entry_fraction must be in (0, 1]")
        if self.purge_headroom < 1:
            raise ValidationError("purge_headroom must be >= 1")
        if self.fallback_entry_bytes < 0:
            raise ValidationError("fallback_entry_bytes must be non-negative")

    @property
    def max_entry_bytes(self) -> float:
        return self.max_bytes * self.max_entry_fraction

    @classmethod
    def from_env(cls) -> "CacheConfig":
        return cls(
            default_ttl=config.CACHE_DEFAULT_TTL,
            sweep_interval=config.CACHE_SWEEP_INTERVAL,
            max_bytes=config.CACHE_MAX_BYTES,
            max_entry_fraction=config.CACHE_MAX_ENTRY_FRACTION,
            purge_threshold=config.CACHE_PURGE_THRESHOLD,
            purge_headroom=config.CACHE_PURGE_HEADROOM,
            fallback_entry_bytes=config.CACHE_FALLBACK_ENTRY_BYTES,
        )


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time occupancy report. Ages are in seconds."""

    total_items: int
    current_size_bytes: int
    max_size_bytes: int
    usage_percentage: float
    oldest_item_age: float
    keys_by_prefix: Dict[str, int] = field(default_factory=dict)
    average_access_count: float = 0.0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
