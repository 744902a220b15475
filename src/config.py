"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (cache
capacity, TTLs, sweep interval, purge tuning and HTTP client settings).
"""

from __future__ import annotations

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


# Cache lifetimes (seconds)
CACHE_DEFAULT_TTL = _env_float("CACHE_DEFAULT_TTL", 5 * 60.0)
CACHE_SWEEP_INTERVAL = _env_float("CACHE_SWEEP_INTERVAL", 60.0)

# Capacity / purge tuning
CACHE_MAX_BYTES = _env_int("CACHE_MAX_BYTES", 100 * 1024 * 1024)
CACHE_PURGE_THRESHOLD = _env_float("CACHE_PURGE_THRESHOLD", 0.8)
CACHE_MAX_ENTRY_FRACTION = _env_float("CACHE_MAX_ENTRY_FRACTION", 0.2)
CACHE_PURGE_HEADROOM = _env_float("CACHE_PURGE_HEADROOM", 1.2)

# Size estimate used when a value cannot be serialized
CACHE_FALLBACK_ENTRY_BYTES = _env_int("CACHE_FALLBACK_ENTRY_BYTES", 1024)

# Network / HTTP
HTTP_VERIFY = _env_bool("HTTP_VERIFY", False)
HTTP_TIMEOUT = _env_float("HTTP_TIMEOUT", 20.0)
