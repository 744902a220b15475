import pytest

import ttl_cache.store as store_mod
from ttl_cache.models import CacheConfig
from ttl_cache.store import CacheStore


class FakeClock:
    """Controllable stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock(monkeypatch):
    c = FakeClock()
    monkeypatch.setattr(store_mod.time, "monotonic", c)
    return c


@pytest.fixture
def small_config():
    return CacheConfig(max_bytes=1000, max_entry_fraction=0.5, default_ttl=60.0)


@pytest.fixture
def store(clock, small_config):
    return CacheStore(small_config)


@pytest.fixture
def sized_text():
    """Build a string whose JSON estimate is exactly `size` bytes (2 bytes per char)."""

    def _make(size: int) -> str:
        assert size % 2 == 0 and size >= 4
        return "x" * (size // 2 - 2)

    return _make
