"""Randomized operation sequences against the size accounting and capacity rules."""

import random

import pytest

from ttl_cache.models import CacheConfig
from ttl_cache.store import CacheStore

KEYS = [f"{prefix}:{i}" for prefix in ("docs", "suppliers", "materials") for i in range(6)]


def _resident_total(store: CacheStore) -> int:
    return sum(entry.size for _, entry in store.items())


def _random_value(rng: random.Random):
    kind = rng.randrange(4)
    if kind == 0:
        return "x" * rng.randrange(0, 120)
    if kind == 1:
        return {"id": rng.randrange(1000), "tags": ["t"] * rng.randrange(10)}
    if kind == 2:
        return None
    return list(range(rng.randrange(40)))


@pytest.mark.parametrize("seed", range(20))
def test_size_accounting_and_capacity_hold(clock, seed):
    rng = random.Random(seed)
    config = CacheConfig(max_bytes=2000, max_entry_fraction=0.2, default_ttl=30.0)
    store = CacheStore(config)

    for _ in range(300):
        op = rng.random()
        key = rng.choice(KEYS)

        if op < 0.45:
            value = _random_value(rng)
            before = {k: e.size for k, e in store.items()}
            stored = store.set(key, value, ttl=rng.choice([None, 1.0, 5.0, 60.0]))
            if stored:
                new_size = dict(store.items())[key].size
                assert store.occupied_bytes <= config.max_bytes + new_size
            elif value is not None:
                # refused as oversized: nothing changed
                assert {k: e.size for k, e in store.items()} == before
            else:
                assert key not in store
        elif op < 0.65:
            value = store.get(key)
            if value is None:
                assert key not in store
        elif op < 0.72:
            store.has(key)
        elif op < 0.80:
            store.remove(key)
            assert key not in store
        elif op < 0.83:
            store.clear()
        elif op < 0.88:
            store.extend_ttl(key, 1.0)
        elif op < 0.93:
            store.sweep_expired()
            assert all(not e.is_expired(clock.now) for _, e in store.items())
        else:
            clock.advance(rng.choice([0.5, 2.0, 10.0, 45.0]))

        assert store.occupied_bytes == _resident_total(store)
        assert store.occupied_bytes >= 0


@pytest.mark.parametrize("seed", range(5))
def test_expired_entries_never_read_back(clock, seed):
    rng = random.Random(seed)
    store = CacheStore(CacheConfig(max_bytes=50_000))
    deadlines = {}

    for _ in range(200):
        key = rng.choice(KEYS)
        if rng.random() < 0.5:
            ttl = rng.choice([0.5, 1.0, 3.0])
            store.set(key, key, ttl=ttl)
            deadlines[key] = clock.now + ttl
        else:
            clock.advance(rng.choice([0.25, 0.5, 1.0]))

        for k, deadline in deadlines.items():
            if clock.now > deadline:
                assert store.get(k) is None
