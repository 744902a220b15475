import asyncio

import pytest

from ttl_cache.memo import cached_call
from ttl_cache.models import CacheConfig
from ttl_cache.store import CacheStore


@pytest.mark.asyncio
async def test_cached_call_producer_not_reinvoked_on_hit():
    store = CacheStore(CacheConfig(max_bytes=10_000))
    calls = []

    async def producer():
        calls.append(1)
        return {"id": 42}

    first = await cached_call(store, "k", producer, 1.0)
    second = await cached_call(store, "k", producer, 1.0)

    assert len(calls) == 1
    assert first is second
    assert first == {"id": 42}


@pytest.mark.asyncio
async def test_cached_call_failure_not_cached():
    store = CacheStore(CacheConfig(max_bytes=10_000))
    calls = []
    err = RuntimeError("upstream down")

    async def producer():
        calls.append(1)
        raise err

    for _ in range(2):
        with pytest.raises(RuntimeError) as exc_info:
            await cached_call(store, "k", producer, 1.0)
        assert exc_info.value is err

    assert len(calls) == 2
    assert store.has("k") is False


@pytest.mark.asyncio
async def test_cached_call_none_result_not_cached():
    store = CacheStore(CacheConfig(max_bytes=10_000))
    calls = []

    async def producer():
        calls.append(1)
        return None

    assert await cached_call(store, "k", producer) is None
    assert await cached_call(store, "k", producer) is None
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_cached_call_oversized_result_returned_but_not_cached():
    store = CacheStore(CacheConfig(max_bytes=100))

    async def producer():
        return "x" * 500

    out = await cached_call(store, "k", producer)

    assert out == "x" * 500
    assert len(store) == 0


@pytest.mark.asyncio
async def test_cached_call_concurrent_misses_run_producer_each_time():
    store = CacheStore(CacheConfig(max_bytes=10_000))
    calls = []
    gate = asyncio.Event()

    async def producer():
        calls.append(1)
        await gate.wait()
        return len(calls)

    t1 = asyncio.create_task(cached_call(store, "k", producer))
    t2 = asyncio.create_task(cached_call(store, "k", producer))
    await asyncio.sleep(0)
    gate.set()
    await asyncio.gather(t1, t2)

    # At-least-once: both misses invoked the producer; last write wins
    assert len(calls) == 2
    assert store.get("k") == 2
