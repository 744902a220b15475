"""Async JSON-over-HTTP client whose GET responses are memoized in a MemoryCache.

Domain services call `get_json` with a key following the
"<domain-prefix>:<qualifier>" convention (e.g. "docs:resource:42") and
invalidate by prefix after writes. Failed requests are never cached.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

import httpx

import config
from ttl_cache.cache import MemoryCache
from ttl_cache.errors import ExternalServiceError, NotFoundError


class CachedJsonClient:
    def __init__(
        self,
        cache: MemoryCache,
        *,
        base_url: str,
        timeout: Optional[float] = None,
        verify: Optional[bool] = None,
        ttl: Optional[float] = None,
    ) -> None:
        self._cache = cache
        self._base_url = (base_url or "").rstrip("/")
        self._timeout = config.HTTP_TIMEOUT if timeout is None else timeout
        self._verify = config.HTTP_VERIFY if verify is None else verify
        self._ttl = ttl

    def cache_key(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        key = f"http:{path.lstrip('/')}"
        if params:
            key = f"{key}?{urlencode(sorted(params.items()))}"
        return key

    async def get_json(
        self,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        key: Optional[str] = None,
        ttl: Optional[float] = None,
    ) -> Any:
        cache_key = key or self.cache_key(path, params)

        async def fetch() -> Any:
            return await self._fetch(path, params)

        return await self._cache.cached_call(
            cache_key, fetch, ttl if ttl is not None else self._ttl
        )

    def invalidate(self, prefix: str) -> int:
        return self._cache.invalidate_pattern("^" + re.escape(prefix))

    async def _fetch(self, path: str, params: Optional[Mapping[str, Any]]) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout, verify=self._verify) as c:
                r = await c.get(url, params=dict(params) if params else None)
                r.raise_for_status()
                return r.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise NotFoundError(f"Resource not found: {path}") from e
            raise ExternalServiceError(f"Service returned an error: {e}") from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Failed to call service: {e}") from e
        except ValueError as e:
            raise ExternalServiceError(f"Invalid JSON from {path}: {e}") from e
