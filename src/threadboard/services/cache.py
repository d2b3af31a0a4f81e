"""Cache stores for feed and bookmark reads.

Caching is cache-aside: readers look up a key, compute on a miss and store the
serialized result with a TTL; writers delete the keys they make stale. The
store is injected (see ``build_cache_store``) so deployments can pick an
in-memory, Redis or no-op backend. Store failures surface as
``CacheUnavailableError``; ``cached_json`` turns them into misses so a broken
cache never fails a request.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from threading import Lock
from typing import Any, Protocol, TypeVar

import redis

from threadboard.core.errors import CacheUnavailableError
from threadboard.core.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def trending_key(limit: int) -> str:
    return f"trending:limit:{limit}"


def bookmarks_key(user_id: int) -> str:
    return f"bookmarks:user:{user_id}"


class CacheStore(Protocol):
    """Key-value store with per-key expiry."""

    def connect(self) -> None: ...

    def close(self) -> None: ...

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str, ttl_seconds: int) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryCacheStore:
    """Process-local store; entries expire lazily on read."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = Lock()

    def connect(self) -> None:
        return None

    def close(self) -> None:
        with self._lock:
            self._entries.clear()

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at <= self._clock():
                self._entries.pop(key, None)
                return None
            return value

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl_seconds)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)


class RedisCacheStore:
    """Store backed by a Redis server."""

    def __init__(self, url: str, client: Any | None = None) -> None:
        self._url = url
        self._redis = client

    def connect(self) -> None:
        if self._redis is None:
            self._redis = redis.from_url(self._url, decode_responses=True)
        try:
            self._redis.ping()
        except redis.RedisError as exc:
            # Keep the client; later calls fall back to the store until Redis returns.
            logger.warning("Redis cache at %s is unreachable: %s", self._url, exc)

    def close(self) -> None:
        if self._redis is not None:
            self._redis.close()
            self._redis = None

    def _client(self) -> Any:
        if self._redis is None:
            raise CacheUnavailableError("Cache is not connected")
        return self._redis

    def get(self, key: str) -> str | None:
        try:
            value = self._client().get(key)
        except redis.RedisError as exc:
            raise CacheUnavailableError(f"Cache read failed: {exc}") from exc
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        try:
            self._client().set(key, value, ex=int(ttl_seconds))
        except redis.RedisError as exc:
            raise CacheUnavailableError(f"Cache write failed: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._client().delete(key)
        except redis.RedisError as exc:
            raise CacheUnavailableError(f"Cache delete failed: {exc}") from exc


class NullCacheStore:
    """Store that never holds anything."""

    def connect(self) -> None:
        return None

    def close(self) -> None:
        return None

    def get(self, key: str) -> str | None:
        return None

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        return None

    def delete(self, key: str) -> None:
        return None


def build_cache_store(config: Settings | None = None) -> CacheStore:
    """Return the store selected by ``CACHE_BACKEND`` (not yet connected)."""
    config = config or default_settings
    backend = config.cache_backend.lower()
    if backend == "redis":
        return RedisCacheStore(config.redis_url)
    if backend == "memory":
        return MemoryCacheStore()
    if backend in {"none", "null", "off"}:
        return NullCacheStore()
    raise ValueError(f"Unknown cache backend: {config.cache_backend!r}")


def cached_json(
    cache: CacheStore,
    key: str,
    ttl_seconds: int,
    compute: Callable[[], T],
    *,
    dump: Callable[[T], Any],
    load: Callable[[Any], T],
) -> T:
    """Return the value under ``key``, computing and storing it on a miss.

    ``dump`` turns the computed value into JSON-compatible data and ``load``
    rebuilds it from a cached payload. A ``ttl_seconds`` of 0 bypasses the
    cache entirely.
    """
    if ttl_seconds <= 0:
        return compute()

    raw = None
    try:
        raw = cache.get(key)
    except CacheUnavailableError as exc:
        logger.warning("Cache read failed for %s: %s", key, exc)

    if raw is not None:
        try:
            return load(json.loads(raw))
        except ValueError as exc:
            logger.warning("Discarding unreadable cache entry %s: %s", key, exc)

    value = compute()
    try:
        cache.set(key, json.dumps(dump(value)), ttl_seconds)
    except CacheUnavailableError as exc:
        logger.warning("Cache write failed for %s: %s", key, exc)
    return value


def invalidate(cache: CacheStore, key: str) -> None:
    """Delete ``key``, logging instead of raising when the store is down."""
    try:
        cache.delete(key)
    except CacheUnavailableError as exc:
        logger.warning("Cache invalidation failed for %s: %s", key, exc)
