from __future__ import annotations

import json
import logging
import time
from threading import Lock
from typing import Any, Callable, Protocol, Sequence

import redis

from boardgame_list.core.config import Settings

_LOG = logging.getLogger("boardgame_list.list_cache")

Items = tuple[dict[str, Any], ...]


def _dump(items: Sequence[dict[str, Any]]) -> str:
    return json.dumps(list(items), separators=(",", ":"), ensure_ascii=False)


def _load(payload: str) -> Items:
    return tuple(json.loads(payload))


class ListCache(Protocol):
    """Memoizes the item snapshot of one materialized page.

    Entries are never invalidated by writes; a stale page is served until its TTL runs out.
    """

    def get(self, key: str) -> Items | None:
        ...

    def set(self, key: str, items: Sequence[dict[str, Any]], ttl_seconds: int) -> None:
        ...


class InMemoryListCache:
    """Process-local cache. Expired entries are dropped on read and swept from
    ``set`` at most once per ``scan_interval_seconds``.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, scan_interval_seconds: float = 60.0):
        self._data: dict[str, tuple[str, float]] = {}
        self._lock = Lock()
        self._clock = clock
        self._scan_interval = max(float(scan_interval_seconds), 0.0)
        self._next_scan_at = clock() + self._scan_interval

    def get(self, key: str) -> Items | None:
        now = self._clock()
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            payload, expires_at = entry
            if expires_at <= now:
                del self._data[key]
                return None
        return _load(payload)

    def set(self, key: str, items: Sequence[dict[str, Any]], ttl_seconds: int) -> None:
        # Serialized outside the lock; a failing dump leaves no entry.
        payload = _dump(items)
        now = self._clock()
        expires_at = now + max(int(ttl_seconds), 1)
        with self._lock:
            self._data[key] = (payload, expires_at)
            if now >= self._next_scan_at:
                self._next_scan_at = now + self._scan_interval
                self._sweep(now)

    def _sweep(self, now: float) -> int:
        stale = [key for key, (_, expires_at) in self._data.items() if expires_at <= now]
        for key in stale:
            del self._data[key]
        return len(stale)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            return self._sweep(now)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class RedisListCache:
    def __init__(self, client: redis.Redis):
        self.client = client

    def get(self, key: str) -> Items | None:
        payload = self.client.get(key)
        if payload is None:
            return None
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        return _load(payload)

    def set(self, key: str, items: Sequence[dict[str, Any]], ttl_seconds: int) -> None:
        self.client.set(key, _dump(items), ex=max(int(ttl_seconds), 1))


def build_list_cache(settings: Settings) -> ListCache:
    if not settings.REDIS_URL:
        return InMemoryListCache()
    try:
        client = redis.Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_timeout=0.4,
            socket_connect_timeout=0.4,
        )
        client.ping()
        return RedisListCache(client)
    except (redis.RedisError, ValueError):
        _LOG.warning("Redis list cache unavailable; fallback to in-memory cache")
        return InMemoryListCache()
