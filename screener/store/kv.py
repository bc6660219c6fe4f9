"""
Key-value store adapter
-----------------------
The screening flow only needs three capabilities from storage: get, put with a
TTL, and delete. `RedisKV` provides them on top of redis-py; `MemoryKV` is an
in-process equivalent with the same TTL behaviour.

Callers go through `safe_get` / `safe_put` / `safe_delete`, which contain every
backend failure: the error is logged and the operation degrades to "absent"
(get) or a no-op (put/delete). Nothing here raises into the conversation logic.
"""
from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Optional, Tuple

from screener.observability.logging import log
from screener.settings import settings
from screener.store.redis_conn import get_redis


class KVStore:
    """Narrow storage interface used by the session store and rate limiter."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def put(self, key: str, value: str, ttl_sec: Optional[int] = None) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class RedisKV(KVStore):
    def __init__(self, redis=None):
        self._redis = redis

    @property
    def redis(self):
        if self._redis is None:
            self._redis = get_redis()
        return self._redis

    def get(self, key: str) -> Optional[str]:
        return self.redis.get(key)

    def put(self, key: str, value: str, ttl_sec: Optional[int] = None) -> None:
        if ttl_sec:
            self.redis.set(key, value, ex=int(ttl_sec))
        else:
            self.redis.set(key, value)

    def delete(self, key: str) -> None:
        self.redis.delete(key)


class MemoryKV(KVStore):
    """Thread-safe dict store with per-key expiry (seconds, driven by `clock`)."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            item = self._data.get(key)
            if item is None:
                return None
            value, expires_at = item
            if expires_at is not None and self._clock() >= expires_at:
                del self._data[key]
                return None
            return value

    def put(self, key: str, value: str, ttl_sec: Optional[int] = None) -> None:
        expires_at = self._clock() + ttl_sec if ttl_sec else None
        with self._lock:
            self._data[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def ttl(self, key: str) -> Optional[float]:
        """Seconds left before expiry (None if missing or persistent)."""
        with self._lock:
            item = self._data.get(key)
        if item is None or item[1] is None:
            return None
        return item[1] - self._clock()


_default_store: Optional[KVStore] = None


def get_store() -> KVStore:
    global _default_store
    if _default_store is None:
        if settings.STORE_BACKEND == "memory":
            _default_store = MemoryKV()
        else:
            _default_store = RedisKV()
    return _default_store


def safe_get(store: KVStore, key: str) -> Optional[str]:
    try:
        return store.get(key)
    except Exception as e:
        log(event="kv_get_failed", key=key, errorType=type(e).__name__, error=str(e)[:200])
        return None


def safe_put(store: KVStore, key: str, value: str, ttl_sec: Optional[int] = None) -> None:
    try:
        store.put(key, value, ttl_sec)
    except Exception as e:
        log(event="kv_put_failed", key=key, errorType=type(e).__name__, error=str(e)[:200])


def safe_delete(store: KVStore, key: str) -> None:
    try:
        store.delete(key)
    except Exception as e:
        log(event="kv_delete_failed", key=key, errorType=type(e).__name__, error=str(e)[:200])
