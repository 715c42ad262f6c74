"""Thread-safe, byte-bounded local cache of ByteView values."""

from __future__ import annotations

import threading
from typing import Optional

from geecache.byteview import ByteView
from geecache.lru import LRUCache


class Cache:
    """Local cache holding at most ``cache_bytes`` bytes of keys and values."""

    def __init__(self, cache_bytes: int) -> None:
        self.cache_bytes = cache_bytes
        self._lru: Optional[LRUCache] = None
        self._lock = threading.Lock()

    def _store(self) -> LRUCache:
        # Created on first use.
        if self._lru is None:
            self._lru = LRUCache(self.cache_bytes, None)
        return self._lru

    def get(self, key: str) -> Optional[ByteView]:
        """Return the cached view for ``key``, or None on a miss."""
        with self._lock:
            return self._store().get(key)

    def put(self, key: str, value: ByteView) -> None:
        """Store ``value`` under ``key``."""
        with self._lock:
            self._store().put(key, value)