"""A byte-bounded least-recently-used cache."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol


class Value(Protocol):
    """Anything stored in the cache must report its size in bytes."""

    def size(self) -> int: ...


EvictionCallback = Callable[[str, Any], None]


def _key_size(key: str) -> int:
    return len(key.encode("utf-8"))


@dataclass
class Entry:
    """A key and its cached value."""

    key: str
    value: Any

    def size(self) -> int:
        """Bytes taken by the key and the value together."""
        return _key_size(self.key) + self.value.size()


class LRUCache:
    """Cache that evicts the least recently used entries beyond ``max_bytes``."""

    def __init__(self, max_bytes: int, on_evicted: Optional[EvictionCallback] = None) -> None:
        self.max_bytes = max_bytes
        self.nbytes = 0
        self.on_evicted = on_evicted
        # Oldest entries first, newest last.
        self._entries: OrderedDict[str, Entry] = OrderedDict()

    def get(self, key: str) -> Optional[Any]:
        """Return the value for ``key`` and mark it as recently used, or None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        self._entries.move_to_end(key)
        return entry.value

    def put(self, key: str, value: Any) -> None:
        """Insert or replace ``key``, evicting old entries while over capacity."""
        entry = self._entries.get(key)
        if entry is not None:
            self.nbytes += value.size() - entry.value.size()
            entry.value = value
            self._entries.move_to_end(key)
        else:
            entry = Entry(key, value)
            self._entries[key] = entry
            self.nbytes += entry.size()
        while self.nbytes > self.max_bytes and self._entries:
            self._evict()

    def _evict(self) -> None:
        key, entry = self._entries.popitem(last=False)
        self.nbytes -= entry.size()
        if self.on_evicted is not None:
            self.on_evicted(key, entry.value)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)