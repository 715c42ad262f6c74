"""Named cache namespaces that load missing values from peers or a source."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from geecache.byteview import ByteView, clone_bytes
from geecache.cache import Cache
from geecache.getter import Getter, GetterFunc
from geecache.peers import PeerPicker, Request
from geecache.singleflight import Batch

logger = logging.getLogger(__name__)

_groups_lock = threading.Lock()
_groups: dict[str, "Group"] = {}


class Group:
    """A cache namespace with its own data source and local cache."""

    def __init__(self, name: str, cache_bytes: int, getter: Getter) -> None:
        if getter is None:
            raise ValueError("nil getter")
        if not hasattr(getter, "get") and callable(getter):
            getter = GetterFunc(getter)
        self.name = name
        self.getter = getter
        self.local_cache = Cache(cache_bytes)
        self.peer_picker: Optional[PeerPicker] = None
        self._loader = Batch()

    def register_peer_picker(self, picker: PeerPicker) -> None:
        """Attach the picker used to find remote owners of keys."""
        if self.peer_picker is not None:
            raise RuntimeError("register_peer_picker called more than once")
        self.peer_picker = picker

    def get(self, key: str) -> ByteView:
        """Return the value for ``key`` from cache, a peer or the data source."""
        cached = self.local_cache.get(key)
        if cached is not None:
            logger.info("%s hit in local cache", key)
            return cached
        # Concurrent misses on the same key share one load.
        return self._loader.call(key, lambda: self._load(key))

    def _load(self, key: str) -> ByteView:
        if self.peer_picker is not None:
            try:
                value = self._get_from_peer(key)
            except Exception as exc:
                logger.info("peer lookup for %s failed: %s", key, exc)
            else:
                logger.info("%s hit in remote cache", key)
                return value
        logger.info("%s missed every cache, reading data source", key)
        return self._get_from_source(key)

    def _get_from_source(self, key: str) -> ByteView:
        value = ByteView(clone_bytes(self.getter.get(key)))
        self.local_cache.put(key, value)
        return value

    def _get_from_peer(self, key: str) -> ByteView:
        peer = self.peer_picker.pick_peer(key)
        if peer is None:
            raise LookupError(f"no peer for key: {key}")
        response = peer.get(Request(group=self.name, key=key))
        # Values owned by other nodes are not kept locally.
        return ByteView(clone_bytes(response.value))


def new_group(name: str, cache_bytes: int, getter: Getter) -> Group:
    """Create a group and register it under ``name``."""
    group = Group(name, cache_bytes, getter)
    with _groups_lock:
        _groups[name] = group
    return group


def get_group(name: str) -> Optional[Group]:
    """Return the group registered under ``name``, or None."""
    with _groups_lock:
        return _groups.get(name)