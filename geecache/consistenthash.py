"""Consistent hashing ring with virtual nodes."""

from __future__ import annotations

import bisect
import threading
import zlib
from typing import Callable, Optional

Hash = Callable[[bytes], int]
NodeID = str


class NodeMap:
    """Maps keys to nodes on a hash ring with ``replicas`` virtual nodes each."""

    def __init__(self, replicas: int, hasher: Optional[Hash] = None) -> None:
        self.replicas = replicas
        self.hasher: Hash = hasher if hasher is not None else zlib.crc32
        self._ring: list[int] = []
        self._node_map: dict[int, NodeID] = {}
        self._lock = threading.Lock()

    def _virtual_hashes(self, node: NodeID):
        for i in range(self.replicas):
            yield self.hasher(f"{node}-{i}".encode("utf-8"))

    def add_nodes(self, *nodes: NodeID) -> None:
        """Add nodes and their virtual replicas to the ring."""
        if not nodes:
            return
        with self._lock:
            for node in nodes:
                for h in self._virtual_hashes(node):
                    self._node_map[h] = node
                    self._ring.append(h)
            self._ring.sort()

    def del_node(self, node: NodeID) -> None:
        """Remove a node and all of its virtual replicas."""
        with self._lock:
            virtual = set(self._virtual_hashes(node))
            for h in virtual:
                self._node_map.pop(h, None)
            self._ring = [h for h in self._ring if h not in virtual]

    def get_node(self, key: str) -> Optional[NodeID]:
        """Return the node closest to ``key`` on the ring, or None if empty."""
        with self._lock:
            if not self._ring:
                return None
            h = self.hasher(key.encode("utf-8"))
            idx = bisect.bisect_left(self._ring, h) % len(self._ring)
            return self._node_map[self._ring[idx]]