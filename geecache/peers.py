"""Messages and interfaces used to fetch values from peer nodes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class Request:
    """Asks a peer for ``key`` in the group named ``group``."""

    group: str = ""
    key: str = ""


@dataclass(frozen=True)
class Response:
    """A peer's answer: the value's bytes."""

    value: bytes = b""


@runtime_checkable
class PeerGetter(Protocol):
    """A remote node that can serve a group's values."""

    def get(self, request: Request) -> Response:
        """Fetch the value named by ``request``; raise on failure."""


@runtime_checkable
class PeerPicker(Protocol):
    """Locates the peer that owns a key."""

    def pick_peer(self, key: str) -> Optional[PeerGetter]:
        """Return the owning peer, or None if the key is owned locally."""