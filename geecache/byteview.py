"""Immutable views over byte data held in the cache."""

from __future__ import annotations

from dataclasses import dataclass


def clone_bytes(b: bytes | bytearray | memoryview) -> bytes:
    """Return an independent copy of ``b`` as immutable bytes."""
    return bytes(b)


@dataclass(frozen=True)
class ByteView:
    """An immutable view of a sequence of bytes."""

    b: bytes = b""

    def __post_init__(self) -> None:
        if not isinstance(self.b, bytes):
            object.__setattr__(self, "b", clone_bytes(self.b))

    def size(self) -> int:
        """Number of bytes in the view."""
        return len(self.b)

    def byte_slice(self) -> bytes:
        """Return a copy of the data."""
        return clone_bytes(self.b)

    def __str__(self) -> str:
        return self.b.decode("utf-8", errors="replace")