"""Loaders that fetch data for a key when the cache misses."""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class Getter(Protocol):
    """Loads the bytes for a key from the data source."""

    def get(self, key: str) -> bytes:
        """Return the data for ``key``; raise if it cannot be loaded."""


class GetterFunc:
    """Adapts a plain function to the Getter interface."""

    def __init__(self, fn: Callable[[str], bytes]) -> None:
        self.fn = fn

    def get(self, key: str) -> bytes:
        """Call the wrapped function with ``key``."""
        return self.fn(key)

    def __call__(self, key: str) -> bytes:
        return self.fn(key)