"""A small distributed in-memory cache with LRU eviction, consistent hashing, request coalescing and an HTTP peer server."""

__version__ = "0.1.0"