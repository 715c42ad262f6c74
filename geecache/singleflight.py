"""Collapse concurrent calls for the same key into one execution."""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional


class _Call:
    __slots__ = ("done", "value", "error")

    def __init__(self) -> None:
        self.done = threading.Event()
        self.value: Any = None
        self.error: Optional[BaseException] = None


class Batch:
    """Runs ``fn`` once per key for all callers that overlap in time."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: dict[str, _Call] = {}
        self._closed = False

    def call(self, key: str, fn: Callable[[], Any]) -> Any:
        """Return the result of ``fn``, shared with concurrent callers of ``key``.

        An exception raised by ``fn`` is raised to every caller that shared it.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("call on closed Batch")
            pending = self._pending.get(key)
            if pending is None:
                pending = _Call()
                self._pending[key] = pending
                leader = True
            else:
                leader = False

        if not leader:
            pending.done.wait()
        else:
            try:
                pending.value = fn()
            except BaseException as exc:
                pending.error = exc
            finally:
                with self._lock:
                    del self._pending[key]
                pending.done.set()

        if pending.error is not None:
            raise pending.error
        return pending.value

    def close(self) -> None:
        """Refuse any further calls."""
        with self._lock:
            self._closed = True

    def __enter__(self) -> "Batch":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()