"""A thread-safe map."""

from __future__ import annotations

import threading
from typing import Any, Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class SyncMap(Generic[K, V]):
    """A dictionary safe for concurrent use.

    A missing key and a key stored with the value None are different things:
    lookups return ``(value, found)`` pairs.
    """

    def __init__(self) -> None:
        self._data: dict[K, V] = {}
        self._lock = threading.Lock()

    def load(self, key: K) -> tuple[V | None, bool]:
        """Return the value for ``key`` and whether it was present."""
        with self._lock:
            if key in self._data:
                return self._data[key], True
            return None, False

    def store(self, key: K, value: V) -> None:
        """Set the value for ``key``."""
        with self._lock:
            self._data[key] = value

    def load_or_store(self, key: K, value: V) -> tuple[V, bool]:
        """Return the existing value and True, or store ``value`` and return it with False."""
        with self._lock:
            if key in self._data:
                return self._data[key], True
            self._data[key] = value
            return value, False

    def load_or_store_func(self, key: K, fn: Callable[[], V]) -> tuple[V, bool]:
        """Like :meth:`load_or_store`, but only calls ``fn`` when the key is missing.

        Exceptions from ``fn`` propagate and nothing is stored.
        """
        value, found = self.load(key)
        if found:
            return value, True  # type: ignore[return-value]
        return self.load_or_store(key, fn())

    def load_and_delete(self, key: K) -> tuple[V | None, bool]:
        """Remove ``key``, returning its value and whether it was present."""
        with self._lock:
            if key in self._data:
                return self._data.pop(key), True
            return None, False

    def delete(self, key: K) -> None:
        """Remove ``key`` if present."""
        with self._lock:
            self._data.pop(key, None)

    def range(self, f: Callable[[K, V], Any]) -> None:
        """Call ``f(key, value)`` for each entry until it returns a false value."""
        with self._lock:
            items = list(self._data.items())
        for key, value in items:
            if not f(key, value):
                return