"""Memoization table for registry filter queries."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class QueryCache(Generic[T]):
    """Thread-safe key -> tuple mapping that is filled lazily and never evicted.

    Keys are namespaced so that a region query and a country query with the same
    search term do not share an entry.
    """

    def __init__(self) -> None:
        self._data: dict[tuple[str, str], tuple[T, ...]] = {}
        self._lock = threading.Lock()

    def get_or_compute(
        self, namespace: str, key: str, compute: Callable[[], tuple[T, ...]]
    ) -> tuple[T, ...]:
        """Return the cached tuple for ``(namespace, key)``, computing it on first use."""
        cache_key = (namespace, key)
        with self._lock:
            cached = self._data.get(cache_key)
            if cached is None:
                cached = tuple(compute())
                self._data[cache_key] = cached
            return cached

    def __contains__(self, item: object) -> bool:
        with self._lock:
            return item in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
