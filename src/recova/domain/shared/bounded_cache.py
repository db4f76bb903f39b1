"""Fixed-capacity, thread-safe LRU cache.

All reads and writes go through a single lock, so eviction order and
thread-safety can be audited in one place. Callers that race on the same
key may compute a value twice; the last ``put`` wins.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Callable, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MISSING = object()


class BoundedLRUCache(Generic[K, V]):
    """Least-recently-used cache holding at most ``capacity`` entries."""

    def __init__(self, capacity: int):
        if capacity < 1:
            msg = f"Cache capacity must be at least 1, got {capacity}"
            raise ValueError(msg)
        self._capacity = capacity
        self._entries: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        with self._lock:
            value = self._entries.get(key, _MISSING)
            if value is _MISSING:
                return default
            self._entries.move_to_end(key)
            return value  # type: ignore[return-value]

    def put(self, key: K, value: V) -> None:
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self._capacity:
                self._entries.popitem(last=False)

    def get_or_compute(self, key: K, factory: Callable[[K], V]) -> V:
        """Return the cached value, computing and storing it on a miss.

        The factory runs outside the lock; it must be a pure function of
        the key.
        """
        with self._lock:
            value = self._entries.get(key, _MISSING)
            if value is not _MISSING:
                self._entries.move_to_end(key)
                return value  # type: ignore[return-value]

        computed = factory(key)
        self.put(key, computed)
        return computed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
