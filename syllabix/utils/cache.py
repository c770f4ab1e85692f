"""Bounded least-recently-used cache shared by the analysis components."""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class BoundedLRUCache(Generic[K, V]):
    """Thread-safe LRU mapping with a fixed capacity.

    Reads refresh recency; inserts past ``capacity`` evict the least recently
    used key. A capacity of zero disables storage entirely.
    """

    def __init__(self, capacity: int = 1000) -> None:
        self._capacity = max(0, int(capacity))
        self._lock = threading.RLock()
        self._entries: OrderedDict[K, V] = OrderedDict()
        self._hits = 0
        self._misses = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def _trim_cache(self) -> None:
        if self._capacity <= 0:
            self._entries.clear()
            return

        while len(self._entries) > self._capacity:
            self._entries.popitem(last=False)

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self._hits += 1
                return self._entries[key]
            self._misses += 1
            return None

    def put(self, key: K, value: V) -> None:
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            self._trim_cache()

    def get_or_compute(self, key: K, factory: Callable[[], V]) -> V:
        """Return the cached value for ``key``, computing it on a miss.

        ``factory`` runs outside the lock; when two threads race on the same
        key the first stored value wins.
        """

        cached = self.get(key)
        if cached is not None:
            return cached

        value = factory()

        with self._lock:
            existing = self._entries.get(key)
            if existing is not None:
                self._entries.move_to_end(key)
                return existing
            self._entries[key] = value
            self._trim_cache()
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "size": len(self._entries),
                "capacity": self._capacity,
                "hits": self._hits,
                "misses": self._misses,
            }


__all__ = ["BoundedLRUCache"]
