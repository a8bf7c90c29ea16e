"""
Generic LRU cache implementation with TTL support.

This module provides a thread-safe LRU (Least Recently Used) cache with
TTL (Time To Live) expiry and hit/miss accounting. The route cache keys it by
``(algorithm, start, goal, metric)`` tuples, so keys may be any hashable value.

Features:
- LRU eviction policy
- TTL-based expiration
- Thread-safe operations
- Performance metrics
"""

from collections import OrderedDict
from threading import Lock
from time import monotonic
from typing import Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

T = TypeVar("T")  # Type of cached values


class LRUCache(Generic[T]):
    """
    Thread-safe LRU cache with TTL support.

    Entries are evicted least-recently-used first once ``max_size`` is
    exceeded, and are treated as absent once older than ``ttl`` seconds.
    A ``max_size`` of 0 disables storage entirely.

    Attributes:
        max_size: Maximum number of entries to store
        ttl: Time-to-live in seconds
    """

    def __init__(
        self,
        max_size: int,
        ttl: float,
        clock: Callable[[], float] = monotonic,
    ):
        """Initialize cache with given parameters."""
        if max_size < 0:
            raise ValueError("max_size must be non-negative")
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self._entries: OrderedDict[Hashable, Tuple[float, T]] = OrderedDict()
        self._lock = Lock()
        self._clock = clock
        self.max_size = max_size
        self.ttl = ttl

        # Metrics
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def enabled(self) -> bool:
        return self.max_size > 0

    def get(self, key: Hashable) -> Optional[T]:
        """
        Get value from cache.

        Args:
            key: Cache key to look up

        Returns:
            Cached value if found and not expired, None otherwise
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                self._misses += 1
                return None

            self._entries.move_to_end(key)
            self._hits += 1
            return value

    def put(self, key: Hashable, value: T) -> None:
        """
        Store value in cache.

        Args:
            key: Cache key to store value under
            value: Value to cache
        """
        if not self.enabled:
            return
        with self._lock:
            self._entries[key] = (self._clock() + self.ttl, value)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)
                self._evictions += 1

    def remove(self, key: Hashable) -> None:
        """Remove an item from the cache if present."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every entry; metrics are kept."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and self._clock() < entry[0]

    def get_metrics(self) -> Dict[str, float]:
        """
        Get cache performance metrics.

        Returns:
            Dictionary containing:
            - hits: Number of cache hits
            - misses: Number of cache misses
            - evictions: Number of LRU evictions
            - size: Current cache size
            - hit_rate: Cache hit rate
        """
        with self._lock:
            total = self._hits + self._misses
            return {
                "hits": float(self._hits),
                "misses": float(self._misses),
                "evictions": float(self._evictions),
                "size": float(len(self._entries)),
                "hit_rate": float(self._hits) / total if total > 0 else 0.0,
            }
