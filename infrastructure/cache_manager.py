"""
infrastructure/cache_manager.py

Central management of the engine's named caches.

Features:
- Singleton CacheManager shared by all components
- Named LRU caches
- Thread-safe operations with RLock protection
- Statistics per cache (hits, misses, sets, hit rate)

The only cache the engine registers itself is the per-base prime list of
the number theory component (PRIME_CACHE_NAME), keyed by base.

Usage:
    from infrastructure.cache_manager import get_cache_manager

    cache_mgr = get_cache_manager()
    cache_mgr.ensure_cache("prime_numbers", maxsize=62)

    cache_mgr.set("prime_numbers", 10, primes)
    primes = cache_mgr.get("prime_numbers", 10)

    stats = cache_mgr.get_stats("prime_numbers")
    print(f"Hit rate: {stats['hit_rate']:.2%}")

Thread Safety:
- All public methods hold the instance RLock
- Reentrant lock allows nested calls (ensure_cache() registering)
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Hashable, Optional

from cachetools import LRUCache

from component_2_logging_config import get_logger

logger = get_logger(__name__)


# ============================================================================
# Data Structures
# ============================================================================


@dataclass
class CacheStatistics:
    """Statistics for a single cache."""

    cache_name: str
    hits: int = 0
    misses: int = 0
    sets: int = 0
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Cache hit rate (0.0-1.0)."""
        if self.total_requests == 0:
            return 0.0
        return self.hits / self.total_requests


# ============================================================================
# Cache Manager (Singleton)
# ============================================================================


class CacheManager:
    """
    Registry of named cachetools LRU caches.

    Attributes:
        caches: cache_name -> LRUCache
        statistics: cache_name -> CacheStatistics
    """

    _instance: Optional["CacheManager"] = None
    _lock = threading.RLock()  # Class-level lock for singleton

    def __new__(cls) -> "CacheManager":
        if cls._instance is None:
            with cls._lock:
                # Double-checked locking pattern
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.caches: Dict[str, LRUCache] = {}
        self.statistics: Dict[str, CacheStatistics] = {}
        self._cache_lock = threading.RLock()
        self._initialized = True

        logger.info("CacheManager initialized (singleton)")

    def register_cache(self, name: str, maxsize: int) -> None:
        """
        Register a named LRU cache.

        Args:
            name: Unique cache identifier
            maxsize: Maximum number of entries

        Raises:
            ValueError: If the cache exists or maxsize is not positive
        """
        if maxsize <= 0:
            raise ValueError(f"maxsize must be positive, got {maxsize}")

        with self._cache_lock:
            if name in self.caches:
                raise ValueError(f"Cache '{name}' already registered")

            self.caches[name] = LRUCache(maxsize=maxsize)
            self.statistics[name] = CacheStatistics(cache_name=name)

            logger.info("Cache registered", extra={"cache": name, "maxsize": maxsize})

    def ensure_cache(self, name: str, maxsize: int) -> None:
        """Registers the cache unless a cache of that name exists."""
        with self._cache_lock:
            if name not in self.caches:
                self.register_cache(name, maxsize)

    def _require(self, cache_name: str) -> None:
        if cache_name not in self.caches:
            raise ValueError(f"Cache '{cache_name}' not registered")

    def get(self, cache_name: str, key: Hashable) -> Optional[Any]:
        """
        Returns the cached value, or None if absent.

        Raises:
            ValueError: If the cache is not registered
        """
        with self._cache_lock:
            self._require(cache_name)
            cache = self.caches[cache_name]
            stats = self.statistics[cache_name]

            if key in cache:
                stats.hits += 1
                logger.debug("Cache HIT", extra={"cache": cache_name, "key": key})
                return cache[key]

            stats.misses += 1
            logger.debug("Cache MISS", extra={"cache": cache_name, "key": key})
            return None

    def set(self, cache_name: str, key: Hashable, value: Any) -> None:
        """
        Stores a value.

        Raises:
            ValueError: If the cache is not registered
        """
        with self._cache_lock:
            self._require(cache_name)
            self.caches[cache_name][key] = value
            self.statistics[cache_name].sets += 1

    def get_stats(self, cache_name: str) -> Dict[str, Any]:
        """
        Statistics of one cache.

        Keys: cache_name, hits, misses, sets, total_requests, hit_rate, size,
        maxsize, created_at
        """
        with self._cache_lock:
            self._require(cache_name)
            cache = self.caches[cache_name]
            stats = self.statistics[cache_name]
            return {
                "cache_name": cache_name,
                "hits": stats.hits,
                "misses": stats.misses,
                "sets": stats.sets,
                "total_requests": stats.total_requests,
                "hit_rate": stats.hit_rate,
                "size": len(cache),
                "maxsize": cache.maxsize,
                "created_at": stats.created_at.isoformat(),
            }


# ============================================================================
# Module-level Functions
# ============================================================================

_cache_manager_instance: Optional[CacheManager] = None
_instance_lock = threading.RLock()


def get_cache_manager() -> CacheManager:
    """
    Get the global CacheManager singleton instance.

    Thread-safe lazy initialization with double-checked locking.
    """
    global _cache_manager_instance

    if _cache_manager_instance is None:
        with _instance_lock:
            if _cache_manager_instance is None:
                _cache_manager_instance = CacheManager()

    return _cache_manager_instance


def reset_cache_manager() -> None:
    """
    Reset the global CacheManager singleton.

    WARNING: Only use for testing! This clears all registered caches.
    """
    global _cache_manager_instance

    with _instance_lock:
        if _cache_manager_instance is not None:
            with _cache_manager_instance._cache_lock:
                _cache_manager_instance.caches.clear()
                _cache_manager_instance.statistics.clear()

            _cache_manager_instance = None
            logger.warning("CacheManager singleton reset (should only be used in tests)")
