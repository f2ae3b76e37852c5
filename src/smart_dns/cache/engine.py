"""
Resolution Cache Engine

Bounded hostname to address cache with LRU eviction and per-entry TTL.
Entries older than the TTL are treated as absent even before they are
physically purged.
"""

import logging
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, List, Optional

from .entry import CacheEntry, normalize_hostname
from .stats import CacheStats

DEFAULT_MAX_ENTRIES = 100
DEFAULT_TTL_MS = 3_600_000


class ResolutionCache:
    """LRU + TTL cache mapping hostnames to resolved addresses"""

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        ttl_ms: int = DEFAULT_TTL_MS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize resolution cache

        Args:
            max_entries: Maximum number of live entries
            ttl_ms: Time-to-live for each entry in milliseconds
            clock: Monotonic clock returning seconds
        """
        if not isinstance(max_entries, int) or max_entries < 1:
            raise ValueError(f"Max entries must be a positive integer: {max_entries}")

        if not isinstance(ttl_ms, (int, float)) or ttl_ms <= 0:
            raise ValueError(f"TTL must be positive: {ttl_ms}")

        self.max_entries = max_entries
        self.ttl_ms = ttl_ms
        self._ttl_seconds = ttl_ms / 1000.0
        self._clock = clock

        # OrderedDict keeps recency order, least recently used first
        self._cache: "OrderedDict[str, CacheEntry]" = OrderedDict()

        self.stats = CacheStats()
        self.logger = logging.getLogger(__name__)

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, hostname: str) -> bool:
        return self.has(hostname)

    def _expire(self, key: str) -> None:
        del self._cache[key]
        self.stats.record_eviction("ttl")

    def get(self, hostname: str) -> Optional[str]:
        """Get cached address for hostname, bumping its recency"""
        key = normalize_hostname(hostname)
        entry = self._cache.get(key)

        if entry is None:
            self.stats.cache_misses += 1
            return None

        now = self._clock()
        if entry.is_expired(now):
            self._expire(key)
            self.stats.cache_misses += 1
            return None

        self._cache.move_to_end(key)
        entry.access(now)
        self.stats.cache_hits += 1

        return entry.address

    def has(self, hostname: str) -> bool:
        """Check for a live entry without touching its recency"""
        key = normalize_hostname(hostname)
        entry = self._cache.get(key)

        if entry is None:
            return False

        if entry.is_expired(self._clock()):
            self._expire(key)
            return False

        return True

    def set(self, hostname: str, address: str) -> None:
        """Insert or overwrite an entry, evicting the LRU entry when full"""
        key = normalize_hostname(hostname)

        if key in self._cache:
            del self._cache[key]

        self._cache[key] = CacheEntry(
            hostname=key,
            address=address,
            created_at=self._clock(),
            ttl=self._ttl_seconds,
        )
        self.stats.sets += 1

        while len(self._cache) > self.max_entries:
            evicted_key, _ = self._cache.popitem(last=False)
            self.stats.record_eviction("lru")
            self.logger.debug(f"Evicted least recently used entry {evicted_key}")

    def delete(self, hostname: str) -> bool:
        """Remove an entry, returning whether it existed"""
        key = normalize_hostname(hostname)
        if key not in self._cache:
            return False

        del self._cache[key]
        self.stats.record_eviction("manual")
        return True

    def clear(self) -> int:
        """Flush entire cache"""
        count = len(self._cache)
        self._cache.clear()
        self.logger.info(f"Flushed {count} cache entries")
        return count

    def purge_expired(self) -> int:
        """Remove expired entries from cache"""
        now = self._clock()
        expired_keys = [
            key for key, entry in self._cache.items() if entry.is_expired(now)
        ]

        for key in expired_keys:
            self._expire(key)

        if expired_keys:
            self.logger.debug(f"Cleaned up {len(expired_keys)} expired cache entries")

        return len(expired_keys)

    def keys(self) -> List[str]:
        """Hostnames currently held, least recently used first"""
        return list(self._cache.keys())

    def get_cache_info(self) -> Dict[str, Any]:
        """Get comprehensive cache information"""
        info = self.stats.to_dict()
        info.update(
            {
                "entries": len(self._cache),
                "max_entries": self.max_entries,
                "ttl_ms": self.ttl_ms,
            }
        )
        return info
