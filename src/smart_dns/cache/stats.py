"""
Resolution Cache Statistics

Hit/miss and eviction counters for the resolution cache.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class CacheStats:
    """Cache statistics data structure"""

    # Hit/Miss Statistics
    cache_hits: int = 0
    cache_misses: int = 0
    sets: int = 0

    # Eviction Statistics
    lru_evictions: int = 0
    ttl_expirations: int = 0
    manual_removals: int = 0

    start_time: float = field(default_factory=time.time)

    @property
    def total_requests(self) -> int:
        return self.cache_hits + self.cache_misses

    @property
    def total_evictions(self) -> int:
        return self.lru_evictions + self.ttl_expirations + self.manual_removals

    def hit_ratio(self) -> float:
        """Calculate cache hit ratio"""
        if self.total_requests == 0:
            return 0.0
        return self.cache_hits / self.total_requests

    def miss_ratio(self) -> float:
        """Calculate cache miss ratio"""
        if self.total_requests == 0:
            return 0.0
        return self.cache_misses / self.total_requests

    def record_eviction(self, eviction_type: str) -> None:
        if eviction_type == "lru":
            self.lru_evictions += 1
        elif eviction_type == "ttl":
            self.ttl_expirations += 1
        else:
            self.manual_removals += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_requests": self.total_requests,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "hit_ratio": round(self.hit_ratio(), 4),
            "miss_ratio": round(self.miss_ratio(), 4),
            "sets": self.sets,
            "total_evictions": self.total_evictions,
            "lru_evictions": self.lru_evictions,
            "ttl_expirations": self.ttl_expirations,
            "manual_removals": self.manual_removals,
            "uptime_seconds": round(time.time() - self.start_time, 3),
        }
