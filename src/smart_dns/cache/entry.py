"""
Resolution Cache Entry

Single hostname to address mapping with creation time and access tracking.
"""

from dataclasses import dataclass


@dataclass
class CacheEntry:
    """Cached address for a hostname"""

    hostname: str
    address: str
    created_at: float
    ttl: float  # seconds
    access_count: int = 0
    last_accessed: float = 0.0

    def __post_init__(self) -> None:
        if self.last_accessed == 0.0:
            self.last_accessed = self.created_at

    def is_expired(self, now: float) -> bool:
        """Check if cache entry has expired"""
        return now > (self.created_at + self.ttl)

    def remaining_ttl(self, now: float) -> float:
        """Get remaining TTL in seconds"""
        return max(0.0, self.ttl - (now - self.created_at))

    def access(self, now: float) -> None:
        """Record an access to this cache entry"""
        self.access_count += 1
        self.last_accessed = now


def normalize_hostname(hostname: str) -> str:
    """Generate the cache key for a hostname"""
    return hostname.rstrip(".").lower()
