"""
Resolution Cache Module

Bounded hostname to address cache with LRU eviction, TTL expiry and
statistics.
"""

from .engine import DEFAULT_MAX_ENTRIES, DEFAULT_TTL_MS, ResolutionCache
from .entry import CacheEntry, normalize_hostname
from .stats import CacheStats

__all__ = [
    # Cache Engine
    "ResolutionCache",
    "DEFAULT_MAX_ENTRIES",
    "DEFAULT_TTL_MS",
    # Cache Entry Management
    "CacheEntry",
    "normalize_hostname",
    # Statistics
    "CacheStats",
]
