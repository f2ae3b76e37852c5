"""
Smart DNS

Cached, single-flight hostname resolution in front of a configurable
upstream DNS provider, with URL rewriting.
"""

from .cache import CacheStats, ResolutionCache
from .config import ConfigLoader, SmartDnsConfig
from .core import DNSLookup, DnsPythonLookup, ResolutionResult, SmartResolver
from .errors import (
    ConfigurationError,
    DNSLookupError,
    ProviderError,
    ResolverError,
    SmartDnsError,
)
from .providers import PROVIDER_SERVERS, DnsProvider, ProviderConfiguration, ResultOrder

__version__ = "1.0.0"

__all__ = [
    "SmartResolver",
    "ResolutionResult",
    "ResolutionCache",
    "CacheStats",
    "DNSLookup",
    "DnsPythonLookup",
    "DnsProvider",
    "ResultOrder",
    "ProviderConfiguration",
    "PROVIDER_SERVERS",
    "ConfigLoader",
    "SmartDnsConfig",
    "SmartDnsError",
    "ProviderError",
    "ResolverError",
    "ConfigurationError",
    "DNSLookupError",
]
