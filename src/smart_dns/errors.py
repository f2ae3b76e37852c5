"""
Smart DNS Errors

Exception hierarchy shared by the cache, resolver and configuration layers.
"""

from typing import Optional


class SmartDnsError(Exception):
    """Base class for all smart DNS errors"""


class ProviderError(SmartDnsError):
    """Raised when an unsupported DNS provider is requested"""


class ResolverError(SmartDnsError):
    """Raised when a URL cannot be resolved because the input is invalid"""


class ConfigurationError(SmartDnsError):
    """Raised when resolver configuration is invalid or conflicting"""


class DNSLookupError(SmartDnsError):
    """Raised when the upstream DNS lookup fails or returns no addresses"""

    def __init__(self, hostname: str, cause: Optional[BaseException] = None):
        self.hostname = hostname
        self.cause = cause

        if cause is None:
            message = f"No IPv4 addresses found for {hostname}"
        else:
            message = f"DNS lookup failed for {hostname}: {type(cause).__name__}: {cause}"

        super().__init__(message)
