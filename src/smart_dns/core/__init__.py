"""
Smart DNS Core Module

This module exports the resolver and the DNS lookup capability.
"""

from .lookup import DNSLookup, DnsPythonLookup, parse_server_address
from .resolver import (
    ResolutionResult,
    SmartResolver,
    is_ip_address,
    replace_hostname,
)

__all__ = [
    # Resolver
    "SmartResolver",
    "ResolutionResult",
    # Lookup capability
    "DNSLookup",
    "DnsPythonLookup",
    # Helper functions
    "parse_server_address",
    "is_ip_address",
    "replace_hostname",
]
