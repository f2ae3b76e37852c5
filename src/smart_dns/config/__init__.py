"""
Smart DNS Configuration Module
"""

from .loader import ConfigLoader, load_config_from_file
from .schema import LoggingConfig, ResolverConfig, SmartDnsConfig, create_default_config

__all__ = [
    "ConfigLoader",
    "load_config_from_file",
    "SmartDnsConfig",
    "ResolverConfig",
    "LoggingConfig",
    "create_default_config",
]
