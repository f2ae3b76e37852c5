"""
Smart DNS Configuration Schema

Configuration schema for the resolver and its logging.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..cache.engine import DEFAULT_MAX_ENTRIES, DEFAULT_TTL_MS
from .validators import (
    validate_file_path,
    validate_log_level,
    validate_positive_float,
    validate_positive_int,
    validate_provider,
    validate_result_order,
    validate_upstream_servers,
)


@dataclass
class ResolverConfig:
    """Resolver configuration section."""

    provider: Optional[str] = None
    servers: Optional[List[str]] = None
    result_order: str = "ipv4first"
    ttl_ms: int = DEFAULT_TTL_MS
    max_entries: int = DEFAULT_MAX_ENTRIES
    timeout: float = 5.0

    def __post_init__(self) -> None:
        """Validate resolver configuration."""
        if self.provider is not None and not validate_provider(self.provider):
            raise ValueError(f"Unsupported DNS provider: {self.provider}")

        if self.servers is not None and not validate_upstream_servers(self.servers):
            raise ValueError(f"Invalid upstream servers: {self.servers}")

        if self.provider is not None and self.servers:
            raise ValueError("Provider and servers cannot both be set")

        if not validate_result_order(self.result_order):
            raise ValueError(f"Invalid result order: {self.result_order}")

        if not validate_positive_int(self.ttl_ms):
            raise ValueError(f"TTL must be a positive number of milliseconds: {self.ttl_ms}")

        if not validate_positive_int(self.max_entries):
            raise ValueError(f"Max entries must be positive: {self.max_entries}")

        if not validate_positive_float(self.timeout):
            raise ValueError(f"Lookup timeout must be positive: {self.timeout}")


@dataclass
class LoggingConfig:
    """Logging configuration section."""

    level: str = "INFO"
    format: str = "console"
    file: Optional[str] = None
    max_size_mb: int = 10
    backup_count: int = 3

    def __post_init__(self) -> None:
        """Validate logging configuration."""
        if not validate_log_level(self.level):
            raise ValueError(f"Invalid log level: {self.level}")

        if self.format not in ["console", "json"]:
            raise ValueError(f"Invalid log format: {self.format}")

        if self.file is not None and not validate_file_path(self.file):
            raise ValueError(f"Invalid log file path: {self.file}")

        if not validate_positive_int(self.max_size_mb):
            raise ValueError(f"Max size MB must be positive: {self.max_size_mb}")

        if not validate_positive_int(self.backup_count):
            raise ValueError(f"Backup count must be positive: {self.backup_count}")


@dataclass
class SmartDnsConfig:
    """Main configuration."""

    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def create_default_config() -> SmartDnsConfig:
    """Create a default configuration instance."""
    return SmartDnsConfig()
