"""Tests for the configuration schema module."""

import pytest

from smart_dns.config.schema import (
    LoggingConfig,
    ResolverConfig,
    SmartDnsConfig,
    create_default_config,
)
from smart_dns.config.validators import (
    validate_port,
    validate_positive_int,
    validate_provider,
    validate_result_order,
    validate_server_address,
    validate_upstream_servers,
)


class TestValidationFunctions:
    """Test validation utility functions."""

    def test_validate_port(self):
        """Test port number validation."""
        assert validate_port(53) is True
        assert validate_port(65535) is True
        assert validate_port(0) is False
        assert validate_port(65536) is False

    def test_validate_positive_int(self):
        """Test positive integer validation."""
        assert validate_positive_int(1) is True
        assert validate_positive_int(0) is False
        assert validate_positive_int(True) is False
        assert validate_positive_int(1.0) is False

    def test_validate_server_address(self):
        """Test upstream server address validation."""
        assert validate_server_address("1.1.1.1") is True
        assert validate_server_address("1.1.1.1:5353") is True
        assert validate_server_address("2001:4860:4860::8888") is True
        assert validate_server_address("[2001:4860:4860::8888]:53") is True
        assert validate_server_address("dns.google") is False
        assert validate_server_address("1.1.1.1:99999") is False
        assert validate_server_address("") is False

    def test_validate_upstream_servers(self):
        """Test upstream server list validation."""
        assert validate_upstream_servers(["8.8.8.8", "8.8.4.4"]) is True
        assert validate_upstream_servers([]) is False
        assert validate_upstream_servers("8.8.8.8") is False

    def test_validate_provider(self):
        """Test provider name validation."""
        assert validate_provider("cloudflare") is True
        assert validate_provider("OpenDNS") is True
        assert validate_provider("quad9") is False

    def test_validate_result_order(self):
        """Test result order validation."""
        assert validate_result_order("ipv4first") is True
        assert validate_result_order("ipv6-first") is True
        assert validate_result_order("verbatim") is True
        assert validate_result_order("random") is False


class TestResolverConfig:
    """Test ResolverConfig validation."""

    def test_defaults(self):
        """Test default resolver configuration."""
        config = ResolverConfig()

        assert config.provider is None
        assert config.servers is None
        assert config.result_order == "ipv4first"
        assert config.ttl_ms == 3_600_000
        assert config.max_entries == 100

    def test_invalid_provider(self):
        with pytest.raises(ValueError, match="Unsupported DNS provider"):
            ResolverConfig(provider="quad9")

    def test_invalid_servers(self):
        with pytest.raises(ValueError, match="Invalid upstream servers"):
            ResolverConfig(servers=["dns.google"])

    def test_provider_and_servers_exclusive(self):
        with pytest.raises(ValueError, match="cannot both be set"):
            ResolverConfig(provider="google", servers=["9.9.9.9"])

    def test_invalid_result_order(self):
        with pytest.raises(ValueError, match="Invalid result order"):
            ResolverConfig(result_order="ipv5first")

    @pytest.mark.parametrize("field,value", [("ttl_ms", 0), ("max_entries", -5), ("timeout", 0)])
    def test_non_positive_values(self, field, value):
        with pytest.raises(ValueError):
            ResolverConfig(**{field: value})


class TestLoggingConfig:
    """Test LoggingConfig validation."""

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            LoggingConfig(level="LOUD")

    def test_invalid_format(self):
        with pytest.raises(ValueError, match="Invalid log format"):
            LoggingConfig(format="xml")

    def test_file_is_optional(self):
        assert LoggingConfig().file is None


def test_create_default_config():
    config = create_default_config()

    assert isinstance(config, SmartDnsConfig)
    assert isinstance(config.resolver, ResolverConfig)
    assert isinstance(config.logging, LoggingConfig)
