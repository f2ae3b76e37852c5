"""
Configuration Validators

This module provides validation functions for resolver configuration parameters.
"""

import ipaddress
from pathlib import Path
from typing import List

from ..errors import SmartDnsError
from ..providers import DnsProvider, ResultOrder


def validate_file_path(path: str) -> bool:
    """Validate file path format."""
    if not path:
        return False

    try:
        Path(path)
        return True
    except (TypeError, ValueError):
        return False


def validate_log_level(level: str) -> bool:
    """Validate log level."""
    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    return isinstance(level, str) and level.upper() in valid_levels


def validate_positive_float(value: float) -> bool:
    """Validate positive float."""
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and value > 0
    )


def validate_positive_int(value: int) -> bool:
    """Validate positive integer."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_port(port: int) -> bool:
    """Validate port number."""
    return isinstance(port, int) and 1 <= port <= 65535


def validate_server_address(address: str) -> bool:
    """Validate DNS server address format (IP, IP:port or [IPv6]:port)."""
    if not address or not isinstance(address, str):
        return False

    try:
        ipaddress.ip_address(address)
        return True
    except ValueError:
        pass

    if address.startswith("["):
        host, _, port_str = address[1:].partition("]:")
    else:
        host, _, port_str = address.rpartition(":")

    try:
        ipaddress.ip_address(host)
        return validate_port(int(port_str))
    except ValueError:
        return False


def validate_upstream_servers(servers: List[str]) -> bool:
    """Validate list of upstream servers."""
    if not isinstance(servers, list) or not servers:
        return False

    return all(validate_server_address(server) for server in servers)


def validate_provider(provider: str) -> bool:
    """Validate provider name against the built-in providers."""
    try:
        DnsProvider.parse(provider)
        return True
    except SmartDnsError:
        return False


def validate_result_order(order: str) -> bool:
    """Validate address family result order."""
    try:
        ResultOrder.parse(order)
        return True
    except SmartDnsError:
        return False
