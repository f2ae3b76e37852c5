"""
DNS Providers and Provider Configuration

Named upstream presets, address-family result ordering and the immutable
configuration object handed to every lookup.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, Tuple, Union

from .errors import ConfigurationError, ProviderError


class DnsProvider(Enum):
    """Built-in DNS providers"""

    CLOUDFLARE = "cloudflare"
    GOOGLE = "google"
    OPENDNS = "opendns"

    @classmethod
    def parse(cls, value: Union["DnsProvider", str]) -> "DnsProvider":
        """Accept an enum member or a case-insensitive provider name"""
        if isinstance(value, cls):
            return value

        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass

        raise ProviderError(
            f"Unsupported DNS provider: {value}. You can use the "
            f'"set_servers" method to manually set the DNS server IP addresses.'
        )

    @property
    def servers(self) -> Tuple[str, ...]:
        return PROVIDER_SERVERS[self]


PROVIDER_SERVERS: Dict[DnsProvider, Tuple[str, ...]] = {
    DnsProvider.CLOUDFLARE: ("1.1.1.1", "1.0.0.1"),
    DnsProvider.GOOGLE: ("8.8.8.8", "8.8.4.4"),
    DnsProvider.OPENDNS: ("208.67.222.222", "208.67.220.220"),
}


class ResultOrder(Enum):
    """Address family preference for lookup results"""

    IPV4_FIRST = "ipv4first"
    IPV6_FIRST = "ipv6first"
    VERBATIM = "verbatim"

    @classmethod
    def parse(cls, value: Union["ResultOrder", str]) -> "ResultOrder":
        """Accept an enum member, "ipv4first" or "ipv4-first" spellings"""
        if isinstance(value, cls):
            return value

        if isinstance(value, str):
            try:
                return cls(value.strip().lower().replace("-", ""))
            except ValueError:
                pass

        valid = ", ".join(order.value for order in cls)
        raise ConfigurationError(f"Invalid result order: {value} (expected one of {valid})")


@dataclass(frozen=True)
class ProviderConfiguration:
    """Upstream servers and result ordering used by a lookup"""

    servers: Tuple[str, ...] = field(default_factory=tuple)
    result_order: ResultOrder = ResultOrder.IPV4_FIRST
    timeout: float = 5.0

    def with_servers(self, servers: Iterable[str]) -> "ProviderConfiguration":
        return replace(self, servers=tuple(servers))

    def with_result_order(self, order: ResultOrder) -> "ProviderConfiguration":
        return replace(self, result_order=order)

    def uses_system_servers(self) -> bool:
        """True when no upstream servers are set and system configuration applies"""
        return not self.servers
