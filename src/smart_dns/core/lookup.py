"""
DNS Lookup Capability

The resolver depends only on the ``DNSLookup`` protocol. ``DnsPythonLookup``
is the default implementation, querying A records over dnspython's asyncio
resolver against the servers named by the configuration passed in.
"""

import ipaddress
import logging
from typing import List, Optional, Protocol, Tuple

import dns.asyncresolver
import dns.exception
import dns.nameserver

from ..errors import DNSLookupError
from ..providers import ProviderConfiguration

logger = logging.getLogger(__name__)


class DNSLookup(Protocol):
    """Upstream IPv4 lookup capability"""

    async def resolve_ipv4(
        self, hostname: str, configuration: ProviderConfiguration
    ) -> List[str]:
        ...


def parse_server_address(address: str) -> Tuple[str, int]:
    """Split an ``ip``, ``ip:port`` or ``[ipv6]:port`` server entry"""
    address = address.strip()

    try:
        ipaddress.ip_address(address)
        return address, 53
    except ValueError:
        pass

    if address.startswith("["):
        host, _, port = address[1:].partition("]:")
    else:
        host, _, port = address.rpartition(":")

    if not host or not port:
        raise ValueError(f"Invalid DNS server address: {address}")

    ipaddress.ip_address(host)
    port_number = int(port)
    if not 1 <= port_number <= 65535:
        raise ValueError(f"Invalid DNS server port: {address}")

    return host, port_number


class DnsPythonLookup:
    """A-record lookups through dnspython's asyncio resolver"""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        self._resolver: Optional[dns.asyncresolver.Resolver] = None
        self._resolver_config: Optional[ProviderConfiguration] = None

    def _build_resolver(
        self, configuration: ProviderConfiguration
    ) -> dns.asyncresolver.Resolver:
        if configuration.uses_system_servers():
            resolver = dns.asyncresolver.Resolver(configure=True)
        else:
            resolver = dns.asyncresolver.Resolver(configure=False)
            nameservers = []
            for server in configuration.servers:
                host, port = parse_server_address(server)
                nameservers.append(dns.nameserver.Do53Nameserver(host, port))
            resolver.nameservers = nameservers

        resolver.lifetime = self.timeout or configuration.timeout
        return resolver

    def _get_resolver(
        self, configuration: ProviderConfiguration
    ) -> dns.asyncresolver.Resolver:
        """Reuse the resolver until the configuration changes"""
        if self._resolver is None or self._resolver_config != configuration:
            self._resolver = self._build_resolver(configuration)
            self._resolver_config = configuration
            logger.debug(
                f"Built dnspython resolver for servers {list(configuration.servers) or 'system'}"
            )
        return self._resolver

    async def resolve_ipv4(
        self, hostname: str, configuration: ProviderConfiguration
    ) -> List[str]:
        """Resolve IPv4 addresses for hostname"""
        try:
            resolver = self._get_resolver(configuration)
            answer = await resolver.resolve(hostname, "A")
        except dns.exception.DNSException as e:
            raise DNSLookupError(hostname, e) from e

        addresses = [rdata.to_text() for rdata in answer]
        if not addresses:
            raise DNSLookupError(hostname)

        return addresses
