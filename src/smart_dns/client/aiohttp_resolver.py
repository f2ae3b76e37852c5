"""
aiohttp Integration

Resolver plug-in for ``aiohttp.TCPConnector`` that answers host lookups from
the smart resolver's cache, so requests keep their original URL (and TLS
server name) while connecting to the cached address.
"""

import socket
from typing import Any, Dict, List, Optional

from aiohttp.abc import AbstractResolver

from ..core.resolver import SmartResolver, is_ip_address
from ..dns_logging import get_logger
from ..errors import DNSLookupError

logger = get_logger(__name__)


class SmartDnsAiohttpResolver(AbstractResolver):
    """aiohttp resolver backed by SmartResolver"""

    def __init__(self, resolver: Optional[SmartResolver] = None):
        self.resolver = resolver if resolver is not None else SmartResolver.get_instance()

    async def resolve(
        self, host: str, port: int = 0, family: int = socket.AF_INET
    ) -> List[Dict[str, Any]]:
        if is_ip_address(host):
            address = host
            address_family = socket.AF_INET6 if ":" in host else socket.AF_INET
        else:
            if family == socket.AF_INET6:
                raise OSError(f"IPv6 resolution is not supported for {host}")

            try:
                address = await self.resolver.resolve_hostname(host)
            except DNSLookupError as e:
                logger.debug("aiohttp host resolution failed", host=host, error=str(e))
                raise OSError(str(e)) from e

            address_family = socket.AF_INET

        return [
            {
                "hostname": host,
                "host": address,
                "port": port,
                "family": address_family,
                "proto": 0,
                "flags": socket.AI_NUMERICHOST,
            }
        ]

    async def close(self) -> None:
        pass
