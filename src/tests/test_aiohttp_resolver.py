"""
aiohttp Integration Tests
"""

import socket

import aiohttp
import pytest

from smart_dns.client import SmartDnsAiohttpResolver
from smart_dns.core.resolver import SmartResolver


class TestSmartDnsAiohttpResolver:
    """Test the aiohttp resolver plug-in"""

    @pytest.mark.asyncio
    async def test_resolve_hostname(self, fake_lookup):
        resolver = SmartDnsAiohttpResolver(SmartResolver(lookup=fake_lookup))

        hosts = await resolver.resolve("example.com", 443, socket.AF_INET)

        assert hosts == [
            {
                "hostname": "example.com",
                "host": "93.184.216.34",
                "port": 443,
                "family": socket.AF_INET,
                "proto": 0,
                "flags": socket.AI_NUMERICHOST,
            }
        ]

    @pytest.mark.asyncio
    async def test_uses_shared_cache(self, fake_lookup):
        smart_resolver = SmartResolver(lookup=fake_lookup)
        resolver = SmartDnsAiohttpResolver(smart_resolver)

        await smart_resolver.resolve("https://example.com/")
        await resolver.resolve("example.com", 443)

        assert fake_lookup.call_count == 1

    @pytest.mark.asyncio
    async def test_ip_literal_passthrough(self, fake_lookup):
        resolver = SmartDnsAiohttpResolver(SmartResolver(lookup=fake_lookup))

        hosts = await resolver.resolve("::1", 80, socket.AF_UNSPEC)

        assert hosts[0]["host"] == "::1"
        assert hosts[0]["family"] == socket.AF_INET6
        assert fake_lookup.call_count == 0

    @pytest.mark.asyncio
    async def test_lookup_failure_raises_oserror(self, fake_lookup):
        fake_lookup.errors["down.test"] = RuntimeError("unreachable")
        resolver = SmartDnsAiohttpResolver(SmartResolver(lookup=fake_lookup))

        with pytest.raises(OSError, match="down.test"):
            await resolver.resolve("down.test", 80)

    @pytest.mark.asyncio
    async def test_ipv6_only_request_rejected(self, fake_lookup):
        resolver = SmartDnsAiohttpResolver(SmartResolver(lookup=fake_lookup))

        with pytest.raises(OSError):
            await resolver.resolve("example.com", 80, socket.AF_INET6)

    @pytest.mark.asyncio
    async def test_defaults_to_singleton(self, fake_lookup):
        singleton = SmartResolver.get_instance(lookup=fake_lookup)

        resolver = SmartDnsAiohttpResolver()

        assert resolver.resolver is singleton
        await resolver.close()

    @pytest.mark.asyncio
    async def test_connector_accepts_resolver(self, fake_lookup):
        resolver = SmartDnsAiohttpResolver(SmartResolver(lookup=fake_lookup))

        connector = aiohttp.TCPConnector(resolver=resolver)
        await connector.close()
