"""
Smart Resolver

Resolves the hostname of an http(s) URL to an IPv4 address through the
resolution cache and rewrites the URL with that address. Upstream servers
are chosen at runtime by provider preset or explicit server list; the
resulting ``ProviderConfiguration`` is passed into every lookup.

Concurrent cache misses for the same hostname share a single upstream
lookup.
"""

import asyncio
import functools
import ipaddress
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Iterable, List, Optional, Union
from urllib.parse import urlsplit

from ..cache import DEFAULT_MAX_ENTRIES, DEFAULT_TTL_MS, ResolutionCache, normalize_hostname
from ..dns_logging import get_logger
from ..errors import ConfigurationError, DNSLookupError, ResolverError, SmartDnsError
from ..providers import DnsProvider, ProviderConfiguration, ResultOrder
from .lookup import DNSLookup, DnsPythonLookup, parse_server_address

logger = get_logger(__name__)

_HTTP_URL = re.compile(r"^https?://")


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of a successful URL resolution"""

    address: str
    hostname: str
    rewritten_url: str

    @property
    def url_replaced(self) -> str:
        return self.rewritten_url

    def to_dict(self) -> Dict[str, str]:
        return {
            "address": self.address,
            "hostname": self.hostname,
            "rewritten_url": self.rewritten_url,
        }


def is_ip_address(hostname: str) -> bool:
    """Check if hostname is already an IP address"""
    try:
        ipaddress.ip_address(hostname)
        return True
    except ValueError:
        return False


def replace_hostname(url: str, hostname: str, address: str) -> str:
    """Replace the first occurrence of hostname in url with address"""
    if hostname in url:
        return url.replace(hostname, address, 1)

    # URL parsing lower-cases the host, the original string may not be
    return re.sub(
        re.escape(hostname), lambda _: address, url, count=1, flags=re.IGNORECASE
    )


class SmartResolver:
    """DNS resolution with caching and configurable upstream servers"""

    _instance: ClassVar[Optional["SmartResolver"]] = None
    _instance_args: ClassVar[Dict[str, Any]] = {}

    def __init__(
        self,
        provider: Optional[Union[DnsProvider, str]] = None,
        result_order: Union[ResultOrder, str] = ResultOrder.IPV4_FIRST,
        ttl_ms: int = DEFAULT_TTL_MS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        lookup: Optional[DNSLookup] = None,
        servers: Optional[Iterable[str]] = None,
        timeout: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Create a resolver with its own resolution cache

        Args:
            provider: Built-in provider whose servers to use
            result_order: Address family ordering passed to lookups
            ttl_ms: Time-to-live for cached addresses in milliseconds
            max_entries: Maximum number of cached hostnames
            lookup: DNS lookup capability, dnspython by default
            servers: Explicit upstream servers, exclusive with provider
            timeout: Lookup timeout in seconds
            clock: Monotonic clock used for cache expiry
        """
        if provider is not None and servers:
            raise ConfigurationError("Provider and servers cannot both be set")

        self.cache = ResolutionCache(max_entries=max_entries, ttl_ms=ttl_ms, clock=clock)
        self.lookup: DNSLookup = lookup if lookup is not None else DnsPythonLookup()
        self._configuration = ProviderConfiguration(
            result_order=ResultOrder.parse(result_order), timeout=timeout
        )

        # hostname -> pending upstream lookup shared by concurrent callers
        self._inflight: Dict[str, "asyncio.Future[str]"] = {}
        self.upstream_lookups = 0
        self.coalesced_lookups = 0

        if provider is not None:
            self.set_provider(provider)
        elif servers:
            self.set_servers(servers)

    @classmethod
    def get_instance(
        cls,
        provider: Optional[Union[DnsProvider, str]] = None,
        result_order: Optional[Union[ResultOrder, str]] = None,
        ttl_ms: Optional[int] = None,
        *,
        strict: bool = False,
        **kwargs: Any,
    ) -> "SmartResolver":
        """
        Create or retrieve the process-wide resolver

        The first call configures the instance. Later calls return it
        unchanged; arguments that differ from the first call are ignored
        with a warning, or rejected with ConfigurationError when strict.
        """
        requested = {"provider": provider, "result_order": result_order, "ttl_ms": ttl_ms}
        requested.update(kwargs)
        requested = {key: value for key, value in requested.items() if value is not None}

        if cls._instance is None:
            cls._instance = cls(**requested)
            cls._instance_args = {
                key: _canonical_arg(key, value) for key, value in requested.items()
            }
            return cls._instance

        ignored = sorted(
            key
            for key, value in requested.items()
            if cls._instance_args.get(key) != _canonical_arg(key, value)
        )

        if ignored:
            if strict:
                raise ConfigurationError(
                    f"Resolver already configured, conflicting arguments: {', '.join(ignored)}. "
                    f"Call reset_instance() before reconfiguring."
                )
            logger.warning("Ignoring arguments for existing resolver", ignored=ignored)

        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the process-wide resolver so the next get_instance() rebuilds it"""
        cls._instance = None
        cls._instance_args = {}

    @classmethod
    def from_config(cls, config, lookup: Optional[DNSLookup] = None) -> "SmartResolver":
        """Build a resolver from a ResolverConfig section"""
        return cls(
            provider=config.provider,
            servers=config.servers,
            result_order=config.result_order,
            ttl_ms=config.ttl_ms,
            max_entries=config.max_entries,
            timeout=config.timeout,
            lookup=lookup,
        )

    @property
    def configuration(self) -> ProviderConfiguration:
        return self._configuration

    @property
    def servers(self) -> List[str]:
        return list(self._configuration.servers)

    @property
    def result_order(self) -> ResultOrder:
        return self._configuration.result_order

    def set_provider(self, provider: Union[DnsProvider, str]) -> None:
        """
        Use the upstream servers of a built-in provider

        Raises:
            ProviderError: If the provider is unsupported
        """
        dns_provider = DnsProvider.parse(provider)
        self._configuration = self._configuration.with_servers(dns_provider.servers)

        logger.info(
            "DNS provider set",
            provider=dns_provider.value,
            servers=list(dns_provider.servers),
        )

    def set_servers(self, servers: Iterable[str]) -> None:
        """
        Manually set upstream DNS servers

        Raises:
            ConfigurationError: If an entry is not an IP or IP:port address
        """
        if isinstance(servers, str):
            raise ConfigurationError(f"Servers must be a list of addresses, got {servers!r}")

        server_list = list(servers)
        for server in server_list:
            try:
                parse_server_address(server)
            except (AttributeError, ValueError) as e:
                raise ConfigurationError(f"Invalid DNS server address: {server!r}") from e

        self._configuration = self._configuration.with_servers(server_list)
        logger.info("DNS servers set", servers=server_list)

    def set_result_order(self, result_order: Union[ResultOrder, str]) -> None:
        self._configuration = self._configuration.with_result_order(
            ResultOrder.parse(result_order)
        )

    async def resolve(self, url: str) -> ResolutionResult:
        """
        Resolve a URL's hostname and rewrite the URL with the address

        Raises:
            ResolverError: If the URL is not http/https or has no hostname
            DNSLookupError: If the upstream lookup fails
            ValueError: If the URL cannot be parsed
        """
        if not _HTTP_URL.match(url):
            raise ResolverError("The URL must start with http/https.")

        hostname = urlsplit(url).hostname
        if not hostname:
            raise ResolverError(f"The URL has no hostname: {url}")

        if is_ip_address(hostname):
            return ResolutionResult(address=hostname, hostname=hostname, rewritten_url=url)

        address = await self.resolve_hostname(hostname)

        return ResolutionResult(
            address=address,
            hostname=hostname,
            rewritten_url=replace_hostname(url, hostname, address),
        )

    async def resolve_hostname(self, hostname: str) -> str:
        """
        Resolve a bare hostname through the cache

        Raises:
            ResolverError: If the hostname is empty
            DNSLookupError: If the upstream lookup fails
        """
        if not hostname or not hostname.strip():
            raise ResolverError(f"Invalid hostname: {hostname!r}")

        if is_ip_address(hostname):
            return hostname

        key = normalize_hostname(hostname)

        address = self.cache.get(key)
        if address is not None:
            logger.debug("Cache hit", hostname=key, address=address)
            return address

        pending = self._inflight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._lookup(key))
            self._inflight[key] = pending
            pending.add_done_callback(functools.partial(self._lookup_done, key))
        else:
            self.coalesced_lookups += 1
            logger.debug("Joining in-flight lookup", hostname=key)

        # One cancelled caller must not cancel the lookup for the others
        return await asyncio.shield(pending)

    async def _lookup(self, hostname: str) -> str:
        configuration = self._configuration
        self.upstream_lookups += 1

        logger.debug(
            "Upstream lookup",
            hostname=hostname,
            servers=list(configuration.servers) or "system",
        )

        try:
            addresses = await self.lookup.resolve_ipv4(hostname, configuration)
        except SmartDnsError as e:
            logger.warning("DNS lookup failed", hostname=hostname, error=str(e))
            raise
        except Exception as e:
            logger.warning("DNS lookup failed", hostname=hostname, error=str(e))
            raise DNSLookupError(hostname, e) from e

        if not addresses:
            raise DNSLookupError(hostname)

        address = addresses[0]
        self.cache.set(hostname, address)

        return address

    def _lookup_done(self, hostname: str, future: "asyncio.Future[str]") -> None:
        if self._inflight.get(hostname) is future:
            del self._inflight[hostname]

        # Every waiter receives the error through shield; mark it retrieved
        if not future.cancelled():
            future.exception()

    def invalidate(self, hostname: str) -> bool:
        """Drop a cached hostname"""
        return self.cache.delete(normalize_hostname(hostname))

    def clear_cache(self) -> int:
        return self.cache.clear()

    def get_stats(self) -> Dict[str, Any]:
        """Get cache, lookup and configuration statistics"""
        return {
            "cache": self.cache.get_cache_info(),
            "upstream_lookups": self.upstream_lookups,
            "coalesced_lookups": self.coalesced_lookups,
            "inflight_lookups": len(self._inflight),
            "servers": self.servers,
            "result_order": self.result_order.value,
        }


def _canonical_arg(key: str, value: Any) -> Any:
    """Normalize get_instance arguments so equivalent spellings compare equal"""
    try:
        if key == "provider":
            return DnsProvider.parse(value)
        if key == "result_order":
            return ResultOrder.parse(value)
    except SmartDnsError:
        return value

    if key == "servers":
        return tuple(value)

    return value
