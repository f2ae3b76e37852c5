"""
Smart DNS Command Line Entry Point

Resolves one or more URLs and prints the rewritten URLs.
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

import yaml

from .config.loader import ConfigLoader
from .config.schema import SmartDnsConfig
from .core.resolver import SmartResolver
from .dns_logging import get_logger, log_exception, setup_logging
from .errors import SmartDnsError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smart-dns",
        description="Resolve URL hostnames through a cached DNS resolver",
    )
    parser.add_argument("urls", nargs="+", metavar="URL", help="http/https URLs to resolve")
    parser.add_argument("--config", "-c", default=None, help="Configuration file path")

    upstream = parser.add_mutually_exclusive_group()
    upstream.add_argument(
        "--provider", "-p", default=None, help="DNS provider (cloudflare, google, opendns)"
    )
    upstream.add_argument(
        "--servers",
        "-s",
        default=None,
        type=lambda value: [s.strip() for s in value.split(",") if s.strip()],
        help="Comma-separated DNS server addresses",
    )

    parser.add_argument("--result-order", default=None, help="ipv4first, ipv6first or verbatim")
    parser.add_argument("--ttl-ms", type=int, default=None, help="Cache TTL in milliseconds")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    return parser


def apply_arguments(config: SmartDnsConfig, args: argparse.Namespace) -> None:
    """Override file/environment configuration with command line arguments"""
    resolver = config.resolver

    if args.provider is not None:
        resolver.provider = args.provider
        resolver.servers = None
    if args.servers is not None:
        resolver.servers = args.servers
        resolver.provider = None
    if args.result_order is not None:
        resolver.result_order = args.result_order
    if args.ttl_ms is not None:
        resolver.ttl_ms = args.ttl_ms

    # Re-run section validation after overrides
    resolver.__post_init__()


async def resolve_urls(resolver: SmartResolver, urls: List[str]) -> List[dict]:
    results = []
    for url in urls:
        result = await resolver.resolve(url)
        results.append(result.to_dict())
    return results


def main(argv: Optional[List[str]] = None) -> int:
    """Main function"""
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader(args.config).load_config()
        apply_arguments(config, args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging)
    logger = get_logger("smart_dns.main")

    resolver = SmartResolver.from_config(config.resolver)

    try:
        results = asyncio.run(resolve_urls(resolver, args.urls))
    except (SmartDnsError, ValueError) as e:
        log_exception(logger, "Resolution failed", e)
        print(f"Resolution failed: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(results, indent=2))
    else:
        for result in results:
            print(f"{result['hostname']} -> {result['address']} : {result['rewritten_url']}")

    return 0


def main_entry() -> None:
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
