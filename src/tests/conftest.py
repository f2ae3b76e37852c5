"""Shared fixtures for smart DNS tests."""

import asyncio
import logging
from typing import Dict, List, Optional
from unittest.mock import patch

import pytest
import structlog
from structlog.testing import capture_logs

from smart_dns.core.resolver import SmartResolver
from smart_dns.providers import ProviderConfiguration


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeLookup:
    """DNS lookup capability recording every call."""

    def __init__(self, answers: Optional[Dict[str, List[str]]] = None):
        self.answers = answers or {}
        self.calls: List[str] = []
        self.configurations: List[ProviderConfiguration] = []
        self.errors: Dict[str, Exception] = {}
        self.release: Optional[asyncio.Event] = None

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def resolve_ipv4(self, hostname, configuration):
        self.calls.append(hostname)
        self.configurations.append(configuration)

        if self.release is not None:
            await self.release.wait()

        if hostname in self.errors:
            raise self.errors[hostname]

        return list(self.answers.get(hostname, ["192.0.2.1"]))


@pytest.fixture
def fake_lookup():
    return FakeLookup(
        {
            "example.com": ["93.184.216.34", "93.184.216.35"],
            "example.org": ["93.184.216.40"],
        }
    )


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def reset_resolver_singleton():
    SmartResolver.reset_instance()
    yield
    SmartResolver.reset_instance()


@pytest.fixture
def restore_logging():
    """Undo root handler and structlog changes made by setup_logging()"""
    from smart_dns.dns_logging import logger as logger_module

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    logger_module._logger_instance = None
    structlog.reset_defaults()


@pytest.fixture
def resolver_logs():
    """Capture structlog events emitted by the resolver module"""
    from smart_dns.dns_logging import get_logger

    # A logger bound under an earlier setup_logging() keeps its processors
    with patch("smart_dns.core.resolver.logger", get_logger("smart_dns.core.resolver")):
        with capture_logs() as logs:
            yield logs
