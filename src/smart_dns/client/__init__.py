"""
HTTP client integrations.
"""

from .aiohttp_resolver import SmartDnsAiohttpResolver

__all__ = ["SmartDnsAiohttpResolver"]
