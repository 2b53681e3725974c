"""Proxy package — pool loading, health tracking, and round-robin selection."""

from relay.proxy.health import HealthTracker
from relay.proxy.pool import DEFAULT_PROXIES, parse_proxy_list
from relay.proxy.selector import ProxySelector
from relay.proxy.types import ProxyHealth

__all__ = [
    "DEFAULT_PROXIES",
    "HealthTracker",
    "ProxyHealth",
    "ProxySelector",
    "parse_proxy_list",
]
