"""Process-wide gateway state.

One ``GatewayState`` is built at startup and shared by every request. It owns
the selector cursor and the health records, the only state that outlives a
single request.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from relay.config.settings import RelaySettings
from relay.proxy.health import HealthTracker
from relay.proxy.selector import ProxySelector
from relay.services.executor import RequestExecutor
from relay.services.retry import RetryController


@dataclass
class GatewayState:
    settings: RelaySettings
    pool: tuple[str, ...]
    health: HealthTracker
    selector: ProxySelector
    executor: RequestExecutor
    controller: RetryController


def build_gateway_state(
    settings: RelaySettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> GatewayState:
    """Wire the relay components from settings."""
    pool = settings.proxy_pool
    health = HealthTracker(markdown_ms=settings.proxy_mark_down_ms)
    selector = ProxySelector(pool, health)
    executor = RequestExecutor(timeout_ms=settings.request_timeout_ms, transport=transport)
    controller = RetryController(
        selector=selector,
        health=health,
        executor=executor,
        max_retries=settings.max_retries,
        backoff_base_ms=settings.backoff_base_ms,
        direct_fallback=settings.direct_fallback,
    )
    return GatewayState(
        settings=settings,
        pool=pool,
        health=health,
        selector=selector,
        executor=executor,
        controller=controller,
    )
