"""FastAPI application entry point with lifespan management.

Startup: configure logging, report the proxy pool and retry tuning.
The gateway state (proxy pool, health records, selector cursor) is built once
per process in ``create_app`` and shared by every request.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from relay.config.settings import RelaySettings
from relay.logging_config import configure_logging
from relay.middleware.error_handler import register_error_handlers
from relay.middleware.request_id import RequestIdMiddleware
from relay.routers.health import create_health_router
from relay.routers.relay import create_relay_router
from relay.state import GatewayState, build_gateway_state

logger = logging.getLogger(__name__)


def create_app(
    settings: RelaySettings | None = None,
    state: GatewayState | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``state`` may be supplied to share or stub the gateway components;
    otherwise it is built from ``settings`` (read from the environment when
    not given).
    """
    if state is None:
        state = build_gateway_state(settings or RelaySettings())
    gateway = state

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan: startup and shutdown logging."""
        configure_logging(gateway.settings.log_level)
        logger.info(
            "Starting relay service on port %d with %d proxies "
            "(timeout=%dms, max_retries=%d, backoff_base=%dms, mark_down=%dms)",
            gateway.settings.port,
            len(gateway.pool),
            gateway.settings.request_timeout_ms,
            gateway.settings.max_retries,
            gateway.settings.backoff_base_ms,
            gateway.settings.proxy_mark_down_ms,
        )
        yield
        logger.info("Relay service shut down")

    app = FastAPI(
        title="Proxy Relay Service",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.gateway = gateway

    register_error_handlers(app)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(create_health_router(state=gateway))
    app.include_router(create_relay_router(state=gateway))

    return app


app = create_app()
