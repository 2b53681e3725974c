"""Health endpoint.

- GET /health — service status + proxy pool stats
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter

from relay.models.responses import ApiResponse

if TYPE_CHECKING:
    from relay.state import GatewayState


def create_health_router(*, state: GatewayState) -> APIRouter:
    """Factory that creates the health router bound to the gateway state."""

    health_router = APIRouter(tags=["health"])

    @health_router.get("/health")
    async def health() -> dict:
        """Service health check with proxy pool statistics."""
        return ApiResponse(
            success=True,
            data={
                "status": "healthy",
                "proxy_pool": state.health.get_stats(state.pool),
            },
        ).model_dump()

    return health_router
