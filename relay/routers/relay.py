"""Relay endpoint.

- OPTIONS /api/v1/relay — CORS preflight, 204 with fixed headers
- POST    /api/v1/relay — relay ``{targetUrl, method?, headers?, body?}``
- any other method      — 405, rendered by the routing error handler
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response
from pydantic import ValidationError

from relay.middleware.error_handler import (
    PREFLIGHT_HEADERS,
    ExhaustionError,
    InputError,
    InternalFaultError,
    UpstreamClientError,
    json_response,
)
from relay.models.outcomes import RelayRejected, RelaySuccess
from relay.models.requests import RelayRequest

if TYPE_CHECKING:
    from relay.state import GatewayState

logger = logging.getLogger(__name__)


async def _read_payload(request: Request) -> object:
    """Decode the JSON body; an empty body reads as ``{}``."""
    try:
        raw = await request.body()
        return json.loads(raw or b"{}")
    except ValueError as exc:
        logger.error("Failed to parse relay payload: %s", exc)
        raise InternalFaultError(str(exc)) from exc


def _parse_request(payload: object) -> RelayRequest:
    if not isinstance(payload, dict):
        raise InputError()

    try:
        body = RelayRequest.model_validate(payload)
    except ValidationError as exc:
        if not isinstance(payload.get("targetUrl"), str):
            raise InputError() from exc
        field_errors = [
            {
                "field": " -> ".join(str(loc) for loc in err["loc"]),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        raise InputError("Invalid request payload", details=field_errors) from exc

    if not (body.target_url or "").strip():
        raise InputError()
    return body


def create_relay_router(*, state: GatewayState) -> APIRouter:
    """Factory that creates the relay router bound to the gateway state."""

    relay_router = APIRouter(prefix="/api/v1", tags=["relay"])

    @relay_router.api_route("/relay", methods=["POST", "OPTIONS"])
    async def relay(request: Request) -> Response:
        """Relay a request through the proxy pool."""
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=PREFLIGHT_HEADERS)

        body = _parse_request(await _read_payload(request))
        request_id = getattr(request.state, "request_id", None)

        result = await state.controller.relay(body, request_id=request_id)

        if isinstance(result, RelaySuccess):
            return json_response(
                200,
                {
                    "success": True,
                    "proxy": result.proxy,
                    "latency": result.latency,
                    "data": result.data,
                },
            )
        if isinstance(result, RelayRejected):
            raise UpstreamClientError(status_code=result.status, details=result.details)
        raise ExhaustionError(lastError=result.last_error, attempts=result.attempts)

    return relay_router
