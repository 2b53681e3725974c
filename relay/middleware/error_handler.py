"""Relay error hierarchy and FastAPI exception handlers.

All relay-specific errors extend RelayError. The exception handlers render
them as ``{"error": <message>, ...details}`` JSON with the permissive CORS
header, so every failure a caller sees has the same shape as the relay's own
error responses.
"""

from __future__ import annotations

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Headers carried by every non-preflight response.
CORS_HEADERS: dict[str, str] = {"Access-Control-Allow-Origin": "*"}

# Fixed preflight response headers.
PREFLIGHT_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class RelayError(Exception):
    """Base error for all relay-specific errors.

    ``status_code`` and ``message`` are class defaults; both can be overridden
    per instance. Extra keyword arguments are rendered as additional body keys.
    """

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        **kwargs: object,
    ) -> None:
        self.message = message or self.__class__.message
        if status_code is not None:
            self.status_code = status_code
        self.details = kwargs
        super().__init__(self.message)


class InputError(RelayError):
    """Missing or invalid inbound fields."""

    status_code = 400
    message = "targetUrl required"


class MethodNotAllowedError(RelayError):
    """Inbound method other than POST or OPTIONS."""

    status_code = 405
    message = "Only POST allowed"


class UpstreamClientError(RelayError):
    """Non-retryable upstream error; carries the upstream status."""

    status_code = 400
    message = "Upstream returned error"


class ExhaustionError(RelayError):
    """Every attempt failed."""

    status_code = 502
    message = "All attempts failed"


class InternalFaultError(RelayError):
    """Unexpected failure while reading the inbound request."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, reason: str) -> None:
        super().__init__()
        self.details = {"message": reason}


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------


def json_response(status_code: int, content: object) -> JSONResponse:
    """Build a JSON response carrying the CORS header."""
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


async def _relay_error_handler(_request: Request, exc: RelayError) -> JSONResponse:
    """Handle RelayError subclasses."""
    return json_response(exc.status_code, {"error": exc.message, **exc.details})


async def _http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render routing errors (unknown path, unlisted method) in the relay shape."""
    if exc.status_code == 405:
        return await _relay_error_handler(_request, MethodNotAllowedError())
    return json_response(exc.status_code, {"error": exc.detail})


async def _unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — log traceback, return generic 500."""
    logger.error(
        "Unhandled exception: %s\n%s",
        exc,
        traceback.format_exc(),
    )
    return json_response(500, {"error": "Internal server error", "message": str(exc)})


# ---------------------------------------------------------------------------
# Registration helper
# ---------------------------------------------------------------------------


def register_error_handlers(app: FastAPI) -> None:
    """Wire up all exception handlers on the FastAPI application."""
    app.add_exception_handler(RelayError, _relay_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)  # type: ignore[arg-type]
