"""Middleware package — error hierarchy, handlers, and request ID."""

from relay.middleware.error_handler import (
    CORS_HEADERS,
    PREFLIGHT_HEADERS,
    ExhaustionError,
    InputError,
    InternalFaultError,
    MethodNotAllowedError,
    RelayError,
    UpstreamClientError,
    json_response,
    register_error_handlers,
)
from relay.middleware.request_id import RequestIdMiddleware, current_request_id

__all__ = [
    "CORS_HEADERS",
    "PREFLIGHT_HEADERS",
    "ExhaustionError",
    "InputError",
    "InternalFaultError",
    "MethodNotAllowedError",
    "RelayError",
    "RequestIdMiddleware",
    "UpstreamClientError",
    "current_request_id",
    "json_response",
    "register_error_handlers",
]
