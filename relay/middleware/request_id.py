"""Request ID middleware.

Reuses the caller's ``X-Request-ID`` header or generates a UUID4. The ID is
stored in ``request.state.request_id`` and in a context variable, so log
records emitted while the request is handled carry it without passing it
around explicitly. It is echoed back on the response.
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def current_request_id() -> str | None:
    """Return the ID of the request being handled, if any."""
    return _request_id.get()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Assigns a request ID to each request and returns it as ``X-Request-ID``."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = _request_id.set(request_id)
        try:
            response: Response = await call_next(request)
        finally:
            _request_id.reset(token)

        response.headers["X-Request-ID"] = request_id
        return response
