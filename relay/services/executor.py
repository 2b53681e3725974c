"""Single upstream attempt with a deadline.

Builds the effective URL (proxy base + raw target URL), issues the request
through ``httpx`` and classifies the result into an attempt outcome. The
deadline is enforced with ``asyncio.wait_for``: once it elapses the attempt is
abandoned and reported as a network failure.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any

import httpx

from relay.models.outcomes import (
    AttemptOutcome,
    NetworkFailure,
    ServerError,
    Success,
    UpstreamError,
)

logger = logging.getLogger(__name__)


def build_url(target_url: str, proxy: str | None) -> str:
    """Append the raw target URL to the proxy base, or pass it through unchanged."""
    if proxy:
        return proxy + target_url
    return target_url


def encode_body(body: Any) -> str | None:
    """Serialize a request body: strings verbatim, anything else as JSON."""
    if body is None:
        return None
    if isinstance(body, str):
        return body
    return json.dumps(body)


class RequestExecutor:
    """Issues one upstream request per call.

    Parameters
    ----------
    timeout_ms:
        Deadline for a single attempt (default 20000).
    transport:
        Optional ``httpx`` transport, used by tests to stub the network.
    """

    def __init__(
        self,
        timeout_ms: int = 20000,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout_seconds = timeout_ms / 1000
        self._transport = transport

    async def execute(
        self,
        target_url: str,
        proxy: str | None,
        method: str = "POST",
        headers: dict[str, str] | None = None,
        body: Any = None,
    ) -> AttemptOutcome:
        """Run one attempt and classify it. Never raises for upstream failures.

        A request httpx cannot build (e.g. a header value outside ASCII) is
        reported as a network failure, like a transport error.
        """
        url = build_url(target_url, proxy)
        start = time.monotonic()

        try:
            response = await asyncio.wait_for(
                self._send(url, method, headers or {}, encode_body(body)),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            return NetworkFailure(cause="timeout", proxy=proxy, latency=_elapsed_ms(start))
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
            return NetworkFailure(
                cause=str(exc) or exc.__class__.__name__,
                proxy=proxy,
                latency=_elapsed_ms(start),
            )

        latency = _elapsed_ms(start)
        status = response.status_code
        logger.debug("Upstream responded %d in %dms via %s", status, latency, proxy)

        if 200 <= status < 300:
            content_type = response.headers.get("content-type", "")
            if "application/json" in content_type:
                try:
                    data = response.json()
                except ValueError as exc:
                    return NetworkFailure(
                        cause=f"invalid JSON body: {exc}", proxy=proxy, latency=latency
                    )
            else:
                data = response.text
            return Success(
                status=status,
                data=data,
                content_type=content_type,
                proxy=proxy,
                latency=latency,
            )

        if 500 <= status < 600:
            return ServerError(status=status, text=response.text, proxy=proxy, latency=latency)

        return UpstreamError(status=status, text=response.text, proxy=proxy, latency=latency)

    async def _send(
        self,
        url: str,
        method: str,
        headers: dict[str, str],
        content: str | None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=httpx.Timeout(self._timeout_seconds),
            follow_redirects=True,
        ) as client:
            return await client.request(method, url, headers=headers, content=content)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
