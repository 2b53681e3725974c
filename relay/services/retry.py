"""Retry loop driving proxy selection and upstream attempts.

Each attempt selects the next healthy proxy and executes the request through
it. Outcomes are split into terminal and retryable:

- Success → terminal, proxy credited.
- Upstream 4xx-class error → terminal, returned verbatim, proxy not blamed.
- 5xx through a proxy, or network failure → proxy marked down, exponential
  backoff (``backoff_base_ms * 2**attempt``), next attempt.
- 5xx without a proxy → terminal; there is no proxy to rotate away from.

When every attempt fails the last recorded error is returned for diagnostics.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from relay.models.outcomes import (
    RelayExhausted,
    RelayRejected,
    RelayResult,
    RelaySuccess,
    ServerError,
    Success,
    UpstreamError,
)
from relay.models.requests import RelayRequest
from relay.proxy.health import HealthTracker
from relay.proxy.selector import ProxySelector
from relay.services.executor import RequestExecutor

logger = logging.getLogger(__name__)


class RetryController:
    """Bounded retry loop over selector → executor cycles.

    Args:
        selector: Round-robin proxy selector.
        health: Health tracker updated on every outcome.
        executor: Performs a single upstream attempt.
        max_retries: Maximum number of attempts per request.
        backoff_base_ms: Base delay; attempt ``n`` waits ``base * 2**n`` ms.
        direct_fallback: Attempt the target without a proxy when none is
            healthy. When False the attempt counts as a failure instead.
        sleep: Awaitable sleep taking seconds; injectable for tests.
    """

    def __init__(
        self,
        selector: ProxySelector,
        health: HealthTracker,
        executor: RequestExecutor,
        max_retries: int = 4,
        backoff_base_ms: int = 400,
        direct_fallback: bool = True,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._selector = selector
        self._health = health
        self._executor = executor
        self._max_retries = max_retries
        self._backoff_base_ms = backoff_base_ms
        self._direct_fallback = direct_fallback
        self._sleep = sleep

    def backoff_ms(self, attempt: int) -> int:
        """Delay after a failed attempt (0-based)."""
        return self._backoff_base_ms * 2**attempt

    async def relay(
        self, request: RelayRequest, request_id: str | None = None
    ) -> RelayResult:
        """Relay the request, retrying retryable failures through other proxies."""
        target_url = request.target_url or ""
        last_error: dict | None = None

        for attempt in range(self._max_retries):
            proxy = self._selector.pick_next()
            log_extra = {
                "request_id": request_id,
                "target_url": target_url,
                "proxy_used": proxy,
                "attempt": attempt,
            }

            if proxy is None and not self._direct_fallback:
                last_error = {"error": "No proxy available", "proxy": None, "attempt": attempt}
                logger.warning("No healthy proxy available", extra=log_extra)
                await self._backoff(attempt)
                continue

            outcome = await self._executor.execute(
                target_url,
                proxy,
                method=request.method,
                headers=request.headers,
                body=request.body,
            )

            if isinstance(outcome, Success):
                if proxy is not None:
                    self._health.mark_success(proxy)
                logger.info(
                    "Relay succeeded",
                    extra={**log_extra, "status": outcome.status, "latency_ms": outcome.latency},
                )
                return RelaySuccess(proxy=proxy, latency=outcome.latency, data=outcome.data)

            if isinstance(outcome, UpstreamError) or (
                isinstance(outcome, ServerError) and proxy is None
            ):
                logger.info(
                    "Upstream returned error %d",
                    outcome.status,
                    extra={**log_extra, "status": outcome.status, "latency_ms": outcome.latency},
                )
                return RelayRejected(status=outcome.status, details=outcome.text)

            if isinstance(outcome, ServerError):
                last_error = {
                    "status": outcome.status,
                    "text": outcome.text,
                    "proxy": proxy,
                    "latency": outcome.latency,
                    "attempt": attempt,
                }
                reason = f"upstream status {outcome.status}"
            else:
                last_error = {"error": outcome.cause, "proxy": proxy, "attempt": attempt}
                reason = outcome.cause

            if proxy is not None:
                self._health.mark_down(proxy)

            logger.warning(
                "Attempt %d/%d failed, retrying in %dms",
                attempt + 1,
                self._max_retries,
                self.backoff_ms(attempt),
                extra={**log_extra, "error_reason": reason},
            )
            await self._backoff(attempt)

        logger.error(
            "All %d attempts failed",
            self._max_retries,
            extra={"request_id": request_id, "target_url": target_url, "retry_attempts": self._max_retries},
        )
        return RelayExhausted(last_error=last_error, attempts=self._max_retries)

    async def _backoff(self, attempt: int) -> None:
        # No wait after the final attempt
        if attempt < self._max_retries - 1:
            await self._sleep(self.backoff_ms(attempt) / 1000)
