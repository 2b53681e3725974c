"""Per-proxy health tracking with timed mark-down.

A proxy blamed for a failure is excluded from selection until its mark-down
window passes. Records are checked lazily: there is no sweep, and a proxy whose
window has elapsed is simply treated as healthy again.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable

from relay.proxy.types import ProxyHealth

logger = logging.getLogger(__name__)


class HealthTracker:
    """Tracks mark-down windows per proxy URL.

    Args:
        markdown_ms: How long a proxy stays excluded after ``mark_down``.
        clock: Monotonic clock returning seconds; injectable for tests.
    """

    def __init__(
        self,
        markdown_ms: int = 45000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._markdown_seconds = markdown_ms / 1000
        self._clock = clock
        self._records: dict[str, ProxyHealth] = {}
        self._lock = threading.Lock()

    def _get_or_create(self, proxy: str) -> ProxyHealth:
        if proxy not in self._records:
            self._records[proxy] = ProxyHealth()
        return self._records[proxy]

    def mark_down(self, proxy: str) -> None:
        """Exclude a proxy from selection until now + the mark-down duration."""
        with self._lock:
            record = self._get_or_create(proxy)
            record.down_until = self._clock() + self._markdown_seconds
            record.failure_count += 1
            failures = record.failure_count
        logger.warning(
            "Proxy marked down for %dms: %s (failures: %d)",
            int(self._markdown_seconds * 1000),
            proxy,
            failures,
            extra={"proxy_used": proxy},
        )

    def mark_success(self, proxy: str) -> None:
        """Record a successful request through the proxy."""
        with self._lock:
            self._get_or_create(proxy).success_count += 1

    def is_healthy(self, proxy: str, now: float | None = None) -> bool:
        """Return True if the proxy has no record or its window has passed."""
        record = self._records.get(proxy)
        if record is None:
            return True
        if now is None:
            now = self._clock()
        return record.down_until <= now

    def down_until(self, proxy: str) -> float | None:
        """Return the stored down-until timestamp, or None if never marked down."""
        record = self._records.get(proxy)
        if record is None or record.failure_count == 0:
            return None
        return record.down_until

    def get_stats(self, pool: Iterable[str]) -> dict:
        """Return pool health statistics for the health endpoint."""
        now = self._clock()
        per_proxy = []
        for proxy in pool:
            record = self._records.get(proxy) or ProxyHealth()
            per_proxy.append(
                {
                    "url": proxy,
                    "is_healthy": record.down_until <= now,
                    "down_for_ms": max(0, int((record.down_until - now) * 1000)),
                    "success_count": record.success_count,
                    "failure_count": record.failure_count,
                }
            )

        healthy = sum(1 for p in per_proxy if p["is_healthy"])
        return {
            "total": len(per_proxy),
            "healthy": healthy,
            "unhealthy": len(per_proxy) - healthy,
            "proxies": per_proxy,
        }
