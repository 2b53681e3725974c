"""Round-robin proxy selection skipping proxies that are marked down.

The cursor is shared by every request handled in the process, so consecutive
unrelated requests continue the rotation rather than restarting it.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence

from relay.proxy.health import HealthTracker


class ProxySelector:
    """Round-robin cursor over a fixed proxy pool."""

    def __init__(self, pool: Sequence[str], health: HealthTracker) -> None:
        self._pool = tuple(pool)
        self._health = health
        self._index = -1
        self._lock = threading.Lock()

    def pick_next(self) -> str | None:
        """Return the next healthy proxy, or None after a full unhealthy cycle.

        Starts one past the previous position and wraps modulo the pool size.
        """
        pool_size = len(self._pool)
        if pool_size == 0:
            return None

        with self._lock:
            for _ in range(pool_size):
                self._index = (self._index + 1) % pool_size
                candidate = self._pool[self._index]
                if self._health.is_healthy(candidate):
                    return candidate

        return None
