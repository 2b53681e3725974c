"""Shared test fixtures for the relay test suite."""

from __future__ import annotations

import os
from collections.abc import Callable

import httpx
import pytest

from relay.config.settings import RelaySettings
from relay.proxy.health import HealthTracker
from relay.proxy.selector import ProxySelector
from relay.services.executor import RequestExecutor
from relay.services.retry import RetryController


# ---------------------------------------------------------------------------
# Keep the host environment out of RelaySettings
# ---------------------------------------------------------------------------

_RELAY_ENV = (
    "PROXIES",
    "REQUEST_TIMEOUT_MS",
    "MAX_RETRIES",
    "BACKOFF_BASE_MS",
    "PROXY_MARK_DOWN_MS",
    "DIRECT_FALLBACK",
    "LOG_LEVEL",
    "PORT",
)


@pytest.fixture(autouse=True)
def _clear_relay_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset relay env vars so every test starts from documented defaults."""
    for key in _RELAY_ENV:
        monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SleepRecorder:
    """Async sleep replacement that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> RelaySettings:
    """Test settings with a small explicit pool and no backoff delay."""
    return RelaySettings(
        proxies='["https://p1.test/fetch/", "https://p2.test/fetch/", "https://p3.test/fetch/"]',
        backoff_base_ms=0,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def health(clock: FakeClock) -> HealthTracker:
    return HealthTracker(markdown_ms=45000, clock=clock)


@pytest.fixture
def make_controller() -> Callable[..., tuple[RetryController, HealthTracker, SleepRecorder]]:
    """Factory wiring a RetryController over an ``httpx.MockTransport`` handler."""

    def _make(
        pool: list[str],
        handler: Callable[[httpx.Request], httpx.Response],
        *,
        max_retries: int = 4,
        backoff_base_ms: int = 400,
        direct_fallback: bool = True,
        clock: FakeClock | None = None,
    ) -> tuple[RetryController, HealthTracker, SleepRecorder]:
        health = HealthTracker(markdown_ms=45000, clock=clock or FakeClock())
        selector = ProxySelector(pool, health)
        executor = RequestExecutor(
            timeout_ms=20000, transport=httpx.MockTransport(handler)
        )
        sleep = SleepRecorder()
        controller = RetryController(
            selector=selector,
            health=health,
            executor=executor,
            max_retries=max_retries,
            backoff_base_ms=backoff_base_ms,
            direct_fallback=direct_fallback,
            sleep=sleep,
        )
        return controller, health, sleep

    return _make
