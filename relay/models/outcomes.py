"""Attempt outcomes and terminal relay results.

An attempt outcome describes a single upstream call made by the executor. A
relay result is what the retry controller hands back to the request handler
once it stops looping.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Success:
    """2xx response; ``data`` is parsed JSON or raw text depending on content type."""

    status: int
    data: Any
    content_type: str
    proxy: str | None = None
    latency: int = 0


@dataclass(frozen=True)
class UpstreamError:
    """Non-2xx, non-5xx response. Never retried."""

    status: int
    text: str
    proxy: str | None = None
    latency: int = 0


@dataclass(frozen=True)
class ServerError:
    """5xx response. Retried through another proxy."""

    status: int
    text: str
    proxy: str | None = None
    latency: int = 0


@dataclass(frozen=True)
class NetworkFailure:
    """Timeout or transport failure before a usable response arrived."""

    cause: str
    proxy: str | None = None
    latency: int = 0


AttemptOutcome = Union[Success, UpstreamError, ServerError, NetworkFailure]


@dataclass(frozen=True)
class RelaySuccess:
    proxy: str | None
    latency: int
    data: Any


@dataclass(frozen=True)
class RelayRejected:
    """Upstream error surfaced verbatim with the upstream status."""

    status: int
    details: str


@dataclass(frozen=True)
class RelayExhausted:
    """Every attempt failed; ``last_error`` describes the final failure."""

    last_error: dict | None
    attempts: int


RelayResult = Union[RelaySuccess, RelayRejected, RelayExhausted]
