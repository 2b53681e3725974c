"""Public models for the relay service."""

from relay.models.outcomes import (
    AttemptOutcome,
    NetworkFailure,
    RelayExhausted,
    RelayRejected,
    RelayResult,
    RelaySuccess,
    ServerError,
    Success,
    UpstreamError,
)
from relay.models.requests import RelayRequest
from relay.models.responses import ApiResponse

__all__ = [
    "ApiResponse",
    "AttemptOutcome",
    "NetworkFailure",
    "RelayExhausted",
    "RelayRejected",
    "RelayRequest",
    "RelayResult",
    "RelaySuccess",
    "ServerError",
    "Success",
    "UpstreamError",
]
