"""Proxy health data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ProxyHealth:
    """Mark-down window and usage counters for a single proxy."""

    down_until: float = 0.0  # time.monotonic()
    success_count: int = 0
    failure_count: int = 0
