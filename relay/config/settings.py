"""Pydantic Settings for the relay service.

Environment variable names carry no prefix so that the relay can be configured
with the same names in every deployment, e.g. ``PROXIES``, ``MAX_RETRIES``,
``REQUEST_TIMEOUT_MS``.

Numeric settings never fail startup: a value that is not a number or is out of
range is replaced by the field default and a warning is logged.
"""

from __future__ import annotations

import logging

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings

from relay.proxy.pool import parse_proxy_list

logger = logging.getLogger(__name__)

# Smallest accepted value per numeric field.
_MINIMUMS: dict[str, int] = {
    "request_timeout_ms": 1,
    "max_retries": 1,
    "backoff_base_ms": 0,
    "proxy_mark_down_ms": 0,
}


class RelaySettings(BaseSettings):
    """Relay service configuration validated from environment variables."""

    # Service
    port: int = 8000
    log_level: str = "INFO"

    # Proxy pool: JSON array or comma-separated list of proxy base URLs
    proxies: str | None = None

    # Retry / health tuning
    request_timeout_ms: int = 20000
    max_retries: int = 4
    backoff_base_ms: int = 400
    proxy_mark_down_ms: int = 45000

    # When every proxy is marked down, attempt the target directly
    direct_fallback: bool = True

    model_config = {"env_prefix": ""}

    @field_validator(*_MINIMUMS, mode="before")
    @classmethod
    def _fallback_to_default(cls, value: object, info: ValidationInfo) -> object:
        default = cls.model_fields[info.field_name].default
        try:
            number = int(float(value))  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError):
            logger.warning(
                "Invalid value %r for %s, using default %d",
                value,
                info.field_name,
                default,
            )
            return default

        if number < _MINIMUMS[info.field_name]:
            logger.warning(
                "Out of range value %r for %s, using default %d",
                value,
                info.field_name,
                default,
            )
            return default
        return number

    @property
    def proxy_pool(self) -> tuple[str, ...]:
        """The ordered, non-empty proxy pool built from ``proxies``."""
        return parse_proxy_list(self.proxies)
