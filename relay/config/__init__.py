"""Configuration module — environment settings."""

from relay.config.settings import RelaySettings

__all__ = ["RelaySettings"]
