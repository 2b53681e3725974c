"""Pydantic model for the inbound relay payload."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RelayRequest(BaseModel):
    """Inbound relay payload.

    ``targetUrl`` is optional at the model level so that a missing value can
    be reported as a 400 by the handler rather than as a field error.
    """

    target_url: str | None = Field(default=None, alias="targetUrl")
    method: str = "POST"
    headers: dict[str, str] = Field(default_factory=dict)
    body: Any = None

    model_config = {"populate_by_name": True}
