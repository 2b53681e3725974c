"""Generic API response envelope model.

Used by the service endpoints (``/health``):
{ success: bool, data: T | None, error: str | None, meta: dict | None }
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """JSON envelope for service endpoint responses."""

    success: bool
    data: T | None = None
    error: str | None = None
    meta: dict | None = None
