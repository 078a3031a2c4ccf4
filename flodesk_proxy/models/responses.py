"""Generic API response envelope model.

All API responses are wrapped in this envelope for consistency:
{ success: bool, message?: str, error?: Any, data?: Any, options?: list }
Unset fields are omitted from the serialized body.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class ApiResponse(BaseModel):
    """JSON envelope for all API responses."""

    model_config = ConfigDict(extra="allow")

    success: bool
    message: str | None = None
    error: Any = None
    data: Any = None
    options: list | None = None

    def to_body(self) -> dict:
        """Serialize, dropping top-level fields that are unset (``None``)."""
        return {k: v for k, v in self.model_dump(mode="json").items() if v is not None}
