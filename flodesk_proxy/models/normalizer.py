"""Response normalization logic.

Turns upstream results into the uniform response envelope:
- ``ActionSuccess`` bodies are merged into ``{ success: true, ... }`` (200)
- ``ActionFailure`` becomes ``{ success: false, message, error }`` with the
  upstream status
- Flodesk segment and custom-field objects are reshaped into ``{ value, label }``
  option records for select-style consumers
"""

from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse

from flodesk_proxy.models.actions import ActionFailure, ActionResult, ActionSuccess
from flodesk_proxy.models.responses import ApiResponse


def segment_option(segment: dict[str, Any]) -> dict[str, Any]:
    """Upstream segment object with ``value``/``label`` keys added."""
    return {**segment, "value": segment.get("id"), "label": segment.get("name")}


def custom_field_option(custom_field: dict[str, Any]) -> dict[str, Any]:
    """Upstream custom field with ``value``/``label`` keys added."""
    return {
        **custom_field,
        "value": custom_field.get("key"),
        "label": custom_field.get("label") or custom_field.get("key"),
    }


def subscriber_segment_options(subscriber: dict[str, Any]) -> list[dict[str, Any]]:
    """Segments a subscriber belongs to, as option records."""
    segments = subscriber.get("segments") or []
    return [segment_option(s) for s in segments if isinstance(s, dict)]


def segment_ids_of(subscriber: dict[str, Any]) -> list[Any]:
    """IDs of the segments a subscriber currently belongs to."""
    return [s.get("id") for s in subscriber.get("segments") or [] if isinstance(s, dict)]


def upstream_message(body: Any, default: str) -> str:
    """Best-effort human message from an upstream error body."""
    if isinstance(body, dict):
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    if isinstance(body, str) and body:
        return body
    return default


def success_response(body: dict[str, Any] | None = None, status_code: int = 200) -> JSONResponse:
    """``{ success: true, ...body }``."""
    envelope = ApiResponse(success=True, **(body or {}))
    return JSONResponse(status_code=status_code, content=envelope.to_body())


def failure_response(
    status_code: int,
    message: str | None = None,
    error: Any = None,
    **extra: Any,
) -> JSONResponse:
    """``{ success: false, message?, error?, ... }``."""
    envelope = ApiResponse(success=False, message=message, error=error, **extra)
    return JSONResponse(status_code=status_code, content=envelope.to_body())


def normalize_result(result: ActionResult) -> JSONResponse:
    """Map a gateway result onto an HTTP response."""
    if isinstance(result, ActionSuccess):
        return success_response(result.body)
    if isinstance(result, ActionFailure):
        return failure_response(result.status_code, result.message, result.error)
    raise TypeError(f"Unexpected action result: {type(result).__name__}")
