"""Per-route request validation and action request assembly.

Each ``build_*`` function checks the fields its route requires, raises
``ValidationError`` (400) on the first violation, and otherwise returns the
``ActionRequest`` the dispatcher should execute.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import unquote

from flodesk_proxy.middleware.error_handler import ValidationError
from flodesk_proxy.models.actions import (
    ActionName,
    ActionRequest,
    AddToSegmentsPayload,
    EmptyPayload,
    SegmentIdsPayload,
    SegmentLookupPayload,
    SubscriberListPayload,
    SubscriberLookupPayload,
    SubscriberUpsertPayload,
    UnsubscribePayload,
)

# An encoded "@" that survived transport-level decoding
_ENCODED_AT = "%40"

EMAIL_REQUIRED = "Email is required"
UPSERT_EMAIL_REQUIRED = "Email is required for subscriber creation/update"
SEGMENT_IDS_REQUIRED = "segment_ids array is required in request body"


def decode_email(value: str | None) -> str:
    """Normalize an email taken from a path or query parameter.

    The ASGI server has already decoded the value once. A second pass is
    applied only if an encoded ``@`` is still present, so single- and
    double-encoded forms of the same address resolve identically.
    """
    if not value:
        return ""
    if _ENCODED_AT in value:
        value = unquote(value)
    return value.strip()


def require_segment_ids(body: dict[str, Any]) -> list[Any]:
    """``segment_ids`` (or ``segmentIds``) as a non-empty list."""
    segment_ids = body.get("segment_ids") or body.get("segmentIds")
    if not segment_ids or not isinstance(segment_ids, list):
        raise ValidationError(SEGMENT_IDS_REQUIRED)
    return segment_ids


def _require_email(raw: str | None, message: str = EMAIL_REQUIRED) -> str:
    email = decode_email(raw)
    if not email:
        raise ValidationError(message)
    return email


# ---------------------------------------------------------------------------
# Request builders
# ---------------------------------------------------------------------------


def build_list_subscribers(
    api_key: str, page: int = 1, per_page: int | None = None
) -> ActionRequest:
    return ActionRequest(
        ActionName.GET_ALL_SUBSCRIBERS,
        api_key,
        SubscriberListPayload(page=page, per_page=per_page),
    )


def build_get_subscriber(api_key: str, raw_email: str | None) -> ActionRequest:
    email = _require_email(raw_email)
    return ActionRequest(
        ActionName.GET_SUBSCRIBER,
        api_key,
        SubscriberLookupPayload(email=email, segments_only=True),
    )


def build_upsert_subscriber(api_key: str, body: dict[str, Any]) -> ActionRequest:
    email = body.get("email")
    if not email or not isinstance(email, str):
        raise ValidationError(UPSERT_EMAIL_REQUIRED)
    return ActionRequest(
        ActionName.CREATE_OR_UPDATE_SUBSCRIBER,
        api_key,
        SubscriberUpsertPayload.model_validate(body),
    )


def build_add_to_segments(
    api_key: str, raw_email: str | None, body: dict[str, Any]
) -> ActionRequest:
    email = _require_email(raw_email)
    segment_ids = require_segment_ids(body)
    return ActionRequest(
        ActionName.ADD_TO_SEGMENTS,
        api_key,
        AddToSegmentsPayload(email=email, segment_ids=segment_ids),
    )


def build_segment_ids_action(
    action: ActionName, api_key: str, raw_email: str | None, body: dict[str, Any]
) -> ActionRequest:
    """removeFromSegment / updateSubscriberSegments."""
    email = _require_email(raw_email)
    segment_ids = require_segment_ids(body)
    return ActionRequest(
        action,
        api_key,
        SegmentIdsPayload(email=email, segment_ids=segment_ids),
    )


def build_unsubscribe(api_key: str, raw_email: str | None) -> ActionRequest:
    email = _require_email(raw_email)
    return ActionRequest(
        ActionName.UNSUBSCRIBE_FROM_ALL, api_key, UnsubscribePayload(email=email)
    )


def build_get_segment(api_key: str, raw_id: str | None) -> ActionRequest:
    email = _require_email(raw_id)
    return ActionRequest(
        ActionName.GET_SEGMENT, api_key, SegmentLookupPayload(id=email)
    )


def build_get_custom_fields(api_key: str) -> ActionRequest:
    return ActionRequest(ActionName.GET_CUSTOM_FIELDS, api_key, EmptyPayload())
