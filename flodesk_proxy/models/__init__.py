"""Public models for the proxy service."""

from flodesk_proxy.models.actions import (
    ActionFailure,
    ActionName,
    ActionRequest,
    ActionResult,
    ActionSuccess,
    AddToSegmentsPayload,
    EmptyPayload,
    SegmentIdsPayload,
    SegmentLookupPayload,
    SubscriberListPayload,
    SubscriberLookupPayload,
    SubscriberUpsertPayload,
    UnsubscribePayload,
)
from flodesk_proxy.models.responses import ApiResponse

__all__ = [
    "ActionFailure",
    "ActionName",
    "ActionRequest",
    "ActionResult",
    "ActionSuccess",
    "AddToSegmentsPayload",
    "ApiResponse",
    "EmptyPayload",
    "SegmentIdsPayload",
    "SegmentLookupPayload",
    "SubscriberListPayload",
    "SubscriberLookupPayload",
    "SubscriberUpsertPayload",
    "UnsubscribePayload",
]
