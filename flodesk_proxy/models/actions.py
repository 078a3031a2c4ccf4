"""Upstream action model.

An ``ActionRequest`` names one of a closed set of Flodesk actions, carries the
caller's API key, and a payload record whose type is fixed per action. The
upstream gateway answers with an ``ActionSuccess`` or ``ActionFailure``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ActionName(str, Enum):
    """Supported upstream actions."""

    GET_ALL_SUBSCRIBERS = "getAllSubscribers"
    GET_SUBSCRIBER = "getSubscriber"
    CREATE_OR_UPDATE_SUBSCRIBER = "createOrUpdateSubscriber"
    ADD_TO_SEGMENTS = "addToSegments"
    REMOVE_FROM_SEGMENT = "removeFromSegment"
    UPDATE_SUBSCRIBER_SEGMENTS = "updateSubscriberSegments"
    UNSUBSCRIBE_FROM_ALL = "unsubscribeFromAll"
    GET_SEGMENT = "getSegment"
    GET_ALL_SEGMENTS = "getAllSegments"
    GET_CUSTOM_FIELDS = "getCustomFields"


# ---------------------------------------------------------------------------
# Payload records
# ---------------------------------------------------------------------------


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Payload keyed the way the upstream contract names its fields."""
        return self.model_dump(by_alias=True)


class EmptyPayload(_Payload):
    """No arguments."""


class SubscriberListPayload(_Payload):
    """One page of the subscriber list; ``per_page`` falls back to the configured size."""

    page: int = Field(default=1, ge=1)
    per_page: int | None = Field(default=None, ge=1, le=100)


class SubscriberLookupPayload(_Payload):
    email: str = Field(..., min_length=1)
    segments_only: bool = Field(default=True, alias="segmentsOnly")


class SubscriberUpsertPayload(_Payload):
    """Full subscriber body; fields other than ``email`` are forwarded as-is."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    email: str = Field(..., min_length=1)


class AddToSegmentsPayload(_Payload):
    email: str = Field(..., min_length=1)
    segment_ids: list[Any] = Field(..., min_length=1, alias="segmentIds")


class SegmentIdsPayload(_Payload):
    """Used by removeFromSegment and updateSubscriberSegments (snake_case key)."""

    email: str = Field(..., min_length=1)
    segment_ids: list[Any] = Field(..., min_length=1)


class UnsubscribePayload(_Payload):
    email: str = Field(..., min_length=1)


class SegmentLookupPayload(_Payload):
    id: str = Field(..., min_length=1)


PAYLOAD_TYPES: dict[ActionName, type[_Payload]] = {
    ActionName.GET_ALL_SUBSCRIBERS: SubscriberListPayload,
    ActionName.GET_SUBSCRIBER: SubscriberLookupPayload,
    ActionName.CREATE_OR_UPDATE_SUBSCRIBER: SubscriberUpsertPayload,
    ActionName.ADD_TO_SEGMENTS: AddToSegmentsPayload,
    ActionName.REMOVE_FROM_SEGMENT: SegmentIdsPayload,
    ActionName.UPDATE_SUBSCRIBER_SEGMENTS: SegmentIdsPayload,
    ActionName.UNSUBSCRIBE_FROM_ALL: UnsubscribePayload,
    ActionName.GET_SEGMENT: SegmentLookupPayload,
    ActionName.GET_ALL_SEGMENTS: EmptyPayload,
    ActionName.GET_CUSTOM_FIELDS: EmptyPayload,
}


# ---------------------------------------------------------------------------
# Request / result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ActionRequest:
    """A validated request for one upstream action."""

    action: ActionName
    api_key: str = field(repr=False)
    payload: _Payload

    def __post_init__(self) -> None:
        expected = PAYLOAD_TYPES[self.action]
        if not isinstance(self.payload, expected):
            raise TypeError(
                f"{self.action.value} expects {expected.__name__}, "
                f"got {type(self.payload).__name__}"
            )


@dataclass(frozen=True)
class ActionSuccess:
    """Upstream call succeeded; ``body`` is merged into the envelope."""

    body: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ActionFailure:
    """Upstream call failed."""

    status_code: int
    message: str
    error: Any = None


ActionResult = ActionSuccess | ActionFailure
