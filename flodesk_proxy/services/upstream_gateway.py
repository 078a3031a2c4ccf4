"""Execution of named actions against the Flodesk API.

``FlodeskGateway.execute`` runs one ``ActionRequest`` and returns an explicit
``ActionSuccess`` or ``ActionFailure``; upstream and transport errors never
escape as exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from flodesk_proxy.integration.flodesk_client import FlodeskClient
from flodesk_proxy.middleware.error_handler import UpstreamError
from flodesk_proxy.models.actions import (
    ActionFailure,
    ActionName,
    ActionRequest,
    ActionResult,
    ActionSuccess,
)
from flodesk_proxy.models.normalizer import (
    custom_field_option,
    segment_ids_of,
    subscriber_segment_options,
)

logger = logging.getLogger(__name__)

UNREACHABLE_MESSAGE = "Failed to reach Flodesk API"

_Handler = Callable[[ActionRequest], Awaitable[dict[str, Any]]]


class FlodeskGateway:
    """Maps each ``ActionName`` onto one or more Flodesk API calls.

    ``getAllSegments`` is not handled here; the segments route lists the
    catalog through ``SegmentsService`` directly.

    Parameters
    ----------
    client:
        Flodesk HTTP client.
    page_size:
        Default page size for ``getAllSubscribers``.
    """

    def __init__(
        self,
        *,
        client: FlodeskClient,
        page_size: int = 100,
    ) -> None:
        self._client = client
        self._page_size = page_size
        self._handlers: dict[ActionName, _Handler] = {
            ActionName.GET_ALL_SUBSCRIBERS: self._get_all_subscribers,
            ActionName.GET_SUBSCRIBER: self._get_subscriber,
            ActionName.CREATE_OR_UPDATE_SUBSCRIBER: self._create_or_update_subscriber,
            ActionName.ADD_TO_SEGMENTS: self._add_to_segments,
            ActionName.REMOVE_FROM_SEGMENT: self._remove_from_segment,
            ActionName.UPDATE_SUBSCRIBER_SEGMENTS: self._update_subscriber_segments,
            ActionName.UNSUBSCRIBE_FROM_ALL: self._unsubscribe_from_all,
            ActionName.GET_SEGMENT: self._get_segment,
            ActionName.GET_CUSTOM_FIELDS: self._get_custom_fields,
        }

    async def execute(self, request: ActionRequest) -> ActionResult:
        """Run one action and report the outcome as a result variant."""
        handler = self._handlers.get(request.action)
        if handler is None:
            raise ValueError(f"Unsupported gateway action: {request.action.value}")
        try:
            body = await handler(request)
        except UpstreamError as exc:
            return ActionFailure(exc.status_code, exc.message, exc.error)
        except httpx.HTTPError as exc:
            logger.warning(
                "Flodesk API unreachable for %s: %s",
                request.action.value,
                exc,
                extra={"action": request.action.value},
            )
            return ActionFailure(500, UNREACHABLE_MESSAGE, str(exc))
        return ActionSuccess(body)

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    async def _get_all_subscribers(self, request: ActionRequest) -> dict[str, Any]:
        payload = request.payload
        response = await self._client.list_subscribers(
            request.api_key,
            page=payload.page,
            per_page=payload.per_page or self._page_size,
        )
        return {"data": response.get("data", []), "meta": response.get("meta")}

    async def _get_subscriber(self, request: ActionRequest) -> dict[str, Any]:
        payload = request.payload
        subscriber = await self._client.get_subscriber(request.api_key, payload.email)
        if payload.segments_only:
            return {"options": subscriber_segment_options(subscriber)}
        return {"data": subscriber}

    async def _create_or_update_subscriber(self, request: ActionRequest) -> dict[str, Any]:
        subscriber = await self._client.upsert_subscriber(
            request.api_key, request.payload.to_wire()
        )
        return {"data": subscriber}

    async def _add_to_segments(self, request: ActionRequest) -> dict[str, Any]:
        payload = request.payload
        subscriber = await self._client.add_to_segments(
            request.api_key, payload.email, payload.segment_ids
        )
        return {"message": "Subscriber added to segments", "data": subscriber}

    async def _remove_from_segment(self, request: ActionRequest) -> dict[str, Any]:
        payload = request.payload
        subscriber = await self._client.remove_from_segments(
            request.api_key, payload.email, payload.segment_ids
        )
        return {"message": "Subscriber removed from segments", "data": subscriber}

    async def _update_subscriber_segments(self, request: ActionRequest) -> dict[str, Any]:
        """Make the subscriber's membership equal the requested segment list."""
        payload = request.payload
        subscriber = await self._client.get_subscriber(request.api_key, payload.email)
        current = segment_ids_of(subscriber)

        to_add = [sid for sid in payload.segment_ids if sid not in current]
        to_remove = [sid for sid in current if sid not in payload.segment_ids]

        if to_add:
            await self._client.add_to_segments(request.api_key, payload.email, to_add)
        if to_remove:
            await self._client.remove_from_segments(
                request.api_key, payload.email, to_remove
            )

        return {
            "message": "Subscriber segments updated",
            "data": {"email": payload.email, "added": to_add, "removed": to_remove},
        }

    async def _unsubscribe_from_all(self, request: ActionRequest) -> dict[str, Any]:
        subscriber = await self._client.unsubscribe(request.api_key, request.payload.email)
        return {"message": "Subscriber unsubscribed from all", "data": subscriber}

    # ------------------------------------------------------------------
    # Segments and custom fields
    # ------------------------------------------------------------------

    async def _get_segment(self, request: ActionRequest) -> dict[str, Any]:
        # The id is a subscriber email; answer with that subscriber's segments.
        subscriber = await self._client.get_subscriber(request.api_key, request.payload.id)
        return {"options": subscriber_segment_options(subscriber)}

    async def _get_custom_fields(self, request: ActionRequest) -> dict[str, Any]:
        response = await self._client.list_custom_fields(request.api_key)
        fields = response.get("data", []) if isinstance(response, dict) else response
        return {"options": [custom_field_option(f) for f in fields or []]}
