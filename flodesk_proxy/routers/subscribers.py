"""Subscriber endpoints.

- GET    {prefix}/subscribers                      — list (?page=, ?per_page=), or one subscriber with ?id=
- GET    {prefix}/subscribers/{email}              — one subscriber's segments
- POST   {prefix}/subscribers                      — create or update a subscriber
- POST   {prefix}/subscribers/{email}/segments     — add to segments
- DELETE {prefix}/subscribers/{email}/segments     — remove from segments
- PATCH  {prefix}/subscribers/{email}/segments     — replace segment membership
- POST   {prefix}/subscribers/{email}/unsubscribe  — unsubscribe from all
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse

from flodesk_proxy.middleware.auth import require_api_key
from flodesk_proxy.models.actions import ActionName
from flodesk_proxy.models.normalizer import normalize_result
from flodesk_proxy.services.action_dispatcher import ActionDispatcher
from flodesk_proxy.validators.request_validator import (
    build_add_to_segments,
    build_get_subscriber,
    build_list_subscribers,
    build_segment_ids_action,
    build_unsubscribe,
    build_upsert_subscriber,
)

logger = logging.getLogger(__name__)


def create_subscribers_router(
    *, dispatcher: ActionDispatcher, prefix: str = "/api"
) -> APIRouter:
    """Factory that creates the subscribers router with an injected dispatcher."""

    subscribers_router = APIRouter(prefix=f"{prefix}/subscribers", tags=["subscribers"])

    @subscribers_router.get("")
    async def list_or_get_subscriber(
        id: str | None = None,
        page: int = Query(1, ge=1),
        per_page: int | None = Query(None, ge=1, le=100),
        api_key: str = Depends(require_api_key),
    ) -> JSONResponse:
        if id:
            action_request = build_get_subscriber(api_key, id)
        else:
            action_request = build_list_subscribers(api_key, page, per_page)
        return normalize_result(await dispatcher.dispatch(action_request))

    @subscribers_router.get("/{email}")
    async def get_subscriber(
        email: str, api_key: str = Depends(require_api_key)
    ) -> JSONResponse:
        action_request = build_get_subscriber(api_key, email)
        return normalize_result(await dispatcher.dispatch(action_request))

    @subscribers_router.post("")
    async def create_or_update_subscriber(
        body: dict[str, Any] = Body(default_factory=dict),
        api_key: str = Depends(require_api_key),
    ) -> JSONResponse:
        action_request = build_upsert_subscriber(api_key, body)
        return normalize_result(await dispatcher.dispatch(action_request))

    @subscribers_router.post("/{email}/segments")
    async def add_to_segments(
        email: str,
        body: dict[str, Any] = Body(default_factory=dict),
        api_key: str = Depends(require_api_key),
    ) -> JSONResponse:
        action_request = build_add_to_segments(api_key, email, body)
        return normalize_result(await dispatcher.dispatch(action_request))

    @subscribers_router.delete("/{email}/segments")
    async def remove_from_segment(
        email: str,
        request: Request,
        body: dict[str, Any] = Body(default_factory=dict),
        api_key: str = Depends(require_api_key),
    ) -> JSONResponse:
        action_request = build_segment_ids_action(
            ActionName.REMOVE_FROM_SEGMENT, api_key, email, body
        )
        logger.info(
            "DELETE segments request for %d segment(s)",
            len(action_request.payload.segment_ids),
            extra={"path": request.url.path, "method": "DELETE"},
        )
        return normalize_result(await dispatcher.dispatch(action_request))

    @subscribers_router.patch("/{email}/segments")
    async def update_subscriber_segments(
        email: str,
        body: dict[str, Any] = Body(default_factory=dict),
        api_key: str = Depends(require_api_key),
    ) -> JSONResponse:
        action_request = build_segment_ids_action(
            ActionName.UPDATE_SUBSCRIBER_SEGMENTS, api_key, email, body
        )
        return normalize_result(await dispatcher.dispatch(action_request))

    @subscribers_router.post("/{email}/unsubscribe")
    async def unsubscribe_from_all(
        email: str, api_key: str = Depends(require_api_key)
    ) -> JSONResponse:
        action_request = build_unsubscribe(api_key, email)
        return normalize_result(await dispatcher.dispatch(action_request))

    return subscribers_router
