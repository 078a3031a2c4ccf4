"""Segment endpoints.

- GET {prefix}/segments          — full segment catalog as options
- GET {prefix}/segments?id=email — segments of one subscriber
"""

from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from flodesk_proxy.middleware.auth import require_api_key
from flodesk_proxy.middleware.error_handler import UpstreamError
from flodesk_proxy.models.actions import ActionName
from flodesk_proxy.models.normalizer import (
    failure_response,
    normalize_result,
    success_response,
)
from flodesk_proxy.services.action_dispatcher import ActionDispatcher
from flodesk_proxy.services.segments_service import SegmentsService
from flodesk_proxy.validators.request_validator import build_get_segment

logger = logging.getLogger(__name__)

_LIST_ACTION = {"action": ActionName.GET_ALL_SEGMENTS.value}


def create_segments_router(
    *,
    dispatcher: ActionDispatcher,
    segments_service: SegmentsService,
    prefix: str = "/api",
) -> APIRouter:
    """Factory that creates the segments router with injected dependencies."""

    segments_router = APIRouter(prefix=f"{prefix}/segments", tags=["segments"])

    @segments_router.get("")
    async def list_or_get_segment(
        id: str | None = None, api_key: str = Depends(require_api_key)
    ) -> JSONResponse:
        if id:
            action_request = build_get_segment(api_key, id)
            return normalize_result(await dispatcher.dispatch(action_request))

        try:
            segments = await segments_service.get_all_segments(api_key)
        except UpstreamError as exc:
            logger.warning("Segment listing failed: %s", exc.message, extra=_LIST_ACTION)
            return failure_response(500, error=exc.message, options=[])
        except httpx.HTTPError as exc:
            logger.warning("Segment listing failed: %s", exc, extra=_LIST_ACTION)
            return failure_response(500, error=str(exc), options=[])
        return success_response({"options": segments})

    return segments_router
