"""Custom field endpoint.

- GET {prefix}/custom-fields — account custom fields as options
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from flodesk_proxy.middleware.auth import require_api_key
from flodesk_proxy.models.normalizer import normalize_result
from flodesk_proxy.services.action_dispatcher import ActionDispatcher
from flodesk_proxy.validators.request_validator import build_get_custom_fields


def create_custom_fields_router(
    *, dispatcher: ActionDispatcher, prefix: str = "/api"
) -> APIRouter:
    """Factory that creates the custom-fields router with an injected dispatcher."""

    custom_fields_router = APIRouter(prefix=f"{prefix}/custom-fields", tags=["custom-fields"])

    @custom_fields_router.get("")
    async def get_custom_fields(api_key: str = Depends(require_api_key)) -> JSONResponse:
        action_request = build_get_custom_fields(api_key)
        return normalize_result(await dispatcher.dispatch(action_request))

    return custom_fields_router
