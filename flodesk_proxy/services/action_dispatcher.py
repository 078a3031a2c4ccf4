"""Action dispatch.

The dispatcher is the single seam between routes and the upstream gateway:
it hands a validated ``ActionRequest`` to the gateway, logs the outcome, and
turns anything the gateway failed to anticipate into a 500 ``ActionFailure``
so every route still answers with an envelope.
"""

from __future__ import annotations

import logging
import time
from typing import Protocol

from flodesk_proxy.models.actions import ActionFailure, ActionRequest, ActionResult

logger = logging.getLogger(__name__)


class UpstreamGateway(Protocol):
    async def execute(self, request: ActionRequest) -> ActionResult: ...


class ActionDispatcher:
    """Delegates action requests to the upstream gateway."""

    def __init__(self, *, gateway: UpstreamGateway) -> None:
        self._gateway = gateway

    async def dispatch(self, request: ActionRequest) -> ActionResult:
        action = request.action.value
        started = time.monotonic()
        try:
            result = await self._gateway.execute(request)
        except Exception as exc:
            logger.exception(
                "Unexpected error executing %s",
                action,
                extra={"action": action},
            )
            return ActionFailure(500, "Internal server error", str(exc))

        duration_ms = round((time.monotonic() - started) * 1000, 1)
        if isinstance(result, ActionFailure):
            logger.warning(
                "Action %s failed with %d: %s",
                action,
                result.status_code,
                result.message,
                extra={
                    "action": action,
                    "upstream_status": result.status_code,
                    "duration_ms": duration_ms,
                },
            )
        else:
            logger.info(
                "Action %s completed",
                action,
                extra={"action": action, "duration_ms": duration_ms},
            )
        return result
