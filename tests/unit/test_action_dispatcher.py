"""Unit tests for the action dispatcher."""

from __future__ import annotations

import pytest

from flodesk_proxy.models.actions import (
    ActionFailure,
    ActionName,
    ActionRequest,
    ActionSuccess,
    EmptyPayload,
)
from flodesk_proxy.services.action_dispatcher import ActionDispatcher
from tests.conftest import FakeGateway


class _ExplodingGateway:
    async def execute(self, request: ActionRequest):
        raise KeyError("boom")


def _request() -> ActionRequest:
    return ActionRequest(ActionName.GET_CUSTOM_FIELDS, "k", EmptyPayload())


class TestDispatch:
    @pytest.mark.asyncio
    async def test_delegates_to_gateway(self) -> None:
        gateway = FakeGateway(ActionSuccess({"options": []}))
        dispatcher = ActionDispatcher(gateway=gateway)

        result = await dispatcher.dispatch(_request())

        assert result == ActionSuccess({"options": []})
        assert gateway.requests == [_request()]

    @pytest.mark.asyncio
    async def test_failure_passes_through(self) -> None:
        failure = ActionFailure(403, "Forbidden", {"message": "Forbidden"})
        dispatcher = ActionDispatcher(gateway=FakeGateway(failure))

        assert await dispatcher.dispatch(_request()) is failure

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_500(self) -> None:
        dispatcher = ActionDispatcher(gateway=_ExplodingGateway())

        result = await dispatcher.dispatch(_request())

        assert result == ActionFailure(500, "Internal server error", "'boom'")
