"""Shared test fixtures and hypothesis strategies for the proxy test suite."""

from __future__ import annotations

import base64

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from hypothesis import strategies as st

from flodesk_proxy.config.settings import ProxySettings
from flodesk_proxy.main import create_app
from flodesk_proxy.models.actions import (
    ActionRequest,
    ActionResult,
    ActionSuccess,
)


# ---------------------------------------------------------------------------
# Fakes for the upstream collaborators
# ---------------------------------------------------------------------------


class FakeGateway:
    """Records every ActionRequest and answers with a canned result."""

    def __init__(self, result: ActionResult | None = None) -> None:
        self.result: ActionResult = result or ActionSuccess({"data": {}})
        self.requests: list[ActionRequest] = []

    async def execute(self, request: ActionRequest) -> ActionResult:
        self.requests.append(request)
        return self.result


class FakeSegmentsService:
    """Returns a fixed catalog, or raises ``error`` when set."""

    def __init__(self, segments: list[dict] | None = None) -> None:
        self.segments = segments or []
        self.error: Exception | None = None
        self.calls: list[str] = []

    async def get_all_segments(self, api_key: str) -> list[dict]:
        self.calls.append(api_key)
        if self.error is not None:
            raise self.error
        return self.segments


def basic_auth(api_key: str, password: str | None = "") -> dict[str, str]:
    """Authorization header carrying ``api_key`` as the Basic username."""
    raw = api_key if password is None else f"{api_key}:{password}"
    encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {encoded}"}


# ---------------------------------------------------------------------------
# Settings / app fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> ProxySettings:
    """Test settings with safe defaults."""
    return ProxySettings(
        flodesk_api_url="https://flodesk.test/v1",
        log_format="text",
        subscribers_page_size=2,
    )


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def segments_service() -> FakeSegmentsService:
    return FakeSegmentsService(
        [
            {"id": "seg-1", "name": "Newsletter", "value": "seg-1", "label": "Newsletter"},
        ]
    )


@pytest.fixture
def app(
    settings: ProxySettings,
    gateway: FakeGateway,
    segments_service: FakeSegmentsService,
) -> FastAPI:
    return create_app(settings, gateway=gateway, segments_service=segments_service)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth() -> dict[str, str]:
    return basic_auth("fd-test-key")


# ---------------------------------------------------------------------------
# Hypothesis strategies (reusable across property tests)
# ---------------------------------------------------------------------------

# API keys: printable, no colon, no surrounding whitespace
api_keys = st.text(
    alphabet=st.characters(codec="utf-8", categories=("L", "N"), include_characters="-_."),
    min_size=1,
    max_size=64,
)

passwords = st.text(
    alphabet=st.characters(codec="utf-8", exclude_categories=("Cs",)),
    max_size=32,
)

emails = st.from_regex(r"[a-z0-9._]{1,20}@[a-z]{2,10}\.[a-z]{2,4}", fullmatch=True)

segment_ids = st.lists(st.from_regex(r"[a-f0-9]{8,24}", fullmatch=True), min_size=1, max_size=10)
