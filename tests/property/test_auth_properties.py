"""Property tests for API key extraction and route authentication."""

from __future__ import annotations

import base64

from fastapi.testclient import TestClient
from hypothesis import HealthCheck, assume, given, settings
from hypothesis import strategies as st

from flodesk_proxy.config.settings import ProxySettings
from flodesk_proxy.main import create_app
from flodesk_proxy.middleware.auth import extract_api_key
from tests.conftest import FakeGateway, FakeSegmentsService, api_keys, basic_auth, passwords


def _basic(raw: str) -> str:
    return "Basic " + base64.b64encode(raw.encode("utf-8")).decode("ascii")


@settings(max_examples=200)
@given(key=api_keys, password=passwords)
def test_basic_user_pass_yields_user(key: str, password: str) -> None:
    assert extract_api_key(_basic(f"{key}:{password}")) == key


@settings(max_examples=200)
@given(key=api_keys)
def test_basic_without_colon_yields_whole_text(key: str) -> None:
    assert extract_api_key(_basic(key)) == key


@settings(max_examples=200)
@given(header=st.text(min_size=1, max_size=100))
def test_non_basic_header_is_taken_verbatim(header: str) -> None:
    assume(not header.startswith("Basic "))
    assert extract_api_key(header) == header


@settings(max_examples=200)
@given(header=st.text(max_size=100))
def test_extractor_never_raises(header: str) -> None:
    result = extract_api_key("Basic " + header)
    assert result is None or isinstance(result, str)


# ---------------------------------------------------------------------------
# Route-level: the extracted key is what reaches the gateway
# ---------------------------------------------------------------------------

_gateway = FakeGateway()
_client = TestClient(
    create_app(
        ProxySettings(log_format="text"),
        gateway=_gateway,
        segments_service=FakeSegmentsService(),
    ),
    raise_server_exceptions=False,
)


@settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
@given(key=api_keys, password=passwords)
def test_gateway_receives_extracted_key(key: str, password: str) -> None:
    _gateway.requests.clear()
    resp = _client.get("/api/custom-fields", headers=basic_auth(key, password))
    assert resp.status_code == 200
    assert _gateway.requests[-1].api_key == key
