"""Property tests for request validation on the segment and subscriber routes."""

from __future__ import annotations

from urllib.parse import quote

from fastapi.testclient import TestClient
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from flodesk_proxy.config.settings import ProxySettings
from flodesk_proxy.main import create_app
from flodesk_proxy.models.actions import ActionName
from flodesk_proxy.validators.request_validator import decode_email
from tests.conftest import FakeGateway, FakeSegmentsService, basic_auth, emails, segment_ids

_gateway = FakeGateway()
_client = TestClient(
    create_app(
        ProxySettings(log_format="text"),
        gateway=_gateway,
        segments_service=FakeSegmentsService(),
    ),
    raise_server_exceptions=False,
)
_AUTH = basic_auth("prop-key")


@settings(max_examples=200)
@given(email=emails)
def test_decode_email_is_idempotent(email: str) -> None:
    once = decode_email(quote(email, safe=""))
    assert once == email
    assert decode_email(once) == email


@settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
@given(email=emails, encode=st.booleans())
def test_segment_lookup_resolves_same_email(email: str, encode: bool) -> None:
    _gateway.requests.clear()
    raw = quote(email, safe="") if encode else email
    resp = _client.get(f"/api/segments?id={raw}", headers=_AUTH)

    assert resp.status_code == 200
    request = _gateway.requests[-1]
    assert request.action is ActionName.GET_SEGMENT
    assert request.payload.id == email


@settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
@given(
    method=st.sampled_from(["POST", "DELETE", "PATCH"]),
    body=st.one_of(
        st.just({}),
        st.just({"segment_ids": []}),
        st.fixed_dictionaries({"segment_ids": st.text(max_size=10)}),
        st.fixed_dictionaries({"segment_ids": st.integers()}),
        st.fixed_dictionaries({"segmentIds": st.just([])}),
    ),
)
def test_bad_segment_ids_never_reach_gateway(method: str, body: dict) -> None:
    _gateway.requests.clear()
    resp = _client.request(
        method, "/api/subscribers/foo@example.com/segments", json=body, headers=_AUTH
    )

    assert resp.status_code == 400
    assert resp.json() == {
        "success": False,
        "message": "segment_ids array is required in request body",
    }
    assert _gateway.requests == []


@settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
@given(email=emails, ids=segment_ids)
def test_valid_segment_ids_are_forwarded_unchanged(email: str, ids: list[str]) -> None:
    _gateway.requests.clear()
    resp = _client.post(
        f"/api/subscribers/{quote(email, safe='')}/segments",
        json={"segment_ids": ids},
        headers=_AUTH,
    )

    assert resp.status_code == 200
    assert _gateway.requests[-1].payload.to_wire() == {"email": email, "segmentIds": ids}
