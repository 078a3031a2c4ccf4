"""Unit tests for response normalization helpers."""

from __future__ import annotations

import json

import pytest

from flodesk_proxy.models.actions import ActionFailure, ActionSuccess
from flodesk_proxy.models.normalizer import (
    custom_field_option,
    failure_response,
    normalize_result,
    segment_ids_of,
    segment_option,
    subscriber_segment_options,
    success_response,
    upstream_message,
)
from flodesk_proxy.models.responses import ApiResponse


def _body(response) -> dict:
    return json.loads(response.body)


class TestOptions:
    def test_segment_option_keeps_upstream_fields(self):
        option = segment_option({"id": "s1", "name": "VIP", "color": "#fff"})
        assert option == {"id": "s1", "name": "VIP", "color": "#fff", "value": "s1", "label": "VIP"}

    def test_custom_field_label_falls_back_to_key(self):
        assert custom_field_option({"key": "plan"})["label"] == "plan"
        assert custom_field_option({"key": "plan", "label": "Plan"})["label"] == "Plan"

    def test_subscriber_segment_options(self):
        subscriber = {"email": "a@b.co", "segments": [{"id": "s1", "name": "A"}, "junk"]}
        assert subscriber_segment_options(subscriber) == [
            {"id": "s1", "name": "A", "value": "s1", "label": "A"}
        ]

    def test_subscriber_without_segments(self):
        assert subscriber_segment_options({"email": "a@b.co", "segments": None}) == []
        assert segment_ids_of({}) == []

    def test_segment_ids_of(self):
        assert segment_ids_of({"segments": [{"id": "s1"}, {"id": "s2"}]}) == ["s1", "s2"]


class TestUpstreamMessage:
    @pytest.mark.parametrize(
        "body,expected",
        [
            ({"message": "Subscriber not found"}, "Subscriber not found"),
            ({"error": "bad key"}, "bad key"),
            ({"message": ""}, "fallback"),
            ("plain text failure", "plain text failure"),
            (None, "fallback"),
            (["list"], "fallback"),
        ],
    )
    def test_extraction(self, body, expected):
        assert upstream_message(body, "fallback") == expected


class TestEnvelopes:
    def test_api_response_drops_unset_fields(self):
        assert ApiResponse(success=True, options=[]).to_body() == {"success": True, "options": []}

    def test_api_response_keeps_nested_nulls(self):
        body = ApiResponse(success=True, data={"first_name": None}).to_body()
        assert body == {"success": True, "data": {"first_name": None}}

    def test_success_response_merges_body(self):
        response = success_response({"data": {"email": "a@b.co"}, "message": "ok"})
        assert response.status_code == 200
        assert _body(response) == {"success": True, "data": {"email": "a@b.co"}, "message": "ok"}

    def test_failure_response_extra_fields(self):
        response = failure_response(500, error="down", options=[])
        assert response.status_code == 500
        assert _body(response) == {"success": False, "error": "down", "options": []}

    def test_normalize_success(self):
        response = normalize_result(ActionSuccess({"options": [1, 2]}))
        assert response.status_code == 200
        assert _body(response) == {"success": True, "options": [1, 2]}

    def test_normalize_failure(self):
        response = normalize_result(ActionFailure(404, "not found", {"message": "not found"}))
        assert response.status_code == 404
        assert _body(response) == {
            "success": False,
            "message": "not found",
            "error": {"message": "not found"},
        }

    def test_normalize_rejects_unknown_result(self):
        with pytest.raises(TypeError):
            normalize_result("nope")  # type: ignore[arg-type]
