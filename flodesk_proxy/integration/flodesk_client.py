"""HTTP client for the Flodesk v1 API.

Authenticates with the caller's API key as the Basic Auth username. A fresh
``httpx.AsyncClient`` is opened per call; connections are not shared between
inbound requests.

Non-2xx responses raise ``UpstreamError`` carrying the upstream status and
decoded body. Transport failures propagate as ``httpx.HTTPError``. There are
no retries at this layer.

SECURITY: Never logs the API key.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from flodesk_proxy.middleware.error_handler import UpstreamError
from flodesk_proxy.models.normalizer import upstream_message

logger = logging.getLogger(__name__)


class FlodeskClient:
    """Thin async wrapper over the Flodesk REST endpoints.

    Parameters
    ----------
    base_url:
        Flodesk API root (e.g. "https://api.flodesk.com/v1").
    timeout_seconds:
        Per-request timeout.
    user_agent:
        ``User-Agent`` header sent upstream.
    """

    def __init__(
        self,
        base_url: str = "https://api.flodesk.com/v1",
        timeout_seconds: float = 30.0,
        user_agent: str = "flodesk-proxy/1.0.0",
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._user_agent = user_agent

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    async def list_subscribers(
        self, api_key: str, page: int = 1, per_page: int = 100
    ) -> dict:
        return await self._request(
            api_key, "GET", "/subscribers", params={"page": page, "per_page": per_page}
        )

    async def get_subscriber(self, api_key: str, id_or_email: str) -> dict:
        return await self._request(api_key, "GET", f"/subscribers/{_segment(id_or_email)}")

    async def upsert_subscriber(self, api_key: str, subscriber: dict[str, Any]) -> dict:
        """Create the subscriber, or update it when the email already exists."""
        return await self._request(api_key, "POST", "/subscribers", json=subscriber)

    async def add_to_segments(
        self, api_key: str, id_or_email: str, segment_ids: list[Any]
    ) -> dict:
        return await self._request(
            api_key,
            "POST",
            f"/subscribers/{_segment(id_or_email)}/segments",
            json={"segment_ids": segment_ids},
        )

    async def remove_from_segments(
        self, api_key: str, id_or_email: str, segment_ids: list[Any]
    ) -> dict:
        return await self._request(
            api_key,
            "DELETE",
            f"/subscribers/{_segment(id_or_email)}/segments",
            json={"segment_ids": segment_ids},
        )

    async def unsubscribe(self, api_key: str, id_or_email: str) -> dict:
        return await self._request(
            api_key, "POST", f"/subscribers/{_segment(id_or_email)}/unsubscribe"
        )

    # ------------------------------------------------------------------
    # Segments and custom fields
    # ------------------------------------------------------------------

    async def list_segments(
        self, api_key: str, page: int = 1, per_page: int = 100
    ) -> dict:
        return await self._request(
            api_key, "GET", "/segments", params={"page": page, "per_page": per_page}
        )

    async def list_custom_fields(self, api_key: str) -> Any:
        return await self._request(api_key, "GET", "/custom-fields")

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(
        self,
        api_key: str,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        async with httpx.AsyncClient(
            auth=httpx.BasicAuth(api_key, ""),
            headers={"User-Agent": self._user_agent, "Accept": "application/json"},
            timeout=self._timeout_seconds,
        ) as client:
            response = await client.request(method, url, params=params, json=json)

        if response.status_code >= 400:
            body = _decode(response)
            logger.warning(
                "Flodesk API returned %d for %s %s",
                response.status_code,
                method,
                path,
                extra={"upstream_status": response.status_code, "method": method},
            )
            raise UpstreamError(
                upstream_message(body, f"Flodesk API returned {response.status_code}"),
                error=body,
                status_code=response.status_code,
            )

        if response.status_code == 204 or not response.content:
            return {}
        return _decode(response)


def _segment(value: str) -> str:
    """Percent-encode a value for use as a single path segment."""
    return quote(value, safe="")


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
