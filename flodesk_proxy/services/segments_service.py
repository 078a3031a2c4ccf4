"""Segment catalog listing.

Walks every page of ``GET /segments`` and returns the full catalog as
``{ value, label }`` option records.
"""

from __future__ import annotations

import logging

from flodesk_proxy.integration.flodesk_client import FlodeskClient
from flodesk_proxy.models.normalizer import segment_option

logger = logging.getLogger(__name__)

# Upper bound on pages fetched for one listing
_MAX_PAGES = 50


class SegmentsService:
    """Lists every segment visible to an API key."""

    def __init__(self, *, client: FlodeskClient, page_size: int = 100) -> None:
        self._client = client
        self._page_size = page_size

    async def get_all_segments(self, api_key: str) -> list[dict]:
        """Return all segments as option records.

        Raises
        ------
        UpstreamError
            If Flodesk rejects any page request.
        httpx.HTTPError
            If Flodesk is unreachable.
        """
        segments: list[dict] = []
        page = 1
        while page <= _MAX_PAGES:
            response = await self._client.list_segments(
                api_key, page=page, per_page=self._page_size
            )
            if not isinstance(response, dict):
                break
            items = response.get("data") or []
            segments.extend(segment_option(item) for item in items)

            meta = response.get("meta") or {}
            total_pages = meta.get("total_pages") or 1
            if not items or page >= total_pages:
                break
            page += 1

        logger.debug("Listed %d segments across %d page(s)", len(segments), page)
        return segments
