"""API key extraction from the Authorization header.

Callers send their Flodesk API key as the Basic Auth username
(``Authorization: Basic base64(api_key:)``). For backward compatibility any
other header value is taken verbatim as the key.

SECURITY: The header value and the extracted key are never logged.
"""

from __future__ import annotations

import base64
import logging

from fastapi import Request

from flodesk_proxy.middleware.error_handler import MissingCredentialError

logger = logging.getLogger(__name__)

_BASIC_PREFIX = "Basic "


def extract_api_key(header: str | None) -> str | None:
    """Return the API key carried by an Authorization header value.

    Returns ``None`` when the header is absent, empty, or carries Basic
    credentials that cannot be decoded. Never raises.
    """
    if not header:
        return None

    if header.startswith(_BASIC_PREFIX):
        encoded = header[len(_BASIC_PREFIX):].strip()
        # Clients may omit the trailing "=" padding
        encoded += "=" * (-len(encoded) % 4)
        try:
            credentials = base64.b64decode(encoded, validate=True).decode("utf-8")
        except ValueError as exc:
            logger.warning(
                "Error decoding Basic Auth header: %s",
                exc.__class__.__name__,
                extra={"event": "auth_failure", "reason": "undecodable_basic_auth"},
            )
            return None
        api_key = credentials.split(":", 1)[0]
        return api_key or None

    return header


async def require_api_key(request: Request) -> str:
    """FastAPI dependency — the caller's API key, or 401 when it is missing."""
    api_key = extract_api_key(request.headers.get("authorization"))
    if api_key is None:
        source_ip = request.client.host if request.client else "unknown"
        logger.warning(
            "Missing API key",
            extra={
                "event": "auth_failure",
                "reason": "missing_api_key",
                "source_ip": source_ip,
                "path": request.url.path,
            },
        )
        raise MissingCredentialError()
    return api_key
