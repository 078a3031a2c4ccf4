"""Global error hierarchy and FastAPI exception handlers.

All proxy-specific errors extend ProxyError. The FastAPI exception handlers
catch these errors (plus Pydantic's RequestValidationError, Starlette routing
errors and unhandled exceptions) and return a consistent JSON envelope:
{ success, message, error?, ... }.
"""

from __future__ import annotations

import logging
import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class ProxyError(Exception):
    """Base error for all proxy-specific errors."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, error: Any = None) -> None:
        self.message = message or self.__class__.message
        self.error = error
        super().__init__(self.message)


class MissingCredentialError(ProxyError):
    """No usable API key in the Authorization header."""

    status_code = 401
    message = "API key is required in Authorization header (Basic Auth)"


class ValidationError(ProxyError):
    """A required path, query or body field is missing or malformed."""

    status_code = 400
    message = "Validation error"


class UpstreamError(ProxyError):
    """The Flodesk API rejected or failed a call.

    Carries the upstream HTTP status (when one was received) and the decoded
    upstream response body.
    """

    message = "Flodesk API request failed"

    def __init__(
        self,
        message: str | None = None,
        error: Any = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, error)
        self.upstream_status = status_code
        self.status_code = status_code if status_code and status_code >= 400 else 500


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------


def _envelope(
    status_code: int,
    message: str | None = None,
    error: Any = None,
    **extra: Any,
) -> JSONResponse:
    """Build a JSON envelope error response, omitting unset fields."""
    content: dict[str, Any] = {"success": False}
    if message is not None:
        content["message"] = message
    if error is not None:
        content["error"] = error
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def _original_url(request: Request) -> str:
    """Path plus query string, as the caller sent it."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


async def _proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    """Handle ProxyError subclasses."""
    logger.warning(
        "%s on %s %s: %s",
        exc.__class__.__name__,
        request.method,
        request.url.path,
        exc.message,
        extra={
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
        },
    )
    return _envelope(exc.status_code, exc.message, exc.error)


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI / Pydantic RequestValidationError (400)."""
    field_errors = [
        {
            "field": " -> ".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    return _envelope(400, "Validation error", field_errors)


async def _http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Unmatched routes and unsupported methods both answer 404."""
    if exc.status_code in (404, 405):
        path = _original_url(request)
        logger.warning(
            "404 for path: %s",
            path,
            extra={"path": request.url.path, "method": request.method, "status_code": 404},
        )
        return _envelope(404, "Endpoint not found", path=path)
    return _envelope(exc.status_code, str(exc.detail))


async def unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — log traceback, return generic 500."""
    logger.error(
        "Unhandled exception: %s\n%s",
        exc,
        traceback.format_exc(),
    )
    return _envelope(500, "An unexpected error occurred", str(exc))


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Answer uncaught exceptions with the 500 envelope from inside the stack.

    Must be added before the other middleware so CORS and ``X-Request-ID``
    headers still apply to the response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return await unhandled_error_handler(request, exc)


# ---------------------------------------------------------------------------
# Registration helper
# ---------------------------------------------------------------------------


def register_error_handlers(app: FastAPI) -> None:
    """Wire up all exception handlers on the FastAPI application."""
    app.add_exception_handler(ProxyError, _proxy_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)  # type: ignore[arg-type]
