"""Middleware package — error hierarchy, API key extraction, and request ID."""

from flodesk_proxy.middleware.auth import extract_api_key, require_api_key
from flodesk_proxy.middleware.error_handler import (
    MissingCredentialError,
    ProxyError,
    UnhandledErrorMiddleware,
    UpstreamError,
    ValidationError,
    register_error_handlers,
)
from flodesk_proxy.middleware.request_id import RequestIdMiddleware, request_id_var

__all__ = [
    "MissingCredentialError",
    "ProxyError",
    "RequestIdMiddleware",
    "UnhandledErrorMiddleware",
    "UpstreamError",
    "ValidationError",
    "extract_api_key",
    "register_error_handlers",
    "request_id_var",
    "require_api_key",
]
