"""Pydantic Settings for the Flodesk proxy service.

All environment variables use the FLODESK_PROXY_ prefix.
Example: FLODESK_PROXY_PORT=3000, FLODESK_PROXY_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class ProxySettings(BaseSettings):
    """Proxy service configuration validated from environment variables."""

    # Service
    port: int = 3000
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"
    environment: str = "development"
    api_prefix: str = "/api"
    service_version: str = "1.0.0"

    # Upstream (Flodesk)
    flodesk_api_url: str = "https://api.flodesk.com/v1"
    flodesk_timeout_seconds: float = Field(default=30.0, gt=0)
    flodesk_user_agent: str = "flodesk-proxy/1.0.0"
    subscribers_page_size: int = Field(default=100, ge=1, le=100)

    # CORS
    cors_allowed_origins: list[str] = [
        "https://flodesk.vercel.app",
        "http://localhost:3000",
    ]
    cors_allowed_origin_regex: str | None = r"https://.*\.vercel\.app"
    cors_allowed_methods: list[str] = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]
    cors_allowed_headers: list[str] = ["Content-Type", "Authorization", "X-Requested-With"]

    model_config = {"env_prefix": "FLODESK_PROXY_"}
