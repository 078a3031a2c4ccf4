"""Health and liveness endpoints.

These endpoints do NOT require an API key.
- GET /            — service banner
- GET {prefix}/health — status + timestamp
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from flodesk_proxy.models.responses import ApiResponse


def create_health_router(*, prefix: str = "/api", version: str = "1.0.0") -> APIRouter:
    """Factory that creates the health router."""

    health_router = APIRouter(tags=["health"])

    @health_router.get("/")
    async def root() -> dict:
        """Service liveness banner."""
        return ApiResponse(
            success=True,
            message="Flodesk API integration is running",
            version=version,
        ).to_body()

    @health_router.get(f"{prefix}/health")
    async def health() -> dict:
        """Health check with the current UTC time."""
        return ApiResponse(
            success=True,
            status="ok",
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        ).to_body()

    return health_router
