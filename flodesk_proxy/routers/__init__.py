"""HTTP routers."""

from flodesk_proxy.routers.custom_fields import create_custom_fields_router
from flodesk_proxy.routers.health import create_health_router
from flodesk_proxy.routers.segments import create_segments_router
from flodesk_proxy.routers.subscribers import create_subscribers_router

__all__ = [
    "create_custom_fields_router",
    "create_health_router",
    "create_segments_router",
    "create_subscribers_router",
]
