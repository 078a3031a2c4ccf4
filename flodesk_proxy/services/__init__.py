"""Services — action dispatch, upstream gateway, and segment listing."""

from flodesk_proxy.services.action_dispatcher import ActionDispatcher, UpstreamGateway
from flodesk_proxy.services.segments_service import SegmentsService
from flodesk_proxy.services.upstream_gateway import FlodeskGateway

__all__ = [
    "ActionDispatcher",
    "FlodeskGateway",
    "SegmentsService",
    "UpstreamGateway",
]
