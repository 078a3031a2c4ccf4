"""Validators for inbound proxy requests."""

from flodesk_proxy.validators.request_validator import (
    build_add_to_segments,
    build_get_custom_fields,
    build_get_segment,
    build_get_subscriber,
    build_list_subscribers,
    build_segment_ids_action,
    build_unsubscribe,
    build_upsert_subscriber,
    decode_email,
    require_segment_ids,
)

__all__ = [
    "build_add_to_segments",
    "build_get_custom_fields",
    "build_get_segment",
    "build_get_subscriber",
    "build_list_subscribers",
    "build_segment_ids_action",
    "build_unsubscribe",
    "build_upsert_subscriber",
    "decode_email",
    "require_segment_ids",
]
