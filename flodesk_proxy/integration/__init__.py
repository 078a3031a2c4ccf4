"""Upstream integrations."""

from flodesk_proxy.integration.flodesk_client import FlodeskClient

__all__ = ["FlodeskClient"]
