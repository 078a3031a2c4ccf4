"""Configuration module — service settings."""

from flodesk_proxy.config.settings import ProxySettings

__all__ = ["ProxySettings"]
