"""Flodesk proxy service — REST facade over the Flodesk subscriber and segment API."""

__version__ = "1.0.0"
