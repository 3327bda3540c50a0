"""Exceptions for RTSP Camera."""
from __future__ import annotations

from homeassistant.exceptions import HomeAssistantError


class RtspCameraError(HomeAssistantError):
    """Base error for the RTSP Camera integration."""


class InvalidStreamUrl(RtspCameraError):
    """The stored stream URL is missing or cannot be parsed."""

    def __init__(self, url: str | None) -> None:
        """Initialize the error."""
        super().__init__(f"Invalid RTSP stream URL: {url!r}")
        self.url = url
