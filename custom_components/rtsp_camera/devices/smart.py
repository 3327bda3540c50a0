"""Smart RTSP camera adapter.

A smart camera knows its own address and builds its default stream URL from
it. Each camera family supplies a SmartCameraBackend with the two
family-specific pieces: the constructed URL and the event subscription.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import TYPE_CHECKING, Any

from ..const import (
    CONF_HTTP_PORT,
    CONF_IP,
    CONF_IS_ANALOGUE_CAMERA,
    CONF_RTSP_CHANNEL,
    CONF_RTSP_URL_OVERRIDE,
    CONF_RTSP_URL_PARAMS,
    DEFAULT_HTTP_PORT,
    DEFAULT_RTSP_PORT,
    DEFAULT_RTSP_URL_PARAMS,
    SettingType,
)
from ..models import Setting
from .base import RtspCamera
from .listener import ConfigChanged, EventCallback, EventSubscription, ListenLoop

if TYPE_CHECKING:
    from ..host import HostPlatform

_LOGGER = logging.getLogger(__name__)


class SmartCameraBackend(ABC):
    """Camera-family specific collaborator of RtspSmartCamera."""

    @abstractmethod
    async def get_constructed_stream_url(self, camera: RtspSmartCamera) -> str:
        """Return the family's default RTSP URL for this camera."""
        ...

    @abstractmethod
    def listen_events(
        self,
        camera: RtspSmartCamera,
        on_event: EventCallback,
    ) -> EventSubscription:
        """Open a new event subscription.

        The subscription must eventually report a NetworkFault through
        on_event when it fails.
        """
        ...


class RtspSmartCamera(RtspCamera):
    """An address-aware camera with a self-healing event subscription."""

    def __init__(
        self,
        native_id: str,
        host: HostPlatform,
        backend: SmartCameraBackend,
    ) -> None:
        """Initialize the adapter and start listening."""
        super().__init__(native_id, host)
        self.backend = backend
        self.listen_loop = ListenLoop(
            name=f"Camera {native_id}",
            acquire=self.listen_events,
            call_later=host.call_later,
        )
        self.listen_loop.start()

    @property
    def listener(self) -> EventSubscription | None:
        """Return the live subscription, if any."""
        return self.listen_loop.listener

    def listen_events(self, on_event: EventCallback) -> EventSubscription:
        """Open a new event subscription through the backend."""
        return self.backend.listen_events(self, on_event)

    async def get_constructed_stream_url(self) -> str:
        """Return the backend's default stream URL."""
        return await self.backend.get_constructed_stream_url(self)

    async def put_setting(self, key: str, value: Any) -> None:
        """Store the setting and restart the listener with the new settings."""
        await super().put_setting(key, value)
        self.listen_loop.signal(ConfigChanged())

    async def get_url_settings(self) -> list[Setting]:
        """Return the address and override settings."""
        constructed = await self.get_constructed_stream_url()
        config = self.config
        return [
            Setting(
                key=CONF_IP,
                title="Address",
                placeholder="192.168.1.100",
                value=config.ip,
            ),
            Setting(
                key=CONF_HTTP_PORT,
                title="HTTP Port Override",
                placeholder=str(DEFAULT_HTTP_PORT),
                value=config.http_port,
            ),
            Setting(
                key=CONF_IS_ANALOGUE_CAMERA,
                title="Is this an analogue camera?",
                description=(
                    "Turn this on if you are not using ip cameras. This will use "
                    "the URL override, channel, and URL parameters to construct "
                    "the RTSP url."
                ),
                type=SettingType.BOOLEAN,
                value=self.storage.get_item(CONF_IS_ANALOGUE_CAMERA),
            ),
            Setting(
                key=CONF_RTSP_URL_OVERRIDE,
                title="RTSP URL Override",
                description=(
                    "Override the RTSP URL if your camera is using a non default "
                    "port, channel, or rebroadcasted through an NVR. Default: "
                    f"{constructed}"
                ),
                placeholder=constructed,
                value=config.rtsp_url_override,
            ),
            Setting(
                key=CONF_RTSP_CHANNEL,
                title="Channel number",
                description="What channel does this camera use?",
                placeholder="1/2/3/etc.",
                value=config.rtsp_channel,
            ),
            Setting(
                key=CONF_RTSP_URL_PARAMS,
                title="RTSP URL Params Override",
                description="Override the RTSP URL parameters",
                placeholder=f"{DEFAULT_RTSP_URL_PARAMS}&...",
                value=config.rtsp_url_params,
            ),
        ]

    def get_http_address(self) -> str:
        """Return host:port for the camera's HTTP API."""
        config = self.config
        return f"{config.ip}:{config.http_port or DEFAULT_HTTP_PORT}"

    def get_rtsp_address(self) -> str:
        """Return host:port for the camera's RTSP server."""
        # rtspPort has no settings field; only set when written directly
        config = self.config
        return f"{config.ip}:{config.rtsp_port or DEFAULT_RTSP_PORT}"

    def is_analogue_camera(self) -> bool:
        """Return True if the camera sits behind an NVR channel."""
        return self.config.is_analogue_camera

    def get_rtsp_channel(self) -> str:
        """Return the NVR channel, empty when unset."""
        return self.config.rtsp_channel

    def get_rtsp_url(self) -> str:
        """Return the raw RTSP URL override."""
        return self.config.rtsp_url_override

    def get_rtsp_url_params(self) -> str:
        """Return the RTSP URL parameters, with the unicast default."""
        return self.config.rtsp_url_params or DEFAULT_RTSP_URL_PARAMS

    def get_analogue_camera_url(self) -> str:
        """Return the NVR URL for this camera's channel.

        The channel is concatenated with "01" as text: channel 2 -> "201".
        """
        return f"{self.get_rtsp_url()}/{self.get_rtsp_channel()}01/{self.get_rtsp_url_params()}"

    def get_rtsp_url_override(self) -> str:
        """Return the URL that overrides the constructed one, may be empty."""
        if self.is_analogue_camera() and self.get_rtsp_channel():
            return self.get_analogue_camera_url()
        return self.get_rtsp_url()

    async def get_stream_url(self) -> str:
        """Return the override if set, otherwise the constructed URL."""
        return self.get_rtsp_url_override() or await self.get_constructed_stream_url()
