"""Camera entities for RTSP Camera.

Provides:
- One camera entity per registered device, streaming through the adapter's
  RTSP URL
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from homeassistant.components.camera import Camera, CameraEntityFeature
from homeassistant.components.ffmpeg import async_get_image
from homeassistant.core import callback
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.dispatcher import async_dispatcher_connect

from .const import DOMAIN, FFMPEG_RTSP_TRANSPORT, SIGNAL_DEVICE_DISCOVERED
from .exceptions import InvalidStreamUrl

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .devices import RtspProvider
    from .hass_host import RtspMediaObject

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up camera entities from a config entry."""
    provider: RtspProvider = hass.data[DOMAIN][entry.entry_id]

    async_add_entities(
        [RtspCameraEntity(provider, native_id) for native_id in provider.devices]
    )

    @callback
    def async_device_discovered(native_id: str) -> None:
        """Add an entity for a newly registered camera."""
        async_add_entities([RtspCameraEntity(provider, native_id)])

    entry.async_on_unload(
        async_dispatcher_connect(hass, SIGNAL_DEVICE_DISCOVERED, async_device_discovered)
    )


class RtspCameraEntity(Camera):
    """A registered RTSP camera."""

    _attr_has_entity_name = True
    _attr_name = None
    _attr_supported_features = CameraEntityFeature.STREAM

    def __init__(self, provider: RtspProvider, native_id: str) -> None:
        """Initialize the camera entity."""
        super().__init__()
        self._provider = provider
        self._native_id = native_id
        self.camera = provider.get_device(native_id)
        self._attr_unique_id = native_id
        self.stream_options["rtsp_transport"] = FFMPEG_RTSP_TRANSPORT

    @property
    def device_info(self) -> DeviceInfo:
        """Return device information."""
        return DeviceInfo(
            identifiers={(DOMAIN, self._native_id)},
            name=self._provider.host.device_manager.get_device_name(self._native_id),
            manufacturer="Generic",
            model="RTSP Camera",
        )

    async def _async_get_media(self) -> RtspMediaObject | None:
        try:
            return await self.camera.get_video_stream()
        except InvalidStreamUrl as err:
            _LOGGER.warning("Camera %s has no usable stream: %s", self._native_id, err)
            return None

    async def stream_source(self) -> str | None:
        """Return the RTSP URL, credentials included."""
        media = await self._async_get_media()
        return media.source if media else None

    async def async_camera_image(
        self, width: int | None = None, height: int | None = None
    ) -> bytes | None:
        """Grab a still frame through ffmpeg."""
        media = await self._async_get_media()
        if media is None:
            return None

        return await async_get_image(
            self.hass,
            media.input_source,
            width=width,
            height=height,
        )
