"""Home Assistant implementation of the host platform contract.

Version: 0.1.0
Date: 2026-10-19

Registered devices and their settings are kept in a single Store:

    {"devices": {native_id: {"name": ..., "interfaces": [...],
                             "type": ..., "settings": {key: value}}}}
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
import logging
import shlex
from typing import TYPE_CHECKING, Any

from homeassistant.components import persistent_notification
from homeassistant.core import callback
from homeassistant.helpers.dispatcher import async_dispatcher_send
from homeassistant.helpers.event import async_call_later
from homeassistant.util import slugify

from .const import DOMAIN, SIGNAL_DEVICE_DISCOVERED, STORAGE_SAVE_DELAY
from .host import (
    AlertLog,
    DeviceManager,
    DeviceStorage,
    DictDeviceStorage,
    HostPlatform,
    MediaManager,
)

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.storage import Store

    from .models import DiscoveredDevice, FFmpegInput

_LOGGER = logging.getLogger(__name__)


class HassDeviceManager(DeviceManager):
    """Devices and settings persisted in a Home Assistant Store."""

    def __init__(
        self,
        hass: HomeAssistant,
        store: Store,
        data: dict[str, Any] | None,
    ) -> None:
        """Initialize from previously loaded store data."""
        self.hass = hass
        self._store = store
        self._data: dict[str, Any] = data or {}
        self._devices: dict[str, dict[str, Any]] = self._data.setdefault("devices", {})

    def get_native_ids(self) -> list[str]:
        """Return the ids of all registered devices."""
        return list(self._devices)

    def get_device_name(self, native_id: str) -> str:
        """Return the display name given when the device was registered."""
        return self._devices.get(native_id, {}).get("name") or native_id

    def get_device_storage(self, native_id: str) -> DeviceStorage:
        """Return the settings store of a device."""
        device = self._devices.setdefault(native_id, {})
        settings = device.setdefault("settings", {})
        return DictDeviceStorage(settings, on_change=self._schedule_save)

    def on_device_discovered(self, device: DiscoveredDevice) -> None:
        """Persist the device and tell the camera platform about it."""
        entry = self._devices.setdefault(device.native_id, {})
        entry.setdefault("settings", {})
        entry["name"] = device.name
        entry["interfaces"] = [str(interface) for interface in device.interfaces]
        entry["type"] = str(device.type)
        self._schedule_save()

        async_dispatcher_send(self.hass, SIGNAL_DEVICE_DISCOVERED, device.native_id)

    @callback
    def _schedule_save(self) -> None:
        self._store.async_delay_save(lambda: self._data, STORAGE_SAVE_DELAY)


class HassAlertLog(AlertLog):
    """Alerts shown as persistent notifications."""

    def __init__(self, hass: HomeAssistant) -> None:
        """Initialize the alert log."""
        self.hass = hass

    @staticmethod
    def _notification_id(text: str) -> str:
        return f"{DOMAIN}_{slugify(text)}"

    def alert(self, text: str) -> None:
        """Create a persistent notification."""
        persistent_notification.async_create(
            self.hass,
            text,
            title="RTSP Camera",
            notification_id=self._notification_id(text),
        )

    def clear_alert(self, text: str) -> None:
        """Dismiss the matching persistent notification."""
        persistent_notification.async_dismiss(self.hass, self._notification_id(text))


@dataclass
class RtspMediaObject:
    """Playable media handle for a camera stream."""

    ffmpeg_input: FFmpegInput

    @property
    def source(self) -> str:
        """Return the stream URL, credentials included."""
        return self.ffmpeg_input.url

    @property
    def input_source(self) -> str:
        """Return the full ffmpeg input as a single command-line string."""
        return shlex.join(self.ffmpeg_input.input_arguments)


class HassMediaManager(MediaManager):
    """Wrap ffmpeg inputs into RtspMediaObject handles."""

    async def create_ffmpeg_media_object(self, ffmpeg_input: FFmpegInput) -> RtspMediaObject:
        """Return the media handle for an ffmpeg input."""
        return RtspMediaObject(ffmpeg_input)


def build_host(
    hass: HomeAssistant,
    store: Store,
    data: dict[str, Any] | None,
) -> HostPlatform:
    """Assemble the host platform for one config entry."""

    def call_later(delay: float, action: Callable[[], None]) -> Callable[[], None]:
        @callback
        def _fire(_now: datetime) -> None:
            action()

        return async_call_later(hass, delay, _fire)

    return HostPlatform(
        device_manager=HassDeviceManager(hass, store, data),
        log=HassAlertLog(hass),
        media_manager=HassMediaManager(),
        call_later=call_later,
    )
