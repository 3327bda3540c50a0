"""Host platform contract consumed by the camera adapters and provider.

The adapters never talk to Home Assistant directly. They go through the
interfaces below, which hass_host.py implements on top of Home Assistant.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, MutableMapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import DiscoveredDevice, FFmpegInput

# call_later(delay_seconds, callback) -> cancel
CallLater = Callable[[float, Callable[[], None]], Callable[[], None]]


class DeviceStorage(ABC):
    """Persisted string key/value store for one device."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store a value."""
        ...


class DictDeviceStorage(DeviceStorage):
    """DeviceStorage over a plain dict, with an optional change hook."""

    def __init__(
        self,
        items: MutableMapping[str, str] | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the storage."""
        self._items = items if items is not None else {}
        self._on_change = on_change

    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store a value and notify the change hook."""
        self._items[key] = value
        if self._on_change is not None:
            self._on_change()

    def as_dict(self) -> dict[str, str]:
        """Return a copy of the stored items."""
        return dict(self._items)


class DeviceManager(ABC):
    """Device identifier space and discovery registration."""

    @abstractmethod
    def get_native_ids(self) -> list[str]:
        """Return the ids of all previously registered devices."""
        ...

    @abstractmethod
    def get_device_storage(self, native_id: str) -> DeviceStorage:
        """Return the settings store of a device."""
        ...

    @abstractmethod
    def on_device_discovered(self, device: DiscoveredDevice) -> None:
        """Register a newly discovered device with the host."""
        ...


class AlertLog(ABC):
    """Operator-visible alerts."""

    @abstractmethod
    def alert(self, text: str) -> None:
        """Raise an alert."""
        ...

    @abstractmethod
    def clear_alert(self, text: str) -> None:
        """Clear a previously raised alert."""
        ...


class MediaManager(ABC):
    """Factory turning transport descriptors into playable media objects."""

    @abstractmethod
    async def create_ffmpeg_media_object(self, ffmpeg_input: FFmpegInput) -> Any:
        """Return an opaque media handle for the given input."""
        ...


@dataclass
class HostPlatform:
    """Everything an adapter needs from its host."""

    device_manager: DeviceManager
    log: AlertLog
    media_manager: MediaManager
    call_later: CallLater
