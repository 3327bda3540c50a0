"""Camera provider: device registry and the "add camera" workflow."""
from __future__ import annotations

from collections.abc import Callable
import logging
from typing import TYPE_CHECKING, Any
import uuid

from ..const import CONF_NEW_CAMERA, DeviceInterface, DeviceType
from ..models import DiscoveredDevice, Setting
from .base import RtspCamera

if TYPE_CHECKING:
    from ..host import HostPlatform

_LOGGER = logging.getLogger(__name__)

CameraFactory = Callable[[str, "HostPlatform"], RtspCamera]


def _random_native_id() -> str:
    return uuid.uuid4().hex


class RtspProvider:
    """Create, cache and register camera adapters."""

    def __init__(
        self,
        host: HostPlatform,
        camera_factory: CameraFactory | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize the provider and load every known camera."""
        self.host = host
        self.devices: dict[str, RtspCamera] = {}
        self._camera_factory = camera_factory or RtspCamera
        self._id_factory = id_factory or _random_native_id

        for native_id in host.device_manager.get_native_ids():
            if native_id:
                self.get_device(native_id)

        _LOGGER.debug("Provider loaded %d cameras", len(self.devices))

    def get_additional_interfaces(self) -> list[DeviceInterface | str]:
        """Return interfaces announced on top of VideoCamera and Settings."""
        return []

    async def get_settings(self) -> list[Setting]:
        """Return the "add camera" form."""
        return [
            Setting(
                key=CONF_NEW_CAMERA,
                title="Add RTSP Camera",
                placeholder="Camera name, e.g.: Back Yard Camera, Baby Camera, etc",
            ),
        ]

    async def put_setting(self, key: str, value: Any) -> str:
        """Register a new camera named by value and return its id."""
        native_id = self._id_factory()
        name = str(value)

        self.host.device_manager.on_device_discovered(
            DiscoveredDevice(
                native_id=native_id,
                name=name,
                interfaces=[
                    DeviceInterface.VIDEO_CAMERA,
                    DeviceInterface.SETTINGS,
                    *self.get_additional_interfaces(),
                ],
                type=DeviceType.CAMERA,
            )
        )
        _LOGGER.info("Registered new camera %s (%s)", name, native_id)

        text = f"New Camera {name} ready. Check the notification area to complete setup."
        self.host.log.alert(text)
        self.host.log.clear_alert(text)

        return native_id

    async def discover_devices(self, duration: float) -> None:
        """Cameras are only added manually."""

    def create_camera(self, native_id: str) -> RtspCamera:
        """Build the adapter for a device id."""
        return self._camera_factory(native_id, self.host)

    def get_device(self, native_id: str) -> RtspCamera:
        """Return the cached adapter, creating it on first use."""
        camera = self.devices.get(native_id)
        if camera is None:
            camera = self.create_camera(native_id)
            self.devices[native_id] = camera
        return camera
