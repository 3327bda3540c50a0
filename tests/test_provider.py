"""Unit tests for the camera provider.

Tests the devices/provider.py module.
"""
from __future__ import annotations

import itertools
from unittest.mock import MagicMock

import pytest

from custom_components.rtsp_camera.devices import RtspCamera, RtspProvider


class TestProviderRegistry:
    """Tests for lazy creation and caching of adapters."""

    def test_get_device_is_stable(self, host):
        """The same id returns the same adapter instance."""
        provider = RtspProvider(host)

        first = provider.get_device("cam1")
        second = provider.get_device("cam1")

        assert first is second
        assert isinstance(first, RtspCamera)
        assert provider.devices == {"cam1": first}

    def test_known_devices_loaded_on_start(self, host, device_manager):
        """Every known id is materialized up front; empty ids are skipped."""
        device_manager.settings = {"cam1": {"url": "rtsp://a"}, "cam2": {}, "": {}}

        provider = RtspProvider(host)

        assert set(provider.devices) == {"cam1", "cam2"}

    def test_factory_is_used(self, host):
        """create_camera delegates to the injected factory."""
        custom = MagicMock(name="camera")
        factory = MagicMock(return_value=custom)
        provider = RtspProvider(host, camera_factory=factory)

        camera = provider.get_device("cam9")

        assert camera is custom
        factory.assert_called_once_with("cam9", host)
        provider.get_device("cam9")
        factory.assert_called_once()

    def test_construction_error_propagates(self, host, device_manager):
        """Adapter failures during warm start are not swallowed."""
        device_manager.settings = {"broken": {}}
        factory = MagicMock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            RtspProvider(host, camera_factory=factory)


class TestAddCamera:
    """Tests for the operator "add camera" workflow."""

    @pytest.mark.asyncio
    async def test_settings_form(self, host):
        """The provider exposes one free-text field."""
        provider = RtspProvider(host)

        settings = await provider.get_settings()

        assert len(settings) == 1
        assert settings[0].key == "new-camera"
        assert settings[0].title == "Add RTSP Camera"
        assert settings[0].type is None

    @pytest.mark.asyncio
    async def test_put_setting_registers_camera(self, host, device_manager, alert_log):
        """A name registers exactly one new camera device."""
        ids = itertools.count(1)
        provider = RtspProvider(host, id_factory=lambda: f"id{next(ids)}")

        native_id = await provider.put_setting("anything", "Back Yard")

        assert native_id == "id1"
        assert len(device_manager.discovered) == 1
        device = device_manager.discovered[0]
        assert device.native_id == "id1"
        assert device.name == "Back Yard"
        assert "VideoCamera" in device.interfaces
        assert "Settings" in device.interfaces
        assert device.type == "Camera"

        text = "New Camera Back Yard ready. Check the notification area to complete setup."
        assert alert_log.calls == [("alert", text), ("clear", text)]

    @pytest.mark.asyncio
    async def test_ids_are_fresh(self, host, device_manager):
        """Each registration gets a new id."""
        provider = RtspProvider(host)

        first = await provider.put_setting("new-camera", "One")
        second = await provider.put_setting("new-camera", "Two")

        assert first != second
        assert [d.native_id for d in device_manager.discovered] == [first, second]

    @pytest.mark.asyncio
    async def test_additional_interfaces(self, host, device_manager):
        """Subclasses can announce extra interfaces."""

        class IntercomProvider(RtspProvider):
            def get_additional_interfaces(self):
                return ["Intercom"]

        provider = IntercomProvider(host)

        await provider.put_setting("new-camera", "Door")

        assert device_manager.discovered[0].interfaces == [
            "VideoCamera",
            "Settings",
            "Intercom",
        ]

    @pytest.mark.asyncio
    async def test_discover_devices_is_noop(self, host, device_manager):
        """Discovery does not register anything."""
        provider = RtspProvider(host)

        await provider.discover_devices(30)

        assert device_manager.discovered == []
