"""Unit tests for the config and options flows.

Tests the config_flow.py module.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from unittest.mock import MagicMock

import pytest

from homeassistant.data_entry_flow import FlowResultType

from custom_components.rtsp_camera.config_flow import (
    RtspCameraOptionsFlow,
    settings_schema,
    submitted_values,
)
from custom_components.rtsp_camera.const import DOMAIN
from custom_components.rtsp_camera.devices import RtspProvider
from custom_components.rtsp_camera.models import Setting


@dataclass
class MockConfigEntry:
    """Mock Home Assistant config entry."""

    entry_id: str = "test_entry_id"
    domain: str = DOMAIN
    title: str = "RTSP Cameras"
    data: dict = field(default_factory=dict)
    options: dict = field(default_factory=dict)


@pytest.fixture
def provider(host) -> RtspProvider:
    """Create a provider on the mock host."""
    return RtspProvider(host)


@pytest.fixture
def flow(provider) -> RtspCameraOptionsFlow:
    """Create an options flow bound to the provider."""
    entry = MockConfigEntry()
    hass = MagicMock()
    hass.data = {DOMAIN: {entry.entry_id: provider}}

    options_flow = RtspCameraOptionsFlow(entry)
    options_flow.hass = hass
    options_flow.handler = entry.entry_id
    options_flow.flow_id = "test_flow"
    options_flow.context = {}
    return options_flow


class TestSettingsSchema:
    """Tests for the settings -> form conversion."""

    def test_boolean_default(self):
        """Boolean settings default to their decoded value."""
        schema = settings_schema(
            [Setting(key="noAudio", title="No Audio", value="true", type="boolean")]
        )

        assert schema({}) == {"noAudio": True}

    def test_text_fields_optional(self):
        """Text fields may be left out."""
        schema = settings_schema(
            [
                Setting(key="url", title="URL", value="rtsp://a"),
                Setting(key="password", title="Password", value="x", type="Password"),
            ]
        )

        assert schema({}) == {}
        assert schema({"url": "rtsp://b"}) == {"url": "rtsp://b"}

    def test_submitted_values(self):
        """Missing text fields read as cleared, booleans are encoded."""
        settings = [
            Setting(key="url", title="URL", value="rtsp://a"),
            Setting(key="username", title="Username", value="admin"),
            Setting(key="noAudio", title="No Audio", value="false", type="boolean"),
        ]

        values = submitted_values(settings, {"url": "rtsp://b", "noAudio": True})

        assert values == {"url": "rtsp://b", "username": "", "noAudio": "true"}


class TestOptionsFlow:
    """Tests for adding and editing cameras."""

    @pytest.mark.asyncio
    async def test_menu(self, flow):
        """The flow opens on a menu."""
        result = await flow.async_step_init()

        assert result["type"] == FlowResultType.MENU
        assert result["menu_options"] == ["add_camera", "select_camera"]

    @pytest.mark.asyncio
    async def test_add_camera_form(self, flow):
        """The add form is built from the provider settings."""
        result = await flow.async_step_add_camera()

        assert result["type"] == FlowResultType.FORM
        assert result["step_id"] == "add_camera"

    @pytest.mark.asyncio
    async def test_add_camera_requires_name(self, flow, device_manager):
        """A blank name shows an error and registers nothing."""
        result = await flow.async_step_add_camera({"new-camera": "   "})

        assert result["type"] == FlowResultType.FORM
        assert result["errors"] == {"new-camera": "name_required"}
        assert device_manager.discovered == []

    @pytest.mark.asyncio
    async def test_add_camera(self, flow, device_manager):
        """Submitting a name registers the camera."""
        result = await flow.async_step_add_camera({"new-camera": "Back Yard"})

        assert result["type"] == FlowResultType.CREATE_ENTRY
        assert [d.name for d in device_manager.discovered] == ["Back Yard"]

    @pytest.mark.asyncio
    async def test_select_camera_without_cameras(self, flow):
        """Editing is aborted when there is nothing to edit."""
        result = await flow.async_step_select_camera()

        assert result["type"] == FlowResultType.ABORT
        assert result["reason"] == "no_cameras"

    @pytest.mark.asyncio
    async def test_edit_camera_settings(self, flow, provider, device_manager):
        """Only changed values are written to the camera."""
        device_manager.settings["cam1"] = {"url": "rtsp://old", "username": "admin"}
        provider.get_device("cam1")

        result = await flow.async_step_select_camera()
        assert result["type"] == FlowResultType.FORM

        result = await flow.async_step_select_camera({"camera": "cam1"})
        assert result["type"] == FlowResultType.FORM
        assert result["step_id"] == "camera_settings"

        result = await flow.async_step_camera_settings(
            {"url": "rtsp://new", "username": "admin", "noAudio": True}
        )

        assert result["type"] == FlowResultType.CREATE_ENTRY
        assert device_manager.settings["cam1"] == {
            "url": "rtsp://new",
            "username": "admin",
            "noAudio": "true",
        }
