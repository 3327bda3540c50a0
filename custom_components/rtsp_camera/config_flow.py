"""Config flow for RTSP Camera.

Version: 0.1.0
Date: 2026-10-19

The config entry itself carries no data. Cameras are managed from the options
flow:
- add_camera: register a new camera by name
- select_camera -> camera_settings: edit one camera's settings form
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import voluptuous as vol

from homeassistant.config_entries import ConfigEntry, ConfigFlow, OptionsFlow
from homeassistant.core import callback
from homeassistant.data_entry_flow import FlowResult
from homeassistant.helpers.selector import (
    BooleanSelector,
    SelectSelector,
    SelectSelectorConfig,
    SelectSelectorMode,
    TextSelector,
    TextSelectorConfig,
    TextSelectorType,
)

from .const import CONF_NEW_CAMERA, DEFAULT_NAME, DOMAIN, SettingType
from .models import Setting, decode_bool, stringify

if TYPE_CHECKING:
    from .devices import RtspProvider

_LOGGER = logging.getLogger(__name__)

# Internal key for the camera picker (not persisted)
CONF_CAMERA = "camera"


def settings_schema(settings: list[Setting]) -> vol.Schema:
    """Build a form schema from a device's settings."""
    fields: dict[Any, Any] = {}

    for setting in settings:
        if setting.type == SettingType.BOOLEAN:
            fields[
                vol.Optional(setting.key, default=decode_bool(setting.value))
            ] = BooleanSelector()
            continue

        text_type = (
            TextSelectorType.PASSWORD
            if setting.type == SettingType.PASSWORD
            else TextSelectorType.TEXT
        )
        fields[
            vol.Optional(
                setting.key,
                description={"suggested_value": setting.value or ""},
            )
        ] = TextSelector(TextSelectorConfig(type=text_type))

    return vol.Schema(fields)


def submitted_values(settings: list[Setting], user_input: dict[str, Any]) -> dict[str, str]:
    """Return the stored string form of every field in a submitted form.

    The frontend drops cleared text fields, so a missing key means empty.
    """
    values: dict[str, str] = {}
    for setting in settings:
        if setting.type == SettingType.BOOLEAN:
            values[setting.key] = stringify(bool(user_input.get(setting.key, False)))
        else:
            values[setting.key] = stringify(user_input.get(setting.key, ""))
    return values


class RtspCameraConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for RTSP Camera."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Create the single RTSP Camera entry."""
        await self.async_set_unique_id(DOMAIN)
        self._abort_if_unique_id_configured()

        if user_input is not None:
            return self.async_create_entry(title=DEFAULT_NAME, data={})

        return self.async_show_form(step_id="user")

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> OptionsFlow:
        """Get the options flow for this handler."""
        return RtspCameraOptionsFlow(config_entry)


class RtspCameraOptionsFlow(OptionsFlow):
    """Add cameras and edit camera settings."""

    def __init__(self, config_entry: ConfigEntry) -> None:
        """Initialize options flow."""
        self._config_entry = config_entry
        self._native_id: str | None = None

    @property
    def provider(self) -> RtspProvider:
        """Return the provider of this config entry."""
        return self.hass.data[DOMAIN][self._config_entry.entry_id]

    def _finish(self) -> FlowResult:
        return self.async_create_entry(title="", data=dict(self._config_entry.options))

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Show the options menu."""
        return self.async_show_menu(
            step_id="init",
            menu_options=["add_camera", "select_camera"],
        )

    async def async_step_add_camera(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Register a new camera by name."""
        errors: dict[str, str] = {}

        if user_input is not None:
            name = str(user_input.get(CONF_NEW_CAMERA, "")).strip()
            if not name:
                errors[CONF_NEW_CAMERA] = "name_required"
            else:
                await self.provider.put_setting(CONF_NEW_CAMERA, name)
                return self._finish()

        return self.async_show_form(
            step_id="add_camera",
            data_schema=settings_schema(await self.provider.get_settings()),
            errors=errors,
        )

    async def async_step_select_camera(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Choose the camera to edit."""
        provider = self.provider

        if not provider.devices:
            return self.async_abort(reason="no_cameras")

        if user_input is not None:
            self._native_id = user_input[CONF_CAMERA]
            return await self.async_step_camera_settings()

        device_manager = provider.host.device_manager
        camera_options = [
            {"value": native_id, "label": device_manager.get_device_name(native_id)}
            for native_id in provider.devices
        ]

        return self.async_show_form(
            step_id="select_camera",
            data_schema=vol.Schema(
                {
                    vol.Required(CONF_CAMERA): SelectSelector(
                        SelectSelectorConfig(
                            options=camera_options,
                            mode=SelectSelectorMode.DROPDOWN,
                        )
                    ),
                }
            ),
        )

    async def async_step_camera_settings(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Edit the settings of the chosen camera."""
        camera = self.provider.get_device(self._native_id)
        settings = await camera.get_settings()

        if user_input is not None:
            current = {setting.key: setting.value or "" for setting in settings}
            changed = 0
            for key, value in submitted_values(settings, user_input).items():
                if current.get(key, "") != value:
                    await camera.put_setting(key, value)
                    changed += 1

            _LOGGER.debug(
                "Options flow: updated %d settings of camera %s",
                changed,
                self._native_id,
            )
            return self._finish()

        return self.async_show_form(
            step_id="camera_settings",
            data_schema=settings_schema(settings),
            description_placeholders={
                "name": self.provider.host.device_manager.get_device_name(
                    self._native_id
                ),
            },
        )
