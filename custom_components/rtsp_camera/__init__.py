"""RTSP Camera integration for Home Assistant.

Version: 0.1.0
Date: 2026-10-19

Exposes RTSP network cameras as Home Assistant camera entities. Cameras are
added by name from the integration options (or the add_camera service) and
configured afterwards through their settings form.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import voluptuous as vol

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers.storage import Store

from .const import (
    ATTR_NAME,
    CONF_NEW_CAMERA,
    DOMAIN,
    SERVICE_ADD_CAMERA,
    STORAGE_KEY,
    STORAGE_VERSION,
)
from .devices import RtspProvider
from .hass_host import build_host

if TYPE_CHECKING:
    from homeassistant.helpers.typing import ConfigType

_LOGGER = logging.getLogger(__name__)

PLATFORMS: list[Platform] = [Platform.CAMERA]

CONFIG_SCHEMA = cv.config_entry_only_config_schema(DOMAIN)

ADD_CAMERA_SCHEMA = vol.Schema({vol.Required(ATTR_NAME): cv.string})


async def async_setup(hass: HomeAssistant, config: ConfigType) -> bool:
    """Set up the RTSP Camera component."""
    hass.data.setdefault(DOMAIN, {})
    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up RTSP Camera from a config entry."""
    _LOGGER.debug("Setting up RTSP Camera entry: %s", entry.entry_id)

    store: Store = Store(hass, STORAGE_VERSION, STORAGE_KEY)
    data = await store.async_load()

    provider = RtspProvider(build_host(hass, store, data))

    # Store provider before platforms so they can access it
    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = provider

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    await _async_register_services(hass)

    _LOGGER.info("RTSP Camera initialized with %d cameras", len(provider.devices))
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    _LOGGER.debug("Unloading RTSP Camera entry: %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)

    if unload_ok:
        hass.data[DOMAIN].pop(entry.entry_id)

    return unload_ok


async def _async_register_services(hass: HomeAssistant) -> None:
    """Register integration services."""
    if hass.services.has_service(DOMAIN, SERVICE_ADD_CAMERA):
        return

    async def handle_add_camera(call: ServiceCall) -> None:
        """Handle the add_camera service call."""
        entries = hass.config_entries.async_entries(DOMAIN)
        if not entries:
            _LOGGER.error("No RTSP Camera entries configured")
            return

        provider: RtspProvider = hass.data[DOMAIN][entries[0].entry_id]
        await provider.put_setting(CONF_NEW_CAMERA, call.data[ATTR_NAME])

    hass.services.async_register(
        DOMAIN,
        SERVICE_ADD_CAMERA,
        handle_add_camera,
        schema=ADD_CAMERA_SCHEMA,
    )
    _LOGGER.debug("Registered RTSP Camera services")
