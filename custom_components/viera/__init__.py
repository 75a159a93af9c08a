"""Panasonic Viera TV integration for Home Assistant."""
from __future__ import annotations

import logging

import voluptuous as vol
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
import homeassistant.helpers.config_validation as cv
from .coordinator import VieraCoordinator

from .const import (
    DOMAIN,
    CONF_HOST,
    CONF_APP_ID,
    CONF_ENCRYPTION_KEY,
    PLATFORMS,
    ATTR_APP_ID,
    SERVICE_LAUNCH_APP,
)

_LOGGER = logging.getLogger(__name__)


async def async_setup(hass: HomeAssistant, config: dict) -> bool:
    """Set up Viera TV integration (YAML not supported)."""
    hass.data.setdefault(DOMAIN, {})
    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Viera TV from a config entry."""
    host = entry.data[CONF_HOST]
    app_id = entry.data.get(CONF_APP_ID)
    encryption_key = entry.data.get(CONF_ENCRYPTION_KEY)

    _LOGGER.debug(
        "async_setup_entry: host=%s encrypted=%s", host, bool(app_id and encryption_key)
    )

    coordinator = VieraCoordinator(
        hass, host=host, app_id=app_id, encryption_key=encryption_key, entry=entry
    )

    # Handshake happens as part of the first refresh
    await coordinator.async_config_entry_first_refresh()

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = coordinator

    # Forward setups to supported platforms
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    # Register services
    async def handle_launch_app(call):
        """Handle app launch service call."""
        await coordinator.async_launch_app(call.data[ATTR_APP_ID])

    hass.services.async_register(
        DOMAIN,
        SERVICE_LAUNCH_APP,
        handle_launch_app,
        schema=vol.Schema({vol.Required(ATTR_APP_ID): cv.string}),
    )

    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a Viera TV config entry."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        coordinator: VieraCoordinator = hass.data[DOMAIN].pop(entry.entry_id)
        await coordinator.async_close()
    return unload_ok
