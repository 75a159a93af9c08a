"""Diagnostics support for Panasonic Viera TV integration."""

from __future__ import annotations
from typing import Any

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import DOMAIN, CONF_APP_ID, CONF_ENCRYPTION_KEY

# Fields that should never be exposed in plain text
TO_REDACT: set[str] = {
    CONF_APP_ID,
    CONF_ENCRYPTION_KEY,
    "session_id",
}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator = hass.data[DOMAIN][entry.entry_id]
    client = coordinator.client

    data: dict[str, Any] = {
        "entry": entry.as_dict(),
        "session": client.session.as_dict(),
        "last_raw_response": client.dispatcher.last_raw_response,
        "status": coordinator.data or {},
    }

    return async_redact_data(data, TO_REDACT)
