"""Config flow for Panasonic Viera TV integration."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.data_entry_flow import FlowResult
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .client import VieraClient
from .const import (
    DOMAIN,
    CONF_HOST,
    CONF_APP_ID,
    CONF_ENCRYPTION_KEY,
    DEFAULT_NAME,
    DEFAULT_TIMEOUT,
)
from .exceptions import (
    HandshakeFailed,
    InvalidAddress,
    InvalidKeyFormat,
    VieraError,
)

_LOGGER = logging.getLogger(__name__)

DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST): str,
        vol.Optional(CONF_APP_ID): str,
        vol.Optional(CONF_ENCRYPTION_KEY): str,
    }
)


class VieraConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Panasonic Viera TVs."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        errors: dict[str, str] = {}

        if user_input is None:
            return self.async_show_form(step_id="user", data_schema=DATA_SCHEMA, errors=errors)

        host = user_input[CONF_HOST].strip()
        app_id = (user_input.get(CONF_APP_ID) or "").strip() or None
        encryption_key = (user_input.get(CONF_ENCRYPTION_KEY) or "").strip() or None

        if (app_id is None) != (encryption_key is None):
            errors["base"] = "incomplete_credentials"
            return self.async_show_form(step_id="user", data_schema=DATA_SCHEMA, errors=errors)

        # Avoid duplicates
        await self.async_set_unique_id(f"{DOMAIN}-{host}")
        self._abort_if_unique_id_configured()

        client = VieraClient(
            http_session=async_get_clientsession(self.hass), timeout=DEFAULT_TIMEOUT
        )
        try:
            await client.connect(host, app_id, encryption_key)
            volume = await client.get_volume()
            _LOGGER.debug("Viera TV at %s reachable, volume=%s", host, volume)
        except InvalidAddress:
            errors["base"] = "invalid_host"
        except (InvalidKeyFormat, HandshakeFailed) as err:
            _LOGGER.error("Encrypted session with %s failed: %s", host, err)
            errors["base"] = "invalid_auth"
        except VieraError as err:
            _LOGGER.error("Viera TV at %s not reachable: %s", host, err)
            errors["base"] = "cannot_connect"
        finally:
            await client.async_close()

        if errors:
            return self.async_show_form(step_id="user", data_schema=DATA_SCHEMA, errors=errors)

        data = {CONF_HOST: host}
        if app_id is not None:
            data[CONF_APP_ID] = app_id
            data[CONF_ENCRYPTION_KEY] = encryption_key

        return self.async_create_entry(title=f"{DEFAULT_NAME} ({host})", data=data)
