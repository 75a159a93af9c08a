"""Coordinator for Panasonic Viera TV integration."""

from __future__ import annotations
from datetime import timedelta
from typing import Any, Optional
from .client import VieraClient
from .const import DEFAULT_POLL_INTERVAL, DEFAULT_TIMEOUT
from .exceptions import HandshakeFailed, SessionNotEstablished, VieraError
from homeassistant.core import HomeAssistant
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

import logging

_LOGGER = logging.getLogger(__name__)


class VieraCoordinator(DataUpdateCoordinator[dict[str, Any]]):
    """Owns the TV session and polls volume and mute."""

    def __init__(
        self,
        hass: HomeAssistant,
        host: str,
        app_id: Optional[str] = None,
        encryption_key: Optional[str] = None,
        entry=None,
    ) -> None:
        super().__init__(
            hass,
            _LOGGER,
            config_entry=entry,
            name="Viera TV Coordinator",
            update_interval=timedelta(seconds=DEFAULT_POLL_INTERVAL),
        )
        self.hass = hass
        self._entry = entry
        self.host = host
        self.app_id = app_id
        self.encryption_key = encryption_key
        self.client = VieraClient(
            http_session=async_get_clientsession(hass), timeout=DEFAULT_TIMEOUT
        )
        self._needs_handshake = True

    # ---------------------- Session Management ----------------------

    async def async_connect(self) -> None:
        """(Re)run the handshake against the configured TV."""
        _LOGGER.debug(
            "Connecting to %s (%s)", self.host, "encrypted" if self.encryption_key else "plain"
        )
        await self.client.connect(self.host, self.app_id, self.encryption_key)
        self._needs_handshake = False

    # ---------------------- Polling ----------------------

    async def _async_update_data(self) -> dict[str, Any]:
        """Poll the TV for volume and mute."""
        try:
            if self._needs_handshake:
                await self.async_connect()
            volume = await self.client.get_volume()
            mute = await self.client.get_mute()
        except (HandshakeFailed, SessionNotEstablished) as err:
            self._needs_handshake = True
            raise UpdateFailed(f"Session with {self.host} not established: {err}") from err
        except VieraError as err:
            # Most likely the TV is off; its session dies with it
            if self.client.session.encrypted:
                self._needs_handshake = True
            raise UpdateFailed(f"Error talking to {self.host}: {err}") from err

        return {"volume": volume, "mute": mute}

    # ---------------------- Commands ----------------------

    async def _async_command(self, name: str, coro) -> None:
        """Await a client command, flagging a re-handshake when it fails."""
        try:
            await coro
        except VieraError as err:
            _LOGGER.warning("%s failed: %s", name, err)
            if isinstance(err, SessionNotEstablished) or self.client.session.encrypted:
                self._needs_handshake = True
            raise
        _LOGGER.debug("%s succeeded", name)

    async def async_send_key(self, key: str) -> None:
        await self._async_command(f"SendKey {key}", self.client.send_key(key))

    async def async_send_hdmi(self, hdmi_input: int) -> None:
        await self._async_command(
            f"HDMI {hdmi_input}", self.client.send_hdmi(hdmi_input)
        )

    async def async_launch_app(self, app_id: str) -> None:
        await self._async_command(f"LaunchApp {app_id}", self.client.launch_app(app_id))

    async def async_set_volume(self, volume: int) -> None:
        await self._async_command(f"SetVolume {volume}", self.client.set_volume(volume))

    async def async_set_mute(self, mute: bool) -> None:
        await self._async_command(f"SetMute {mute}", self.client.set_mute(mute))

    # ---------------------- Close out / Clean Up ----------------------

    async def async_close(self) -> None:
        await self.client.async_close()
