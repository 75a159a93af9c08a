"""Remote platform for Panasonic Viera TV (to send NRC keys)."""

from __future__ import annotations
import asyncio
import logging

from homeassistant.components.remote import RemoteEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, DEFAULT_NAME, VIERA_KEYS
from .coordinator import VieraCoordinator

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities
) -> None:
    """Set up Viera TV remote entity from a config entry."""
    coordinator: VieraCoordinator = hass.data[DOMAIN][entry.entry_id]
    async_add_entities([VieraRemote(coordinator, entry)])


class VieraRemote(CoordinatorEntity, RemoteEntity):
    """Representation of a Viera TV remote for sending NRC keys."""

    _attr_should_poll = False

    def __init__(self, coordinator: VieraCoordinator, entry: ConfigEntry) -> None:
        super().__init__(coordinator)
        self.coordinator = coordinator
        self._entry = entry
        self._attr_unique_id = f"{entry.entry_id}_remote"

        base_name = entry.title or DEFAULT_NAME
        self._attr_name = f"{base_name} Remote"

        self._attr_device_info = {
            "identifiers": {(DOMAIN, entry.entry_id)},
            "manufacturer": "Panasonic",
            "model": "Viera",
            "name": base_name,
        }

    @property
    def is_on(self) -> bool:
        return bool(self.coordinator.last_update_success and self.coordinator.data)

    async def async_turn_on(self, **kwargs) -> None:
        if not self.is_on:
            await self.coordinator.async_send_key("power")

    async def async_turn_off(self, **kwargs) -> None:
        if self.is_on:
            await self.coordinator.async_send_key("power")

    async def async_send_command(
        self,
        command: str | list[str],
        *,
        device: str | None = None,
        num_repeats: int = 1,
        delay_secs: float = 0.5,
        hold_secs: float | None = None,
        **kwargs,
    ) -> None:
        """Send one or more NRC keys to the TV."""

        # Normalize into a list
        commands = [command] if isinstance(command, str) else command

        for cmd in commands:
            if cmd.lower() in VIERA_KEYS:
                key = VIERA_KEYS[cmd.lower()]
            elif cmd.upper().startswith("NRC_"):
                key = cmd.upper()
            else:
                _LOGGER.warning("Invalid NRC key: %s", cmd)
                continue

            for _ in range(num_repeats):
                _LOGGER.debug("Viera: Sending key %s (%s)", key, cmd)
                await self.coordinator.async_send_key(key)
                if delay_secs:
                    await asyncio.sleep(delay_secs)
