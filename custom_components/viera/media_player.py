"""Media Player platform for Panasonic Viera TV."""

from __future__ import annotations
import logging

from homeassistant.components.media_player import (
    MediaPlayerEntity,
    MediaPlayerEntityFeature,
    MediaPlayerState,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, DEFAULT_NAME, HDMI_INPUTS
from .coordinator import VieraCoordinator

_LOGGER = logging.getLogger(__name__)

SOURCE_TV = "TV"
SOURCE_HDMI = "HDMI {}"


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities
) -> None:
    """Set up Viera TV media player from a config entry."""
    coordinator: VieraCoordinator = hass.data[DOMAIN][entry.entry_id]
    async_add_entities([VieraMediaPlayer(coordinator, entry)])


class VieraMediaPlayer(CoordinatorEntity, MediaPlayerEntity):
    """Representation of a Viera TV as a Media Player."""

    _attr_should_poll = False
    _attr_supported_features = (
        MediaPlayerEntityFeature.TURN_ON
        | MediaPlayerEntityFeature.TURN_OFF
        | MediaPlayerEntityFeature.VOLUME_SET
        | MediaPlayerEntityFeature.VOLUME_STEP
        | MediaPlayerEntityFeature.VOLUME_MUTE
        | MediaPlayerEntityFeature.SELECT_SOURCE
        | MediaPlayerEntityFeature.PLAY
        | MediaPlayerEntityFeature.PAUSE
        | MediaPlayerEntityFeature.STOP
        | MediaPlayerEntityFeature.NEXT_TRACK
        | MediaPlayerEntityFeature.PREVIOUS_TRACK
    )
    _attr_source_list = [SOURCE_TV] + [SOURCE_HDMI.format(i) for i in range(1, HDMI_INPUTS + 1)]

    def __init__(self, coordinator: VieraCoordinator, entry: ConfigEntry) -> None:
        super().__init__(coordinator)
        self.coordinator = coordinator
        self._entry = entry
        self._attr_unique_id = f"{entry.entry_id}_media"
        self._attr_name = entry.title or DEFAULT_NAME
        self._attr_source: str | None = None

        self._attr_device_info = {
            "identifiers": {(DOMAIN, entry.entry_id)},
            "manufacturer": "Panasonic",
            "model": "Viera",
            "name": self._attr_name,
        }

    # ---------- State ----------
    @property
    def state(self) -> str:
        # The TV drops off the network in standby
        if self.coordinator.last_update_success and self.coordinator.data:
            return MediaPlayerState.ON
        return MediaPlayerState.OFF

    @property
    def available(self) -> bool:
        return True

    @property
    def volume_level(self) -> float | None:
        if (volume := (self.coordinator.data or {}).get("volume")) is not None:
            return max(0.0, min(volume / 100, 1.0))
        return None

    @property
    def is_volume_muted(self) -> bool | None:
        return (self.coordinator.data or {}).get("mute")

    # ---------- Commands ----------
    async def _async_key(self, key: str) -> None:
        await self.coordinator.async_send_key(key)

    async def async_turn_on(self) -> None:
        if self.state == MediaPlayerState.OFF:
            await self._async_key("power")
            await self.coordinator.async_request_refresh()

    async def async_turn_off(self) -> None:
        if self.state == MediaPlayerState.ON:
            await self._async_key("power")
            await self.coordinator.async_request_refresh()

    async def async_volume_up(self) -> None:
        await self._async_key("volume_up")

    async def async_volume_down(self) -> None:
        await self._async_key("volume_down")

    async def async_set_volume_level(self, volume: float) -> None:
        raw_value = round(volume * 100)
        await self.coordinator.async_set_volume(raw_value)
        # Optimistically update
        self.coordinator.data["volume"] = raw_value
        self.async_write_ha_state()

    async def async_mute_volume(self, mute: bool) -> None:
        await self.coordinator.async_set_mute(mute)
        # Optimistically update
        self.coordinator.data["mute"] = mute
        self.async_write_ha_state()

    async def async_media_play(self) -> None:
        await self._async_key("play")

    async def async_media_pause(self) -> None:
        await self._async_key("pause")

    async def async_media_stop(self) -> None:
        await self._async_key("stop")

    async def async_media_next_track(self) -> None:
        await self._async_key("fast_forward")

    async def async_media_previous_track(self) -> None:
        await self._async_key("rewind")

    async def async_select_source(self, source: str) -> None:
        """Switch TV input."""
        if source == SOURCE_TV:
            await self._async_key("tv")
        elif source in self._attr_source_list:
            await self.coordinator.async_send_hdmi(int(source.rsplit(" ", 1)[1]))
        else:
            _LOGGER.warning("Requested source %s not found", source)
            return

        # Optimistically update
        self._attr_source = source
        self.async_write_ha_state()
