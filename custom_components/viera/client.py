"""High-level client for Panasonic Viera TVs."""

from __future__ import annotations

import logging
from typing import Optional
from xml.sax.saxutils import escape

import aiohttp

from . import parsers
from .const import (
    ACTION_DISPLAY_PIN_CODE,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    URL_CONTROL_DMR,
    URL_CONTROL_NRC,
    URN_REMOTE_CONTROL,
    URN_RENDERING_CONTROL,
    VIERA_KEYS,
)
from .handshake import SessionHandshake
from .session import VieraSession
from .soap import CommandDispatcher, send_with_deadline
from .transport import SoapTransport, VieraTransport

_LOGGER = logging.getLogger(__name__)

MASTER_CHANNEL = "<InstanceID>0</InstanceID><Channel>Master</Channel>"


class VieraClient:
    """Command surface over the dispatcher: keys, volume, mute, apps."""

    def __init__(
        self,
        transport: Optional[SoapTransport] = None,
        *,
        http_session: Optional[aiohttp.ClientSession] = None,
        port: int = DEFAULT_PORT,
        timeout: Optional[float] = None,
    ) -> None:
        self._transport = transport or VieraTransport(http_session, timeout or DEFAULT_TIMEOUT)
        self.session = VieraSession()
        self.dispatcher = CommandDispatcher(self.session, self._transport, port)
        self._handshake = SessionHandshake(self.dispatcher)
        self._deadline = timeout

    async def async_close(self) -> None:
        if isinstance(self._transport, VieraTransport):
            await self._transport.async_close()

    # ------------------------- session -------------------------

    async def connect(
        self,
        address: str,
        app_id: Optional[str] = None,
        encryption_key: Optional[str] = None,
    ) -> VieraSession:
        """Select plain or encrypted mode and run the handshake."""
        return await self._handshake.run(address, app_id, encryption_key)

    async def _send(self, url_path: str, urn: str, action: str, parameters: str = "") -> str:
        if self._deadline is None:
            return await self.dispatcher.send(url_path, urn, action, parameters)
        return await send_with_deadline(
            self.dispatcher, self._deadline, url_path, urn, action, parameters
        )

    # ------------------------- pairing -------------------------

    async def request_pin_code(self, name: str) -> str:
        """Ask the TV to display a PIN code for pairing."""
        return await self._send(
            URL_CONTROL_NRC,
            URN_REMOTE_CONTROL,
            ACTION_DISPLAY_PIN_CODE,
            f"<X_DeviceName>{escape(name)}</X_DeviceName>",
        )

    # ------------------------- remote control ------------------

    async def send_key(self, key: str) -> str:
        """Send a remote key, either a catalog name or a raw NRC code."""
        code = VIERA_KEYS.get(key.lower(), key).upper()
        _LOGGER.debug("Sending key %s", code)
        return await self._send(
            URL_CONTROL_NRC,
            URN_REMOTE_CONTROL,
            "X_SendKey",
            f"<X_KeyEvent>{escape(code)}</X_KeyEvent>",
        )

    async def send_hdmi(self, hdmi_input: int) -> str:
        """Switch to HDMI input ``hdmi_input`` (1-based)."""
        if hdmi_input < 1:
            raise ValueError(f"HDMI input must be 1 or higher, got {hdmi_input}")
        return await self.send_key(f"NRC_HDMI{hdmi_input - 1}-ONOFF")

    async def launch_app(self, app_id: str) -> str:
        return await self._send(
            URL_CONTROL_NRC,
            URN_REMOTE_CONTROL,
            "X_LaunchApp",
            "<X_AppType>vc_app</X_AppType>"
            f"<X_LaunchKeyword>product_id={escape(app_id)}</X_LaunchKeyword>",
        )

    # ------------------------- rendering control ---------------

    async def get_volume(self) -> int:
        resp = await self._send(URL_CONTROL_DMR, URN_RENDERING_CONTROL, "GetVolume", MASTER_CHANNEL)
        return parsers.parse_volume(resp)

    async def set_volume(self, volume: int) -> str:
        if not 0 <= volume <= 100:
            raise ValueError("Volume must be in range from 0 to 100")
        return await self._send(
            URL_CONTROL_DMR,
            URN_RENDERING_CONTROL,
            "SetVolume",
            f"{MASTER_CHANNEL}<DesiredVolume>{int(volume)}</DesiredVolume>",
        )

    async def get_mute(self) -> bool:
        resp = await self._send(URL_CONTROL_DMR, URN_RENDERING_CONTROL, "GetMute", MASTER_CHANNEL)
        return parsers.parse_mute(resp)

    async def set_mute(self, enable: bool) -> str:
        mute = "1" if enable else "0"
        return await self._send(
            URL_CONTROL_DMR,
            URN_RENDERING_CONTROL,
            "SetMute",
            f"{MASTER_CHANNEL}<DesiredMute>{mute}</DesiredMute>",
        )
