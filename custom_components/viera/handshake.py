"""Encrypted session establishment."""

from __future__ import annotations

import logging
import re
from typing import Optional
from xml.sax.saxutils import escape

from . import parsers
from .const import ACTION_GET_SESSION_ID, URL_CONTROL_NRC, URN_REMOTE_CONTROL
from .crypto import derive_session_keys, encrypt_payload
from .exceptions import HandshakeFailed, InvalidAddress, VieraError
from .session import VieraSession
from .soap import CommandDispatcher

_LOGGER = logging.getLogger(__name__)

_OCTET = r"(\d|[1-9]\d|1\d{2}|2[0-4]\d|25[0-5])"
IPV4_RE = re.compile(rf"({_OCTET}\.){{3}}{_OCTET}")


def validate_address(address: str) -> str:
    """Return ``address`` if it is a dotted-quad IPv4 literal."""
    if not isinstance(address, str) or not IPV4_RE.fullmatch(address):
        raise InvalidAddress(f"Invalid IP address: {address!r}")
    return address


class SessionHandshake:
    """Drives a session from unstarted to established (or failed)."""

    def __init__(self, dispatcher: CommandDispatcher) -> None:
        self._dispatcher = dispatcher

    @property
    def session(self) -> VieraSession:
        return self._dispatcher.session

    async def run(
        self,
        address: str,
        app_id: Optional[str] = None,
        encryption_key: Optional[str] = None,
    ) -> VieraSession:
        session = self.session
        validate_address(address)

        if app_id is None or encryption_key is None:
            session.configure(address)
            _LOGGER.debug("Connected to %s without encryption", address)
            return session

        try:
            keys = derive_session_keys(encryption_key)
        except VieraError:
            session.fail()
            raise
        session.configure(address, app_id, encryption_key, keys)

        await self._request_session_id()
        return session

    async def _request_session_id(self) -> None:
        session = self.session
        keys = session.keys
        app_id = f"<X_ApplicationId>{escape(session.app_id)}</X_ApplicationId>"
        encinfo = encrypt_payload(app_id, keys.key, keys.iv, keys.hmac_key)

        try:
            result = await self._dispatcher.send(
                URL_CONTROL_NRC,
                URN_REMOTE_CONTROL,
                ACTION_GET_SESSION_ID,
                f"{app_id}<X_EncInfo>{encinfo}</X_EncInfo>",
            )
            session_id = parsers.parse_session_id(result)
        except VieraError as err:
            session.fail()
            _LOGGER.error("Encrypted session handshake with %s failed: %s", session.address, err)
            raise HandshakeFailed(f"No session id from {session.address}: {err}") from err

        session.establish(session_id)
        _LOGGER.debug("Encrypted session established with %s", session.address)
