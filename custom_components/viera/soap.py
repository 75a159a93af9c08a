"""SOAP command dispatcher for Panasonic Viera TVs."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Optional
from xml.sax.saxutils import escape

from .const import (
    ACTION_ENCRYPTED_COMMAND,
    BOOTSTRAP_ACTIONS,
    DEFAULT_PORT,
    SOAP_PREFIX,
    URN_REMOTE_CONTROL,
)
from .crypto import decrypt_payload, encrypt_payload
from .exceptions import SessionNotEstablished, TransportFailed
from .session import VieraSession
from .transport import SoapTransport

_LOGGER = logging.getLogger(__name__)

ENC_RESULT_RE = re.compile(r"<X_EncResult>(.*?)</X_EncResult>", re.IGNORECASE | re.DOTALL)


def build_action(urn: str, action: str, parameters: str) -> str:
    """Construct the namespaced action element."""
    return (
        f'<{SOAP_PREFIX}:{action} xmlns:{SOAP_PREFIX}="urn:{urn}">'
        f"{parameters}</{SOAP_PREFIX}:{action}>"
    )


def build_envelope(urn: str, action: str, parameters: str) -> str:
    """Wrap an action into a standard SOAP envelope."""
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/"'
        ' s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">'
        f"<s:Body>{build_action(urn, action, parameters)}</s:Body>"
        "</s:Envelope>"
    )


def build_headers(urn: str, action: str) -> dict[str, str]:
    return {
        "Content-Type": 'text/xml; charset="utf-8"',
        "SOAPAction": f'"urn:{urn}#{action}"',
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
        "Accept": "text/xml",
    }


class CommandDispatcher:
    """Sends SOAP actions, wrapping remote-control commands when encrypted."""

    def __init__(
        self,
        session: VieraSession,
        transport: SoapTransport,
        port: int = DEFAULT_PORT,
    ) -> None:
        self.session = session
        self._transport = transport
        self._port = port
        self._last_raw_response: Optional[str] = None

    def requires_encryption(self, urn: str, action: str) -> bool:
        return (
            self.session.encrypted
            and urn == URN_REMOTE_CONTROL
            and action not in BOOTSTRAP_ACTIONS
        )

    async def send(self, url_path: str, urn: str, action: str, parameters: str = "") -> str:
        """Send one action and return the (decrypted) response body."""
        if not self.requires_encryption(urn, action):
            return self._splice_result(await self._post(url_path, urn, action, parameters))

        if not self.session.established:
            raise SessionNotEstablished(
                f"Cannot send {action}: encrypted session not established"
            )

        async with self.session.lock:
            counter = self.session.sequence
            seq = counter.next_for_send()
            _LOGGER.debug("Encrypting %s with sequence number %s", action, seq)
            try:
                wrapped = self._wrap_command(urn, action, parameters, seq)
                body = await self._post(url_path, urn, ACTION_ENCRYPTED_COMMAND, wrapped)
            except BaseException:
                counter.rollback()
                raise
            counter.acknowledge()

        return self._splice_result(body)

    def _wrap_command(self, urn: str, action: str, parameters: str, seq: int) -> str:
        session = self.session
        keys = session.keys
        command = (
            f"<X_SessionId>{escape(session.session_id)}</X_SessionId>"
            f"<X_SequenceNumber>{seq:08d}</X_SequenceNumber>"
            f"<X_OriginalCommand>{build_action(urn, action, parameters)}</X_OriginalCommand>"
        )
        encrypted = encrypt_payload(command, keys.key, keys.iv, keys.hmac_key)
        return (
            f"<X_ApplicationId>{escape(session.app_id)}</X_ApplicationId>"
            f"<X_EncInfo>{encrypted}</X_EncInfo>"
        )

    async def _post(self, url_path: str, urn: str, action: str, parameters: str) -> str:
        envelope = build_envelope(urn, action, parameters)
        _LOGGER.debug("SOAP %s -> %s%s", action, self.session.address, url_path)

        body = await self._transport(
            self.session.address,
            self._port,
            url_path,
            "POST",
            build_headers(urn, action),
            envelope,
        )
        self._last_raw_response = body
        _LOGGER.debug("SOAP %s response: %d bytes", action, len(body))
        return body

    def _splice_result(self, body: str) -> str:
        """Replace an ``X_EncResult`` element with its decrypted text."""
        match = ENC_RESULT_RE.search(body)
        if not match:
            return body
        keys = self.session.keys
        if keys is None:
            _LOGGER.debug("Encrypted result on a plain session, left untouched")
            return body
        decrypted = decrypt_payload(match.group(1), keys.key, keys.iv, keys.hmac_key)
        return body[: match.start()] + decrypted + body[match.end():]

    @property
    def last_raw_response(self) -> Optional[str]:
        return self._last_raw_response


async def send_with_deadline(
    dispatcher: CommandDispatcher,
    timeout: float,
    url_path: str,
    urn: str,
    action: str,
    parameters: str = "",
) -> str:
    """Run ``dispatcher.send`` under a caller deadline."""
    try:
        async with asyncio.timeout(timeout):
            return await dispatcher.send(url_path, urn, action, parameters)
    except TimeoutError as err:
        raise TransportFailed(f"{action} timed out after {timeout}s") from err
