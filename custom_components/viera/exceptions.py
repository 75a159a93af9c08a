"""Exceptions raised by the Viera command channel."""

from __future__ import annotations

from homeassistant.exceptions import HomeAssistantError


class VieraError(HomeAssistantError):
    """Base class for all errors raised by this integration."""


class InvalidAddress(VieraError):
    """The TV address is not a valid IPv4 literal."""


class InvalidKeyFormat(VieraError):
    """The encryption key does not decode to 16 bytes."""


class HandshakeFailed(VieraError):
    """The TV did not hand out an encrypted session id."""


class SessionNotEstablished(VieraError):
    """An encrypted command was attempted before the handshake completed."""


class AlreadyInitialized(VieraError):
    """The sequence counter was initialized twice."""


class TransportFailed(VieraError):
    """No HTTP response arrived from the TV."""


class DecryptionFailed(VieraError):
    """An encrypted payload could not be decoded, verified or decrypted."""


class MalformedPayload(VieraError):
    """A decrypted payload has no recognizable framing."""


class MissingField(VieraError):
    """An expected tag is absent from a response."""

    def __init__(self, field: str) -> None:
        super().__init__(f"No <{field}> found in response")
        self.field = field
