"""Session state shared by the handshake and the command dispatcher."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Optional

from .crypto import SessionKeys
from .exceptions import AlreadyInitialized, SessionNotEstablished

_LOGGER = logging.getLogger(__name__)


class SessionMode(Enum):
    PLAIN = "plain"
    ENCRYPTED = "encrypted"


class HandshakeState(Enum):
    UNSTARTED = "unstarted"
    KEYS_DERIVED = "keys_derived"
    ESTABLISHED = "established"
    FAILED = "failed"


class SequenceCounter:
    """Per-session command counter with speculative increment.

    ``next_for_send`` advances the counter before the command goes out;
    the caller then either ``acknowledge``s a delivered command or
    ``rollback``s one that never reached the TV.
    """

    def __init__(self) -> None:
        self._value: Optional[int] = None
        self._start: Optional[int] = None
        self._pending: Optional[int] = None

    @property
    def value(self) -> Optional[int]:
        return self._value

    @property
    def initialized(self) -> bool:
        return self._value is not None

    def initialize(self, start: int = 1) -> None:
        if self._value is not None:
            raise AlreadyInitialized("Sequence counter is already initialized")
        self._value = start
        self._start = start
        self._pending = None

    def next_for_send(self) -> int:
        if self._value is None:
            raise SessionNotEstablished("Sequence counter is not initialized")
        self._pending = self._value
        self._value += 1
        return self._value

    def acknowledge(self) -> None:
        self._pending = None

    def rollback(self) -> None:
        if self._pending is None:
            _LOGGER.debug("Sequence rollback requested with nothing pending")
            return
        self._value = max(self._pending, self._start)
        self._pending = None

    def reset(self) -> None:
        self._value = None
        self._start = None
        self._pending = None


class VieraSession:
    """Everything the dispatcher needs to know about one TV connection."""

    def __init__(self) -> None:
        self.mode = SessionMode.PLAIN
        self.state = HandshakeState.UNSTARTED
        self.address: Optional[str] = None
        self.app_id: Optional[str] = None
        self.encryption_key: Optional[str] = None
        self.keys: Optional[SessionKeys] = None
        self.session_id: Optional[str] = None
        self.sequence = SequenceCounter()
        # Held around every sequence-number mutation
        self.lock = asyncio.Lock()

    @property
    def encrypted(self) -> bool:
        return self.mode is SessionMode.ENCRYPTED

    @property
    def established(self) -> bool:
        return (
            self.state is HandshakeState.ESTABLISHED
            and self.session_id is not None
            and self.sequence.initialized
        )

    def configure(
        self,
        address: str,
        app_id: Optional[str] = None,
        encryption_key: Optional[str] = None,
        keys: Optional[SessionKeys] = None,
    ) -> None:
        """Reset the session for a new address and (optional) credentials."""
        self.address = address
        self.session_id = None
        self.sequence.reset()
        if keys is None:
            self.mode = SessionMode.PLAIN
            self.app_id = None
            self.encryption_key = None
            self.keys = None
        else:
            self.mode = SessionMode.ENCRYPTED
            self.app_id = app_id
            self.encryption_key = encryption_key
            self.keys = keys
        self.state = HandshakeState.KEYS_DERIVED

    def establish(self, session_id: str) -> None:
        self.session_id = session_id
        self.sequence.initialize(1)
        self.state = HandshakeState.ESTABLISHED

    def fail(self) -> None:
        self.session_id = None
        self.sequence.reset()
        self.state = HandshakeState.FAILED

    def as_dict(self) -> dict[str, object]:
        """Non-secret view of the session, used by diagnostics."""
        return {
            "address": self.address,
            "mode": self.mode.value,
            "state": self.state.value,
            "app_id": self.app_id,
            "session_id": self.session_id,
            "sequence_number": self.sequence.value,
        }
