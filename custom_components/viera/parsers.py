"""Response parsers for Panasonic Viera SOAP API."""

from __future__ import annotations

import logging
import re
from typing import Optional

from .exceptions import MissingField

_LOGGER = logging.getLogger(__name__)


# ---------------------- Shared Helper ----------------------

def find_field(xml: Optional[str], tag: str) -> Optional[str]:
    """Return the text of the first ``<tag>`` element, or None."""
    if not xml:
        return None
    match = re.search(rf"<{re.escape(tag)}>(.*?)</{re.escape(tag)}>", xml, re.DOTALL)
    return match.group(1) if match else None


def require_field(xml: Optional[str], tag: str) -> str:
    value = find_field(xml, tag)
    if value is None:
        _LOGGER.debug("Response has no <%s>", tag)
        raise MissingField(tag)
    return value


# ---------------------- Individual Parsers ----------------------

def parse_session_id(xml: Optional[str]) -> str:
    """Parse X_GetEncryptSessionId response."""
    return require_field(xml, "X_SessionId")


def parse_volume(xml: Optional[str]) -> int:
    """Parse GetVolume response."""
    value = require_field(xml, "CurrentVolume")
    try:
        return int(value)
    except ValueError as err:
        raise MissingField("CurrentVolume") from err


def parse_mute(xml: Optional[str]) -> bool:
    """Parse GetMute response."""
    value = require_field(xml, "CurrentMute").strip()
    if value not in ("0", "1"):
        raise MissingField("CurrentMute")
    return value == "1"
