"""Session key derivation and payload encryption for encrypted Viera TVs.

Encrypted payloads are framed as 12 random bytes, a 4 byte big endian
length of the plaintext, then the plaintext itself.  The frame is encrypted
with AES-128-CBC and followed by an HMAC-SHA-256 over the ciphertext; the
whole thing travels base64-encoded inside ``X_EncInfo`` / ``X_EncResult``.
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
import struct
from dataclasses import dataclass
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .exceptions import DecryptionFailed, InvalidKeyFormat, MalformedPayload

_LOGGER = logging.getLogger(__name__)

BLOCK_SIZE = 16
NONCE_SIZE = 12
HEADER_SIZE = NONCE_SIZE + 4
TAG_SIZE = 32


@dataclass(frozen=True)
class SessionKeys:
    """AES key, IV and HMAC key of one encrypted session."""

    key: bytes
    iv: bytes
    hmac_key: bytes


def derive_session_keys(encryption_key: str) -> SessionKeys:
    """Derive the session keys from the base64 key handed out at pairing."""
    try:
        iv = base64.b64decode(encryption_key, validate=True)
    except (binascii.Error, ValueError) as err:
        raise InvalidKeyFormat("Encryption key is not valid base64") from err

    if len(iv) != BLOCK_SIZE:
        raise InvalidKeyFormat(
            f"Encryption key must decode to {BLOCK_SIZE} bytes, got {len(iv)}"
        )

    # Swap the 2-byte halves of every 4-byte block
    key = bytearray(BLOCK_SIZE)
    for i in range(0, BLOCK_SIZE, 4):
        key[i] = iv[i + 2]
        key[i + 1] = iv[i + 3]
        key[i + 2] = iv[i]
        key[i + 3] = iv[i + 1]

    return SessionKeys(key=bytes(key), iv=iv, hmac_key=iv + iv)


def _sign(hmac_key: bytes, ciphertext: bytes) -> bytes:
    h = hmac.HMAC(hmac_key, hashes.SHA256())
    h.update(ciphertext)
    return h.finalize()


def encrypt_payload(plaintext: str, key: bytes, iv: bytes, hmac_key: bytes) -> str:
    """Encrypt and sign a SOAP fragment, returning base64 text."""
    data = plaintext.encode("utf-8")
    frame = os.urandom(NONCE_SIZE) + struct.pack(">I", len(data)) + data

    padder = padding.PKCS7(BLOCK_SIZE * 8).padder()
    padded = padder.update(frame) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()

    return base64.b64encode(ciphertext + _sign(hmac_key, ciphertext)).decode("ascii")


def _strip_framing(body: bytes) -> bytes:
    """Return the plaintext bytes following the 16 byte header.

    The TV zero-pads its payloads, so the first NUL ends the plaintext.
    Payloads produced by ``encrypt_payload`` carry PKCS7 padding instead.
    """
    end = body.find(b"\x00")
    if end >= 0:
        return body[:end]

    unpadder = padding.PKCS7(BLOCK_SIZE * 8).unpadder()
    try:
        return unpadder.update(body) + unpadder.finalize()
    except ValueError as err:
        raise MalformedPayload("Decrypted payload has no terminator") from err


def decrypt_payload(
    data: str, key: bytes, iv: bytes, hmac_key: Optional[bytes] = None
) -> str:
    """Verify (when ``hmac_key`` is given) and decrypt a base64 payload."""
    try:
        raw = base64.b64decode(data.strip(), validate=True)
    except (binascii.Error, ValueError) as err:
        raise DecryptionFailed("Encrypted payload is not valid base64") from err

    ciphertext, tag = raw[:-TAG_SIZE], raw[-TAG_SIZE:]
    if len(raw) < TAG_SIZE + BLOCK_SIZE or len(ciphertext) % BLOCK_SIZE:
        raise DecryptionFailed(f"Encrypted payload has invalid length {len(raw)}")

    if hmac_key is not None:
        h = hmac.HMAC(hmac_key, hashes.SHA256())
        h.update(ciphertext)
        try:
            h.verify(tag)
        except InvalidSignature as err:
            raise DecryptionFailed("Encrypted payload failed HMAC verification") from err

    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    decrypted = decryptor.update(ciphertext) + decryptor.finalize()

    if len(decrypted) < HEADER_SIZE:
        raise MalformedPayload("Decrypted payload is shorter than its header")

    plaintext = _strip_framing(decrypted[HEADER_SIZE:])
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as err:
        raise DecryptionFailed("Decrypted payload is not valid UTF-8") from err
