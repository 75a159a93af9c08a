"""Tests for session key derivation and payload encryption."""

from __future__ import annotations

import base64
import struct

import pytest
from cryptography.hazmat.primitives import hashes, hmac, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from custom_components.viera.crypto import (
    decrypt_payload,
    derive_session_keys,
    encrypt_payload,
)
from custom_components.viera.exceptions import (
    DecryptionFailed,
    InvalidKeyFormat,
    MalformedPayload,
)

from .common import ENCRYPTION_KEY

IV = b"thisis16bytesiv "


def _device_payload(plaintext: bytes, keys, sign_key=None) -> str:
    """Encrypt like the TV does: zero padded, no PKCS7."""
    frame = b"\x01" * 12 + struct.pack(">I", 0) + plaintext
    frame += b"\x00" * (16 - len(frame) % 16 or 16)
    encryptor = Cipher(algorithms.AES(keys.key), modes.CBC(keys.iv)).encryptor()
    ciphertext = encryptor.update(frame) + encryptor.finalize()
    h = hmac.HMAC(sign_key or keys.hmac_key, hashes.SHA256())
    h.update(ciphertext)
    return base64.b64encode(ciphertext + h.finalize()).decode()


def test_derive_session_keys():
    keys = derive_session_keys(ENCRYPTION_KEY)
    assert keys.iv == IV
    assert keys.key == b"isth16istebyv si"
    assert keys.hmac_key == IV + IV
    assert len(keys.hmac_key) == 32


def test_derive_session_keys_is_deterministic():
    assert derive_session_keys(ENCRYPTION_KEY) == derive_session_keys(ENCRYPTION_KEY)


@pytest.mark.parametrize(
    "key",
    [
        base64.b64encode(b"too short").decode(),
        base64.b64encode(b"seventeen bytes!!").decode(),
        "not base64 at all!",
        "",
    ],
)
def test_derive_session_keys_rejects_bad_keys(key):
    with pytest.raises(InvalidKeyFormat):
        derive_session_keys(key)


@pytest.mark.parametrize(
    "plaintext",
    [
        "",
        "<X_ApplicationId>abc123</X_ApplicationId>",
        "x" * 100,
        "<X_KeyEvent>NRC_VOLUP-ONOFF</X_KeyEvent> – ünïcödé",
    ],
)
def test_round_trip(plaintext):
    keys = derive_session_keys(ENCRYPTION_KEY)
    blob = encrypt_payload(plaintext, keys.key, keys.iv, keys.hmac_key)
    assert decrypt_payload(blob, keys.key, keys.iv, keys.hmac_key) == plaintext
    assert decrypt_payload(blob, keys.key, keys.iv) == plaintext


def test_encrypted_frame_layout():
    keys = derive_session_keys(ENCRYPTION_KEY)
    plaintext = "<X_SessionId>1</X_SessionId>"
    raw = base64.b64decode(encrypt_payload(plaintext, keys.key, keys.iv, keys.hmac_key))
    ciphertext = raw[:-32]
    assert len(ciphertext) % 16 == 0

    decryptor = Cipher(algorithms.AES(keys.key), modes.CBC(keys.iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = padding.PKCS7(128).unpadder()
    frame = unpadder.update(padded) + unpadder.finalize()

    assert struct.unpack(">I", frame[12:16])[0] == len(plaintext)
    assert frame[16:] == plaintext.encode()


def test_encrypt_uses_fresh_nonce():
    keys = derive_session_keys(ENCRYPTION_KEY)
    first = encrypt_payload("same", keys.key, keys.iv, keys.hmac_key)
    second = encrypt_payload("same", keys.key, keys.iv, keys.hmac_key)
    assert first != second


def test_decrypt_device_payload_stops_at_nul():
    keys = derive_session_keys(ENCRYPTION_KEY)
    blob = _device_payload(b"<X_SessionId>42</X_SessionId>", keys)
    assert decrypt_payload(blob, keys.key, keys.iv, keys.hmac_key) == "<X_SessionId>42</X_SessionId>"


def test_decrypt_rejects_tampered_tag():
    keys = derive_session_keys(ENCRYPTION_KEY)
    blob = _device_payload(b"hello", keys, sign_key=b"\x00" * 32)
    with pytest.raises(DecryptionFailed):
        decrypt_payload(blob, keys.key, keys.iv, keys.hmac_key)


def test_decrypt_rejects_tampered_ciphertext():
    keys = derive_session_keys(ENCRYPTION_KEY)
    raw = bytearray(base64.b64decode(encrypt_payload("hello", keys.key, keys.iv, keys.hmac_key)))
    raw[0] ^= 0xFF
    with pytest.raises(DecryptionFailed):
        decrypt_payload(base64.b64encode(bytes(raw)).decode(), keys.key, keys.iv, keys.hmac_key)


@pytest.mark.parametrize("blob", ["%%%", base64.b64encode(b"\x00" * 40).decode(), ""])
def test_decrypt_rejects_garbage(blob):
    keys = derive_session_keys(ENCRYPTION_KEY)
    with pytest.raises(DecryptionFailed):
        decrypt_payload(blob, keys.key, keys.iv)


def test_decrypt_without_terminator_is_malformed():
    keys = derive_session_keys(ENCRYPTION_KEY)
    # 32 bytes of 0x41 after the header: no NUL and no valid PKCS7 padding
    frame = b"\x01" * 16 + b"A" * 32
    encryptor = Cipher(algorithms.AES(keys.key), modes.CBC(keys.iv)).encryptor()
    ciphertext = encryptor.update(frame) + encryptor.finalize()
    blob = base64.b64encode(ciphertext + b"\x00" * 32).decode()
    with pytest.raises(MalformedPayload):
        decrypt_payload(blob, keys.key, keys.iv)
