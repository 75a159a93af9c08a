"""Test helpers: canned TV replies and an in-memory transport."""

from __future__ import annotations

import base64
from dataclasses import dataclass
import inspect
from typing import Callable, Mapping, Union

from custom_components.viera.crypto import derive_session_keys, encrypt_payload

TV_ADDRESS = "192.168.1.20"
APP_ID = "abc123"
ENCRYPTION_KEY = base64.b64encode(b"thisis16bytesiv ").decode()
SESSION_RESPONSE = (
    '<?xml version="1.0"?><s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">'
    "<s:Body><u:X_GetEncryptSessionIdResponse xmlns:u=\"urn:panasonic-com:service:p00NetworkControl:1\">"
    "<X_ApplicationId>abc123</X_ApplicationId>"
    "<X_EncResult>{}</X_EncResult>"
    "</u:X_GetEncryptSessionIdResponse></s:Body></s:Envelope>"
)
OK_RESPONSE = (
    '<?xml version="1.0"?><s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">'
    "<s:Body><u:X_SendKeyResponse/></s:Body></s:Envelope>"
)
FAULT_RESPONSE = (
    '<?xml version="1.0"?><s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">'
    "<s:Body><s:Fault><faultcode>s:Client</faultcode><faultstring>UPnPError</faultstring>"
    "<detail><UPnPError><errorCode>401</errorCode></UPnPError></detail>"
    "</s:Fault></s:Body></s:Envelope>"
)


@dataclass
class Request:
    address: str
    port: int
    path: str
    method: str
    headers: Mapping[str, str]
    body: str


Reply = Union[str, BaseException, Callable[[Request], str]]


class FakeTransport:
    """In-memory transport returning canned replies in order."""

    def __init__(self, *replies: Reply) -> None:
        self.replies = list(replies)
        self.requests: list[Request] = []

    def queue(self, *replies: Reply) -> None:
        self.replies.extend(replies)

    async def __call__(self, address, port, path, method, headers, body) -> str:
        request = Request(address, port, path, method, dict(headers), body)
        self.requests.append(request)
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            result = reply(request)
            if inspect.isawaitable(result):
                result = await result
            return result
        return reply


def encrypted_session_reply(session_id: str = "SESS1") -> str:
    keys = derive_session_keys(ENCRYPTION_KEY)
    blob = encrypt_payload(
        f"<X_SessionId>{session_id}</X_SessionId>", keys.key, keys.iv, keys.hmac_key
    )
    return SESSION_RESPONSE.format(blob)


