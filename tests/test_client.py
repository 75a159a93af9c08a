"""Tests for the caller-facing command surface and response parsers."""

from __future__ import annotations

import asyncio

import pytest

from custom_components.viera import parsers
from custom_components.viera.client import VieraClient
from custom_components.viera.const import URL_CONTROL_DMR, URL_CONTROL_NRC
from custom_components.viera.exceptions import MissingField, TransportFailed

from .common import APP_ID, ENCRYPTION_KEY, TV_ADDRESS, FakeTransport, encrypted_session_reply


@pytest.fixture
async def plain_client(client, transport):
    await client.connect(TV_ADDRESS)
    return client


async def test_get_volume(plain_client, transport):
    transport.queue("<u:GetVolumeResponse><CurrentVolume>23</CurrentVolume></u:GetVolumeResponse>")
    assert await plain_client.get_volume() == 23
    request = transport.requests[0]
    assert request.path == URL_CONTROL_DMR
    assert "<InstanceID>0</InstanceID><Channel>Master</Channel>" in request.body


async def test_get_volume_missing_field(plain_client, transport):
    transport.queue("<u:GetVolumeResponse/>")
    with pytest.raises(MissingField) as excinfo:
        await plain_client.get_volume()
    assert excinfo.value.field == "CurrentVolume"


async def test_set_volume(plain_client, transport):
    transport.queue("<ok/>")
    await plain_client.set_volume(42)
    assert "<DesiredVolume>42</DesiredVolume>" in transport.requests[0].body


@pytest.mark.parametrize("volume", [-1, 101])
async def test_set_volume_out_of_range(plain_client, transport, volume):
    with pytest.raises(ValueError):
        await plain_client.set_volume(volume)
    assert transport.requests == []


@pytest.mark.parametrize(("raw", "expected"), [("1", True), ("0", False)])
async def test_get_mute(plain_client, transport, raw, expected):
    transport.queue(f"<CurrentMute>{raw}</CurrentMute>")
    assert await plain_client.get_mute() is expected


async def test_set_mute(plain_client, transport):
    transport.queue("<ok/>")
    await plain_client.set_mute(True)
    assert "<DesiredMute>1</DesiredMute>" in transport.requests[0].body


@pytest.mark.parametrize(
    ("key", "code"),
    [
        ("volume_up", "NRC_VOLUP-ONOFF"),
        ("HOME", "NRC_HOME-ONOFF"),
        ("nrc_mute-onoff", "NRC_MUTE-ONOFF"),
    ],
)
async def test_send_key(plain_client, transport, key, code):
    transport.queue("<ok/>")
    await plain_client.send_key(key)
    request = transport.requests[0]
    assert request.path == URL_CONTROL_NRC
    assert f"<X_KeyEvent>{code}</X_KeyEvent>" in request.body


async def test_send_hdmi(plain_client, transport):
    transport.queue("<ok/>")
    await plain_client.send_hdmi(2)
    assert "<X_KeyEvent>NRC_HDMI1-ONOFF</X_KeyEvent>" in transport.requests[0].body

    with pytest.raises(ValueError):
        await plain_client.send_hdmi(0)


async def test_launch_app(plain_client, transport):
    transport.queue("<ok/>")
    await plain_client.launch_app("0070000200180001")
    body = transport.requests[0].body
    assert "<X_AppType>vc_app</X_AppType>" in body
    assert "<X_LaunchKeyword>product_id=0070000200180001</X_LaunchKeyword>" in body


async def test_request_pin_code_escapes_name(plain_client, transport):
    transport.queue("<ok/>")
    await plain_client.request_pin_code("Living <Room> & Co")
    body = transport.requests[0].body
    assert "<u:X_DisplayPinCode " in body
    assert "<X_DeviceName>Living &lt;Room&gt; &amp; Co</X_DeviceName>" in body


async def test_deadline_turns_into_transport_failure():
    async def slow(request):
        await asyncio.sleep(10)

    client = VieraClient(FakeTransport(slow), timeout=0.01)
    await client.connect(TV_ADDRESS)
    with pytest.raises(TransportFailed):
        await client.get_volume()


async def test_deadline_rolls_back_encrypted_send():
    async def slow(request):
        await asyncio.sleep(10)

    client = VieraClient(FakeTransport(encrypted_session_reply(), slow), timeout=0.05)
    await client.connect(TV_ADDRESS, APP_ID, ENCRYPTION_KEY)
    with pytest.raises(TransportFailed):
        await client.send_key("volume_up")
    assert client.session.sequence.value == 1
    assert not client.session.lock.locked()


def test_find_field():
    assert parsers.find_field("<a><X_SessionId>abc</X_SessionId></a>", "X_SessionId") == "abc"
    assert parsers.find_field("<a/>", "X_SessionId") is None
    assert parsers.find_field(None, "X_SessionId") is None


def test_parse_session_id_missing():
    with pytest.raises(MissingField):
        parsers.parse_session_id("<X_Other>1</X_Other>")


@pytest.mark.parametrize("xml", ["<CurrentMute>2</CurrentMute>", "<CurrentVolume>x</CurrentVolume>"])
def test_parsers_reject_bad_values(xml):
    with pytest.raises(MissingField):
        if "Mute" in xml:
            parsers.parse_mute(xml)
        else:
            parsers.parse_volume(xml)
