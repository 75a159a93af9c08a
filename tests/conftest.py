"""Shared fixtures for the Viera tests."""

from __future__ import annotations

import pytest

from custom_components.viera.client import VieraClient

from .common import APP_ID, ENCRYPTION_KEY, TV_ADDRESS, FakeTransport, encrypted_session_reply


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> VieraClient:
    return VieraClient(transport)


@pytest.fixture
async def encrypted_client(client: VieraClient, transport: FakeTransport) -> VieraClient:
    transport.queue(encrypted_session_reply())
    await client.connect(TV_ADDRESS, APP_ID, ENCRYPTION_KEY)
    transport.requests.clear()
    return client
