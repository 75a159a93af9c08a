"""HTTP transport for the Viera SOAP API."""

from __future__ import annotations

import asyncio
import logging
from typing import Mapping, Optional, Protocol

import aiohttp

from .const import DEFAULT_PORT, DEFAULT_TIMEOUT
from .exceptions import TransportFailed

_LOGGER = logging.getLogger(__name__)


class SoapTransport(Protocol):
    """Anything able to deliver one SOAP request and return the body."""

    async def __call__(
        self,
        address: str,
        port: int,
        path: str,
        method: str,
        headers: Mapping[str, str],
        body: str,
    ) -> str: ...


class VieraTransport:
    """aiohttp transport — owns (or borrows) a ClientSession."""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    # ------------------------- session -------------------------

    async def _session_get(self) -> aiohttp.ClientSession:
        """Return an aiohttp session, creating it if needed."""
        if not self._session or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def async_close(self) -> None:
        """Close the HTTP session if we created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    # ------------------------- request -------------------------

    async def __call__(
        self,
        address: str,
        port: int,
        path: str,
        method: str,
        headers: Mapping[str, str],
        body: str,
    ) -> str:
        url = f"http://{address}:{port or DEFAULT_PORT}{path}"
        session = await self._session_get()
        try:
            async with session.request(
                method,
                url,
                data=body.encode("utf-8"),
                headers=dict(headers),
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                if resp.status != 200:
                    # Faults still carry a SOAP body for the parsers
                    _LOGGER.debug("SOAP %s answered HTTP %s", url, resp.status)
                return text
        except (asyncio.TimeoutError, aiohttp.ClientError) as err:
            _LOGGER.debug("SOAP %s network error: %s", url, err)
            raise TransportFailed(f"{method} {url} failed: {err}") from err
