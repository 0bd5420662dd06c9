"""
Async HTTP transport for the Voyatek REST backend.

One request per call: no retries, no caching. The aiohttp session is created
on first use and reused until the transport is closed.
"""
import asyncio
import json
import logging
from typing import Any, Optional

import aiohttp

from voyatek.config import settings
from voyatek.integrations.errors import HTTPError, InvalidResponse, NetworkError

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class Transport:
    """Interface every transport implements; tests substitute their own."""

    async def request(self, method: str, url: str, json_body: Any = None) -> bytes:
        raise NotImplementedError

    async def close(self) -> None:
        return None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class AiohttpTransport(Transport):
    """Transport backed by a lazily created aiohttp.ClientSession."""

    def __init__(self, connect_timeout: Optional[float] = None, total_timeout: Optional[float] = None):
        self.timeout = aiohttp.ClientTimeout(
            total=total_timeout if total_timeout is not None else settings.total_timeout,
            connect=connect_timeout if connect_timeout is not None else settings.connect_timeout,
        )
        self.session: Optional[aiohttp.ClientSession] = None
        self._session_loop: Optional[asyncio.AbstractEventLoop] = None

    async def __aenter__(self):
        self._ensure_session()
        return self

    def _ensure_session(self) -> aiohttp.ClientSession:
        # A session is bound to the loop that created it; a new asyncio.run gets a new one.
        loop = asyncio.get_running_loop()
        if self.session is None or self.session.closed or self._session_loop is not loop:
            if self.session is not None and not self.session.closed:
                logger.debug("Event loop changed, discarding the previous aiohttp session")
            self.session = aiohttp.ClientSession(timeout=self.timeout, headers={"Accept": "application/json"})
            self._session_loop = loop
        return self.session

    async def close(self) -> None:
        # A session from a finished loop can no longer be closed; it is just dropped.
        if self.session and not self.session.closed and self._session_loop is asyncio.get_running_loop():
            await self.session.close()
        self.session = None
        self._session_loop = None

    async def request(self, method: str, url: str, json_body: Any = None) -> bytes:
        """
        Perform one HTTP call and return the raw body.

        Raises:
            HTTPError: status outside 200-299
            InvalidResponse: reply could not be read as an HTTP response
            NetworkError: connection, DNS or timeout failure
        """
        session = self._ensure_session()
        data = None
        headers = None
        if json_body is not None:
            data = json.dumps(json_body).encode("utf-8")
            headers = JSON_HEADERS

        logger.debug("%s %s", method, url)
        try:
            async with session.request(method, url, data=data, headers=headers) as response:
                body = await response.read()
                status = response.status
        except (aiohttp.ClientResponseError, aiohttp.ClientPayloadError) as e:
            logger.warning("%s %s returned an unreadable response: %s", method, url, e)
            raise InvalidResponse(str(e)) from e
        except asyncio.TimeoutError as e:
            logger.warning("%s %s timed out", method, url)
            raise NetworkError("The request timed out") from e
        except aiohttp.ClientError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise NetworkError(str(e) or e.__class__.__name__) from e

        if not 200 <= status <= 299:
            logger.warning("%s %s returned HTTP %d", method, url, status)
            raise HTTPError(status, body.decode("utf-8", errors="replace")[:200])

        logger.debug("%s %s -> %d (%d bytes)", method, url, status, len(body))
        return body


_default_transport: Optional[Transport] = None


def get_default_transport() -> Transport:
    """Process-wide transport used when none is injected."""
    global _default_transport
    if _default_transport is None:
        _default_transport = AiohttpTransport()
    return _default_transport


async def close_default_transport() -> None:
    global _default_transport
    if _default_transport is not None:
        await _default_transport.close()
    _default_transport = None
