"""HTTP client helper."""

from __future__ import annotations

from typing import TYPE_CHECKING

import aiohttp

if TYPE_CHECKING:
    from ...core.request import Request


class HTTPClient:
    """Async HTTP client wrapper executing one request per round trip."""

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def send(self, request: Request) -> tuple[int, bytes]:
        """Send ``request`` and return the status code and raw body.

        The response is released when the body has been read, on success and
        on failure alike.
        """
        async with self.session.request(
            request.method,
            request.url,
            headers=request.headers,
            data=request.body,
        ) as response:
            body = await response.read()
            return response.status, body

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
