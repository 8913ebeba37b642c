"""REST transport: execute a request, classify its status, decode its body."""

from __future__ import annotations

from functools import lru_cache
from time import perf_counter
from typing import Any, TypeVar

import aiohttp
from pydantic import TypeAdapter, ValidationError

from ...core.exceptions import (
    DecodeError,
    TransportError,
    UnauthenticatedError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from ...core.request import Request
from ..telemetry import log_request_executed
from .http_client import HTTPClient

T = TypeVar("T")


@lru_cache(maxsize=256)
def _adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def check_status(status: int) -> None:
    """Raise the error matching a non-success ``status``.

    Raises:
        UnauthenticatedError: On 401
        UnauthorizedError: On 403
        UnexpectedStatusError: On any other status outside [200, 300)
    """
    if status == 401:
        raise UnauthenticatedError()
    if status == 403:
        raise UnauthorizedError()
    if status < 200 or status >= 300:
        raise UnexpectedStatusError(status)


def decode(body: bytes, response_type: type[T]) -> T:
    """Decode a JSON ``body`` into a fresh instance of ``response_type``.

    Raises:
        DecodeError: If the payload is malformed or does not fit the type
    """
    try:
        return _adapter(response_type).validate_json(body)
    except ValidationError as exc:
        name = getattr(response_type, "__name__", repr(response_type))
        raise DecodeError(f"failed decoding {name}: {exc}") from exc


class RESTTransport:
    """Executes built requests through an ``HTTPClient``."""

    def __init__(self, *, timeout: float = 30.0) -> None:
        self._http = HTTPClient(timeout=timeout)

    async def execute(self, request: Request, response_type: type[T]) -> T:
        """Send ``request`` and decode the response into ``response_type``.

        Args:
            request: Fully built request
            response_type: Type to decode the JSON body into

        Returns:
            A new ``response_type`` instance

        Raises:
            TransportError: If the HTTP client fails before a response arrives
            StatusError: If the response status is not 2xx
            DecodeError: If the body cannot be decoded
        """
        start = perf_counter()
        try:
            status, body = await self._http.send(request)
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise TransportError(f"{request.method} {request.url}: {exc}") from exc

        log_request_executed(
            method=request.method,
            url=request.url,
            status=status,
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        check_status(status)
        return decode(body, response_type)

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> RESTTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
