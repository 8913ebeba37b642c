"""Request middlewares.

Middlewares run on every outgoing request, continuation pages included, in
the order they were given to the service.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from .exceptions import EmptyBearerTokenError, MiddlewareError
from .request import Request


class Middleware(ABC):
    """Transform applied to a request before it is sent."""

    @abstractmethod
    def apply(self, request: Request) -> Request:
        """Return the request to send, or raise ``MiddlewareError``."""


class UnauthenticatedMiddleware(Middleware):
    """Pass-through middleware for public APIs."""

    def apply(self, request: Request) -> Request:
        return request


class BearerAuthMiddleware(Middleware):
    """Set the ``Authorization`` header from a bearer token.

    Args:
        token: Token value. A bare token is prefixed with ``Bearer``; a value
            that already carries the prefix is used unchanged.
    """

    def __init__(self, token: str) -> None:
        token = token.strip()
        if token and not token.lower().startswith("bearer "):
            token = f"Bearer {token}"
        self._authorization = token

    def apply(self, request: Request) -> Request:
        if not self._authorization:
            raise MiddlewareError(401, EmptyBearerTokenError())
        request.headers["Authorization"] = self._authorization
        return request


class HeaderProviderMiddleware(Middleware):
    """Set headers computed per request, e.g. freshly signed tokens.

    Args:
        provider: Callable returning the headers to set for a request
    """

    def __init__(self, provider: Callable[[Request], dict[str, str]]) -> None:
        self._provider = provider

    def apply(self, request: Request) -> Request:
        request.headers.update(self._provider(request))
        return request
