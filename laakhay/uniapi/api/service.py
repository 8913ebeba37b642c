"""Service registry for typed REST endpoints.

The Service maps (HTTP method, path) pairs to endpoints and dispatches
calls with the service's base URL, middleware chain and transport.

Architecture:
    Endpoints are registered during setup and only read afterwards, so
    registration must complete before calls run concurrently. Each call is
    wrapped in a deadline covering every page of a paginated sequence.

Example:
    >>> service = Service("https://api.example.com", BearerAuthMiddleware(token))
    >>> service.add_endpoint("GET", Endpoint("/users", UserList, paginator))
    >>> async with service:
    ...     users = await call(service, UserList, "GET", "/users")

See Also:
    - Endpoint: Orchestrates request building, execution and pagination
    - Middleware: Request transforms applied to every request
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, TypeVar, get_origin, is_typeddict

from ..config import DEFAULT_MAX_PAGES, DEFAULT_REQUEST_TIMEOUT, ServiceConfig
from ..core.exceptions import (
    CallTimeoutError,
    DuplicateEndpointError,
    NoSuchEndpointError,
    TypeMismatchError,
    UnsupportedMethodError,
)
from ..core.middleware import Middleware
from ..core.options import CallOptions
from ..runtime.rest.endpoint import Endpoint
from ..runtime.rest.transport import RESTTransport

T = TypeVar("T")

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST")


class Service:
    """Registry of endpoints sharing a base URL and middleware chain.

    Args:
        base_url: Absolute base URL endpoint paths are joined to
        *middlewares: Middlewares applied, in order, to every request
        transport: Transport to use (defaults to a new ``RESTTransport``
            owned and closed by the service)
        request_timeout: Timeout in seconds for one HTTP round trip
        call_timeout: Default deadline in seconds for a whole call
        max_pages: Default page bound for paginated endpoints
    """

    def __init__(
        self,
        base_url: str,
        *middlewares: Middleware,
        transport: RESTTransport | None = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        call_timeout: float | None = None,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> None:
        self.config = ServiceConfig(
            base_url=base_url,
            request_timeout=request_timeout,
            call_timeout=call_timeout,
            max_pages=max_pages,
        )
        self._middlewares: tuple[Middleware, ...] = middlewares
        self._owns_transport = transport is None
        self._transport = transport or RESTTransport(timeout=self.config.request_timeout)
        self._endpoints: dict[str, dict[str, Endpoint[Any]]] = {
            method: {} for method in SUPPORTED_METHODS
        }

    @classmethod
    def from_config(
        cls,
        config: ServiceConfig,
        *middlewares: Middleware,
        transport: RESTTransport | None = None,
    ) -> Service:
        """Create a service from a ``ServiceConfig``."""
        return cls(
            config.base_url,
            *middlewares,
            transport=transport,
            request_timeout=config.request_timeout,
            call_timeout=config.call_timeout,
            max_pages=config.max_pages,
        )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def middlewares(self) -> tuple[Middleware, ...]:
        return self._middlewares

    def _slot(self, method: str) -> dict[str, Endpoint[Any]]:
        slot = self._endpoints.get(method.upper())
        if slot is None:
            raise UnsupportedMethodError(method)
        return slot

    def add_endpoint(self, method: str, endpoint: Endpoint[Any]) -> None:
        """Register ``endpoint`` under ``method`` and its path.

        Raises:
            UnsupportedMethodError: If ``method`` is not GET or POST
            DuplicateEndpointError: If the (method, path) pair is taken; the
                existing endpoint stays registered
        """
        slot = self._slot(method)
        if endpoint.path in slot:
            raise DuplicateEndpointError(
                f"{method.upper()} {endpoint.path}: endpoint already registered"
            )
        slot[endpoint.path] = endpoint
        logger.debug(
            "endpoint_registered",
            extra={"method": method.upper(), "path": endpoint.path},
        )

    def endpoint(self, method: str, path: str) -> Endpoint[Any]:
        """Return the endpoint registered for (method, path).

        Raises:
            UnsupportedMethodError: If ``method`` is not GET or POST
            NoSuchEndpointError: If nothing is registered
        """
        endpoint = self._slot(method).get(path)
        if endpoint is None:
            raise NoSuchEndpointError(method.upper(), path)
        return endpoint

    def endpoints(self, method: str) -> list[str]:
        """List registered paths for ``method``."""
        return sorted(self._slot(method))

    async def invoke(
        self,
        method: str,
        path: str,
        options: CallOptions | None = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Call the endpoint registered for (method, path).

        Args:
            method: HTTP method
            path: Registered endpoint path
            options: Call options; modified in place by paginated endpoints
            timeout: Deadline in seconds for the whole call, overriding
                the service's ``call_timeout``

        Returns:
            The endpoint result

        Raises:
            NoSuchEndpointError: If no endpoint is registered
            CallTimeoutError: If the deadline expires
            UniAPIError: Any error raised by the endpoint call
        """
        endpoint = self.endpoint(method, path)
        if options is None:
            options = CallOptions()
        deadline = timeout if timeout is not None else self.config.call_timeout

        coro = endpoint.call(
            method.upper(),
            self.base_url,
            options,
            self._middlewares,
            self._transport,
            max_pages=self.config.max_pages,
        )
        if deadline is None:
            return await coro
        try:
            async with asyncio.timeout(deadline):
                return await coro
        except TimeoutError as exc:
            raise CallTimeoutError(deadline) from exc

    async def get(
        self, path: str, options: CallOptions | None = None, *, timeout: float | None = None
    ) -> Any:
        """Call the GET endpoint registered for ``path``."""
        return await self.invoke("GET", path, options, timeout=timeout)

    async def post(
        self, path: str, options: CallOptions | None = None, *, timeout: float | None = None
    ) -> Any:
        """Call the POST endpoint registered for ``path``."""
        return await self.invoke("POST", path, options, timeout=timeout)

    async def close(self) -> None:
        """Close the transport if the service created it."""
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> Service:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


async def call(
    service: Service,
    response_type: type[T],
    method: str,
    path: str,
    options: CallOptions | None = None,
    *,
    timeout: float | None = None,
) -> T:
    """Call an endpoint and return its result typed as ``response_type``.

    The caller's ``options`` are copied, so pagination does not modify them.

    Raises:
        TypeMismatchError: If the endpoint's declared response type is not
            ``response_type`` (checked before any request is sent), or if the
            result is not an instance of a class ``response_type``
        NoSuchEndpointError: If no endpoint is registered
        UniAPIError: Any error raised by the endpoint call
    """
    endpoint = service.endpoint(method, path)
    if endpoint.response_type is not response_type:
        raise TypeMismatchError(response_type, endpoint.response_type)

    call_options = options.copy() if options is not None else CallOptions()
    result = await service.invoke(method, path, call_options, timeout=timeout)
    if _is_plain_class(response_type) and not isinstance(result, response_type):
        raise TypeMismatchError(response_type, type(result))
    return result


def _is_plain_class(tp: Any) -> bool:
    return isinstance(tp, type) and get_origin(tp) is None and not is_typeddict(tp)
