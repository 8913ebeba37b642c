"""Named endpoint registry.

A plain name → handler map for in-process dispatch. Unrelated to the HTTP
``Service``: no pagination, no network. Instances are created and owned by
the caller; there is no global registry.

Example:
    >>> registry = NamedEndpointRegistry()
    >>> registry.register("hello", lambda params: {"message": f"Hello, {params['name']}!"})
    >>> registry.call("hello", {"name": "Alice"})
    b'{"message":"Hello, Alice!"}'
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from pydantic_core import PydanticSerializationError, to_json

from .core.exceptions import DuplicateEndpointError, EndpointNotFoundError, InvalidEndpointError
from .runtime.rest.transport import decode

HandlerFunc = Callable[[dict[str, Any]], Any]

T = TypeVar("T")

logger = logging.getLogger(__name__)


class NamedEndpointRegistry:
    """Registry dispatching calls to handlers by name.

    Handlers take a parameter mapping and return any JSON-serializable value
    (pydantic models and dataclasses included), or ``bytes`` that already hold
    JSON.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, HandlerFunc] = {}

    def register(self, name: str, handler: HandlerFunc) -> None:
        """Register ``handler`` under ``name``.

        Raises:
            InvalidEndpointError: If ``name`` is empty or ``handler`` is not callable
            DuplicateEndpointError: If ``name`` is already registered
        """
        if not name:
            raise InvalidEndpointError("endpoint name cannot be empty")
        if handler is None or not callable(handler):
            raise InvalidEndpointError("handler cannot be nil")
        if name in self._handlers:
            raise DuplicateEndpointError(f"endpoint already registered: {name!r}")
        self._handlers[name] = handler
        logger.debug("named_endpoint_registered", extra={"endpoint_name": name})

    def unregister(self, name: str) -> None:
        """Remove the handler registered under ``name``.

        Raises:
            EndpointNotFoundError: If ``name`` is not registered
        """
        if self._handlers.pop(name, None) is None:
            raise EndpointNotFoundError(name)

    def call(self, name: str, params: dict[str, Any] | None = None) -> bytes:
        """Run the handler registered under ``name`` and return JSON bytes.

        Raises:
            EndpointNotFoundError: If ``name`` is not registered
            TypeError: If the handler result cannot be serialized to JSON
            Exception: Whatever the handler raises
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise EndpointNotFoundError(name)

        result = handler(params or {})
        if isinstance(result, bytes | bytearray):
            return bytes(result)
        try:
            return to_json(result)
        except PydanticSerializationError as exc:
            raise TypeError(f"endpoint {name!r} returned a non-serializable value: {exc}") from exc

    def call_as(
        self, name: str, params: dict[str, Any] | None, result_type: type[T]
    ) -> T:
        """Call ``name`` and decode the JSON result into ``result_type``.

        Raises:
            EndpointNotFoundError: If ``name`` is not registered
            DecodeError: If the result does not fit ``result_type``
        """
        return decode(self.call(name, params), result_type)

    def names(self) -> list[str]:
        return sorted(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())
