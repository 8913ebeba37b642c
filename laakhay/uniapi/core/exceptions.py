"""Custom exception hierarchy."""

from __future__ import annotations

from typing import Any


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", repr(tp))


class UniAPIError(Exception):
    """Base exception for all library errors."""

    pass


class RequestBuildError(UniAPIError):
    """Request could not be built from the endpoint path and call options."""

    pass


class MiddlewareError(UniAPIError):
    """A middleware in the request chain rejected the request.

    Carries an HTTP-status-like ``code`` describing the failure (for example
    401 when a credential is missing) and the underlying ``cause``.
    """

    def __init__(self, code: int, cause: BaseException) -> None:
        super().__init__(f"{code}: {cause}")
        self.code = code
        self.cause = cause
        self.__cause__ = cause


class EmptyBearerTokenError(UniAPIError):
    """Bearer token is empty."""

    def __init__(self, message: str = "bearer token is empty") -> None:
        super().__init__(message)


class TransportError(UniAPIError):
    """The HTTP collaborator failed before a response was received."""

    pass


class StatusError(UniAPIError):
    """Response carried a non-success HTTP status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnauthenticatedError(StatusError):
    """Server answered 401."""

    def __init__(self, message: str = "401 unauthorized") -> None:
        super().__init__(message, status_code=401)


class UnauthorizedError(StatusError):
    """Server answered 403."""

    def __init__(self, message: str = "403 forbidden") -> None:
        super().__init__(message, status_code=403)


class UnexpectedStatusError(StatusError):
    """Server answered with a status outside the 2xx range."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"unexpected status code: {status_code}", status_code=status_code)


class DecodeError(UniAPIError):
    """Response payload is not valid JSON or does not match the target type."""

    pass


class NoSuchEndpointError(UniAPIError):
    """No endpoint is registered for the requested method and path."""

    def __init__(self, method: str, path: str) -> None:
        super().__init__(f"{method} {path}: no endpoint registered")
        self.method = method
        self.path = path


class DuplicateEndpointError(UniAPIError):
    """An endpoint with the same key is already registered."""

    pass


class UnsupportedMethodError(UniAPIError):
    """HTTP method has no endpoint slot in the service."""

    def __init__(self, method: str) -> None:
        super().__init__(f"unsupported method: {method}")
        self.method = method


class TypeMismatchError(UniAPIError):
    """Endpoint result type differs from the type requested by the caller."""

    def __init__(self, expected: Any, actual: Any) -> None:
        super().__init__(
            f"unable to cast result to {_type_name(expected)!r} "
            f"(endpoint returns {_type_name(actual)!r})"
        )
        self.expected = expected
        self.actual = actual


class PaginationError(UniAPIError):
    """Pagination could not proceed."""

    pass


class PaginationFieldMissing(PaginationError):
    """A configured pagination field is absent or has the wrong type.

    Only raised by paginators configured with ``strict=True``; otherwise the
    paginator ends pagination and the aggregate collected so far is returned.
    """

    def __init__(self, field_name: str, value: object = None) -> None:
        super().__init__(
            f"pagination field {field_name!r} is missing or has an unexpected type "
            f"(got {value!r})"
        )
        self.field_name = field_name
        self.value = value


class PaginationLimitError(PaginationError):
    """Endpoint fetched more pages than its ``max_pages`` bound allows."""

    def __init__(self, max_pages: int) -> None:
        super().__init__(f"pagination exceeded max_pages={max_pages}")
        self.max_pages = max_pages


class CallTimeoutError(UniAPIError):
    """Call deadline expired before the paginated sequence completed."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"call did not complete within {timeout:g}s")
        self.timeout = timeout


class InvalidEndpointError(UniAPIError):
    """Named endpoint registration was given an empty name or no handler."""

    pass


class EndpointNotFoundError(UniAPIError):
    """Named endpoint is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"endpoint not found: {name!r}")
        self.name = name
