"""Core components."""

from .exceptions import (
    CallTimeoutError,
    DecodeError,
    DuplicateEndpointError,
    EmptyBearerTokenError,
    EndpointNotFoundError,
    InvalidEndpointError,
    MiddlewareError,
    NoSuchEndpointError,
    PaginationError,
    PaginationFieldMissing,
    PaginationLimitError,
    RequestBuildError,
    StatusError,
    TransportError,
    TypeMismatchError,
    UnauthenticatedError,
    UnauthorizedError,
    UnexpectedStatusError,
    UniAPIError,
    UnsupportedMethodError,
)
from .middleware import (
    BearerAuthMiddleware,
    HeaderProviderMiddleware,
    Middleware,
    UnauthenticatedMiddleware,
)
from .options import CallOptions
from .request import Request, apply_options_to_url, build_request, build_url

__all__ = [
    # Request building
    "CallOptions",
    "Request",
    "build_url",
    "apply_options_to_url",
    "build_request",
    # Middlewares
    "Middleware",
    "UnauthenticatedMiddleware",
    "BearerAuthMiddleware",
    "HeaderProviderMiddleware",
    # Errors
    "UniAPIError",
    "RequestBuildError",
    "MiddlewareError",
    "EmptyBearerTokenError",
    "TransportError",
    "StatusError",
    "UnauthenticatedError",
    "UnauthorizedError",
    "UnexpectedStatusError",
    "DecodeError",
    "NoSuchEndpointError",
    "DuplicateEndpointError",
    "UnsupportedMethodError",
    "TypeMismatchError",
    "PaginationError",
    "PaginationFieldMissing",
    "PaginationLimitError",
    "CallTimeoutError",
    "InvalidEndpointError",
    "EndpointNotFoundError",
]
