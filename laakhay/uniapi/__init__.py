"""Laakhay UniAPI - Typed HTTP endpoints with middleware and auto-pagination."""

from .api import Service, call
from .config import ServiceConfig
from .core import (
    BearerAuthMiddleware,
    CallOptions,
    CallTimeoutError,
    DecodeError,
    DuplicateEndpointError,
    EmptyBearerTokenError,
    EndpointNotFoundError,
    HeaderProviderMiddleware,
    InvalidEndpointError,
    Middleware,
    MiddlewareError,
    NoSuchEndpointError,
    PaginationError,
    PaginationFieldMissing,
    PaginationLimitError,
    Request,
    RequestBuildError,
    StatusError,
    TransportError,
    TypeMismatchError,
    UnauthenticatedError,
    UnauthenticatedMiddleware,
    UnauthorizedError,
    UnexpectedStatusError,
    UniAPIError,
    UnsupportedMethodError,
)
from .pagination import CursorPaginator, PageNumberPaginator, Paginator, SkipLimitPaginator
from .registration import NamedEndpointRegistry
from .runtime.rest import Endpoint, HTTPClient, RESTTransport

__version__ = "0.1.0"

__all__ = [
    # Service API
    "Service",
    "ServiceConfig",
    "call",
    "Endpoint",
    "CallOptions",
    "Request",
    # Middlewares
    "Middleware",
    "UnauthenticatedMiddleware",
    "BearerAuthMiddleware",
    "HeaderProviderMiddleware",
    # Pagination
    "Paginator",
    "SkipLimitPaginator",
    "CursorPaginator",
    "PageNumberPaginator",
    # Transport
    "HTTPClient",
    "RESTTransport",
    # Named endpoints
    "NamedEndpointRegistry",
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
