"""Outgoing request model and builder.

Architecture:
    A request is composed in three steps:
    1. ``build_url`` joins the service base URL with the endpoint path
    2. ``apply_options_to_url`` appends path extensions and the query string
    3. ``build_request`` sets headers from the options and runs the
       middleware chain

    Paginators call steps 2 and 3 again for every continuation page, so
    middleware-derived headers are recomputed for each request.

See Also:
    - CallOptions: Per-call options consumed here
    - Middleware: Request transforms applied by ``build_request``
    - Endpoint: Orchestrates building and executing requests
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from urllib.parse import parse_qs, urlencode, urlsplit

from .exceptions import MiddlewareError, RequestBuildError
from .options import CallOptions

if TYPE_CHECKING:
    from .middleware import Middleware

JSON_CONTENT_TYPE = "application/json"


@dataclass
class Request:
    """A fully built HTTP request ready for the transport."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def query_value(self, name: str) -> str | None:
        """Return the first value of query parameter ``name``, if present."""
        values = parse_qs(urlsplit(self.url).query).get(name)
        return values[0] if values else None


def build_url(base_url: str, path: str) -> str:
    """Join ``base_url`` and ``path`` with exactly one slash."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def apply_options_to_url(url: str, options: CallOptions) -> str:
    """Append path extensions and the encoded query string to ``url``.

    Query keys are emitted in sorted order so the same options always yield
    the same URL.
    """
    for extension in options.path_extension:
        url = f"{url.rstrip('/')}/{extension}"
    url = url.rstrip("/")
    if options.query:
        url = f"{url}?{urlencode(sorted(options.query.items()), doseq=True)}"
    return url


def _validate_url(url: str) -> None:
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        _ = parts.port  # raises ValueError on a malformed port
    except ValueError as exc:
        raise RequestBuildError(f"invalid url {url!r}: {exc}") from exc
    if parts.scheme not in ("http", "https") or not hostname:
        raise RequestBuildError(f"invalid url {url!r}: expected an absolute http(s) url")


def build_request(
    method: str,
    url: str,
    options: CallOptions,
    middlewares: Sequence[Middleware] = (),
) -> Request:
    """Build a request and run it through ``middlewares`` in order.

    Args:
        method: HTTP method
        url: Absolute URL, usually from ``apply_options_to_url``
        options: Call options supplying body and extra headers
        middlewares: Middleware chain applied after headers are set

    Returns:
        The request produced by the last middleware

    Raises:
        RequestBuildError: If ``url`` is not an absolute http(s) URL
        MiddlewareError: If a middleware rejects the request; later
            middlewares are not run
    """
    _validate_url(url)

    request = Request(method=method.upper(), url=url, body=options.body or None)
    if options.body:
        request.headers["Content-Type"] = JSON_CONTENT_TYPE

    for key, value in options.extra_headers.items():
        request.headers[key] = value

    for middleware in middlewares:
        try:
            request = middleware.apply(request)
        except MiddlewareError:
            raise
        except Exception as exc:
            raise MiddlewareError(500, exc) from exc

    return request
