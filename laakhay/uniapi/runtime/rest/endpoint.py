"""Typed REST endpoints with optional auto-pagination.

Architecture:
    An endpoint binds a path to a response type and, optionally, a
    paginator. ``call`` runs the sequence:
    1. Build the initial request (options + middlewares)
    2. Execute it and decode the first page, which becomes the aggregate
    3. With a paginator, loop: ask it for the next request, execute it into
       a fresh page instance, merge the page into the aggregate
    4. Return the aggregate once the paginator reports no more pages

    Continuation requests are rebuilt from scratch by the paginator, so
    every middleware runs again for every page. Any error aborts the call
    and nothing collected so far is returned.

See Also:
    - Paginator: Continuation and merge strategy
    - RESTTransport: Executes requests and decodes bodies
    - Service: Registers endpoints and dispatches calls
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ...core.exceptions import PaginationLimitError
from ...core.options import CallOptions
from ...core.request import apply_options_to_url, build_request, build_url
from ...pagination.fields import get_items
from ..telemetry import (
    log_call_cancelled,
    log_call_failed,
    log_page_merged,
    log_pagination_complete,
)

if TYPE_CHECKING:
    from ...core.middleware import Middleware
    from ...pagination.base import Paginator
    from .transport import RESTTransport

T = TypeVar("T")


@dataclass(frozen=True)
class Endpoint(Generic[T]):
    """A path bound to a response type and an optional paginator.

    Attributes:
        path: Path joined to the service base URL
        response_type: Type every page is decoded into; also the type tag
            checked by ``call``
        paginator: Strategy for multi-page responses, or ``None``
        max_pages: Upper bound on pages per call (initial page included);
            ``None`` defers to the service configuration

    Raises:
        ValueError: If the paginator names fields ``response_type`` does not
            declare, or ``max_pages`` is not positive
    """

    path: str
    response_type: type[T]
    paginator: Paginator | None = None
    max_pages: int | None = None

    def __post_init__(self) -> None:
        if self.max_pages is not None and self.max_pages <= 0:
            raise ValueError("max_pages must be a positive integer")
        if self.paginator is not None:
            self.paginator.bind(self.response_type)

    async def call(
        self,
        method: str,
        base_url: str,
        options: CallOptions,
        middlewares: Sequence[Middleware],
        transport: RESTTransport,
        *,
        max_pages: int | None = None,
    ) -> T:
        """Execute the endpoint and return the (aggregated) result.

        When a paginator is set, ``options`` is modified in place.

        Args:
            method: HTTP method
            base_url: Service base URL
            options: Call options
            middlewares: Middleware chain applied to every request
            transport: Transport executing requests
            max_pages: Page bound used when the endpoint sets none

        Returns:
            The decoded result; for paginated endpoints, every page merged

        Raises:
            RequestBuildError: If the request cannot be built
            MiddlewareError: If a middleware rejects a request
            StatusError: If any page returns a non-2xx status
            DecodeError: If any page cannot be decoded
            PaginationLimitError: If more than ``max_pages`` pages are needed
            PaginationError: If a page cannot be merged into the aggregate
        """
        endpoint_base_url = build_url(base_url, self.path)
        page_index = 1
        try:
            request = build_request(
                method,
                apply_options_to_url(endpoint_base_url, options),
                options,
                middlewares,
            )
            aggregated = await transport.execute(request, self.response_type)

            if self.paginator is None:
                return aggregated

            limit = self.max_pages or max_pages
            while True:
                next_request, more_pages = self.paginator.execute(
                    aggregated, endpoint_base_url, options, request, middlewares
                )
                if not more_pages or next_request is None:
                    break

                page_index += 1
                if limit is not None and page_index > limit:
                    raise PaginationLimitError(limit)

                page = await transport.execute(next_request, self.response_type)
                aggregated, items_total = self.paginator.merge(aggregated, page)
                log_page_merged(path=self.path, page_index=page_index, items_total=items_total)
                request = next_request
        except asyncio.CancelledError:
            log_call_cancelled(method=method, path=self.path, page_index=page_index)
            raise
        except Exception as exc:
            log_call_failed(method=method, path=self.path, page_index=page_index, error=exc)
            raise

        log_pagination_complete(
            path=self.path,
            pages=page_index,
            items_total=_list_length(aggregated, self.paginator.list_field),
        )
        return aggregated


def _list_length(aggregated: Any, list_field: str) -> int | None:
    try:
        return len(get_items(aggregated, list_field))
    except TypeError:
        return None
