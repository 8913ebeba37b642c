"""Paginator interface.

Architecture:
    A paginator is a stateless strategy holding only configuration. The
    endpoint drives it with two operations per page:
    - ``execute`` inspects the aggregate so far and the last request, and
      returns the next request (fully rebuilt, middlewares included) or
      reports that there are no more pages
    - ``merge`` returns a new aggregate with a freshly decoded page folded in;
      neither input is modified, so frozen response models work unchanged

    Field-access failures end pagination quietly unless the paginator is
    ``strict``, in which case ``PaginationFieldMissing`` is raised.

See Also:
    - SkipLimitPaginator: skip/limit/count offsets
    - CursorPaginator: opaque continuation tokens
    - PageNumberPaginator: page/total-pages counters
    - Endpoint: Runs the pagination loop
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any

from ..core.exceptions import PaginationError, PaginationFieldMissing
from ..core.middleware import Middleware
from ..core.options import CallOptions
from ..core.request import Request, apply_options_to_url, build_request
from ..runtime.telemetry import log_pagination_stopped
from .fields import concat_items, get_int, get_value, replace_fields, validate_fields


class Paginator(ABC):
    """Strategy deciding page continuation and merging pages."""

    def __init__(self, *, list_field: str, strict: bool = False) -> None:
        self.list_field = list_field
        self.strict = strict

    @property
    def field_names(self) -> Iterable[str]:
        """Response fields this paginator reads or writes."""
        return (self.list_field,)

    def bind(self, response_type: Any) -> None:
        """Check configured field names against ``response_type``.

        Raises:
            ValueError: If a configured field is not declared by the type
        """
        validate_fields(response_type, self.field_names)

    @abstractmethod
    def execute(
        self,
        aggregated: Any,
        endpoint_base_url: str,
        options: CallOptions,
        last_request: Request,
        middlewares: Sequence[Middleware] = (),
    ) -> tuple[Request | None, bool]:
        """Decide whether another page is needed and build its request.

        Args:
            aggregated: Aggregate of every page fetched so far
            endpoint_base_url: Base URL joined with the endpoint path, before
                path extensions and query
            options: Call options; implementations rewrite the query in place
            last_request: Most recently executed request
            middlewares: Middleware chain re-applied to the new request

        Returns:
            ``(request, True)`` when another page must be fetched,
            ``(None, False)`` otherwise
        """

    @abstractmethod
    def merge(self, aggregated: Any, page: Any) -> tuple[Any, int]:
        """Fold ``page`` into ``aggregated`` without modifying either.

        Returns:
            The new aggregate and its resulting list length

        Raises:
            PaginationError: If the pages cannot be merged
        """

    def _read_int(self, obj: Any, name: str) -> int | None:
        value = get_int(obj, name)
        if value is None:
            if self.strict:
                raise PaginationFieldMissing(name, get_value(obj, name, None))
            self._stop("field_missing", field_name=name)
        return value

    def _fold(self, aggregated: Any, page: Any, *carried: str) -> tuple[Any, int]:
        """Build the aggregate with ``page`` appended.

        List items of ``aggregated`` come first; each field in ``carried`` is
        taken from ``page``. Neither input is modified.

        Raises:
            PaginationError: If the aggregate cannot be rebuilt, e.g. the list
                field holds neither a list nor a tuple
        """
        try:
            items = concat_items(aggregated, page, self.list_field)
            updates = {self.list_field: items}
            for name in carried:
                updates[name] = get_value(page, name, None)
            return replace_fields(aggregated, updates), len(items)
        except (TypeError, ValueError) as exc:
            raise PaginationError(
                f"cannot merge page into {type(aggregated).__name__}: {exc}"
            ) from exc

    def _stop(self, reason: str, **fields: object) -> tuple[None, bool]:
        log_pagination_stopped(paginator=type(self).__name__, reason=reason, **fields)
        return None, False

    @staticmethod
    def _rebuild(
        last_request: Request,
        endpoint_base_url: str,
        options: CallOptions,
        middlewares: Sequence[Middleware],
    ) -> Request:
        url = apply_options_to_url(endpoint_base_url, options)
        return build_request(last_request.method, url, options, middlewares)
