"""Skip/limit/count pagination."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from ..core.middleware import Middleware
from ..core.options import CallOptions
from ..core.request import Request
from .base import Paginator


class SkipLimitPaginator(Paginator):
    """Paginate APIs reporting ``skip``, ``limit`` and a total ``count``.

    The next page starts at ``skip + limit`` and pagination ends once that
    offset reaches ``count``. A non-positive ``limit`` ends pagination, and
    so does a server that ignores the requested offset (the next request
    would repeat the previous one).

    Args:
        list_field: Response field holding the page items
        count_field: Response field holding the collection size
        skip_field: Response field holding the page offset
        limit_field: Response field holding the page size
        skip_query_name: Query parameter carrying the next offset
        limit_query_name: Query parameter carrying the page size
        strict: Raise ``PaginationFieldMissing`` instead of stopping when a
            field is absent or not an int
    """

    def __init__(
        self,
        *,
        list_field: str,
        count_field: str = "count",
        skip_field: str = "skip",
        limit_field: str = "limit",
        skip_query_name: str = "skip",
        limit_query_name: str = "limit",
        strict: bool = False,
    ) -> None:
        super().__init__(list_field=list_field, strict=strict)
        self.count_field = count_field
        self.skip_field = skip_field
        self.limit_field = limit_field
        self.skip_query_name = skip_query_name
        self.limit_query_name = limit_query_name

    @property
    def field_names(self) -> Iterable[str]:
        return (self.list_field, self.count_field, self.skip_field, self.limit_field)

    def execute(
        self,
        aggregated: Any,
        endpoint_base_url: str,
        options: CallOptions,
        last_request: Request,
        middlewares: Sequence[Middleware] = (),
    ) -> tuple[Request | None, bool]:
        count = self._read_int(aggregated, self.count_field)
        if count is None:
            return None, False
        skip = self._read_int(aggregated, self.skip_field)
        if skip is None:
            return None, False
        limit = self._read_int(aggregated, self.limit_field)
        if limit is None:
            return None, False

        if limit <= 0:
            return None, False

        next_skip = skip + limit
        if next_skip >= count:
            return None, False

        if last_request.query_value(self.skip_query_name) == str(next_skip):
            return self._stop("stalled", skip=skip, limit=limit, count=count)

        options.set_query(self.skip_query_name, next_skip)
        options.set_query(self.limit_query_name, limit)
        request = self._rebuild(last_request, endpoint_base_url, options, middlewares)
        return request, True

    def merge(self, aggregated: Any, page: Any) -> tuple[Any, int]:
        return self._fold(aggregated, page, self.skip_field)
