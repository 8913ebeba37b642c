"""Page-number pagination."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from ..core.middleware import Middleware
from ..core.options import CallOptions
from ..core.request import Request
from .base import Paginator


class PageNumberPaginator(Paginator):
    """Paginate APIs reporting the current page and the number of pages.

    Args:
        list_field: Response field holding the page items
        page_field: Response field holding the current page number
        total_pages_field: Response field holding the number of pages
        page_query_name: Query parameter carrying the requested page
        strict: Raise ``PaginationFieldMissing`` instead of stopping when a
            field is absent or not an int
    """

    def __init__(
        self,
        *,
        list_field: str,
        page_field: str = "page",
        total_pages_field: str = "total_pages",
        page_query_name: str = "page",
        strict: bool = False,
    ) -> None:
        super().__init__(list_field=list_field, strict=strict)
        self.page_field = page_field
        self.total_pages_field = total_pages_field
        self.page_query_name = page_query_name

    @property
    def field_names(self) -> Iterable[str]:
        return (self.list_field, self.page_field, self.total_pages_field)

    def execute(
        self,
        aggregated: Any,
        endpoint_base_url: str,
        options: CallOptions,
        last_request: Request,
        middlewares: Sequence[Middleware] = (),
    ) -> tuple[Request | None, bool]:
        page = self._read_int(aggregated, self.page_field)
        if page is None:
            return None, False
        total_pages = self._read_int(aggregated, self.total_pages_field)
        if total_pages is None:
            return None, False

        next_page = page + 1
        if total_pages <= 0 or next_page > total_pages:
            return None, False

        if last_request.query_value(self.page_query_name) == str(next_page):
            return self._stop("stalled", page=page, total_pages=total_pages)

        options.set_query(self.page_query_name, next_page)
        request = self._rebuild(last_request, endpoint_base_url, options, middlewares)
        return request, True

    def merge(self, aggregated: Any, page: Any) -> tuple[Any, int]:
        return self._fold(aggregated, page, self.page_field)
