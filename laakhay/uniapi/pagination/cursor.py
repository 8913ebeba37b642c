"""Cursor (continuation token) pagination."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from ..core.exceptions import PaginationFieldMissing
from ..core.middleware import Middleware
from ..core.options import CallOptions
from ..core.request import Request
from .base import Paginator
from .fields import get_value


class CursorPaginator(Paginator):
    """Paginate APIs returning an opaque cursor for the next page.

    Pagination continues while the aggregate's cursor field holds a
    non-empty string. A cursor equal to the one just sent ends pagination.

    Args:
        list_field: Response field holding the page items
        cursor_field: Response field holding the next cursor
        cursor_query_name: Query parameter carrying the cursor
        strict: Raise ``PaginationFieldMissing`` when the cursor field is
            absent instead of treating it as the last page
    """

    def __init__(
        self,
        *,
        list_field: str,
        cursor_field: str = "next_cursor",
        cursor_query_name: str = "cursor",
        strict: bool = False,
    ) -> None:
        super().__init__(list_field=list_field, strict=strict)
        self.cursor_field = cursor_field
        self.cursor_query_name = cursor_query_name

    @property
    def field_names(self) -> Iterable[str]:
        return (self.list_field, self.cursor_field)

    def execute(
        self,
        aggregated: Any,
        endpoint_base_url: str,
        options: CallOptions,
        last_request: Request,
        middlewares: Sequence[Middleware] = (),
    ) -> tuple[Request | None, bool]:
        cursor = get_value(aggregated, self.cursor_field, None)
        if cursor is None or cursor == "":
            return None, False
        if not isinstance(cursor, str | int) or isinstance(cursor, bool):
            if self.strict:
                raise PaginationFieldMissing(self.cursor_field, cursor)
            return self._stop("field_missing", field_name=self.cursor_field)

        cursor = str(cursor)
        if last_request.query_value(self.cursor_query_name) == cursor:
            return self._stop("stalled", cursor=cursor)

        options.set_query(self.cursor_query_name, cursor)
        request = self._rebuild(last_request, endpoint_base_url, options, middlewares)
        return request, True

    def merge(self, aggregated: Any, page: Any) -> tuple[Any, int]:
        return self._fold(aggregated, page, self.cursor_field)
