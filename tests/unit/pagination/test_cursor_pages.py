"""Unit tests for CursorPaginator and PageNumberPaginator."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, Field

from laakhay.uniapi.core import CallOptions, PaginationFieldMissing, Request
from laakhay.uniapi.pagination import CursorPaginator, PageNumberPaginator

ENDPOINT_URL = "https://api.example.com/events"


class EventPage(BaseModel):
    data: list[int] = Field(default_factory=list)
    next_cursor: str | None = None


class NumberedPage(BaseModel):
    results: list[int] = Field(default_factory=list)
    page: int | None = None
    total_pages: int | None = None


def _initial() -> Request:
    return Request(method="GET", url=ENDPOINT_URL)


class TestCursorPaginator:
    @pytest.fixture
    def paginator(self):
        return CursorPaginator(list_field="data", cursor_query_name="after")

    def test_continues_with_cursor(self, paginator):
        options = CallOptions(query={"limit": 50})
        request, more = paginator.execute(
            EventPage(data=[1], next_cursor="abc"), ENDPOINT_URL, options, _initial()
        )
        assert more is True
        assert request.url == f"{ENDPOINT_URL}?after=abc&limit=50"
        assert options.query["after"] == ["abc"]

    @pytest.mark.parametrize("cursor", [None, ""])
    def test_stops_without_cursor(self, paginator, cursor):
        request, more = paginator.execute(
            EventPage(data=[1], next_cursor=cursor), ENDPOINT_URL, CallOptions(), _initial()
        )
        assert (request, more) == (None, False)

    def test_stops_when_cursor_repeats(self, paginator):
        prior = Request(method="GET", url=f"{ENDPOINT_URL}?after=abc")
        request, more = paginator.execute(
            EventPage(data=[1], next_cursor="abc"), ENDPOINT_URL, CallOptions(), prior
        )
        assert (request, more) == (None, False)

    def test_wrong_cursor_type(self, paginator):
        aggregated = {"data": [], "next_cursor": ["abc"]}
        assert paginator.execute(aggregated, ENDPOINT_URL, CallOptions(), _initial()) == (
            None,
            False,
        )
        strict = CursorPaginator(list_field="data", strict=True)
        with pytest.raises(PaginationFieldMissing):
            strict.execute(aggregated, ENDPOINT_URL, CallOptions(), _initial())

    def test_merge_last_cursor_wins(self, paginator):
        aggregated = EventPage(data=[1, 2], next_cursor="abc")
        merged, length = paginator.merge(aggregated, EventPage(data=[3], next_cursor=None))
        assert merged.data == [1, 2, 3]
        assert merged.next_cursor is None
        assert length == 3

    def test_bind(self, paginator):
        paginator.bind(EventPage)
        with pytest.raises(ValueError):
            CursorPaginator(list_field="data", cursor_field="cursor").bind(EventPage)


class TestPageNumberPaginator:
    @pytest.fixture
    def paginator(self):
        return PageNumberPaginator(list_field="results")

    def test_requests_next_page(self, paginator):
        request, more = paginator.execute(
            NumberedPage(results=[1], page=1, total_pages=3),
            ENDPOINT_URL,
            CallOptions(),
            _initial(),
        )
        assert more is True
        assert request.query_value("page") == "2"

    @pytest.mark.parametrize(("page", "total"), [(3, 3), (1, 0), (5, 2), (0, -1)])
    def test_stops_on_last_page(self, paginator, page, total):
        request, more = paginator.execute(
            NumberedPage(page=page, total_pages=total), ENDPOINT_URL, CallOptions(), _initial()
        )
        assert (request, more) == (None, False)

    def test_missing_page_field(self, paginator):
        request, more = paginator.execute(
            NumberedPage(total_pages=3), ENDPOINT_URL, CallOptions(), _initial()
        )
        assert more is False

    def test_merge_overwrites_page(self, paginator):
        aggregated = NumberedPage(results=[1], page=1, total_pages=2)
        merged, length = paginator.merge(aggregated, NumberedPage(results=[2], page=2))
        assert merged.results == [1, 2]
        assert merged.page == 2
        assert merged.total_pages == 2
        assert length == 2
