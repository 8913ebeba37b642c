"""Precise unit tests for Endpoint.call.

Tests focus on the pagination loop: request count, merging, middleware
re-application and abort behaviour.
"""

from __future__ import annotations

import asyncio
import json
import logging
from unittest.mock import AsyncMock

import pytest
from pydantic import BaseModel, ConfigDict, Field

from laakhay.uniapi.core import (
    CallOptions,
    MiddlewareError,
    PaginationLimitError,
    RequestBuildError,
    UnauthenticatedError,
)
from laakhay.uniapi.core.middleware import (
    BearerAuthMiddleware,
    HeaderProviderMiddleware,
    Middleware,
)
from laakhay.uniapi.pagination import SkipLimitPaginator
from laakhay.uniapi.runtime.rest import Endpoint

BASE_URL = "https://api.example.com"


class Item(BaseModel):
    id: str


class ItemPage(BaseModel):
    items: list[Item] = Field(default_factory=list)
    count: int | None = None
    skip: int | None = None
    limit: int | None = None


class FrozenItemPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: tuple[Item, ...] = ()
    count: int | None = None
    skip: int | None = None
    limit: int | None = None


def _body(ids: list[str], *, count: int, skip: int, limit: int) -> tuple[int, bytes]:
    payload = {"items": [{"id": i} for i in ids], "count": count, "skip": skip, "limit": limit}
    return 200, json.dumps(payload).encode()


def _paginated(**kwargs) -> Endpoint[ItemPage]:
    return Endpoint("/items", ItemPage, SkipLimitPaginator(list_field="items"), **kwargs)


def _sent_urls(transport) -> list[str]:
    return [c.args[0].url for c in transport._http.send.await_args_list]


class TestEndpointInit:
    def test_rejects_unknown_paginator_fields(self):
        with pytest.raises(ValueError):
            Endpoint("/items", ItemPage, SkipLimitPaginator(list_field="results"))

    @pytest.mark.parametrize("max_pages", [0, -3])
    def test_rejects_non_positive_max_pages(self, max_pages):
        with pytest.raises(ValueError):
            _paginated(max_pages=max_pages)


class TestEndpointCall:
    """Test single and paginated calls."""

    @pytest.mark.asyncio
    async def test_unpaginated_call_sends_one_request(self, transport):
        transport._http.send.return_value = _body(["a"], count=10, skip=0, limit=1)
        endpoint = Endpoint("/items", ItemPage)

        result = await endpoint.call("GET", BASE_URL, CallOptions(), (), transport)

        assert [i.id for i in result.items] == ["a"]
        assert transport._http.send.await_count == 1

    @pytest.mark.asyncio
    async def test_two_pages_merged(self, transport):
        transport._http.send.side_effect = [
            _body(["a", "b"], count=4, skip=0, limit=2),
            _body(["c", "d"], count=4, skip=2, limit=2),
        ]

        result = await _paginated().call("GET", BASE_URL, CallOptions(), (), transport)

        assert [i.id for i in result.items] == ["a", "b", "c", "d"]
        assert result.skip == 2
        assert result.count == 4
        assert _sent_urls(transport) == [
            f"{BASE_URL}/items",
            f"{BASE_URL}/items?limit=2&skip=2",
        ]

    @pytest.mark.asyncio
    async def test_single_page_when_count_reached(self, transport):
        transport._http.send.side_effect = [_body(["a", "b"], count=2, skip=0, limit=2)]

        result = await _paginated().call("GET", BASE_URL, CallOptions(), (), transport)

        assert [i.id for i in result.items] == ["a", "b"]
        assert transport._http.send.await_count == 1

    @pytest.mark.asyncio
    async def test_many_pages(self, transport):
        transport._http.send.side_effect = [
            _body([str(n)], count=5, skip=n, limit=1) for n in range(5)
        ]

        result = await _paginated().call("GET", BASE_URL, CallOptions(), (), transport)

        assert [i.id for i in result.items] == ["0", "1", "2", "3", "4"]
        assert transport._http.send.await_count == 5

    @pytest.mark.asyncio
    async def test_options_rewritten_in_place(self, transport):
        transport._http.send.side_effect = [
            _body(["a"], count=2, skip=0, limit=1),
            _body(["b"], count=2, skip=1, limit=1),
        ]
        options = CallOptions(query={"sort": "id"})

        await _paginated().call("GET", BASE_URL, options, (), transport)

        assert options.query == {"sort": ["id"], "skip": ["1"], "limit": ["1"]}
        assert _sent_urls(transport)[1] == f"{BASE_URL}/items?limit=1&skip=1&sort=id"

    @pytest.mark.asyncio
    async def test_middlewares_applied_to_every_page(self, transport):
        transport._http.send.side_effect = [
            _body(["a"], count=3, skip=0, limit=1),
            _body(["b"], count=3, skip=1, limit=1),
            _body(["c"], count=3, skip=2, limit=1),
        ]
        counter = iter(range(100))
        middlewares = (
            BearerAuthMiddleware("tok"),
            HeaderProviderMiddleware(lambda request: {"X-Seq": str(next(counter))}),
        )

        await _paginated().call("GET", BASE_URL, CallOptions(), middlewares, transport)

        sent = [c.args[0] for c in transport._http.send.await_args_list]
        assert [r.headers["Authorization"] for r in sent] == ["Bearer tok"] * 3
        assert [r.headers["X-Seq"] for r in sent] == ["0", "1", "2"]

    @pytest.mark.asyncio
    async def test_post_body_carried_to_continuation(self, transport):
        transport._http.send.side_effect = [
            _body(["a"], count=2, skip=0, limit=1),
            _body(["b"], count=2, skip=1, limit=1),
        ]
        options = CallOptions(body=b'{"q": "x"}')

        await _paginated().call("POST", BASE_URL, options, (), transport)

        sent = [c.args[0] for c in transport._http.send.await_args_list]
        assert [r.method for r in sent] == ["POST", "POST"]
        assert all(r.body == b'{"q": "x"}' for r in sent)
        assert all(r.headers["Content-Type"] == "application/json" for r in sent)

    @pytest.mark.asyncio
    async def test_frozen_response_model(self, transport):
        transport._http.send.side_effect = [
            _body(["a", "b"], count=4, skip=0, limit=2),
            _body(["c", "d"], count=4, skip=2, limit=2),
        ]
        endpoint = Endpoint("/items", FrozenItemPage, SkipLimitPaginator(list_field="items"))

        result = await endpoint.call("GET", BASE_URL, CallOptions(), (), transport)

        assert isinstance(result, FrozenItemPage)
        assert [i.id for i in result.items] == ["a", "b", "c", "d"]
        assert isinstance(result.items, tuple)
        assert result.skip == 2
        assert transport._http.send.await_count == 2

    @pytest.mark.asyncio
    async def test_mapping_response(self, transport):
        transport._http.send.side_effect = [
            _body(["a"], count=2, skip=0, limit=1),
            _body(["b"], count=2, skip=1, limit=1),
        ]
        endpoint = Endpoint("/items", dict, SkipLimitPaginator(list_field="items"))

        result = await endpoint.call("GET", BASE_URL, CallOptions(), (), transport)

        assert result["items"] == [{"id": "a"}, {"id": "b"}]
        assert result["skip"] == 1


class TestEndpointAbort:
    """Test errors abort the whole call."""

    @pytest.mark.asyncio
    async def test_failing_middleware_sends_nothing(self, transport):
        with pytest.raises(MiddlewareError) as exc_info:
            await _paginated().call(
                "GET", BASE_URL, CallOptions(), (BearerAuthMiddleware(""),), transport
            )

        assert exc_info.value.code == 401
        transport._http.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_middleware_failing_on_continuation(self, transport):
        class FailSecond(Middleware):
            calls = 0

            def apply(self, request):
                FailSecond.calls += 1
                if FailSecond.calls > 1:
                    raise RuntimeError("signer unavailable")
                return request

        transport._http.send.side_effect = [_body(["a"], count=3, skip=0, limit=1)]

        with pytest.raises(MiddlewareError) as exc_info:
            await _paginated().call("GET", BASE_URL, CallOptions(), (FailSecond(),), transport)

        assert exc_info.value.code == 500
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert transport._http.send.await_count == 1

    @pytest.mark.asyncio
    async def test_invalid_base_url(self, transport):
        with pytest.raises(RequestBuildError):
            await Endpoint("/items", ItemPage).call(
                "GET", "not a url", CallOptions(), (), transport
            )
        transport._http.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_status_error_on_continuation_page(self, transport, caplog):
        transport._http.send.side_effect = [
            _body(["a"], count=5, skip=0, limit=1),
            (401, b""),
        ]

        with caplog.at_level(logging.ERROR), pytest.raises(UnauthenticatedError):
            await _paginated().call("GET", BASE_URL, CallOptions(), (), transport)

        assert transport._http.send.await_count == 2
        failed = [r for r in caplog.records if r.getMessage() == "call_failed"]
        assert failed and failed[0].page_index == 2

    @pytest.mark.asyncio
    async def test_endpoint_max_pages(self, transport):
        transport._http.send.side_effect = [
            _body([str(n)], count=100, skip=n, limit=1) for n in range(3)
        ]

        with pytest.raises(PaginationLimitError) as exc_info:
            await _paginated(max_pages=3).call("GET", BASE_URL, CallOptions(), (), transport)

        assert exc_info.value.max_pages == 3
        assert transport._http.send.await_count == 3

    @pytest.mark.asyncio
    async def test_call_max_pages_used_when_endpoint_has_none(self, transport):
        transport._http.send.side_effect = [
            _body([str(n)], count=100, skip=n, limit=1) for n in range(2)
        ]

        with pytest.raises(PaginationLimitError):
            await _paginated().call(
                "GET", BASE_URL, CallOptions(), (), transport, max_pages=2
            )

        assert transport._http.send.await_count == 2

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, transport, caplog):
        started = asyncio.Event()

        async def hang(request):
            started.set()
            await asyncio.sleep(10)

        transport._http.send = AsyncMock(side_effect=hang)
        task = asyncio.create_task(
            _paginated().call("GET", BASE_URL, CallOptions(), (), transport)
        )
        await started.wait()

        with caplog.at_level(logging.WARNING):
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        assert any(r.getMessage() == "call_cancelled" for r in caplog.records)
