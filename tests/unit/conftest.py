"""Shared fixtures for unit tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from laakhay.uniapi.runtime.rest import RESTTransport


@pytest.fixture
def transport():
    """RESTTransport whose HTTP client ``send`` is an AsyncMock.

    Tests set ``transport._http.send.side_effect`` to a list of
    ``(status, body)`` tuples, one per expected request.
    """
    t = RESTTransport()
    t._http.send = AsyncMock()
    return t
