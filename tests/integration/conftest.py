"""Shared fixtures for integration tests."""

import os

import pytest

# Skip all integration tests unless RUN_UNIAPI_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_UNIAPI_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_UNIAPI_NETWORK_TESTS=1 to run",
)

DUMMYJSON_URL = "https://dummyjson.com"


@pytest.fixture
def dummyjson_url():
    return os.environ.get("UNIAPI_TEST_BASE_URL", DUMMYJSON_URL)
