"""
Shared fixtures for rest_helper tests.
"""
import pytest
from unittest.mock import MagicMock

import httpx

from rest_helper import Helper, with_base_url


@pytest.fixture
def make_helper():
    """Build Helpers backed by an httpx.MockTransport handler."""
    helpers = []

    def factory(handler, *options, **kwargs):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        helper = Helper(*options, httpx_client=client, **kwargs)
        helpers.append(helper)
        return helper

    yield factory

    for helper in helpers:
        helper.close()


@pytest.fixture
def captured():
    """List of httpx.Request objects seen by an echo handler."""
    return []


@pytest.fixture
def echo_handler(captured):
    """Handler that records the request and echoes its body and content type."""

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        headers = {}
        if "content-type" in request.headers:
            headers["Content-Type"] = request.headers["content-type"]
        return httpx.Response(200, headers=headers, content=request.read())

    return handler


@pytest.fixture
def local_helper():
    """Helper for http://localhost without a transport."""
    helper = Helper(with_base_url("http://localhost"))
    yield helper
    helper.close()


@pytest.fixture
def mock_httpx_sync_client():
    """Mock httpx.Client for testing."""
    client = MagicMock(spec=httpx.Client)
    client.close = MagicMock()
    return client
