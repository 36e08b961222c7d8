"""Shared test doubles for the Onyx HTTP layer and the MCP request context."""

import json
from unittest.mock import MagicMock

import aiohttp
import pytest

from context_bank_mcp.config import ContextBankConfig


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""

    def __init__(self, body="", status=200):
        self.body = body if isinstance(body, str) else json.dumps(body)
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                request_info=MagicMock(),
                history=(),
                status=self.status,
                message="Internal Server Error",
            )

    async def text(self, errors="strict"):
        return self.body


class FakeRequestContextManager:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc

    async def __aenter__(self):
        if self.exc is not None:
            raise self.exc
        return self.response

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class FakeSession:
    """Records POSTs and answers each with the same canned response or exception."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []
        self.closed = False

    def post(self, url, json=None, headers=None):
        self.calls.append({"url": url, "json": json, "headers": headers})
        return FakeRequestContextManager(self.response, self.exc)

    async def close(self):
        self.closed = True


class MockRequestContext:
    def __init__(self, lifespan_context):
        self.lifespan_context = lifespan_context


class MockContext:
    """Mimics FastMCP's context.request_context.lifespan_context structure."""

    def __init__(self, lifespan_context):
        self.request_context = MockRequestContext(lifespan_context)


@pytest.fixture
def make_session():
    """Factory for FakeSession: make_session(body=..., status=..., exc=...)."""

    def _make(body="", status=200, exc=None):
        return FakeSession(response=FakeResponse(body, status), exc=exc)

    return _make


@pytest.fixture
def test_config():
    return ContextBankConfig(onyx_api_base="http://onyx.test", onyx_api_key="secret")


@pytest.fixture
def mock_context(test_config):
    return MockContext({"config": test_config})
