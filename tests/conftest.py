"""
Shared test fixtures for the Directus MCP test suite.

Pytest fixtures are reusable setup functions that tests request by name.
No test talks to a real Directus instance: every client is wired to an
httpx.MockTransport that answers from a handler function and records each
request it receives.

Key fixtures:
- make_transport: A factory for recording mock transports
- make_client: A factory for DirectusClient instances bound to a transport
- make_definition: A factory for throwaway ToolDefinitions (toolset tests)

Testing approach:
- test_query.py / test_resources.py / test_client.py: unit tests for the
  HTTP layer. Assertions look at the recorded httpx.Request objects.
- test_tool_helpers.py / test_toolsets.py: pure functions, no transport.
- test_tools.py: the tool catalog and individual handlers against a mock
  Directus.
- test_server.py: the full MCP path through fastmcp's in-memory Client.
"""

import json

import httpx
import pytest
from pydantic import BaseModel

from directus_mcp.client import DirectusClient, DirectusConfig
from directus_mcp.tools.base import data_tool

TEST_URL = "https://directus.test"
TEST_TOKEN = "static-test-token"


def request_json(request: httpx.Request):
    """Decode the JSON body of a recorded request."""
    return json.loads(request.content)


# ---------------------------------------------------------------------------
# Mock transport factory fixture
# ---------------------------------------------------------------------------
@pytest.fixture
def make_transport():
    """
    Factory fixture for httpx.MockTransport instances that record requests.

    The returned transport has a `requests` list holding every httpx.Request
    it has seen, in order.

    Usage in tests:
        def test_something(make_transport):
            transport = make_transport(json_body={"data": {"id": 1}})
            transport = make_transport(status=204)
            transport = make_transport(handler=lambda request: httpx.Response(500))
    """

    def _make_transport(
        handler=None,
        *,
        status: int = 200,
        json_body=None,
    ) -> httpx.MockTransport:
        requests: list[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if handler is not None:
                return handler(request)
            if status == 204:
                return httpx.Response(204)
            body = json_body if json_body is not None else {"data": []}
            return httpx.Response(status, json=body)

        transport = httpx.MockTransport(_handle)
        transport.requests = requests
        return transport

    return _make_transport


# ---------------------------------------------------------------------------
# Client factory fixture
# ---------------------------------------------------------------------------
@pytest.fixture
def make_client(make_transport):
    """
    Factory fixture for DirectusClient instances.

    Defaults to static token authentication against TEST_URL. Pass a
    transport to control responses; otherwise a fresh default transport
    (200, {"data": []}) is created.

    Usage in tests:
        def test_something(make_client, make_transport):
            transport = make_transport(status=204)
            client = make_client(transport=transport)
    """

    def _make_client(
        transport: httpx.MockTransport | None = None,
        *,
        url: str = TEST_URL,
        token: str | None = TEST_TOKEN,
        email: str | None = None,
        password: str | None = None,
    ) -> DirectusClient:
        config = DirectusConfig(url=url, token=token, email=email, password=password)
        return DirectusClient(config, transport=transport or make_transport())

    return _make_client


# ---------------------------------------------------------------------------
# Tool definition factory fixture
# ---------------------------------------------------------------------------
class EmptyInput(BaseModel):
    pass


@pytest.fixture
def make_definition():
    """
    Factory fixture for minimal ToolDefinitions with chosen toolsets.

    Usage in tests:
        def test_something(make_definition):
            tool = make_definition("X", ("default", "schema"))
    """

    async def _noop(client, args):
        return {"data": None}

    def _make_definition(name: str, toolsets=("default",)):
        return data_tool(
            name=name,
            description=f"Test tool {name}",
            input_model=EmptyInput,
            toolsets=toolsets,
            handler=_noop,
        )

    return _make_definition
