"""
Unit tests for DirectusConfig, DirectusClient.request() and the auth bootstrap.

Every test runs against an httpx.MockTransport; nothing leaves the process.
"""

import dataclasses

import httpx
import pytest

from conftest import TEST_TOKEN, TEST_URL, request_json
from directus_mcp.client import DirectusClient, DirectusConfig, create_directus_client
from directus_mcp.errors import AuthenticationError, ConfigurationError, DirectusAPIError


class TestConfig:
    """DirectusConfig validates credentials up front."""

    def test_missing_credentials_rejected_before_any_request(self, make_transport):
        """No token and no email/password fails at construction time."""
        transport = make_transport()
        with pytest.raises(ConfigurationError, match="Authentication configuration required"):
            DirectusClient(DirectusConfig(url=TEST_URL), transport=transport)
        assert transport.requests == []

    def test_email_without_password_rejected(self):
        with pytest.raises(ConfigurationError):
            DirectusConfig(url=TEST_URL, email="admin@example.com")

    def test_trailing_slashes_stripped(self):
        config = DirectusConfig(url=f"{TEST_URL}///", token="t")
        assert config.url == TEST_URL

    def test_token_takes_precedence(self):
        config = DirectusConfig(url=TEST_URL, token="t", email="a@b.c", password="pw")
        assert config.uses_session is False

    def test_config_is_immutable(self):
        config = DirectusConfig(url=TEST_URL, token="t")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.url = "https://elsewhere.test"


class TestRequest:
    """request() builds the HTTP call and normalizes every outcome."""

    async def test_bearer_and_content_type_headers(self, make_client, make_transport):
        transport = make_transport(json_body={"data": []})
        await make_client(transport).request("GET", "/items/articles")

        request = transport.requests[0]
        assert request.headers["Authorization"] == f"Bearer {TEST_TOKEN}"
        assert request.headers["Content-Type"] == "application/json"
        assert str(request.url) == f"{TEST_URL}/items/articles"

    async def test_json_body_returned_as_is(self, make_client, make_transport):
        body = {"data": [{"id": 1, "title": "Hello"}], "meta": {"total_count": 1}}
        result = await make_client(make_transport(json_body=body)).request("GET", "/items/articles")
        assert result == body

    async def test_no_content_returns_success_marker(self, make_client, make_transport):
        """A 204 on delete resolves to a success marker instead of a parse error."""
        transport = make_transport(status=204)
        result = await make_client(transport).request("DELETE", "/items/articles/1")
        assert result == {"success": True}
        assert transport.requests[0].method == "DELETE"

    async def test_remote_error_message_surfaced(self, make_client, make_transport):
        transport = make_transport(status=404, json_body={"errors": [{"message": "Not found"}]})
        with pytest.raises(DirectusAPIError) as exc_info:
            await make_client(transport).request("GET", "/items/articles")

        assert str(exc_info.value) == "Directus API error: Not found"
        assert exc_info.value.detail == "Not found"
        assert exc_info.value.status_code == 404

    async def test_top_level_message_used_when_no_errors_array(self, make_client, make_transport):
        transport = make_transport(status=400, json_body={"message": "Bad payload"})
        with pytest.raises(DirectusAPIError, match="Directus API error: Bad payload"):
            await make_client(transport).request("POST", "/items/articles", {"a": 1})

    async def test_status_text_used_for_non_json_error(self, make_client, make_transport):
        transport = make_transport(handler=lambda request: httpx.Response(502, text="<html>"))
        with pytest.raises(DirectusAPIError, match="Directus API error: Bad Gateway"):
            await make_client(transport).request("GET", "/server/ping")

    async def test_transport_failure_has_same_shape(self, make_client, make_transport):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(DirectusAPIError) as exc_info:
            await make_client(make_transport(handler=refuse)).request("GET", "/items/articles")

        assert str(exc_info.value) == "Directus API error: Connection refused"
        assert exc_info.value.status_code is None

    async def test_unparseable_success_body(self, make_client, make_transport):
        transport = make_transport(handler=lambda request: httpx.Response(200, text="not json"))
        with pytest.raises(DirectusAPIError, match="Invalid JSON response"):
            await make_client(transport).request("GET", "/items/articles")

    async def test_get_never_sends_a_body(self, make_client, make_transport):
        transport = make_transport()
        await make_client(transport).request("GET", "/items/articles", {"ignored": True})
        assert transport.requests[0].content == b""

    async def test_delete_with_list_sends_body(self, make_client, make_transport):
        """Bulk delete: DELETE carries the id array as its JSON body."""
        transport = make_transport(status=204)
        await make_client(transport).request("DELETE", "/items/articles", ["a", "b"])
        assert request_json(transport.requests[0]) == ["a", "b"]

    async def test_delete_with_object_sends_no_body(self, make_client, make_transport):
        transport = make_transport(status=204)
        await make_client(transport).request("DELETE", "/items/articles/1", {"x": 1})
        assert transport.requests[0].content == b""


class TestAuthBootstrap:
    """create_directus_client() logs in only when it has to."""

    async def test_static_token_makes_no_request(self, make_transport):
        transport = make_transport()
        config = DirectusConfig(url=TEST_URL, token="abc")

        client = await create_directus_client(config, transport=transport)

        assert transport.requests == []
        assert client.is_ready

    async def test_login_exchange(self, make_transport):
        def handler(request):
            if request.url.path == "/auth/login":
                return httpx.Response(
                    200, json={"data": {"access_token": "session-token", "expires": 900000}}
                )
            return httpx.Response(200, json={"data": "pong"})

        transport = make_transport(handler=handler)
        config = DirectusConfig(url=TEST_URL, email="admin@example.com", password="secret")

        client = await create_directus_client(config, transport=transport)
        await client.request("GET", "/server/ping")

        login, ping = transport.requests
        assert login.method == "POST"
        assert request_json(login) == {
            "email": "admin@example.com",
            "password": "secret",
            "mode": "json",
        }
        assert "Authorization" not in login.headers
        assert ping.headers["Authorization"] == "Bearer session-token"
        assert client.session.expires == 900000
        assert client.is_ready

    async def test_rejected_credentials(self, make_transport):
        transport = make_transport(
            status=401, json_body={"errors": [{"message": "Invalid user credentials."}]}
        )
        config = DirectusConfig(url=TEST_URL, email="admin@example.com", password="wrong")

        with pytest.raises(AuthenticationError) as exc_info:
            await create_directus_client(config, transport=transport)

        assert str(exc_info.value) == "Authentication failed: Invalid user credentials."

    async def test_login_response_without_token(self, make_transport):
        transport = make_transport(json_body={"data": {}})
        config = DirectusConfig(url=TEST_URL, email="admin@example.com", password="pw")

        with pytest.raises(AuthenticationError, match="did not include an access token"):
            await create_directus_client(config, transport=transport)

    async def test_unauthenticated_client_is_not_ready(self, make_transport):
        config = DirectusConfig(url=TEST_URL, email="admin@example.com", password="pw")
        client = DirectusClient(config, transport=make_transport())
        assert not client.is_ready


class TestServerEndpoints:
    """Endpoints that are not CRUD shaped."""

    async def test_ping(self, make_client, make_transport):
        transport = make_transport(json_body={"data": "pong"})
        assert await make_client(transport).ping() == {"data": "pong"}
        assert transport.requests[0].url.path == "/server/ping"

    async def test_schema_snapshot_export(self, make_client, make_transport):
        transport = make_transport()
        await make_client(transport).schema_snapshot("yaml")
        request = transport.requests[0]
        assert request.url.path == "/schema/snapshot"
        assert request.url.params["export"] == "yaml"

    async def test_schema_diff_force(self, make_client, make_transport):
        transport = make_transport()
        snapshot = {"collections": [], "fields": [], "relations": []}
        await make_client(transport).schema_diff(snapshot, force=True)
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url.params["force"] == "true"
        assert request_json(request) == snapshot

    async def test_schema_apply(self, make_client, make_transport):
        transport = make_transport(status=204)
        result = await make_client(transport).schema_apply({"hash": "abc", "diff": {}})
        assert result == {"success": True}
        assert transport.requests[0].url.path == "/schema/apply"
