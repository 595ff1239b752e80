"""
HTTP client for the Directus REST API.

This module handles everything between a tool handler and the network:
- Holds the immutable connection configuration (base URL + credentials)
- Performs the login exchange when email/password auth is configured
- Builds requests (URL, JSON body, bearer header) and sends them with httpx
- Normalizes the three kinds of outcome into one contract:

    2xx with body   -> parsed JSON, returned as-is
    204 No Content  -> {"success": True}
    anything else   -> DirectusAPIError("Directus API error: <message>")

Authentication states:

    DirectusConfig(token=...)            -> ready immediately, no network call
    DirectusConfig(email=..., password=...)
        -> create_directus_client() logs in, then returns a ready client
           carrying the session access token

Nothing on a client changes after construction. A login produces a new client
instance with the session attached, so a ready client can be shared by any
number of concurrent tool calls without locking.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from directus_mcp.errors import AuthenticationError, ConfigurationError, DirectusAPIError
from directus_mcp.query import build_query_string
from directus_mcp.resources import BulkResource, FlowsResource, Resource, make_resource

logger = logging.getLogger(__name__)

# Verbs whose body is always sent. DELETE only carries a body for bulk deletes.
_BODY_METHODS = frozenset({"POST", "PATCH", "PUT"})


@dataclass(frozen=True)
class DirectusConfig:
    """
    Connection settings for one Directus instance.

    Attributes:
        url: Base URL of the instance; trailing slashes are stripped
        token: Static access token (takes precedence over email/password)
        email: Login email for session authentication
        password: Login password for session authentication
        timeout: Seconds before a request is abandoned; None disables it

    Raises:
        ConfigurationError: If neither a token nor an email/password pair is set
    """

    url: str
    token: str | None = None
    email: str | None = None
    password: str | None = None
    timeout: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "url", self.url.rstrip("/"))
        if not self.token and not (self.email and self.password):
            raise ConfigurationError(
                "Authentication configuration required: provide either token or email/password"
            )

    @property
    def uses_session(self) -> bool:
        """True when the client must log in before its first request."""
        return not self.token


@dataclass(frozen=True)
class Session:
    """Credentials returned by a successful /auth/login exchange."""

    access_token: str
    expires: int | None = None


def _error_detail(response: httpx.Response) -> str:
    """Pick the most useful error text from a failed Directus response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        errors = payload.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            if errors[0].get("message"):
                return str(errors[0]["message"])
        if payload.get("message"):
            return str(payload["message"])

    return response.reason_phrase or f"HTTP {response.status_code}"


class DirectusClient:
    """
    Async client for one Directus instance.

    Resource endpoints are exposed as attributes (collections, relations,
    flows, operations, dashboards, panels) or as methods for endpoints rooted
    under a collection name (fields(), items()).

    Args:
        config: Immutable connection settings
        session: Login session; only needed for email/password configurations
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests
    """

    def __init__(
        self,
        config: DirectusConfig,
        *,
        session: Session | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.session = session
        self._transport = transport

        access_token = config.token or (session.access_token if session else None)
        headers = {"Content-Type": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        self._headers = headers

        self.collections: Resource = make_resource(self, "collections")
        self.relations: Resource = make_resource(self, "relations")
        self.flows: FlowsResource = FlowsResource(self, "flows")
        self.operations: BulkResource = make_resource(self, "operations", supports_bulk=True)
        self.dashboards: BulkResource = make_resource(self, "dashboards", supports_bulk=True)
        self.panels: BulkResource = make_resource(self, "panels", supports_bulk=True)

    @property
    def base_url(self) -> str:
        return self.config.url

    @property
    def is_ready(self) -> bool:
        """True when requests will carry credentials."""
        return not self.config.uses_session or self.session is not None

    def fields(self, collection: str) -> Resource:
        """Fields of one collection: /fields/<collection>[/<field>]."""
        return make_resource(self, f"fields/{collection}")

    def items(self, collection: str) -> BulkResource:
        """Items of one collection: /items/<collection>[/<id>]."""
        return make_resource(self, f"items/{collection}", supports_bulk=True)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def request(self, method: str, path: str, body: Any = None) -> Any:
        """
        Send one request to Directus and normalize the outcome.

        Args:
            method: HTTP verb (GET, POST, PATCH, PUT, DELETE)
            path: Path below the base URL, including any query string
            body: JSON-serializable payload. Sent for POST/PATCH/PUT, and for
                  DELETE only when it is a list of ids (bulk delete).

        Returns:
            The parsed JSON body, or {"success": True} for 204 responses

        Raises:
            DirectusAPIError: On a non-2xx status, an unreadable body, or a
                              transport failure. Never retried.
        """
        method = method.upper()
        url = f"{self.base_url}{path}"

        content = None
        if body is not None and (
            method in _BODY_METHODS or (method == "DELETE" and isinstance(body, list))
        ):
            content = json.dumps(body)

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self.config.timeout,
                follow_redirects=True,
            ) as http:
                response = await http.request(method, url, headers=self._headers, content=content)
        except httpx.HTTPError as e:
            # Could not reach the service at all. Same message shape as a
            # remote error so callers see one contract.
            detail = str(e) or type(e).__name__
            logger.warning(
                "Directus request failed",
                extra={"context": {"method": method, "path": path, "error": detail}},
            )
            raise DirectusAPIError(detail) from e

        logger.debug(
            "Directus request completed",
            extra={"context": {"method": method, "path": path, "status": response.status_code}},
        )

        if not response.is_success:
            detail = _error_detail(response)
            logger.warning(
                "Directus API error",
                extra={
                    "context": {
                        "method": method,
                        "path": path,
                        "status": response.status_code,
                        "error": detail,
                    }
                },
            )
            raise DirectusAPIError(detail, status_code=response.status_code)

        if response.status_code == 204:
            return {"success": True}

        try:
            return response.json()
        except ValueError as e:
            raise DirectusAPIError(f"Invalid JSON response: {e}", status_code=response.status_code) from e

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def login(self) -> Session:
        """
        Exchange the configured email/password for an access token.

        Uses JSON mode, so the token comes back in the response body and is
        sent as a bearer header afterwards. The session is not refreshed.

        Raises:
            AuthenticationError: If the configuration has no email/password,
                                 Directus rejects the credentials, or the
                                 response carries no access token
        """
        if not (self.config.email and self.config.password):
            raise AuthenticationError("email/password authentication is not configured")

        try:
            payload = await self.request(
                "POST",
                "/auth/login",
                {"email": self.config.email, "password": self.config.password, "mode": "json"},
            )
        except DirectusAPIError as e:
            raise AuthenticationError(e.detail) from e

        data = payload.get("data") if isinstance(payload, dict) else None
        access_token = data.get("access_token") if isinstance(data, dict) else None
        if not access_token:
            raise AuthenticationError("login response did not include an access token")

        return Session(access_token=access_token, expires=data.get("expires"))

    # ------------------------------------------------------------------
    # Server / schema endpoints (not CRUD shaped)
    # ------------------------------------------------------------------

    async def ping(self) -> Any:
        """GET /server/ping. Used by the readiness probe."""
        return await self.request("GET", "/server/ping")

    async def schema_snapshot(self, export: str | None = None) -> Any:
        query = build_query_string({"export": export})
        return await self.request("GET", f"/schema/snapshot{query}")

    async def schema_diff(self, snapshot: dict[str, Any], force: bool = False) -> Any:
        query = "?force=true" if force else ""
        return await self.request("POST", f"/schema/diff{query}", snapshot)

    async def schema_apply(self, diff: dict[str, Any]) -> Any:
        return await self.request("POST", "/schema/apply", diff)


async def create_directus_client(
    config: DirectusConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DirectusClient:
    """
    Build a ready-to-use client, logging in first when needed.

    Raises:
        AuthenticationError: If the login exchange fails. The server must not
                             start serving tools in that case.
    """
    client = DirectusClient(config, transport=transport)
    if not config.uses_session:
        logger.info("Using static token authentication", extra={"context": {"url": config.url}})
        return client

    session = await client.login()
    logger.info(
        "Authenticated with email/password",
        extra={"context": {"url": config.url, "email": config.email}},
    )
    return DirectusClient(config, session=session, transport=transport)
