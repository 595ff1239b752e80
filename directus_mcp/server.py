"""
MCP server exposing the Directus tool catalog through FastMCP.

This module wires everything together:
- Structured JSON logging on stderr (stdout belongs to the stdio transport)
- One FastMCP Tool per tool definition, each bound to the shared DirectusClient
- Toolset middleware: only tools in an active toolset are listed or callable
- Health and readiness HTTP endpoints (for the streamable-http transport)
- The `directus-mcp` console entry point

Architecture:
    The flow for every tools/call request:

    1. The client sends tools/call with a tool name and raw arguments
    2. ToolsetMiddleware looks the name up in the registry
       - unknown name           -> "Tool not found: <name>"
       - not in active toolsets -> 'Tool "<name>" is not available. ...'
    3. DirectusTool validates the arguments against the tool's pydantic model
       - invalid                -> "Invalid arguments: <field>: <reason>, ..."
    4. The tool handler calls Directus through DirectusClient
       - any exception          -> "Tool execution failed: <message>"
    5. The handler's text envelope is returned as the tool result

    tools/list goes through the same middleware and is filtered with the
    same rule, so a client never sees a tool it cannot call.

Running the server:
    DIRECTUS_URL=https://cms.example.com DIRECTUS_TOKEN=... directus-mcp

    or, for network deployments:

    MCP_TRANSPORT=streamable-http MCP_PORT=8080 directus-mcp
"""

import asyncio
import json
import logging
import sys
import uuid
from typing import Any, Sequence

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext
from fastmcp.tools import Tool, ToolResult
from mcp.types import CallToolRequestParams, ListToolsRequest
from pydantic import PrivateAttr, ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from directus_mcp.client import DirectusClient, create_directus_client
from directus_mcp.config import settings
from directus_mcp.errors import DirectusAPIError, DirectusError
from directus_mcp.tools.base import ToolDefinition
from directus_mcp.tools.registry import ToolRegistry
from directus_mcp.toolsets import is_enabled, parse_toolsets

SERVER_NAME = "directus-mcp"

logger = logging.getLogger("directus-mcp")

# ---------------------------------------------------------------------------
# Structured JSON Logging
# ---------------------------------------------------------------------------
# With the stdio transport, stdout carries the MCP protocol itself, so every
# log line goes to stderr. One JSON object per line keeps the output
# parseable by whatever collects the MCP client's stderr.


class JSONLogFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Example output:

        {"timestamp": "2026-02-06 10:30:00,123", "level": "WARNING", "logger": "directus-mcp",
         "message": "Tool call rejected", "tool": "trigger_flow", "reason": "toolset_disabled"}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Structured fields passed via logger.info("msg", extra={"context": {...}})
        if hasattr(record, "context"):
            log_entry.update(record.context)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def configure_logging(level: str = "info") -> None:
    """Send all log output to stderr as JSON lines at the given level."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONLogFormatter())
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


def format_validation_error(error: ValidationError) -> str:
    """Render pydantic errors as "field.path: reason, ..."."""
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "arguments"
        parts.append(f"{location}: {err['msg']}")
    return ", ".join(parts)


class DirectusTool(Tool):
    """
    A FastMCP tool backed by a ToolDefinition and the shared DirectusClient.

    The input schema advertised in tools/list is the definition's flattened
    schema; validation on call uses the full pydantic model.
    """

    _definition: ToolDefinition = PrivateAttr()
    _client: DirectusClient = PrivateAttr()

    def __init__(self, definition: ToolDefinition, client: DirectusClient):
        super().__init__(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema(),
            tags=set(definition.toolsets),
        )
        self._definition = definition
        self._client = client

    def __repr__(self) -> str:
        return f"DirectusTool(name={self.name!r}, toolsets={self._definition.toolsets})"

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        try:
            args = self._definition.input_model.model_validate(arguments)
        except ValidationError as e:
            raise ToolError(f"Invalid arguments: {format_validation_error(e)}") from e

        try:
            response = await self._definition.handler(self._client, args)
        except Exception as e:
            context: dict[str, Any] = {"tool": self.name, "error": str(e)}
            if isinstance(e, DirectusAPIError):
                context["status"] = e.status_code
            logger.warning("Tool execution failed", extra={"context": context})
            raise ToolError(f"Tool execution failed: {e}") from e

        text = "\n".join(block["text"] for block in response["content"])
        return ToolResult(content=text)


# ---------------------------------------------------------------------------
# Toolset Middleware
# ---------------------------------------------------------------------------
# The active toolsets are fixed at startup. Both hooks apply the same rule
# (is_enabled), so the list a client sees and the calls it may make always
# agree.


class ToolsetMiddleware(Middleware):
    """
    Restricts tools/list and tools/call to the tools in the active toolsets.

    Calls to tools outside the active set are rejected before any argument
    validation or network traffic happens.
    """

    def __init__(self, registry: ToolRegistry, active_toolsets: Sequence[str]):
        self.registry = registry
        self.active_toolsets = tuple(active_toolsets)

    async def on_list_tools(
        self,
        context: MiddlewareContext[ListToolsRequest],
        call_next: CallNext[ListToolsRequest, Sequence[Tool]],
    ) -> Sequence[Tool]:
        all_tools = await call_next(context)

        visible = []
        for tool in all_tools:
            definition = self.registry.get(tool.name)
            if definition is not None and is_enabled(definition, self.active_toolsets):
                visible.append(tool)

        logger.debug(
            "Tool list filtered by toolset",
            extra={
                "context": {
                    "toolsets": list(self.active_toolsets),
                    "total_tools": len(all_tools),
                    "visible_tools": len(visible),
                }
            },
        )
        return visible

    async def on_call_tool(
        self,
        context: MiddlewareContext[CallToolRequestParams],
        call_next: CallNext[CallToolRequestParams, ToolResult],
    ) -> ToolResult:
        request_id = str(uuid.uuid4())[:8]
        tool_name = context.message.name

        definition = self.registry.get(tool_name)
        if definition is None:
            logger.warning(
                "Tool call rejected: unknown tool",
                extra={
                    "context": {"request_id": request_id, "tool": tool_name, "reason": "not_found"}
                },
            )
            raise ToolError(f"Tool not found: {tool_name}")

        if not is_enabled(definition, self.active_toolsets):
            logger.warning(
                "Tool call rejected: toolset disabled",
                extra={
                    "context": {
                        "request_id": request_id,
                        "tool": tool_name,
                        "tool_toolsets": list(definition.toolsets),
                        "active_toolsets": list(self.active_toolsets),
                        "reason": "toolset_disabled",
                    }
                },
            )
            raise ToolError(
                f'Tool "{tool_name}" is not available. '
                f"It belongs to toolsets: {', '.join(definition.toolsets)}. "
                f"Enabled toolsets: {', '.join(self.active_toolsets)}"
            )

        logger.info(
            "Tool call accepted",
            extra={"context": {"request_id": request_id, "tool": tool_name}},
        )
        return await call_next(context)


# ---------------------------------------------------------------------------
# Server assembly
# ---------------------------------------------------------------------------


def build_server(
    client: DirectusClient,
    active_toolsets: Sequence[str],
    registry: ToolRegistry | None = None,
) -> FastMCP:
    """
    Create the FastMCP server for a ready client and a fixed toolset selection.

    Every tool in the registry is registered; the middleware decides which
    ones are visible. Building twice with the same inputs yields the same
    tool list.
    """
    registry = registry if registry is not None else ToolRegistry()

    mcp = FastMCP(
        name=SERVER_NAME,
        instructions=(
            "Tools for managing a Directus instance: data model (collections, fields, "
            "relations), content items, automation flows, and insights dashboards. "
            "Available tools depend on the toolsets the server was started with."
        ),
        middleware=[ToolsetMiddleware(registry, active_toolsets)],
    )

    for definition in registry:
        mcp.add_tool(DirectusTool(definition, client))

    # -----------------------------------------------------------------------
    # Health and Readiness Endpoints
    # -----------------------------------------------------------------------
    # Plain HTTP routes, only served by the streamable-http transport.

    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> Response:
        """Liveness probe: is the server process alive and responsive?"""
        return JSONResponse({"status": "healthy"})

    @mcp.custom_route("/ready", methods=["GET"])
    async def readiness_check(request: Request) -> Response:
        """Readiness probe: is the configured Directus instance reachable?"""
        try:
            await client.ping()
        except DirectusAPIError as e:
            return JSONResponse(
                {"status": "not_ready", "reason": e.detail},
                status_code=503,
            )
        return JSONResponse({"status": "ready"})

    logger.info(
        "Server built",
        extra={
            "context": {
                "toolsets": list(active_toolsets),
                "enabled_tools": len(registry.enabled(active_toolsets)),
                "total_tools": len(registry),
            }
        },
    )
    return mcp


# ---------------------------------------------------------------------------
# Server entry point
# ---------------------------------------------------------------------------


def main() -> None:
    configure_logging(settings.mcp_log_level)

    try:
        config = settings.directus_config()
        client = asyncio.run(create_directus_client(config))
    except DirectusError as e:
        logger.error("Failed to start server", extra={"context": {"error": str(e)}})
        sys.exit(1)

    active_toolsets = parse_toolsets(settings.mcp_toolsets)
    mcp = build_server(client, active_toolsets)

    logger.info(
        "Starting MCP server (transport=%s, toolsets=%s)",
        settings.mcp_transport,
        ",".join(active_toolsets),
    )
    if settings.mcp_transport == "stdio":
        mcp.run(transport="stdio", show_banner=False)
    else:
        mcp.run(
            transport="streamable-http",
            host=settings.mcp_host,
            port=settings.mcp_port,
            log_level=settings.mcp_log_level,
            show_banner=False,
        )


if __name__ == "__main__":
    main()
