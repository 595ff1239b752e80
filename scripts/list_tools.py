"""
CLI utility to preview which tools a toolset selection exposes.

Useful before editing an MCP client configuration: it shows exactly which
tools a given MCP_TOOLSETS value enables, without starting the server.
With --check it also builds the Directus client from the environment
(logging in if email/password is configured) and pings the instance, which
is the same bootstrap the server performs on startup.

Usage examples:

    # Tools in the default toolset
    uv run python -m scripts.list_tools

    # Tools for schema work plus content editing
    uv run python -m scripts.list_tools --toolsets schema,content

    # Everything, and verify the configured credentials work
    DIRECTUS_URL=https://cms.example.com DIRECTUS_TOKEN=... \\
        uv run python -m scripts.list_tools --toolsets all --check

The resulting toolset string goes straight into the server environment:

    claude mcp add directus -e DIRECTUS_URL=... -e DIRECTUS_TOKEN=... \\
      -e MCP_TOOLSETS=schema,content -- directus-mcp
"""

import argparse
import asyncio
import sys

from directus_mcp.client import create_directus_client
from directus_mcp.config import settings
from directus_mcp.errors import DirectusError
from directus_mcp.tools.registry import ToolRegistry
from directus_mcp.toolsets import VALID_TOOLSETS, parse_toolsets


async def check_connection() -> str:
    """
    Bootstrap a client from the environment and ping Directus.

    Returns:
        The base URL that answered

    Raises:
        DirectusError: If configuration, login, or the ping fails
    """
    client = await create_directus_client(settings.directus_config())
    await client.ping()
    return client.base_url


def main() -> None:
    parser = argparse.ArgumentParser(
        description="List the MCP tools enabled by a toolset selection.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Valid toolsets: {", ".join(VALID_TOOLSETS)}

Examples:
  Default toolset:
    %(prog)s

  Flow automation only:
    %(prog)s --toolsets flow

  Everything, with a connection check:
    %(prog)s --toolsets all --check
        """,
    )

    parser.add_argument(
        "--toolsets",
        default=settings.mcp_toolsets,
        help="Comma-separated toolset names (default: MCP_TOOLSETS, or 'default')",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Also connect to Directus using the DIRECTUS_* environment variables",
    )

    args = parser.parse_args()

    active = parse_toolsets(args.toolsets)
    enabled = ToolRegistry().enabled(active)

    print(f"Toolsets:   {', '.join(active)}")
    print(f"Tools:      {len(enabled)}")
    print()

    width = max((len(tool.name) for tool in enabled), default=0)
    for tool in enabled:
        print(f"  {tool.name.ljust(width)}  [{', '.join(tool.toolsets)}]")

    if args.check:
        print()
        try:
            url = asyncio.run(check_connection())
        except DirectusError as e:
            print(f"Connection: FAILED ({e})")
            sys.exit(1)
        print(f"Connection: OK ({url})")


if __name__ == "__main__":
    main()
