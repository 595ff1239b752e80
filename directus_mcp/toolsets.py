"""
Toolset selection: which tools the server exposes.

Every tool declares one or more toolsets (capability groups). The operator
picks the active toolsets with MCP_TOOLSETS, and only tools that belong to an
active toolset are listed or callable:

    MCP_TOOLSETS=""                 -> default
    MCP_TOOLSETS="schema,content"   -> schema + content tools
    MCP_TOOLSETS="flow,all"         -> every tool ("all" swallows the rest)
    MCP_TOOLSETS="nonsense"         -> default (with a warning)

The selection is computed once at startup and never changes.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar

logger = logging.getLogger(__name__)

DEFAULT_TOOLSET = "default"
ALL_TOOLSET = "all"

# Closed vocabulary. "default" covers everyday schema and content work; the
# narrower names let an operator expose a single area.
VALID_TOOLSETS: tuple[str, ...] = (
    DEFAULT_TOOLSET,
    "schema",
    "content",
    "flow",
    "collections",
    "fields",
    "relations",
    "dashboards",
    ALL_TOOLSET,
)


class HasToolsets(Protocol):
    name: str
    toolsets: tuple[str, ...]


T = TypeVar("T", bound=HasToolsets)


def parse_toolsets(value: str | None) -> tuple[str, ...]:
    """
    Turn a comma-separated toolset string into the active toolset names.

    Tokens are trimmed and lowercased; unknown tokens are dropped with a
    warning. If "all" survives it is returned alone. If nothing survives the
    result is ("default",).
    """
    requested = [t.strip().lower() for t in (value or "").split(",")]
    requested = [t for t in requested if t]

    valid: list[str] = []
    invalid: list[str] = []
    for token in requested:
        if token not in VALID_TOOLSETS:
            invalid.append(token)
        elif token not in valid:
            valid.append(token)

    if invalid:
        logger.warning(
            "Invalid toolset names ignored: %s. Valid toolsets are: %s",
            ", ".join(invalid),
            ", ".join(VALID_TOOLSETS),
        )

    if ALL_TOOLSET in valid:
        return (ALL_TOOLSET,)

    if not valid:
        if requested:
            logger.warning(
                "No valid toolsets found in %r. Defaulting to '%s' toolset.",
                value,
                DEFAULT_TOOLSET,
            )
        return (DEFAULT_TOOLSET,)

    return tuple(valid)


def is_enabled(tool: HasToolsets, active: Iterable[str]) -> bool:
    """A tool is enabled if "all" is active or it shares a toolset with the active set."""
    active = set(active)
    if ALL_TOOLSET in active:
        return True
    return not active.isdisjoint(tool.toolsets)


def filter_tools(tools: Sequence[T], active: Iterable[str]) -> list[T]:
    """Keep the enabled tools, preserving their order."""
    active = tuple(active)
    return [tool for tool in tools if is_enabled(tool, active)]
