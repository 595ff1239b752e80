"""
The complete tool catalog and lookups over it.
"""

from collections.abc import Iterable, Iterator

from directus_mcp.toolsets import VALID_TOOLSETS, filter_tools
from directus_mcp.tools.base import ToolDefinition
from directus_mcp.tools.content_tools import CONTENT_TOOLS
from directus_mcp.tools.dashboard_tools import DASHBOARD_TOOLS
from directus_mcp.tools.flow_tools import FLOW_TOOLS
from directus_mcp.tools.operation_tools import OPERATION_TOOLS
from directus_mcp.tools.schema_tools import SCHEMA_TOOLS

ALL_TOOLS: tuple[ToolDefinition, ...] = (
    *SCHEMA_TOOLS,
    *CONTENT_TOOLS,
    *FLOW_TOOLS,
    *OPERATION_TOOLS,
    *DASHBOARD_TOOLS,
)


class ToolRegistry:
    """
    An ordered, name-unique set of tool definitions.

    Raises ValueError at construction if two tools share a name or a tool
    declares no toolset (or one outside the known vocabulary).
    """

    def __init__(self, definitions: Iterable[ToolDefinition] = ALL_TOOLS):
        self._tools: dict[str, ToolDefinition] = {}
        for definition in definitions:
            if definition.name in self._tools:
                raise ValueError(f"Duplicate tool name: {definition.name}")
            if not definition.toolsets:
                raise ValueError(f"Tool {definition.name} declares no toolsets")
            unknown = [t for t in definition.toolsets if t not in VALID_TOOLSETS]
            if unknown:
                raise ValueError(
                    f"Tool {definition.name} declares unknown toolsets: {', '.join(unknown)}"
                )
            self._tools[definition.name] = definition

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def enabled(self, active: Iterable[str]) -> list[ToolDefinition]:
        """The tools exposed under the given active toolsets, in catalog order."""
        return filter_tools(list(self._tools.values()), active)
