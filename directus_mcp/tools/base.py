"""
Tool definitions and the two wrappers every tool is built with.

A tool is a name, a description, a pydantic input model, the toolsets it
belongs to, and an async handler that receives the DirectusClient plus the
validated input. Handlers only do the Directus call; the wrappers turn the
outcome into the MCP text envelope:

    data_tool    -> the handler's return value, pretty-printed as JSON
    action_tool  -> a fixed success message, e.g. 'Flow abc deleted successfully'

    {"content": [{"type": "text", "text": "..."}]}

Errors raised by a handler are never caught here. The MCP layer reports them.
"""

import json
import types
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, Any, Literal, Union, get_args, get_origin

from pydantic import BaseModel

if TYPE_CHECKING:
    from directus_mcp.client import DirectusClient

Handler = Callable[["DirectusClient", Any], Awaitable[Any]]
ToolResponse = dict[str, list[dict[str, str]]]


def text_result(text: str) -> ToolResponse:
    """Wrap a string in the single-text-block MCP envelope."""
    return {"content": [{"type": "text", "text": text}]}


@dataclass(frozen=True)
class ToolDefinition:
    """
    One MCP tool, ready to be registered.

    Attributes:
        name: Unique tool name (e.g. "query_items")
        description: Shown to the model when it picks a tool
        input_model: Pydantic model the raw arguments are validated against
        toolsets: Capability groups this tool belongs to (at least one)
        handler: async (client, validated_input) -> MCP envelope
    """

    name: str
    description: str
    input_model: type[BaseModel]
    toolsets: tuple[str, ...]
    handler: Callable[["DirectusClient", Any], Awaitable[ToolResponse]]

    def input_schema(self) -> dict[str, Any]:
        return input_schema(self.input_model)


def data_tool(
    *,
    name: str,
    description: str,
    input_model: type[BaseModel],
    toolsets: Sequence[str],
    handler: Handler,
) -> ToolDefinition:
    """Build a tool whose response is the handler's result as indented JSON."""

    async def run(client: "DirectusClient", args: Any) -> ToolResponse:
        result = await handler(client, args)
        return text_result(json.dumps(result, indent=2, ensure_ascii=False))

    return ToolDefinition(
        name=name,
        description=description,
        input_model=input_model,
        toolsets=tuple(toolsets),
        handler=run,
    )


def action_tool(
    *,
    name: str,
    description: str,
    input_model: type[BaseModel],
    toolsets: Sequence[str],
    handler: Handler,
    success_message: Callable[[Any], str],
) -> ToolDefinition:
    """
    Build a tool that reports a success message instead of the API response.

    success_message is evaluated on the validated input, and only after the
    handler has completed without raising.
    """

    async def run(client: "DirectusClient", args: Any) -> ToolResponse:
        await handler(client, args)
        return text_result(success_message(args))

    return ToolDefinition(
        name=name,
        description=description,
        input_model=input_model,
        toolsets=tuple(toolsets),
        handler=run,
    )


# ---------------------------------------------------------------------------
# Input schema for tools/list
# ---------------------------------------------------------------------------
# MCP clients get a flat JSON schema: one entry per top-level argument with a
# coarse type and its description. Nested models are described as "object";
# the pydantic model still validates them in full when the tool is called.


def json_type(annotation: Any) -> str:
    """Map a field annotation to a coarse JSON schema type name."""
    origin = get_origin(annotation)

    if origin is Annotated:
        return json_type(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        options = [arg for arg in get_args(annotation) if arg is not type(None)]
        return json_type(options[0]) if options else "string"
    if origin is Literal:
        return json_type(type(get_args(annotation)[0]))
    if origin in (list, tuple, set, frozenset) or annotation in (list, tuple, set, frozenset):
        return "array"
    if origin in (dict, Mapping) or annotation is dict:
        return "object"
    if isinstance(annotation, type):
        # bool is a subclass of int, so it has to be checked first.
        if issubclass(annotation, bool):
            return "boolean"
        if issubclass(annotation, (int, float)):
            return "number"
        if issubclass(annotation, str):
            return "string"
        if issubclass(annotation, BaseModel):
            return "object"
    return "string"


def _literal_values(annotation: Any) -> list[Any] | None:
    origin = get_origin(annotation)
    if origin is Literal:
        return list(get_args(annotation))
    if origin is Annotated:
        return _literal_values(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        for arg in get_args(annotation):
            values = _literal_values(arg)
            if values:
                return values
    return None


def _item_annotation(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Annotated:
        return _item_annotation(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        options = [arg for arg in get_args(annotation) if arg is not type(None)]
        return _item_annotation(options[0]) if options else None
    if origin in (list, tuple, set, frozenset):
        args = get_args(annotation)
        return args[0] if args else None
    return None


def input_schema(model: type[BaseModel]) -> dict[str, Any]:
    """
    Describe a tool's input model as a flat JSON object schema.

    Property names use field aliases (e.g. "groupBy", "schema"), which are
    also the names the model validates against.
    """
    properties: dict[str, Any] = {}
    required: list[str] = []

    for field_name, field in model.model_fields.items():
        key = field.alias or field_name
        prop: dict[str, Any] = {
            "type": json_type(field.annotation),
            "description": field.description or "",
        }
        if prop["type"] == "array":
            item = _item_annotation(field.annotation)
            prop["items"] = {"type": json_type(item)} if item not in (None, Any) else {}
        values = _literal_values(field.annotation)
        if values:
            prop["enum"] = values
        properties[key] = prop
        if field.is_required():
            required.append(key)

    return {"type": "object", "properties": properties, "required": required}
