"""
Unit tests for the tool wrappers and the input schema builder.
"""

import json
from typing import Any, Literal

import pytest
from pydantic import BaseModel, Field

from directus_mcp.tools.base import action_tool, data_tool, input_schema, json_type, text_result
from directus_mcp.tools.validators import Fields, GroupBy, ToolInput


class Args(BaseModel):
    id: str = "abc"


class TestDataTool:
    """data_tool() pretty-prints whatever the handler returns."""

    async def test_wraps_result_as_indented_json(self):
        async def handler(client, args):
            return {"data": {"id": args.id, "title": "Grüße"}}

        tool = data_tool(
            name="get_thing", description="d", input_model=Args, toolsets=["default"], handler=handler
        )
        response = await tool.handler(None, Args())

        text = response["content"][0]["text"]
        assert response["content"][0]["type"] == "text"
        assert json.loads(text) == {"data": {"id": "abc", "title": "Grüße"}}
        assert "\n  " in text
        assert "Grüße" in text

    @pytest.mark.parametrize(
        "value",
        [
            {"data": [{"id": 1, "tags": ["a", "b"], "parent": None}, {"id": 2, "nested": {"x": True}}]},
            [1, [2, [3]], {}],
            None,
            "pong",
            42,
            True,
        ],
    )
    async def test_text_is_exact_two_space_json(self, value):
        async def handler(client, args):
            return value

        tool = data_tool(
            name="t", description="d", input_model=Args, toolsets=["default"], handler=handler
        )
        response = await tool.handler(None, Args())

        assert response == text_result(json.dumps(value, indent=2, ensure_ascii=False))

    async def test_handler_errors_propagate(self):
        async def handler(client, args):
            raise RuntimeError("boom")

        tool = data_tool(
            name="t", description="d", input_model=Args, toolsets=["default"], handler=handler
        )
        with pytest.raises(RuntimeError, match="boom"):
            await tool.handler(None, Args())

    def test_toolsets_stored_as_tuple(self):
        async def handler(client, args):
            return None

        tool = data_tool(
            name="t", description="d", input_model=Args, toolsets=["flow"], handler=handler
        )
        assert tool.toolsets == ("flow",)


class TestActionTool:
    """action_tool() reports a success message instead of the response."""

    async def test_success_message_from_arguments(self):
        async def handler(client, args):
            return {"success": True}

        tool = action_tool(
            name="delete_thing",
            description="d",
            input_model=Args,
            toolsets=["default"],
            handler=handler,
            success_message=lambda args: f"Thing {args.id} deleted successfully",
        )
        assert await tool.handler(None, Args()) == text_result("Thing abc deleted successfully")

    async def test_no_message_when_handler_fails(self):
        calls = []

        async def handler(client, args):
            raise RuntimeError("Directus API error: Forbidden")

        def message(args):
            calls.append(args)
            return "never"

        tool = action_tool(
            name="t",
            description="d",
            input_model=Args,
            toolsets=["default"],
            handler=handler,
            success_message=message,
        )
        with pytest.raises(RuntimeError, match="Forbidden"):
            await tool.handler(None, Args())
        assert calls == []


class TestJsonType:
    """json_type() maps annotations onto a closed set of coarse types."""

    @pytest.mark.parametrize(
        "annotation, expected",
        [
            (str, "string"),
            (int, "number"),
            (float, "number"),
            (bool, "boolean"),
            (list[str], "array"),
            (dict[str, Any], "object"),
            (str | None, "string"),
            (int | None, "number"),
            (str | int, "string"),
            (Literal["GET", "POST"], "string"),
            (Args, "object"),
            (Any, "string"),
            (Fields, "array"),
        ],
    )
    def test_mapping(self, annotation, expected):
        assert json_type(annotation) == expected


class SchemaModel(ToolInput):
    collection: str = Field(description="Collection name")
    limit: int | None = Field(None, description="Max items")
    method: Literal["GET", "POST"] = Field("GET", description="HTTP method")
    items: list[dict[str, Any]] = Field(description="Items")
    group_by: GroupBy = None
    anything: list[Any] | None = None


class TestInputSchema:
    """input_schema() produces the flat object schema shown in tools/list."""

    def test_shape(self):
        schema = input_schema(SchemaModel)
        assert schema["type"] == "object"
        assert schema["required"] == ["collection", "items"]

    def test_property_types_and_descriptions(self):
        properties = input_schema(SchemaModel)["properties"]
        assert properties["collection"] == {"type": "string", "description": "Collection name"}
        assert properties["limit"] == {"type": "number", "description": "Max items"}

    def test_enum_values(self):
        properties = input_schema(SchemaModel)["properties"]
        assert properties["method"]["enum"] == ["GET", "POST"]

    def test_array_items(self):
        properties = input_schema(SchemaModel)["properties"]
        assert properties["items"]["items"] == {"type": "object"}
        assert properties["anything"]["items"] == {}

    def test_alias_used_as_property_name(self):
        properties = input_schema(SchemaModel)["properties"]
        assert "groupBy" in properties
        assert "group_by" not in properties
