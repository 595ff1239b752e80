"""
Content tools: read and write items in any user collection.
"""

from typing import Annotated, Any

from pydantic import Field

from directus_mcp.tools.base import action_tool, data_tool
from directus_mcp.tools.validators import (
    AnyRecord,
    Aggregate,
    CollectionName,
    Deep,
    Fields,
    Filter,
    GroupBy,
    ItemId,
    Limit,
    Offset,
    Page,
    Search,
    Sort,
    ToolInput,
)

CONTENT_TOOLSETS = ("default", "content")


class QueryItemsInput(ToolInput):
    collection: Annotated[CollectionName, Field(description="Collection name to query")]
    fields: Fields = None
    filter: Filter = None
    search: Search = None
    sort: Sort = None
    limit: Limit = None
    offset: Offset = None
    page: Page = None
    aggregate: Aggregate = None
    group_by: GroupBy = None
    deep: Deep = None


class GetItemInput(ToolInput):
    collection: CollectionName
    id: ItemId
    fields: Annotated[list[str] | None, Field(description="Fields to return")] = None
    deep: Deep = None


class CreateItemInput(ToolInput):
    collection: CollectionName
    data: AnyRecord = Field(description="Item data as key-value pairs")


class UpdateItemInput(ToolInput):
    collection: CollectionName
    id: Annotated[str | int, Field(description="Item ID to update")]
    data: AnyRecord = Field(description="Fields to update as key-value pairs")


class DeleteItemInput(ToolInput):
    collection: CollectionName
    id: Annotated[str | int, Field(description="Item ID to delete")]


class BulkCreateItemsInput(ToolInput):
    collection: CollectionName
    items: list[AnyRecord] = Field(description="Array of items to create")


class BulkUpdateItemsInput(ToolInput):
    collection: CollectionName
    items: list[AnyRecord] = Field(description="Array of items with id and fields to update")


class BulkDeleteItemsInput(ToolInput):
    collection: CollectionName
    ids: list[str | int] = Field(description="Array of item IDs to delete")


def _query_items(client, args: QueryItemsInput) -> Any:
    return client.items(args.collection).list(args.query_params())


CONTENT_TOOLS = (
    data_tool(
        name="query_items",
        description=(
            "Query items from a collection with advanced filtering, sorting, pagination, and search. "
            "Supports Directus filter operators like _eq, _neq, _lt, _lte, _gt, _gte, _in, _nin, _null, "
            "_nnull, _contains, _ncontains, _starts_with, _nstarts_with, _ends_with, _nends_with, "
            "_between, _nbetween. Example: {collection: \"articles\", filter: {\"status\": {\"_eq\": "
            "\"published\"}, \"date_created\": {\"_gte\": \"2024-01-01\"}}, sort: [\"-date_created\"], limit: 10}"
        ),
        input_model=QueryItemsInput,
        toolsets=CONTENT_TOOLSETS,
        handler=_query_items,
    ),
    data_tool(
        name="get_item",
        description=(
            "Get a single item by ID from a collection. Optionally specify fields to return and "
            "deep query for relational data."
        ),
        input_model=GetItemInput,
        toolsets=CONTENT_TOOLSETS,
        handler=lambda client, args: client.items(args.collection).get(args.id, args.query_params()),
    ),
    data_tool(
        name="create_item",
        description=(
            "Create a new item in a collection. Provide the item data as key-value pairs. Example: "
            "{collection: \"articles\", data: {title: \"My Article\", status: \"draft\", body: \"Article content...\"}}"
        ),
        input_model=CreateItemInput,
        toolsets=CONTENT_TOOLSETS,
        handler=lambda client, args: client.items(args.collection).create(args.data),
    ),
    data_tool(
        name="update_item",
        description=(
            "Update an existing item in a collection. Provide the item ID and fields to update. "
            "Example: {collection: \"articles\", id: 1, data: {status: \"published\"}}"
        ),
        input_model=UpdateItemInput,
        toolsets=CONTENT_TOOLSETS,
        handler=lambda client, args: client.items(args.collection).update(args.id, args.data),
    ),
    action_tool(
        name="delete_item",
        description="Delete an item from a collection by ID. This action cannot be undone.",
        input_model=DeleteItemInput,
        toolsets=CONTENT_TOOLSETS,
        handler=lambda client, args: client.items(args.collection).delete(args.id),
        success_message=lambda args: f'Item {args.id} deleted from collection "{args.collection}"',
    ),
    data_tool(
        name="bulk_create_items",
        description=(
            "Create multiple items in a collection at once. More efficient than creating items one "
            "by one. Example: {collection: \"articles\", items: [{title: \"Article 1\", status: "
            "\"draft\"}, {title: \"Article 2\", status: \"draft\"}]}"
        ),
        input_model=BulkCreateItemsInput,
        toolsets=CONTENT_TOOLSETS,
        handler=lambda client, args: client.items(args.collection).bulk_create(args.items),
    ),
    data_tool(
        name="bulk_update_items",
        description=(
            "Update multiple items in a collection at once. Each item must include an id field. "
            "Example: {collection: \"articles\", items: [{id: 1, status: \"published\"}, {id: 2, "
            "status: \"published\"}]}"
        ),
        input_model=BulkUpdateItemsInput,
        toolsets=CONTENT_TOOLSETS,
        handler=lambda client, args: client.items(args.collection).bulk_update(args.items),
    ),
    action_tool(
        name="bulk_delete_items",
        description=(
            "Delete multiple items from a collection at once by their IDs. This action cannot be "
            "undone. Example: {collection: \"articles\", ids: [1, 2, 3]}"
        ),
        input_model=BulkDeleteItemsInput,
        toolsets=CONTENT_TOOLSETS,
        handler=lambda client, args: client.items(args.collection).bulk_delete(args.ids),
        success_message=lambda args: f'{len(args.ids)} items deleted from collection "{args.collection}"',
    ),
)
