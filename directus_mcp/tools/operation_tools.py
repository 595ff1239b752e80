"""
Operation tools: the individual steps inside a flow.

Operations are part of the "flow" toolset, next to the flows they belong to.
"""

from typing import Annotated

from pydantic import Field

from directus_mcp.tools.base import action_tool, data_tool
from directus_mcp.tools.validators import (
    AnyRecord,
    DeleteById,
    DeleteByIds,
    GetQuery,
    ListQuery,
    NonEmptyStr,
    OperationType,
    ToolInput,
    Uuid,
)

OPERATION_TOOLSETS = ("flow",)

OPERATION_TYPE_DESCRIPTION = (
    "Type of operation. One of log, mail, notification, create, read, request, sleep, "
    "transform, trigger, condition, or any type of custom operation extensions"
)


class OperationFields(ToolInput):
    position_x: int | None = Field(
        None, description="Position of the operation on the X axis within the flow workspace"
    )
    position_y: int | None = Field(
        None, description="Position of the operation on the Y axis within the flow workspace"
    )
    options: AnyRecord | None = Field(
        None, description="Options depending on the type of the operation"
    )
    resolve: Uuid | None = Field(
        None,
        description="The operation triggered when the current operation succeeds (or then logic of a condition operation)",
    )
    reject: Uuid | None = Field(
        None,
        description="The operation triggered when the current operation fails (or otherwise logic of a condition operation)",
    )
    flow: Uuid | None = Field(None, description="UUID of the flow this operation belongs to")


class GetOperationInput(GetQuery):
    id: Annotated[Uuid, Field(description="Operation ID (UUID)")]


class CreateOperationInput(OperationFields):
    name: NonEmptyStr = Field(description="The name of the operation")
    key: NonEmptyStr = Field(
        description="Key for the operation. Must be unique within a given flow"
    )
    type: OperationType = Field(description=OPERATION_TYPE_DESCRIPTION)


class CreateOperationsInput(ToolInput):
    operations: list[CreateOperationInput] = Field(description="Array of operations to create")


class UpdateOperationInput(OperationFields):
    id: Annotated[Uuid, Field(description="Operation ID (UUID) to update")]
    name: str | None = Field(None, description="The name of the operation")
    key: str | None = Field(
        None, description="Key for the operation. Must be unique within a given flow"
    )
    type: OperationType | None = Field(None, description=OPERATION_TYPE_DESCRIPTION)


class UpdateOperationsInput(ToolInput):
    operations: list[UpdateOperationInput] = Field(
        description="Array of operations to update (each must include id)"
    )


class DeleteOperationInput(DeleteById):
    id: Annotated[Uuid, Field(description="Operation ID (UUID) to delete")]


class DeleteOperationsInput(DeleteByIds):
    ids: list[str] = Field(description="Array of operation IDs (UUIDs) to delete")


OPERATION_TOOLS = (
    data_tool(
        name="list_operations",
        description=(
            "List all operations that exist in Directus. Supports filtering, sorting, pagination, "
            "and search. Example: {filter: {\"flow\": {\"_eq\": \"flow-uuid\"}}, sort: "
            "[\"-date_created\"], limit: 10}"
        ),
        input_model=ListQuery,
        toolsets=OPERATION_TOOLSETS,
        handler=lambda client, args: client.operations.list(args.query_params()),
    ),
    data_tool(
        name="get_operation",
        description=(
            "Get a single operation by ID from Directus. Optionally specify fields to return and "
            "metadata options."
        ),
        input_model=GetOperationInput,
        toolsets=OPERATION_TOOLSETS,
        handler=lambda client, args: client.operations.get(args.id, args.query_params()),
    ),
    data_tool(
        name="create_operation",
        description=(
            "Create a new operation in Directus. Provide the operation data including name, key, "
            "type, and optional configuration. Example: {name: \"Log to Console\", key: "
            "\"log_console\", type: \"log\", position_x: 12, position_y: 12}"
        ),
        input_model=CreateOperationInput,
        toolsets=OPERATION_TOOLSETS,
        handler=lambda client, args: client.operations.create(args.payload()),
    ),
    data_tool(
        name="create_operations",
        description=(
            "Create multiple operations in Directus at once. More efficient than creating "
            "operations one by one. Example: {operations: [{name: \"Op 1\", key: \"op1\", type: "
            "\"log\"}, {name: \"Op 2\", key: \"op2\", type: \"transform\"}]}"
        ),
        input_model=CreateOperationsInput,
        toolsets=OPERATION_TOOLSETS,
        handler=lambda client, args: client.operations.bulk_create(args.payload()["operations"]),
    ),
    data_tool(
        name="update_operation",
        description=(
            "Update an existing operation in Directus. Provide the operation ID and fields to "
            "update. Example: {id: \"operation-uuid\", name: \"Updated Operation Name\", position_x: 24}"
        ),
        input_model=UpdateOperationInput,
        toolsets=OPERATION_TOOLSETS,
        handler=lambda client, args: client.operations.update(
            args.id, args.payload(exclude={"id"})
        ),
    ),
    data_tool(
        name="update_operations",
        description=(
            "Update multiple operations in Directus at once. Each operation must include an id "
            "field. Example: {operations: [{id: \"uuid-1\", position_x: 10}, {id: \"uuid-2\", position_y: 20}]}"
        ),
        input_model=UpdateOperationsInput,
        toolsets=OPERATION_TOOLSETS,
        handler=lambda client, args: client.operations.bulk_update(args.payload()["operations"]),
    ),
    action_tool(
        name="delete_operation",
        description="Delete an operation from Directus by ID. This action cannot be undone.",
        input_model=DeleteOperationInput,
        toolsets=OPERATION_TOOLSETS,
        handler=lambda client, args: client.operations.delete(args.id),
        success_message=lambda args: f"Operation {args.id} deleted successfully",
    ),
    action_tool(
        name="delete_operations",
        description=(
            "Delete multiple operations from Directus at once by their IDs. This action cannot be "
            "undone. Example: {ids: [\"uuid-1\", \"uuid-2\", \"uuid-3\"]}"
        ),
        input_model=DeleteOperationsInput,
        toolsets=OPERATION_TOOLSETS,
        handler=lambda client, args: client.operations.bulk_delete(args.ids),
        success_message=lambda args: f"{len(args.ids)} operations deleted successfully",
    ),
)
