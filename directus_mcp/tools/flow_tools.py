"""
Flow tools: manage Directus automation flows and trigger webhook flows.

Flows are only exposed when the "flow" toolset is enabled.
"""

from typing import Annotated, Any

from pydantic import Field

from directus_mcp.tools.base import action_tool, data_tool
from directus_mcp.tools.validators import (
    AnyRecord,
    DeleteByIds,
    FlowStatus,
    FlowTrigger,
    HttpMethod,
    ListQuery,
    Meta,
    NonEmptyStr,
    ToolInput,
    Uuid,
)

FLOW_TOOLSETS = ("flow",)

ACCOUNTABILITY_DESCRIPTION = (
    "The permission used during the flow. One of $public, $trigger, $full, or UUID of a role"
)


class ListFlowsInput(ListQuery):
    fields: Annotated[
        list[str] | None, Field(description='Fields to return (e.g., ["id", "name", "status"])')
    ] = None
    filter: Annotated[
        dict[str, Any] | None,
        Field(
            description='Filter object using Directus filter syntax (e.g., {"status": {"_eq": "active"}})'
        ),
    ] = None
    limit: Annotated[int | None, Field(ge=0, description="Maximum number of flows to return")] = None
    offset: Annotated[int | None, Field(ge=0, description="Number of flows to skip")] = None


class GetFlowInput(ToolInput):
    id: Annotated[Uuid, Field(description="Flow ID (UUID)")]
    fields: Annotated[list[str] | None, Field(description="Fields to return")] = None
    meta: Meta = None


class FlowFields(ToolInput):
    icon: str | None = Field(None, description="Icon displayed in the Admin App for the flow")
    color: str | None = Field(
        None, description="Color of the icon displayed in the Admin App for the flow"
    )
    description: str | None = Field(None, description="Description of the flow")
    status: FlowStatus | None = Field(None, description="Current status of the flow")
    accountability: str | None = Field(None, description=ACCOUNTABILITY_DESCRIPTION)
    options: AnyRecord | None = Field(
        None, description="Options of the selected trigger for the flow"
    )
    operation: str | None = Field(
        None, description="UUID of the operation connected to the trigger in the flow"
    )


class CreateFlowInput(FlowFields):
    name: NonEmptyStr = Field(description="The name of the flow")
    trigger: FlowTrigger = Field(description="Type of trigger for the flow")


class CreateFlowsInput(ToolInput):
    flows: list[CreateFlowInput] = Field(description="Array of flows to create")


class UpdateFlowInput(FlowFields):
    id: Annotated[Uuid, Field(description="Flow ID (UUID) to update")]
    name: str | None = Field(None, description="The name of the flow")
    trigger: FlowTrigger | None = Field(None, description="Type of trigger for the flow")


class UpdateFlowsInput(ToolInput):
    flows: list[UpdateFlowInput] = Field(
        description="Array of flows to update (each must include id)"
    )


class DeleteFlowInput(ToolInput):
    id: Annotated[Uuid, Field(description="Flow ID (UUID) to delete")]


class DeleteFlowsInput(DeleteByIds):
    ids: list[str] = Field(description="Array of flow IDs (UUIDs) to delete")


class TriggerFlowInput(ToolInput):
    id: Annotated[Uuid, Field(description="Flow ID (UUID) to trigger")]
    method: HttpMethod = Field(
        "GET", description="HTTP method for triggering the flow (GET or POST)"
    )
    data: AnyRecord | None = Field(
        None, description="Payload for POST request (only used when method is POST)"
    )
    fields: Annotated[list[str] | None, Field(description="Fields to return")] = None
    meta: Meta = None


def _trigger_flow(client, args: TriggerFlowInput):
    return client.flows.trigger(
        args.id,
        method=args.method,
        data=args.data if args.method == "POST" else None,
        params=args.query_params() or None,
    )


FLOW_TOOLS = (
    data_tool(
        name="list_flows",
        description=(
            "List all flows that exist in Directus. Supports filtering, sorting, pagination, and "
            "search. Example: {filter: {\"status\": {\"_eq\": \"active\"}}, sort: [\"-date_created\"], limit: 10}"
        ),
        input_model=ListFlowsInput,
        toolsets=FLOW_TOOLSETS,
        handler=lambda client, args: client.flows.list(args.query_params()),
    ),
    data_tool(
        name="get_flow",
        description=(
            "Get a single flow by ID from Directus. Optionally specify fields to return and "
            "metadata options."
        ),
        input_model=GetFlowInput,
        toolsets=FLOW_TOOLSETS,
        handler=lambda client, args: client.flows.get(args.id, args.query_params()),
    ),
    data_tool(
        name="create_flow",
        description=(
            "Create a new flow in Directus. Provide the flow data including name, trigger type, and "
            "optional configuration. Example: {name: \"Update Articles Flow\", trigger: \"manual\", "
            "status: \"active\", accountability: \"$trigger\"}"
        ),
        input_model=CreateFlowInput,
        toolsets=FLOW_TOOLSETS,
        handler=lambda client, args: client.flows.create(args.payload()),
    ),
    data_tool(
        name="create_flows",
        description=(
            "Create multiple flows in Directus at once. More efficient than creating flows one by "
            "one. Example: {flows: [{name: \"Flow 1\", trigger: \"manual\"}, {name: \"Flow 2\", "
            "trigger: \"webhook\"}]}"
        ),
        input_model=CreateFlowsInput,
        toolsets=FLOW_TOOLSETS,
        handler=lambda client, args: client.flows.bulk_create(args.payload()["flows"]),
    ),
    data_tool(
        name="update_flow",
        description=(
            "Update an existing flow in Directus. Provide the flow ID and fields to update. "
            "Example: {id: \"flow-uuid\", status: \"inactive\", name: \"Updated Flow Name\"}"
        ),
        input_model=UpdateFlowInput,
        toolsets=FLOW_TOOLSETS,
        handler=lambda client, args: client.flows.update(args.id, args.payload(exclude={"id"})),
    ),
    data_tool(
        name="update_flows",
        description=(
            "Update multiple flows in Directus at once. Each flow must include an id field. "
            "Example: {flows: [{id: \"uuid-1\", status: \"active\"}, {id: \"uuid-2\", status: \"inactive\"}]}"
        ),
        input_model=UpdateFlowsInput,
        toolsets=FLOW_TOOLSETS,
        handler=lambda client, args: client.flows.bulk_update(args.payload()["flows"]),
    ),
    action_tool(
        name="delete_flow",
        description="Delete a flow from Directus by ID. This action cannot be undone.",
        input_model=DeleteFlowInput,
        toolsets=FLOW_TOOLSETS,
        handler=lambda client, args: client.flows.delete(args.id),
        success_message=lambda args: f"Flow {args.id} deleted successfully",
    ),
    action_tool(
        name="delete_flows",
        description=(
            "Delete multiple flows from Directus at once by their IDs. This action cannot be "
            "undone. Example: {ids: [\"uuid-1\", \"uuid-2\", \"uuid-3\"]}"
        ),
        input_model=DeleteFlowsInput,
        toolsets=FLOW_TOOLSETS,
        handler=lambda client, args: client.flows.bulk_delete(args.ids),
        success_message=lambda args: f"{len(args.ids)} flows deleted successfully",
    ),
    data_tool(
        name="trigger_flow",
        description=(
            "Trigger a flow with GET or POST webhook trigger. For GET: {id: \"flow-uuid\", method: "
            "\"GET\"}. For POST: {id: \"flow-uuid\", method: \"POST\", data: {key: \"value\"}}"
        ),
        input_model=TriggerFlowInput,
        toolsets=FLOW_TOOLSETS,
        handler=_trigger_flow,
    ),
)
