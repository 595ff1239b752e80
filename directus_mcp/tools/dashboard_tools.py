"""
Insights tools: dashboards and the panels placed on them.

Both live in the "dashboards" toolset. Panels are positioned on a grid of
workspace dots; positions start at 0 and sizes at 1.
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
    ToolInput,
    Uuid,
)

DASHBOARD_TOOLSETS = ("dashboards",)

GridPosition = Annotated[int, Field(ge=0)]
GridSize = Annotated[int, Field(ge=1)]


# ---------------------------------------------------------------------------
# Dashboards
# ---------------------------------------------------------------------------


class DashboardFields(ToolInput):
    icon: str | None = Field(None, description="Material design icon for the dashboard")
    note: str | None = Field(None, description="Descriptive text about the dashboard")
    color: str | None = Field(None, description="Accent color of the dashboard")


class GetDashboardInput(GetQuery):
    id: Annotated[Uuid, Field(description="Dashboard ID (UUID)")]


class CreateDashboardInput(DashboardFields):
    name: NonEmptyStr = Field(description="Name of the dashboard")


class CreateDashboardsInput(ToolInput):
    dashboards: list[CreateDashboardInput] = Field(description="Array of dashboards to create")


class UpdateDashboardInput(DashboardFields):
    id: Annotated[Uuid, Field(description="Dashboard ID (UUID) to update")]
    name: str | None = Field(None, description="Name of the dashboard")


class UpdateDashboardsInput(ToolInput):
    dashboards: list[UpdateDashboardInput] = Field(
        description="Array of dashboards to update (each must include id)"
    )


class DeleteDashboardInput(DeleteById):
    id: Annotated[Uuid, Field(description="Dashboard ID (UUID) to delete")]


class DeleteDashboardsInput(DeleteByIds):
    ids: list[str] = Field(description="Array of dashboard IDs (UUIDs) to delete")


# ---------------------------------------------------------------------------
# Panels
# ---------------------------------------------------------------------------


class PanelFields(ToolInput):
    icon: str | None = Field(None, description="Material design icon for the panel")
    color: str | None = Field(None, description="Accent color of the panel")
    show_header: bool | None = Field(
        None, description="Whether or not the header should be rendered for this panel"
    )
    note: str | None = Field(None, description="Description for the panel")
    options: AnyRecord | None = Field(None, description="Panel-specific options and configuration")


class GetPanelInput(GetQuery):
    id: Annotated[Uuid, Field(description="Panel ID (UUID)")]


class CreatePanelInput(PanelFields):
    dashboard: Uuid = Field(description="Dashboard where this panel is visible (UUID)")
    name: NonEmptyStr = Field(description="Name of the panel")
    type: NonEmptyStr = Field(
        description='The panel type used for this panel (e.g., "time-series", "metric", "label")'
    )
    position_x: GridPosition = Field(description="The X position on the workspace grid")
    position_y: GridPosition = Field(description="The Y position on the workspace grid")
    width: GridSize = Field(description="Width of the panel in number of workspace dots")
    height: GridSize = Field(description="Height of the panel in number of workspace dots")
    user_created: Uuid | None = Field(None, description="User that created the panel (UUID)")
    date_created: str | None = Field(None, description="When the panel was created (ISO 8601)")


class CreatePanelsInput(ToolInput):
    panels: list[CreatePanelInput] = Field(description="Array of panels to create")


class UpdatePanelInput(PanelFields):
    id: Annotated[Uuid, Field(description="Panel ID (UUID) to update")]
    dashboard: Uuid | None = Field(None, description="Dashboard where this panel is visible (UUID)")
    name: str | None = Field(None, description="Name of the panel")
    type: str | None = Field(None, description="The panel type used for this panel")
    position_x: GridPosition | None = Field(None, description="The X position on the workspace grid")
    position_y: GridPosition | None = Field(None, description="The Y position on the workspace grid")
    width: GridSize | None = Field(None, description="Width of the panel in number of workspace dots")
    height: GridSize | None = Field(None, description="Height of the panel in number of workspace dots")


class UpdatePanelsInput(ToolInput):
    panels: list[UpdatePanelInput] = Field(
        description="Array of panels to update (each must include id)"
    )


class DeletePanelInput(DeleteById):
    id: Annotated[Uuid, Field(description="Panel ID (UUID) to delete")]


class DeletePanelsInput(DeleteByIds):
    ids: list[str] = Field(description="Array of panel IDs (UUIDs) to delete")


DASHBOARD_TOOLS = (
    data_tool(
        name="list_dashboards",
        description=(
            "List all dashboards in the Insights module. Supports filtering, sorting, pagination, "
            "and search. Example: {sort: [\"name\"], limit: 20}"
        ),
        input_model=ListQuery,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.dashboards.list(args.query_params()),
    ),
    data_tool(
        name="get_dashboard",
        description=(
            "Get a single dashboard by ID. Optionally specify fields to return, e.g. "
            "[\"*\", \"panels.*\"] to include its panels."
        ),
        input_model=GetDashboardInput,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.dashboards.get(args.id, args.query_params()),
    ),
    data_tool(
        name="create_dashboard",
        description=(
            "Create a new dashboard in the Insights module. Example: {name: \"Sales\", icon: "
            "\"insights\", note: \"Monthly sales overview\"}"
        ),
        input_model=CreateDashboardInput,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.dashboards.create(args.payload()),
    ),
    data_tool(
        name="create_dashboards",
        description=(
            "Create multiple dashboards at once. Example: {dashboards: [{name: \"Sales\"}, {name: \"Support\"}]}"
        ),
        input_model=CreateDashboardsInput,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.dashboards.bulk_create(args.payload()["dashboards"]),
    ),
    data_tool(
        name="update_dashboard",
        description=(
            "Update an existing dashboard. Provide the dashboard ID and fields to update. "
            "Example: {id: \"dashboard-uuid\", name: \"Renamed Dashboard\"}"
        ),
        input_model=UpdateDashboardInput,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.dashboards.update(
            args.id, args.payload(exclude={"id"})
        ),
    ),
    data_tool(
        name="update_dashboards",
        description=(
            "Update multiple dashboards at once. Each dashboard must include an id field. "
            "Example: {dashboards: [{id: \"uuid-1\", color: \"#6644FF\"}, {id: \"uuid-2\", icon: \"star\"}]}"
        ),
        input_model=UpdateDashboardsInput,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.dashboards.bulk_update(args.payload()["dashboards"]),
    ),
    action_tool(
        name="delete_dashboard",
        description="Delete a dashboard and its panels by ID. This action cannot be undone.",
        input_model=DeleteDashboardInput,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.dashboards.delete(args.id),
        success_message=lambda args: f"Dashboard {args.id} deleted successfully",
    ),
    action_tool(
        name="delete_dashboards",
        description=(
            "Delete multiple dashboards at once by their IDs. This action cannot be undone. "
            "Example: {ids: [\"uuid-1\", \"uuid-2\"]}"
        ),
        input_model=DeleteDashboardsInput,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.dashboards.bulk_delete(args.ids),
        success_message=lambda args: f"{len(args.ids)} dashboards deleted successfully",
    ),
    data_tool(
        name="list_panels",
        description=(
            "List all panels that exist in Directus. Supports filtering, sorting, pagination, and "
            "search. Example: {filter: {\"dashboard\": {\"_eq\": \"dashboard-uuid\"}}, sort: "
            "[\"position_y\", \"position_x\"], limit: 20}"
        ),
        input_model=ListQuery,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.panels.list(args.query_params()),
    ),
    data_tool(
        name="get_panel",
        description=(
            "Get a single panel by ID from Directus. Optionally specify fields to return and "
            "metadata options."
        ),
        input_model=GetPanelInput,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.panels.get(args.id, args.query_params()),
    ),
    data_tool(
        name="create_panel",
        description=(
            "Create a new panel in Directus. Provide the panel data including dashboard, name, "
            "type, position, and dimensions. Example: {dashboard: \"dashboard-uuid\", name: \"Sales "
            "Chart\", type: \"time-series\", position_x: 0, position_y: 0, width: 6, height: 4}"
        ),
        input_model=CreatePanelInput,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.panels.create(args.payload()),
    ),
    data_tool(
        name="create_panels",
        description=(
            "Create multiple panels in Directus at once. More efficient than creating panels one "
            "by one. Example: {panels: [{dashboard: \"uuid-1\", name: \"Panel 1\", type: \"metric\", "
            "position_x: 0, position_y: 0, width: 3, height: 2}]}"
        ),
        input_model=CreatePanelsInput,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.panels.bulk_create(args.payload()["panels"]),
    ),
    data_tool(
        name="update_panel",
        description=(
            "Update an existing panel in Directus. Provide the panel ID and fields to update. "
            "Example: {id: \"panel-uuid\", name: \"Updated Panel Name\", position_x: 1, position_y: 2, width: 8}"
        ),
        input_model=UpdatePanelInput,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.panels.update(args.id, args.payload(exclude={"id"})),
    ),
    data_tool(
        name="update_panels",
        description=(
            "Update multiple panels in Directus at once. Each panel must include an id field. "
            "Example: {panels: [{id: \"uuid-1\", position_x: 2, width: 4}, {id: \"uuid-2\", height: 3}]}"
        ),
        input_model=UpdatePanelsInput,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.panels.bulk_update(args.payload()["panels"]),
    ),
    action_tool(
        name="delete_panel",
        description="Delete a panel from Directus by ID. This action cannot be undone.",
        input_model=DeletePanelInput,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.panels.delete(args.id),
        success_message=lambda args: f"Panel {args.id} deleted successfully",
    ),
    action_tool(
        name="delete_panels",
        description=(
            "Delete multiple panels from Directus at once by their IDs. This action cannot be "
            "undone. Example: {ids: [\"uuid-1\", \"uuid-2\", \"uuid-3\"]}"
        ),
        input_model=DeletePanelsInput,
        toolsets=DASHBOARD_TOOLSETS,
        handler=lambda client, args: client.panels.bulk_delete(args.ids),
        success_message=lambda args: f"{len(args.ids)} panels deleted successfully",
    ),
)
