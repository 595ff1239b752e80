"""
Shared pydantic building blocks for tool inputs.

Field types here carry their own descriptions, so a tool model only needs
`fields: Fields = None` to get both validation and a useful entry in the
tool's input schema. Query parameter models mirror the Directus global query
parameters and are dumped with build_query_string() in mind.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from directus_mcp.query import QUERY_KEYS

# ---------------------------------------------------------------------------
# Scalar types
# ---------------------------------------------------------------------------

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]
CollectionName = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1),
    Field(description="Collection name"),
]
ItemId = Annotated[str | int, Field(description="Item ID")]
Uuid = Annotated[str, StringConstraints(min_length=1), Field(description="UUID identifier")]
AnyRecord = dict[str, Any]

ExportFormat = Literal["csv", "json", "xml", "yaml"]
FlowTrigger = Literal["hook", "webhook", "operation", "schedule", "manual"]
FlowStatus = Literal["active", "inactive"]
HttpMethod = Literal["GET", "POST"]
ReferentialAction = Literal["CASCADE", "SET NULL", "RESTRICT", "NO ACTION"]
OperationType = Literal[
    "log",
    "mail",
    "notification",
    "create",
    "read",
    "request",
    "sleep",
    "transform",
    "trigger",
    "condition",
]

# ---------------------------------------------------------------------------
# Query parameters
# ---------------------------------------------------------------------------

Fields = Annotated[
    list[str] | None,
    Field(description='Fields to return (e.g., ["id", "title", "status"])'),
]
Filter = Annotated[
    dict[str, Any] | None,
    Field(
        description='Filter object using Directus filter syntax (e.g., {"status": {"_eq": "published"}})'
    ),
]
Search = Annotated[str | None, Field(description="Search query string")]
Sort = Annotated[
    list[str] | None,
    Field(description='Sort fields (prefix with - for descending, e.g., ["-date_created", "title"])'),
]
Limit = Annotated[int | None, Field(ge=0, description="Maximum number of items to return")]
Offset = Annotated[int | None, Field(ge=0, description="Number of items to skip")]
Page = Annotated[int | None, Field(ge=1, description="Page number (alternative to offset)")]
Aggregate = Annotated[
    dict[str, Any] | None,
    Field(description='Aggregation functions (e.g., {"count": "*"})'),
]
GroupBy = Annotated[list[str] | None, Field(alias="groupBy", description="Fields to group by")]
Deep = Annotated[dict[str, Any] | None, Field(description="Deep query for relational data")]
Meta = Annotated[str | None, Field(description="What metadata to return in the response")]


class ToolInput(BaseModel):
    """
    Base class for every tool input model.

    Unknown keys are ignored. Fields with an alias (groupBy, schema) accept
    both the alias and the Python name.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def payload(self, *, exclude: set[str] | None = None) -> dict[str, Any]:
        """The arguments the caller actually sent, keyed by their wire names."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude=exclude)

    def query_params(self) -> dict[str, Any]:
        """The subset of the input that belongs in the query string."""
        return {k: v for k, v in self.payload().items() if k in QUERY_KEYS}


class ListQuery(ToolInput):
    """Query parameters shared by list_* tools."""

    fields: Fields = None
    filter: Filter = None
    search: Search = None
    sort: Sort = None
    limit: Limit = None
    offset: Offset = None
    meta: Meta = None


class GetQuery(ToolInput):
    """Query parameters shared by get_* tools."""

    id: Uuid
    fields: Fields = None
    meta: Meta = None


class DeleteById(ToolInput):
    id: Uuid


class DeleteByIds(ToolInput):
    ids: Annotated[list[NonEmptyStr], Field(description="Array of IDs (UUIDs) to delete")]
