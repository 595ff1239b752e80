"""
Schema tools: collections, fields, relations, and schema snapshots/diffs.

Collections, fields and relations are everyday data-modeling work and sit in
the "default" toolset as well as their own narrow toolset. Snapshot, diff and
apply are admin-only migration tools and are only exposed with "schema".
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from directus_mcp.errors import ResourceNotFoundError
from directus_mcp.tools.base import action_tool, data_tool
from directus_mcp.tools.validators import (
    CollectionName,
    ExportFormat,
    NonEmptyStr,
    ReferentialAction,
    ToolInput,
)

COLLECTION_TOOLSETS = ("default", "collections")
FIELD_TOOLSETS = ("default", "fields")
RELATION_TOOLSETS = ("default", "relations")
SCHEMA_TOOLSETS = ("schema",)


# ---------------------------------------------------------------------------
# Input models
# ---------------------------------------------------------------------------


class CollectionMeta(BaseModel):
    icon: str | None = Field(None, description="Icon name for the collection")
    note: str | None = Field(None, description="Description or note about the collection")
    singleton: bool | None = Field(None, description="Whether this is a singleton collection")
    hidden: bool | None = Field(None, description="Whether to hide this collection in the app")
    translations: Any = Field(None, description="Translation configuration")


class CollectionSchema(BaseModel):
    name: str | None = Field(None, description="Database table name")
    comment: str | None = Field(None, description="Database table comment")


class NoInput(ToolInput):
    pass


class CollectionInput(ToolInput):
    collection: CollectionName


class CreateCollectionInput(ToolInput):
    collection: Annotated[NonEmptyStr, Field(description="Collection name (table name)")]
    meta: CollectionMeta | None = Field(None, description="Collection metadata")
    schema_: CollectionSchema | None = Field(
        None, alias="schema", description="Database schema configuration"
    )
    fields: list[dict[str, Any]] | None = Field(
        None, description="Fields to create with the collection"
    )


class UpdateCollectionInput(ToolInput):
    collection: Annotated[NonEmptyStr, Field(description="Collection name to update")]
    meta: CollectionMeta | None = Field(None, description="Metadata to update")


class FieldMeta(BaseModel):
    interface: str | None = Field(None, description="Interface type (input, select, datetime, etc.)")
    options: Any = Field(None, description="Interface-specific options")
    special: list[str] | None = Field(
        None, description="Special field types (uuid, date-created, user-created, etc.)"
    )
    required: bool | None = Field(None, description="Whether field is required")
    readonly: bool | None = Field(None, description="Whether field is read-only")
    hidden: bool | None = Field(None, description="Whether field is hidden")
    note: str | None = Field(None, description="Field description or note")
    sort: int | None = Field(None, description="Field sort order")
    width: str | None = Field(None, description="Field width in forms (full, half, etc.)")


class FieldSchema(BaseModel):
    default_value: Any = Field(None, description="Default value for the field")
    max_length: int | None = Field(None, description="Maximum length for string fields")
    is_nullable: bool | None = Field(None, description="Whether field can be null")
    is_unique: bool | None = Field(None, description="Whether field must be unique")


class FieldInput(ToolInput):
    collection: Annotated[NonEmptyStr, Field(description="Collection name")]
    field: Annotated[NonEmptyStr, Field(description="Field name")]


class CreateFieldInput(FieldInput):
    type: str = Field(
        description="Field type (string, integer, text, boolean, json, uuid, timestamp, etc.)"
    )
    meta: FieldMeta | None = Field(None, description="Field metadata")
    schema_: FieldSchema | None = Field(
        None, alias="schema", description="Database schema configuration"
    )


class UpdateFieldInput(FieldInput):
    type: str | None = Field(None, description="Field type")
    meta: dict[str, Any] | None = Field(None, description="Field metadata to update")
    schema_: dict[str, Any] | None = Field(
        None, alias="schema", description="Database schema to update"
    )


class RelationMeta(BaseModel):
    one_field: str | None = Field(
        None, description="Field name in the related collection (for O2M)"
    )
    sort_field: str | None = Field(None, description="Field to use for sorting")
    one_deselect_action: Literal["nullify", "delete"] | None = Field(
        None, description="Action when deselecting"
    )


class RelationSchema(BaseModel):
    on_delete: ReferentialAction | None = Field(None, description="Action on delete")
    on_update: ReferentialAction | None = Field(None, description="Action on update")


class CreateRelationInput(ToolInput):
    collection: Annotated[
        NonEmptyStr, Field(description="Many collection (the collection with the foreign key)")
    ]
    field: Annotated[NonEmptyStr, Field(description="Field name in the many collection")]
    related_collection: str | None = Field(
        None, description="One collection (the related collection)"
    )
    meta: RelationMeta | None = Field(None, description="Relation metadata")
    schema_: RelationSchema | None = Field(
        None, alias="schema", description="Database relation configuration"
    )


class GetRelationInput(ToolInput):
    id: int = Field(description="Relation ID")


class SnapshotInput(ToolInput):
    export: ExportFormat | None = Field(None, description="Export format for the snapshot file")


class SchemaSnapshot(BaseModel):
    version: int | None = Field(None, description="Schema version")
    directus: str | None = Field(None, description="Directus version")
    vendor: str | None = Field(None, description="Database vendor")
    collections: list[Any] = Field(description="Array of collection definitions")
    fields: list[Any] = Field(description="Array of field definitions")
    relations: list[Any] = Field(description="Array of relation definitions")


class SchemaDiffInput(ToolInput):
    snapshot: SchemaSnapshot = Field(description="Schema snapshot to compare against")
    force: bool | None = Field(
        None, description="Bypass version and database vendor restrictions"
    )


class SchemaDiffBody(BaseModel):
    collections: list[Any] | None = Field(None, description="Collection differences")
    fields: list[Any] | None = Field(None, description="Field differences")
    relations: list[Any] | None = Field(None, description="Relation differences")


class ApplySchemaDiffInput(ToolInput):
    hash: str | None = Field(None, description="Hash of the schema snapshot")
    diff: SchemaDiffBody = Field(description="Schema difference to apply")


# ---------------------------------------------------------------------------
# Handlers that do more than forward a call
# ---------------------------------------------------------------------------


async def _create_collection(client, args: CreateCollectionInput):
    payload = args.payload()
    # Without schema.name Directus creates a folder instead of a table.
    schema = payload.get("schema") or {}
    if not schema.get("name"):
        schema["name"] = args.collection
    payload["schema"] = schema
    return await client.collections.create(payload)


async def _delete_relation(client, args: FieldInput):
    relations = await client.relations.list()
    for relation in relations.get("data") or []:
        if relation.get("collection") == args.collection and relation.get("field") == args.field:
            relation_id = relation.get("id") or (relation.get("meta") or {}).get("id")
            if relation_id is None:
                raise ResourceNotFoundError(f"Relation for {args.collection}.{args.field} has no id")
            return await client.relations.delete(relation_id)
    raise ResourceNotFoundError(f"Relation not found for {args.collection}.{args.field}")


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

SCHEMA_TOOLS = (
    # --- Collections ---
    data_tool(
        name="list_collections",
        description="List all collections in the Directus instance. Returns collection names, metadata, and schema information.",
        input_model=NoInput,
        toolsets=COLLECTION_TOOLSETS,
        handler=lambda client, args: client.collections.list(),
    ),
    data_tool(
        name="get_collection",
        description="Get detailed information about a specific collection including metadata and schema configuration.",
        input_model=CollectionInput,
        toolsets=COLLECTION_TOOLSETS,
        handler=lambda client, args: client.collections.get(args.collection),
    ),
    data_tool(
        name="create_collection",
        description=(
            "Create a new collection (database table) in Directus. Automatically creates a proper "
            "database table with schema. Can include initial fields. Example: {collection: \"articles\", "
            "meta: {icon: \"article\", note: \"Blog articles\"}, fields: [{field: \"id\", type: \"integer\", "
            "schema: {is_primary_key: true, has_auto_increment: true}}, {field: \"title\", type: \"string\"}]}"
        ),
        input_model=CreateCollectionInput,
        toolsets=COLLECTION_TOOLSETS,
        handler=_create_collection,
    ),
    data_tool(
        name="update_collection",
        description="Update collection metadata such as icon, note, visibility settings, etc.",
        input_model=UpdateCollectionInput,
        toolsets=COLLECTION_TOOLSETS,
        handler=lambda client, args: client.collections.update(
            args.collection, args.payload(exclude={"collection"})
        ),
    ),
    action_tool(
        name="delete_collection",
        description="Delete a collection and all its data. This action cannot be undone. Use with caution.",
        input_model=CollectionInput,
        toolsets=COLLECTION_TOOLSETS,
        handler=lambda client, args: client.collections.delete(args.collection),
        success_message=lambda args: f'Collection "{args.collection}" deleted successfully',
    ),
    # --- Fields ---
    data_tool(
        name="list_fields",
        description="List all fields in a specific collection with their types, metadata, and schema configuration.",
        input_model=CollectionInput,
        toolsets=FIELD_TOOLSETS,
        handler=lambda client, args: client.fields(args.collection).list(),
    ),
    data_tool(
        name="get_field",
        description="Get a single field of a collection with its type, metadata, and schema configuration.",
        input_model=FieldInput,
        toolsets=FIELD_TOOLSETS,
        handler=lambda client, args: client.fields(args.collection).get(args.field),
    ),
    data_tool(
        name="create_field",
        description=(
            "Add a new field to a collection. Specify field type, interface, and constraints. "
            "Example: {collection: \"articles\", field: \"status\", type: \"string\", meta: {interface: "
            "\"select-dropdown\", options: {choices: [{text: \"Draft\", value: \"draft\"}, {text: "
            "\"Published\", value: \"published\"}]}, required: true}}"
        ),
        input_model=CreateFieldInput,
        toolsets=FIELD_TOOLSETS,
        handler=lambda client, args: client.fields(args.collection).create(
            args.payload(exclude={"collection"})
        ),
    ),
    data_tool(
        name="update_field",
        description="Update field properties such as metadata, interface options, or schema constraints.",
        input_model=UpdateFieldInput,
        toolsets=FIELD_TOOLSETS,
        handler=lambda client, args: client.fields(args.collection).update(
            args.field, args.payload(exclude={"collection", "field"})
        ),
    ),
    action_tool(
        name="delete_field",
        description="Remove a field from a collection. This will delete the column and all its data. Use with caution.",
        input_model=FieldInput,
        toolsets=FIELD_TOOLSETS,
        handler=lambda client, args: client.fields(args.collection).delete(args.field),
        success_message=lambda args: f'Field "{args.field}" deleted from collection "{args.collection}"',
    ),
    # --- Relations ---
    data_tool(
        name="list_relations",
        description="List all relations (foreign keys, M2O, O2M, M2M) in the Directus instance.",
        input_model=NoInput,
        toolsets=RELATION_TOOLSETS,
        handler=lambda client, args: client.relations.list(),
    ),
    data_tool(
        name="get_relation",
        description="Get a single relation by its numeric ID.",
        input_model=GetRelationInput,
        toolsets=RELATION_TOOLSETS,
        handler=lambda client, args: client.relations.get(args.id),
    ),
    data_tool(
        name="create_relation",
        description=(
            "Create a relation between collections (M2O, O2M, or M2M). For M2O: specify collection, "
            "field, and related_collection. For O2M: also include meta.one_field. Example M2O: "
            "{collection: \"articles\", field: \"author\", related_collection: \"users\"}"
        ),
        input_model=CreateRelationInput,
        toolsets=RELATION_TOOLSETS,
        handler=lambda client, args: client.relations.create(args.payload()),
    ),
    action_tool(
        name="delete_relation",
        description="Delete a relation. Specify the collection and field that contains the relation.",
        input_model=FieldInput,
        toolsets=RELATION_TOOLSETS,
        handler=_delete_relation,
        success_message=lambda args: f'Relation for "{args.collection}.{args.field}" deleted successfully',
    ),
    # --- Schema snapshots ---
    data_tool(
        name="get_schema_snapshot",
        description=(
            "Get a complete schema snapshot of the Directus instance including all collections, "
            "fields, and relations. Optionally export to a file format (csv, json, xml, yaml)."
        ),
        input_model=SnapshotInput,
        toolsets=SCHEMA_TOOLSETS,
        handler=lambda client, args: client.schema_snapshot(args.export),
    ),
    data_tool(
        name="get_schema_diff",
        description=(
            "Compare the current instance's schema against a schema snapshot and retrieve the "
            "difference. This endpoint is only available to admin users. Optionally bypass version "
            "and database vendor restrictions with force=true."
        ),
        input_model=SchemaDiffInput,
        toolsets=SCHEMA_TOOLSETS,
        handler=lambda client, args: client.schema_diff(
            args.snapshot.model_dump(exclude_unset=True), force=bool(args.force)
        ),
    ),
    data_tool(
        name="apply_schema_diff",
        description=(
            "Update the instance's schema by applying a diff previously retrieved via get_schema_diff. "
            "This endpoint is only available to admin users. The diff should include hash and diff "
            "object with collections, fields, and relations differences."
        ),
        input_model=ApplySchemaDiffInput,
        toolsets=SCHEMA_TOOLSETS,
        handler=lambda client, args: client.schema_apply(args.payload()),
    ),
)
