"""
CRUD-shaped access to Directus resource endpoints.

Most Directus resources share the same five operations on a base path:

    list    GET    /<base>?<query>
    get     GET    /<base>/<id>?<query>
    create  POST   /<base>
    update  PATCH  /<base>/<id>
    delete  DELETE /<base>/<id>

Collections that accept batch writes also take an array body on the base path
itself (BulkResource). Resources with extra actions get their own subclass
(FlowsResource.trigger) so the action only exists where Directus supports it.
"""

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Literal, overload

from directus_mcp.query import build_query_string

if TYPE_CHECKING:
    from directus_mcp.client import DirectusClient

ItemId = str | int


class Resource:
    """The standard five operations on one base path."""

    def __init__(self, client: "DirectusClient", base_path: str):
        self.client = client
        self.base_path = base_path if base_path.startswith("/") else f"/{base_path}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.base_path!r})"

    async def list(self, params: Mapping[str, Any] | None = None) -> Any:
        return await self.client.request("GET", f"{self.base_path}{build_query_string(params)}")

    async def get(self, id: ItemId, params: Mapping[str, Any] | None = None) -> Any:
        return await self.client.request("GET", f"{self.base_path}/{id}{build_query_string(params)}")

    async def create(self, data: Any) -> Any:
        return await self.client.request("POST", self.base_path, data)

    async def update(self, id: ItemId, data: Any) -> Any:
        return await self.client.request("PATCH", f"{self.base_path}/{id}", data)

    async def delete(self, id: ItemId) -> Any:
        return await self.client.request("DELETE", f"{self.base_path}/{id}")


class BulkResource(Resource):
    """
    A resource whose base path also accepts array bodies.

    Directus reads an array body on the collection endpoint as a batch
    instruction: create all, update all (each entry carries its id), or
    delete all listed ids.
    """

    async def bulk_create(self, items: Sequence[Any]) -> Any:
        return await self.client.request("POST", self.base_path, list(items))

    async def bulk_update(self, items: Sequence[Any]) -> Any:
        return await self.client.request("PATCH", self.base_path, list(items))

    async def bulk_delete(self, ids: Sequence[ItemId]) -> Any:
        return await self.client.request("DELETE", self.base_path, list(ids))


class FlowsResource(BulkResource):
    """Flows: bulk CRUD plus webhook-style triggering."""

    async def trigger(
        self,
        flow_id: str,
        method: Literal["GET", "POST"] = "GET",
        data: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Run a flow with a webhook trigger.

        Query params (fields, meta) apply to both methods; the body is only
        sent for POST.
        """
        endpoint = f"{self.base_path}/trigger/{flow_id}{build_query_string(params)}"
        if method == "POST":
            return await self.client.request("POST", endpoint, data)
        return await self.client.request("GET", endpoint)


@overload
def make_resource(
    client: "DirectusClient", base_path: str, *, supports_bulk: Literal[True]
) -> BulkResource: ...


@overload
def make_resource(
    client: "DirectusClient", base_path: str, *, supports_bulk: Literal[False] = ...
) -> Resource: ...


def make_resource(
    client: "DirectusClient",
    base_path: str,
    *,
    supports_bulk: bool = False,
) -> Resource:
    """
    Build the operation set for one resource endpoint.

    Returns a BulkResource when supports_bulk is true, otherwise a plain
    Resource with no bulk_* operations at all.
    """
    if supports_bulk:
        return BulkResource(client, base_path)
    return Resource(client, base_path)
