"""Assets (JSM CMDB) REST API services.

Assets is served from the API gateway, scoped by workspace ID.
"""

from atlassian_services.atlassian.base import ProductClient
from atlassian_services.core.exceptions import (
    ERR_NO_AQL_QUERY,
    ERR_NO_OBJECT_ID,
    ERR_NO_WORKSPACE_ID,
)
from atlassian_services.core.models import ObjectListResultScheme, ObjectScheme, ResponseScheme
from atlassian_services.core.query import Query, endpoint_with_query
from atlassian_services.core.registry import register_client
from atlassian_services.core.service import Service

ASSETS_BASE_URL = "https://api.atlassian.com"
TRACER_NAME = "atlassian_services.assets"


def _workspace_api(workspace_id: str) -> str:
    return f"jsm/assets/workspace/{workspace_id}/v1"


class ObjectService(Service):
    """Assets objects."""

    def get(self, workspace_id: str, object_id: str) -> tuple[ObjectScheme, ResponseScheme]:
        """GET /jsm/assets/workspace/{workspaceId}/v1/object/{id}"""
        return self._execute(
            "object.get",
            "GET",
            f"{_workspace_api(workspace_id)}/object/{object_id}",
            required=[
                (workspace_id, ERR_NO_WORKSPACE_ID),
                (object_id, ERR_NO_OBJECT_ID),
            ],
            schema=ObjectScheme,
            attributes={"object.id": object_id},
        )

    def delete(self, workspace_id: str, object_id: str) -> ResponseScheme:
        """DELETE /jsm/assets/workspace/{workspaceId}/v1/object/{id}"""
        _, response = self._execute(
            "object.delete",
            "DELETE",
            f"{_workspace_api(workspace_id)}/object/{object_id}",
            required=[
                (workspace_id, ERR_NO_WORKSPACE_ID),
                (object_id, ERR_NO_OBJECT_ID),
            ],
            attributes={"object.id": object_id},
        )
        return response

    def search(
        self,
        workspace_id: str,
        aql: str,
        start_at: int = 0,
        max_results: int = 25,
        include_attributes: bool = True,
    ) -> tuple[ObjectListResultScheme, ResponseScheme]:
        """Find objects with an AQL query.

        POST /jsm/assets/workspace/{workspaceId}/v1/object/aql

        Args:
            workspace_id: Assets workspace ID
            aql: AQL query (e.g. 'objectType = "Laptop"')
            start_at: Index of the first object
            max_results: Page size
            include_attributes: Return object attributes
        """
        query = (
            Query()
            .add("startAt", start_at)
            .add("maxResults", max_results)
            .add("includeAttributes", include_attributes)
        )
        return self._execute(
            "object.search",
            "POST",
            endpoint_with_query(f"{_workspace_api(workspace_id)}/object/aql", query),
            required=[
                (workspace_id, ERR_NO_WORKSPACE_ID),
                (aql, ERR_NO_AQL_QUERY),
            ],
            payload={"qlQuery": aql},
            schema=ObjectListResultScheme,
            attributes={"pagination.start": start_at, "pagination.limit": max_results},
        )


@register_client("assets")
class AssetsClient(ProductClient):
    """Assets client.

    Attributes:
        object: Objects
    """

    provider_name = "assets"
    module = "assets"
    tracer_name = TRACER_NAME
    default_base_url = ASSETS_BASE_URL

    def _init_services(self) -> None:
        self.object = ObjectService(self.connector, self.tracer)
