"""Bitbucket Cloud REST API services.

Bitbucket authenticates with a username and app password, passed as
``email`` and ``api_token``.
"""

from atlassian_services.atlassian.base import ProductClient
from atlassian_services.core.exceptions import ERR_NO_REPOSITORY, ERR_NO_WORKSPACE
from atlassian_services.core.models import RepositoryScheme, ResponseScheme, WorkspaceScheme
from atlassian_services.core.query import Query, endpoint_with_query
from atlassian_services.core.registry import register_client
from atlassian_services.core.service import Service

BITBUCKET_BASE_URL = "https://api.bitbucket.org"
BITBUCKET_API = "2.0"
TRACER_NAME = "atlassian_services.bitbucket"


class WorkspaceService(Service):
    def get(self, workspace: str) -> tuple[WorkspaceScheme, ResponseScheme]:
        """GET /2.0/workspaces/{workspace}"""
        return self._execute(
            "workspace.get",
            "GET",
            f"{BITBUCKET_API}/workspaces/{workspace}",
            required=[(workspace, ERR_NO_WORKSPACE)],
            schema=WorkspaceScheme,
            attributes={"workspace": workspace},
        )


class RepositoryService(Service):
    """Repositories of a workspace."""

    def get(self, workspace: str, repo_slug: str) -> tuple[RepositoryScheme, ResponseScheme]:
        """GET /2.0/repositories/{workspace}/{repo_slug}"""
        return self._execute(
            "repository.get",
            "GET",
            f"{BITBUCKET_API}/repositories/{workspace}/{repo_slug}",
            required=[
                (workspace, ERR_NO_WORKSPACE),
                (repo_slug, ERR_NO_REPOSITORY),
            ],
            schema=RepositoryScheme,
            attributes={"workspace": workspace, "repository": repo_slug},
        )

    def delete(self, workspace: str, repo_slug: str, redirect_to: str = "") -> ResponseScheme:
        """Delete a repository, optionally leaving a redirect to its new location.

        DELETE /2.0/repositories/{workspace}/{repo_slug}
        """
        query = Query().add_optional("redirect_to", redirect_to)
        _, response = self._execute(
            "repository.delete",
            "DELETE",
            endpoint_with_query(f"{BITBUCKET_API}/repositories/{workspace}/{repo_slug}", query),
            required=[
                (workspace, ERR_NO_WORKSPACE),
                (repo_slug, ERR_NO_REPOSITORY),
            ],
            attributes={"workspace": workspace, "repository": repo_slug},
        )
        return response


@register_client("bitbucket")
class BitbucketClient(ProductClient):
    """Bitbucket Cloud client.

    Attributes:
        workspace: Workspaces
        repository: Repositories
    """

    provider_name = "bitbucket"
    module = "bitbucket"
    tracer_name = TRACER_NAME
    default_base_url = BITBUCKET_BASE_URL

    def _init_services(self) -> None:
        self.workspace = WorkspaceService(self.connector, self.tracer)
        self.repository = RepositoryService(self.connector, self.tracer)
