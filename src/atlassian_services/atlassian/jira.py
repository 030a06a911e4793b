"""Jira Cloud platform REST API services.

Version 2 (rich text) and version 3 (Atlassian Document Format) share the
same operations; the client's ``version`` selects the API path and the
tracing module.

Example:
    from atlassian_services.atlassian.jira import JiraClient

    with JiraClient(version="3") as jira:
        issues, response = jira.search.get("project = ITI", fields=["summary"])
"""

from typing import Any

from atlassian_services.atlassian.base import ProductClient
from atlassian_services.core.exceptions import (
    ERR_NO_ACCOUNT_ID,
    ERR_NO_COMMENT_ID,
    ERR_NO_ISSUE_KEY_OR_ID,
    ERR_NO_JQL,
)
from atlassian_services.core.interfaces import Connector
from atlassian_services.core.models import (
    IssueCommentPageScheme,
    IssueMatchesPageScheme,
    IssueScheme,
    IssueSearchCheckPayloadScheme,
    IssueSearchScheme,
    ResponseScheme,
)
from atlassian_services.core.query import Query, endpoint_with_query
from atlassian_services.core.registry import register_client
from atlassian_services.core.service import Service
from atlassian_services.core.tracing import ModuleTracer

TRACER_NAME = "atlassian_services.jira"
SUPPORTED_VERSIONS = ("2", "3")


class JiraService(Service):
    """Service bound to one Jira platform API version."""

    def __init__(self, connector: Connector, tracer: ModuleTracer, version: str) -> None:
        super().__init__(connector, tracer)
        self._version = version

    @property
    def _api(self) -> str:
        return f"rest/api/{self._version}"


class SearchService(JiraService):
    """JQL search."""

    def checks(
        self, payload: IssueSearchCheckPayloadScheme
    ) -> tuple[IssueMatchesPageScheme, ResponseScheme]:
        """Check whether issues would be returned by JQL queries.

        POST /rest/api/{2-3}/jql/match
        """
        return self._execute(
            "search.checks",
            "POST",
            f"{self._api}/jql/match",
            payload=payload,
            schema=IssueMatchesPageScheme,
        )

    def get(
        self,
        jql: str,
        next_page_token: str | None = None,
        max_results: int = 50,
        fields: list[str] | None = None,
        expands: list[str] | None = None,
        properties: list[str] | None = None,
        fields_by_key: bool = False,
        fail_fast: bool = False,
        reconcile_issues: list[int] | None = None,
    ) -> tuple[IssueSearchScheme, ResponseScheme]:
        """Search issues with JQL using GET.

        GET /rest/api/{2-3}/search/jql

        Args:
            jql: JQL query
            next_page_token: Token of the page to fetch (first page if None)
            max_results: Page size
            fields: Fields to return
            expands: Properties to expand
            properties: Issue properties to return
            fields_by_key: Reference fields by key instead of ID
            fail_fast: Fail early when field data cannot be retrieved
            reconcile_issues: Issue IDs to reconcile with recent writes

        Returns:
            Tuple of search results and response envelope

        Raises:
            MissingParameterError: ERR_NO_JQL
        """
        query = Query().add("jql", jql)
        if next_page_token is not None:
            query.add("nextPageToken", next_page_token)
        (
            query.add("maxResults", max_results)
            .add("fieldsByKey", fields_by_key)
            .add("failFast", fail_fast)
            .add_list("expand", expands)
            .add_list("fields", fields)
            .add_list("properties", properties)
            .add_list("reconcileIssues", reconcile_issues)
        )

        return self._execute(
            "search.get",
            "GET",
            endpoint_with_query(f"{self._api}/search/jql", query),
            required=[(jql, ERR_NO_JQL)],
            schema=IssueSearchScheme,
            attributes={"search.jql": jql, "pagination.limit": max_results},
        )

    def post(
        self,
        jql: str,
        next_page_token: str | None = None,
        max_results: int = 50,
        fields: list[str] | None = None,
        expands: list[str] | None = None,
        properties: list[str] | None = None,
        fields_by_key: bool = False,
        fail_fast: bool = False,
        reconcile_issues: list[int] | None = None,
    ) -> tuple[IssueSearchScheme, ResponseScheme]:
        """Search issues with JQL using POST.

        Empty values are left out of the request body.

        POST /rest/api/{2-3}/search/jql
        """
        payload: dict[str, Any] = {
            "jql": jql,
            "nextPageToken": next_page_token,
            "maxResults": max_results,
            "fields": fields,
            "expand": expands,
            "properties": properties,
            "fieldsByKey": fields_by_key,
            "failFast": fail_fast,
            "reconcileIssues": reconcile_issues,
        }

        return self._execute(
            "search.post",
            "POST",
            f"{self._api}/search/jql",
            required=[(jql, ERR_NO_JQL)],
            payload={key: value for key, value in payload.items() if value},
            schema=IssueSearchScheme,
            attributes={"search.jql": jql, "pagination.limit": max_results},
        )


class IssueService(JiraService):
    """Issues."""

    def get(
        self,
        issue_key_or_id: str,
        fields: list[str] | None = None,
        expand: list[str] | None = None,
    ) -> tuple[IssueScheme, ResponseScheme]:
        """GET /rest/api/{2-3}/issue/{issueIdOrKey}"""
        query = Query().add_list("fields", fields).add_list("expand", expand)
        return self._execute(
            "issue.get",
            "GET",
            endpoint_with_query(f"{self._api}/issue/{issue_key_or_id}", query),
            required=[(issue_key_or_id, ERR_NO_ISSUE_KEY_OR_ID)],
            schema=IssueScheme,
            attributes={"issue.key": issue_key_or_id},
        )

    def delete(self, issue_key_or_id: str, delete_subtasks: bool = False) -> ResponseScheme:
        """DELETE /rest/api/{2-3}/issue/{issueIdOrKey}"""
        query = Query().add("deleteSubtasks", delete_subtasks)
        _, response = self._execute(
            "issue.delete",
            "DELETE",
            endpoint_with_query(f"{self._api}/issue/{issue_key_or_id}", query),
            required=[(issue_key_or_id, ERR_NO_ISSUE_KEY_OR_ID)],
            attributes={"issue.key": issue_key_or_id},
        )
        return response

    def assign(self, issue_key_or_id: str, account_id: str) -> ResponseScheme:
        """Assign an issue to a user.

        PUT /rest/api/{2-3}/issue/{issueIdOrKey}/assignee
        """
        _, response = self._execute(
            "issue.assign",
            "PUT",
            f"{self._api}/issue/{issue_key_or_id}/assignee",
            required=[
                (issue_key_or_id, ERR_NO_ISSUE_KEY_OR_ID),
                (account_id, ERR_NO_ACCOUNT_ID),
            ],
            payload={"accountId": account_id},
            attributes={"issue.key": issue_key_or_id},
        )
        return response


class CommentService(JiraService):
    """Issue comments."""

    def gets(
        self,
        issue_key_or_id: str,
        order_by: str = "",
        expand: list[str] | None = None,
        start_at: int = 0,
        max_results: int = 50,
    ) -> tuple[IssueCommentPageScheme, ResponseScheme]:
        """GET /rest/api/{2-3}/issue/{issueIdOrKey}/comment"""
        query = (
            Query()
            .add("startAt", start_at)
            .add("maxResults", max_results)
            .add_optional("orderBy", order_by)
            .add_list("expand", expand)
        )
        return self._execute(
            "issue.comment.gets",
            "GET",
            endpoint_with_query(f"{self._api}/issue/{issue_key_or_id}/comment", query),
            required=[(issue_key_or_id, ERR_NO_ISSUE_KEY_OR_ID)],
            schema=IssueCommentPageScheme,
            attributes={
                "issue.key": issue_key_or_id,
                "pagination.start": start_at,
                "pagination.limit": max_results,
            },
        )

    def delete(self, issue_key_or_id: str, comment_id: str) -> ResponseScheme:
        """DELETE /rest/api/{2-3}/issue/{issueIdOrKey}/comment/{id}"""
        _, response = self._execute(
            "issue.comment.delete",
            "DELETE",
            f"{self._api}/issue/{issue_key_or_id}/comment/{comment_id}",
            required=[
                (issue_key_or_id, ERR_NO_ISSUE_KEY_OR_ID),
                (comment_id, ERR_NO_COMMENT_ID),
            ],
        )
        return response


@register_client("jira")
class JiraClient(ProductClient):
    """Jira platform client.

    Attributes:
        version: API version ('2' or '3')
        search: JQL search
        issue: Issues
        comment: Issue comments
    """

    provider_name = "jira"
    tracer_name = TRACER_NAME

    def __init__(self, config: dict[str, Any] | None = None, version: str = "3", **kwargs: Any):
        """Initialize the Jira client.

        Args:
            config: Configuration dictionary (for registry compatibility)
            version: API version ('2' or '3')
            **kwargs: Additional arguments passed to ProductClient

        Raises:
            ValueError: If the version is not supported
        """
        if config:
            config = dict(config)
            version = str(config.pop("version", version))
        if version not in SUPPORTED_VERSIONS:
            raise ValueError(f"Unsupported Jira API version: {version}")

        self.version = version
        self.module = f"jira.v{version}"
        self.tracer_name = f"{TRACER_NAME}.v{version}"
        super().__init__(config, **kwargs)

    def _init_services(self) -> None:
        self.search = SearchService(self.connector, self.tracer, self.version)
        self.issue = IssueService(self.connector, self.tracer, self.version)
        self.comment = CommentService(self.connector, self.tracer, self.version)
