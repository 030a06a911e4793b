"""Jira Software (Agile) REST API services."""

from atlassian_services.atlassian.base import ProductClient
from atlassian_services.core.exceptions import ERR_NO_BOARD_ID, ERR_NO_SPRINT_ID
from atlassian_services.core.models import (
    BoardIssuePageScheme,
    BoardScheme,
    ResponseScheme,
    SprintScheme,
)
from atlassian_services.core.query import Query, endpoint_with_query
from atlassian_services.core.registry import register_client
from atlassian_services.core.service import Service

AGILE_API = "rest/agile/1.0"
TRACER_NAME = "atlassian_services.jira.agile"


class BoardService(Service):
    """Scrum and kanban boards."""

    def get(self, board_id: int) -> tuple[BoardScheme, ResponseScheme]:
        """GET /rest/agile/1.0/board/{boardId}"""
        return self._execute(
            "board.get",
            "GET",
            f"{AGILE_API}/board/{board_id}",
            required=[(board_id, ERR_NO_BOARD_ID)],
            schema=BoardScheme,
            attributes={"board.id": board_id},
        )

    def issues(
        self,
        board_id: int,
        jql: str = "",
        fields: list[str] | None = None,
        expand: list[str] | None = None,
        start_at: int = 0,
        max_results: int = 50,
    ) -> tuple[BoardIssuePageScheme, ResponseScheme]:
        """Get the issues of a board, optionally filtered by JQL.

        GET /rest/agile/1.0/board/{boardId}/issue

        Args:
            board_id: Board ID
            jql: Extra JQL filter
            fields: Fields to return
            expand: Properties to expand
            start_at: Index of the first issue
            max_results: Page size
        """
        query = (
            Query()
            .add("startAt", start_at)
            .add("maxResults", max_results)
            .add_optional("jql", jql)
            .add_list("fields", fields)
            .add_list("expand", expand)
        )
        return self._execute(
            "board.issues",
            "GET",
            endpoint_with_query(f"{AGILE_API}/board/{board_id}/issue", query),
            required=[(board_id, ERR_NO_BOARD_ID)],
            schema=BoardIssuePageScheme,
            attributes={
                "board.id": board_id,
                "pagination.start": start_at,
                "pagination.limit": max_results,
            },
        )


class SprintService(Service):
    def get(self, sprint_id: int) -> tuple[SprintScheme, ResponseScheme]:
        """GET /rest/agile/1.0/sprint/{sprintId}"""
        return self._execute(
            "sprint.get",
            "GET",
            f"{AGILE_API}/sprint/{sprint_id}",
            required=[(sprint_id, ERR_NO_SPRINT_ID)],
            schema=SprintScheme,
        )


@register_client("agile")
class AgileClient(ProductClient):
    """Jira Software client.

    Attributes:
        board: Boards
        sprint: Sprints
    """

    provider_name = "agile"
    module = "jira.agile"
    tracer_name = TRACER_NAME

    def _init_services(self) -> None:
        self.board = BoardService(self.connector, self.tracer)
        self.sprint = SprintService(self.connector, self.tracer)
