"""Confluence Cloud REST API services (v1 and v2).

Example:
    from atlassian_services.atlassian.confluence import ConfluenceClient

    with ConfluenceClient() as confluence:
        page, response = confluence.comment.gets("83820565", expand=["body.storage"])
"""

from atlassian_services.atlassian.base import ProductClient
from atlassian_services.core.exceptions import (
    ERR_NO_CONTENT_ID,
    ERR_NO_CONTENT_TITLE,
    ERR_NO_PAGE_ID,
    ERR_NO_SPACE_ID,
    ERR_NO_TEMPLATE_ID,
)
from atlassian_services.core.models import (
    ContentCreateScheme,
    ContentPageScheme,
    ContentScheme,
    ContentTemplateScheme,
    CreateTemplateScheme,
    PageCreatePayloadScheme,
    PageScheme,
    ResponseScheme,
    SpaceScheme,
    UpdateTemplateScheme,
)
from atlassian_services.core.query import Query, endpoint_with_query
from atlassian_services.core.registry import register_client
from atlassian_services.core.service import Service

# Confluence REST API paths
CONFLUENCE_API_V1 = "wiki/rest/api"
CONFLUENCE_API_V2 = "wiki/api/v2"

TRACER_NAME = "atlassian_services.confluence"
TRACER_NAME_V2 = "atlassian_services.confluence.v2"


class CommentService(Service):
    """Comments attached to a piece of content."""

    def gets(
        self,
        content_id: str,
        expand: list[str] | None = None,
        location: list[str] | None = None,
        start_at: int = 0,
        max_results: int = 25,
    ) -> tuple[ContentPageScheme, ResponseScheme]:
        """Get the comments on a piece of content.

        GET /wiki/rest/api/content/{id}/child/comment

        Args:
            content_id: Content ID
            expand: Properties to expand (e.g. 'body.storage')
            location: Comment locations ('inline', 'footer', 'resolved')
            start_at: Index of the first comment
            max_results: Page size

        Returns:
            Tuple of comment page and response envelope

        Raises:
            MissingParameterError: ERR_NO_CONTENT_ID
        """
        query = (
            Query()
            .add("start", start_at)
            .add("limit", max_results)
            .add_list("expand", expand)
            .add_list("location", location)
        )

        return self._execute(
            "content.comment.gets",
            "GET",
            endpoint_with_query(f"{CONFLUENCE_API_V1}/content/{content_id}/child/comment", query),
            required=[(content_id, ERR_NO_CONTENT_ID)],
            schema=ContentPageScheme,
            attributes={
                "content.id": content_id,
                "pagination.start": start_at,
                "pagination.limit": max_results,
            },
        )


class TemplateService(Service):
    """Content templates."""

    def create(
        self, payload: CreateTemplateScheme
    ) -> tuple[ContentTemplateScheme, ResponseScheme]:
        """POST /wiki/rest/api/template"""
        return self._execute(
            "template.create",
            "POST",
            f"{CONFLUENCE_API_V1}/template",
            payload=payload,
            schema=ContentTemplateScheme,
        )

    def update(
        self, payload: UpdateTemplateScheme
    ) -> tuple[ContentTemplateScheme, ResponseScheme]:
        """PUT /wiki/rest/api/template"""
        return self._execute(
            "template.update",
            "PUT",
            f"{CONFLUENCE_API_V1}/template",
            required=[(payload.template_id, ERR_NO_TEMPLATE_ID)],
            payload=payload,
            schema=ContentTemplateScheme,
        )

    def get(self, template_id: str) -> tuple[ContentTemplateScheme, ResponseScheme]:
        """GET /wiki/rest/api/template/{contentTemplateId}"""
        return self._execute(
            "template.get",
            "GET",
            f"{CONFLUENCE_API_V1}/template/{template_id}",
            required=[(template_id, ERR_NO_TEMPLATE_ID)],
            schema=ContentTemplateScheme,
        )


class ContentService(Service):
    """Pages, blog posts and other content through the v1 API."""

    def get(
        self,
        content_id: str,
        expand: list[str] | None = None,
        version: int = 0,
    ) -> tuple[ContentScheme, ResponseScheme]:
        """Get a single piece of content.

        GET /wiki/rest/api/content/{id}

        Args:
            content_id: Content ID
            expand: Properties to expand
            version: Historical version to return (latest when 0)
        """
        query = Query().add_list("expand", expand)
        if version > 0:
            query.add("version", version)

        return self._execute(
            "content.get",
            "GET",
            endpoint_with_query(f"{CONFLUENCE_API_V1}/content/{content_id}", query),
            required=[(content_id, ERR_NO_CONTENT_ID)],
            schema=ContentScheme,
            attributes={"content.id": content_id},
        )

    def create(self, payload: ContentCreateScheme) -> tuple[ContentScheme, ResponseScheme]:
        """POST /wiki/rest/api/content"""
        return self._execute(
            "content.create",
            "POST",
            f"{CONFLUENCE_API_V1}/content",
            required=[(payload.title, ERR_NO_CONTENT_TITLE)],
            payload=payload,
            schema=ContentScheme,
        )

    def delete(self, content_id: str, status: str = "") -> ResponseScheme:
        """Trash (or purge, with status='trashed') a piece of content.

        DELETE /wiki/rest/api/content/{id}
        """
        query = Query().add_optional("status", status)
        _, response = self._execute(
            "content.delete",
            "DELETE",
            endpoint_with_query(f"{CONFLUENCE_API_V1}/content/{content_id}", query),
            required=[(content_id, ERR_NO_CONTENT_ID)],
            attributes={"content.id": content_id},
        )
        return response


class PageService(Service):
    """Pages through the v2 API."""

    def get(
        self,
        page_id: str,
        body_format: str = "",
        draft: bool = False,
        version: int = 0,
    ) -> tuple[PageScheme, ResponseScheme]:
        """Get a page by ID.

        GET /wiki/api/v2/pages/{id}

        Args:
            page_id: Page ID
            body_format: Body representation ('storage', 'atlas_doc_format')
            draft: Return the draft instead of the published page
            version: Historical version to return (latest when 0)
        """
        query = Query().add_optional("body-format", body_format)
        if draft:
            query.add("get-draft", True)
        if version > 0:
            query.add("version", version)

        return self._execute(
            "page.get",
            "GET",
            endpoint_with_query(f"{CONFLUENCE_API_V2}/pages/{page_id}", query),
            required=[(page_id, ERR_NO_PAGE_ID)],
            schema=PageScheme,
            attributes={"page.id": page_id},
        )

    def create(self, payload: PageCreatePayloadScheme) -> tuple[PageScheme, ResponseScheme]:
        """POST /wiki/api/v2/pages"""
        return self._execute(
            "page.create",
            "POST",
            f"{CONFLUENCE_API_V2}/pages",
            required=[(payload.space_id, ERR_NO_SPACE_ID)],
            payload=payload,
            schema=PageScheme,
        )

    def delete(self, page_id: str) -> ResponseScheme:
        """DELETE /wiki/api/v2/pages/{id}"""
        _, response = self._execute(
            "page.delete",
            "DELETE",
            f"{CONFLUENCE_API_V2}/pages/{page_id}",
            required=[(page_id, ERR_NO_PAGE_ID)],
            attributes={"page.id": page_id},
        )
        return response


class SpaceService(Service):
    def get(
        self, space_id: str, description_format: str = ""
    ) -> tuple[SpaceScheme, ResponseScheme]:
        """GET /wiki/api/v2/spaces/{id}"""
        query = Query().add_optional("description-format", description_format)
        return self._execute(
            "space.get",
            "GET",
            endpoint_with_query(f"{CONFLUENCE_API_V2}/spaces/{space_id}", query),
            required=[(space_id, ERR_NO_SPACE_ID)],
            schema=SpaceScheme,
        )


@register_client("confluence")
class ConfluenceClient(ProductClient):
    """Confluence v1 client.

    Attributes:
        comment: Content comments
        template: Content templates
        content: Content CRUD
    """

    provider_name = "confluence"
    module = "confluence"
    tracer_name = TRACER_NAME

    def _init_services(self) -> None:
        self.comment = CommentService(self.connector, self.tracer)
        self.template = TemplateService(self.connector, self.tracer)
        self.content = ContentService(self.connector, self.tracer)


@register_client("confluence_v2")
class ConfluenceV2Client(ProductClient):
    """Confluence v2 client.

    Attributes:
        page: Pages
        space: Spaces
    """

    provider_name = "confluence"
    module = "confluence.v2"
    tracer_name = TRACER_NAME_V2

    def _init_services(self) -> None:
        self.page = PageService(self.connector, self.tracer)
        self.space = SpaceService(self.connector, self.tracer)
