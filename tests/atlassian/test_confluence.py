"""Tests for the Confluence v1 and v2 services."""

import json
from unittest.mock import MagicMock

import pytest
import responses
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from atlassian_services.atlassian.confluence import ConfluenceClient, ConfluenceV2Client
from atlassian_services.core.exceptions import (
    ERR_NO_CONTENT_ID,
    ERR_NO_CONTENT_TITLE,
    ERR_NO_PAGE_ID,
    ERR_NO_SPACE_ID,
    ERR_NO_TEMPLATE_ID,
    MissingParameterError,
)
from atlassian_services.core.models import (
    ContentCreateScheme,
    CreateTemplateScheme,
    PageBodyRepresentationScheme,
    PageCreatePayloadScheme,
    SpaceScheme,
    UpdateTemplateScheme,
)

BASE_URL = "https://test.atlassian.net"


@pytest.fixture
def confluence(mock_credentials: MagicMock, tracer_provider: TracerProvider) -> ConfluenceClient:
    """Confluence v1 client with an in-memory tracer."""
    return ConfluenceClient(tracer_provider=tracer_provider)


@pytest.fixture
def confluence_v2(
    mock_credentials: MagicMock, tracer_provider: TracerProvider
) -> ConfluenceV2Client:
    """Confluence v2 client with an in-memory tracer."""
    return ConfluenceV2Client(tracer_provider=tracer_provider)


@pytest.fixture
def sample_comments() -> dict:
    """Sample comment page response."""
    return {
        "results": [
            {
                "id": "900001",
                "type": "comment",
                "status": "current",
                "title": "Re: Runbook",
                "body": {"storage": {"value": "<p>LGTM</p>", "representation": "storage"}},
                "_links": {"webui": "/pages/83820565?focusedCommentId=900001"},
            }
        ],
        "start": 0,
        "limit": 25,
        "size": 1,
    }


class TestCommentService:
    """Tests for content comments."""

    @responses.activate
    def test_gets(
        self,
        confluence: ConfluenceClient,
        span_exporter: InMemorySpanExporter,
        sample_comments: dict,
    ) -> None:
        """Test listing comments with pagination and expansions."""
        responses.add(
            responses.GET,
            f"{BASE_URL}/wiki/rest/api/content/83820565/child/comment",
            json=sample_comments,
            status=200,
        )

        page, response = confluence.comment.gets(
            "83820565", expand=["a", "b"], start_at=0, max_results=25
        )

        assert response.code == 200
        assert page.size == 1
        assert page.results[0].body.storage.value == "<p>LGTM</p>"
        assert responses.calls[0].request.url.endswith(
            "/wiki/rest/api/content/83820565/child/comment?start=0&limit=25&expand=a,b"
        )

        (span,) = span_exporter.get_finished_spans()
        assert span.name == "confluence.content.comment.gets"
        assert span.attributes["content.id"] == "83820565"
        assert span.attributes["pagination.start"] == 0
        assert span.attributes["pagination.limit"] == 25

    @responses.activate
    def test_gets_location(self, confluence: ConfluenceClient, sample_comments: dict) -> None:
        """Test the location filter and omitted empty expansions."""
        responses.add(
            responses.GET,
            f"{BASE_URL}/wiki/rest/api/content/1/child/comment",
            json=sample_comments,
        )

        confluence.comment.gets("1", location=["inline", "footer"], start_at=25, max_results=50)

        assert responses.calls[0].request.url.endswith(
            "?start=25&limit=50&location=inline,footer"
        )

    @responses.activate
    def test_gets_missing_content_id(self, confluence: ConfluenceClient) -> None:
        """Test that an empty content ID sends nothing."""
        with pytest.raises(MissingParameterError) as exc_info:
            confluence.comment.gets("")

        assert exc_info.value == ERR_NO_CONTENT_ID
        assert len(responses.calls) == 0


class TestTemplateService:
    """Tests for content templates."""

    @responses.activate
    def test_create(self, confluence: ConfluenceClient) -> None:
        """Test creating a template."""
        responses.add(
            responses.POST,
            f"{BASE_URL}/wiki/rest/api/template",
            json={"templateId": "t1", "name": "Runbook", "templateType": "page"},
            status=200,
        )

        template, _ = confluence.template.create(
            CreateTemplateScheme(name="Runbook", space=SpaceScheme(key="DEVOPS"))
        )

        assert template.template_id == "t1"
        assert json.loads(responses.calls[0].request.body) == {
            "name": "Runbook",
            "templateType": "page",
            "space": {"key": "DEVOPS"},
        }

    @responses.activate
    def test_update(self, confluence: ConfluenceClient) -> None:
        """Test updating a template."""
        responses.add(
            responses.PUT,
            f"{BASE_URL}/wiki/rest/api/template",
            json={"templateId": "t1", "name": "Runbook v2"},
        )

        template, _ = confluence.template.update(
            UpdateTemplateScheme(template_id="t1", name="Runbook v2")
        )

        assert template.name == "Runbook v2"
        assert json.loads(responses.calls[0].request.body)["templateId"] == "t1"

    def test_update_missing_template_id(self, confluence: ConfluenceClient) -> None:
        """Test the template ID check on update."""
        with pytest.raises(MissingParameterError) as exc_info:
            confluence.template.update(UpdateTemplateScheme(template_id="", name="Runbook"))

        assert exc_info.value == ERR_NO_TEMPLATE_ID

    @responses.activate
    def test_get(self, confluence: ConfluenceClient) -> None:
        """Test getting a template."""
        responses.add(
            responses.GET,
            f"{BASE_URL}/wiki/rest/api/template/t1",
            json={"templateId": "t1", "name": "Runbook"},
        )

        template, _ = confluence.template.get("t1")

        assert template.template_id == "t1"


class TestContentService:
    """Tests for v1 content operations."""

    @responses.activate
    def test_get_version(self, confluence: ConfluenceClient) -> None:
        """Test getting a historical version."""
        responses.add(
            responses.GET,
            f"{BASE_URL}/wiki/rest/api/content/83820565",
            json={"id": "83820565", "title": "Runbook", "version": {"number": 2}},
        )

        content, _ = confluence.content.get("83820565", expand=["body.storage"], version=2)

        assert content.version.number == 2
        assert responses.calls[0].request.url.endswith("?expand=body.storage&version=2")

    @responses.activate
    def test_create(self, confluence: ConfluenceClient) -> None:
        """Test creating content."""
        responses.add(
            responses.POST,
            f"{BASE_URL}/wiki/rest/api/content",
            json={"id": "1", "title": "Runbook", "type": "page"},
        )

        content, _ = confluence.content.create(
            ContentCreateScheme(title="Runbook", space=SpaceScheme(key="DEVOPS"))
        )

        assert content.id == "1"

    def test_create_missing_title(self, confluence: ConfluenceClient) -> None:
        """Test the title check."""
        with pytest.raises(MissingParameterError) as exc_info:
            confluence.content.create(ContentCreateScheme(title=""))

        assert exc_info.value == ERR_NO_CONTENT_TITLE

    @responses.activate
    def test_delete_purge(self, confluence: ConfluenceClient) -> None:
        """Test purging trashed content."""
        responses.add(responses.DELETE, f"{BASE_URL}/wiki/rest/api/content/1", status=204)

        response = confluence.content.delete("1", status="trashed")

        assert response.code == 204
        assert responses.calls[0].request.url.endswith("/content/1?status=trashed")


class TestPageService:
    """Tests for v2 pages."""

    def test_client_module(self, confluence_v2: ConfluenceV2Client) -> None:
        """Test that v2 spans use their own module."""
        assert confluence_v2.tracer.module == "confluence.v2"
        assert confluence_v2.tracer.tracer_name == "atlassian_services.confluence.v2"

    @responses.activate
    def test_get(
        self, confluence_v2: ConfluenceV2Client, span_exporter: InMemorySpanExporter
    ) -> None:
        """Test getting a draft page with a body format."""
        responses.add(
            responses.GET,
            f"{BASE_URL}/wiki/api/v2/pages/123456",
            json={
                "id": "123456",
                "title": "Test Page",
                "spaceId": "789",
                "version": {"number": 3, "authorId": "user123"},
            },
        )

        page, _ = confluence_v2.page.get("123456", body_format="storage", draft=True)

        assert page.space_id == "789"
        assert page.version.author_id == "user123"
        assert responses.calls[0].request.url.endswith(
            "/pages/123456?body-format=storage&get-draft=true"
        )
        assert span_exporter.get_finished_spans()[0].name == "confluence.v2.page.get"

    @responses.activate
    def test_create(self, confluence_v2: ConfluenceV2Client) -> None:
        """Test creating a page."""
        responses.add(
            responses.POST,
            f"{BASE_URL}/wiki/api/v2/pages",
            json={"id": "123457", "title": "New Page", "spaceId": "789"},
        )

        page, _ = confluence_v2.page.create(
            PageCreatePayloadScheme(
                space_id="789",
                title="New Page",
                body=PageBodyRepresentationScheme(representation="storage", value="<p>Hi</p>"),
            )
        )

        assert page.id == "123457"
        assert json.loads(responses.calls[0].request.body) == {
            "spaceId": "789",
            "title": "New Page",
            "body": {"representation": "storage", "value": "<p>Hi</p>"},
        }

    def test_create_missing_space(self, confluence_v2: ConfluenceV2Client) -> None:
        """Test the space ID check."""
        with pytest.raises(MissingParameterError) as exc_info:
            confluence_v2.page.create(PageCreatePayloadScheme(space_id="", title="New Page"))

        assert exc_info.value == ERR_NO_SPACE_ID

    def test_delete_missing_page(self, confluence_v2: ConfluenceV2Client) -> None:
        """Test the page ID check."""
        with pytest.raises(MissingParameterError) as exc_info:
            confluence_v2.page.delete("")

        assert exc_info.value == ERR_NO_PAGE_ID


class TestSpaceService:
    """Tests for v2 spaces."""

    @responses.activate
    def test_get(self, confluence_v2: ConfluenceV2Client) -> None:
        """Test getting a space."""
        responses.add(
            responses.GET,
            f"{BASE_URL}/wiki/api/v2/spaces/789",
            json={"id": "789", "key": "DEVOPS", "name": "DevOps"},
        )

        space, _ = confluence_v2.space.get("789", description_format="plain")

        assert space.key == "DEVOPS"
        assert responses.calls[0].request.url.endswith("/spaces/789?description-format=plain")
