"""Tests for the Jira Service Management services."""

import json
from unittest.mock import MagicMock

import pytest
import responses
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from atlassian_services.atlassian.jsm import ServiceManagementClient
from atlassian_services.core.exceptions import (
    ERR_NO_CUSTOMER_DISPLAY_NAME,
    ERR_NO_CUSTOMER_MAIL,
    ERR_NO_ISSUE_KEY_OR_ID,
    ERR_NO_SERVICE_DESK_ID,
    MissingParameterError,
)

SERVICE_DESK_URL = "https://test.atlassian.net/rest/servicedeskapi"


@pytest.fixture
def jsm(mock_credentials: MagicMock, tracer_provider: TracerProvider) -> ServiceManagementClient:
    """Service Management client with an in-memory tracer."""
    return ServiceManagementClient(tracer_provider=tracer_provider)


class TestRequestService:
    """Tests for customer requests."""

    @responses.activate
    def test_get(self, jsm: ServiceManagementClient, span_exporter: InMemorySpanExporter) -> None:
        """Test getting a request with expansions."""
        responses.add(
            responses.GET,
            f"{SERVICE_DESK_URL}/request/SD-100",
            json={
                "issueId": "20001",
                "issueKey": "SD-100",
                "serviceDeskId": "1",
                "currentStatus": {"status": "Waiting for support"},
            },
        )

        request, _ = jsm.request.get("SD-100", expand=["status", "sla"])

        assert request.issue_key == "SD-100"
        assert request.current_status == {"status": "Waiting for support"}
        assert responses.calls[0].request.url.endswith("/request/SD-100?expand=status,sla")
        assert span_exporter.get_finished_spans()[0].name == "jira.sm.request.get"

    def test_get_missing_issue(self, jsm: ServiceManagementClient) -> None:
        """Test the issue key check."""
        with pytest.raises(MissingParameterError) as exc_info:
            jsm.request.get("")

        assert exc_info.value == ERR_NO_ISSUE_KEY_OR_ID


class TestCustomerService:
    """Tests for customers."""

    @responses.activate
    def test_create(self, jsm: ServiceManagementClient) -> None:
        """Test creating a customer."""
        responses.add(
            responses.POST,
            f"{SERVICE_DESK_URL}/customer",
            json={"accountId": "qm:1", "emailAddress": "a@example.com", "displayName": "A"},
            status=201,
        )

        customer, response = jsm.customer.create("a@example.com", "A")

        assert response.code == 201
        assert customer.account_id == "qm:1"
        assert json.loads(responses.calls[0].request.body) == {
            "email": "a@example.com",
            "displayName": "A",
        }

    @responses.activate
    def test_create_checks_mail_first(self, jsm: ServiceManagementClient) -> None:
        """Test the order of the customer checks."""
        with pytest.raises(MissingParameterError) as exc_info:
            jsm.customer.create("", "")
        assert exc_info.value == ERR_NO_CUSTOMER_MAIL

        with pytest.raises(MissingParameterError) as exc_info:
            jsm.customer.create("a@example.com", "")
        assert exc_info.value == ERR_NO_CUSTOMER_DISPLAY_NAME

        assert len(responses.calls) == 0

    @pytest.mark.parametrize(
        ("email", "display_name", "expected"),
        [
            (None, "Alice", ERR_NO_CUSTOMER_MAIL),
            ("", "Alice", ERR_NO_CUSTOMER_MAIL),
            ("a@example.com", None, ERR_NO_CUSTOMER_DISPLAY_NAME),
            ("a@example.com", "", ERR_NO_CUSTOMER_DISPLAY_NAME),
        ],
    )
    @responses.activate
    def test_create_missing_values(
        self,
        jsm: ServiceManagementClient,
        span_exporter: InMemorySpanExporter,
        email: str | None,
        display_name: str | None,
        expected: MissingParameterError,
    ) -> None:
        """Test that missing values fail the check before the body is built."""
        with pytest.raises(MissingParameterError) as exc_info:
            jsm.customer.create(email, display_name)

        assert exc_info.value == expected
        assert len(responses.calls) == 0
        (span,) = span_exporter.get_finished_spans()
        assert span.name == "jira.sm.customer.create"
        assert span.status.status_code == StatusCode.ERROR


class TestServiceDeskService:
    """Tests for service desks."""

    @responses.activate
    def test_get(self, jsm: ServiceManagementClient) -> None:
        """Test getting a service desk."""
        responses.add(
            responses.GET,
            f"{SERVICE_DESK_URL}/servicedesk/1",
            json={"id": "1", "projectId": "10000", "projectKey": "SD"},
        )

        service_desk, _ = jsm.service_desk.get("1")

        assert service_desk.project_key == "SD"

    def test_get_missing_id(self, jsm: ServiceManagementClient) -> None:
        """Test the service desk ID check."""
        with pytest.raises(MissingParameterError) as exc_info:
            jsm.service_desk.get("")

        assert exc_info.value == ERR_NO_SERVICE_DESK_ID
