"""Jira Service Management REST API services.

Example:
    from atlassian_services.atlassian.jsm import ServiceManagementClient

    with ServiceManagementClient() as jsm:
        request, response = jsm.request.get("SD-100", expand=["status"])
"""

from atlassian_services.atlassian.base import ProductClient
from atlassian_services.core.exceptions import (
    ERR_NO_CUSTOMER_DISPLAY_NAME,
    ERR_NO_CUSTOMER_MAIL,
    ERR_NO_ISSUE_KEY_OR_ID,
    ERR_NO_SERVICE_DESK_ID,
)
from atlassian_services.core.models import (
    CustomerCreatePayloadScheme,
    CustomerRequestScheme,
    CustomerScheme,
    ResponseScheme,
    ServiceDeskScheme,
)
from atlassian_services.core.query import Query, endpoint_with_query
from atlassian_services.core.registry import register_client
from atlassian_services.core.service import Service

SERVICE_DESK_API = "rest/servicedeskapi"
TRACER_NAME = "atlassian_services.jira.sm"


class RequestService(Service):
    """Customer requests."""

    def get(
        self, issue_key_or_id: str, expand: list[str] | None = None
    ) -> tuple[CustomerRequestScheme, ResponseScheme]:
        """Get a customer request.

        GET /rest/servicedeskapi/request/{issueIdOrKey}

        Args:
            issue_key_or_id: Request issue key or ID (e.g., 'SD-100')
            expand: Properties to expand ('participant', 'status', 'sla', ...)
        """
        query = Query().add_list("expand", expand)
        return self._execute(
            "request.get",
            "GET",
            endpoint_with_query(f"{SERVICE_DESK_API}/request/{issue_key_or_id}", query),
            required=[(issue_key_or_id, ERR_NO_ISSUE_KEY_OR_ID)],
            schema=CustomerRequestScheme,
            attributes={"issue.key": issue_key_or_id},
        )


class CustomerService(Service):
    """Service desk customers."""

    def create(self, email: str, display_name: str) -> tuple[CustomerScheme, ResponseScheme]:
        """Create a customer that is not associated with a service desk.

        POST /rest/servicedeskapi/customer

        Raises:
            MissingParameterError: ERR_NO_CUSTOMER_MAIL or ERR_NO_CUSTOMER_DISPLAY_NAME
        """
        return self._execute(
            "customer.create",
            "POST",
            f"{SERVICE_DESK_API}/customer",
            required=[
                (email, ERR_NO_CUSTOMER_MAIL),
                (display_name, ERR_NO_CUSTOMER_DISPLAY_NAME),
            ],
            payload=lambda: CustomerCreatePayloadScheme(email=email, display_name=display_name),
            schema=CustomerScheme,
        )


class ServiceDeskService(Service):
    def get(self, service_desk_id: str) -> tuple[ServiceDeskScheme, ResponseScheme]:
        """GET /rest/servicedeskapi/servicedesk/{serviceDeskId}"""
        return self._execute(
            "service_desk.get",
            "GET",
            f"{SERVICE_DESK_API}/servicedesk/{service_desk_id}",
            required=[(service_desk_id, ERR_NO_SERVICE_DESK_ID)],
            schema=ServiceDeskScheme,
        )


@register_client("jsm")
class ServiceManagementClient(ProductClient):
    """Jira Service Management client.

    Attributes:
        request: Customer requests
        customer: Customers
        service_desk: Service desks
    """

    provider_name = "jsm"
    module = "jira.sm"
    tracer_name = TRACER_NAME

    def _init_services(self) -> None:
        self.request = RequestService(self.connector, self.tracer)
        self.customer = CustomerService(self.connector, self.tracer)
        self.service_desk = ServiceDeskService(self.connector, self.tracer)
