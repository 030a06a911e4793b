"""Atlassian Administration API services.

The Admin API lives on the API gateway and authenticates with an
organization API key (bearer token).

Example:
    from atlassian_services.atlassian.admin import AdminClient

    with AdminClient(bearer_token="...") as admin:
        activity, response = admin.directory.activity("ORG-1", "5b10ac8d82e05b22cc7d4ef5")
"""

from atlassian_services.atlassian.base import ProductClient
from atlassian_services.core.exceptions import (
    ERR_NO_ADMIN_ACCOUNT_ID,
    ERR_NO_ADMIN_DOMAIN_ID,
    ERR_NO_ADMIN_EVENT_ID,
    ERR_NO_ADMIN_ORGANIZATION,
)
from atlassian_services.core.models import (
    GenericActionSuccessScheme,
    OrganizationDomainPageScheme,
    OrganizationDomainScheme,
    OrganizationEventOptionScheme,
    OrganizationEventPageScheme,
    OrganizationEventScheme,
    OrganizationPageScheme,
    OrganizationScheme,
    OrganizationUserPageScheme,
    ResponseScheme,
    UserProductAccessScheme,
)
from atlassian_services.core.query import Query, endpoint_with_query
from atlassian_services.core.registry import register_client
from atlassian_services.core.service import Service

ADMIN_BASE_URL = "https://api.atlassian.com"
TRACER_NAME = "atlassian_services.admin"


class OrganizationDirectoryService(Service):
    """User access management in the organization directory.

    Only available to organizations on the new user management experience.
    """

    def activity(
        self, organization_id: str, account_id: str
    ) -> tuple[UserProductAccessScheme, ResponseScheme]:
        """Get a user's last active date for each product.

        Active is defined as viewing a product's page for a minimum of 2
        seconds. Activity data can be delayed by up to 4 hours.

        GET /admin/v1/orgs/{orgId}/directory/users/{accountId}/last-active-dates

        Args:
            organization_id: Organization ID
            account_id: User account ID

        Returns:
            Tuple of product access data and response envelope

        Raises:
            MissingParameterError: ERR_NO_ADMIN_ORGANIZATION or ERR_NO_ADMIN_ACCOUNT_ID
        """
        return self._execute(
            "organization.directory.activity",
            "GET",
            f"admin/v1/orgs/{organization_id}/directory/users/{account_id}/last-active-dates",
            required=[
                (organization_id, ERR_NO_ADMIN_ORGANIZATION),
                (account_id, ERR_NO_ADMIN_ACCOUNT_ID),
            ],
            schema=UserProductAccessScheme,
        )

    def remove(self, organization_id: str, account_id: str) -> ResponseScheme:
        """Remove a user's access to all products of the organization.

        DELETE /admin/v1/orgs/{orgId}/directory/users/{accountId}
        """
        _, response = self._execute(
            "organization.directory.remove",
            "DELETE",
            f"admin/v1/orgs/{organization_id}/directory/users/{account_id}",
            required=[
                (organization_id, ERR_NO_ADMIN_ORGANIZATION),
                (account_id, ERR_NO_ADMIN_ACCOUNT_ID),
            ],
        )
        return response

    def suspend(
        self, organization_id: str, account_id: str
    ) -> tuple[GenericActionSuccessScheme, ResponseScheme]:
        """Suspend a user's access to the organization's products.

        POST /admin/v1/orgs/{orgId}/directory/users/{accountId}/suspend-access
        """
        return self._execute(
            "organization.directory.suspend",
            "POST",
            f"admin/v1/orgs/{organization_id}/directory/users/{account_id}/suspend-access",
            required=[
                (organization_id, ERR_NO_ADMIN_ORGANIZATION),
                (account_id, ERR_NO_ADMIN_ACCOUNT_ID),
            ],
            schema=GenericActionSuccessScheme,
        )

    def restore(
        self, organization_id: str, account_id: str
    ) -> tuple[GenericActionSuccessScheme, ResponseScheme]:
        """Restore a suspended user's access.

        POST /admin/v1/orgs/{orgId}/directory/users/{accountId}/restore-access
        """
        return self._execute(
            "organization.directory.restore",
            "POST",
            f"admin/v1/orgs/{organization_id}/directory/users/{account_id}/restore-access",
            required=[
                (organization_id, ERR_NO_ADMIN_ORGANIZATION),
                (account_id, ERR_NO_ADMIN_ACCOUNT_ID),
            ],
            schema=GenericActionSuccessScheme,
        )


class OrganizationService(Service):
    """Organizations, their managed users, domains and audit log."""

    def gets(self, cursor: str = "") -> tuple[OrganizationPageScheme, ResponseScheme]:
        """List the organizations the API key has access to.

        GET /admin/v1/orgs
        """
        query = Query().add_optional("cursor", cursor)
        return self._execute(
            "organization.gets",
            "GET",
            endpoint_with_query("admin/v1/orgs", query),
            schema=OrganizationPageScheme,
        )

    def get(self, organization_id: str) -> tuple[OrganizationScheme, ResponseScheme]:
        """GET /admin/v1/orgs/{orgId}"""
        return self._execute(
            "organization.get",
            "GET",
            f"admin/v1/orgs/{organization_id}",
            required=[(organization_id, ERR_NO_ADMIN_ORGANIZATION)],
            schema=OrganizationScheme,
        )

    def users(
        self, organization_id: str, cursor: str = ""
    ) -> tuple[OrganizationUserPageScheme, ResponseScheme]:
        """List the managed accounts of an organization.

        GET /admin/v1/orgs/{orgId}/users
        """
        query = Query().add_optional("cursor", cursor)
        return self._execute(
            "organization.users",
            "GET",
            endpoint_with_query(f"admin/v1/orgs/{organization_id}/users", query),
            required=[(organization_id, ERR_NO_ADMIN_ORGANIZATION)],
            schema=OrganizationUserPageScheme,
        )

    def domains(
        self, organization_id: str, cursor: str = ""
    ) -> tuple[OrganizationDomainPageScheme, ResponseScheme]:
        """List the verified domains of an organization.

        GET /admin/v1/orgs/{orgId}/domains
        """
        query = Query().add_optional("cursor", cursor)
        return self._execute(
            "organization.domains",
            "GET",
            endpoint_with_query(f"admin/v1/orgs/{organization_id}/domains", query),
            required=[(organization_id, ERR_NO_ADMIN_ORGANIZATION)],
            schema=OrganizationDomainPageScheme,
        )

    def domain(
        self, organization_id: str, domain_id: str
    ) -> tuple[OrganizationDomainScheme, ResponseScheme]:
        """GET /admin/v1/orgs/{orgId}/domains/{domainId}"""
        return self._execute(
            "organization.domain",
            "GET",
            f"admin/v1/orgs/{organization_id}/domains/{domain_id}",
            required=[
                (organization_id, ERR_NO_ADMIN_ORGANIZATION),
                (domain_id, ERR_NO_ADMIN_DOMAIN_ID),
            ],
            schema=OrganizationDomainScheme,
        )

    def events(
        self,
        organization_id: str,
        options: OrganizationEventOptionScheme | None = None,
        cursor: str = "",
    ) -> tuple[OrganizationEventPageScheme, ResponseScheme]:
        """Query the organization audit log.

        GET /admin/v1/orgs/{orgId}/events

        Args:
            organization_id: Organization ID
            options: Text, time range and action filters
            cursor: Page cursor from a previous response

        Returns:
            Tuple of event page and response envelope
        """
        query = Query().add_optional("cursor", cursor)
        if options is not None:
            query.add_optional("q", options.q)
            if options.from_ is not None:
                query.add("from", int(options.from_.timestamp() * 1000))
            if options.to is not None:
                query.add("to", int(options.to.timestamp() * 1000))
            query.add_optional("action", options.action)

        return self._execute(
            "organization.events",
            "GET",
            endpoint_with_query(f"admin/v1/orgs/{organization_id}/events", query),
            required=[(organization_id, ERR_NO_ADMIN_ORGANIZATION)],
            schema=OrganizationEventPageScheme,
        )

    def event(
        self, organization_id: str, event_id: str
    ) -> tuple[OrganizationEventScheme, ResponseScheme]:
        """GET /admin/v1/orgs/{orgId}/events/{eventId}"""
        return self._execute(
            "organization.event",
            "GET",
            f"admin/v1/orgs/{organization_id}/events/{event_id}",
            required=[
                (organization_id, ERR_NO_ADMIN_ORGANIZATION),
                (event_id, ERR_NO_ADMIN_EVENT_ID),
            ],
            schema=OrganizationEventScheme,
        )


@register_client("admin")
class AdminClient(ProductClient):
    """Atlassian Administration client.

    Attributes:
        organization: Organization, domain and audit log operations
        directory: User access operations
    """

    provider_name = "admin"
    module = "admin"
    tracer_name = TRACER_NAME
    default_base_url = ADMIN_BASE_URL
    use_bearer = True

    def _init_services(self) -> None:
        self.organization = OrganizationService(self.connector, self.tracer)
        self.directory = OrganizationDirectoryService(self.connector, self.tracer)
