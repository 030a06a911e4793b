"""Typed request, response and payload models for the Atlassian REST APIs."""

from __future__ import annotations

from datetime import datetime
from typing import Any, NamedTuple

import requests
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class Scheme(BaseModel):
    """Base model for Atlassian JSON schemas (camelCase on the wire)."""

    class Config:
        """Pydantic configuration."""

        extra = "allow"
        alias_generator = to_camel
        populate_by_name = True

    def to_payload(self) -> dict[str, Any]:
        """Serialize for a request body, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# Request / response envelopes
# =============================================================================


class RequestScheme(NamedTuple):
    """A request built for a single call."""

    method: str
    endpoint: str
    content_type: str
    prepared: requests.PreparedRequest


class ResponseScheme(BaseModel):
    """Metadata about an HTTP response, returned alongside the typed result."""

    code: int = Field(description="HTTP status code")
    endpoint: str = Field(description="Full request URL")
    method: str = Field(description="HTTP method")
    body: bytes = Field(default=b"", description="Raw response body")
    headers: dict[str, str] = Field(default_factory=dict, description="Response headers")

    class Config:
        """Pydantic configuration."""

        frozen = True

    @property
    def text(self) -> str:
        """Response body decoded as UTF-8."""
        return self.body.decode("utf-8", errors="replace")


class GenericActionSuccessScheme(Scheme):
    """Plain acknowledgement returned by action endpoints."""

    message: str | None = None


# =============================================================================
# Admin
# =============================================================================


class ProductAccessScheme(Scheme):
    id: str | None = None
    key: str | None = None
    name: str | None = None
    url: str | None = None
    last_active: str | None = Field(default=None, alias="last_active")


class UserProductAccessDataScheme(Scheme):
    product_access: list[ProductAccessScheme] = Field(default_factory=list, alias="product_access")
    added_to_org: str | None = Field(default=None, alias="added_to_org")


class UserProductAccessScheme(Scheme):
    """Last active dates of a user, per product."""

    data: UserProductAccessDataScheme | None = None


class LinkPageScheme(Scheme):
    self_: str | None = Field(default=None, alias="self")
    prev: str | None = None
    next: str | None = None


class OrganizationModelAttribute(Scheme):
    name: str | None = None


class OrganizationModelScheme(Scheme):
    id: str | None = None
    type: str | None = None
    attributes: OrganizationModelAttribute | None = None


class OrganizationScheme(Scheme):
    data: OrganizationModelScheme | None = None


class OrganizationPageScheme(Scheme):
    data: list[OrganizationModelScheme] = Field(default_factory=list)
    links: LinkPageScheme | None = None


class OrganizationUserScheme(Scheme):
    account_id: str | None = Field(default=None, alias="account_id")
    account_type: str | None = Field(default=None, alias="account_type")
    account_status: str | None = Field(default=None, alias="account_status")
    name: str | None = None
    email: str | None = None


class OrganizationUserPageScheme(Scheme):
    data: list[OrganizationUserScheme] = Field(default_factory=list)
    links: LinkPageScheme | None = None


class OrganizationDomainModelScheme(Scheme):
    id: str | None = None
    type: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)


class OrganizationDomainScheme(Scheme):
    data: OrganizationDomainModelScheme | None = None


class OrganizationDomainPageScheme(Scheme):
    data: list[OrganizationDomainModelScheme] = Field(default_factory=list)
    links: LinkPageScheme | None = None


class OrganizationEventModelScheme(Scheme):
    id: str | None = None
    type: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)


class OrganizationEventScheme(Scheme):
    data: OrganizationEventModelScheme | None = None


class OrganizationEventPageScheme(Scheme):
    data: list[OrganizationEventModelScheme] = Field(default_factory=list)
    links: LinkPageScheme | None = None


class OrganizationEventOptionScheme(Scheme):
    """Filters for the organization audit log."""

    q: str | None = None
    from_: datetime | None = Field(default=None, alias="from")
    to: datetime | None = None
    action: str | None = None


# =============================================================================
# Confluence
# =============================================================================


class SpaceScheme(Scheme):
    id: Any = None
    key: str | None = None
    name: str | None = None
    type: str | None = None
    status: str | None = None
    description: dict[str, Any] | None = None


class ContentVersionScheme(Scheme):
    number: int | None = None
    when: str | None = None
    message: str | None = None
    minor_edit: bool | None = None


class BodyNodeScheme(Scheme):
    value: str | None = None
    representation: str | None = None


class ContentBodyScheme(Scheme):
    storage: BodyNodeScheme | None = None
    view: BodyNodeScheme | None = None
    atlas_doc_format: BodyNodeScheme | None = Field(default=None, alias="atlas_doc_format")


class ContentScheme(Scheme):
    id: str | None = None
    type: str | None = None
    status: str | None = None
    title: str | None = None
    space: SpaceScheme | None = None
    version: ContentVersionScheme | None = None
    body: ContentBodyScheme | None = None
    links: dict[str, Any] = Field(default_factory=dict, alias="_links")


class ContentPageScheme(Scheme):
    results: list[ContentScheme] = Field(default_factory=list)
    start: int = 0
    limit: int = 0
    size: int = 0


class ContentAncestorScheme(Scheme):
    id: str


class ContentCreateScheme(Scheme):
    """Payload to create a piece of content."""

    title: str
    type: str = "page"
    status: str | None = None
    space: SpaceScheme | None = None
    ancestors: list[ContentAncestorScheme] | None = None
    body: ContentBodyScheme | None = None


class ContentTemplateScheme(Scheme):
    template_id: str | None = None
    name: str | None = None
    description: str | None = None
    template_type: str | None = None
    space: SpaceScheme | None = None
    body: ContentBodyScheme | None = None
    labels: list[dict[str, Any]] | None = None


class CreateTemplateScheme(Scheme):
    """Payload to create a content template."""

    name: str
    template_type: str = "page"
    body: ContentBodyScheme | None = None
    description: str | None = None
    labels: list[dict[str, Any]] | None = None
    space: SpaceScheme | None = None


class UpdateTemplateScheme(CreateTemplateScheme):
    """Payload to update a content template."""

    template_id: str


class PageVersionScheme(Scheme):
    number: int | None = None
    message: str | None = None
    created_at: str | None = None
    author_id: str | None = None


class PageBodyRepresentationScheme(Scheme):
    representation: str | None = None
    value: str | None = None


class PageScheme(Scheme):
    id: str | None = None
    status: str | None = None
    title: str | None = None
    space_id: str | None = None
    parent_id: str | None = None
    author_id: str | None = None
    created_at: str | None = None
    version: PageVersionScheme | None = None
    body: dict[str, Any] | None = None


class PageCreatePayloadScheme(Scheme):
    """Payload to create a page through the v2 API."""

    space_id: str
    title: str
    status: str | None = None
    parent_id: str | None = None
    body: PageBodyRepresentationScheme | None = None


# =============================================================================
# Jira
# =============================================================================


class IssueScheme(Scheme):
    id: str | None = None
    key: str | None = None
    self_: str | None = Field(default=None, alias="self")
    fields: dict[str, Any] = Field(default_factory=dict)
    rendered_fields: dict[str, Any] | None = None
    changelog: dict[str, Any] | None = None


class IssueSearchScheme(Scheme):
    issues: list[IssueScheme] = Field(default_factory=list)
    next_page_token: str | None = None
    is_last: bool | None = None
    names: dict[str, str] | None = None
    schema_: dict[str, Any] | None = Field(default=None, alias="schema")


class IssueSearchCheckPayloadScheme(Scheme):
    """Payload to check issues against JQL queries."""

    issue_ids: list[int] = Field(default_factory=list)
    jqls: list[str] = Field(default_factory=list)


class IssueMatchesScheme(Scheme):
    matched_issues: list[int] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class IssueMatchesPageScheme(Scheme):
    matches: list[IssueMatchesScheme] = Field(default_factory=list)


class IssueCommentScheme(Scheme):
    id: str | None = None
    body: Any = None
    author: dict[str, Any] | None = None
    created: str | None = None
    updated: str | None = None


class IssueCommentPageScheme(Scheme):
    start_at: int = 0
    max_results: int = 0
    total: int = 0
    comments: list[IssueCommentScheme] = Field(default_factory=list)


class BoardScheme(Scheme):
    id: int | None = None
    name: str | None = None
    type: str | None = None
    location: dict[str, Any] | None = None


class BoardIssuePageScheme(Scheme):
    start_at: int = 0
    max_results: int = 0
    total: int = 0
    issues: list[IssueScheme] = Field(default_factory=list)


class SprintScheme(Scheme):
    id: int | None = None
    state: str | None = None
    name: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    origin_board_id: int | None = None
    goal: str | None = None


# =============================================================================
# Service Management
# =============================================================================


class CustomerRequestScheme(Scheme):
    issue_id: str | None = None
    issue_key: str | None = None
    request_type_id: str | None = None
    service_desk_id: str | None = None
    reporter: dict[str, Any] | None = None
    current_status: dict[str, Any] | None = None
    request_field_values: list[dict[str, Any]] = Field(default_factory=list)


class CustomerCreatePayloadScheme(Scheme):
    email: str
    display_name: str


class CustomerScheme(Scheme):
    account_id: str | None = None
    name: str | None = None
    key: str | None = None
    email_address: str | None = None
    display_name: str | None = None
    active: bool | None = None
    time_zone: str | None = None


class ServiceDeskScheme(Scheme):
    id: str | None = None
    project_id: str | None = None
    project_name: str | None = None
    project_key: str | None = None


# =============================================================================
# Assets
# =============================================================================


class ObjectTypeScheme(Scheme):
    id: str | None = None
    name: str | None = None


class ObjectScheme(Scheme):
    workspace_id: str | None = None
    global_id: str | None = None
    id: str | None = None
    label: str | None = None
    object_key: str | None = None
    object_type: ObjectTypeScheme | None = None
    attributes: list[dict[str, Any]] = Field(default_factory=list)


class ObjectListResultScheme(Scheme):
    start_at: int = 0
    max_results: int = 0
    total: int = 0
    is_last: bool | None = None
    values: list[ObjectScheme] = Field(default_factory=list)


class ObjectPayloadScheme(Scheme):
    object_type_id: str
    attributes: list[dict[str, Any]] = Field(default_factory=list)


# =============================================================================
# Bitbucket
# =============================================================================


class WorkspaceScheme(Scheme):
    uuid: str | None = None
    slug: str | None = None
    name: str | None = None
    type: str | None = None
    is_private: bool | None = Field(default=None, alias="is_private")
    links: dict[str, Any] = Field(default_factory=dict)


class RepositoryScheme(Scheme):
    uuid: str | None = None
    slug: str | None = None
    name: str | None = None
    full_name: str | None = Field(default=None, alias="full_name")
    is_private: bool | None = Field(default=None, alias="is_private")
    description: str | None = None
    workspace: WorkspaceScheme | None = None
    links: dict[str, Any] = Field(default_factory=dict)
