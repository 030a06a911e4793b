"""Atlassian product clients.

This module provides clients for:
- AdminClient: Atlassian Administration (organizations, directory)
- AssetsClient: Assets objects
- BitbucketClient: Bitbucket Cloud workspaces and repositories
- ConfluenceClient / ConfluenceV2Client: Confluence content, comments, templates, pages
- JiraClient: Jira platform search, issues and comments (v2 and v3)
- AgileClient: Jira Software boards and sprints
- ServiceManagementClient: Jira Service Management requests and customers

Base classes:
- AtlassianClient: requests-based Connector
- ProductClient: facade owning a connector, tracer and services
- AtlassianCredentials: Credential management

Example:
    from atlassian_services.atlassian import ConfluenceClient

    with ConfluenceClient() as confluence:
        comments, response = confluence.comment.gets("83820565")
"""

from atlassian_services.atlassian.admin import AdminClient
from atlassian_services.atlassian.agile import AgileClient
from atlassian_services.atlassian.assets import AssetsClient
from atlassian_services.atlassian.base import AtlassianClient, ProductClient
from atlassian_services.atlassian.bitbucket import BitbucketClient
from atlassian_services.atlassian.confluence import ConfluenceClient, ConfluenceV2Client
from atlassian_services.atlassian.credentials import (
    AtlassianCredentials,
    delete_credentials,
    get_bearer_token,
    get_credentials,
    save_credentials,
)
from atlassian_services.atlassian.jira import JiraClient
from atlassian_services.atlassian.jsm import ServiceManagementClient

__all__ = [
    # Base classes
    "AtlassianClient",
    "ProductClient",
    "AtlassianCredentials",
    "get_credentials",
    "get_bearer_token",
    "save_credentials",
    "delete_credentials",
    # Clients
    "AdminClient",
    "AgileClient",
    "AssetsClient",
    "BitbucketClient",
    "ConfluenceClient",
    "ConfluenceV2Client",
    "JiraClient",
    "ServiceManagementClient",
]
