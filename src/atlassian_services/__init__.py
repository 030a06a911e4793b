"""
atlassian-services: typed service methods for the Atlassian Cloud REST APIs.

Every operation validates its required arguments, builds one documented
endpoint, executes it through a shared Connector and decodes the JSON body
into a pydantic model. Each call is bracketed by an OpenTelemetry span.

Example Usage:
    from atlassian_services import get_client
    from atlassian_services.core.exceptions import ERR_NO_JQL

    jira = get_client("jira", {"version": "3"})
    issues, response = jira.search.get("project = ITI", fields=["summary"])
    print(response.code, len(issues.issues))

    admin = get_client("admin", {"bearer_token": "..."})
    activity, _ = admin.directory.activity("ORG-1", "5b10ac8d82e05b22cc7d4ef5")
"""

from atlassian_services.core.exceptions import (
    AtlassianConnectionError,
    AtlassianError,
    AuthenticationError,
    MissingParameterError,
    NotFoundError,
    RateLimitError,
    RequestBuildError,
    ResponseError,
)
from atlassian_services.core.interfaces import Connector
from atlassian_services.core.models import RequestScheme, ResponseScheme
from atlassian_services.core.registry import get_client, list_clients, register_client
from atlassian_services.core.tracing import ModuleTracer

__version__ = "0.1.0"

__all__ = [
    # Models
    "RequestScheme",
    "ResponseScheme",
    # Interfaces
    "Connector",
    "ModuleTracer",
    # Registry
    "get_client",
    "list_clients",
    "register_client",
    # Exceptions
    "AtlassianError",
    "MissingParameterError",
    "RequestBuildError",
    "AtlassianConnectionError",
    "ResponseError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
]
