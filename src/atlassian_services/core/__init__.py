"""Core contracts, models and tracing for atlassian-services."""

from atlassian_services.core.exceptions import (
    SENTINELS,
    AtlassianConnectionError,
    AtlassianError,
    AuthenticationError,
    MissingParameterError,
    NotFoundError,
    RateLimitError,
    RequestBuildError,
    ResponseError,
    is_sentinel,
)
from atlassian_services.core.interfaces import Connector
from atlassian_services.core.models import RequestScheme, ResponseScheme
from atlassian_services.core.query import Query, endpoint_with_query
from atlassian_services.core.registry import get_client, list_clients, register_client
from atlassian_services.core.service import Service
from atlassian_services.core.tracing import ModuleTracer

__all__ = [
    "RequestScheme",
    "ResponseScheme",
    "Connector",
    "Service",
    "ModuleTracer",
    "Query",
    "endpoint_with_query",
    "get_client",
    "list_clients",
    "register_client",
    "SENTINELS",
    "is_sentinel",
    "AtlassianError",
    "MissingParameterError",
    "RequestBuildError",
    "AtlassianConnectionError",
    "ResponseError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
]
