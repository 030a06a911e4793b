"""Shared call-and-decode routine used by every service method.

A concrete operation only supplies its endpoint, required arguments and
result model:

    class DirectoryService(Service):
        def activity(self, organization_id: str, account_id: str):
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
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from atlassian_services.core.exceptions import MissingParameterError, ResponseError
from atlassian_services.core.interfaces import Connector, ModelT
from atlassian_services.core.models import ResponseScheme
from atlassian_services.core.tracing import ModuleTracer

logger = logging.getLogger(__name__)

Required = Iterable[tuple[Any, MissingParameterError]]


def is_empty(value: Any) -> bool:
    """Check whether a required argument was left empty.

    Strings are empty when blank, integer identifiers when not positive,
    collections when they have no items.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value <= 0
    if isinstance(value, str):
        return value == ""
    try:
        return len(value) == 0
    except TypeError:
        return False


class Service:
    """Base class for a group of operations against one API resource."""

    def __init__(self, connector: Connector, tracer: ModuleTracer) -> None:
        """Initialize the service.

        Args:
            connector: Transport used to build and execute requests
            tracer: Tracing helper of the owning product module
        """
        self._connector = connector
        self._tracer = tracer

    def _execute(
        self,
        operation: str,
        method: str,
        endpoint: str,
        *,
        required: Required = (),
        payload: Any = None,
        schema: type[ModelT] | None = None,
        content_type: str = "",
        attributes: Mapping[str, Any] | None = None,
    ) -> tuple[ModelT | None, ResponseScheme]:
        """Validate, build, call and decode a single operation.

        Args:
            operation: Operation name (span name suffix and ``operation`` attribute)
            method: HTTP method
            endpoint: Endpoint path, query string included
            required: (value, sentinel) pairs checked left to right
            payload: Request body, or a callable building it once validation passed
            schema: Result model
            content_type: Body content type
            attributes: Extra span attributes

        Returns:
            Tuple of decoded result and response envelope

        Raises:
            MissingParameterError: Copy of the sentinel of the first empty required value
            RequestBuildError: If the request cannot be built
            AtlassianConnectionError: If the transport fails
            ResponseError: If the API answers with a status code >= 400
        """
        with self._tracer.traced(operation) as span:
            for value, sentinel in required:
                if is_empty(value):
                    raise sentinel.copy()

            if callable(payload):
                payload = payload()

            self._tracer.set_span_attributes(span, method, endpoint, operation, attributes)
            logger.debug("%s.%s: %s %s", self._tracer.module, operation, method, endpoint)

            request = self._connector.new_request(method, endpoint, content_type, payload)
            try:
                result, response = self._connector.call(request, schema)
            except ResponseError as e:
                if e.response is not None:
                    self._tracer.set_span_response(span, e.response.code)
                raise

            self._tracer.set_span_response(span, response.code)
            return result, response
