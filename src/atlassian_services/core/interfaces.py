"""Abstract interfaces shared by every service.

Services only talk to the network through a Connector, so the requests-based
AtlassianClient and test doubles are interchangeable without touching call
sites.
"""

from abc import ABC, abstractmethod
from typing import Any, TypeVar

from pydantic import BaseModel

from atlassian_services.core.models import RequestScheme, ResponseScheme

ModelT = TypeVar("ModelT", bound=BaseModel)


class Connector(ABC):
    """Transport abstraction turning a request into an HTTP call.

    Implementations: AtlassianClient
    """

    @abstractmethod
    def new_request(
        self,
        method: str,
        endpoint: str,
        content_type: str = "",
        payload: Any = None,
    ) -> RequestScheme:
        """Build a request for a single call.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, etc.)
            endpoint: API path relative to the site, query string included
            content_type: Body content type (defaults to JSON when a payload is given)
            payload: Pydantic model, dict or list to serialize as the body

        Returns:
            Prepared request descriptor

        Raises:
            RequestBuildError: If the payload cannot be serialized or the
                connector deadline has passed
        """

    @abstractmethod
    def call(
        self,
        request: RequestScheme,
        schema: type[ModelT] | None = None,
    ) -> tuple[ModelT | None, ResponseScheme]:
        """Execute a request and decode the response body.

        Args:
            request: Request built by new_request
            schema: Model to decode the JSON body into (None to skip decoding)

        Returns:
            Tuple of decoded result (None without schema or body) and response envelope

        Raises:
            AtlassianConnectionError: If the transport fails
            ResponseError: If the API answers with a status code >= 400
        """
