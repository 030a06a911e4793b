"""Requests-based Connector shared by every Atlassian product client.

This module provides the concrete transport for all services with:
- Automatic credential resolution (basic auth or bearer token)
- JSON payload serialization
- Status code to exception mapping
- Request/response logging

Requests are sent exactly once; failures surface immediately to the caller.

Example:
    from atlassian_services.atlassian.base import AtlassianClient
    from atlassian_services.core.models import IssueScheme

    with AtlassianClient() as client:
        request = client.new_request("GET", "rest/api/3/issue/ITI-220")
        issue, response = client.call(request, IssueScheme)
"""

import json
import logging
import time
from typing import Any

import requests

from atlassian_services.atlassian.credentials import (
    DEFAULT_SERVICE,
    get_bearer_token,
    get_credentials,
)
from atlassian_services.core.exceptions import (
    AtlassianConnectionError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    RequestBuildError,
    ResponseError,
)
from atlassian_services.core.interfaces import Connector, ModelT
from atlassian_services.core.models import RequestScheme, ResponseScheme, Scheme
from atlassian_services.core.tracing import ModuleTracer

logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_TIMEOUT = 30  # seconds
DEFAULT_CONTENT_TYPE = "application/json"


class AtlassianClient(Connector):
    """HTTP connector for Atlassian APIs.

    Attributes:
        base_url: Site or API gateway base URL
        timeout: Request timeout in seconds
        deadline: Epoch seconds after which no new request is built
        provider_name: Product identifier for logging and errors
    """

    provider_name = "atlassian"

    def __init__(
        self,
        base_url: str | None = None,
        email: str | None = None,
        api_token: str | None = None,
        bearer_token: str | None = None,
        use_bearer: bool = False,
        timeout: int = DEFAULT_TIMEOUT,
        deadline: float | None = None,
        service: str | None = None,
        provider_name: str | None = None,
    ) -> None:
        """Initialize the connector.

        Args:
            base_url: Atlassian instance URL (e.g., https://company.atlassian.net)
            email: User email (or Bitbucket username) for basic auth
            api_token: API token (or Bitbucket app password) for basic auth
            bearer_token: API key for bearer auth (Admin API); skips basic auth
            use_bearer: Resolve a bearer token even when none is passed explicitly
            timeout: Request timeout in seconds
            deadline: Epoch seconds after which new_request fails
            service: Keyring service name for credential lookup
            provider_name: Product identifier for logging and errors
        """
        if provider_name:
            self.provider_name = provider_name
        self.timeout = timeout
        self.deadline = deadline

        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/json"})

        if use_bearer or bearer_token is not None:
            token = get_bearer_token(bearer_token, service=service or DEFAULT_SERVICE)
            self.base_url = (base_url or "").rstrip("/")
            self._session.headers["Authorization"] = f"Bearer {token}"
            auth_user = "<bearer>"
        else:
            creds = get_credentials(
                base_url=base_url,
                email=email,
                api_token=api_token,
                service=service or DEFAULT_SERVICE,
            )
            self.base_url = creds.base_url
            self._session.auth = (creds.email, creds.api_token)
            auth_user = creds.email

        logger.debug(
            "Initialized %s connector for %s (user: %s)",
            self.provider_name,
            self.base_url,
            auth_user,
        )

    def __enter__(self) -> "AtlassianClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit - close session."""
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()
        logger.debug("Closed %s connector session", self.provider_name)

    def new_request(
        self,
        method: str,
        endpoint: str,
        content_type: str = "",
        payload: Any = None,
    ) -> RequestScheme:
        """Build a prepared request.

        Args:
            method: HTTP method
            endpoint: Path relative to base_url, query string included
            content_type: Body content type (JSON by default when a payload is given)
            payload: Pydantic model, dict or list to serialize

        Returns:
            Request descriptor

        Raises:
            RequestBuildError: If the payload cannot be serialized or the deadline passed
        """
        url = self._url(endpoint)

        if self.deadline is not None and time.time() >= self.deadline:
            raise RequestBuildError(
                "Deadline exceeded before the request was built",
                provider=self.provider_name,
                details={"url": url},
            )

        headers: dict[str, str] = {}
        data: str | None = None
        if payload is not None:
            try:
                if isinstance(payload, Scheme):
                    payload = payload.to_payload()
                data = json.dumps(payload)
            except (TypeError, ValueError) as e:
                raise RequestBuildError(
                    f"Cannot serialize payload: {e}",
                    provider=self.provider_name,
                    details={"url": url},
                ) from e
            headers["Content-Type"] = content_type or DEFAULT_CONTENT_TYPE
        elif content_type:
            headers["Content-Type"] = content_type

        prepared = self._session.prepare_request(
            requests.Request(method=method, url=url, headers=headers, data=data)
        )
        logger.debug("Built %s %s", method, url)

        return RequestScheme(
            method=method,
            endpoint=url,
            content_type=headers.get("Content-Type", ""),
            prepared=prepared,
        )

    def call(
        self,
        request: RequestScheme,
        schema: type[ModelT] | None = None,
    ) -> tuple[ModelT | None, ResponseScheme]:
        """Send a request and decode the JSON body into schema.

        Args:
            request: Request built by new_request
            schema: Result model (None to skip decoding)

        Returns:
            Tuple of decoded result and response envelope

        Raises:
            AuthenticationError: If authentication fails (401/403)
            NotFoundError: If resource not found (404)
            RateLimitError: If rate limit exceeded (429)
            AtlassianConnectionError: If the connection fails or times out
            ResponseError: For other status codes >= 400 and undecodable bodies
        """
        try:
            response = self._session.send(request.prepared, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise AtlassianConnectionError(
                f"Request timed out after {self.timeout} seconds",
                provider=self.provider_name,
                details={"url": request.endpoint, "timeout": self.timeout},
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise AtlassianConnectionError(
                "Connection failed",
                provider=self.provider_name,
                details={"url": request.endpoint},
            ) from e

        envelope = ResponseScheme(
            code=response.status_code,
            endpoint=request.endpoint,
            method=request.method,
            body=response.content,
            headers=dict(response.headers),
        )

        logger.debug(
            "%s %s -> %d (%d bytes)",
            request.method,
            request.endpoint,
            envelope.code,
            len(envelope.body),
        )

        self._raise_for_status(envelope)

        if schema is None or not envelope.body:
            return None, envelope

        try:
            return schema.model_validate(response.json()), envelope
        except ValueError as e:
            raise ResponseError(
                f"Cannot decode response body: {e}",
                response=envelope,
                provider=self.provider_name,
                details={"url": request.endpoint},
            ) from e

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _raise_for_status(self, response: ResponseScheme) -> None:
        """Map an error status code to an exception carrying the envelope."""
        if response.code < 400:
            return

        if response.code == 401:
            raise AuthenticationError(
                "Authentication failed. Check your credentials.",
                response=response,
                provider=self.provider_name,
                details={"status_code": 401},
            )

        if response.code == 403:
            raise AuthenticationError(
                "Access forbidden. Check your permissions.",
                response=response,
                provider=self.provider_name,
                details={"status_code": 403, "url": response.endpoint},
            )

        if response.code == 404:
            raise NotFoundError(
                f"Resource not found: {response.endpoint}",
                response=response,
                provider=self.provider_name,
                details={"status_code": 404, "url": response.endpoint},
            )

        if response.code == 429:
            raise RateLimitError(
                "Rate limit exceeded. Try again later.",
                retry_after=self._get_retry_after(response),
                response=response,
                provider=self.provider_name,
                details={"status_code": 429},
            )

        raise ResponseError(
            f"Request failed: {response.code}",
            response=response,
            provider=self.provider_name,
            details={"url": response.endpoint, "response": self._safe_json(response)},
        )

    @staticmethod
    def _get_retry_after(response: ResponseScheme) -> int | None:
        """Get the Retry-After delay in seconds, if the API sent one."""
        retry_after = next(
            (value for key, value in response.headers.items() if key.lower() == "retry-after"),
            None,
        )
        if retry_after:
            try:
                return int(retry_after)
            except ValueError:
                pass
        return None

    @staticmethod
    def _safe_json(response: ResponseScheme) -> Any:
        """Safely parse a JSON body, returning raw text on failure."""
        try:
            return json.loads(response.body)
        except (ValueError, TypeError):
            return response.text


class ProductClient:
    """Facade owning the connector, tracer and services of one product.

    Subclasses set the class attributes and create their services in
    ``_init_services``.

    Attributes:
        provider_name: Product identifier for logging and errors
        module: Tracing module name (span name prefix)
        tracer_name: OpenTelemetry instrumentation scope
        default_base_url: Base URL used when none is configured
        use_bearer: Authenticate with a bearer token instead of basic auth
    """

    provider_name = "atlassian"
    module = "atlassian"
    tracer_name = "atlassian_services"
    default_base_url: str | None = None
    use_bearer = False

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        connector: Connector | None = None,
        tracer_provider: Any = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the product client.

        Args:
            config: Configuration dictionary (for registry compatibility)
            connector: Connector to use instead of building an AtlassianClient
            tracer_provider: OpenTelemetry tracer provider (global provider if None)
            **kwargs: Additional arguments passed to AtlassianClient
        """
        if config:
            connector = config.get("connector", connector)
            tracer_provider = config.get("tracer_provider", tracer_provider)
            kwargs.update(
                {k: v for k, v in config.items() if k not in ("connector", "tracer_provider")}
            )

        if connector is None:
            if self.default_base_url and not kwargs.get("base_url"):
                kwargs["base_url"] = self.default_base_url
            if self.use_bearer:
                kwargs.setdefault("use_bearer", True)
            connector = AtlassianClient(provider_name=self.provider_name, **kwargs)

        self.connector = connector
        self.tracer = ModuleTracer(self.module, self.tracer_name, tracer_provider)
        self._init_services()

    def _init_services(self) -> None:
        """Create the service objects of this product."""

    def __enter__(self) -> "ProductClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit - close the connector."""
        self.close()

    def close(self) -> None:
        """Close the connector session, if it has one."""
        close = getattr(self.connector, "close", None)
        if close is not None:
            close()
        logger.info("Closed %s client", self.provider_name)
