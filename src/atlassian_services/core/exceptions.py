"""Exception hierarchy and error sentinels for atlassian-services.

Precondition failures are reported through pre-allocated sentinel instances
of MissingParameterError. The sentinels themselves are never raised; each
failure raises a copy that compares equal to its sentinel:

    try:
        jira.search.get("")
    except MissingParameterError as e:
        assert e == ERR_NO_JQL
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from atlassian_services.core.models import ResponseScheme


class AtlassianError(Exception):
    """Base exception for all atlassian-services errors."""

    def __init__(self, message: str, provider: str | None = None, details: dict | None = None):
        """Initialize AtlassianError.

        Args:
            message: Error message
            provider: Product name (e.g., 'jira', 'admin')
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation."""
        if self.provider:
            return f"[{self.provider}] {self.message}"
        return self.message


class MissingParameterError(AtlassianError):
    """A required argument was empty."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        provider: str | None = None,
        details: dict | None = None,
    ):
        """Initialize MissingParameterError.

        Args:
            message: Error message
            field: Argument that was missing
            provider: Product name
            details: Additional error details
        """
        super().__init__(message, provider, details)
        self.field = field
        self._origin: MissingParameterError | None = None

    def _key(self) -> MissingParameterError:
        return self if self._origin is None else self._origin

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MissingParameterError):
            return NotImplemented
        return self._key() is other._key()

    def __hash__(self) -> int:
        return id(self._key())

    def copy(self) -> MissingParameterError:
        """Return a fresh instance that compares equal to this error.

        Sentinels are raised through copies so that raising never writes
        ``__traceback__`` or ``__context__`` onto the shared instance.
        """
        error = MissingParameterError(
            self.message, field=self.field, provider=self.provider, details=dict(self.details)
        )
        error._origin = self._key()
        return error


class RequestBuildError(AtlassianError):
    """The HTTP request could not be built."""


class AtlassianConnectionError(AtlassianError):
    """Connection to the Atlassian API failed."""


class ResponseError(AtlassianError):
    """The API answered with a status code >= 400."""

    def __init__(
        self,
        message: str,
        response: ResponseScheme | None = None,
        provider: str | None = None,
        details: dict | None = None,
    ):
        """Initialize ResponseError.

        Args:
            message: Error message
            response: Response envelope of the failed call
            provider: Product name
            details: Additional error details
        """
        super().__init__(message, provider, details)
        self.response = response

    @property
    def status_code(self) -> int | None:
        """HTTP status code of the failed call."""
        if self.response is None:
            return None
        return self.response.code


class AuthenticationError(ResponseError):
    """Authentication failed or access was forbidden."""


class NotFoundError(ResponseError):
    """Resource not found."""


class RateLimitError(ResponseError):
    """Rate limit exceeded."""

    def __init__(
        self,
        message: str,
        retry_after: int | None = None,
        response: ResponseScheme | None = None,
        provider: str | None = None,
        details: dict | None = None,
    ):
        """Initialize RateLimitError.

        Args:
            message: Error message
            retry_after: Seconds until retry is allowed
            response: Response envelope of the failed call
            provider: Product name
            details: Additional error details
        """
        super().__init__(message, response, provider, details)
        self.retry_after = retry_after


def _sentinel(provider: str, field: str, message: str) -> MissingParameterError:
    return MissingParameterError(message, field=field, provider=provider)


# Admin
ERR_NO_ADMIN_ORGANIZATION = _sentinel("admin", "organization_id", "no organization id set")
ERR_NO_ADMIN_ACCOUNT_ID = _sentinel("admin", "account_id", "no account id set")
ERR_NO_ADMIN_DOMAIN_ID = _sentinel("admin", "domain_id", "no domain id set")
ERR_NO_ADMIN_EVENT_ID = _sentinel("admin", "event_id", "no event id set")

# Confluence
ERR_NO_CONTENT_ID = _sentinel("confluence", "content_id", "no content id set")
ERR_NO_TEMPLATE_ID = _sentinel("confluence", "template_id", "no template id set")
ERR_NO_PAGE_ID = _sentinel("confluence", "page_id", "no page id set")
ERR_NO_SPACE_ID = _sentinel("confluence", "space_id", "no space id set")
ERR_NO_CONTENT_TITLE = _sentinel("confluence", "title", "no content title set")

# Jira
ERR_NO_JQL = _sentinel("jira", "jql", "no jql set")
ERR_NO_ISSUE_KEY_OR_ID = _sentinel("jira", "issue_key_or_id", "no issue key or id set")
ERR_NO_ACCOUNT_ID = _sentinel("jira", "account_id", "no account id set")
ERR_NO_COMMENT_ID = _sentinel("jira", "comment_id", "no comment id set")
ERR_NO_BOARD_ID = _sentinel("agile", "board_id", "no board id set")
ERR_NO_SPRINT_ID = _sentinel("agile", "sprint_id", "no sprint id set")

# Service Management
ERR_NO_SERVICE_DESK_ID = _sentinel("jsm", "service_desk_id", "no service desk id set")
ERR_NO_CUSTOMER_MAIL = _sentinel("jsm", "email", "no customer mail set")
ERR_NO_CUSTOMER_DISPLAY_NAME = _sentinel("jsm", "display_name", "no customer display name set")

# Assets
ERR_NO_WORKSPACE_ID = _sentinel("assets", "workspace_id", "no workspace id set")
ERR_NO_OBJECT_ID = _sentinel("assets", "object_id", "no object id set")
ERR_NO_AQL_QUERY = _sentinel("assets", "aql", "no aql query set")

# Bitbucket
ERR_NO_WORKSPACE = _sentinel("bitbucket", "workspace", "no workspace set")
ERR_NO_REPOSITORY = _sentinel("bitbucket", "repo_slug", "no repository slug set")

SENTINELS: tuple[MissingParameterError, ...] = tuple(
    value for name, value in list(globals().items()) if name.startswith("ERR_NO_")
)


def is_sentinel(error: Any) -> bool:
    """Check whether an error is one of the pre-allocated sentinels or a copy of one."""
    return isinstance(error, MissingParameterError) and error in SENTINELS
