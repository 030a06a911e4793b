"""Credential discovery for the Atlassian product clients.

Every value is looked up on its own, first match wins:

1. Explicit argument
2. Environment variable (``ATLASSIAN_BASE_URL``, ``ATLASSIAN_USER_EMAIL``,
   ``ATLASSIAN_API_TOKEN``, ``ATLASSIAN_BEARER_TOKEN``)
3. System keyring, service ``atlassian-services``
4. The nearest ``.env`` file at or above the working directory

Example:
    from atlassian_services.atlassian.credentials import get_bearer_token, get_credentials

    base_url, email, token = get_credentials()
    admin_key = get_bearer_token()
"""

import logging
import os
from pathlib import Path
from typing import NamedTuple

import keyring
import keyring.errors

logger = logging.getLogger(__name__)

DEFAULT_SERVICE = "atlassian-services"

ENV_BASE_URL = "ATLASSIAN_BASE_URL"
ENV_USER_EMAIL = "ATLASSIAN_USER_EMAIL"
ENV_API_TOKEN = "ATLASSIAN_API_TOKEN"  # noqa: S105
ENV_BEARER_TOKEN = "ATLASSIAN_BEARER_TOKEN"  # noqa: S105

KEYRING_BASE_URL = "base_url"
KEYRING_EMAIL = "user_email"
KEYRING_TOKEN = "api_token"  # noqa: S105
KEYRING_BEARER_TOKEN = "bearer_token"  # noqa: S105

# (field, environment variable, keyring account)
BASIC_AUTH_FIELDS = (
    ("base_url", ENV_BASE_URL, KEYRING_BASE_URL),
    ("email", ENV_USER_EMAIL, KEYRING_EMAIL),
    ("api_token", ENV_API_TOKEN, KEYRING_TOKEN),
)
BEARER_FIELD = ("bearer_token", ENV_BEARER_TOKEN, KEYRING_BEARER_TOKEN)


class AtlassianCredentials(NamedTuple):
    """Site URL plus basic auth pair."""

    base_url: str
    email: str
    api_token: str


def get_credentials(
    base_url: str | None = None,
    email: str | None = None,
    api_token: str | None = None,
    service: str = DEFAULT_SERVICE,
) -> AtlassianCredentials:
    """Resolve the site URL, user email and API token.

    Args:
        base_url: Explicit base URL
        email: Explicit user email
        api_token: Explicit API token
        service: Keyring service name

    Returns:
        AtlassianCredentials with a base URL stripped of its trailing slash

    Raises:
        ValueError: Naming every value that could not be resolved
    """
    explicit = {"base_url": base_url, "email": email, "api_token": api_token}
    values = _resolve_all(BASIC_AUTH_FIELDS, explicit, service)

    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValueError(
            f"Missing Atlassian credentials: {', '.join(missing)}. "
            f"Set {ENV_BASE_URL}, {ENV_USER_EMAIL} and {ENV_API_TOKEN}, "
            f"store them in the keyring or pass them explicitly."
        )

    return AtlassianCredentials(
        base_url=values["base_url"].rstrip("/"),
        email=values["email"],
        api_token=values["api_token"],
    )


def get_bearer_token(
    bearer_token: str | None = None,
    service: str = DEFAULT_SERVICE,
) -> str:
    """Resolve the organization API key used by the Admin API.

    Raises:
        ValueError: If no key could be resolved
    """
    values = _resolve_all((BEARER_FIELD,), {"bearer_token": bearer_token}, service)
    token = values["bearer_token"]
    if not token:
        raise ValueError(
            f"Missing Atlassian credentials: bearer_token. "
            f"Set {ENV_BEARER_TOKEN}, store it in the keyring or pass it explicitly."
        )
    return token


def save_credentials(
    base_url: str,
    email: str,
    api_token: str,
    service: str = DEFAULT_SERVICE,
    bearer_token: str | None = None,
) -> None:
    """Store credentials in the system keyring.

    The bearer token is only written when given.
    """
    stored = {KEYRING_BASE_URL: base_url, KEYRING_EMAIL: email, KEYRING_TOKEN: api_token}
    if bearer_token:
        stored[KEYRING_BEARER_TOKEN] = bearer_token

    for account, value in stored.items():
        keyring.set_password(service, account, value)
    logger.info("Stored %d credential values in keyring service %s", len(stored), service)


def delete_credentials(service: str = DEFAULT_SERVICE) -> None:
    """Remove every stored credential value from the system keyring."""
    for _, _, account in (*BASIC_AUTH_FIELDS, BEARER_FIELD):
        try:
            keyring.delete_password(service, account)
        except keyring.errors.PasswordDeleteError:
            logger.debug("No keyring entry %s/%s to delete", service, account)
    logger.info("Cleared keyring service %s", service)


def _resolve_all(
    fields: tuple[tuple[str, str, str], ...],
    explicit: dict[str, str | None],
    service: str,
) -> dict[str, str | None]:
    """Resolve each field independently; the .env file is read only if needed."""
    values: dict[str, str | None] = {}
    for name, env_var, account in fields:
        values[name] = (
            explicit.get(name) or os.environ.get(env_var) or _get_from_keyring(service, account)
        )

    if not all(values.values()):
        dotenv = _load_dotenv()
        for name, env_var, _ in fields:
            values[name] = values[name] or dotenv.get(env_var)
    return values


def _get_from_keyring(service: str, account: str) -> str | None:
    try:
        return keyring.get_password(service, account)
    except keyring.errors.KeyringError as e:
        logger.debug("Keyring lookup %s/%s failed: %s", service, account, e)
        return None


def _load_dotenv() -> dict[str, str]:
    """Parse the nearest .env file at or above the working directory.

    Supports ``KEY=value`` lines, ``#`` comments and matching single or
    double quotes around a value.
    """
    cwd = Path.cwd()
    env_file = next(
        (directory / ".env" for directory in (cwd, *cwd.parents) if (directory / ".env").is_file()),
        None,
    )
    if env_file is None:
        return {}

    logger.debug("Reading %s", env_file)
    try:
        lines = env_file.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        logger.debug("Cannot read %s: %s", env_file, e)
        return {}

    parsed: dict[str, str] = {}
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        value = value.strip()
        if len(value) >= 2 and value[0] in "\"'" and value[-1] == value[0]:
            value = value[1:-1]
        parsed[key.strip()] = value
    return parsed
