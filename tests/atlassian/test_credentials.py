"""Tests for credential resolution and keyring storage."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from atlassian_services.atlassian.credentials import (
    DEFAULT_SERVICE,
    ENV_API_TOKEN,
    ENV_BASE_URL,
    ENV_BEARER_TOKEN,
    ENV_USER_EMAIL,
    KEYRING_BEARER_TOKEN,
    _load_dotenv,
    delete_credentials,
    get_bearer_token,
    get_credentials,
    save_credentials,
)

ALL_ENV_VARS = [ENV_BASE_URL, ENV_USER_EMAIL, ENV_API_TOKEN, ENV_BEARER_TOKEN]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    """Unset credential variables and run from a directory without .env."""
    for var in ALL_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def mock_keyring() -> Iterator[MagicMock]:
    """Keyring that holds nothing."""
    with patch("atlassian_services.atlassian.credentials.keyring") as mock:
        mock.get_password.return_value = None
        yield mock


class TestGetCredentials:
    """Tests for get_credentials."""

    def test_explicit_credentials(self) -> None:
        """Test that explicit values are used and the URL is normalized."""
        creds = get_credentials(
            base_url="https://test.atlassian.net/",
            email="test@example.com",
            api_token="test-token",
        )
        assert creds == ("https://test.atlassian.net", "test@example.com", "test-token")

    def test_env_variables(self, clean_env: pytest.MonkeyPatch, mock_keyring: MagicMock) -> None:
        """Test resolution from environment variables."""
        clean_env.setenv(ENV_BASE_URL, "https://env.atlassian.net")
        clean_env.setenv(ENV_USER_EMAIL, "env@example.com")
        clean_env.setenv(ENV_API_TOKEN, "env-token")

        creds = get_credentials()

        assert creds.base_url == "https://env.atlassian.net"
        assert creds.email == "env@example.com"
        assert creds.api_token == "env-token"
        mock_keyring.get_password.assert_not_called()

    def test_explicit_overrides_env(
        self, clean_env: pytest.MonkeyPatch, mock_keyring: MagicMock
    ) -> None:
        """Test that each explicit value overrides only its own variable."""
        clean_env.setenv(ENV_BASE_URL, "https://env.atlassian.net")
        clean_env.setenv(ENV_USER_EMAIL, "env@example.com")
        clean_env.setenv(ENV_API_TOKEN, "env-token")

        creds = get_credentials(base_url="https://explicit.atlassian.net")

        assert creds.base_url == "https://explicit.atlassian.net"
        assert creds.email == "env@example.com"

    def test_keyring_fallback(
        self, clean_env: pytest.MonkeyPatch, mock_keyring: MagicMock
    ) -> None:
        """Test resolution from the keyring under the project service name."""
        stored = {
            "base_url": "https://keyring.atlassian.net",
            "user_email": "keyring@example.com",
            "api_token": "keyring-token",
        }
        mock_keyring.get_password.side_effect = lambda service, key: stored.get(key)

        creds = get_credentials()

        assert creds.base_url == "https://keyring.atlassian.net"
        mock_keyring.get_password.assert_any_call(DEFAULT_SERVICE, "api_token")

    def test_dotenv_fallback(self, clean_env: pytest.MonkeyPatch, mock_keyring: MagicMock) -> None:
        """Test that a .env file fills in what is still missing."""
        Path(".env").write_text(
            f"{ENV_BASE_URL}=https://dotenv.atlassian.net\n"
            f"{ENV_USER_EMAIL}=dotenv@example.com\n"
            f"{ENV_API_TOKEN}=dotenv-token\n"
        )
        clean_env.setenv(ENV_USER_EMAIL, "env@example.com")

        creds = get_credentials()

        assert creds.base_url == "https://dotenv.atlassian.net"
        assert creds.email == "env@example.com"
        assert creds.api_token == "dotenv-token"

    def test_missing_credentials_raises(
        self, clean_env: pytest.MonkeyPatch, mock_keyring: MagicMock
    ) -> None:
        """Test that the error names every missing value."""
        clean_env.setenv(ENV_BASE_URL, "https://env.atlassian.net")

        with pytest.raises(ValueError) as exc_info:
            get_credentials()

        message = str(exc_info.value)
        assert "Missing Atlassian credentials: email, api_token" in message


class TestGetBearerToken:
    """Tests for get_bearer_token."""

    def test_explicit(self) -> None:
        """Test that an explicit token is returned unchanged."""
        assert get_bearer_token("explicit-key") == "explicit-key"

    def test_env_variable(self, clean_env: pytest.MonkeyPatch, mock_keyring: MagicMock) -> None:
        """Test resolution from the environment."""
        clean_env.setenv(ENV_BEARER_TOKEN, "env-key")
        assert get_bearer_token() == "env-key"

    def test_keyring(self, clean_env: pytest.MonkeyPatch, mock_keyring: MagicMock) -> None:
        """Test resolution from the keyring."""
        mock_keyring.get_password.side_effect = lambda service, key: (
            "keyring-key" if key == KEYRING_BEARER_TOKEN else None
        )
        assert get_bearer_token() == "keyring-key"

    def test_missing(self, clean_env: pytest.MonkeyPatch, mock_keyring: MagicMock) -> None:
        """Test that a missing token raises ValueError."""
        with pytest.raises(ValueError, match="bearer_token"):
            get_bearer_token()


class TestKeyringStorage:
    """Tests for save_credentials and delete_credentials."""

    def test_save_credentials(self, mock_keyring: MagicMock) -> None:
        """Test saving basic auth credentials."""
        save_credentials(
            base_url="https://test.atlassian.net",
            email="test@example.com",
            api_token="test-token",
        )

        assert mock_keyring.set_password.call_count == 3
        mock_keyring.set_password.assert_any_call(
            DEFAULT_SERVICE, "base_url", "https://test.atlassian.net"
        )
        mock_keyring.set_password.assert_any_call(DEFAULT_SERVICE, "user_email", "test@example.com")

    def test_save_bearer_token(self, mock_keyring: MagicMock) -> None:
        """Test that the Admin API key is saved when given."""
        save_credentials(
            base_url="https://test.atlassian.net",
            email="test@example.com",
            api_token="test-token",
            service="custom-service",
            bearer_token="admin-key",
        )

        assert mock_keyring.set_password.call_count == 4
        mock_keyring.set_password.assert_any_call("custom-service", "bearer_token", "admin-key")

    def test_delete_credentials(self, mock_keyring: MagicMock) -> None:
        """Test deleting every stored value."""
        mock_keyring.errors.PasswordDeleteError = Exception

        delete_credentials()

        assert mock_keyring.delete_password.call_count == 4
        mock_keyring.delete_password.assert_any_call(DEFAULT_SERVICE, "bearer_token")

    def test_delete_handles_missing(self, mock_keyring: MagicMock) -> None:
        """Test that values already gone are skipped."""

        class PasswordDeleteError(Exception):
            pass

        mock_keyring.errors.PasswordDeleteError = PasswordDeleteError
        mock_keyring.delete_password.side_effect = PasswordDeleteError

        delete_credentials()

        assert mock_keyring.delete_password.call_count == 4


class TestLoadDotenv:
    """Tests for _load_dotenv."""

    def test_quotes_and_comments(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test quoted values and comment lines."""
        Path(".env").write_text(
            "# credentials\nKEY1=\"double quoted\"\nKEY2='single quoted'\n\nKEY3 = plain\n"
        )

        result = _load_dotenv()

        assert result == {"KEY1": "double quoted", "KEY2": "single quoted", "KEY3": "plain"}

    def test_parent_directory(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Test that the search walks up from the working directory."""
        (tmp_path / ".env").write_text("KEY1=parent\n")
        child = tmp_path / "child"
        child.mkdir()
        clean_env.chdir(child)

        assert _load_dotenv() == {"KEY1": "parent"}
