"""Shared pytest fixtures for atlassian-services tests."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
import requests
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from atlassian_services.core.models import RequestScheme, ResponseScheme

TEST_BASE_URL = "https://test.atlassian.net"


def _fake_credentials(
    base_url: str | None = None,
    email: str | None = None,
    api_token: str | None = None,
    service: str | None = None,
) -> MagicMock:
    return MagicMock(
        base_url=(base_url or TEST_BASE_URL).rstrip("/"),
        email=email or "test@example.com",
        api_token=api_token or "test-token",
    )


@pytest.fixture
def mock_credentials() -> Iterator[MagicMock]:
    """Mock get_credentials to return test credentials."""
    with patch("atlassian_services.atlassian.base.get_credentials") as mock:
        mock.side_effect = _fake_credentials
        yield mock


@pytest.fixture
def mock_bearer_token() -> Iterator[MagicMock]:
    """Mock get_bearer_token to return a test API key."""
    with patch("atlassian_services.atlassian.base.get_bearer_token") as mock:
        mock.return_value = "test-bearer"
        yield mock


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    """Collect finished spans in memory."""
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(span_exporter: InMemorySpanExporter) -> Iterator[TracerProvider]:
    """SDK tracer provider exporting synchronously to span_exporter."""
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    yield provider
    provider.shutdown()


@pytest.fixture
def connector() -> MagicMock:
    """Connector double answering 200 with an empty body."""
    mock = MagicMock()

    def new_request(
        method: str, endpoint: str, content_type: str = "", payload: object = None
    ) -> RequestScheme:
        return RequestScheme(
            method=method,
            endpoint=endpoint,
            content_type=content_type,
            prepared=requests.PreparedRequest(),
        )

    def call(request: RequestScheme, schema: object = None) -> tuple[None, ResponseScheme]:
        return None, ResponseScheme(code=200, endpoint=request.endpoint, method=request.method)

    mock.new_request.side_effect = new_request
    mock.call.side_effect = call
    return mock
