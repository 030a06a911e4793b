"""OpenTelemetry tracing helpers shared by every product module.

Each product module owns a tracer name (e.g. ``atlassian_services.admin``).
A tracer provider can be injected per client; without one the process-wide
provider registered through ``opentelemetry.trace.set_tracer_provider`` is
used, resolved lazily on first use.

Example:
    from opentelemetry.sdk.trace import TracerProvider

    tracer = ModuleTracer("admin", "atlassian_services.admin", TracerProvider())
    with tracer.traced("organization.directory.activity") as span:
        tracer.set_span_attributes(span, "GET", "admin/v1/orgs/...")
        tracer.set_span_response(span, 200)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from http import HTTPStatus
from typing import Any

from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.trace import Span, Status, StatusCode

logger = logging.getLogger(__name__)

COMPONENT = "atlassian-services"

# Attribute keys
ATTR_HTTP_METHOD = "http.method"
ATTR_HTTP_URL = "http.url"
ATTR_HTTP_STATUS_CODE = "http.status_code"
ATTR_COMPONENT = "component"
ATTR_MODULE = "module"
ATTR_OPERATION = "operation"


def status_reason(status_code: int) -> str:
    """Standard reason phrase for a status code ('' when unknown)."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


class ModuleTracer:
    """Tracer handle and span helpers for one product module.

    Attributes:
        module: Module name used as span name prefix and ``module`` attribute
        tracer_name: Instrumentation scope name
    """

    def __init__(
        self,
        module: str,
        tracer_name: str,
        tracer_provider: trace.TracerProvider | None = None,
    ) -> None:
        self.module = module
        self.tracer_name = tracer_name
        self._tracer_provider = tracer_provider
        self._tracer: trace.Tracer | None = None

    def get_tracer(self) -> trace.Tracer:
        """Return the tracer for this module."""
        if self._tracer is None:
            provider = self._tracer_provider or trace.get_tracer_provider()
            self._tracer = provider.get_tracer(self.tracer_name)
        return self._tracer

    def start_span(self, name: str, context: Context | None = None, **kwargs: Any) -> Span:
        """Start a new span (not made current)."""
        return self.get_tracer().start_span(name, context=context, **kwargs)

    def set_span_attributes(
        self,
        span: Span,
        method: str,
        endpoint: str,
        operation: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        """Set HTTP request attributes on the span.

        Args:
            span: Span to annotate
            method: HTTP method
            endpoint: Request endpoint
            operation: Operation name within the module
            attributes: Domain attributes (e.g. ``content.id``, ``pagination.start``)
        """
        span.set_attribute(ATTR_HTTP_METHOD, method)
        span.set_attribute(ATTR_HTTP_URL, endpoint)
        span.set_attribute(ATTR_COMPONENT, COMPONENT)
        span.set_attribute(ATTR_MODULE, self.module)
        if operation:
            span.set_attribute(ATTR_OPERATION, operation)
        for key, value in (attributes or {}).items():
            if value is not None:
                span.set_attribute(key, value)

    @staticmethod
    def set_span_error(span: Span, err: BaseException | None) -> None:
        """Mark the span as failed and record the error."""
        if err is None:
            return
        span.set_status(Status(StatusCode.ERROR, str(err)))
        span.record_exception(err)

    @staticmethod
    def set_span_response(span: Span, status_code: int) -> None:
        """Set the response status code and classify the span status."""
        span.set_attribute(ATTR_HTTP_STATUS_CODE, status_code)
        if status_code >= 400:
            span.set_status(Status(StatusCode.ERROR, status_reason(status_code)))
        else:
            span.set_status(Status(StatusCode.OK))

    @staticmethod
    def finish_span(span: Span) -> None:
        """End the span."""
        span.end()

    @contextmanager
    def traced(self, operation: str, context: Context | None = None) -> Iterator[Span]:
        """Bracket a call with a span named ``<module>.<operation>``.

        The span is current inside the block, records any escaping exception
        and is ended exactly once on every exit path.
        """
        span = self.start_span(f"{self.module}.{operation}", context=context)
        try:
            with trace.use_span(
                span,
                end_on_exit=False,
                record_exception=False,
                set_status_on_exception=False,
            ):
                yield span
        except Exception as e:
            self.set_span_error(span, e)
            raise
        finally:
            self.finish_span(span)
