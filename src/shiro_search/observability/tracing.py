"""OpenTelemetry spans around index rebuilds and queries.

Only the API is used at call sites. Until ``init_tracing`` installs an SDK
provider the global proxy tracer hands out non-recording spans, and
``create_span`` leaves the logging trace context alone.
"""

from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider

from shiro_search.observability.context import get_trace_context, ids_from_span, set_trace_context


if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

    from opentelemetry.trace import Span, Tracer

logger = logging.getLogger(__name__)

TRACER_NAME = "shiro_search"


def init_tracing(
    service_name: str = "shiro-search",
    resource_attributes: Mapping[str, str] | None = None,
) -> TracerProvider:
    """Install a process-wide SDK tracer provider and return it for exporter wiring."""
    resource = Resource.create({**(resource_attributes or {}), "service.name": service_name})
    provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(provider)
    logger.info("Tracing enabled for %s", service_name)
    return provider


def get_tracer() -> Tracer:
    # Resolved per call so a provider installed later takes effect
    return trace.get_tracer(TRACER_NAME)


@contextmanager
def create_span(name: str, attributes: dict[str, Any] | None = None) -> Generator[Span, None, None]:
    """Start a span and mirror its ids into the logging trace context while it is open."""
    with get_tracer().start_as_current_span(name, attributes=attributes or {}) as span:
        span_context = span.get_span_context()
        if not span_context.is_valid:
            yield span
            return
        restore = dict(get_trace_context())
        set_trace_context(*ids_from_span(span_context))
        try:
            yield span
        finally:
            set_trace_context(**restore)
