"""Observability module: structured logging, Prometheus metrics and OpenTelemetry tracing."""

from shiro_search.observability.context import get_trace_context, set_trace_context, trace_context
from shiro_search.observability.logging import JsonFormatter, configure_logging
from shiro_search.observability.metrics import (
    INDEX_DOCUMENT_COUNT,
    INDEX_REBUILD_LATENCY,
    INDEX_TOKEN_COUNT,
    SEARCH_LATENCY,
    SEARCH_REQUESTS,
    get_metrics,
    get_metrics_content_type,
    record_request,
    track_latency,
)
from shiro_search.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "INDEX_DOCUMENT_COUNT",
    "INDEX_REBUILD_LATENCY",
    "INDEX_TOKEN_COUNT",
    "SEARCH_LATENCY",
    "SEARCH_REQUESTS",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "record_request",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
