"""Prometheus metrics for index and query golden signals."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


SEARCH_LATENCY = Histogram(
    "shiro_search_latency_seconds",
    "Search operation latency",
    ["operation"],
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25),
)

SEARCH_REQUESTS = Counter(
    "shiro_search_requests_total",
    "Search operations by outcome",
    ["operation", "status"],
)

INDEX_REBUILD_LATENCY = Histogram(
    "shiro_search_index_rebuild_seconds",
    "Full index rebuild latency",
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
)

INDEX_DOCUMENT_COUNT = Gauge(
    "shiro_search_index_documents",
    "Documents in the current index",
)

INDEX_TOKEN_COUNT = Gauge(
    "shiro_search_index_tokens",
    "Distinct tokens in the current index",
)


@contextmanager
def track_latency(histogram: Histogram, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        target = histogram.labels(**labels) if labels else histogram
        target.observe(time.perf_counter() - start)


def record_request(operation: str, result_count: int) -> None:
    SEARCH_REQUESTS.labels(operation=operation, status="hit" if result_count else "empty").inc()


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get content type for metrics exposition."""
    return CONTENT_TYPE_LATEST
