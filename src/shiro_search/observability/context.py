"""Trace ids carried alongside log records.

The ids live in a ``ContextVar`` so threads and tasks each see their own.
When OpenTelemetry spans are active, ``create_span`` mirrors the span's ids
here; otherwise random ids are generated on first use.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import TYPE_CHECKING
from uuid import uuid4


if TYPE_CHECKING:
    from opentelemetry.trace import SpanContext


trace_context: ContextVar[dict | None] = ContextVar("shiro_search_trace_context", default=None)


def _fresh_ids() -> dict[str, str]:
    return {"trace_id": uuid4().hex, "span_id": uuid4().hex[:16]}


def get_trace_context() -> dict:
    """Ids of the current context, created on first access."""
    ctx = trace_context.get()
    if not ctx or not ctx.get("trace_id"):
        ctx = _fresh_ids()
        trace_context.set(ctx)
    return ctx


def set_trace_context(trace_id: str, span_id: str, **extra: object) -> None:
    trace_context.set({"trace_id": trace_id, "span_id": span_id, **extra})


def update_span_id(span_id: str) -> None:
    """Point later log records at a child span of the same trace."""
    trace_context.set({**get_trace_context(), "span_id": span_id})


def ids_from_span(span_context: SpanContext) -> tuple[str, str]:
    """Hex trace and span ids in the W3C widths (32 and 16 characters)."""
    return format(span_context.trace_id, "032x"), format(span_context.span_id, "016x")
