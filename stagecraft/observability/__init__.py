"""stagecraft observability package."""

from stagecraft.observability.tracing import (
    SpanContext,
    current_span,
    current_trace_id,
    trace_span,
)

__all__ = ["trace_span", "current_trace_id", "current_span", "SpanContext"]
