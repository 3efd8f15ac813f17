"""Span tracing for pipeline phase calls.

``trace_span()`` nests through a ContextVar: child spans inherit the trace id
of the active span. Finished spans are written to the ``stagecraft.trace``
logger.
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Dict, Generator, Optional

logger = logging.getLogger("stagecraft.trace")


@dataclass
class SpanContext:
    """Context for a single traced span."""

    trace_id: str = ""
    span_id: str = ""
    parent_span_id: Optional[str] = None
    name: str = ""
    start_time: float = 0.0
    attributes: Dict[str, Any] = field(default_factory=dict)


_current_span: ContextVar[Optional[SpanContext]] = ContextVar("_current_span", default=None)


@contextmanager
def trace_span(
    name: str,
    attributes: Optional[Dict[str, Any]] = None,
    level: int = logging.DEBUG,
) -> Generator[SpanContext, None, None]:
    """Create a traced span with automatic parent-child nesting.

    Args:
        name: Span name using dot notation (e.g., "pipeline.forward.Auth").
        attributes: Key-value pairs attached to the span record.
        level: Logging level the finished span is written at.

    Yields:
        SpanContext with a mutable attributes dict. Attributes added inside
        the span are included in the logged record.
    """
    parent = _current_span.get()
    trace_id = parent.trace_id if parent else uuid.uuid4().hex[:16]

    span = SpanContext(
        trace_id=trace_id,
        span_id=uuid.uuid4().hex[:12],
        parent_span_id=parent.span_id if parent else None,
        name=name,
        start_time=perf_counter(),
        attributes=dict(attributes) if attributes else {},
    )

    token = _current_span.set(span)
    error_info = None

    try:
        yield span
    except Exception as e:
        error_info = e
        raise
    finally:
        duration_ms = (perf_counter() - span.start_time) * 1000.0
        # Structural fields go on top so user attributes cannot clobber them.
        event_data = {
            **span.attributes,
            "name": name,
            "trace_id": span.trace_id,
            "span_id": span.span_id,
            "parent_span_id": span.parent_span_id,
            "duration_ms": round(duration_ms, 2),
            "status": "error" if error_info is not None else "ok",
        }
        if error_info is not None:
            event_data["error"] = str(error_info)

        logger.log(level, "span %s", name, extra={"span": event_data})
        _current_span.reset(token)


def current_trace_id() -> Optional[str]:
    """Return the active trace_id, or None if no span is active."""
    span = _current_span.get()
    return span.trace_id if span else None


def current_span() -> Optional[SpanContext]:
    """Return the active SpanContext, or None if no span is active."""
    return _current_span.get()


__all__ = ["trace_span", "current_trace_id", "current_span", "SpanContext"]
