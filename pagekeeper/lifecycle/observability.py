from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger("pagekeeper")


@dataclass(frozen=True)
class QueryEvent:
    """Represents a single data-source fetch for tracing."""

    operation: str
    source: str
    filter: dict[str, Any] | None = None
    sort: list[str] | None = None
    limit: int | None = None
    duration_ms: float = 0.0
    result_count: int | None = None
    record_type: str = ""


class _ObservabilityState:
    """Global mutable state for observability."""

    def __init__(self) -> None:
        self.enabled: bool = False
        self.slow_query_threshold_ms: float = 100.0
        self.listeners: list[Callable[[QueryEvent], Any]] = []
        self.events: list[QueryEvent] = []
        self.capture_events: bool = False


_state = _ObservabilityState()


def enable_tracing(slow_query_ms: float = 100.0, capture_events: bool = False) -> None:
    """Enable query tracing and observability."""
    _state.enabled = True
    _state.slow_query_threshold_ms = slow_query_ms
    _state.capture_events = capture_events


def disable_tracing() -> None:
    """Disable tracing and clear all state."""
    _state.enabled = False
    _state.slow_query_threshold_ms = 100.0
    _state.listeners.clear()
    _state.events.clear()
    _state.capture_events = False


def get_events() -> list[QueryEvent]:
    """Return captured events."""
    return list(_state.events)


def clear_events() -> None:
    """Clear captured events."""
    _state.events.clear()


def add_listener(callback: Callable[[QueryEvent], Any]) -> None:
    """Register a listener that receives QueryEvent on each fetch."""
    _state.listeners.append(callback)


def remove_listener(callback: Callable[[QueryEvent], Any]) -> None:
    """Remove a previously registered listener."""
    _state.listeners.remove(callback)


def emit_event(event: QueryEvent) -> None:
    """Emit a query event: store, log slow queries, notify listeners."""
    if not _state.enabled:
        return

    if _state.capture_events:
        _state.events.append(event)

    if event.duration_ms > _state.slow_query_threshold_ms:
        logger.warning(
            "Slow query: %s on %s took %.1fms (threshold: %.1fms)",
            event.operation,
            event.source,
            event.duration_ms,
            _state.slow_query_threshold_ms,
        )

    for listener in _state.listeners:
        listener(event)


@asynccontextmanager
async def track_query(
    operation: str,
    source: str,
    record_type: str = "",
    filter: dict | None = None,
    sort: list[str] | None = None,
    limit: int | None = None,
):
    """Context manager that times a fetch and emits a QueryEvent."""
    if not _state.enabled:
        yield {"result_count": None}
        return

    start = time.perf_counter()
    ctx: dict[str, Any] = {"result_count": None}
    try:
        yield ctx
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        event = QueryEvent(
            operation=operation,
            source=source,
            filter=filter,
            sort=sort,
            limit=limit,
            duration_ms=duration_ms,
            result_count=ctx.get("result_count"),
            record_type=record_type,
        )
        emit_event(event)
