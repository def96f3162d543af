from pagekeeper.lifecycle.observability import (
    enable_tracing,
    disable_tracing,
    get_events,
    clear_events,
    QueryEvent,
    add_listener,
    remove_listener,
    track_query,
)

__all__ = [
    "enable_tracing",
    "disable_tracing",
    "get_events",
    "clear_events",
    "QueryEvent",
    "add_listener",
    "remove_listener",
    "track_query",
]
