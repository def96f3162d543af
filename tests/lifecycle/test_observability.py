import logging

from pydantic import BaseModel

from pagekeeper import CursorPagination, LimitOffsetPagination, MemorySource
from pagekeeper.lifecycle.observability import (
    QueryEvent,
    add_listener,
    clear_events,
    disable_tracing,
    enable_tracing,
    get_events,
    remove_listener,
)

URL = "https://api.example.com/tracked"


class Tracked(BaseModel):
    id: int
    name: str


def _source() -> MemorySource[Tracked]:
    return MemorySource([Tracked(id=i, name="even" if i % 2 == 0 else "odd") for i in range(1, 21)])


class TestObservability:
    async def test_tracing_disabled_by_default(self):
        await _source().all()
        assert get_events() == []

    async def test_enable_tracing_captures_events(self):
        enable_tracing(capture_events=True)
        rows = await _source().where("id", "gt", 15).sort("-id").limit(3).all()
        events = get_events()
        assert len(events) == 1
        event = events[0]
        assert event.operation == "find"
        assert event.source == "memory"
        assert event.record_type == "Tracked"
        assert event.filter == {"id": {"$gt": 15}}
        assert event.sort == ["-id"]
        assert event.limit == 3
        assert event.result_count == len(rows) == 3
        assert event.duration_ms >= 0

    async def test_disable_tracing_clears_state(self):
        enable_tracing(capture_events=True)
        await _source().count()
        assert len(get_events()) == 1
        disable_tracing()
        assert get_events() == []

    async def test_slow_query_logs_warning(self, caplog):
        enable_tracing(slow_query_ms=-1.0)
        with caplog.at_level(logging.WARNING, logger="pagekeeper"):
            await _source().all()
        assert any("Slow query" in record.message for record in caplog.records)

    async def test_listeners_receive_events_until_removed(self):
        received: list[QueryEvent] = []
        enable_tracing()
        add_listener(received.append)
        await _source().count()
        remove_listener(received.append)
        await _source().count()
        assert [e.operation for e in received] == ["count"]
        assert received[0].result_count == 20

    async def test_cursor_page_is_a_single_fetch(self):
        enable_tracing(capture_events=True)
        paginator = CursorPagination(5)
        first = await paginator.paginate(_source(), URL, {"name": "odd"})
        clear_events()

        await paginator.paginate(_source(), URL, first.next.split("?", 1)[1])
        events = get_events()
        assert [e.operation for e in events] == ["find"]
        assert events[0].filter == {"name": {"$eq": "odd"}, "id": {"$gt": 9}}
        assert events[0].limit == 6

    async def test_limit_offset_page_counts_then_fetches(self):
        enable_tracing(capture_events=True)
        await LimitOffsetPagination(5).paginate(_source(), URL, "offset=5")
        assert [e.operation for e in get_events()] == ["count", "find"]
