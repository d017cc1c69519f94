"""Tests for the event bus."""

import asyncio

from lightfield.core.events import (
    Event,
    EventBus,
    EventType,
    pointer_event,
    resize_event,
)


def test_subscribe_emit_unsubscribe(bus):
    seen = []
    unsubscribe = bus.subscribe(EventType.POINTER_DOWN, seen.append)
    bus.emit(pointer_event(EventType.POINTER_DOWN, 1, 2))
    unsubscribe()
    bus.emit(pointer_event(EventType.POINTER_DOWN, 3, 4))
    assert len(seen) == 1
    assert seen[0].data["x"] == 1
    assert bus.handler_count(EventType.POINTER_DOWN) == 0


def test_handler_errors_are_contained(bus):
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.POINTER_UP, broken)
    bus.subscribe(EventType.POINTER_UP, seen.append)
    bus.emit(Event(EventType.POINTER_UP))
    assert len(seen) == 1


def test_target_filtering():
    event = pointer_event(EventType.POINTER_MOVE, 0, 0, target="light_board")
    assert event.is_for("light_board")
    assert not event.is_for("dot_field")
    assert Event(EventType.RESIZE).is_for("anything")


def test_resize_events_are_queued_until_processed(bus):
    seen = []
    bus.subscribe(EventType.RESIZE, seen.append)
    bus.queue_event(resize_event(640, 480, 2.0))
    assert bus.pending == 1
    assert seen == []

    asyncio.run(bus.process_queue())

    assert bus.pending == 0
    assert seen[0].data == {"width": 640, "height": 480, "device_pixel_ratio": 2.0, "target": None}


def test_async_handlers_run_on_emit_async(bus):
    seen = []

    async def handler(event):
        seen.append(event.type)

    bus.subscribe(EventType.POINTER_LEAVE, handler)
    bus.emit(Event(EventType.POINTER_LEAVE))
    assert seen == []
    asyncio.run(bus.emit_async(Event(EventType.POINTER_LEAVE)))
    assert seen == [EventType.POINTER_LEAVE]


def test_history(bus):
    for i in range(3):
        bus.emit(pointer_event(EventType.POINTER_MOVE, i, 0))
    bus.emit(Event(EventType.POINTER_UP))
    assert [e.data["x"] for e in bus.get_history(EventType.POINTER_MOVE)] == [0, 1, 2]
    assert len(bus.get_history(limit=2)) == 2
    bus.clear_history()
    assert bus.get_history() == []
