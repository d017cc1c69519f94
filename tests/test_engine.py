"""Tests for the frame scheduler."""

from lightfield.animation.engine import FrameScheduler


def test_tick_runs_every_callback(scheduler):
    calls = []
    scheduler.schedule(lambda now: calls.append(("a", now)))
    scheduler.schedule(lambda now: calls.append(("b", now)))
    assert scheduler.tick(16.0) == 2
    assert calls == [("a", 16.0), ("b", 16.0)]
    assert scheduler.frame == 1


def test_cancel_stops_callback(scheduler):
    calls = []
    handle = scheduler.schedule(calls.append, name="loop")
    scheduler.tick(1.0)
    assert handle.cancel() is True
    assert handle.cancel() is False
    scheduler.tick(2.0)
    assert calls == [1.0]
    assert scheduler.active_count == 0


def test_names_are_unique(scheduler):
    a = scheduler.schedule(lambda now: None, name="fx")
    b = scheduler.schedule(lambda now: None, name="fx")
    assert a.name != b.name
    assert scheduler.cancel("fx") is True
    assert scheduler.active_count == 1


def test_callback_scheduled_during_tick_starts_next_tick(scheduler):
    calls = []

    def spawner(now):
        calls.append("spawner")
        if len(calls) == 1:
            scheduler.schedule(lambda n: calls.append("child"))

    scheduler.schedule(spawner)
    scheduler.tick(0.0)
    assert calls == ["spawner"]
    scheduler.tick(1.0)
    assert calls == ["spawner", "spawner", "child"]


def test_callback_cancelled_during_tick_does_not_run(scheduler):
    calls = []
    handles = {}

    def first(now):
        handles["second"].cancel()

    scheduler.schedule(first)
    handles["second"] = scheduler.schedule(lambda now: calls.append(now))
    scheduler.tick(0.0)
    assert calls == []


def test_failing_callback_stays_scheduled(scheduler):
    def broken(now):
        raise RuntimeError("frame failed")

    handle = scheduler.schedule(broken)
    scheduler.tick(0.0)
    scheduler.tick(1.0)
    assert handle.is_active
    assert handle.errors == 2
    assert handle.calls == 2


def test_cancel_all_and_listeners():
    scheduler = FrameScheduler()
    scheduled, cancelled = [], []
    scheduler.on_schedule(lambda h: scheduled.append(h.name))
    scheduler.on_cancel(lambda h: cancelled.append(h.name))
    scheduler.schedule(lambda now: None, name="a")
    scheduler.schedule(lambda now: None, name="b")
    assert scheduler.cancel_all() == 2
    assert scheduled == ["a", "b"]
    assert sorted(cancelled) == ["a", "b"]
    assert scheduler.tick(0.0) == 0
