"""Tests for mounted effects: lifecycle, resize and pointer routing."""

import asyncio

import pytest

from lightfield.core.events import EventType, pointer_event, resize_event
from lightfield.effects.dot_field import DotFieldEffect
from lightfield.effects.light_board import LightBoardConfig, LightBoardEffect
from lightfield.graphics.pattern import Cell


def make_board_effect(context, make_surface, **config):
    config.setdefault("text", "HI")
    config.setdefault("disable_drawing", False)
    return LightBoardEffect(context, make_surface(), LightBoardConfig(**config))


def test_enter_schedules_and_subscribes(context, bus, scheduler, make_surface):
    effect = make_board_effect(context, make_surface)
    effect.enter()
    effect.enter()
    assert effect.is_active
    assert scheduler.active_count == 1
    assert bus.handler_count(EventType.RESIZE) == 1
    assert bus.handler_count(EventType.POINTER_MOVE) == 1


def test_exit_releases_everything(context, bus, scheduler, make_surface):
    effect = make_board_effect(context, make_surface)
    effect.enter()
    handle = effect.frame_handle
    effect.exit()
    effect.exit()
    assert not effect.is_active
    assert not handle.is_active
    assert scheduler.active_count == 0
    assert bus.handler_count() == 0


def test_frames_skip_until_geometry_is_known(context, scheduler, make_surface):
    effect = make_board_effect(context, make_surface)
    effect.enter()
    scheduler.tick(0.0)
    assert effect.frames_skipped == 1
    assert effect.surface.circles == []


def test_resize_event_fits_surface_to_board(context, bus, scheduler, make_surface):
    effect = make_board_effect(context, make_surface)
    effect.enter()
    bus.emit(resize_event(100, 300, 2.0))
    assert effect.board.columns == 20
    assert effect.surface.resizes[-1] == (100.0, 25.0, 2.0)

    scheduler.tick(0.0)
    assert effect.frames_rendered == 1
    assert len(effect.surface.circles) == 20 * 5


def test_queued_resize_lands_at_frame_boundary(context, bus, scheduler, make_surface):
    effect = make_board_effect(context, make_surface)
    effect.enter()
    bus.queue_event(resize_event(50, 50))
    assert effect.board.columns == 0
    asyncio.run(bus.process_queue())
    assert effect.board.columns == 10


def test_resize_addressed_elsewhere_is_ignored(context, bus, make_surface):
    effect = make_board_effect(context, make_surface)
    effect.enter()
    bus.emit(resize_event(100, 30, target="dot_field"))
    assert effect.board.columns == 0


def test_wide_resize_recompiles_to_keep_double_width(context, make_surface):
    effect = make_board_effect(context, make_surface)
    narrow_width = effect.pattern.width
    effect.resize(100, 30)
    assert effect.recompiles == 0
    effect.resize(300, 30)
    assert effect.recompiles == 1
    assert effect.pattern.width >= 2 * effect.board.columns
    assert effect.pattern.width % narrow_width == 0


def test_pointer_events_draw_on_board(context, bus, scheduler, make_surface):
    effect = make_board_effect(context, make_surface, update_interval=None)
    effect.enter()
    effect.resize(100, 30)
    scheduler.tick(0.0)
    offset = effect.board.offset

    bus.emit(pointer_event(EventType.POINTER_DOWN, 1, 1, target="light_board"))
    bus.emit(pointer_event(EventType.POINTER_MOVE, 11, 1, target="light_board"))
    bus.emit(pointer_event(EventType.POINTER_UP, 11, 1, target="light_board"))

    width = effect.pattern.width
    for col in range(3):
        assert effect.pattern.get(0, (col + offset) % width) == Cell.ACCENT
    assert not effect.overlay.is_drawing


def test_pointer_events_for_other_targets_are_ignored(context, bus, make_surface):
    effect = make_board_effect(context, make_surface)
    effect.enter()
    effect.resize(100, 30)
    bus.emit(pointer_event(EventType.POINTER_DOWN, 1, 1, target="other"))
    assert effect.pattern.count(Cell.ACCENT) == 0


def test_drawing_disabled_by_default(context, bus, make_surface):
    effect = LightBoardEffect(context, make_surface(), LightBoardConfig(text="HI"))
    effect.enter()
    effect.resize(100, 30)
    bus.emit(pointer_event(EventType.POINTER_DOWN, 1, 1))
    assert effect.pattern.count(Cell.ACCENT) == 0


def test_hover_pauses_scrolling(context, bus, scheduler, make_surface):
    effect = make_board_effect(context, make_surface, update_interval=None)
    effect.enter()
    effect.resize(100, 30)
    scheduler.tick(0.0)
    bus.emit(pointer_event(EventType.POINTER_ENTER, 5, 5))
    frozen = effect.board.offset
    for frame in range(1, 12):
        scheduler.tick(float(frame))
    assert effect.board.offset == frozen
    bus.emit(pointer_event(EventType.POINTER_LEAVE, -1, -1))
    scheduler.tick(20.0)
    assert effect.board.offset == (frozen + 1) % effect.pattern.width


def test_controlled_hover_from_config(context, scheduler, make_surface):
    changes = []
    effect = make_board_effect(
        context,
        make_surface,
        update_interval=None,
        controlled_hover_state=True,
        on_hover_state_change=changes.append,
    )
    effect.enter()
    effect.resize(100, 30)
    for frame in range(10):
        scheduler.tick(float(frame))
    assert effect.board.offset == 0
    effect.overlay.pointer_leave()
    assert changes == [False]
    assert effect.overlay.is_hovered


def test_set_text_rows_and_font_recompile(context, make_surface):
    effect = make_board_effect(context, make_surface)
    effect.resize(100, 30)
    effect.set_text("HELLO")
    assert effect.recompiles == 1
    effect.set_text("HELLO")
    assert effect.recompiles == 1
    effect.set_rows(10)
    assert effect.board.rows == 10
    assert effect.surface.height == 50.0
    effect.set_font("compact-numeral")
    assert effect.font.name == "compact-numeral"
    assert effect.recompiles == 3


def test_switching_to_font_alias_keeps_drawing(context, make_surface):
    effect = make_board_effect(context, make_surface, text="12", font="compact-numeral")
    effect.resize(100, 30)
    effect.overlay.pointer_down(1, 1)
    effect.overlay.pointer_up()
    assert effect.pattern.count(Cell.ACCENT) == 1

    effect.set_font("7segment")
    assert effect.recompiles == 0
    assert effect.pattern.count(Cell.ACCENT) == 1


def test_unknown_font_raises(context, make_surface):
    effect = make_board_effect(context, make_surface)
    with pytest.raises(ValueError):
        effect.set_font("gothic")


def test_lost_context_skips_render(context, scheduler, make_surface):
    effect = make_board_effect(context, make_surface)
    effect.enter()
    effect.resize(100, 30)
    effect.surface.available = False
    scheduler.tick(0.0)
    assert effect.frames_skipped == 1
    assert effect.surface.circles == []


def test_dot_field_effect_lifecycle(context, bus, scheduler, make_surface, rng):
    effect = DotFieldEffect(context, make_surface(), rng=rng)
    effect.enter()
    bus.emit(resize_event(28, 28))
    scheduler.tick(0.0)
    assert effect.frames_rendered == 1
    assert len(effect.surface.circles) == 9

    effect.surface.resize(56, 56)
    scheduler.tick(16.0)
    assert effect.frames_skipped == 1

    effect.exit()
    assert scheduler.active_count == 0
    assert bus.handler_count() == 0


def test_release_hover_syncs_to_pointer(context, scheduler, make_surface):
    effect = make_board_effect(context, make_surface, update_interval=None)
    effect.enter()
    effect.resize(100, 30)
    effect.overlay.pointer_enter()
    effect.control_hover(True)
    effect.overlay.pointer_leave()
    assert effect.overlay.is_hovered

    effect.release_hover(False)
    assert not effect.overlay.is_hovered
    assert not effect.overlay.suspends_scroll
    scheduler.tick(0.0)
    scheduler.tick(1.0)
    assert effect.board.offset == 2
