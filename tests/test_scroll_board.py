"""Tests for the scrolling board renderer."""

import numpy as np
import pytest

from lightfield.animation.scroll_board import (
    FrameSyncedTiming,
    IntervalTiming,
    ScrollBoardRenderer,
    make_timing,
)
from lightfield.graphics.palette import BoardColors
from lightfield.graphics.surface import BufferSurface
from lightfield.graphics.pattern import Cell, PatternBuffer, compile_pattern


def make_board(width=48, rows=5, **kwargs):
    return ScrollBoardRenderer(PatternBuffer.blank(rows, width), **kwargs)


def test_columns_from_container_width():
    board = make_board(light_size=4, gap=1)
    assert board.resize(100) == 20
    assert board.resize(104) == 20
    assert board.resize(3) == 0
    assert board.pixel_size == (0.0, 25.0)


def test_offset_after_n_steps():
    board = make_board(width=48)
    for n in range(1, 200):
        board.advance()
        assert board.offset == n % 48
        assert 0 <= board.offset < 48


def test_frame_synced_timing_advances_every_tick():
    board = make_board(timing=FrameSyncedTiming())
    for now in range(10):
        assert board.tick(float(now)) is True
    assert board.offset == 10


def test_interval_timing_is_throttled():
    board = make_board(timing=IntervalTiming(10))
    results = [board.tick(now) for now in (0.0, 5.0, 10.0, 15.0, 19.9, 25.0)]
    assert results == [True, False, True, False, False, True]
    assert board.offset == 3


def test_make_timing():
    assert isinstance(make_timing(None), FrameSyncedTiming)
    timing = make_timing(10)
    assert isinstance(timing, IntervalTiming)
    assert timing.interval_ms == 10.0
    with pytest.raises(ValueError):
        make_timing(-1)


def test_suspension_freezes_offset_then_resumes():
    board = make_board(width=48)
    for _ in range(5):
        board.tick(0.0)
    frozen = board.offset
    for frame in range(12):
        assert board.tick(float(frame), suspended=True) is False
        assert board.offset == frozen
    board.tick(100.0)
    assert board.offset == frozen + 1


def test_render_draws_visible_window(make_surface):
    board = make_board(width=48)
    board.resize(50)
    surface = make_surface(50, 25)
    assert board.render(surface) is True
    assert len(surface.clears) == 1
    assert len(surface.circles) == 10 * 5
    xs = sorted({c[0] for c in surface.circles})
    assert xs[0] == 2.0 and xs[-1] == 47.0
    assert all(c[2] == 2.0 for c in surface.circles)


def test_render_uses_palette_per_state(make_surface):
    cells = np.array([[0, 1, 2, 3, 7]])
    colors = BoardColors(
        background=(1, 1, 1, 0.1),
        dim=(2, 2, 2, 0.2),
        accent=(3, 3, 3, 0.3),
        bright=(4, 4, 4, 0.4),
    )
    board = ScrollBoardRenderer(PatternBuffer(cells), light_size=4, gap=0, colors=colors)
    board.resize(20)
    surface = make_surface(20, 4)
    board.render(surface)
    by_x = {c[0]: c[3] for c in surface.circles}
    assert by_x[2.0] == (1, 1, 1, 0.1)
    assert by_x[6.0] == (2, 2, 2, 0.2)
    assert by_x[10.0] == (3, 3, 3, 0.3)
    assert by_x[14.0] == (4, 4, 4, 0.4)
    assert by_x[18.0] == (1, 1, 1, 0.1)


def test_render_reads_window_at_offset(make_surface):
    cells = np.zeros((1, 8), dtype=np.int8)
    cells[0, 5] = Cell.BRIGHT
    board = ScrollBoardRenderer(PatternBuffer(cells), light_size=4, gap=1)
    board.resize(20)
    for _ in range(3):
        board.advance()
    surface = make_surface(20, 5)
    board.render(surface)
    bright = [c for c in surface.circles if c[3] == board.colors.bright]
    assert [c[0] for c in bright] == [2 * 5 + 2.0]


def test_render_skips_without_geometry_or_surface(make_surface):
    board = make_board()
    surface = make_surface(10, 10)
    assert board.render(surface) is False
    board.resize(50)
    assert board.render(None) is False
    surface.available = False
    assert board.render(surface) is False
    assert surface.circles == []


def test_paint_cell_redraws_one_light(make_surface):
    board = make_board()
    board.resize(50)
    surface = make_surface(50, 25)
    board.paint_cell(surface, 2, 3, Cell.ACCENT)
    assert surface.clears == [(15.0, 10.0, 5.0, 5.0)]
    assert surface.circles == [(17.0, 12.0, 2.0, board.colors.accent)]


def test_set_pattern_folds_offset():
    board = make_board(width=48)
    for _ in range(40):
        board.advance()
    board.set_pattern(PatternBuffer.blank(5, 16))
    assert board.offset == 40 % 16


def test_buffer_column_translation():
    board = make_board(width=10)
    for _ in range(8):
        board.advance()
    assert board.buffer_column(0) == 8
    assert board.buffer_column(3) == 1


def test_window_never_needs_splicing():
    pattern = compile_pattern("SCROLL", rows=5, columns=30)
    board = ScrollBoardRenderer(pattern)
    board.resize(30 * board.pitch)
    assert board.columns == 30
    assert pattern.width >= 2 * board.columns


def test_invalid_geometry_rejected():
    with pytest.raises(ValueError):
        make_board(light_size=0)
    with pytest.raises(ValueError):
        make_board(gap=-1)


def test_full_board_keeps_gaps_between_lights():
    pattern = PatternBuffer(np.full((5, 80), Cell.BRIGHT, dtype=np.int8))
    board = ScrollBoardRenderer(pattern, light_size=4, gap=1)
    board.resize(40)
    surface = BufferSurface(*board.pixel_size)

    assert board.render(surface) is True
    for col in range(board.columns):
        gap_x = col * board.pitch + 4.5
        for y in range(25):
            assert surface.alpha_at(gap_x, y + 0.5) == 0.0
    for row in range(board.rows):
        gap_y = row * board.pitch + 4.5
        for x in range(40):
            assert surface.alpha_at(x + 0.5, gap_y) == 0.0

    # each light is four pixels wide through its middle
    lit = [x for x in range(5) if surface.alpha_at(x + 0.5, 2.5) > 0.0]
    assert lit == [0, 1, 2, 3]


def test_paint_cell_stays_inside_its_light():
    board = make_board(width=48, light_size=4, gap=1)
    board.resize(40)
    surface = BufferSurface(*board.pixel_size)
    board.paint_cell(surface, 1, 2, Cell.BRIGHT)
    buffer = surface.get_buffer()
    ys, xs = np.nonzero(buffer[..., 3])
    assert xs.min() >= 10 and xs.max() <= 13
    assert ys.min() >= 5 and ys.max() <= 8
