"""Tests for text -> pattern compilation."""

import logging

import numpy as np
import pytest

from lightfield.graphics.fonts import load_font
from lightfield.graphics.pattern import (
    Cell,
    PatternBuffer,
    compile_pattern,
    normalize_text,
    upscale_factor,
)


def test_normalize_text():
    assert normalize_text("  hello   world ") == "   HELLO   WORLD   "
    assert normalize_text("a\tb") == "   A   B   "


def test_normalize_empty_text_keeps_a_space():
    assert normalize_text("") == "   "


def test_ab_scenario():
    font = load_font()
    pattern = compile_pattern("AB", rows=5, font=font)
    cells = pattern.cells

    assert pattern.rows == 5
    # Three leading spaces, each 6 columns wide, then A and B
    assert pattern.width == 18 + 6 + 6 + 18
    assert np.all(cells[:, :18] == Cell.DIM)
    assert np.array_equal(cells[:, 18:24] == Cell.BRIGHT, font.glyph("A") == 1)
    assert np.array_equal(cells[:, 24:30] == Cell.BRIGHT, font.glyph("B") == 1)
    assert np.all(cells[:, 30:] == Cell.DIM)


def test_remap_only_dim_and_bright_inside_band():
    cells = compile_pattern("HELLO WORLD", rows=5).cells
    assert set(np.unique(cells).tolist()) == {Cell.DIM, Cell.BRIGHT}


@pytest.mark.parametrize("columns", [0, 1, 10, 24, 49, 100, 333])
def test_width_at_least_twice_visible_columns(columns):
    pattern = compile_pattern("HI", rows=5, columns=columns)
    assert pattern.width >= 2 * columns


def test_doubling_repeats_the_strip():
    base = compile_pattern("AB", rows=5)
    doubled = compile_pattern("AB", rows=5, columns=30)
    assert doubled.width == base.width * 2
    assert np.array_equal(doubled.cells[:, :base.width], base.cells)
    assert np.array_equal(doubled.cells[:, base.width:], base.cells)


def test_even_padding_is_symmetric():
    cells = compile_pattern("A", rows=7).cells
    assert np.all(cells[0] == Cell.EMPTY)
    assert np.all(cells[6] == Cell.EMPTY)
    assert not np.all(cells[1] == Cell.EMPTY)
    assert not np.all(cells[5] == Cell.EMPTY)


def test_odd_padding_extra_row_at_bottom():
    cells = compile_pattern("A", rows=8).cells
    assert np.all(cells[0] == Cell.EMPTY)
    assert not np.all(cells[1] == Cell.EMPTY)
    assert not np.all(cells[5] == Cell.EMPTY)
    assert np.all(cells[6] == Cell.EMPTY)
    assert np.all(cells[7] == Cell.EMPTY)


def test_integer_upscale():
    font = load_font()
    assert upscale_factor(10, font) == 2
    assert upscale_factor(14, font) == 2
    assert upscale_factor(3, font) == 1

    pattern = compile_pattern("A", rows=10, font=font)
    assert pattern.rows == 10
    # Leading three spaces are 6 wide, scaled x2
    a_block = pattern.cells[:, 36:48]
    expected = np.kron(font.glyph("A"), np.ones((2, 2), dtype=np.uint8)) == 1
    assert np.array_equal(a_block == Cell.BRIGHT, expected)


def test_rows_below_glyph_height_grow_to_glyph_height(caplog):
    with caplog.at_level(logging.WARNING, logger="lightfield.graphics.pattern"):
        pattern = compile_pattern("A", rows=3)
    assert pattern.rows == 5
    assert any("glyph height" in r.message for r in caplog.records)


def test_compile_is_idempotent():
    a = compile_pattern("Hello, world!", rows=9, columns=40)
    b = compile_pattern("Hello, world!", rows=9, columns=40)
    assert a == b
    assert a is not b


def test_unknown_characters_render_as_space():
    assert compile_pattern("@", rows=5) == compile_pattern(" ", rows=5)


def test_compact_numeral_font():
    font = load_font("compact-numeral")
    pattern = compile_pattern("12:30", rows=5, font=font)
    assert pattern.rows == 5
    assert pattern.count(Cell.BRIGHT) > 0


def test_buffer_set_cell_reports_change():
    buf = PatternBuffer.blank(3, 4)
    assert buf.set_cell(1, 2, Cell.BRIGHT) is True
    assert buf.set_cell(1, 2, Cell.BRIGHT) is False
    assert buf.get(1, 2) == Cell.BRIGHT
    assert buf.count(Cell.BRIGHT) == 1


def test_buffer_set_cell_out_of_range():
    buf = PatternBuffer.blank(3, 4)
    with pytest.raises(IndexError):
        buf.set_cell(3, 0, Cell.DIM)
    with pytest.raises(IndexError):
        buf.set_cell(0, -1, Cell.DIM)


def test_buffer_window_wraps():
    buf = PatternBuffer(np.array([[0, 1, 2, 3]]))
    assert buf.window(3, 3).tolist() == [[3, 0, 1]]
    assert buf.window(0, 0).shape == (1, 0)


def test_empty_buffer_defaults_to_one_column():
    buf = PatternBuffer(np.zeros((5, 0)))
    assert buf.width == 1
    assert buf.rows == 5


def test_cells_view_is_read_only():
    buf = PatternBuffer.blank(2, 2)
    with pytest.raises(ValueError):
        buf.cells[0, 0] = 3


def test_copy_is_independent():
    buf = PatternBuffer.blank(2, 2)
    other = buf.copy()
    other.set_cell(0, 0, Cell.ACCENT)
    assert buf.get(0, 0) == Cell.EMPTY
