"""Text -> light board pattern compilation.

Turns a string into one wide grid of light states: glyphs are scaled by an
integer factor, concatenated, vertically centered in the requested row count
and the whole strip is doubled horizontally until it is at least twice the
visible width, so a scrolling window always has a full frame of content.
"""

from enum import IntEnum
from typing import Optional
import logging
import re

import numpy as np
from numpy.typing import NDArray

from lightfield.graphics.fonts import GlyphFont, load_font

logger = logging.getLogger(__name__)

MIN_SPACING = 3

_WHITESPACE = re.compile(r"\s+")


class Cell(IntEnum):
    """Light intensity states."""
    EMPTY = 0     # Padding / unlit background
    DIM = 1       # Unfilled glyph cell inside the text band
    ACCENT = 2    # Drawn by the pointer overlay
    BRIGHT = 3    # Filled glyph cell


class PatternBuffer:
    """Mutable 2D grid of cells owned by one scroll board.

    Row count is fixed at construction. The only in-place mutation is
    ``set_cell``; wholesale changes replace the buffer.
    """

    def __init__(self, cells: NDArray) -> None:
        grid = np.array(cells, dtype=np.int8, copy=True)
        if grid.ndim != 2:
            raise ValueError(f"Pattern must be 2D, got shape {grid.shape}")
        if grid.shape[1] == 0:
            grid = np.zeros((max(1, grid.shape[0]), 1), dtype=np.int8)
        self._cells = grid

    @classmethod
    def blank(cls, rows: int, width: int = 1) -> "PatternBuffer":
        return cls(np.full((max(1, rows), max(1, width)), Cell.EMPTY, dtype=np.int8))

    @property
    def rows(self) -> int:
        return self._cells.shape[0]

    @property
    def width(self) -> int:
        return self._cells.shape[1]

    @property
    def cells(self) -> NDArray[np.int8]:
        """Read-only view of the grid."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def get(self, row: int, col: int) -> int:
        return int(self._cells[row, col])

    def set_cell(self, row: int, col: int, value: int) -> bool:
        """Overwrite one cell.

        Returns:
            True if the stored value changed

        Raises:
            IndexError: If (row, col) is outside the grid
        """
        if not (0 <= row < self.rows and 0 <= col < self.width):
            raise IndexError(f"Cell ({row}, {col}) outside {self.rows}x{self.width} pattern")
        if self._cells[row, col] == value:
            return False
        self._cells[row, col] = value
        return True

    def window(self, offset: int, columns: int) -> NDArray[np.int8]:
        """Columns ``[offset, offset + columns)`` read circularly."""
        if columns <= 0:
            return np.zeros((self.rows, 0), dtype=np.int8)
        indices = (np.arange(columns) + offset) % self.width
        return np.take(self._cells, indices, axis=1)

    def count(self, value: int) -> int:
        return int(np.count_nonzero(self._cells == value))

    def copy(self) -> "PatternBuffer":
        return PatternBuffer(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PatternBuffer):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f"PatternBuffer(rows={self.rows}, width={self.width})"


def normalize_text(text: str, min_spacing: int = MIN_SPACING) -> str:
    """Trim, upper-case, pad with a blank run on both sides and widen every
    whitespace run to exactly ``min_spacing`` spaces."""
    trimmed = text.strip().upper()
    return _WHITESPACE.sub(" " * min_spacing, f" {trimmed} ")


def upscale_factor(target_rows: int, font: GlyphFont) -> int:
    """Integer nearest-neighbor scale that fits the font into target_rows."""
    return max(1, target_rows // font.rows)


def _scale_glyph(bitmap: NDArray[np.uint8], scale: int) -> NDArray[np.int8]:
    scaled = np.repeat(np.repeat(bitmap, scale, axis=0), scale, axis=1)
    return np.where(scaled == 1, Cell.BRIGHT, Cell.DIM).astype(np.int8)


def compile_pattern(
    text: str,
    rows: int,
    font: Optional[GlyphFont] = None,
    columns: int = 0,
    min_spacing: int = MIN_SPACING,
) -> PatternBuffer:
    """Compile ``text`` into a pattern buffer.

    Args:
        text: Source text; characters missing from the font become spaces
        rows: Target row count of the board
        font: Glyph font (defaults to the built-in alphabetic font)
        columns: Visible column count; the result is at least twice as wide
        min_spacing: Width of every whitespace run, in space glyphs

    Returns:
        PatternBuffer with ``max(rows, font.rows)`` rows. Rows below the
        font's native height cannot be honored (there is no downscale), so
        the board grows to the glyph height instead.
    """
    if font is None:
        font = load_font()

    scale = upscale_factor(rows, font)
    normalized = normalize_text(text, min_spacing)

    band = np.concatenate([_scale_glyph(font.glyph(ch), scale) for ch in normalized], axis=1)
    band_rows = band.shape[0]

    total_rows = rows
    if rows < band_rows:
        logger.warning(
            f"rows={rows} is below the {font.name!r} glyph height {band_rows}; "
            f"using {band_rows} rows"
        )
        total_rows = band_rows

    # Odd remainder goes to the bottom
    top = (total_rows - band_rows) // 2
    pattern = np.full((total_rows, band.shape[1]), Cell.EMPTY, dtype=np.int8)
    pattern[top:top + band_rows] = band

    if pattern.shape[1] == 0:
        pattern = np.zeros((total_rows, 1), dtype=np.int8)

    while pattern.shape[1] < columns * 2:
        pattern = np.concatenate([pattern, pattern], axis=1)

    logger.debug(
        f"Compiled {normalized!r} with font {font.name!r} x{scale}: "
        f"{pattern.shape[0]}x{pattern.shape[1]} (visible {columns})"
    )
    return PatternBuffer(pattern)
