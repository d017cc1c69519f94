"""Graphics rendering module for LIGHTFIELD."""

from lightfield.graphics.primitives import (
    line_points,
    fill_circle,
    fill_circles,
    clear_rect,
    new_buffer,
)
from lightfield.graphics.surface import BufferSurface
from lightfield.graphics.noise import NoiseField
from lightfield.graphics.pattern import (
    Cell,
    PatternBuffer,
    compile_pattern,
    normalize_text,
)
from lightfield.graphics.palette import BoardColors, DEFAULT_COLORS, parse_color, merge_colors
from lightfield.graphics.fonts import GlyphFont, load_font

__all__ = [
    "line_points",
    "fill_circle",
    "fill_circles",
    "clear_rect",
    "new_buffer",
    "BufferSurface",
    "NoiseField",
    "Cell",
    "PatternBuffer",
    "compile_pattern",
    "normalize_text",
    "BoardColors",
    "DEFAULT_COLORS",
    "parse_color",
    "merge_colors",
    "GlyphFont",
    "load_font",
]
