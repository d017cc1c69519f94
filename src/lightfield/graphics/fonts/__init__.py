"""Dot-matrix font module for LIGHTFIELD."""

from lightfield.graphics.fonts.glyph_font import (
    GlyphFont,
    load_font,
    DEFAULT_FONT,
    COMPACT_NUMERAL_FONT,
    FONT_NAMES,
)

__all__ = [
    "GlyphFont",
    "load_font",
    "DEFAULT_FONT",
    "COMPACT_NUMERAL_FONT",
    "FONT_NAMES",
]
