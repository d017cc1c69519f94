"""Dot-matrix glyph fonts for the light board.

Glyph tables are static: each character maps to a fixed bitmap of rows made
of '0' (empty) and '1' (filled). Every glyph in a font shares the same row
count; widths differ per glyph and already include the trailing spacing
columns, so glyphs can be concatenated directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Mapping, Tuple
import logging

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

SPACE = " "


@dataclass(frozen=True, eq=False)
class GlyphFont:
    """Immutable character -> bitmap table.

    Attributes:
        name: Font identifier
        glyphs: Read-only (rows, width) uint8 bitmaps with 0/1 cells
        rows: Native glyph height shared by every glyph
    """

    name: str
    glyphs: Mapping[str, NDArray[np.uint8]]
    rows: int

    @classmethod
    def from_rows(cls, name: str, table: Mapping[str, Tuple[str, ...]]) -> "GlyphFont":
        """Build a font from string rows such as ``("0110", "1001", ...)``.

        Raises:
            ValueError: If the table has no space glyph, ragged rows, or
                glyphs of different heights
        """
        if SPACE not in table:
            raise ValueError(f"Font {name!r} needs a space glyph")

        glyphs: Dict[str, NDArray[np.uint8]] = {}
        heights = set()
        for char, rows in table.items():
            widths = {len(r) for r in rows}
            if len(widths) != 1:
                raise ValueError(f"Font {name!r}: glyph {char!r} has ragged rows")
            bitmap = np.array([[1 if c == "1" else 0 for c in r] for r in rows], dtype=np.uint8)
            bitmap.flags.writeable = False
            glyphs[char] = bitmap
            heights.add(len(rows))

        if len(heights) != 1:
            raise ValueError(f"Font {name!r}: glyphs must share one row count, got {sorted(heights)}")

        return cls(name=name, glyphs=MappingProxyType(glyphs), rows=heights.pop())

    def glyph(self, char: str) -> NDArray[np.uint8]:
        """Bitmap for ``char``; characters absent from the font use the space glyph."""
        return self.glyphs.get(char, self.glyphs[SPACE])

    def __contains__(self, char: object) -> bool:
        return char in self.glyphs

    @property
    def characters(self) -> str:
        return "".join(sorted(self.glyphs))


# =============================================================================
# FONT TABLES
# =============================================================================

_DEFAULT_TABLE: Dict[str, Tuple[str, ...]] = {
    " ": ("000000", "000000", "000000", "000000", "000000"),
    "A": ("011000", "100100", "111100", "100100", "100100"),
    "B": ("111000", "100100", "111000", "100100", "111000"),
    "C": ("011100", "100000", "100000", "100000", "011100"),
    "D": ("111000", "100100", "100100", "100100", "111000"),
    "E": ("111100", "100000", "111000", "100000", "111100"),
    "F": ("111100", "100000", "111000", "100000", "100000"),
    "G": ("011100", "100000", "101100", "100100", "011100"),
    "H": ("100100", "100100", "111100", "100100", "100100"),
    "I": ("11100", "01000", "01000", "01000", "11100"),
    "J": ("001100", "000100", "000100", "100100", "011000"),
    "K": ("100100", "101000", "110000", "101000", "100100"),
    "L": ("100000", "100000", "100000", "100000", "111100"),
    "M": ("1000100", "1101100", "1010100", "1000100", "1000100"),
    "N": ("100100", "110100", "101100", "100100", "100100"),
    "O": ("011000", "100100", "100100", "100100", "011000"),
    "P": ("111000", "100100", "111000", "100000", "100000"),
    "Q": ("011000", "100100", "100100", "101000", "010100"),
    "R": ("111000", "100100", "111000", "101000", "100100"),
    "S": ("011100", "100000", "011000", "000100", "111000"),
    "T": ("1111100", "0010000", "0010000", "0010000", "0010000"),
    "U": ("100100", "100100", "100100", "100100", "011000"),
    "V": ("1000100", "1000100", "0101000", "0101000", "0010000"),
    "W": ("1000100", "1000100", "1010100", "1101100", "1000100"),
    "X": ("100100", "011000", "000000", "011000", "100100"),
    "Y": ("1000100", "0101000", "0010000", "0010000", "0010000"),
    "Z": ("111100", "000100", "001000", "010000", "111100"),
    "0": ("011000", "100100", "101100", "110100", "011000"),
    "1": ("010000", "110000", "010000", "010000", "111000"),
    "2": ("111000", "000100", "011000", "100000", "111100"),
    "3": ("111000", "000100", "011000", "000100", "111000"),
    "4": ("100100", "100100", "111100", "000100", "000100"),
    "5": ("111100", "100000", "111000", "000100", "111000"),
    "6": ("011000", "100000", "111000", "100100", "011000"),
    "7": ("111100", "000100", "001000", "010000", "010000"),
    "8": ("011000", "100100", "011000", "100100", "011000"),
    "9": ("011000", "100100", "011100", "000100", "011000"),
    ".": ("000", "000", "000", "000", "100"),
    ",": ("000", "000", "000", "100", "100"),
    "!": ("100", "100", "100", "000", "100"),
    "?": ("111000", "000100", "011000", "000000", "010000"),
    "-": ("00000", "00000", "11100", "00000", "00000"),
    ":": ("000", "100", "000", "100", "000"),
    "'": ("100", "100", "000", "000", "000"),
}

# Segment-style numerals: 3 lit columns plus one spacing column
_COMPACT_NUMERAL_TABLE: Dict[str, Tuple[str, ...]] = {
    " ": ("0000", "0000", "0000", "0000", "0000"),
    "0": ("1110", "1010", "1010", "1010", "1110"),
    "1": ("0010", "0010", "0010", "0010", "0010"),
    "2": ("1110", "0010", "1110", "1000", "1110"),
    "3": ("1110", "0010", "1110", "0010", "1110"),
    "4": ("1010", "1010", "1110", "0010", "0010"),
    "5": ("1110", "1000", "1110", "0010", "1110"),
    "6": ("1110", "1000", "1110", "1010", "1110"),
    "7": ("1110", "0010", "0010", "0010", "0010"),
    "8": ("1110", "1010", "1110", "1010", "1110"),
    "9": ("1110", "1010", "1110", "0010", "1110"),
    "-": ("0000", "0000", "1110", "0000", "0000"),
    ":": ("00", "10", "00", "10", "00"),
    ".": ("00", "00", "00", "00", "10"),
}

DEFAULT_FONT = "default"
COMPACT_NUMERAL_FONT = "compact-numeral"

_FONT_TABLES: Dict[str, Dict[str, Tuple[str, ...]]] = {
    DEFAULT_FONT: _DEFAULT_TABLE,
    COMPACT_NUMERAL_FONT: _COMPACT_NUMERAL_TABLE,
}

_ALIASES = {
    "7segment": COMPACT_NUMERAL_FONT,
    "compact_numeral": COMPACT_NUMERAL_FONT,
}

FONT_NAMES = tuple(_FONT_TABLES)


def load_font(name: str = DEFAULT_FONT) -> GlyphFont:
    """Load a built-in font by name or alias (loaded once per process).

    Aliases resolve to the same instance as the canonical name.

    Raises:
        ValueError: If the font name is unknown
    """
    key = _ALIASES.get(name, name)
    if key not in _FONT_TABLES:
        raise ValueError(f"Unknown font {name!r}; expected one of {', '.join(FONT_NAMES)}")
    return _load(key)


@lru_cache(maxsize=None)
def _load(key: str) -> GlyphFont:
    table = _FONT_TABLES[key]
    font = GlyphFont.from_rows(key, table)
    logger.debug(f"Loaded font {key!r}: {len(font.glyphs)} glyphs, {font.rows} rows")
    return font

