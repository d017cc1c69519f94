"""Four-state light palette and color parsing."""

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional
import re

from lightfield.graphics.primitives import RGBA
from lightfield.graphics.pattern import Cell

_RGB_FUNC = re.compile(r"^rgba?\(\s*([^)]*)\)$", re.IGNORECASE)
_HEX = re.compile(r"^#([0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)

# Accepted spellings for palette keys
_KEY_ALIASES = {
    "background": "background",
    "dim": "dim",
    "text_dim": "dim",
    "textDim": "dim",
    "accent": "accent",
    "draw_line": "accent",
    "drawLine": "accent",
    "bright": "bright",
    "text_bright": "bright",
    "textBright": "bright",
}


def parse_color(value: Any) -> RGBA:
    """Parse a color into an (r, g, b, alpha) tuple.

    Accepts ``(r, g, b)``/``(r, g, b, a)`` sequences, ``rgb(...)``,
    ``rgba(...)``, ``#rrggbb`` and ``#rrggbbaa``.

    Raises:
        ValueError: If the value is not a recognizable color
    """
    if isinstance(value, (tuple, list)):
        if len(value) == 3:
            r, g, b = value
            return _checked(r, g, b, 1.0, value)
        if len(value) == 4:
            r, g, b, a = value
            return _checked(r, g, b, a, value)
        raise ValueError(f"Color sequence must have 3 or 4 items: {value!r}")

    if not isinstance(value, str):
        raise ValueError(f"Unsupported color value: {value!r}")

    text = value.strip()
    match = _RGB_FUNC.match(text)
    if match:
        parts = [p.strip() for p in match.group(1).split(",")]
        if len(parts) not in (3, 4):
            raise ValueError(f"Bad color function: {value!r}")
        try:
            r, g, b = (int(float(p)) for p in parts[:3])
            a = float(parts[3]) if len(parts) == 4 else 1.0
        except ValueError:
            raise ValueError(f"Bad color component in {value!r}") from None
        return _checked(r, g, b, a, value)

    match = _HEX.match(text)
    if match:
        digits = match.group(1)
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
        a = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
        return _checked(r, g, b, a, value)

    raise ValueError(f"Unrecognized color: {value!r}")


def _checked(r: Any, g: Any, b: Any, a: Any, original: Any) -> RGBA:
    rgb = (int(r), int(g), int(b))
    if any(c < 0 or c > 255 for c in rgb) or not 0.0 <= float(a) <= 1.0:
        raise ValueError(f"Color out of range: {original!r}")
    return (rgb[0], rgb[1], rgb[2], float(a))


@dataclass(frozen=True)
class BoardColors:
    """Colors for the four light intensity states."""

    background: RGBA = (255, 255, 255, 0.05)
    dim: RGBA = (255, 255, 255, 0.15)
    accent: RGBA = (255, 255, 255, 0.7)
    bright: RGBA = (255, 255, 255, 0.6)

    def color_for(self, cell: int) -> RGBA:
        """Palette lookup keyed by cell state; unknown states use background."""
        if cell == Cell.DIM:
            return self.dim
        if cell == Cell.ACCENT:
            return self.accent
        if cell == Cell.BRIGHT:
            return self.bright
        return self.background

    def merged(self, overrides: Optional[Mapping[str, Any]]) -> "BoardColors":
        """Return a copy with ``overrides`` parsed and applied on top."""
        if not overrides:
            return self
        changes = {}
        for key, value in overrides.items():
            field_name = _KEY_ALIASES.get(key)
            if field_name is None:
                raise ValueError(f"Unknown palette key: {key!r}")
            changes[field_name] = parse_color(value)
        return replace(self, **changes)


DEFAULT_COLORS = BoardColors()


def merge_colors(overrides: Optional[Mapping[str, Any]] = None) -> BoardColors:
    """Merge partial color overrides over the default palette."""
    return DEFAULT_COLORS.merged(overrides)
