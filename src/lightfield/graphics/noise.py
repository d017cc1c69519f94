"""Gradient noise for LIGHTFIELD flow fields.

Classic 2D Perlin construction over a shuffled, duplicated permutation
table. The table is randomized at construction and never persisted, so two
fields are only reproducible when built from identically seeded RNGs.
"""

import math
import random
from typing import Optional, Tuple
import numpy as np
from numpy.typing import NDArray

PERIOD = 256


def fade(t):
    """Fade curve 6t^5 - 15t^4 + 10t^3 (works on floats and arrays)."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def lerp(a, b, t):
    """Linear interpolation."""
    return a + t * (b - a)


class NoiseField:
    """Continuous pseudo-random scalar field in [-1, 1], period 256 per axis."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._perm: Tuple[int, ...] = self._generate_permutation()
        self._perm_array = np.array(self._perm, dtype=np.int64)

    def _generate_permutation(self) -> Tuple[int, ...]:
        """Fisher-Yates shuffle of 0..255, doubled for overflow-free lookup."""
        perm = list(range(PERIOD))
        for i in range(PERIOD - 1, 0, -1):
            j = self._rng.randint(0, i)
            perm[i], perm[j] = perm[j], perm[i]
        return tuple(perm + perm)

    @property
    def permutation(self) -> Tuple[int, ...]:
        """The 512-entry lookup table (immutable)."""
        return self._perm

    @staticmethod
    def _grad(hash_val: int, x: float, y: float) -> float:
        """Dot product with one of four diagonal gradients."""
        h = hash_val & 3
        if h == 0:
            return x + y
        elif h == 1:
            return -x + y
        elif h == 2:
            return x - y
        else:
            return -x - y

    def sample(self, x: float, y: float) -> float:
        """Generate 2D noise value in [-1, 1]."""
        # Grid cell coordinates
        fx = math.floor(x)
        fy = math.floor(y)
        xi = int(fx) & 255
        yi = int(fy) & 255

        # Relative position in cell
        xf = x - fx
        yf = y - fy

        u = fade(xf)
        v = fade(yf)

        perm = self._perm
        a = perm[xi] + yi
        b = perm[xi + 1] + yi

        x1 = lerp(self._grad(perm[a], xf, yf), self._grad(perm[b], xf - 1, yf), u)
        x2 = lerp(self._grad(perm[a + 1], xf, yf - 1), self._grad(perm[b + 1], xf - 1, yf - 1), u)

        return lerp(x1, x2, v)

    def sample_array(self, x: NDArray[np.floating], y: NDArray[np.floating]) -> NDArray[np.float64]:
        """Sample many points at once - VECTORIZED twin of ``sample``."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        fx = np.floor(x)
        fy = np.floor(y)
        xi = fx.astype(np.int64) & 255
        yi = fy.astype(np.int64) & 255
        xf = x - fx
        yf = y - fy

        u = fade(xf)
        v = fade(yf)

        perm = self._perm_array
        a = perm[xi] + yi
        b = perm[xi + 1] + yi

        x1 = lerp(_grad_array(perm[a], xf, yf), _grad_array(perm[b], xf - 1, yf), u)
        x2 = lerp(_grad_array(perm[a + 1], xf, yf - 1), _grad_array(perm[b + 1], xf - 1, yf - 1), u)

        return lerp(x1, x2, v)


def _grad_array(hash_val: NDArray[np.int64], x: NDArray[np.float64], y: NDArray[np.float64]) -> NDArray[np.float64]:
    h = hash_val & 3
    sx = np.where((h == 0) | (h == 2), 1.0, -1.0)
    sy = np.where((h == 0) | (h == 1), 1.0, -1.0)
    return sx * x + sy * y
