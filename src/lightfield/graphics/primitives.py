"""Basic drawing primitives for LIGHTFIELD raster buffers.

Buffers are float32 arrays of shape (height, width, 4): straight (not
premultiplied) RGB in 0..1 plus alpha in 0..1. All drawing uses
source-over compositing, matching a 2D canvas.
"""

from functools import lru_cache
from typing import Iterator, Tuple
import math
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
RGBA = Tuple[int, int, int, float]
Point = Tuple[int, int]
Buffer = NDArray[np.float32]


def new_buffer(width: int, height: int) -> Buffer:
    """Allocate a fully transparent RGBA buffer."""
    return np.zeros((max(0, height), max(0, width), 4), dtype=np.float32)


def line_points(x1: int, y1: int, x2: int, y2: int) -> Iterator[Point]:
    """Yield the lattice points of a line using Bresenham's algorithm.

    Both endpoints are included; consecutive points differ by at most one
    step in each axis.

    Args:
        x1, y1: Start point
        x2, y2: End point
    """
    x1, y1, x2, y2 = int(x1), int(y1), int(x2), int(y2)
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1

    while True:
        yield (x, y)

        if x == x2 and y == y2:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def clear_rect(buffer: Buffer, x: int, y: int, width: int, height: int) -> None:
    """Reset a rectangle to transparent, clamped to buffer bounds."""
    h, w = buffer.shape[:2]

    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))

    buffer[y1:y2, x1:x2] = 0.0


def blend_over(dst: NDArray[np.float32], rgb: NDArray[np.float32], alpha: NDArray[np.float32]) -> None:
    """Composite ``rgb`` with ``alpha`` over ``dst`` in place.

    Args:
        dst: (..., 4) destination pixels
        rgb: (..., 3) or (3,) source color in 0..1
        alpha: (...) or scalar source alpha in 0..1
    """
    alpha = np.asarray(alpha, dtype=np.float32)
    dst_a = dst[..., 3]
    out_a = alpha + dst_a * (1.0 - alpha)

    src_weight = alpha[..., np.newaxis] if alpha.ndim else alpha
    dst_weight = (dst_a * (1.0 - alpha))[..., np.newaxis]
    numer = np.asarray(rgb, dtype=np.float32) * src_weight + dst[..., :3] * dst_weight

    safe_a = np.where(out_a > 0, out_a, 1.0)[..., np.newaxis]
    dst[..., :3] = np.where(out_a[..., np.newaxis] > 0, numer / safe_a, 0.0)
    dst[..., 3] = out_a


def fill_circle(buffer: Buffer, cx: float, cy: float, radius: float, color: RGBA) -> None:
    """Draw a filled, alpha-blended circle.

    A pixel is covered when its center lies inside the circle. Circles too
    small to cover any pixel center still tint the pixel under the center,
    with alpha scaled by the covered area.

    Args:
        buffer: Target RGBA buffer (height, width, 4)
        cx: Center x coordinate (buffer pixels)
        cy: Center y coordinate (buffer pixels)
        radius: Circle radius in buffer pixels
        color: (r, g, b, alpha) with rgb in 0..255 and alpha in 0..1
    """
    h, w = buffer.shape[:2]
    r, g, b, a = color
    if a <= 0 or radius <= 0 or h == 0 or w == 0:
        return

    rgb = np.array((r, g, b), dtype=np.float32) / 255.0

    # Only touch the circle's bounding box
    x1 = max(0, int(math.floor(cx - radius)))
    y1 = max(0, int(math.floor(cy - radius)))
    x2 = min(w, int(math.ceil(cx + radius)) + 1)
    y2 = min(h, int(math.ceil(cy + radius)) + 1)
    if x2 <= x1 or y2 <= y1:
        return

    y_indices, x_indices = np.ogrid[y1:y2, x1:x2]
    dist_sq = (x_indices + 0.5 - cx) ** 2 + (y_indices + 0.5 - cy) ** 2
    mask = dist_sq <= radius ** 2

    region = buffer[y1:y2, x1:x2]
    if mask.any():
        pixels = region[mask]
        blend_over(pixels, rgb, np.float32(min(1.0, a)))
        region[mask] = pixels
        return

    px, py = int(math.floor(cx)), int(math.floor(cy))
    if 0 <= px < w and 0 <= py < h:
        coverage = min(1.0, math.pi * radius * radius)
        blend_over(buffer[py, px], rgb, np.float32(min(1.0, a) * coverage))


@lru_cache(maxsize=32)
def circle_window(radius: float) -> Tuple[NDArray[np.int64], NDArray[np.int64]]:
    """Integer (dy, dx) offsets, relative to the pixel holding a center, that
    a circle of ``radius`` can cover wherever the center sits in that pixel."""
    reach = max(0, int(math.ceil(radius + 0.5)))
    dy, dx = np.mgrid[-reach:reach + 1, -reach:reach + 1]
    return dy.ravel(), dx.ravel()


def fill_circles(
    buffer: Buffer,
    xs: NDArray[np.float32],
    ys: NDArray[np.float32],
    radius: float,
    rgb: Color,
    alphas: NDArray[np.float32],
) -> None:
    """Splat many same-sized circles at once - VECTORIZED.

    Coverage matches ``fill_circle``: a pixel is lit when its center lies
    inside the circle around the true (fractional) center, and a circle too
    small to cover any pixel center tints the pixel under its center.
    """
    h, w = buffer.shape[:2]
    if h == 0 or w == 0 or len(xs) == 0 or radius <= 0:
        return

    color = np.array(rgb, dtype=np.float32) / 255.0
    cx = np.asarray(xs, dtype=np.float64)
    cy = np.asarray(ys, dtype=np.float64)
    base_x = np.floor(cx).astype(np.int64)
    base_y = np.floor(cy).astype(np.int64)
    alphas = np.clip(np.asarray(alphas, dtype=np.float32), 0.0, 1.0)
    radius_sq = float(radius) ** 2
    covered = np.zeros(cx.shape, dtype=bool)

    for dy, dx in zip(*circle_window(float(radius))):
        px = base_x + dx
        py = base_y + dy
        hit = (
            (px >= 0) & (px < w) & (py >= 0) & (py < h)
            & ((px + 0.5 - cx) ** 2 + (py + 0.5 - cy) ** 2 <= radius_sq)
        )
        if not hit.any():
            continue
        covered |= hit
        pixels = buffer[py[hit], px[hit]]
        blend_over(pixels, color, alphas[hit])
        buffer[py[hit], px[hit]] = pixels

    tiny = ~covered & (base_x >= 0) & (base_x < w) & (base_y >= 0) & (base_y < h)
    if tiny.any():
        coverage = np.float32(min(1.0, math.pi * radius_sq))
        pixels = buffer[base_y[tiny], base_x[tiny]]
        blend_over(pixels, color, alphas[tiny] * coverage)
        buffer[base_y[tiny], base_x[tiny]] = pixels


def composite_rgb(buffer: Buffer, background: Color) -> NDArray[np.uint8]:
    """Flatten an RGBA buffer onto an opaque background - VECTORIZED."""
    bg = np.array(background, dtype=np.float32) / 255.0
    alpha = buffer[..., 3:4]
    rgb = buffer[..., :3] * alpha + bg * (1.0 - alpha)
    return np.clip(rgb * 255.0 + 0.5, 0, 255).astype(np.uint8)
