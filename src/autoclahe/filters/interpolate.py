# --- file: autoclahe/filters/interpolate.py ---
"""
Bilinear blending of block lookup tables.

Each pixel is bracketed by up to four block centers:

    A (up-left)    B (up-right)
    C (down-left)  D (down-right)

    out = m * (n * A(l) + (1 - n) * B(l)) + (1 - m) * (n * C(l) + (1 - n) * D(l))

`n` and `m` are the horizontal and vertical weights of the left/up side.
Within half a block of the image border one side has no center; its weight
collapses to 0 and the pixel takes the nearest available table(s).
"""

from __future__ import annotations
from typing import Sequence, Tuple

import numpy as np

from .blocks import BlockGrid
from .enhancer import Block

__all__ = ["neighbor", "axis_weights", "stack_luts", "interpolate_luminance"]


def neighbor(centers: np.ndarray, coords: np.ndarray, after: bool) -> Tuple[np.ndarray, np.ndarray]:
    """
    Nearest block center on one side of each coordinate.

    Parameters
    ----------
    centers : np.ndarray
        Sorted block centers along one axis.
    coords : np.ndarray
        Pixel coordinates along the same axis.
    after : bool
        False -> last center <= coord (left / up).
        True  -> first center > coord (right / down).

    Returns
    -------
    (index, present)
        `index` is clipped into range so it can always be used for indexing;
        `present` tells whether that neighbor really exists.
    """
    pos = np.searchsorted(centers, coords, side="right")
    idx = pos if after else pos - 1
    present = (idx >= 0) & (idx < len(centers))
    return np.clip(idx, 0, len(centers) - 1), present


def axis_weights(centers: np.ndarray, coords: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Return (before_idx, after_idx, weight_of_before) along one axis.
    """
    coords = np.asarray(coords, dtype=np.float64)
    i0, has0 = neighbor(centers, coords, after=False)
    i1, has1 = neighbor(centers, coords, after=True)
    c0 = centers[i0]
    c1 = centers[i1]
    both = has0 & has1
    span = np.where(both, c1 - c0, 1.0)
    w = np.where(both, (c1 - coords) / span, np.where(has0, 1.0, 0.0))
    return i0, i1, w


def stack_luts(blocks: Sequence[Block], grid: BlockGrid) -> np.ndarray:
    """(rows, cols, 256) array of block tables in grid order."""
    return np.stack([b.lut for b in blocks]).reshape(grid.rows, grid.cols, -1)


def interpolate_luminance(
    lum: np.ndarray,
    grid: BlockGrid,
    luts: np.ndarray,
    rows: slice = slice(None),
) -> np.ndarray:
    """
    Enhanced luminance for a band of image rows.

    Parameters
    ----------
    lum : np.ndarray
        (H, W) uint8 luminance of the whole image.
    grid : BlockGrid
        The grid the tables were built on.
    luts : np.ndarray
        (rows, cols, 256) tables from `stack_luts`.
    rows : slice
        Row band to process (default: all rows).

    Returns
    -------
    np.ndarray
        float64 (h, W) clamped to [0, 255].
    """
    y0, y1, _ = rows.indices(lum.shape[0])
    ys = np.arange(y0, y1)
    xs = np.arange(lum.shape[1])
    band = lum[y0:y1].astype(np.intp)

    r_up, r_down, m = axis_weights(grid.centers_y(), ys)
    c_left, c_right, n = axis_weights(grid.centers_x(), xs)
    m = m[:, None]
    n = n[None, :]

    def _corner(ri: np.ndarray, ci: np.ndarray) -> np.ndarray:
        return luts[ri[:, None], ci[None, :], band]

    a = _corner(r_up, c_left)
    b = _corner(r_up, c_right)
    c = _corner(r_down, c_left)
    d = _corner(r_down, c_right)

    out = m * (n * a + (1.0 - n) * b) + (1.0 - m) * (n * c + (1.0 - n) * d)
    return np.clip(out, 0.0, 255.0)
