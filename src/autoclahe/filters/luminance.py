# --- file: autoclahe/filters/luminance.py ---
"""
Luminance channel and whole-image reference statistics.

Luminance here is the HSV value channel, max(R, G, B), not a weighted luma.
Alpha is never read.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .histogram import cdf_from_pdf, histogram_pdf

__all__ = ["L_ALPHA_CDF_LEVEL", "GlobalStats", "luminance", "global_stats"]

# Global CDF level that defines l_alpha (empirical constant).
L_ALPHA_CDF_LEVEL = 0.75


@dataclass(frozen=True)
class GlobalStats:
    """
    Computed once per image and shared read-only by every block.

    Attributes
    ----------
    l_max : float
        Global maximum luminance (0 for a black image).
    l_alpha : int
        Number of leading levels whose global CDF is <= L_ALPHA_CDF_LEVEL, at least 1.
    enhancement_weight_factor : float
        l_max / l_alpha.
    cdf : np.ndarray or None
        Global luminance CDF (256 levels) that l_alpha is read from; None when
        the image has no pixels. Kept for callers that inspect or plot it.
    """
    l_max: float
    l_alpha: int
    enhancement_weight_factor: float
    cdf: Optional[np.ndarray]


def luminance(pixels: np.ndarray) -> np.ndarray:
    """
    Per-pixel max(R, G, B).

    Parameters
    ----------
    pixels : np.ndarray
        uint8 array of shape (H, W, C) with C in {3, 4}.

    Returns
    -------
    np.ndarray
        uint8 array of shape (H, W).
    """
    if pixels.ndim != 3 or pixels.shape[-1] < 3:
        raise ValueError(f"Expected (H, W, 3|4) array, got shape {pixels.shape}.")
    return pixels[..., :3].max(axis=-1)


def global_stats(lum: np.ndarray) -> GlobalStats:
    """Global max luminance, l_alpha and the enhancement weight factor."""
    l_max = float(lum.max()) if lum.size else 0.0
    cdf = cdf_from_pdf(histogram_pdf(lum))
    if cdf is None:
        l_alpha = 1
    else:
        # cdf is non-decreasing, so the leading run of levels <= 0.75 is a prefix
        l_alpha = int(np.searchsorted(cdf, L_ALPHA_CDF_LEVEL, side="right"))
        l_alpha = max(1, l_alpha)
    return GlobalStats(
        l_max=l_max,
        l_alpha=l_alpha,
        enhancement_weight_factor=l_max / l_alpha,
        cdf=cdf,
    )
