# --- file: autoclahe/filters/enhancer.py ---
"""
Per-block lookup tables (clip point + dual gamma correction).

For every block we compute local luminance statistics, derive an automatic
clip point, redistribute the block histogram and fold the resulting CDFs
into a 256-entry table mapping input luminance -> enhanced luminance:

    gamma1(l) = ln(cdf[l] + eps) / 8
    gamma2(l) = (cdf_w[l] + 1) / 2
    l2        = Lg * (l / Lg) ** gamma2(l)
    l1        = block_max * W_en ** (1 - gamma1(l)) * cdf[l]
    out(l)    = max(l1, l2) if (block_max - block_min) > d_threshold else l2

Tables are not clamped; the writer clamps to [0, 255].
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Tuple
import sys

import numpy as np

from ..config import ClaheOptions
from .blocks import BlockGrid, Region
from .histogram import (
    EPSILON,
    N_LEVELS,
    cdf_from_pdf,
    histogram_pdf,
    redistribute,
    weighting_distribution,
)
from .luminance import GlobalStats

__all__ = [
    "GAMMA1_DIVISOR",
    "Block",
    "local_stats",
    "clip_point",
    "identity_lut",
    "enhancement_lut",
    "build_block",
    "build_blocks",
]

# Divisor inside gamma1 (empirical constant).
GAMMA1_DIVISOR = 8.0

_LEVELS = np.arange(N_LEVELS, dtype=np.float64)


@dataclass(frozen=True)
class Block:
    """A tile with its precomputed enhancement table."""
    region: Region
    dual_gamma_enabled: bool
    l_max: float
    lut: np.ndarray  # (256,) float64

    def enhance(self, lum: np.ndarray) -> np.ndarray:
        return self.lut[lum]


def local_stats(samples: np.ndarray) -> Tuple[float, float, float, float]:
    """Return (mean, std, min, max) of a luminance window; zeros if empty."""
    s = np.asarray(samples, dtype=np.float64)
    if s.size == 0:
        return 0.0, 0.0, 0.0, 0.0
    avg = float(s.mean())
    sigma = float(np.sqrt(np.mean((s - avg) ** 2)))
    return avg, sigma, float(s.min()), float(s.max())


def clip_point(avg: float, sigma: float, l_min: float, l_max: float,
               alpha: float, p: float) -> float:
    """
    Automatic clip limit on the normalized histogram.

    Flat blocks get a large clip point (little clipping), busy blocks a small one.
    """
    num = 1.0 + p * (l_max / 255.0) + (alpha / 100.0) * (sigma / (avg + EPSILON))
    return num / (l_max - l_min + EPSILON)


def identity_lut() -> np.ndarray:
    return _LEVELS.copy()


def enhancement_lut(
    cdf: np.ndarray,
    cdf_w: np.ndarray,
    block_l_max: float,
    gstats: GlobalStats,
    dual_gamma: bool,
) -> np.ndarray:
    """Evaluate the dual gamma curve for all 256 levels at once."""
    gamma2 = (cdf_w + 1.0) / 2.0
    g_max = gstats.l_max
    if g_max > 0:
        l2 = g_max * np.power(_LEVELS / g_max, gamma2)
    else:
        l2 = np.zeros(N_LEVELS, dtype=np.float64)
    if not dual_gamma:
        return l2

    gamma1 = np.log(cdf + EPSILON) / GAMMA1_DIVISOR
    w_en = np.power(gstats.enhancement_weight_factor, 1.0 - gamma1)
    l1 = block_l_max * w_en * cdf
    return np.maximum(l1, l2)


def build_block(lum: np.ndarray, region: Region, gstats: GlobalStats,
                options: ClaheOptions) -> Block:
    """Statistics, clip point, redistribution and LUT for one region."""
    window = lum[region.slices]
    if window.size == 0:
        return Block(region=region, dual_gamma_enabled=False, l_max=0.0, lut=identity_lut())

    avg, sigma, l_min, l_max = local_stats(window)
    beta = clip_point(avg, sigma, l_min, l_max, options.alpha, options.p)

    pdf = redistribute(histogram_pdf(window), beta)
    cdf = cdf_from_pdf(pdf)
    cdf_w = cdf_from_pdf(weighting_distribution(pdf))
    dual = (l_max - l_min) > options.d_threshold
    if cdf is None or cdf_w is None:
        return Block(region=region, dual_gamma_enabled=dual, l_max=l_max, lut=identity_lut())

    lut = enhancement_lut(cdf, cdf_w, l_max, gstats, dual)
    return Block(region=region, dual_gamma_enabled=dual, l_max=l_max, lut=lut)


def build_blocks(
    lum: np.ndarray,
    grid: BlockGrid,
    gstats: GlobalStats,
    options: ClaheOptions,
    *,
    workers: int = 1,
    progress: bool = False,
    executor: Optional[ThreadPoolExecutor] = None,
) -> List[Block]:
    """
    Build all blocks of `grid` in row-major order.

    Blocks are independent; with `workers > 1` (or an explicit `executor`)
    each one is computed as its own task and stored in its own slot.
    """
    regions = list(grid)
    blocks: List[Optional[Block]] = [None] * len(regions)

    pbar = None
    if progress:
        from tqdm import tqdm
        pbar = tqdm(total=len(regions), desc="blocks", unit="blk", file=sys.stdout)

    def _one(i: int) -> None:
        blocks[i] = build_block(lum, regions[i], gstats, options)
        if pbar is not None:
            pbar.update(1)

    try:
        if executor is not None:
            list(executor.map(_one, range(len(regions))))
        elif workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                list(pool.map(_one, range(len(regions))))
        else:
            for i in range(len(regions)):
                _one(i)
    finally:
        if pbar is not None:
            pbar.close()

    return blocks  # type: ignore[return-value]
