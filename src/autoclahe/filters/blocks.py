# --- file: autoclahe/filters/blocks.py ---
"""
Tiling of an image into a grid of rectangular blocks.

The grid has ceil(W / bw) columns and ceil(H / bh) rows; the last column and
row are clipped to the image border, so the regions tile the image exactly.
A region is addressed either by (row, col) or by its row-major index.

Typical usage
-------------
>>> grid = BlockGrid(width=100, height=70, block_width=32, block_height=32)
>>> len(grid), grid.shape
(12, (3, 4))
>>> grid[5]
Region(start_x=32, start_y=32, end_x=64, end_y=64)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

__all__ = ["Region", "BlockGrid"]


@dataclass(frozen=True)
class Region:
    """Half-open pixel rectangle [start_x, end_x) x [start_y, end_y)."""
    start_x: int
    start_y: int
    end_x: int
    end_y: int

    @property
    def width(self) -> int:
        return self.end_x - self.start_x

    @property
    def height(self) -> int:
        return self.end_y - self.start_y

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def center_x(self) -> float:
        return (self.start_x + self.end_x - 1) / 2.0

    @property
    def center_y(self) -> float:
        return (self.start_y + self.end_y - 1) / 2.0

    @property
    def slices(self) -> Tuple[slice, slice]:
        """(rows, cols) slices for indexing a (H, W, ...) array."""
        return slice(self.start_y, self.end_y), slice(self.start_x, self.end_x)


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


class BlockGrid:
    """Closed-form, restartable sequence of Regions in row-major order."""

    def __init__(self, width: int, height: int, block_width: int, block_height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Image must be non-empty, got {width}x{height}.")
        if block_width < 1 or block_height < 1:
            raise ValueError(f"Block size must be positive, got {block_width}x{block_height}.")
        self.width = int(width)
        self.height = int(height)
        self.block_width = int(block_width)
        self.block_height = int(block_height)
        self.rows = _ceil_div(self.height, self.block_height)
        self.cols = _ceil_div(self.width, self.block_width)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def __len__(self) -> int:
        return self.rows * self.cols

    def region(self, row: int, col: int) -> Region:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Block ({row}, {col}) outside grid {self.shape}.")
        x0 = col * self.block_width
        y0 = row * self.block_height
        return Region(
            start_x=x0,
            start_y=y0,
            end_x=min(x0 + self.block_width, self.width),
            end_y=min(y0 + self.block_height, self.height),
        )

    def __getitem__(self, index: int) -> Region:
        n = len(self)
        if index < 0:
            index += n
        if not (0 <= index < n):
            raise IndexError(f"Block index {index} out of range for {n} blocks.")
        return self.region(index // self.cols, index % self.cols)

    def __iter__(self) -> Iterator[Region]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield self.region(row, col)

    def centers_x(self) -> np.ndarray:
        """Horizontal block centers, one per column (float64)."""
        starts = np.arange(self.cols) * self.block_width
        ends = np.minimum(starts + self.block_width, self.width)
        return (starts + ends - 1) / 2.0

    def centers_y(self) -> np.ndarray:
        """Vertical block centers, one per row (float64)."""
        starts = np.arange(self.rows) * self.block_height
        ends = np.minimum(starts + self.block_height, self.height)
        return (starts + ends - 1) / 2.0

    def __repr__(self) -> str:
        return (f"BlockGrid({self.width}x{self.height}, block={self.block_width}x{self.block_height}, "
                f"grid={self.rows}x{self.cols})")
