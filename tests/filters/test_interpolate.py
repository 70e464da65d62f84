import numpy as np
import pytest

from autoclahe.filters.blocks import BlockGrid
from autoclahe.filters.interpolate import axis_weights, interpolate_luminance, neighbor


def test_neighbor_sides_and_presence():
    centers = np.array([15.5, 47.5])
    coords = np.array([0.0, 20.0, 50.0])
    idx, present = neighbor(centers, coords, after=False)
    assert present.tolist() == [False, True, True]
    assert idx.tolist() == [0, 0, 1]
    idx, present = neighbor(centers, coords, after=True)
    assert present.tolist() == [True, True, False]
    assert idx.tolist() == [0, 1, 1]


def test_axis_weights_interior_and_borders():
    centers = np.array([15.5, 47.5])
    i0, i1, w = axis_weights(centers, np.array([0, 15.5, 31.5, 47.5, 63]))
    np.testing.assert_allclose(w, [0.0, 1.0, 0.5, 1.0, 1.0])
    assert i0.tolist() == [0, 0, 0, 1, 1]
    assert i1.tolist() == [0, 1, 1, 1, 1]


def _constant_luts(grid, values):
    return np.asarray(values, dtype=np.float64).reshape(grid.rows, grid.cols, 1) * np.ones(256)


def test_corners_take_nearest_block_only():
    grid = BlockGrid(64, 64, 32, 32)
    luts = _constant_luts(grid, [0, 10, 20, 30])
    lum = np.zeros((64, 64), dtype=np.uint8)
    out = interpolate_luminance(lum, grid, luts)
    assert out[0, 0] == 0
    assert out[0, 63] == 10
    assert out[63, 0] == 20
    assert out[63, 63] == 30


def test_interior_pixel_is_bilinear():
    grid = BlockGrid(64, 64, 32, 32)
    luts = _constant_luts(grid, [0, 10, 20, 30])
    lum = np.zeros((64, 64), dtype=np.uint8)
    out = interpolate_luminance(lum, grid, luts)
    m = n = (47.5 - 31) / 32.0
    expected = m * (n * 0 + (1 - n) * 10) + (1 - m) * (n * 20 + (1 - n) * 30)
    assert out[31, 31] == pytest.approx(expected)
    # horizontally smooth along a row between two centers
    row = out[10, 16:48]
    assert np.all(np.diff(row) >= 0)


def test_identical_tables_reduce_to_lookup(rng):
    grid = BlockGrid(50, 30, 16, 16)
    table = np.linspace(0, 255, 256)
    luts = np.broadcast_to(table, (grid.rows, grid.cols, 256)).copy()
    lum = rng.integers(0, 256, size=(30, 50), dtype=np.uint8)
    out = interpolate_luminance(lum, grid, luts)
    np.testing.assert_allclose(out, table[lum])


def test_output_is_clamped():
    grid = BlockGrid(8, 8, 4, 4)
    lum = np.zeros((8, 8), dtype=np.uint8)
    assert interpolate_luminance(lum, grid, _constant_luts(grid, [300] * 4)).max() == 255
    assert interpolate_luminance(lum, grid, _constant_luts(grid, [-5] * 4)).min() == 0


def test_row_band_matches_full_image(rng):
    grid = BlockGrid(40, 37, 8, 8)
    luts = rng.uniform(0, 255, size=(grid.rows, grid.cols, 256))
    lum = rng.integers(0, 256, size=(37, 40), dtype=np.uint8)
    full = interpolate_luminance(lum, grid, luts)
    band = interpolate_luminance(lum, grid, luts, slice(10, 23))
    np.testing.assert_array_equal(band, full[10:23])
