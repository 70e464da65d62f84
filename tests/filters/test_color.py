import numpy as np
import pytest

from autoclahe.filters.color import (
    HUE_RANGE,
    hsv_to_rgb,
    hsv_to_rgb_array,
    rgb_to_hsv,
    rgb_to_hsv_array,
)


@pytest.mark.parametrize("rgb,hsv", [
    ((255, 0, 0), (0, 255, 255)),
    ((0, 255, 0), (510, 255, 255)),
    ((0, 0, 255), (1020, 255, 255)),
    ((222, 222, 222), (0, 0, 222)),
    ((0, 0, 0), (0, 0, 0)),
])
def test_primaries_and_grays(rgb, hsv):
    assert rgb_to_hsv(*rgb) == hsv
    assert hsv_to_rgb(*hsv) == rgb


@pytest.mark.parametrize("rgb", [(255, 0, 0), (10, 30, 200), (222, 222, 222), (255, 5, 0), (3, 1, 2), (1, 0, 0)])
def test_scalar_round_trip_within_two(rgb):
    back = hsv_to_rgb(*rgb_to_hsv(*rgb))
    assert max(abs(a - b) for a, b in zip(back, rgb)) <= 2


def test_round_trip_all_triples_within_two():
    g, b = np.meshgrid(np.arange(256), np.arange(256), indexing="ij")
    worst = 0
    for r in range(256):
        rgb = np.stack([np.full_like(g, r), g, b], axis=-1).astype(np.uint8)
        back = hsv_to_rgb_array(*rgb_to_hsv_array(rgb))
        worst = max(worst, int(np.abs(back.astype(int) - rgb.astype(int)).max()))
    assert worst <= 2


def test_array_matches_scalar(rng):
    rgb = rng.integers(0, 256, size=(2000, 3), dtype=np.uint8)
    h, s, v = rgb_to_hsv_array(rgb)
    back = hsv_to_rgb_array(h, s, v)
    for i in range(0, 2000, 7):
        expected = rgb_to_hsv(*rgb[i])
        assert (h[i], s[i], v[i]) == expected
        assert tuple(back[i]) == hsv_to_rgb(*expected)


def test_hsv_ranges(rng):
    rgb = rng.integers(0, 256, size=(5000, 3), dtype=np.uint8)
    h, s, v = rgb_to_hsv_array(rgb)
    assert h.min() >= 0 and h.max() < HUE_RANGE
    assert s.min() >= 0 and s.max() <= 255
    np.testing.assert_array_equal(v, rgb.max(axis=-1))


def test_value_replacement_keeps_gray_gray():
    h, s, _ = rgb_to_hsv_array(np.array([[90, 90, 90]], dtype=np.uint8))
    out = hsv_to_rgb_array(h, s, np.array([170]))
    assert out.tolist() == [[170, 170, 170]]


def test_array_ignores_alpha():
    px = np.array([[10, 30, 200, 7]], dtype=np.uint8)
    h, s, v = rgb_to_hsv_array(px)
    assert (int(h[0]), int(s[0]), int(v[0])) == rgb_to_hsv(10, 30, 200)
