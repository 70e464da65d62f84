import numpy as np
import pytest


def make_quadrants(size=64, levels=(50, 200, 200, 50), channels=4, seed=0):
    """Gray image with four flat quadrants (TL, TR, BL, BR) and random alpha."""
    half = size // 2
    img = np.zeros((size, size, channels), dtype=np.uint8)
    tl, tr, bl, br = levels
    img[:half, :half, :3] = tl
    img[:half, half:, :3] = tr
    img[half:, :half, :3] = bl
    img[half:, half:, :3] = br
    if channels == 4:
        rng = np.random.default_rng(seed)
        img[..., 3] = rng.integers(0, 256, size=(size, size), dtype=np.uint8)
    return img


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def textured_rgb(rng):
    """Smooth gradient plus noise, colored, 70x53 (uneven edge blocks)."""
    h, w = 53, 70
    yy, xx = np.mgrid[0:h, 0:w]
    base = 40 + 120 * (xx / w) + 60 * (yy / h)
    noise = rng.normal(0, 12, size=(h, w))
    lum = np.clip(base + noise, 0, 255)
    img = np.stack([lum, lum * 0.7, lum * 0.4], axis=-1)
    return np.clip(img, 0, 255).astype(np.uint8)


@pytest.fixture
def quadrant_image():
    return make_quadrants
