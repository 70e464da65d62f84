import numpy as np
import pytest

from autoclahe import AutomaticClahe, ClaheOptions, InvalidInputError, enhance, enhance_image
from autoclahe.filters import contrast


# ------------------------------ validation ------------------------------------

@pytest.mark.parametrize("length,width,channels", [
    (4 * 4 * 4 + 1, 4, 4),   # not a multiple of channels
    (4 * 5 * 3, 7, 3),       # pixels not a multiple of width
    (0, 4, 4),               # empty
    (48, 0, 4),              # zero width
    (48, 4, 5),              # unsupported channel count
    (48, 4, 2),
])
def test_invalid_input_leaves_buffer_untouched(length, width, channels):
    buf = bytearray(range(256)) * (length // 256 + 1)
    buf = buf[:length]
    before = bytes(buf)
    with pytest.raises(InvalidInputError):
        enhance(buf, width, channels)
    assert bytes(buf) == before


@pytest.mark.parametrize("opts", [
    ClaheOptions(block_width=0),
    ClaheOptions(block_height=0),
    ClaheOptions(alpha=-1.0),
    ClaheOptions(d_threshold=300),
    ClaheOptions(block_width=None),
    ClaheOptions(alpha="1"),
    ClaheOptions(d_threshold=None),
])
def test_invalid_options_rejected(opts):
    buf = bytearray(16 * 16 * 4)
    with pytest.raises(InvalidInputError):
        enhance(buf, 16, 4, opts)


def test_read_only_buffer_rejected():
    with pytest.raises(InvalidInputError):
        enhance(bytes(12), 1, 3)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        enhance(bytearray(10), 1, 3)


# ------------------------------ behaviour -------------------------------------

def test_flat_image_is_left_alone():
    img = np.empty((30, 40, 4), dtype=np.uint8)
    img[...] = (120, 80, 40, 200)
    buf = bytearray(img.tobytes())
    enhance(buf, 40, 4)
    out = np.frombuffer(bytes(buf), dtype=np.uint8).reshape(img.shape)
    assert np.abs(out.astype(int) - img.astype(int)).max() <= 2
    np.testing.assert_array_equal(out[..., 3], img[..., 3])


@pytest.mark.parametrize("pixel", [(0, 0, 0), (255, 255, 255), (10, 30, 200), (77, 77, 3)])
@pytest.mark.parametrize("opts", [
    ClaheOptions(),
    ClaheOptions(block_width=1, block_height=1, d_threshold=0),
    ClaheOptions(alpha=0.0, p=0.0),
])
def test_single_pixel_image(pixel, opts):
    buf = bytearray(pixel)
    enhance(buf, 1, 3, opts)
    assert max(abs(a - b) for a, b in zip(buf, pixel)) <= 2


def test_quadrant_scenario_adds_local_variation(quadrant_image):
    img = quadrant_image(64, levels=(50, 200, 200, 50), channels=4)
    buf = bytearray(img.tobytes())
    enhance(buf, 64, 4, ClaheOptions(block_width=32, block_height=32))
    out = np.frombuffer(bytes(buf), dtype=np.uint8).reshape(img.shape)

    np.testing.assert_array_equal(out[..., 3], img[..., 3])
    lum_in = img[..., :3].max(axis=-1).astype(float)
    lum_out = out[..., :3].max(axis=-1).astype(float)
    quads = [(slice(0, 32), slice(0, 32)), (slice(0, 32), slice(32, 64)),
             (slice(32, 64), slice(0, 32)), (slice(32, 64), slice(32, 64))]
    for q in quads:
        before = lum_in[q].std()
        after = lum_out[q].std()
        if lum_in[q].max() < 200:
            assert after > before
        else:
            # the global maximum is a fixed point of every table
            assert after >= before
    # dark quadrants are brightened toward their bright neighbours, never darkened
    assert (lum_out[:32, :32] >= 50).all()


def test_rgb_and_rgba_paths_agree(textured_rgb):
    rgb = textured_rgb.copy()
    rgba = np.concatenate([textured_rgb, np.full(textured_rgb.shape[:2] + (1,), 9, np.uint8)], axis=-1)
    enhance(rgb, rgb.shape[1], 3, ClaheOptions(block_width=16, block_height=16))
    enhance(rgba, rgba.shape[1], 4, ClaheOptions(block_width=16, block_height=16))
    np.testing.assert_array_equal(rgb, rgba[..., :3])
    assert (rgba[..., 3] == 9).all()


def test_enhancement_changes_textured_image(textured_rgb):
    out = enhance_image(textured_rgb, block_width=16, block_height=16)
    assert out.shape == textured_rgb.shape and out.dtype == np.uint8
    assert not np.array_equal(out, textured_rgb)


def test_workers_do_not_change_result(textured_rgb):
    one = enhance_image(textured_rgb, block_width=8, block_height=8)
    many = enhance_image(textured_rgb, block_width=8, block_height=8, workers=4)
    np.testing.assert_array_equal(one, many)


def test_row_bands_cover_every_row_once():
    bands = contrast._row_bands(53, 16)
    assert [(b.start, b.stop) for b in bands] == [(0, 16), (16, 32), (32, 48), (48, 53)]
    assert contrast._row_bands(5, 256) == [slice(0, 5)]


@pytest.mark.parametrize("workers", [1, 3])
def test_banded_blend_matches_single_pass(textured_rgb, monkeypatch, workers):
    whole = enhance_image(textured_rgb, block_width=8, block_height=8)
    monkeypatch.setattr(contrast, "ROW_BAND", 7)
    banded = enhance_image(textured_rgb, block_width=8, block_height=8, workers=workers)
    np.testing.assert_array_equal(whole, banded)


def test_deterministic(textured_rgb):
    np.testing.assert_array_equal(enhance_image(textured_rgb), enhance_image(textured_rgb))


def test_enhance_image_returns_copy(textured_rgb):
    before = textured_rgb.copy()
    enhance_image(textured_rgb)
    np.testing.assert_array_equal(textured_rgb, before)


def test_enhance_image_rejects_bad_arrays():
    with pytest.raises(InvalidInputError):
        enhance_image(np.zeros((4, 4), dtype=np.uint8))
    with pytest.raises(InvalidInputError):
        enhance_image(np.zeros((4, 4, 3), dtype=np.float32))
    with pytest.raises(InvalidInputError):
        enhance_image(np.zeros((4, 4, 3), dtype=np.uint8), not_an_option=1)


def test_hue_is_preserved_on_colored_pixels(textured_rgb):
    out = enhance_image(textured_rgb, block_width=16, block_height=16)
    src = textured_rgb.astype(int)
    dst = out.astype(int)
    # channel order (R >= G >= B) survives a value-only change
    assert (dst[..., 0] >= dst[..., 1]).all()
    assert (dst[..., 1] >= dst[..., 2]).all()
    assert (src[..., 0] >= src[..., 1]).all()


def test_memoryview_and_ndarray_buffers(textured_rgb):
    expected = enhance_image(textured_rgb)
    raw = bytearray(textured_rgb.tobytes())
    enhance(memoryview(raw), textured_rgb.shape[1], 3)
    np.testing.assert_array_equal(np.frombuffer(bytes(raw), np.uint8).reshape(expected.shape), expected)


def test_automatic_clahe_object(textured_rgb):
    enhancer = AutomaticClahe.with_options(ClaheOptions(block_width=16, block_height=16))
    raw = bytearray(textured_rgb.tobytes())
    enhancer.enhance_rgb_image(raw, textured_rgb.shape[1])
    expected = enhance_image(textured_rgb, block_width=16, block_height=16)
    np.testing.assert_array_equal(np.frombuffer(bytes(raw), np.uint8).reshape(expected.shape), expected)

    rgba = np.zeros((4, 4, 4), dtype=np.uint8)
    AutomaticClahe().enhance_rgba_image(rgba, 4)
    assert not rgba.any()
