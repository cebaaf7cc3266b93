"""Tests for gradient palettes."""

import numpy as np
import pytest

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


def test_lerp_truncates():
    from noisefield.palette import lerp
    assert lerp(0, 255, 0.0) == 0
    assert lerp(0, 255, 1.0) == 255
    assert lerp(0, 10, 0.55) == 5
    assert lerp(200, 100, 0.5) == 150


def test_color_lerp():
    from noisefield.palette import Color, color_lerp
    assert color_lerp(BLACK, (100, 200, 50), 0.5) == Color(50, 100, 25)


def test_color_validation():
    from noisefield.palette import Color
    assert Color.of([1, 2, 3]) == Color(1, 2, 3)
    with pytest.raises(ValueError):
        Color.of((0, 0, 256))
    with pytest.raises(ValueError):
        Color.of((0, -1, 0))
    with pytest.raises(ValueError):
        Color.of((0, 0))
    with pytest.raises(ValueError):
        Color.of((0.5, 0, 0))


def test_gradient_shape_and_endpoints():
    from noisefield.palette import build_gradient
    palette = build_gradient(BLACK, WHITE)
    assert palette.shape == (256, 3)
    assert palette.dtype == np.uint8
    np.testing.assert_array_equal(palette[0], BLACK)
    np.testing.assert_array_equal(palette[255], WHITE)
    # Monotone from black to white
    assert np.all(np.diff(palette[:, 0].astype(int)) >= 0)


@pytest.mark.parametrize("color", [(0, 0, 0), (12, 192, 75), (255, 255, 255)])
def test_gradient_same_endpoints_is_constant(color):
    from noisefield.palette import build_gradient
    palette = build_gradient(color, color)
    assert len(palette) == 256
    assert np.all(palette == color)


def test_gradient_matches_lerp():
    from noisefield.palette import build_gradient, color_lerp
    c1, c2 = (0, 0, 175), (80, 160, 244)
    palette = build_gradient(c1, c2)
    for i in (0, 1, 64, 127, 128, 200, 255):
        pct = np.float32(i) / np.float32(255)
        assert tuple(palette[i]) == color_lerp(c1, c2, pct)


def test_palette_is_read_only():
    from noisefield.palette import build_gradient
    palette = build_gradient(BLACK, WHITE)
    with pytest.raises(ValueError):
        palette[0] = (1, 2, 3)


def test_dual_gradient_endpoints():
    from noisefield.palette import build_dual_gradient, color_lerp
    c1, c2, c3, c4 = (0, 0, 175), (80, 160, 244), (12, 192, 75), WHITE
    palette = build_dual_gradient(c1, c2, c3, c4)
    assert palette.shape == (256, 3)

    np.testing.assert_array_equal(palette[0], c1)
    # Last entry of the lower half is almost c2
    assert np.all(np.abs(palette[127].astype(int) - np.array(c2)) <= 2)
    # pct = 1.0 gives 1.0 * 1.5 - 0.5 along c3 -> c4
    assert tuple(palette[255]) == color_lerp(c3, c4, 1.0)


def test_dual_gradient_upper_half_formula():
    from noisefield.palette import build_dual_gradient, color_lerp
    c1, c2, c3, c4 = BLACK, BLACK, (0, 0, 0), (200, 100, 40)
    palette = build_dual_gradient(c1, c2, c3, c4)
    for i in (128, 160, 200, 254):
        pct = np.float32(i) / np.float32(255)
        arg = pct * np.float32(1.5) - np.float32(0.5)
        assert tuple(palette[i]) == color_lerp(c3, c4, arg)
    # The upper half starts a quarter of the way along, not at c3
    assert palette[128][0] > 0


def test_build_palette_dispatch():
    from noisefield.palette import (
        build_dual_gradient,
        build_gradient,
        build_palette,
    )
    np.testing.assert_array_equal(build_palette(BLACK, WHITE),
                                  build_gradient(BLACK, WHITE))
    anchors = [(0, 0, 175), (80, 160, 244), (12, 192, 75), WHITE]
    np.testing.assert_array_equal(build_palette(*anchors),
                                  build_dual_gradient(*anchors))


@pytest.mark.parametrize("count", [0, 1, 3, 5])
def test_build_palette_rejects_anchor_count(count):
    from noisefield.palette import build_palette
    with pytest.raises(ValueError):
        build_palette(*([BLACK] * count))
