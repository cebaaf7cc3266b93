"""Noise rendering pipeline.

Samples a fractal noise field, rescales it into palette index range and
writes the palette colours into a caller-owned pixel buffer.
"""

import logging
from dataclasses import dataclass

import numpy as np
from PIL import Image

from .field import generate_field
from .noise import FractalParams
from .palette import PALETTE_SIZE, build_palette

logger = logging.getLogger(__name__)

# Bytes per pixel in the default RGBA-style buffer layout
PIXEL_STRIDE = 4

# Slack added before truncating rescaled values to palette indices
_ROUNDING = 1e-6


@dataclass
class NoiseConfig:
    """Configuration for noise generation."""

    # Output size
    width: int = 800
    height: int = 600

    # Fractal parameters
    frequency: float = 0.01
    lacunarity: float = 3.0
    gain: float = 0.2
    octaves: int = 3
    combinator: str = "turbulence"

    # Palette anchors: 2 for a gradient, 4 for a dual gradient
    colors: tuple = ((0, 0, 175), (80, 160, 244),
                     (12, 192, 75), (255, 255, 255))

    @property
    def params(self):
        return FractalParams(frequency=self.frequency,
                             lacunarity=self.lacunarity,
                             gain=self.gain,
                             octaves=self.octaves)


def _writable_bytes(buffer):
    """Flat uint8 view over any writable, contiguous buffer object."""
    try:
        view = memoryview(buffer).cast('B')
    except TypeError as exc:
        raise TypeError(
            f"pixel buffer must be a contiguous buffer, "
            f"got {type(buffer).__name__}") from exc
    if view.readonly:
        raise TypeError("pixel buffer is read-only")
    return np.frombuffer(view, dtype=np.uint8)


def rasterize(field, lo, hi, palette, buffer, stride=PIXEL_STRIDE):
    """Map field samples through a palette into a pixel buffer.

    Each sample is rescaled so that lo lands on index 0 and hi on 255.
    The palette colour is written to the first three bytes of the pixel;
    any further bytes (alpha, padding) are left as they were.

    A constant field (lo == hi) has no usable range, so every pixel gets
    palette[0].

    Args:
        field: NoiseField (or flat array) of samples.
        lo, hi: Minimum and maximum sample values.
        palette: uint8 array of shape (256, 3).
        buffer: Writable buffer of at least len(field) * stride bytes.
        stride: Bytes per pixel, at least 3.

    Raises:
        ValueError: stride below 3, malformed palette, or buffer too small.
        TypeError: buffer is read-only or not a buffer.
    """
    values = np.asarray(getattr(field, 'values', field), dtype=np.float64)
    values = values.reshape(-1)
    palette = np.asarray(palette)

    if stride < 3:
        raise ValueError(f"stride must be at least 3, got {stride}")
    if palette.shape != (PALETTE_SIZE, 3):
        raise ValueError(
            f"palette must have shape ({PALETTE_SIZE}, 3), "
            f"got {palette.shape}")
    if palette.dtype != np.uint8:
        raise ValueError(
            f"palette must hold uint8 colours, got {palette.dtype}")

    pixels = _writable_bytes(buffer)
    needed = values.shape[0] * stride
    if pixels.shape[0] < needed:
        raise ValueError(
            f"pixel buffer holds {pixels.shape[0]} bytes, "
            f"{needed} needed for {values.shape[0]} pixels")

    span = hi - lo
    if span == 0 or not np.isfinite(span):
        logger.debug("Degenerate field range [%r, %r], using palette[0]",
                     lo, hi)
        scale = 0.0
        offset = 0.0
    else:
        scale = 255.0 / span
        offset = lo * scale

    rescaled = np.nan_to_num(values * scale - offset)
    # Absorb float rounding so that hi lands on 255, not 254.999...
    index = np.clip(np.trunc(rescaled + _ROUNDING), 0, PALETTE_SIZE - 1)
    index = index.astype(np.intp)

    target = pixels[:needed].reshape(-1, stride)
    target[:, :3] = palette[index]


def set_pixel(x, y, color, buffer, width, stride=PIXEL_STRIDE):
    """Write one pixel's RGB bytes. Coordinates off the buffer are ignored."""
    pixels = _writable_bytes(buffer)
    if x < 0 or x >= width or y < 0:
        return
    index = (y * width + x) * stride
    if index + 3 > pixels.shape[0]:
        return
    pixels[index:index + 3] = color[:3]


def make_noise(pixels, config=None, table=None):
    """Generate a noise field and draw it into a caller-owned buffer.

    Args:
        pixels: Writable buffer of config.width * config.height * 4 bytes.
        config: NoiseConfig instance (defaults used if None).
        table: PermutationTable for the noise primitive.
    """
    if config is None:
        config = NoiseConfig()

    logger.info("Frequency: %f, Lacunarity: %f, gain: %f, octaves: %d",
                config.frequency, config.lacunarity, config.gain,
                config.octaves)

    field, lo, hi = generate_field(config.width, config.height,
                                   config.params, config.combinator, table)
    palette = build_palette(*config.colors)
    rasterize(field, lo, hi, palette, pixels)


def render(config=None, table=None):
    """Render a noise field to an image.

    Args:
        config: NoiseConfig instance (defaults used if None).
        table: PermutationTable for the noise primitive.

    Returns:
        PIL Image in RGBA mode.
    """
    if config is None:
        config = NoiseConfig()

    rgba = np.zeros((config.height, config.width, 4), dtype=np.uint8)
    rgba[:, :, 3] = 255
    make_noise(rgba, config, table)

    return Image.fromarray(rgba)
