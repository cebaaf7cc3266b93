"""256-entry colour lookup tables built from gradient anchors."""

from typing import NamedTuple

import numpy as np

PALETTE_SIZE = 256


class Color(NamedTuple):
    """An 8-bit RGB colour."""
    r: int
    g: int
    b: int

    @classmethod
    def of(cls, value):
        """Coerce an (r, g, b) sequence, checking each channel is 0-255."""
        channels = tuple(value)
        if len(channels) != 3:
            raise ValueError(f"colour needs 3 channels, got {len(channels)}")
        for c in channels:
            if int(c) != c or not 0 <= c <= 255:
                raise ValueError(f"colour channel out of range: {c}")
        return cls(*(int(c) for c in channels))


def lerp(a, b, pct):
    """Interpolate between two channel values, truncated to a byte."""
    a = np.float32(a)
    b = np.float32(b)
    return int(a + np.float32(pct) * (b - a))


def color_lerp(c1, c2, pct):
    """Interpolate each channel of two colours."""
    return Color(lerp(c1[0], c2[0], pct),
                 lerp(c1[1], c2[1], pct),
                 lerp(c1[2], c2[2], pct))


def _ramp(c1, c2, pct):
    # Row-wise lerp of two colours over a float32 pct column
    a = np.asarray(Color.of(c1), dtype=np.float32)
    b = np.asarray(Color.of(c2), dtype=np.float32)
    out = a + pct[:, np.newaxis] * (b - a)
    return np.clip(out, 0, 255).astype(np.uint8)


def _percentages():
    return (np.arange(PALETTE_SIZE, dtype=np.float32)
            / np.float32(PALETTE_SIZE - 1))


def _freeze(palette):
    palette.flags.writeable = False
    return palette


def build_gradient(c1, c2):
    """Linear gradient from c1 at index 0 to c2 at index 255.

    Returns:
        Read-only uint8 array of shape (256, 3).
    """
    return _freeze(_ramp(c1, c2, _percentages()))


def build_dual_gradient(c1, c2, c3, c4):
    """Two gradients sharing one table.

    The lower half runs c1 -> c2 using pct * 2. The upper half runs
    c3 -> c4 using pct * 1.5 - 0.5, so it starts a quarter of the way
    along c3 -> c4 rather than at c3.

    Returns:
        Read-only uint8 array of shape (256, 3).
    """
    pct = _percentages()
    lower = pct < np.float32(0.5)
    palette = np.where(
        lower[:, np.newaxis],
        _ramp(c1, c2, pct * np.float32(2)),
        _ramp(c3, c4, pct * np.float32(1.5) - np.float32(0.5)),
    )
    return _freeze(palette.astype(np.uint8))


def build_palette(*anchors):
    """Build a palette from 2 anchors (gradient) or 4 (dual gradient)."""
    if len(anchors) == 2:
        return build_gradient(*anchors)
    if len(anchors) == 4:
        return build_dual_gradient(*anchors)
    raise ValueError(f"palette needs 2 or 4 anchor colours, got {len(anchors)}")
