"""Sampling noise combinators over a pixel grid."""

import logging
from dataclasses import dataclass

import numpy as np

from .noise import COMBINATORS, FractalParams

logger = logging.getLogger(__name__)


@dataclass
class NoiseField:
    """A row-major field of noise samples."""
    values: np.ndarray  # flat float64, length width * height
    width: int
    height: int

    def __len__(self):
        return self.values.shape[0]

    @property
    def grid(self):
        """The samples viewed as a (height, width) array."""
        return self.values.reshape(self.height, self.width)


def _check_dims(width, height):
    if width <= 0 or height <= 0:
        raise ValueError(
            f"field dimensions must be positive, got {width}x{height}")


def _sample_cells(values, width, y_start, y_stop, fn):
    lo = np.inf
    hi = -np.inf
    i = 0
    for y in range(y_start, y_stop):
        for x in range(width):
            v = float(fn(float(x), float(y)))
            values[i] = v
            if v < lo:
                lo = v
            if v > hi:
                hi = v
            i += 1
    return lo, hi


def _sample_row_arrays(values, width, y_start, y_stop, fn):
    xs = np.arange(width, dtype=np.float64)
    lo = np.inf
    hi = -np.inf
    for row, y in enumerate(range(y_start, y_stop)):
        ys = np.full(width, float(y))
        out = np.broadcast_to(np.asarray(fn(xs, ys), dtype=np.float64),
                              (width,))
        start = row * width
        values[start:start + width] = out
        lo = min(lo, float(out.min()))
        hi = max(hi, float(out.max()))
    return lo, hi


def sample_rows(width, y_start, y_stop, fn, vectorized=False):
    """Sample rows y_start..y_stop-1 of a grid.

    fn is called as fn(x, y) with float pixel coordinates and must return
    a scalar. With vectorized=True it is instead handed a whole row at a
    time as two numpy arrays, and a scalar result is broadcast across the
    row. Either way the extremes are tracked while the values are written.

    Bands of rows do not depend on each other, so disjoint bands can be
    sampled separately and stitched together.

    Returns:
        (values, min, max) for the band, values flat and row-major.
    """
    _check_dims(width, y_stop - y_start)
    values = np.empty((y_stop - y_start) * width, dtype=np.float64)
    if vectorized:
        lo, hi = _sample_row_arrays(values, width, y_start, y_stop, fn)
    else:
        lo, hi = _sample_cells(values, width, y_start, y_stop, fn)
    return values, lo, hi


def sample_field(width, height, fn, vectorized=False):
    """Evaluate fn at every integer coordinate of a width x height grid.

    Returns:
        (NoiseField, min, max). For a constant field min == max.
    """
    values, lo, hi = sample_rows(width, 0, height, fn, vectorized)
    return NoiseField(values=values, width=width, height=height), lo, hi


def generate_field(width, height, params, combinator="fbm", table=None):
    """Sample a fractal combinator over a grid.

    The built-in combinators are evaluated a row at a time. Any other
    callable is evaluated one cell at a time with scalar coordinates.

    Args:
        width, height: Grid size in pixels.
        params: FractalParams for the combinator.
        combinator: "fbm", "turbulence" or any callable with the same
            signature.
        table: PermutationTable for the noise primitive.

    Returns:
        (NoiseField, min, max).
    """
    if not isinstance(params, FractalParams):
        raise TypeError(
            f"params must be FractalParams, got {type(params).__name__}")
    if isinstance(combinator, str):
        try:
            combinator = COMBINATORS[combinator]
        except KeyError:
            raise ValueError(
                f"Unknown combinator '{combinator}'. Available: "
                f"{', '.join(COMBINATORS)}") from None
    vectorized = any(combinator is c for c in COMBINATORS.values())

    def sample(x, y):
        return params.apply(combinator, x, y, table)

    field, lo, hi = sample_field(width, height, sample, vectorized)
    logger.debug("Sampled %dx%d field, range [%f, %f]", width, height, lo, hi)
    return field, lo, hi
