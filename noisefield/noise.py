"""Gradient noise primitive and fractal combinators."""

from dataclasses import dataclass

import numpy as np


# Classic Perlin permutation of 0..255
_PERLIN_PERM = (
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
    140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
    247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
    57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
    60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
    65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
    200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
    52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
    207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
    119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
    129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
    218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
    81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
    184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
    222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
)

# x/y components of the 12 edge-midpoint gradients of a cube
_GRAD2 = np.array([
    [1, 1], [-1, 1], [1, -1], [-1, -1],
    [1, 0], [-1, 0], [1, 0], [-1, 0],
    [0, 1], [0, -1], [0, 1], [0, -1],
], dtype=np.float64)

_F2 = 0.5 * (np.sqrt(3.0) - 1.0)
_G2 = (3.0 - np.sqrt(3.0)) / 6.0


class PermutationTable:
    """Read-only hash table driving gradient selection.

    The 256-entry permutation is stored twice over so lattice hashes can
    index up to 511 without wrapping. Instances are immutable and safe to
    share between any number of noise calls.
    """

    def __init__(self, permutation=None):
        if permutation is None:
            permutation = _PERLIN_PERM
        perm = np.asarray(permutation, dtype=np.int64)
        if perm.shape != (256,) or not np.array_equal(np.sort(perm),
                                                      np.arange(256)):
            raise ValueError("permutation must be a shuffle of 0..255")
        self._perm = np.concatenate([perm, perm])
        self._perm.flags.writeable = False

    @classmethod
    def from_seed(cls, seed):
        """Build a table from a shuffled 0..255 using numpy's RandomState."""
        rng = np.random.RandomState(seed)
        return cls(rng.permutation(256))

    @property
    def perm(self):
        return self._perm

    def __eq__(self, other):
        if not isinstance(other, PermutationTable):
            return NotImplemented
        return np.array_equal(self._perm, other._perm)

    def __hash__(self):
        return hash(self._perm.tobytes())


DEFAULT_TABLE = PermutationTable()


def _corner(gi, dx, dy):
    t = 0.5 - dx * dx - dy * dy
    g = _GRAD2[gi]
    contrib = t * t * t * t * (g[..., 0] * dx + g[..., 1] * dy)
    return np.where(t > 0, contrib, 0.0)


def noise2(x, y, table=None):
    """2D simplex noise.

    Args:
        x, y: Coordinates, either scalars or numpy arrays of equal shape.
        table: PermutationTable to hash lattice points with. Defaults to
            the classic Perlin permutation.

    Returns:
        Float for scalar input, float64 array otherwise. Values fall in
        roughly [-1, 1] but are not clamped.
    """
    perm = (table or DEFAULT_TABLE).perm
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    # Skew into the simplex lattice and find the containing cell
    s = (x + y) * _F2
    i = np.floor(x + s)
    j = np.floor(y + s)
    t = (i + j) * _G2
    x0 = x - (i - t)
    y0 = y - (j - t)

    # Lower or upper triangle of the cell
    i1 = (x0 > y0).astype(np.int64)
    j1 = 1 - i1

    x1 = x0 - i1 + _G2
    y1 = y0 - j1 + _G2
    x2 = x0 - 1.0 + 2.0 * _G2
    y2 = y0 - 1.0 + 2.0 * _G2

    ii = i.astype(np.int64) & 255
    jj = j.astype(np.int64) & 255
    gi0 = perm[ii + perm[jj]] % 12
    gi1 = perm[ii + i1 + perm[jj + j1]] % 12
    gi2 = perm[ii + 1 + perm[jj + 1]] % 12

    result = 70.0 * (_corner(gi0, x0, y0)
                     + _corner(gi1, x1, y1)
                     + _corner(gi2, x2, y2))
    if result.ndim == 0:
        return float(result)
    return result


def _check_octaves(octaves):
    if octaves < 0:
        raise ValueError(f"octaves must be >= 0, got {octaves}")


def fbm(x, y, frequency, lacunarity, gain, octaves, table=None):
    """Fractal Brownian motion: a signed sum of noise octaves.

    Args:
        x, y: Sample coordinates (scalars or arrays).
        frequency: Frequency of the first octave.
        lacunarity: Frequency multiplier applied after each octave.
        gain: Amplitude multiplier applied after each octave.
        octaves: Number of layers. Zero gives 0.0.
        table: PermutationTable passed through to noise2.

    Returns:
        Sum of the octaves, may be negative.
    """
    _check_octaves(octaves)
    total = 0.0
    amplitude = 1.0
    for _ in range(octaves):
        total = total + noise2(x * frequency, y * frequency, table) * amplitude
        frequency *= lacunarity
        amplitude *= gain
    return total


def turbulence(x, y, frequency, lacunarity, gain, octaves, table=None):
    """Like fbm but each octave contributes its absolute value.

    Octaves can no longer cancel each other, which gives sharper, billowy
    structure. The result is never negative.
    """
    _check_octaves(octaves)
    total = 0.0
    amplitude = 1.0
    for _ in range(octaves):
        total = total + np.abs(
            noise2(x * frequency, y * frequency, table) * amplitude)
        frequency *= lacunarity
        amplitude *= gain
    if np.ndim(total) == 0:
        return float(total)
    return total


COMBINATORS = {
    "fbm": fbm,
    "turbulence": turbulence,
}


@dataclass(frozen=True)
class FractalParams:
    """Parameters shared by the fractal combinators.

    Only octaves is validated. Frequency, lacunarity and gain may take
    values that flatten or blow up the field; that is left to the caller.
    """

    frequency: float = 0.01
    lacunarity: float = 3.0
    gain: float = 0.2
    octaves: int = 3

    def __post_init__(self):
        if self.octaves < 1:
            raise ValueError(f"octaves must be >= 1, got {self.octaves}")

    def apply(self, combinator, x, y, table=None):
        """Evaluate a combinator at (x, y) with these parameters."""
        return combinator(x, y, self.frequency, self.lacunarity, self.gain,
                          self.octaves, table)
