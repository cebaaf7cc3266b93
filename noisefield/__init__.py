"""noisefield - Fractal gradient-noise fields mapped through colour palettes."""

from .field import NoiseField, generate_field, sample_field, sample_rows
from .noise import (
    FractalParams,
    PermutationTable,
    fbm,
    noise2,
    turbulence,
)
from .palette import Color, build_dual_gradient, build_gradient, build_palette
from .renderer import NoiseConfig, make_noise, rasterize, render

__version__ = "0.1.0"
__all__ = [
    "Color",
    "FractalParams",
    "NoiseConfig",
    "NoiseField",
    "PermutationTable",
    "build_dual_gradient",
    "build_gradient",
    "build_palette",
    "fbm",
    "generate",
    "generate_field",
    "make_noise",
    "noise2",
    "rasterize",
    "render",
    "sample_field",
    "sample_rows",
    "turbulence",
]


def generate(width=800, height=600, seed=None, **kwargs):
    """Generate a noise image.

    Args:
        width: Output width in pixels.
        height: Output height in pixels.
        seed: Seed for the permutation table. None uses the classic
            Perlin permutation.
        **kwargs: Additional NoiseConfig parameters (frequency, lacunarity,
            gain, octaves, combinator, colors).

    Returns:
        PIL Image in RGBA mode.
    """
    config = NoiseConfig(width=width, height=height, **kwargs)
    table = None if seed is None else PermutationTable.from_seed(seed)
    return render(config, table=table)
