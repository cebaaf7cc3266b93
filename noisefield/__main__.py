"""CLI entry point for noisefield."""

import argparse
import logging
import sys
from pathlib import Path

from . import generate
from .logging_config import setup_logging
from .noise import COMBINATORS


def _parse_colors(values):
    if len(values) not in (6, 12):
        raise argparse.ArgumentTypeError(
            "--colors takes 2 or 4 colours (6 or 12 integers)")
    return tuple(tuple(values[i:i + 3]) for i in range(0, len(values), 3))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Render fractal noise through a colour gradient"
    )
    parser.add_argument(
        "--width", "-W", type=int, default=800,
        help="Output width in pixels (default: 800)"
    )
    parser.add_argument(
        "--height", "-H", type=int, default=600,
        help="Output height in pixels (default: 600)"
    )
    parser.add_argument(
        "--frequency", "-f", type=float, default=None,
        help="Base frequency (default: 0.01)"
    )
    parser.add_argument(
        "--lacunarity", "-l", type=float, default=None,
        help="Frequency multiplier per octave (default: 3.0)"
    )
    parser.add_argument(
        "--gain", "-g", type=float, default=None,
        help="Amplitude multiplier per octave (default: 0.2)"
    )
    parser.add_argument(
        "--octaves", "-O", type=int, default=None,
        help="Number of octaves (default: 3)"
    )
    parser.add_argument(
        "--combinator", "-c", choices=sorted(COMBINATORS), default=None,
        help="Fractal combinator (default: turbulence)"
    )
    parser.add_argument(
        "--colors", nargs="+", type=int, default=None,
        metavar="C",
        help="Gradient anchors as R G B triples, 2 or 4 of them"
    )
    parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Seed for the permutation table (default: classic Perlin)"
    )
    parser.add_argument(
        "--output", "-o", default="noise.png",
        help="Output file path (default: noise.png)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log debug output"
    )
    parser.add_argument(
        "--log-file", default=None,
        help="Also write log output to this file"
    )

    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO,
                  log_file=args.log_file)

    kwargs = {}
    for name in ("frequency", "lacunarity", "gain", "octaves", "combinator"):
        value = getattr(args, name)
        if value is not None:
            kwargs[name] = value
    if args.colors is not None:
        try:
            kwargs["colors"] = _parse_colors(args.colors)
        except argparse.ArgumentTypeError as exc:
            parser.error(str(exc))

    try:
        image = generate(
            width=args.width,
            height=args.height,
            seed=args.seed,
            **kwargs,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output))
    print(f"Saved noise ({image.size[0]}x{image.size[1]}) to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
