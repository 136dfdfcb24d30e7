import argparse
from pathlib import Path
import os
import sys

# Ensure repository root is on sys.path so `from mandelbrot...` works when running
# this script directly (e.g. `python scripts/make_mandelbrot.py`).
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from mandelbrot.benchmark import benchmark
from mandelbrot.config import PRECISIONS, load_config
from mandelbrot.output import ImageWriteError, save_image
from mandelbrot.render import STRATEGIES, pick_strategy, strategy_title

ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG = ROOT / "configs" / "mandelbrot.yaml"


def build_parser():
    parser = argparse.ArgumentParser(description="Render the Mandelbrot set to an image file")
    parser.add_argument("--config", type=str, default=str(DEFAULT_CONFIG))
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--max_iter", type=int, default=None)
    parser.add_argument("--outfile", type=str, default=None)
    parser.add_argument("--strategy", type=str, default="parallel",
                        choices=sorted(STRATEGIES))
    parser.add_argument("--precision", type=str, default=None,
                        choices=list(PRECISIONS))

    # parallel strategy knobs
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--rows_per_task", type=int, default=None)
    parser.add_argument("--vectorize", action=argparse.BooleanOptionalAction, default=None,
                        help="Evaluate each row with the numpy row kernel")

    parser.add_argument("--no_save", action="store_true",
                        help="Only time the render, do not write the image")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config = load_config(
        args.config,
        width=args.width,
        height=args.height,
        max_iterations=args.max_iter,
        output=args.outfile,
        workers=args.workers,
        rows_per_task=args.rows_per_task,
        vectorize=args.vectorize,
        precision=args.precision,
    )

    print(f"Creating mandelbrot: {config.width}x{config.height}")

    result = benchmark(strategy_title(args.strategy), pick_strategy(args.strategy), config)

    if args.no_save:
        return 0

    try:
        out_path = save_image(result.image, config.output)
    except ImageWriteError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"[run] saved {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
