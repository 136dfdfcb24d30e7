"""
Time the three render strategies against each other.

Renders the benchmark config once per strategy, checks that every strategy
produced the same image, then writes:
    results/strategy_timings.csv
    figures/strategy_timings.png

Run:
    python -m scripts.benchmark_strategies
    python -m scripts.benchmark_strategies --config configs/benchmark.yaml --save_image
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from mandelbrot.benchmark import benchmark
from mandelbrot.config import load_config
from mandelbrot.output import ImageWriteError, save_image
from mandelbrot.render import STRATEGIES, strategy_title

ROOT = Path(__file__).resolve().parents[1]


def plot_timings(df: pd.DataFrame, out_path: Path, title: str) -> None:
    fig, ax = plt.subplots(figsize=(6, 4))
    ax.bar(df["strategy"], df["seconds"], color="#4c72b0")
    ax.set_ylabel("wall-clock seconds")
    ax.set_title(title)
    for i, s in enumerate(df["seconds"]):
        ax.annotate(f"{s:.2f}s", (i, s), ha="center", va="bottom")
    fig.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Benchmark Mandelbrot render strategies")
    parser.add_argument("--config", type=str, default=str(ROOT / "configs" / "benchmark.yaml"))
    parser.add_argument("--strategies", nargs="+", default=list(STRATEGIES),
                        choices=sorted(STRATEGIES))
    parser.add_argument("--outcsv", type=str, default=str(ROOT / "results" / "strategy_timings.csv"))
    parser.add_argument("--outfig", type=str, default=str(ROOT / "figures" / "strategy_timings.png"))
    parser.add_argument("--save_image", action="store_true",
                        help="Also write the rendered image to the config's output path")
    args = parser.parse_args(argv)

    config = load_config(args.config)

    print(f"\n{'='*60}")
    print(f"  Strategy benchmark: {config.width}x{config.height}, "
          f"max_iterations={config.max_iterations}")
    print(f"{'='*60}\n")

    rows = []
    reference = None
    for name in args.strategies:
        result = benchmark(strategy_title(name), STRATEGIES[name], config)
        if reference is None:
            reference = result.image
        rows.append({
            "strategy": name,
            "width": config.width,
            "height": config.height,
            "max_iterations": config.max_iterations,
            "precision": config.precision,
            "seconds": result.seconds,
            "millis": result.millis,
            "matches_first": bool(np.array_equal(reference, result.image)),
        })

    df = pd.DataFrame(rows)

    outcsv = Path(args.outcsv)
    outcsv.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(outcsv, index=False)
    print(f"\n[run] timings -> {outcsv}")

    outfig = Path(args.outfig)
    outfig.parent.mkdir(parents=True, exist_ok=True)
    plot_timings(df, outfig, f"Mandelbrot {config.width}x{config.height}")
    print(f"[run] chart   -> {outfig}")

    if args.save_image:
        try:
            save_image(reference, config.output)
        except ImageWriteError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
        print(f"[run] image   -> {config.output}")

    if not df["matches_first"].all():
        bad = df.loc[~df["matches_first"], "strategy"].tolist()
        print(f"\nERROR: strategies disagree with {args.strategies[0]}: {bad}", file=sys.stderr)
        return 1

    print("\n✓ all strategies produced identical images")
    return 0


if __name__ == "__main__":
    sys.exit(main())
