"""
Render configuration for the Mandelbrot rasterizer.

Image size, iteration cap, viewport and output path all live on an
immutable RenderConfig so the same code can render a 64x64 test grid or the
full 28000x16000 image.

Main entrypoints:
    RenderConfig(...)            -> validated, frozen config
    load_config(path, **over)    -> RenderConfig from a YAML file
    coordinate_of(x, y, config)  -> (x0, y0) on the complex plane
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
import yaml


DEFAULT_WIDTH = 28_000
DEFAULT_HEIGHT = 16_000
MAX_ITERATIONS = 100
DEFAULT_OUTPUT = "mandel_parallel.png"
PRECISIONS = ("float32", "float64")


@dataclass(frozen=True)
class Viewport:
    """Rectangle of the complex plane mapped onto the pixel grid."""
    x_min: float = -2.5
    x_max: float = 1.0
    y_min: float = -1.0
    y_max: float = 1.0

    def __post_init__(self):
        if not self.x_max > self.x_min:
            raise ValueError(f"Empty viewport: x_max ({self.x_max}) must exceed x_min ({self.x_min})")
        if not self.y_max > self.y_min:
            raise ValueError(f"Empty viewport: y_max ({self.y_max}) must exceed y_min ({self.y_min})")


@dataclass(frozen=True)
class RenderConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    max_iterations: int = MAX_ITERATIONS
    viewport: Viewport = field(default_factory=Viewport)
    output: str = DEFAULT_OUTPUT
    workers: Optional[int] = None  # None => os.cpu_count()
    rows_per_task: int = 1
    vectorize: bool = False
    precision: str = "float32"

    def __post_init__(self):
        if self.precision not in PRECISIONS:
            raise ValueError(f"precision must be one of {PRECISIONS}, got {self.precision!r}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")
        if self.rows_per_task < 1:
            raise ValueError(f"rows_per_task must be >= 1, got {self.rows_per_task}")

    @property
    def shape(self) -> Tuple[int, int, int]:
        """Shape of the RGB image buffer (rows, columns, channels)."""
        return (self.height, self.width, 3)

    @property
    def dtype(self):
        """Real scalar type used for coordinates and the escape recurrence."""
        return np.dtype(self.precision).type

    @property
    def complex_dtype(self):
        return np.result_type(self.dtype, np.complex64).type

    def with_overrides(self, **overrides) -> "RenderConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def coordinate_of(x: int, y: int, config: RenderConfig):
    """
    Map pixel (x, y) to (x0, y0) with a fixed affine transform.

    Every step is done in config.dtype. With the default viewport this is
    exactly f(x) / f(W) * 3.5 - 2.5 and f(y) / f(H) * 2.0 - 1.0 for
    f = config.dtype, so x0 is in [-2.5, 1.0) and y0 in [-1.0, 1.0).
    """
    f = config.dtype
    vp = config.viewport
    x0 = f(x) / f(config.width) * (f(vp.x_max) - f(vp.x_min)) + f(vp.x_min)
    y0 = f(y) / f(config.height) * (f(vp.y_max) - f(vp.y_min)) + f(vp.y_min)
    return x0, y0


def axis_coords(config: RenderConfig) -> Tuple[np.ndarray, np.ndarray]:
    """
    All column x0 values and all row y0 values, elementwise equal to
    coordinate_of.
    """
    f = config.dtype
    vp = config.viewport
    xs = np.arange(config.width, dtype=f) / f(config.width) * (f(vp.x_max) - f(vp.x_min)) + f(vp.x_min)
    ys = np.arange(config.height, dtype=f) / f(config.height) * (f(vp.y_max) - f(vp.y_min)) + f(vp.y_min)
    return xs, ys


def load_config(path: str | Path, **overrides) -> RenderConfig:
    """
    Load a RenderConfig from YAML. Missing keys keep their defaults.

    Example file:
        width: 28000
        height: 16000
        max_iterations: 100
        viewport: {x_min: -2.5, x_max: 1.0, y_min: -1.0, y_max: 1.0}
        output: mandel_parallel.png
        precision: float32
    """
    with open(path, "r") as f:
        cfg = yaml.safe_load(f) or {}

    vp = cfg.get("viewport", {}) or {}
    viewport = Viewport(
        x_min=float(vp.get("x_min", -2.5)),
        x_max=float(vp.get("x_max", 1.0)),
        y_min=float(vp.get("y_min", -1.0)),
        y_max=float(vp.get("y_max", 1.0)),
    )

    workers = cfg.get("workers")
    config = RenderConfig(
        width=int(cfg.get("width", DEFAULT_WIDTH)),
        height=int(cfg.get("height", DEFAULT_HEIGHT)),
        max_iterations=int(cfg.get("max_iterations", MAX_ITERATIONS)),
        viewport=viewport,
        output=str(cfg.get("output", DEFAULT_OUTPUT)),
        workers=int(workers) if workers is not None else None,
        rows_per_task=int(cfg.get("rows_per_task", 1)),
        vectorize=bool(cfg.get("vectorize", False)),
        precision=str(cfg.get("precision", "float32")),
    )
    return config.with_overrides(**overrides)
