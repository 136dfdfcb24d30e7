"""
Grid rasterizer: turns a RenderConfig into an (H, W, 3) uint8 image.

Three interchangeable strategies, all producing the same pixels:
  "sequential" -> scalar evaluator, x outer / y inner
  "complex"    -> complex-number evaluator, same order
  "parallel"   -> one task per row on a process pool, rows written straight
                  into a shared-memory image buffer
"""

from __future__ import annotations

import multiprocessing as mp
import os
from multiprocessing import shared_memory

import numpy as np

from mandelbrot.colour import colour_for, colourize
from mandelbrot.config import RenderConfig, axis_coords, coordinate_of
from mandelbrot.escape import escape_count, escape_count_complex, escape_counts


def allocate_image(config: RenderConfig) -> np.ndarray:
    return np.zeros(config.shape, dtype=np.uint8)


def render_sequential(config: RenderConfig) -> np.ndarray:
    img = allocate_image(config)
    xs, ys = axis_coords(config)

    for x in range(config.width):
        x0 = xs[x]
        for y in range(config.height):
            n = escape_count(x0, ys[y], config.max_iterations)
            img[y, x] = colour_for(n, config.max_iterations)

    return img


def render_sequential_complex(config: RenderConfig) -> np.ndarray:
    img = allocate_image(config)
    ctype = config.complex_dtype

    for x in range(config.width):
        for y in range(config.height):
            x0, y0 = coordinate_of(x, y, config)
            n = escape_count_complex(ctype(complex(x0, y0)), config.max_iterations)
            img[y, x] = colour_for(n, config.max_iterations)

    return img


def render_row(row: np.ndarray, y: int, config: RenderConfig) -> None:
    """Fill one image row (shape (W, 3)) in place."""
    xs, ys = axis_coords(config)
    y0 = ys[y]

    if config.vectorize:
        counts = escape_counts(xs, y0, config.max_iterations)
    else:
        counts = [escape_count(x0, y0, config.max_iterations) for x0 in xs]

    row[:] = colourize(counts, config.max_iterations)


# Per-process state for pool workers, set once by _init_worker.
_worker_shm = None
_worker_image = None
_worker_config = None


def _init_worker(shm_name: str, config: RenderConfig) -> None:
    global _worker_shm, _worker_image, _worker_config
    _worker_shm = shared_memory.SharedMemory(name=shm_name)
    _worker_image = np.ndarray(config.shape, dtype=np.uint8, buffer=_worker_shm.buf)
    _worker_config = config


def _render_row_task(y: int) -> int:
    render_row(_worker_image[y], y, _worker_config)
    return y


def render_parallel(config: RenderConfig) -> np.ndarray:
    """
    Render rows concurrently on a fixed-size process pool.

    Rows are handed out rows_per_task at a time and may finish in any order.
    Each worker writes only the rows it was given, so the shared buffer needs
    no locking. The image is complete once the result stream is drained.
    """
    workers = config.workers or os.cpu_count() or 1
    nbytes = config.width * config.height * 3

    shm = shared_memory.SharedMemory(create=True, size=nbytes)
    try:
        with mp.Pool(
            processes=workers,
            initializer=_init_worker,
            initargs=(shm.name, config),
        ) as pool:
            for _ in pool.imap_unordered(
                _render_row_task, range(config.height), chunksize=config.rows_per_task
            ):
                pass

        view = np.ndarray(config.shape, dtype=np.uint8, buffer=shm.buf)
        img = view.copy()
        del view
    finally:
        shm.close()
        shm.unlink()

    return img


STRATEGIES = {
    "sequential": render_sequential,
    "complex": render_sequential_complex,
    "parallel": render_parallel,
}


def strategy_title(name: str) -> str:
    """Benchmark label for a strategy, e.g. "Mandelbrot [Parallel]"."""
    return f"Mandelbrot [{name.capitalize()}]"


def pick_strategy(name: str):
    """Return the render function registered under name."""
    key = name.lower()
    if key not in STRATEGIES:
        raise ValueError(f"Unknown strategy: {name} (expected one of {sorted(STRATEGIES)})")
    return STRATEGIES[key]


def render(config: RenderConfig, strategy: str = "parallel") -> np.ndarray:
    return pick_strategy(strategy)(config)
