import time
from dataclasses import dataclass

import numpy as np

from mandelbrot.config import RenderConfig


@dataclass
class BenchmarkResult:
    title: str
    image: np.ndarray
    seconds: float

    @property
    def millis(self) -> int:
        return int(self.seconds * 1000)


def benchmark(title: str, strategy, config: RenderConfig) -> BenchmarkResult:
    """Time one render call and print '<title>: <s>s | <ms>ms'."""
    start = time.perf_counter()
    img = strategy(config)
    elapsed = time.perf_counter() - start

    result = BenchmarkResult(title=title, image=img, seconds=elapsed)
    print(f"{title}: {int(elapsed)}s | {result.millis}ms")
    return result
