import numpy as np

from mandelbrot.config import MAX_ITERATIONS

WHITE = (255, 255, 255)


def colour_for(iterations: int, max_iterations: int = MAX_ITERATIONS):
    """
    Grayscale pixel for one escape count.

    Points that never escaped (part of the set) are white. Everything else is
    iterations % 255 on all three channels, which wraps instead of scaling.
    """
    if iterations == max_iterations:
        return WHITE
    g = iterations % 255
    return (g, g, g)


def colourize(iters, max_iterations: int = MAX_ITERATIONS) -> np.ndarray:
    """Map an array of escape counts to uint8 RGB with colour_for's rules."""
    iters = np.asarray(iters)
    gray = np.where(iters == max_iterations, 255, iters % 255).astype(np.uint8)
    return np.stack([gray, gray, gray], axis=-1)
