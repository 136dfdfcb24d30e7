import numpy as np

from mandelbrot.config import MAX_ITERATIONS


def escape_count(x0, y0, max_iterations: int = MAX_ITERATIONS) -> int:
    """
    Escape-time count for c = x0 + i*y0 under z_{n+1} = z_n^2 + c, z_0 = 0.

    Tracks the real and imaginary parts and their squares directly and stops
    once x^2 + y^2 > 4.0 (no square root) or max_iterations is reached.
    Arithmetic stays in the precision of the inputs: np.float32 coordinates
    iterate in single precision, Python floats in double.
    """
    dtype = np.result_type(x0, y0)
    if not np.issubdtype(dtype, np.floating):
        dtype = np.dtype(np.float64)
    f = dtype.type
    x0 = f(x0)
    y0 = f(y0)
    two = f(2.0)
    four = f(4.0)

    n = 0
    x = f(0.0)
    y = f(0.0)
    x_sqr = f(0.0)
    y_sqr = f(0.0)

    while x_sqr + y_sqr <= four and n < max_iterations:
        xt = x_sqr - y_sqr + x0
        y = two * x * y + y0
        x = xt

        x_sqr = x * x
        y_sqr = y * y

        n += 1

    return n


def escape_count_complex(c, max_iterations: int = MAX_ITERATIONS) -> int:
    """
    Same count as escape_count, written with a native complex type.

    np.complex64 iterates in single precision, Python complex in double.
    Slower than the scalar form; kept to cross-check it.
    """
    dtype = np.result_type(c)
    if not np.issubdtype(dtype, np.complexfloating):
        dtype = np.dtype(np.complex128)
    ctype = dtype.type
    c = ctype(c)
    z = ctype(0)
    n = 0

    # |z|^2 spelled out: abs() goes through hypot and can round differently
    while z.real * z.real + z.imag * z.imag <= 4.0 and n < max_iterations:
        z = z * z + c
        n += 1

    return n


def escape_counts(x0s, y0, max_iterations: int = MAX_ITERATIONS) -> np.ndarray:
    """
    Escape counts for a whole row: every x0 in x0s paired with one y0.

    Performs the same operations as escape_count on each element, in the
    dtype of x0s (float64 unless x0s is already a float array), restricted to
    the points that are still bounded, so results match the scalar form
    exactly.
    """
    x0s = np.asarray(x0s)
    if not np.issubdtype(x0s.dtype, np.floating):
        x0s = x0s.astype(np.float64)
    f = x0s.dtype.type
    y0 = f(y0)
    two = f(2.0)
    four = f(4.0)

    counts = np.zeros(x0s.shape, dtype=np.int32)
    x = np.zeros_like(x0s)
    y = np.zeros_like(x0s)
    x_sqr = np.zeros_like(x0s)
    y_sqr = np.zeros_like(x0s)

    for _ in range(max_iterations):
        # escaped points are never updated again, so they stay escaped
        idx = np.flatnonzero(x_sqr + y_sqr <= four)
        if idx.size == 0:
            break

        xi = x[idx]
        yi = y[idx]
        xt = x_sqr[idx] - y_sqr[idx] + x0s[idx]
        yi = two * xi * yi + y0
        xi = xt

        x[idx] = xi
        y[idx] = yi
        x_sqr[idx] = xi * xi
        y_sqr[idx] = yi * yi
        counts[idx] += 1

    return counts
