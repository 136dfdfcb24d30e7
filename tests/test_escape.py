import numpy as np
import pytest
from pathlib import Path
import sys

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from mandelbrot.escape import escape_count, escape_count_complex, escape_counts

MAX_ITER = 100

BOUNDARY_POINTS = [
    (0.0, 0.0),
    (-2.5, -1.0),
    (-2.0, 0.0),      # |z| sits exactly on 2 forever
    (0.25, 0.0),      # cusp of the main cardioid
    (-0.75, 0.0),
    (-0.75, 0.1),
    (-1.25, 0.0),
    (0.999, 0.999),
    (-0.0390625, 0.0),
    (0.3, 0.5),
    (-0.1, 0.651),
]


def _random_points(n=500, seed=0):
    rng = np.random.default_rng(seed)
    xs = rng.uniform(-2.5, 1.0, n)
    ys = rng.uniform(-1.0, 1.0, n)
    return list(zip(xs.tolist(), ys.tolist()))


def test_origin_never_escapes():
    assert escape_count(0.0, 0.0) == MAX_ITER
    assert escape_count_complex(0j) == MAX_ITER


def test_far_points_escape_immediately():
    """|c|^2 > 4 leaves the disc on the very first step."""
    for x0, y0 in [(-2.5, -1.0), (3.0, 0.0), (0.0, -2.1), (1.5, 1.5)]:
        n = escape_count(x0, y0)
        assert 0 < n <= 2
        assert escape_count_complex(complex(x0, y0)) == n


def test_minus_two_stays_on_the_boundary():
    # orbit is -2, 2, 2, ... with |z|^2 == 4 which is not > 4
    assert escape_count(-2.0, 0.0) == MAX_ITER


@pytest.mark.parametrize("max_iter", [1, 2, 7, 100, 300])
def test_count_is_bounded(max_iter):
    for x0, y0 in BOUNDARY_POINTS + _random_points(200, seed=max_iter):
        n = escape_count(x0, y0, max_iter)
        assert 0 <= n <= max_iter


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_scalar_and_complex_agree(seed):
    for x0, y0 in BOUNDARY_POINTS + _random_points(seed=seed):
        assert escape_count(x0, y0) == escape_count_complex(complex(x0, y0)), (x0, y0)


def test_row_kernel_matches_scalar():
    rng = np.random.default_rng(42)
    x0s = rng.uniform(-2.5, 1.0, 400)
    for y0 in [-1.0, -0.5, 0.0, 0.1, 0.651, 0.999]:
        expected = [escape_count(x0, y0) for x0 in x0s.tolist()]
        np.testing.assert_array_equal(escape_counts(x0s, y0), expected)


def test_row_kernel_small_cap():
    x0s = np.array([0.0, -2.5, 0.25])
    np.testing.assert_array_equal(escape_counts(x0s, 0.0, max_iterations=3), [3, 1, 3])


@pytest.mark.parametrize("seed", [3, 4])
def test_single_precision_paths_agree(seed):
    """float32 scalar, complex64 and float32 row kernel give the same counts."""
    points = BOUNDARY_POINTS + _random_points(seed=seed)
    xs = np.array([p[0] for p in points], dtype=np.float32)
    ys = np.array([p[1] for p in points], dtype=np.float32)
    for x0, y0 in zip(xs, ys):
        n = escape_count(x0, y0)
        assert n == escape_count_complex(np.complex64(complex(x0, y0))), (x0, y0)
        assert escape_counts(np.array([x0], dtype=np.float32), y0)[0] == n
