"""Trajectory engine for the quadratic map family.

    x' = ax0 + ax1*f(x) + ax2*f(x)*f(x) + ax3*f(x)*g(y) + ax4*g(y) + ax5*g(y)*g(y)
    y' = ay0 + ay1*f(x) + ay2*f(x)*f(x) + ay3*f(x)*g(y) + ay4*g(y) + ay5*g(y)*g(y)

f and g are coordinate modifiers. Terms are summed left to right in exactly
this order so trajectories are bit-identical across implementations.
Overflow to inf/NaN is not an error; the classifier detects it.
"""

from typing import Optional, Tuple

import numpy as np

from chaosminer.data.modifiers import IDENTITY_PAIR, ModifierPair
from chaosminer.data.schemas import AttractorParameters, Bounds, Trajectory
from chaosminer.progress import ProgressCallback, report

DEFAULT_PROGRESS_EVERY = 1000


def _check_point_count(n) -> int:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise ValueError(f"point count must be an integer, got {n!r}")
    if n <= 0:
        raise ValueError(f"point count must be positive, got {n}")
    return int(n)


def step(
    x: float,
    y: float,
    params: AttractorParameters,
    modifiers: ModifierPair = IDENTITY_PAIR,
) -> Tuple[float, float]:
    """Apply the map once to ``(x, y)``."""
    f, g = modifiers.functions()
    ax = params.ax
    ay = params.ay
    fx = f(x)
    gy = g(y)
    return (
        ax[0] + ax[1] * fx + ax[2] * fx * fx + ax[3] * fx * gy + ax[4] * gy + ax[5] * gy * gy,
        ay[0] + ay[1] * fx + ay[2] * fx * fx + ay[3] * fx * gy + ay[4] * gy + ay[5] * gy * gy,
    )


def integrate(
    params: AttractorParameters,
    n: int,
    modifiers: ModifierPair = IDENTITY_PAIR,
    progress: Optional[ProgressCallback] = None,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
) -> Trajectory:
    """Iterate the map ``n - 1`` times starting from ``(x0, y0)``.

    Args:
        params: Map coefficients and initial point.
        n: Number of points in the returned trajectory (>= 1).
        modifiers: Coordinate modifiers applied before each step.
        progress: Optional callback ``(label, done, total)``.
        progress_every: Callback interval in iterations.

    Returns:
        Trajectory of ``n`` points with running min/max bounds over all
        points. A NaN bound stays NaN.
    """
    n = _check_point_count(n)
    if progress_every <= 0:
        raise ValueError(f"progress_every must be positive, got {progress_every}")

    f, g = modifiers.functions()
    a0, a1, a2, a3, a4, a5 = params.ax
    b0, b1, b2, b3, b4, b5 = params.ay

    xs = np.empty(n, dtype=np.float64)
    ys = np.empty(n, dtype=np.float64)
    x = params.x0
    y = params.y0
    xs[0] = x
    ys[0] = y
    x_min = x_max = x
    y_min = y_max = y
    identity = modifiers.is_identity()

    with np.errstate(all="ignore"):
        for i in range(1, n):
            if identity:
                fx = x
                gy = y
            else:
                fx = f(x)
                gy = g(y)
            x, y = (
                a0 + a1 * fx + a2 * fx * fx + a3 * fx * gy + a4 * gy + a5 * gy * gy,
                b0 + b1 * fx + b2 * fx * fx + b3 * fx * gy + b4 * gy + b5 * gy * gy,
            )
            xs[i] = x
            ys[i] = y

            # NaN is sticky: x != x only for NaN, and nothing compares below NaN.
            if x_min == x_min and (x < x_min or x != x):
                x_min = x
            if x_max == x_max and (x > x_max or x != x):
                x_max = x
            if y_min == y_min and (y < y_min or y != y):
                y_min = y
            if y_max == y_max and (y > y_max or y != y):
                y_max = y

            if progress is not None and i % progress_every == 0:
                report(progress, "generating", i, n)

    report(progress, "generating", n, n)
    return Trajectory(x=xs, y=ys, bounds=Bounds(x_min, x_max, y_min, y_max))
