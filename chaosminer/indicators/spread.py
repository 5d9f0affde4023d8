"""Spatial spread of a trajectory over its bounding box.

The bounding box is divided into square cells whose size is derived from
the shorter box side, and spread is the fraction of cells the trajectory
visits. Thin curves and tight clusters score low even when the underlying
map is chaotic.
"""

import math
from decimal import ROUND_FLOOR, Decimal
from typing import Optional

import numpy as np

from chaosminer.data.schemas import Bounds, SpreadResult, Trajectory
from chaosminer.progress import ProgressCallback, report

DEFAULT_SUBDIVISIONS = 100
DEFAULT_MAX_POINTS = 1_000_000
DEFAULT_THRESHOLD = 0.2

# Cell indexing is vectorised over chunks of this many points.
_CHUNK = 250_000
_MAX_CELLS = int(np.iinfo(np.int64).max)


def floor_to_first_decimal(number: float) -> float:
    """Round a positive number down to one significant decimal digit.

    Numbers >= 1 are floored to an integer. Works on the decimal
    representation so that e.g. 0.3 stays 0.3.

    >>> floor_to_first_decimal(0.0347)
    0.03
    >>> floor_to_first_decimal(18.37)
    18.0
    """
    if not (number > 0 and math.isfinite(number)):
        raise ValueError(f"number must be positive and finite, got {number!r}")
    if number >= 1:
        return float(math.floor(number))
    d = Decimal(repr(number))
    quantum = Decimal(1).scaleb(d.adjusted())
    return float(d.quantize(quantum, rounding=ROUND_FLOOR))


def floor_to_multiple(number: float, increment: float) -> float:
    """Floor ``number`` to a multiple of ``increment``.

    The result is rounded to the increment's decimal precision to strip
    binary representation noise (``0.3 * 3`` -> ``0.9``).
    """
    if not (increment > 0 and math.isfinite(increment)):
        raise ValueError(f"increment must be positive and finite, got {increment!r}")
    value = increment * math.floor(number / increment)
    precision = max(0, math.ceil(-math.log10(increment)))
    return round(value, precision)


def cell_size_for(bounds: Bounds, subdivisions: int = DEFAULT_SUBDIVISIONS) -> Optional[float]:
    """Grid cell size for ``bounds``, or None if the box is degenerate."""
    if subdivisions <= 0:
        raise ValueError(f"subdivisions must be positive, got {subdivisions}")
    if not all(math.isfinite(v) for v in bounds.as_tuple()):
        return None
    size = min(bounds.width, bounds.height) / subdivisions
    if size <= 0:
        return None
    return floor_to_first_decimal(size)


def spread(
    trajectory: Trajectory,
    bounds: Optional[Bounds] = None,
    subdivisions: int = DEFAULT_SUBDIVISIONS,
    max_points: int = DEFAULT_MAX_POINTS,
    progress: Optional[ProgressCallback] = None,
) -> SpreadResult:
    """Measure the fraction of grid cells visited by ``trajectory``.

    Args:
        trajectory: Integrated trajectory.
        bounds: Grid extent. Defaults to the trajectory's own bounds; pass
            fixed bounds to compare prefixes of the same trajectory.
        subdivisions: Cells along the shorter box side before coarsening.
        max_points: Only the first ``max_points`` points are scanned.
        progress: Optional callback ``(label, done, total)``.

    Returns:
        SpreadResult with value in [0, 1]. Degenerate boxes give 0.0.
    """
    if max_points <= 0:
        raise ValueError(f"max_points must be positive, got {max_points}")
    if bounds is None:
        bounds = trajectory.bounds

    cell = cell_size_for(bounds, subdivisions)
    if cell is None or len(trajectory) == 0:
        return SpreadResult(0.0)

    ox = floor_to_multiple(bounds.x_min, cell)
    oy = floor_to_multiple(bounds.y_min, cell)
    cols = int(math.floor((bounds.x_max - ox) / cell)) + 1
    rows = int(math.floor((bounds.y_max - oy) / cell)) + 1
    # Cell keys are int64; a grid that cannot be indexed is degenerate.
    if cols * rows > _MAX_CELLS:
        return SpreadResult(0.0, cell_size=cell, origin=(ox, oy), cols=cols, rows=rows)

    n = min(len(trajectory), max_points)
    keys = []
    with np.errstate(invalid="ignore"):
        for start in range(0, n, _CHUNK):
            stop = min(start + _CHUNK, n)
            xs = trajectory.x[start:stop]
            ys = trajectory.y[start:stop]
            finite = np.isfinite(xs) & np.isfinite(ys)
            col = np.clip(np.floor((xs[finite] - ox) / cell), 0, cols - 1).astype(np.int64)
            row = np.clip(np.floor((ys[finite] - oy) / cell), 0, rows - 1).astype(np.int64)
            keys.append(np.unique(row * cols + col))
            report(progress, "spreading", stop, n)

    visited = int(np.unique(np.concatenate(keys)).size)
    return SpreadResult(
        value=visited / (cols * rows),
        cell_size=cell,
        origin=(ox, oy),
        cols=cols,
        rows=rows,
        visited=visited,
        scanned=n,
    )
