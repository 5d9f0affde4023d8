"""Data schemas for chaosminer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from chaosminer.data.modifiers import ModifierPair

COEFFICIENT_COUNT = 6


class Verdict(str, Enum):
    """Outcome of evaluating one (seed, modifier pair) combination."""

    CHAOTIC = "chaotic"
    DIVERGING = "diverging"
    COLLAPSED = "collapsed"
    NEUTRAL = "neutral"
    PERIODIC = "periodic"
    LOW_SPREAD = "low-spread"

    @property
    def accepted(self) -> bool:
        return self is Verdict.CHAOTIC


@dataclass(frozen=True)
class AttractorParameters:
    """Coefficients and initial point of one quadratic map.

    Attributes:
        ax: Six coefficients of the x' polynomial.
        ay: Six coefficients of the y' polynomial.
        x0: Initial x coordinate.
        y0: Initial y coordinate.
    """

    ax: Tuple[float, ...]
    ay: Tuple[float, ...]
    x0: float
    y0: float

    def __post_init__(self):
        for name in ("ax", "ay"):
            coeffs = tuple(float(c) for c in getattr(self, name))
            if len(coeffs) != COEFFICIENT_COUNT:
                raise ValueError(
                    f"{name} must have exactly {COEFFICIENT_COUNT} coefficients, "
                    f"got {len(coeffs)}"
                )
            object.__setattr__(self, name, coeffs)
        object.__setattr__(self, "x0", float(self.x0))
        object.__setattr__(self, "y0", float(self.y0))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {"ax": list(self.ax), "ay": list(self.ay), "x0": self.x0, "y0": self.y0}


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box of a trajectory."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x_min, self.x_max, self.y_min, self.y_max)

    @property
    def width(self) -> float:
        return abs(self.x_max - self.x_min)

    @property
    def height(self) -> float:
        return abs(self.y_max - self.y_min)

    def has_nan(self) -> bool:
        return any(v != v for v in self.as_tuple())

    def exceeds(self, limit: float) -> bool:
        """True if any bound is NaN or larger than ``limit`` in magnitude."""
        return self.has_nan() or any(abs(v) > limit for v in self.as_tuple())


@dataclass(frozen=True)
class Trajectory:
    """Ordered points of an integrated map plus their bounds.

    The coordinate arrays are made read-only on construction.
    """

    x: np.ndarray
    y: np.ndarray
    bounds: Bounds

    def __post_init__(self):
        if self.x.shape != self.y.shape or self.x.ndim != 1:
            raise ValueError(
                f"x and y must be 1D arrays of equal length, got {self.x.shape} and {self.y.shape}"
            )
        self.x.setflags(write=False)
        self.y.setflags(write=False)

    def __len__(self) -> int:
        return int(self.x.shape[0])

    def points(self, limit: Optional[int] = None) -> List[Tuple[float, float]]:
        """Return the first ``limit`` points as ``(x, y)`` tuples."""
        n = len(self) if limit is None else min(limit, len(self))
        return [(float(self.x[i]), float(self.y[i])) for i in range(n)]


@dataclass(frozen=True)
class ClassificationResult:
    """Result of the finite-time Lyapunov classification.

    Attributes:
        verdict: One of chaotic, diverging, collapsed, neutral, periodic.
        lyapunov_sum: Accumulated ``log(|dd/d0|)`` over the measured steps.
        steps: Index of the last trajectory step examined.
        measured_steps: Number of steps contributing to ``lyapunov_sum``.
        d0: Initial twin separation (0.0 when the run stopped before it).
    """

    verdict: Verdict
    lyapunov_sum: float = 0.0
    steps: int = 0
    measured_steps: int = 0
    d0: float = 0.0

    @property
    def exponent(self) -> float:
        """Mean log-growth per measured step."""
        return self.lyapunov_sum / max(1, self.measured_steps)


@dataclass(frozen=True)
class SpreadResult:
    """Fraction of grid cells visited by a trajectory.

    Attributes:
        value: visited / (cols * rows), in [0, 1].
        cell_size: Edge length of one grid cell.
        origin: Grid origin ``(x, y)``.
        cols: Number of grid columns.
        rows: Number of grid rows.
        visited: Distinct cells touched.
        scanned: Number of trajectory points scanned.
    """

    value: float
    cell_size: float = 0.0
    origin: Tuple[float, float] = (0.0, 0.0)
    cols: int = 0
    rows: int = 0
    visited: int = 0
    scanned: int = 0


@dataclass
class PipelineOutcome:
    """Result of running one (seed, modifier pair) through the pipeline.

    ``trajectory`` and ``spread`` are only populated on acceptance.
    """

    seed: str
    modifiers: ModifierPair
    params: AttractorParameters
    verdict: Verdict
    stage: str
    classification: Optional[ClassificationResult] = None
    trajectory: Optional[Trajectory] = None
    spread: Optional[SpreadResult] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def accepted(self) -> bool:
        return self.verdict.accepted

    @property
    def name(self) -> str:
        return f"{self.seed}_{self.modifiers.x}_{self.modifiers.y}"

    def filename(self, ext: str = "png") -> str:
        """Artifact file name ``{seed}_{x}_{y}.{ext}``."""
        return f"{self.name}.{ext.lstrip('.')}"

    def summary(self) -> Dict[str, Any]:
        """JSON-serializable summary without the trajectory arrays."""
        out: Dict[str, Any] = {
            "seed": self.seed,
            "x_modifier": self.modifiers.x,
            "y_modifier": self.modifiers.y,
            "verdict": self.verdict.value,
            "stage": self.stage,
            "params": self.params.to_dict(),
        }
        if self.classification is not None:
            out["lyapunov_sum"] = self.classification.lyapunov_sum
        if self.spread is not None:
            out["spread"] = self.spread.value
        if self.trajectory is not None:
            out["points"] = len(self.trajectory)
            out["bounds"] = list(self.trajectory.bounds.as_tuple())
        out.update(self.meta)
        return out
