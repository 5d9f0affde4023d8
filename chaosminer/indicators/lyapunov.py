"""Finite-time Lyapunov classification of quadratic maps.

Two-trajectory estimate in the style of Wolf et al. (1985): a twin point is
placed at a small distance d0 from the initial point, advanced alongside the
diagnostic trajectory, and renormalized back to distance d0 after every
step. The sum of ``log(|dd / d0|)`` over the steps after a burn-in period
approximates the largest Lyapunov exponent times the number of steps.

sum >  neutral_band  chaotic (sensitive dependence on initial conditions)
sum < -neutral_band  periodic (nearby orbits converge)
|sum| < neutral_band neutral (marginally stable)

Trajectories that escape, or that settle on a fixed point, are rejected
before any exponent is measured.
"""

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple

from chaosminer.data.modifiers import IDENTITY_PAIR, ModifierPair
from chaosminer.data.rng import disturbance_generator
from chaosminer.data.schemas import AttractorParameters, ClassificationResult, Verdict
from chaosminer.indicators.trajectory import integrate, step


@dataclass(frozen=True)
class LyapunovSettings:
    """Tunable thresholds of the classifier.

    Attributes:
        burn_in: Steps discarded before accumulating the exponent.
        length: Points in the diagnostic trajectory.
        neutral_band: |sum| below this is classified neutral.
        escape_bound: Any bound beyond +/- this value means divergence.
        near_zero: Consecutive steps closer than this on both axes mean
            the orbit collapsed onto a fixed point.
        perturbation: Scale of the initial twin displacement per axis.
        twin_uses_modifiers: Advance the twin through the same coordinate
            modifiers as the trajectory. The default advances it with the
            plain polynomial.
    """

    burn_in: int = 1000
    length: int = 2000
    neutral_band: float = 10.0
    escape_bound: float = 1e10
    near_zero: float = 1e-10
    perturbation: float = 1e-3
    twin_uses_modifiers: bool = False

    def __post_init__(self):
        errors = self.validate()
        if errors:
            raise ValueError("Invalid Lyapunov settings: " + "; ".join(errors))

    def validate(self):
        """Check threshold consistency.

        Returns:
            List of validation error strings (empty if valid).
        """
        errors = []
        if not isinstance(self.length, int) or self.length < 2:
            errors.append(f"length must be an integer >= 2, got {self.length!r}")
        if not isinstance(self.burn_in, int) or self.burn_in < 0:
            errors.append(f"burn_in must be a non-negative integer, got {self.burn_in!r}")
        elif isinstance(self.length, int) and self.burn_in >= self.length - 1:
            errors.append(f"burn_in ({self.burn_in}) must be less than length - 1 ({self.length - 1})")
        for name in ("neutral_band", "escape_bound", "near_zero", "perturbation"):
            value = getattr(self, name)
            if not (value > 0 and math.isfinite(value)):
                errors.append(f"{name} must be a positive finite number, got {value!r}")
        return errors

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_SETTINGS = LyapunovSettings()


def renormalize(
    x: float,
    y: float,
    xe: float,
    ye: float,
    d0: float,
) -> Tuple[float, float, float]:
    """Pull the twin back to distance ``d0`` from ``(x, y)``.

    The twin is placed along the current separation direction, mirrored
    through the trajectory point.

    Args:
        x, y: Current trajectory point.
        xe, ye: Twin point after one map step.
        d0: Target separation.

    Returns:
        Tuple of (new_xe, new_ye, dd) where dd is the separation before
        renormalization.
    """
    dx = x - xe
    dy = y - ye
    dd = math.sqrt(dx * dx + dy * dy)
    return x + d0 * dx / dd, y + d0 * dy / dd, dd


def _initial_twin(x0: float, y0: float, perturbation: float) -> Tuple[float, float, float]:
    rand = disturbance_generator()
    while True:
        xe = x0 + (rand.random() - 0.5) * perturbation
        ye = y0 + (rand.random() - 0.5) * perturbation
        dx = x0 - xe
        dy = y0 - ye
        d0 = math.sqrt(dx * dx + dy * dy)
        if d0 > 0:
            return xe, ye, d0


def classify(
    params: AttractorParameters,
    modifiers: ModifierPair = IDENTITY_PAIR,
    settings: LyapunovSettings = DEFAULT_SETTINGS,
) -> ClassificationResult:
    """Classify the long-run behaviour of a map.

    Args:
        params: Map coefficients and initial point.
        modifiers: Coordinate modifiers, as used for the full render.
        settings: Classifier thresholds.

    Returns:
        ClassificationResult; only ``Verdict.CHAOTIC`` should proceed.
    """
    traj = integrate(params, settings.length, modifiers)
    if traj.bounds.exceeds(settings.escape_bound):
        return ClassificationResult(Verdict.DIVERGING)

    xs = traj.x.tolist()
    ys = traj.y.tolist()
    xe, ye, d0 = _initial_twin(xs[0], ys[0], settings.perturbation)
    twin_modifiers = modifiers if settings.twin_uses_modifiers else IDENTITY_PAIR

    lyapunov = 0.0
    measured = 0
    near_zero = settings.near_zero
    for i in range(1, settings.length):
        x = xs[i]
        y = ys[i]
        if abs(x - xs[i - 1]) < near_zero and abs(y - ys[i - 1]) < near_zero:
            return ClassificationResult(Verdict.COLLAPSED, lyapunov, i, measured, d0)

        if i > settings.burn_in:
            nxe, nye = step(xe, ye, params, twin_modifiers)
            dx = x - nxe
            dy = y - nye
            dd = math.sqrt(dx * dx + dy * dy)
            if dd == 0:
                # Twin merged with the orbit.
                return ClassificationResult(Verdict.COLLAPSED, lyapunov, i, measured, d0)
            if not math.isfinite(dd):
                return ClassificationResult(Verdict.DIVERGING, lyapunov, i, measured, d0)
            lyapunov += math.log(abs(dd / d0))
            measured += 1
            xe, ye, _ = renormalize(x, y, nxe, nye, d0)

    last = settings.length - 1
    if abs(lyapunov) < settings.neutral_band:
        verdict = Verdict.NEUTRAL
    elif lyapunov < 0:
        verdict = Verdict.PERIODIC
    else:
        verdict = Verdict.CHAOTIC
    return ClassificationResult(verdict, lyapunov, last, measured, d0)
