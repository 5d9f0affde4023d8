"""Parameter synthesis from a deterministic generator.

Draw order is part of the seed contract: twelve coefficients interleaved as
``ax[0], ay[0], ax[1], ay[1], ...`` followed by ``x0`` and ``y0``. Changing
the order changes which attractor a seed selects.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from chaosminer.data.rng import SeededLCG
from chaosminer.data.schemas import COEFFICIENT_COUNT, AttractorParameters

DEFAULT_DECIMALS = 4


def _apply_policy(value: float, decimals: Optional[int]) -> float:
    """Round ``value`` to ``decimals`` places, ties away from zero.

    Uses the exact binary value, so 0.03125 -> 0.0313 where ``round``
    would give 0.0312.
    """
    if decimals is None:
        return value
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def synthesize(
    rand: SeededLCG,
    decimals: Optional[int] = DEFAULT_DECIMALS,
) -> AttractorParameters:
    """Build map coefficients and an initial point from ``rand``.

    Args:
        rand: Generator to draw from; advanced by exactly 14 draws.
        decimals: Rounding policy. An integer rounds every value to that many
            decimal places; None keeps the raw draws.

    Returns:
        AttractorParameters with coefficients in [-2, 2) and x0, y0 in
        [-0.5, 0.5).
    """
    if decimals is not None and decimals < 0:
        raise ValueError(f"decimals must be non-negative or None, got {decimals}")

    ax = []
    ay = []
    for _ in range(COEFFICIENT_COUNT):
        ax.append(_apply_policy(4 * (rand.random() - 0.5), decimals))
        ay.append(_apply_policy(4 * (rand.random() - 0.5), decimals))
    x0 = _apply_policy(rand.random() - 0.5, decimals)
    y0 = _apply_policy(rand.random() - 0.5, decimals)
    return AttractorParameters(ax=tuple(ax), ay=tuple(ay), x0=x0, y0=y0)


def params_from_seed(
    seed: str,
    decimals: Optional[int] = DEFAULT_DECIMALS,
) -> AttractorParameters:
    """Synthesize the parameters selected by a seed string."""
    return synthesize(SeededLCG.from_string(seed), decimals=decimals)
