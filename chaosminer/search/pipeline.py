"""Single-combination search pipeline.

    synthesize -> classify (short run) -> integrate (full run) -> spread

Every rejection is an ordinary ``PipelineOutcome`` with a verdict and no
trajectory. Only configuration faults raise.

Usage::

    from chaosminer.search.config import MinerConfig
    from chaosminer.search.pipeline import evaluate

    outcome = evaluate("3vg11h8l6", MinerConfig())
    if outcome.accepted:
        renderer.consume(outcome)
"""

from __future__ import annotations

import logging
from typing import Optional

from chaosminer.data.hashing import params_sha256, trajectory_sha256
from chaosminer.data.modifiers import ModifierPair
from chaosminer.data.schemas import PipelineOutcome, Verdict
from chaosminer.data.synthesis import params_from_seed
from chaosminer.indicators.lyapunov import classify
from chaosminer.indicators.spread import spread
from chaosminer.indicators.trajectory import integrate
from chaosminer.progress import ProgressCallback
from chaosminer.search.config import MinerConfig, parse_seed_spec
from chaosminer.search.sinks import TrajectorySink

logger = logging.getLogger(__name__)

STAGE_CLASSIFY = "classify"
STAGE_INTEGRATE = "integrate"
STAGE_SPREAD = "spread"


def evaluate(
    seed: str,
    config: Optional[MinerConfig] = None,
    modifiers: Optional[ModifierPair] = None,
    progress: Optional[ProgressCallback] = None,
) -> PipelineOutcome:
    """Run one (seed, modifier pair) combination through the pipeline.

    Args:
        seed: Seed string selecting the attractor parameters.
        config: Pipeline configuration. Defaults to ``MinerConfig()``.
        modifiers: Modifier pair; defaults to the pair in ``config``.
        progress: Optional progress callback for the full-length run.

    Returns:
        PipelineOutcome. ``trajectory`` and ``spread`` are set only when
        the verdict is ``Verdict.CHAOTIC``.
    """
    if config is None:
        config = MinerConfig()
    if modifiers is None:
        modifiers = config.modifiers
    else:
        modifiers = ModifierPair.of(*modifiers)

    params = params_from_seed(seed, decimals=config.coefficient_decimals)
    classification = classify(params, modifiers, config.lyapunov)
    outcome = PipelineOutcome(
        seed=seed,
        modifiers=modifiers,
        params=params,
        verdict=classification.verdict,
        stage=STAGE_CLASSIFY,
        classification=classification,
        meta={"params_sha256": params_sha256(params)},
    )
    if not classification.verdict.accepted:
        logger.debug("%s rejected at %s: %s", outcome.name, STAGE_CLASSIFY, classification.verdict.value)
        return outcome

    trajectory = integrate(
        params,
        config.point_count,
        modifiers,
        progress=progress,
        progress_every=config.progress_every,
    )
    # A chaotic diagnostic run can still escape later on.
    if trajectory.bounds.exceeds(config.lyapunov.escape_bound):
        outcome.verdict = Verdict.DIVERGING
        outcome.stage = STAGE_INTEGRATE
        logger.debug("%s rejected at %s: diverging", outcome.name, STAGE_INTEGRATE)
        return outcome

    result = spread(
        trajectory,
        subdivisions=config.spread_subdivisions,
        max_points=config.spread_max_points,
        progress=progress,
    )
    outcome.stage = STAGE_SPREAD
    if result.value < config.spread_filter:
        outcome.verdict = Verdict.LOW_SPREAD
        outcome.meta["spread"] = result.value
        logger.debug(
            "%s rejected at %s: %.4f < %.4f",
            outcome.name, STAGE_SPREAD, result.value, config.spread_filter,
        )
        return outcome

    outcome.trajectory = trajectory
    outcome.spread = result
    outcome.meta["trajectory_sha256"] = trajectory_sha256(trajectory)
    logger.info(
        "seed: %s\tmods: %s\tspread: %.3f\tlyapunov: %.1f",
        seed, modifiers, result.value, classification.lyapunov_sum,
    )
    return outcome


def evaluate_spec(
    spec: str,
    config: Optional[MinerConfig] = None,
    progress: Optional[ProgressCallback] = None,
) -> PipelineOutcome:
    """Evaluate a ``seed`` or ``seed_xmod_ymod`` spec string."""
    seed, modifiers = parse_seed_spec(spec)
    return evaluate(seed, config, modifiers=modifiers, progress=progress)


def render(
    seed: str,
    sink: TrajectorySink,
    config: Optional[MinerConfig] = None,
    modifiers: Optional[ModifierPair] = None,
    progress: Optional[ProgressCallback] = None,
) -> PipelineOutcome:
    """Evaluate a combination and hand it to ``sink`` if accepted."""
    outcome = evaluate(seed, config, modifiers=modifiers, progress=progress)
    if outcome.accepted:
        sink.consume(outcome)
    return outcome
