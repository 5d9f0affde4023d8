"""Lazy, restartable enumeration of the attractor search space.

``mine`` generates random seed strings and tries every requested modifier
pair for each one, yielding one ``MineRecord`` per combination. The stream
is infinite unless ``limit`` is given; it is fully determined by
``rng_seed``, so a run can be resumed by passing the index of the next
record as ``start`` and split across workers by giving each its own
``rng_seed``.

Usage::

    import itertools
    from chaosminer.search.mining import mine

    for record in itertools.islice(mine(rng_seed=7), 640):
        if record.outcome.accepted:
            ...
"""

from __future__ import annotations

import logging
import random
import string
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from chaosminer.data.modifiers import ModifierPair, all_modifier_pairs
from chaosminer.data.schemas import PipelineOutcome
from chaosminer.search.config import MinerConfig
from chaosminer.search.pipeline import evaluate
from chaosminer.search.sinks import TrajectorySink

logger = logging.getLogger(__name__)

SEED_ALPHABET = string.digits + string.ascii_lowercase


@dataclass
class MineRecord:
    """One evaluated combination in the mining stream.

    Attributes:
        index: Position in the stream (pass ``index + 1`` as ``start`` to
            resume after this record).
        seed: Seed string.
        modifiers: Modifier pair tried.
        outcome: Pipeline outcome.
    """

    index: int
    seed: str
    modifiers: ModifierPair
    outcome: PipelineOutcome


def random_seed_string(rng: random.Random, length: int = 9) -> str:
    """Draw a base-36 seed string of ``length`` characters."""
    return "".join(rng.choice(SEED_ALPHABET) for _ in range(length))


def seed_stream(rng_seed: Optional[int] = None, length: int = 9) -> Iterator[str]:
    """Infinite stream of seed strings, reproducible for a fixed ``rng_seed``."""
    rng = random.Random(rng_seed)
    while True:
        yield random_seed_string(rng, length)


def mine(
    config: Optional[MinerConfig] = None,
    rng_seed: Optional[int] = None,
    modifier_pairs: Optional[Sequence[ModifierPair]] = None,
    seeds: Optional[Iterator[str]] = None,
    start: int = 0,
    limit: Optional[int] = None,
    sink: Optional[TrajectorySink] = None,
) -> Iterator[MineRecord]:
    """Yield pipeline outcomes for seeds x modifier pairs.

    Args:
        config: Pipeline configuration. Defaults to ``MinerConfig()``.
        rng_seed: Seed of the seed-string stream. None draws from system
            entropy and is not restartable.
        modifier_pairs: Pairs tried per seed. Defaults to all 64.
        seeds: Explicit seed iterator; overrides ``rng_seed``.
        start: Number of records to skip (without evaluating them).
        limit: Maximum number of records to yield; None is unbounded.
        sink: Optional consumer called with every accepted outcome.

    Yields:
        MineRecord for each evaluated combination.
    """
    if config is None:
        config = MinerConfig()
    if start < 0:
        raise ValueError(f"start must be non-negative, got {start}")
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    pairs: List[ModifierPair] = (
        [ModifierPair.of(*p) for p in modifier_pairs]
        if modifier_pairs is not None
        else all_modifier_pairs()
    )
    if not pairs:
        raise ValueError("modifier_pairs must not be empty")
    if seeds is None:
        seeds = seed_stream(rng_seed, config.seed_length)
    logger.debug("Mining %d modifier pairs per seed from record %d", len(pairs), start)

    index = 0
    produced = 0
    for seed in seeds:
        for pair in pairs:
            if limit is not None and produced >= limit:
                return
            if index < start:
                index += 1
                continue

            outcome = evaluate(seed, config, modifiers=pair)
            if outcome.accepted and sink is not None:
                sink.consume(outcome)
            yield MineRecord(index=index, seed=seed, modifiers=pair, outcome=outcome)
            index += 1
            produced += 1
