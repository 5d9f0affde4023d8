"""chaosminer: searching quadratic maps for chaotic attractors."""

__version__ = "1.0.0"

from chaosminer.data.rng import SeededLCG, hash_code, disturbance_generator
from chaosminer.data.modifiers import MODIFIERS, ModifierPair, all_modifier_pairs
from chaosminer.data.schemas import (
    AttractorParameters,
    Bounds,
    Trajectory,
    ClassificationResult,
    SpreadResult,
    PipelineOutcome,
    Verdict,
)
from chaosminer.data.synthesis import synthesize, params_from_seed
from chaosminer.data.hashing import trajectory_sha256, params_sha256
from chaosminer.indicators.trajectory import integrate, step
from chaosminer.indicators.lyapunov import LyapunovSettings, classify, renormalize
from chaosminer.indicators.spread import spread
from chaosminer.search.config import MinerConfig, load_config, parse_seed_spec
from chaosminer.search.sinks import TrajectorySink, CollectingSink
from chaosminer.search.pipeline import evaluate, evaluate_spec, render
from chaosminer.search.mining import MineRecord, mine
from chaosminer.progress import TqdmProgress
