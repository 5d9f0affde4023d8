"""Search pipeline, mining iterator and trajectory sinks."""

from chaosminer.search.config import MinerConfig, load_config, parse_seed_spec
from chaosminer.search.sinks import TrajectorySink, CollectingSink
from chaosminer.search.pipeline import evaluate, evaluate_spec, render
from chaosminer.search.mining import MineRecord, mine

__all__ = [
    "MinerConfig",
    "load_config",
    "parse_seed_spec",
    "TrajectorySink",
    "CollectingSink",
    "evaluate",
    "evaluate_spec",
    "render",
    "MineRecord",
    "mine",
]
