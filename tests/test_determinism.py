"""End-to-end determinism checks."""

import numpy as np

from chaosminer.data.modifiers import ModifierPair
from chaosminer.search.config import MinerConfig
from chaosminer.search.pipeline import evaluate

CFG = MinerConfig(point_count=20000, spread_filter=0.0)


def test_accepted_runs_are_bit_identical():
    a = evaluate("3vg11h8l6", CFG)
    b = evaluate("3vg11h8l6", CFG)
    assert a.accepted and b.accepted
    assert np.array_equal(a.trajectory.x, b.trajectory.x)
    assert np.array_equal(a.trajectory.y, b.trajectory.y)
    assert a.meta["trajectory_sha256"] == b.meta["trajectory_sha256"]
    assert a.spread == b.spread
    assert a.classification == b.classification


def test_modified_runs_are_bit_identical():
    pair = ModifierPair("log", "cos")
    a = evaluate("qwufpc8pu", CFG, modifiers=pair)
    b = evaluate("qwufpc8pu", CFG, modifiers=pair)
    assert a.verdict == b.verdict
    assert a.meta == b.meta


def test_nearby_seeds_differ():
    a = evaluate("3vg11h8l6", CFG)
    b = evaluate("3vg11h8l7", CFG)
    assert a.params != b.params
    assert a.meta["params_sha256"] != b.meta["params_sha256"]


def test_rejection_is_idempotent():
    first = evaluate("seed0", CFG)
    second = evaluate("seed0", CFG)
    assert first.verdict == second.verdict
    assert first.stage == second.stage
    assert first.classification == second.classification
