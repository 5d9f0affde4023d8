"""Tests for progress reporting."""

import io

from chaosminer.data.synthesis import params_from_seed
from chaosminer.indicators.trajectory import integrate
from chaosminer.progress import TqdmProgress, report
from chaosminer.search.config import MinerConfig
from chaosminer.search.pipeline import evaluate


def test_report_without_callback_is_noop():
    report(None, "generating", 1, 2)


def test_integrate_reports_interval_and_completion():
    calls = []
    integrate(
        params_from_seed("3vg11h8l6"), 5000,
        progress=lambda label, done, total: calls.append((label, done, total)),
        progress_every=1000,
    )
    assert calls == [("generating", d, 5000) for d in (1000, 2000, 3000, 4000, 5000)]


def test_short_run_reports_once():
    calls = []
    integrate(params_from_seed("3vg11h8l6"), 10, progress=lambda *args: calls.append(args))
    assert calls == [("generating", 10, 10)]


def test_pipeline_reports_both_phases():
    labels = set()
    evaluate(
        "3vg11h8l6", MinerConfig(point_count=5000, spread_filter=0.0),
        progress=lambda label, done, total: labels.add(label),
    )
    assert labels == {"generating", "spreading"}


def test_tqdm_progress_closes_finished_bars():
    out = io.StringIO()
    with TqdmProgress(file=out) as progress:
        integrate(params_from_seed("3vg11h8l6"), 3000, progress=progress, progress_every=1000)
        assert progress._bars == {}
    assert "generating" in out.getvalue()


def test_tqdm_progress_close_releases_open_bars():
    out = io.StringIO()
    progress = TqdmProgress(file=out)
    progress("generating", 10, 100)
    assert "generating" in progress._bars
    progress.close()
    assert progress._bars == {}
