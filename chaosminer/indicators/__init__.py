"""Trajectory integration, Lyapunov classification and spread."""

from chaosminer.indicators.trajectory import integrate, step
from chaosminer.indicators.lyapunov import LyapunovSettings, classify, renormalize
from chaosminer.indicators.spread import spread

__all__ = [
    "integrate",
    "step",
    "LyapunovSettings",
    "classify",
    "renormalize",
    "spread",
]
