"""chaosminer/data/hashing.py: Trajectory and parameter fingerprinting.

Fingerprints make determinism checkable without comparing full arrays:
two runs with the same seed, modifier pair and point count must produce
the same trajectory fingerprint.

Trajectory formula (authoritative):
    sha256(
        "<n>\\n" + x as little-endian float64 bytes + y as little-endian float64 bytes
    )

Parameter formula:
    sha256(repr of ax, ay, x0, y0 joined by ":")
"""
from __future__ import annotations

import hashlib
from typing import Optional

import numpy as np

from chaosminer.data.schemas import AttractorParameters, Trajectory

__all__ = [
    "trajectory_sha256",
    "params_sha256",
]


def trajectory_sha256(trajectory: Trajectory, limit: Optional[int] = None) -> str:
    """Compute the SHA256 of a trajectory's coordinates.

    Args:
        trajectory: Trajectory to fingerprint.
        limit: If given, only the first ``limit`` points are hashed.

    Returns:
        64-character lowercase hex SHA256 string.
    """
    n = len(trajectory) if limit is None else min(limit, len(trajectory))
    h = hashlib.sha256()
    h.update(f"{n}\n".encode("utf-8"))
    h.update(np.ascontiguousarray(trajectory.x[:n], dtype="<f8").tobytes())
    h.update(np.ascontiguousarray(trajectory.y[:n], dtype="<f8").tobytes())
    return h.hexdigest()


def params_sha256(params: AttractorParameters) -> str:
    """Compute the SHA256 of a parameter set (repr keeps full precision)."""
    parts = [repr(v) for v in params.ax] + [repr(v) for v in params.ay]
    parts += [repr(params.x0), repr(params.y0)]
    return hashlib.sha256(":".join(parts).encode("utf-8")).hexdigest()
