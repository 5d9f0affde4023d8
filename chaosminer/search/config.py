"""Miner configuration: defaults, YAML loading and validation.

Usage::

    from chaosminer.search.config import load_config
    cfg = load_config("configs/miner.yaml")

YAML files are merged onto the defaults, so a file only needs the keys it
changes. Classifier thresholds live under a nested ``lyapunov:`` mapping.
"""

from __future__ import annotations

import copy
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from chaosminer.data.modifiers import ModifierPair, resolve_modifier
from chaosminer.indicators.lyapunov import LyapunovSettings
from chaosminer.indicators.spread import (
    DEFAULT_MAX_POINTS,
    DEFAULT_SUBDIVISIONS,
    DEFAULT_THRESHOLD,
)

DEFAULT_POINT_COUNT = 100_000


@dataclass(frozen=True)
class MinerConfig:
    """Per-invocation configuration of the search pipeline.

    Attributes:
        point_count: Points in the full-length trajectory.
        x_modifier: Modifier applied to x before each step.
        y_modifier: Modifier applied to y before each step.
        coefficient_decimals: Rounding policy for synthesized parameters;
            None keeps raw draws.
        lyapunov: Classifier thresholds.
        spread_filter: Minimum spread for acceptance, in [0, 1].
        spread_subdivisions: Cells along the shorter box side.
        spread_max_points: Trajectory prefix scanned for spread.
        seed_length: Length of generated seed strings when mining.
        image_format: Extension used for artifact file names.
        progress_every: Progress callback interval in iterations.
    """

    point_count: int = DEFAULT_POINT_COUNT
    x_modifier: str = "identity"
    y_modifier: str = "identity"
    coefficient_decimals: Optional[int] = 4
    lyapunov: LyapunovSettings = field(default_factory=LyapunovSettings)
    spread_filter: float = DEFAULT_THRESHOLD
    spread_subdivisions: int = DEFAULT_SUBDIVISIONS
    spread_max_points: int = DEFAULT_MAX_POINTS
    seed_length: int = 9
    image_format: str = "png"
    progress_every: int = 1000

    def __post_init__(self):
        # Canonicalize aliases such as "noop" before validating.
        for name in ("x_modifier", "y_modifier"):
            object.__setattr__(self, name, resolve_modifier(getattr(self, name)))
        errors = self.validate()
        if errors:
            raise ValueError("Invalid miner config: " + "; ".join(errors))

    @property
    def modifiers(self) -> ModifierPair:
        return ModifierPair(self.x_modifier, self.y_modifier)

    def validate(self) -> List[str]:
        """Check field ranges.

        Returns:
            List of validation error strings (empty if valid).
        """
        errors: List[str] = []
        if not _is_int(self.point_count) or self.point_count <= 0:
            errors.append(f"point_count must be a positive integer, got {self.point_count!r}")
        if self.coefficient_decimals is not None and (
            not _is_int(self.coefficient_decimals) or self.coefficient_decimals < 0
        ):
            errors.append(
                f"coefficient_decimals must be a non-negative integer or null, "
                f"got {self.coefficient_decimals!r}"
            )
        if not isinstance(self.spread_filter, (int, float)) or not 0.0 <= self.spread_filter <= 1.0:
            errors.append(f"spread_filter must be within [0, 1], got {self.spread_filter!r}")
        for name in ("spread_subdivisions", "spread_max_points", "seed_length", "progress_every"):
            value = getattr(self, name)
            if not _is_int(value) or value <= 0:
                errors.append(f"{name} must be a positive integer, got {value!r}")
        if not self.image_format or not isinstance(self.image_format, str):
            errors.append("image_format is required")
        return errors

    def replace(self, **changes: Any) -> "MinerConfig":
        """Return a copy with ``changes`` applied and re-validated."""
        data = self.to_dict()
        return MinerConfig.from_dict(_deep_update(data, changes))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a YAML/JSON-serializable dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MinerConfig":
        """Build a config from a (possibly partial) mapping.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        if not isinstance(data, dict):
            raise ValueError("Miner config must be a mapping/object")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown miner config keys: {unknown}")

        kwargs = dict(data)
        lyap = kwargs.get("lyapunov")
        if isinstance(lyap, dict):
            lyap_known = {f.name for f in fields(LyapunovSettings)}
            lyap_unknown = sorted(set(lyap) - lyap_known)
            if lyap_unknown:
                raise ValueError(f"Unknown lyapunov config keys: {lyap_unknown}")
            kwargs["lyapunov"] = LyapunovSettings(**_coerce_floats(lyap))
        elif lyap is not None and not isinstance(lyap, LyapunovSettings):
            raise ValueError("lyapunov must be a mapping/object")
        return cls(**kwargs)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_FLOAT_KEYS = ("neutral_band", "escape_bound", "near_zero", "perturbation")


def _coerce_floats(lyap: Dict[str, Any]) -> Dict[str, Any]:
    # PyYAML reads "1e10" (no decimal point) as a string.
    out = dict(lyap)
    for key in _FLOAT_KEYS:
        if isinstance(out.get(key), str):
            try:
                out[key] = float(out[key])
            except ValueError:
                raise ValueError(f"lyapunov.{key} must be a number, got {out[key]!r}") from None
    return out


def _deep_update(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``overrides`` onto a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_update(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Union[str, Path, None] = None) -> MinerConfig:
    """Load YAML config and merge onto defaults.

    Args:
        config_path: Path to a YAML file, or None for the defaults.

    Returns:
        Validated MinerConfig.
    """
    if config_path is None:
        return MinerConfig()

    with open(config_path, "r", encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError("Miner config must be a YAML mapping/object")

    return MinerConfig.from_dict(_deep_update(MinerConfig().to_dict(), loaded))


def parse_seed_spec(spec: str) -> Tuple[str, Optional[ModifierPair]]:
    """Split ``seed_xmod_ymod`` into its seed and modifier pair.

    A spec without exactly two trailing modifier components is a bare seed
    and yields ``(seed, None)``.

    >>> parse_seed_spec("qwufpc8pu_log_cos")
    ('qwufpc8pu', ModifierPair(x='log', y='cos'))
    """
    parts = spec.split("_")
    if len(parts) == 3:
        seed, x_mod, y_mod = parts
        return seed, ModifierPair.of(x_mod, y_mod)
    return parts[0], None
