"""Coordinate modifiers applied before a point enters the quadratic map.

A modifier maps a float to a float. Out-of-domain inputs (``sqrt`` or ``log``
of a negative number, ``sin`` of infinity) produce NaN instead of raising,
so that escaping trajectories surface as data for the classifier.
"""

from __future__ import annotations

import itertools
from typing import Callable, Dict, List, NamedTuple

import numpy as np

__all__ = [
    "MODIFIERS",
    "MODIFIER_NAMES",
    "ModifierPair",
    "IDENTITY_PAIR",
    "resolve_modifier",
    "get_modifier",
    "all_modifier_pairs",
]

Modifier = Callable[[float], float]


def _identity(v: float) -> float:
    return v


def _wrap(ufunc) -> Modifier:
    def modifier(v: float) -> float:
        with np.errstate(all="ignore"):
            return float(ufunc(v))
    modifier.__name__ = ufunc.__name__
    return modifier


# Insertion order defines the mining order of modifier pairs.
MODIFIERS: Dict[str, Modifier] = {
    "identity": _identity,
    "sin": _wrap(np.sin),
    "cos": _wrap(np.cos),
    "sqrt": _wrap(np.sqrt),
    "cbrt": _wrap(np.cbrt),
    "log": _wrap(np.log),
    "asinh": _wrap(np.arcsinh),
    "atan": _wrap(np.arctan),
}

MODIFIER_NAMES: List[str] = list(MODIFIERS)

# Names used by older seed specs.
_ALIASES: Dict[str, str] = {
    "noop": "identity",
}


def resolve_modifier(name: str) -> str:
    """Return the canonical modifier name, raising on unknown names."""
    canonical = _ALIASES.get(name, name)
    if canonical not in MODIFIERS:
        raise ValueError(
            f"Unknown modifier: {name!r}. Supported: {', '.join(MODIFIER_NAMES)}"
        )
    return canonical


def get_modifier(name: str) -> Modifier:
    """Look up a modifier callable by name (aliases accepted)."""
    return MODIFIERS[resolve_modifier(name)]


class ModifierPair(NamedTuple):
    """Modifiers for the x and y coordinates."""

    x: str = "identity"
    y: str = "identity"

    @classmethod
    def of(cls, x: str, y: str) -> "ModifierPair":
        """Build a pair with canonical, validated names."""
        return cls(resolve_modifier(x), resolve_modifier(y))

    def functions(self):
        """Return the ``(f, g)`` callables for this pair."""
        return get_modifier(self.x), get_modifier(self.y)

    def is_identity(self) -> bool:
        return self.x == "identity" and self.y == "identity"

    def __str__(self) -> str:
        return f"{self.x}/{self.y}"


IDENTITY_PAIR = ModifierPair()


def all_modifier_pairs() -> List[ModifierPair]:
    """All 64 (x, y) modifier combinations in mining order."""
    return [ModifierPair(x, y) for x, y in itertools.product(MODIFIER_NAMES, repeat=2)]
