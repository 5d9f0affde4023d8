"""String-seeded linear congruential generator.

Every attractor is fully determined by a seed string: the string is hashed
with a Java-style rolling hash and the absolute value of that hash seeds a
32-bit LCG. Two generators built from the same string produce identical
streams on every platform, because the register update is exact integer
arithmetic and the draw is a single IEEE-754 division.

Constants follow Numerical Recipes:
    z = (1664525 * z + 1013904223) mod 2**32
"""

from __future__ import annotations

from typing import Iterator, List

__all__ = [
    "MODULUS",
    "MULTIPLIER",
    "INCREMENT",
    "DISTURBANCE_SEED",
    "hash_code",
    "SeededLCG",
    "disturbance_generator",
]

MODULUS = 2 ** 32
MULTIPLIER = 1664525
INCREMENT = 1013904223

# The classifier perturbs every attractor with the same sequence.
DISTURBANCE_SEED = "disturbance"

_INT32_MASK = 0xFFFFFFFF


def _utf16_units(s: str) -> Iterator[int]:
    data = s.encode("utf-16-le")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def hash_code(s: str) -> int:
    """Order-dependent 32-bit signed hash of a string.

    ``h = 31 * h + unit`` over the UTF-16 code units of ``s``, wrapped to a
    signed 32-bit integer after every step.

    Args:
        s: Seed string.

    Returns:
        Signed 32-bit hash in [-2**31, 2**31).
    """
    h = 0
    for unit in _utf16_units(s):
        h = (31 * h + unit) & _INT32_MASK
    if h >= 2 ** 31:
        h -= 2 ** 32
    return h


class SeededLCG:
    """Reproducible float stream in [0, 1).

    Attributes:
        state: Current 32-bit register value.
    """

    __slots__ = ("state",)

    def __init__(self, state: int):
        if state < 0:
            raise ValueError(f"LCG state must be non-negative, got {state}")
        self.state = state % MODULUS

    @classmethod
    def from_string(cls, seed: str) -> "SeededLCG":
        """Build a generator from a seed string."""
        if not isinstance(seed, str):
            raise ValueError(f"seed must be a string, got {type(seed).__name__}")
        return cls(abs(hash_code(seed)))

    def random(self) -> float:
        """Advance the register and return ``z / 2**32``."""
        self.state = (MULTIPLIER * self.state + INCREMENT) % MODULUS
        return self.state / MODULUS

    __call__ = random

    def draws(self, n: int) -> List[float]:
        """Return the next ``n`` draws."""
        return [self.random() for _ in range(n)]

    def __repr__(self) -> str:
        return f"SeededLCG(state={self.state})"


def disturbance_generator() -> SeededLCG:
    """Fresh generator for the classifier's twin perturbation."""
    return SeededLCG.from_string(DISTURBANCE_SEED)
