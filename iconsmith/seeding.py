"""
seeding.py — String hashing and the seeded pseudo-random sequence.

Both pieces are deliberately tiny and platform-independent: every value is
reduced to 32 bits explicitly, so the same app name yields the same seed and
the same draw sequence on any host.

Usage:
    from iconsmith.seeding import hash_string, SeededRandom

    seed = hash_string("aura")          # → 2090090766
    rng  = SeededRandom(seed)
    hue  = rng.range(0, 360)
    kind = rng.pick(["circle", "square", "triangle"])
"""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

T = TypeVar("T")

HASH_BASE = 5381
HASH_MULTIPLIER = 33

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223

_MASK_32 = 0xFFFFFFFF
_MODULUS_32 = 2 ** 32


# ── Hasher ────────────────────────────────────────────────────────────────────

def _utf16_units(text: str):
    """Yield UTF-16 code units, so astral characters count as surrogate pairs."""
    data = text.encode("utf-16-le", errors="surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def hash_string(text: str) -> int:
    """
    djb2 rolling hash with 32-bit wraparound.

    The input is taken literally — callers normalize case/whitespace.
    The wrapped value is read as a signed 32-bit integer and its absolute
    value returned, so the result lies in [0, 2**31]. Empty string → 5381.
    """
    h = HASH_BASE
    for unit in _utf16_units(text):
        h = (h * HASH_MULTIPLIER + unit) & _MASK_32
    if h >= 2 ** 31:
        h -= _MODULUS_32
    return abs(h)


# ── Seeded generator ──────────────────────────────────────────────────────────

class SeededRandom:
    """Linear congruential generator. Aesthetic randomness only, not crypto."""

    __slots__ = ("state",)

    def __init__(self, seed: int):
        self.state = int(seed) & _MASK_32

    def next(self) -> float:
        """Advance one step and return a float in [0, 1)."""
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) & _MASK_32
        return self.state / _MODULUS_32

    def range(self, lo: float, hi: float) -> float:
        return lo + self.next() * (hi - lo)

    def int(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi], both bounds inclusive."""
        return math.floor(self.range(lo, hi + 1))

    def pick(self, items: Sequence[T]) -> T:
        return items[self.int(0, len(items) - 1)]
