"""
Determinism helpers.

Goals:
- Provide one seeded RNG stream per day (anomaly pick + dropoff shuffle)
- Reproduce the mulberry32 generator bit-for-bit, so "DAY n" always plays out the same way

Non-goals:
- Cryptographic security
- Statistical quality beyond what a small game needs
"""

from __future__ import annotations

from config import BASE_SEED

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def day_seed(day: int) -> int:
    """Seed for a given day number (BASE_SEED + day, as an unsigned 32-bit word)."""
    return (BASE_SEED + int(day)) & _MASK32


class SeededRandomStream:
    """
    mulberry32 pseudo-random stream.

    Each call advances the 32-bit accumulator and returns the next float in [0, 1).
    Two streams built from the same seed yield the same (infinite) sequence; the only way
    to restart a stream is to build a new one.
    """

    __slots__ = ("seed", "_state")

    def __init__(self, seed: int):
        self.seed = int(seed) & _MASK32
        self._state = self.seed

    def next_uint32(self) -> int:
        t = (self._state + _INCREMENT) & _MASK32
        self._state = t
        r = ((t ^ (t >> 15)) * (t | 1)) & _MASK32
        r ^= (r + (((r ^ (r >> 7)) * (r | 61)) & _MASK32)) & _MASK32
        return (r ^ (r >> 14)) & _MASK32

    def next_float(self) -> float:
        return self.next_uint32() / _TWO_POW_32

    def next_index(self, n: int) -> int:
        """floor(next_float() * n), for picking an index in range(n)."""
        return int(self.next_float() * n)

    def __call__(self) -> float:
        return self.next_float()

    def __iter__(self):
        return self

    def __next__(self) -> float:
        return self.next_float()

    def __repr__(self) -> str:
        return f"SeededRandomStream(seed={self.seed})"


def mulberry32(seed: int) -> SeededRandomStream:
    """Shorthand for `SeededRandomStream(seed)`."""
    return SeededRandomStream(seed)
