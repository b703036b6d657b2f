"""
Seeded pseudo-random number generator used by the noise kernel.

Mulberry32 is a tiny 32-bit generator. It is reproduced here with explicit
32-bit masking so that a given seed yields exactly the same sequence of
floats as other implementations of the same algorithm.
"""

from __future__ import annotations

_MASK = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


class Mulberry32:
    """
    Deterministic generator producing floats in [0, 1).

    Usage:
        rand = Mulberry32(42)
        value = rand()
    """

    def __init__(self, seed: int):
        self._state = int(seed) & _MASK

    def next_uint32(self) -> int:
        """Advance the generator and return the next 32-bit output."""
        self._state = (self._state + 0x6D2B79F5) & _MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
        return (t ^ (t >> 14)) & _MASK

    def __call__(self) -> float:
        return self.next_uint32() / 4294967296.0
