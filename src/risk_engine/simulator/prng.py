"""Seedable 32-bit pseudo-random stream (Mulberry32)."""

from __future__ import annotations

from typing import Iterator

_MASK = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_SCALE = 4294967296.0


class Mulberry32:
    """Reproducible uniform stream on [0, 1).

    Each instance owns its 32-bit state; two generators built from the same
    seed yield the same sequence on every platform.
    """

    __slots__ = ("seed", "_state")

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)
        self._state = self.seed & _MASK

    def next_uint32(self) -> int:
        self._state = (self._state + _INCREMENT) & _MASK
        s = self._state
        t = ((s ^ (s >> 15)) * (s | 1)) & _MASK
        t = ((t + (((t ^ (t >> 7)) * (t | 61)) & _MASK)) & _MASK) ^ t
        return (t ^ (t >> 14)) & _MASK

    def next_float(self) -> float:
        return self.next_uint32() / _SCALE

    __call__ = next_float

    def __iter__(self) -> Iterator[float]:
        while True:
            yield self.next_float()
