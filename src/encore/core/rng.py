"""Deterministic RNG wrapper built on top of random.Random."""
from __future__ import annotations

from random import Random
from typing import Sequence, TypeVar

T_co = TypeVar("T_co")


class RNG:
    """Wrapper around random.Random that provides the draws the battle engine needs."""

    def __init__(self, seed: int) -> None:
        self._random = Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def roll_bonus(self, spread: int) -> int:
        """Return a uniform bonus in [0, spread]; a spread of zero never draws."""
        if spread <= 0:
            return 0
        return self._random.randint(0, spread)

    def pick_index(self, length: int) -> int:
        """Return a uniform index into a sequence of the given non-zero length."""
        if length <= 0:
            raise ValueError("Cannot pick from an empty sequence.")
        return self._random.randrange(length)

    def choice(self, seq: Sequence[T_co]) -> T_co:
        """Return a random element from the non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return seq[self.pick_index(len(seq))]
