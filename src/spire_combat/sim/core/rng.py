"""Seeded random source for deterministic combat resolution.

Every random decision the engine makes (shuffling an empty draw pile,
picking an enemy move, rolling rewards, upgrading a random card in hand)
goes through a :class:`GameRNG` passed in by the caller.  Sub-systems take a
*forked* stream so that consuming values in one does not perturb another.
"""

from __future__ import annotations

import hashlib
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class GameRNG:
    """Deterministic RNG that can be forked into independent sub-streams.

    Parameters
    ----------
    seed:
        Integer seed for the underlying Mersenne Twister.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    # -- draws ---------------------------------------------------------------

    def random_int(self, low: int, high: int) -> int:
        """Return a random integer *N* such that ``low <= N <= high``."""
        return self._rng.randint(low, high)

    def random_choice(self, seq: Sequence[T]) -> T:
        """Return a uniformly chosen element of a non-empty sequence."""
        return self._rng.choice(seq)

    def sample(self, seq: Sequence[T], k: int) -> list[T]:
        """Return *k* distinct elements (all of them if fewer exist)."""
        return self._rng.sample(list(seq), min(k, len(seq)))

    def weighted_index(self, weights: Sequence[float]) -> int:
        """Pick an index with probability proportional to its weight.

        Walks the weights subtracting each from a uniform roll and stops at
        the first index where the roll is no longer positive.  Falls back to
        index 0 if rounding leaves the roll positive after the last weight.
        """
        roll = self._rng.random() * sum(weights)
        for i, weight in enumerate(weights):
            roll -= weight
            if roll <= 0:
                return i
        return 0

    def shuffle(self, lst: list[T]) -> None:
        """Shuffle *lst* in-place."""
        self._rng.shuffle(lst)

    # -- forking -------------------------------------------------------------

    def fork(self, name: str) -> GameRNG:
        """Create a child RNG seeded from this seed and *name*.

        Forking with the same name always yields the same child seed, so
        ``"combat"``, ``"rewards"`` and ``"encounters"`` each get a stable,
        independent stream.
        """
        digest = hashlib.sha256(f"{self._seed}:{name}".encode()).digest()
        return GameRNG(int.from_bytes(digest[:8], "big"))

    def __repr__(self) -> str:
        return f"GameRNG(seed={self._seed})"
