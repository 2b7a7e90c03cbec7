"""
Random Source
=============
Seeded pseudorandom generator shared by every stochastic step of a run
"""

import numpy as np
from typing import MutableSequence, Optional


class RandomSource:
    """
    Single seeded generator for one simulation run

    Population initialization, daily shuffling, movement and infection
    decisions all draw from the same instance, in that order, so a fixed
    seed reproduces a whole trajectory.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize random source

        Args:
            seed: Random seed (None = nondeterministic)
        """
        self.set_seed(seed)

    def set_seed(self, seed: Optional[int]):
        """Reset the generator state deterministically from seed"""
        self._seed = seed
        self.rng = np.random.default_rng(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def next_uniform(self) -> float:
        """Uniform draw in [0, 1)"""
        return float(self.rng.random())

    def next_int(self, bound: int) -> int:
        """Integer draw in [0, bound)"""
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return int(self.rng.integers(0, bound))

    def sample_neg_exp(self, mean: float) -> int:
        """
        Sample a negative-exponential duration truncated to whole days
        Inverse transform: floor(-mean * ln(1 - U))
        """
        if mean < 0:
            raise ValueError(f"mean must be non-negative, got {mean}")
        u = self.next_uniform()
        return int(np.floor(-mean * np.log(1.0 - u)))

    def shuffle(self, items: MutableSequence):
        """Shuffle a mutable sequence in place"""
        self.rng.shuffle(items)
