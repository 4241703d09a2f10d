"""
Random data and challenge source.

Stream data and verifier challenges both come from here, so a run can be
reproduced from its seed. Backed by a numpy Generator; every value handed
out is a plain Python int.
"""

from __future__ import annotations
from typing import List, Optional, Union

import numpy as np

from .field import PRIME


DEFAULT_VALUE_BOUND = 1000

# Challenges avoid 0 and 1 so that a corrupted g(2) always moves g(r).
MIN_CHALLENGE = 2


class RandomSource:
    """
    Seedable source of frequency data and field-element challenges.

    Attributes:
        value_bound: Frequencies are drawn from [0, value_bound)

    Example:
        >>> source = RandomSource(seed=7)
        >>> len(source.data_vector(16))
        16
    """

    def __init__(self, seed: Optional[Union[int, np.random.Generator]] = None,
                 value_bound: int = DEFAULT_VALUE_BOUND):
        if value_bound < 1:
            raise ValueError("value_bound must be at least 1")
        if isinstance(seed, np.random.Generator):
            self.rng = seed
        else:
            self.rng = np.random.default_rng(seed)
        self.value_bound = value_bound

    def data_vector(self, size: int) -> List[int]:
        """Frequencies for a stream over a universe of `size` items."""
        return self.rng.integers(0, self.value_bound, size=size).tolist()

    def data_matrix(self, rows: int, cols: int) -> List[List[int]]:
        """Frequencies laid out as a rows x cols matrix."""
        return self.rng.integers(0, self.value_bound, size=(rows, cols)).tolist()

    def challenge_vector(self, length: int) -> List[int]:
        """`length` independent challenges in [2, p)."""
        return self.rng.integers(MIN_CHALLENGE, PRIME, size=length,
                                 dtype=np.int64).tolist()

    def challenge_point(self) -> int:
        """A single challenge in [2, p)."""
        return int(self.rng.integers(MIN_CHALLENGE, PRIME, dtype=np.int64))
