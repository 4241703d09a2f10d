"""
Frequency Vector for the interactive F2 protocol.

The stream's frequency counts a[0..N-1], N = 2^d, are read as a function on
the boolean hypercube {0,1}^d. Index i corresponds to the point whose
coordinate t is bit t of i, so bit 0 (adjacent pairs) is the variable fixed
first.

Key Operations:
    - Extension: the line through a[2k] and a[2k+1], evaluated at X = c
    - Round message: sum over pairs of the squared extension at X = 0, 1, 2
    - Compaction: fix the lowest variable to a challenge, halving the vector
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence

from ..common.field import PRIME, addmod, mulmod, submod, to_field
from ..common.polynomial import RoundPolynomial


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


@dataclass
class FrequencyVector:
    """
    A length-2^d vector of field elements with the sum-check operations.

    Attributes:
        values: Field elements (reduced on construction)

    Example:
        >>> v = FrequencyVector([1, 2, 3, 4])
        >>> v.num_vars
        2
        >>> v.sum_of_squares()
        30
    """
    values: List[int]

    def __post_init__(self):
        if not is_power_of_two(len(self.values)):
            raise ValueError(f"Vector length must be a power of 2, got {len(self.values)}")
        self.values = [to_field(v) for v in self.values]

    @property
    def size(self) -> int:
        return len(self.values)

    @property
    def num_vars(self) -> int:
        return self.size.bit_length() - 1

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        if self.size <= 8:
            return f"FrequencyVector({self.values})"
        return f"FrequencyVector(size={self.size}, first_few={self.values[:4]}...)"

    def compute_extension(self, pair_index: int, c: int) -> int:
        """
        Value of the line through (0, a[2k]) and (1, a[2k+1]) at X = c:
            a[2k] + c * (a[2k+1] - a[2k])
        """
        v0 = self.values[2 * pair_index]
        v1 = self.values[2 * pair_index + 1]
        return addmod(v0, mulmod(to_field(c), submod(v1, v0)))

    def round_message(self) -> RoundPolynomial:
        """
        Evaluations (g(0), g(1), g(2)) of the round polynomial

            g(c) = sum_k (a[2k] + c * (a[2k+1] - a[2k]))^2

        The extension at c = 2 is 2*a[2k+1] - a[2k].
        """
        if self.size < 2:
            raise ValueError("A single entry has no variable left to sum over")

        r0 = r1 = r2 = 0
        values = self.values
        for k in range(0, self.size, 2):
            ak = values[k]
            ak1 = values[k + 1]
            r0 = addmod(r0, mulmod(ak, ak))
            r1 = addmod(r1, mulmod(ak1, ak1))
            val_2 = submod(addmod(ak1, ak1), ak)
            r2 = addmod(r2, mulmod(val_2, val_2))
        return RoundPolynomial((r0, r1, r2))

    def compact(self, challenge: int) -> 'FrequencyVector':
        """
        Fix the lowest variable to `challenge`:
            new[k] = a[2k] + challenge * (a[2k+1] - a[2k])

        Returns a new vector of half the size; this one is left untouched.
        """
        if self.size < 2:
            raise ValueError("Cannot compact a vector of length 1")
        if not 0 <= challenge < PRIME:
            raise ValueError("Challenge must be a field element")

        return FrequencyVector([
            self.compute_extension(k, challenge) for k in range(self.size // 2)
        ])

    def evaluate_at_point(self, point: Sequence[int]) -> int:
        """
        Multilinear extension at `point` by repeated compaction.

        O(N) per point; the verifier's chi-table extrapolation computes the
        same value without holding the whole vector.
        """
        if len(point) != self.num_vars:
            raise ValueError(f"Point dimension {len(point)} != num_vars {self.num_vars}")

        current = self
        for r in point:
            current = current.compact(r)
        return current.values[0]

    def sum_of_squares(self) -> int:
        """F2 = sum a[i]^2 mod p."""
        total = 0
        for v in self.values:
            total = addmod(total, mulmod(v, v))
        return total
