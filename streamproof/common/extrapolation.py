"""
Extrapolation Engine.

Evaluates a low-degree extension of a data vector at a point outside the
data's domain. Both flavours are linear in the vector:

    extrapolate(a, r) = sum_i weight_i(r) * a[i]

where weight_i depends only on the index and the point. The extrapolators
below build their tables once and can then be applied to many vectors
(every row of the tabulated matrix) or fed one stream update at a time.
"""

from __future__ import annotations
from typing import List, Optional, Sequence

from .field import addmod, mulmod, reduce, to_field
from .tables import (
    CHI_BLOCK_WIDTH,
    chi_tables,
    inverse_factorial_table,
    lagrange_table,
)


class MultilinearExtrapolator:
    """
    Multilinear extension of a length-2^d vector at a fixed point.

    The weight of index i is chi_i(r), assembled from one chi-table lookup
    per block of `width` index bits.

    Example:
        >>> ext = MultilinearExtrapolator([5, 9])
        >>> ext.extrapolate([1, 2, 3, 4])     # 1 + r0 + 2*r1
        24
    """

    def __init__(self, point: Sequence[int], width: int = CHI_BLOCK_WIDTH,
                 tables: Optional[List[List[int]]] = None):
        self.point = [reduce(r) for r in point]
        self.width = width
        self.tables = tables if tables is not None else chi_tables(self.point, width)
        self._mask = (1 << width) - 1
        self._value = 0

    @property
    def num_vars(self) -> int:
        return len(self.point)

    @property
    def size(self) -> int:
        """Length of the vectors this extrapolator accepts."""
        return 1 << self.num_vars

    @property
    def value(self) -> int:
        """Running value accumulated by update()."""
        return self._value

    def weight(self, index: int) -> int:
        """chi_index(point): the coefficient of entry `index`."""
        acc = 1
        k = index
        for table in self.tables:
            acc = mulmod(acc, table[k & self._mask])
            k >>= self.width
        return acc

    def extrapolate(self, vector: Sequence[int]) -> int:
        """Evaluate the multilinear extension of `vector` at the point."""
        if len(vector) != self.size:
            raise ValueError(f"Vector length {len(vector)} != 2^{self.num_vars}")

        acc = 0
        for i, a in enumerate(vector):
            acc = addmod(acc, mulmod(self.weight(i), to_field(a)))
        return acc

    def update(self, index: int, delta: int = 1) -> int:
        """
        Fold one stream update (item `index` seen `delta` more times).

        Returns the running extrapolated value.
        """
        if not 0 <= index < self.size:
            raise ValueError(f"Index {index} outside [0, {self.size})")
        self._value = addmod(self._value, mulmod(self.weight(index), to_field(delta)))
        return self._value

    def reset(self):
        """Forget all updates."""
        self._value = 0


class TabulatedExtrapolator:
    """
    Lagrange extrapolation of a length-n vector (values at x = 0..n-1)
    to a single point r, with the inverse-factorial and r-tables built once.
    """

    def __init__(self, n: int, r: int):
        self.n = n
        self.r = reduce(r)
        self.itab = inverse_factorial_table(n)
        self.rtab = lagrange_table(n, self.r)

    def extrapolate(self, vector: Sequence[int]) -> int:
        return tabulated_extrapolate(vector, self.itab, self.rtab)


def extrapolate(vector: Sequence[int], point: Sequence[int],
                tables: Optional[List[List[int]]] = None,
                width: int = CHI_BLOCK_WIDTH) -> int:
    """Multilinear extension of `vector` at `point` (tables optional)."""
    return MultilinearExtrapolator(point, width, tables).extrapolate(vector)


def tabulated_extrapolate(vector: Sequence[int], itab: Sequence[int],
                          rtab: Sequence[int]) -> int:
    """
    sum_i rtab[i] * itab[i] * vector[i] over the first len(itab) entries.

    Only the first n entries are read, so a row with extra (already
    extrapolated) columns can be passed unchanged.
    """
    n = len(itab)
    if len(vector) < n or len(rtab) != n:
        raise ValueError("Vector and tables must cover the same nodes")

    acc = 0
    for i in range(n):
        acc = addmod(acc, mulmod(mulmod(rtab[i], itab[i]), to_field(vector[i])))
    return acc
