"""
Lookup Tables for Extrapolation.

Two families of precomputed weights, both pure functions of
(size, evaluation point):

Lagrange tables (tabulated variant):
    The Lagrange basis polynomial for node i on the nodes 0..n-1 is

        L_i(r) = prod_{j != i} (r - j)  /  prod_{j != i} (i - j)

    The denominator depends only on n; it equals i! * (-1)^(n-1-i) * (n-1-i)!
    and its inverse is inverse_factorial_table(n)[i]. The numerator depends
    on r and is lagrange_table(n, r)[i].

Chi tables (interactive variant):
    chi_v(r) = prod_t ( r_t if bit t of v is 1 else 1 - r_t )

    The coordinates are cut into blocks of `width` bits (8 by default), and
    each block gets a table of chi over its own coordinates for every
    possible block value. chi_v(r) is then the product of one lookup per
    block, so extrapolating a length-2^d vector costs O(N * d / width).
"""

from __future__ import annotations
from typing import List, Sequence

from .field import (
    PRIME,
    BatchInverter,
    addmod,
    mulmod,
    negmod,
    reduce,
    submod,
)


CHI_BLOCK_WIDTH = 8


# =============================================================================
# Lagrange tables
# =============================================================================

def inverse_factorial_table(n: int) -> List[int]:
    """
    Inverse Lagrange denominators for the nodes 0..n-1.

    Entry i is 1 / (i! * (-1)^(n-1-i) * (n-1-i)!), built from two running
    products: of 1/k and of 1/(-k) for k = 1..n-1.

    Args:
        n: Number of interpolation nodes

    Returns:
        List of n field elements
    """
    if n < 1:
        raise ValueError(f"Table size must be at least 1, got {n}")

    inverter = BatchInverter()
    inv_plus = inverter.invert_batch(list(range(1, n)))
    inv_minus = inverter.invert_batch([negmod(k) for k in range(1, n)])

    ifact_plus = [1] * n
    ifact_minus = [1] * n
    for i in range(1, n):
        ifact_plus[i] = mulmod(inv_plus[i - 1], ifact_plus[i - 1])
        ifact_minus[i] = mulmod(inv_minus[i - 1], ifact_minus[i - 1])

    return [mulmod(ifact_plus[i], ifact_minus[n - i - 1]) for i in range(n)]


def lagrange_table_direct(n: int, r: int) -> List[int]:
    """
    Lagrange numerators prod_{j != i} (r - j) by product exclusion.

    O(n^2). Valid for every r, including r equal to a node, where all
    entries but one are zero.
    """
    lookup = [submod(reduce(r), j) for j in range(n)]
    table = []
    for i in range(n):
        acc = 1
        for j, x in enumerate(lookup):
            if i != j:
                acc = mulmod(acc, x)
        table.append(acc)
    return table


def lagrange_table_incremental(n: int, r: int) -> List[int]:
    """
    Lagrange numerators by the O(n) recurrence

        t[0] = prod_{j=1}^{n-1} (r - j)
        t[i] = t[i-1] * (r - i + 1) / (r - i)

    Requires r - i != 0 for 1 <= i < n, i.e. r >= n as an integer.

    Raises:
        FieldDivisionError: If r collides with a node in 1..n-1
    """
    r = reduce(r)
    table = [0] * n

    mult = 1
    for j in range(1, n):
        mult = mulmod(mult, submod(r, j))
    table[0] = mult

    inverses = BatchInverter().invert_batch([submod(r, i) for i in range(1, n)])
    for i in range(1, n):
        step = mulmod(table[i - 1], addmod(submod(r, i), 1))
        table[i] = mulmod(step, inverses[i - 1])
    return table


def lagrange_table(n: int, r: int) -> List[int]:
    """
    Lagrange numerators for the nodes 0..n-1 at point r.

    Uses the O(n) recurrence when r >= n and falls back to product
    exclusion when r lands inside the node range.
    """
    if n < 1:
        raise ValueError(f"Table size must be at least 1, got {n}")
    r = reduce(r)
    if r < n:
        return lagrange_table_direct(n, r)
    return lagrange_table_incremental(n, r)


def lagrange_weights(n: int, r: int) -> List[int]:
    """Full Lagrange basis values L_i(r) for i = 0..n-1."""
    itab = inverse_factorial_table(n)
    rtab = lagrange_table(n, r)
    return [mulmod(a, b) for a, b in zip(rtab, itab)]


# =============================================================================
# Chi tables
# =============================================================================

def chi(point: Sequence[int], lo: int, hi: int, index: int) -> int:
    """
    Partial characteristic polynomial over coordinates lo..hi-1.

    Bit (t - lo) of `index` selects r_t (bit set) or 1 - r_t (bit clear).
    """
    acc = 1
    v = index
    for t in range(lo, hi):
        if v & 1:
            acc = mulmod(acc, point[t])
        else:
            acc = mulmod(acc, submod(1, point[t]))
        v >>= 1
    return acc


def chi_tables(point: Sequence[int], width: int = CHI_BLOCK_WIDTH) -> List[List[int]]:
    """
    Build one chi table per block of `width` coordinates.

    Args:
        point: The evaluation point (r_0, ..., r_{d-1})
        width: Coordinates per block

    Returns:
        ceil(d / width) tables; table j has 2^(hi - lo) entries covering
        coordinates lo = j*width .. hi = min(lo + width, d)
    """
    if width < 1:
        raise ValueError(f"Block width must be at least 1, got {width}")
    if any(not 0 <= r < PRIME for r in point):
        raise ValueError("Evaluation point must consist of field elements")

    d = len(point)
    tables = []
    for lo in range(0, d, width):
        hi = min(lo + width, d)
        tables.append([chi(point, lo, hi, i) for i in range(1 << (hi - lo))])
    return tables
