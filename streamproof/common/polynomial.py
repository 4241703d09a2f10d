"""
Round Polynomials for the F2 Sum-Check Protocol.

In every interactive round the prover sends a univariate polynomial g_j(X)
of degree at most 2. It is never sent by coefficients; it is sent by its
evaluations at X = 0, 1, 2:

    g_j(c) = sum_k ( (1 - c) * a[2k] + c * a[2k+1] )^2

    c = 0  ->  sum_k a[2k]^2
    c = 1  ->  sum_k a[2k+1]^2
    c = 2  ->  sum_k (2*a[2k+1] - a[2k])^2

The verifier needs g_j at its random challenge r. Degree-2 Lagrange
interpolation over {0, 1, 2} has denominators 2, -1 and 2, so the verifier
computes 2 * g_j(r) instead and scales the value it compares against by 2.
This avoids an inversion per round:

    2 * g(r) = (r-1)(r-2) * y0  -  2 r (r-2) * y1  +  r (r-1) * y2
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .field import (
    PRIME,
    BatchInverter,
    addmod,
    mulmod,
    submod,
)


def doubled_quadratic_at(evaluations: Sequence[int], r: int) -> int:
    """
    Evaluate 2 * g(r) for the quadratic g with g(0), g(1), g(2) given.

    Args:
        evaluations: (g(0), g(1), g(2))
        r: Field element at which to evaluate

    Returns:
        2 * g(r) mod p
    """
    y0, y1, y2 = evaluations
    r_minus_1 = submod(r, 1)
    r_minus_2 = submod(r, 2)

    term1 = mulmod(mulmod(r_minus_1, r_minus_2), y0)
    term2 = mulmod(addmod(mulmod(r, r_minus_2), mulmod(r, r_minus_2)), y1)
    term3 = mulmod(mulmod(r, r_minus_1), y2)
    return addmod(submod(term1, term2), term3)


def lagrange_evaluate(evaluations: Sequence[int], x: int) -> int:
    """
    Evaluate the polynomial through (i, evaluations[i]), i = 0..n-1, at x.

    General-degree Lagrange interpolation over the points 0, 1, ..., n-1.
    The denominators are inverted in one batch.
    """
    n = len(evaluations)
    numerators = []
    denominators = []
    for i in range(n):
        num = 1
        den = 1
        for j in range(n):
            if i != j:
                num = mulmod(num, submod(x, j))
                den = mulmod(den, submod(i, j))
        numerators.append(num)
        denominators.append(den)

    inverses = BatchInverter().invert_batch(denominators)
    result = 0
    for yi, num, den_inv in zip(evaluations, numerators, inverses):
        result = addmod(result, mulmod(yi, mulmod(num, den_inv)))
    return result


@dataclass(frozen=True)
class RoundPolynomial:
    """
    A round message: a univariate polynomial given by its evaluations at
    X = 0, 1, ..., degree.

    Attributes:
        evaluations: (g(0), g(1), g(2)) for the F2 protocol

    Example:
        >>> g = RoundPolynomial((1, 4, 9))    # g(X) = (X + 1)^2
        >>> g.boolean_sum()
        5
        >>> g.evaluate(3)
        16
    """
    evaluations: Tuple[int, ...]

    def __post_init__(self):
        if any(not 0 <= v < PRIME for v in self.evaluations):
            raise ValueError("Round polynomial evaluations must be field elements")

    @property
    def degree(self) -> int:
        """Degree bound implied by the number of evaluations."""
        return len(self.evaluations) - 1

    def __len__(self) -> int:
        return len(self.evaluations)

    def __getitem__(self, index: int) -> int:
        return self.evaluations[index]

    def __iter__(self):
        return iter(self.evaluations)

    def boolean_sum(self) -> int:
        """g(0) + g(1): the claim this message makes about the current vector."""
        return addmod(self.evaluations[0], self.evaluations[1])

    def doubled_at(self, r: int) -> int:
        """2 * g(r), using the inverse-free quadratic formula."""
        if self.degree != 2:
            raise ValueError(f"Expected a quadratic, got degree {self.degree}")
        return doubled_quadratic_at(self.evaluations, r)

    def evaluate(self, x: int) -> int:
        """g(x) by general Lagrange interpolation."""
        return lagrange_evaluate(self.evaluations, x)

    def replace(self, index: int, value: int) -> 'RoundPolynomial':
        """Copy of this message with one evaluation replaced."""
        values: List[int] = list(self.evaluations)
        values[index] = value
        return RoundPolynomial(tuple(values))

    def __repr__(self) -> str:
        return f"RoundPolynomial({list(self.evaluations)})"
