"""
Finite Field Arithmetic over the Mersenne prime p = 2^61 - 1.

Every protocol message, challenge and table entry in this package is an
integer in [0, p). The modulus is a Mersenne prime, so reduction needs no
division: a value x splits into x = hi * 2^61 + lo, and since 2^61 = 1 (mod p)
we have x = hi + lo (mod p).

Key Concepts:
    - reduce(x):    fold high bits onto low bits until the value fits
    - mulmod(x, y): 64-bit schoolbook product in 32-bit halves, each piece
                    reduced with the Mersenne fold
    - inverse(x):   extended Euclidean algorithm (fails for x = 0)

Example:
    >>> mulmod(PRIME - 1, PRIME - 1)   # (-1) * (-1)
    1
    >>> mulmod(12345, inverse(12345))
    1

Note:
    The multiplication kernel depends on 2^64 = 8 (mod p). It is NOT valid
    for any other prime.
"""

from __future__ import annotations
from typing import List, Sequence


PRIME = (1 << 61) - 1  # 2305843009213693951
MASK = (1 << 32) - 1


class FieldDivisionError(ZeroDivisionError):
    """Raised when the inverse of a zero field element is requested."""


def reduce(x: int) -> int:
    """
    Reduce a non-negative integer into [0, p).

    Folds with (x >> 61) + (x & p) until the value is below 2p, then
    applies a single conditional subtraction. Inputs below 2^64 need one
    fold; larger Python ints simply fold more times.
    """
    while x > PRIME:
        x = (x >> 61) + (x & PRIME)
    if x >= PRIME:
        x -= PRIME
    return x


def to_field(value: int) -> int:
    """Promote an arbitrary (possibly negative) integer to a field element."""
    return value % PRIME


def addmod(x: int, y: int) -> int:
    """(x + y) mod p"""
    s = x + y
    if s >= PRIME:
        s -= PRIME
    return s


def submod(x: int, y: int) -> int:
    """(x - y) mod p"""
    s = x - y
    if s < 0:
        s += PRIME
    return s


def negmod(x: int) -> int:
    """-x mod p"""
    return PRIME - x if x else 0


def mulmod(x: int, y: int) -> int:
    """
    Multiply two field elements mod p without a 128-bit intermediate.

    Each operand (< 2^64) is split into 32-bit halves:
        x * y = hx*hy * 2^64 + (hx*ly + hy*lx) * 2^32 + lx*ly
    With 2^64 = 8 (mod p) the three pieces become
        piece1 = hx*hy << 3
        piece2 = (hz << 3) + (lz << 32)   where z = hx*ly + hy*lx
        piece3 = lx*ly
    and each fits comfortably in 64 bits before its reduction.
    """
    hi_x = x >> 32
    hi_y = y >> 32
    low_x = x & MASK
    low_y = y & MASK

    piece1 = reduce((hi_x * hi_y) << 3)
    z = hi_x * low_y + hi_y * low_x
    hi_z = z >> 32
    low_z = z & MASK
    piece2 = reduce((hi_z << 3) + reduce(low_z << 32))
    piece3 = reduce(low_x * low_y)
    return reduce(piece1 + piece2 + piece3)


def powmod(base: int, exp: int) -> int:
    """
    Exponentiation by square-and-multiply.

    Negative exponents invert first: a^(-n) = (a^(-1))^n.
    """
    if exp < 0:
        return powmod(inverse(base), -exp)

    result = 1
    base = reduce(base)
    while exp > 0:
        if exp & 1:
            result = mulmod(result, base)
        base = mulmod(base, base)
        exp >>= 1
    return result


def inverse(x: int) -> int:
    """
    Compute the multiplicative inverse mod p by the Extended Euclidean
    Algorithm.

    Runs the (u1, u3) / (v1, v3) recurrence starting from (0, p) and (1, x).
    Remainders are exact integers; the Bezout coefficients are kept in the
    field, so u1 * x = u3 (mod p) holds throughout. The loop stops when the
    remainder reaches 0.

    Raises:
        FieldDivisionError: If x = 0 (mod p). Inverting zero means a table
            index collided with the challenge point; callers treat this as
            a broken precondition, not a recoverable condition.

    Returns:
        y in [1, p) with x * y = 1 (mod p)
    """
    x = reduce(x)
    if x == 0:
        raise FieldDivisionError("Cannot invert zero in GF(2^61 - 1)")

    u1, u3 = 0, PRIME
    v1, v3 = 1, x
    while v3 != 0:
        q = u3 // v3
        u1, v1 = v1, submod(u1, mulmod(reduce(q), v1))
        u3, v3 = v3, u3 - q * v3

    if u3 != 1:
        raise FieldDivisionError(f"No inverse exists (gcd = {u3})")
    return u1


def is_zero_mod_p(x: int) -> bool:
    """True if x represents zero, accepting both 0 and p."""
    return x == 0 or x == PRIME


def field_eq(x: int, y: int) -> bool:
    """Field equality, tolerant of the dual representation of zero."""
    return is_zero_mod_p(reduce(submod(reduce(x), reduce(y))))


def sum_mod(values: Sequence[int]) -> int:
    """Sum of field elements mod p."""
    total = 0
    for v in values:
        total = addmod(total, v)
    return total


class BatchInverter:
    """
    Batch modular inversion using Montgomery's trick.

    n inversions cost one Euclid run plus 3(n-1) multiplications:
        1. Prefix products: P[i] = a[0] * ... * a[i]
        2. One inversion:   I = P[n-1]^(-1)
        3. Peel off:        a[i]^(-1) = I * P[i-1], then I *= a[i]

    The Lagrange tables need an inverse per table index, so this keeps
    table construction O(n) in multiplications.

    Example:
        >>> BatchInverter().invert_batch([1, 2, 3])[1] == inverse(2)
        True
    """

    def invert_batch(self, values: Sequence[int]) -> List[int]:
        """
        Compute inverses of all values in one pass.

        Raises:
            FieldDivisionError: If any value is zero (mod p)
        """
        if not values:
            return []

        n = len(values)
        for i, v in enumerate(values):
            if is_zero_mod_p(reduce(v)):
                raise FieldDivisionError(f"Cannot invert zero (element {i})")

        products = [reduce(values[0])]
        for i in range(1, n):
            products.append(mulmod(products[i - 1], reduce(values[i])))

        inv = inverse(products[n - 1])

        inverses = [0] * n
        for i in range(n - 1, 0, -1):
            inverses[i] = mulmod(inv, products[i - 1])
            inv = mulmod(inv, reduce(values[i]))
        inverses[0] = inv

        return inverses
