"""
Common building blocks for the F2 protocols.

This module provides:
    - Finite field arithmetic mod 2^61 - 1
    - Round polynomials and degree-2 interpolation
    - Lagrange and chi lookup tables
    - Extrapolation of data vectors to random points
    - The seedable random data source
    - Verification outcomes
"""

from .field import (
    PRIME,
    BatchInverter,
    FieldDivisionError,
    addmod,
    field_eq,
    inverse,
    is_zero_mod_p,
    mulmod,
    negmod,
    powmod,
    reduce,
    submod,
    to_field,
)
from .polynomial import RoundPolynomial, doubled_quadratic_at, lagrange_evaluate
from .tables import (
    CHI_BLOCK_WIDTH,
    chi,
    chi_tables,
    inverse_factorial_table,
    lagrange_table,
    lagrange_weights,
)
from .extrapolation import (
    MultilinearExtrapolator,
    TabulatedExtrapolator,
    extrapolate,
    tabulated_extrapolate,
)
from .source import RandomSource
from .outcome import ProtocolStateError, RejectReason, VerificationResult

__all__ = [
    # Field
    "PRIME",
    "BatchInverter",
    "FieldDivisionError",
    "addmod",
    "submod",
    "negmod",
    "mulmod",
    "powmod",
    "inverse",
    "reduce",
    "to_field",
    "is_zero_mod_p",
    "field_eq",
    # Polynomials
    "RoundPolynomial",
    "doubled_quadratic_at",
    "lagrange_evaluate",
    # Tables
    "CHI_BLOCK_WIDTH",
    "chi",
    "chi_tables",
    "inverse_factorial_table",
    "lagrange_table",
    "lagrange_weights",
    # Extrapolation
    "MultilinearExtrapolator",
    "TabulatedExtrapolator",
    "extrapolate",
    "tabulated_extrapolate",
    # Data and outcomes
    "RandomSource",
    "ProtocolStateError",
    "RejectReason",
    "VerificationResult",
]
