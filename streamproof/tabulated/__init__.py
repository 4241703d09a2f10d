"""
Tabulated (non-interactive) F2 protocol.

The prover sends one vector of 2H column sums; the verifier checks it
against a single random point using precomputed Lagrange tables.
"""

from .prover import TabulatedProver, validate_matrix
from .verifier import TabulatedVerifier, verify_proof
from .protocol import TabulatedProtocol, TabulatedResult, exact_matrix_f2

__all__ = [
    "TabulatedProver",
    "TabulatedVerifier",
    "TabulatedProtocol",
    "TabulatedResult",
    "validate_matrix",
    "verify_proof",
    "exact_matrix_f2",
]
