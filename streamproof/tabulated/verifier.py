"""
Tabulated F2 verifier.

With one random point r the verifier:
    - extends each data row to r and sums the squares   (check value)
    - extends the prover's 2H-entry proof to r           (result)
and accepts if result == check and sum(proof[:H]) equals the claimed F2.
"""

from __future__ import annotations
from typing import Sequence

from ..common.extrapolation import TabulatedExtrapolator
from ..common.field import addmod, field_eq, mulmod, reduce, sum_mod, to_field
from ..common.outcome import ProtocolStateError, RejectReason, VerificationResult
from .prover import validate_matrix


class TabulatedVerifier:
    """
    Attributes:
        width: H, the number of data columns
        r: The random evaluation point
    """

    def __init__(self, width: int, r: int):
        if width < 1:
            raise ValueError(f"Width must be at least 1, got {width}")
        self.width = width
        self.r = reduce(r)
        self.row_extrapolator = TabulatedExtrapolator(width, self.r)
        self.proof_extrapolator = TabulatedExtrapolator(2 * width, self.r)
        self.check_value = None

    @property
    def message_count(self) -> int:
        return self.width

    def compute_check(self, matrix: Sequence[Sequence[int]]) -> int:
        """sum over rows of (row extended to r)^2."""
        if validate_matrix(matrix) != self.width:
            raise ValueError(f"Matrix width does not match verifier width {self.width}")

        check = 0
        for row in matrix:
            ext = self.row_extrapolator.extrapolate(row)
            check = addmod(check, mulmod(ext, ext))
        self.check_value = check
        return check

    def verify(self, proof: Sequence[int], claimed_f2: int) -> VerificationResult:
        if self.check_value is None:
            raise ProtocolStateError("compute_check() must run before verify()")
        return verify_proof(proof, claimed_f2, self.check_value, self.proof_extrapolator)


def verify_proof(proof: Sequence[int], claimed_f2: int, check_value: int,
                 extrapolator: TabulatedExtrapolator) -> VerificationResult:
    """Compare the proof's extension with the check value, then its moment."""
    if len(proof) != extrapolator.n:
        return VerificationResult.reject(
            RejectReason.TRANSCRIPT_LENGTH, expected=extrapolator.n, actual=len(proof))

    result = extrapolator.extrapolate(proof)
    if not field_eq(result, check_value):
        return VerificationResult.reject(
            RejectReason.PROOF_MISMATCH, expected=check_value, actual=result)

    f2 = sum_mod([to_field(v) for v in proof[:extrapolator.n // 2]])
    if not field_eq(f2, claimed_f2):
        return VerificationResult.reject(
            RejectReason.MOMENT_MISMATCH, expected=reduce(claimed_f2), actual=f2)

    return VerificationResult.accept()
