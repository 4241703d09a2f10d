"""
Interactive F2 verifier.

The verifier keeps only the challenge vector, its chi tables and one running
value. Before the proof it makes a single pass over the data to compute
fr = a~(r), the multilinear extension at the challenge point. Afterwards it
checks the transcript:

    1. g_0(0) + g_0(1)            == F2
    2. 2 * g_{j-1}(r_{j-1})       == 2 * (g_j(0) + g_j(1))     j = 1..d-1
    3. 2 * g_{d-1}(r_{d-1})       == 2 * fr^2

Checks 2 and 3 compare doubled values, see common.polynomial.
"""

from __future__ import annotations
from typing import Sequence

from ..common.extrapolation import MultilinearExtrapolator
from ..common.field import addmod, field_eq, mulmod, reduce
from ..common.outcome import ProtocolStateError, RejectReason, VerificationResult
from ..common.polynomial import RoundPolynomial
from ..common.tables import CHI_BLOCK_WIDTH


def verify(claimed_f2: int, messages: Sequence[RoundPolynomial],
           challenges: Sequence[int], extrapolated_value: int) -> VerificationResult:
    """
    Check a complete interactive transcript.

    Args:
        claimed_f2: The moment being proven
        messages: One RoundPolynomial per round, in order
        challenges: The challenge vector, fixed before proving
        extrapolated_value: fr, the data's extension at the challenges

    Returns:
        VerificationResult.accept(), or a rejection naming the first failed
        check
    """
    d = len(challenges)
    if d == 0 or len(messages) != d:
        return VerificationResult.reject(
            RejectReason.TRANSCRIPT_LENGTH, expected=d, actual=len(messages))

    first = messages[0].boolean_sum()
    if not field_eq(first, claimed_f2):
        return VerificationResult.reject(
            RejectReason.INITIAL_MISMATCH, expected=reduce(claimed_f2), actual=first)

    for j in range(1, d):
        carried = messages[j - 1].doubled_at(challenges[j - 1])
        current = messages[j].boolean_sum()
        doubled = addmod(current, current)
        if not field_eq(carried, doubled):
            return VerificationResult.reject(
                RejectReason.ROUND_MISMATCH, expected=carried, actual=doubled, round=j)

    final = messages[d - 1].doubled_at(challenges[d - 1])
    fr = reduce(extrapolated_value)
    expected_final = mulmod(addmod(fr, fr), fr)
    if not field_eq(final, expected_final):
        return VerificationResult.reject(
            RejectReason.FINAL_MISMATCH, expected=expected_final, actual=final)

    return VerificationResult.accept()


class F2Verifier:
    """
    Verifier with its challenge vector drawn up front.

    Example:
        >>> verifier = F2Verifier([3, 5])
        >>> fr = verifier.extrapolate([1, 2, 3, 4])
        >>> # ... run the prover against verifier.challenges ...
    """

    def __init__(self, challenges: Sequence[int], width: int = CHI_BLOCK_WIDTH):
        self.challenges = [reduce(r) for r in challenges]
        self.extrapolator = MultilinearExtrapolator(self.challenges, width)
        self.extrapolated_value = None

    @property
    def num_rounds(self) -> int:
        return len(self.challenges)

    @property
    def message_count(self) -> int:
        """Field elements the verifier sends: d challenges plus the final claim."""
        return self.num_rounds + 1

    def extrapolate(self, data: Sequence[int]) -> int:
        """Single pass over the data computing fr = a~(r)."""
        self.extrapolated_value = self.extrapolator.extrapolate(data)
        return self.extrapolated_value

    def observe(self, index: int, delta: int = 1) -> int:
        """Streaming alternative to extrapolate(): one update at a time."""
        self.extrapolated_value = self.extrapolator.update(index, delta)
        return self.extrapolated_value

    def check(self, claimed_f2: int,
              messages: Sequence[RoundPolynomial]) -> VerificationResult:
        """Verify the transcript against the value seen in the data pass."""
        if self.extrapolated_value is None:
            raise ProtocolStateError("extrapolate() or observe() must run before check()")
        return verify(claimed_f2, messages, self.challenges, self.extrapolated_value)
