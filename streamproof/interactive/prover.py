"""
Interactive F2 prover.

The prover is a small state machine over its private copy of the data:

    Round(0, a)  --message, r_0-->  Round(1, compact(a, r_0))  -->  ...
                 --message, r_{d-1}-->  Done (vector of length 1)

Each round emits exactly one RoundPolynomial and consumes exactly one
challenge. The caller's data is never modified.
"""

from __future__ import annotations
from typing import List, Sequence

from ..common.outcome import ProtocolStateError
from ..common.polynomial import RoundPolynomial
from .stream import FrequencyVector


class F2Prover:
    """
    Prover for the claim sum_i a[i]^2 = F2.

    Usage:
        >>> prover = F2Prover([1, 2, 3, 4])
        >>> msg = prover.round_message()
        >>> prover.receive_challenge(5)
        >>> msg = prover.round_message()
        >>> prover.receive_challenge(7)
        >>> prover.done
        True
    """

    def __init__(self, data: Sequence[int]):
        self.vector = FrequencyVector(list(data))
        self.num_rounds = self.vector.num_vars
        self.round = 0
        self._pending = None

    @property
    def done(self) -> bool:
        return self.round >= self.num_rounds

    def round_message(self) -> RoundPolynomial:
        """Message for the current round. Idempotent until a challenge arrives."""
        if self.done:
            raise ProtocolStateError("All rounds have been completed")
        if self._pending is None:
            self._pending = self.vector.round_message()
        return self._pending

    def receive_challenge(self, challenge: int):
        """Fold the current round's challenge into the vector and advance."""
        if self.done:
            raise ProtocolStateError("All rounds have been completed")
        if self._pending is None:
            raise ProtocolStateError(
                f"Challenge for round {self.round} arrived before its message")

        self.vector = self.vector.compact(challenge)
        self.round += 1
        self._pending = None

    def prove(self, challenges: Sequence[int]) -> List[RoundPolynomial]:
        """Run every remaining round against a fixed challenge vector."""
        if len(challenges) != self.num_rounds - self.round:
            raise ValueError(f"Expected {self.num_rounds - self.round} challenges, "
                             f"got {len(challenges)}")

        messages = []
        for challenge in challenges:
            messages.append(self.round_message())
            self.receive_challenge(challenge)
        return messages
