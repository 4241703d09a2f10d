"""Verification outcomes shared by both protocol variants."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RejectReason(Enum):
    """Why a verifier rejected a transcript."""
    INITIAL_MISMATCH = "initial"
    ROUND_MISMATCH = "round"
    FINAL_MISMATCH = "final"
    TRANSCRIPT_LENGTH = "length"
    PROOF_MISMATCH = "proof"
    MOMENT_MISMATCH = "moment"


@dataclass(frozen=True)
class VerificationResult:
    """
    Accept, or reject with the values that failed to match.

    A rejection is an expected outcome against a faulty prover, so it is
    returned rather than raised.

    Attributes:
        accepted: True if every check passed
        reason: Which check failed (None when accepted)
        round: Round at which a ROUND_MISMATCH was detected
        expected: Value the verifier computed on its own
        actual: Value derived from the prover's messages
    """
    accepted: bool
    reason: Optional[RejectReason] = None
    round: Optional[int] = None
    expected: Optional[int] = None
    actual: Optional[int] = None

    @classmethod
    def accept(cls) -> 'VerificationResult':
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: RejectReason, expected: Optional[int] = None,
               actual: Optional[int] = None,
               round: Optional[int] = None) -> 'VerificationResult':
        return cls(accepted=False, reason=reason, round=round,
                   expected=expected, actual=actual)

    def __bool__(self) -> bool:
        return self.accepted

    def describe(self) -> str:
        """One-line human readable summary."""
        if self.accepted:
            return "accepted"
        where = f" at round {self.round}" if self.round is not None else ""
        return (f"{self.reason.name}{where}: "
                f"expected {self.expected}, got {self.actual}")


class ProtocolStateError(RuntimeError):
    """Raised when a party is driven out of protocol order."""
