"""
Interactive F2 Protocol Driver.

Runs prover and verifier in one process:

    1. Verifier draws r = (r_0, ..., r_{d-1}) and makes one pass over the
       data computing fr = a~(r)                              (VerifT)
    2. Prover emits one RoundPolynomial per round, folding r_j
       into its vector after each message                     (ProveT)
    3. Verifier checks the transcript                         (CheckT)

The whole challenge vector is chosen before the prover sends anything and
stays fixed for every round.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..common.field import reduce
from ..common.outcome import VerificationResult
from ..common.polynomial import RoundPolynomial
from ..common.source import RandomSource
from ..common.tables import CHI_BLOCK_WIDTH
from ..report import ProtocolReport, time_it
from .prover import F2Prover
from .stream import FrequencyVector, is_power_of_two
from .verifier import F2Verifier


def exact_f2(data: Sequence[int]) -> int:
    """sum data[i]^2 mod p, computed directly."""
    return reduce(sum(v * v for v in data))


@dataclass
class RoundRecord:
    """
    What happened in one round.

    Attributes:
        round_num: Round number (0-indexed)
        message: The prover's (g(0), g(1), g(2))
        challenge: r_j folded in after the message
        size_before: Prover vector length when the message was computed
        size_after: Prover vector length after compaction
    """
    round_num: int
    message: RoundPolynomial
    challenge: int
    size_before: int
    size_after: int


@dataclass
class InteractiveResult:
    """Complete result of one interactive run."""
    claimed_f2: int
    f2: int
    challenges: List[int]
    rounds: List[RoundRecord]
    extrapolated_value: int
    verification: VerificationResult
    report: ProtocolReport

    @property
    def messages(self) -> List[RoundPolynomial]:
        return [rd.message for rd in self.rounds]

    @property
    def accepted(self) -> bool:
        return self.verification.accepted


class InteractiveProtocol:
    """
    Example:
        >>> protocol = InteractiveProtocol([1, 2, 3, 4, 5, 6, 7, 8], challenges=[3, 5, 7])
        >>> result = protocol.run()
        >>> result.accepted, result.f2
        (True, 204)
    """

    def __init__(self, data: Sequence[int], challenges: Optional[Sequence[int]] = None,
                 source: Optional[RandomSource] = None,
                 width: int = CHI_BLOCK_WIDTH, verbose: bool = False):
        if not is_power_of_two(len(data)) or len(data) < 2:
            raise ValueError(f"Data length must be a power of 2 (>= 2), got {len(data)}")

        self.data = tuple(data)
        self.num_vars = len(self.data).bit_length() - 1
        self.width = width
        self.verbose = verbose

        if challenges is None:
            source = source or RandomSource()
            challenges = source.challenge_vector(self.num_vars)
        if len(challenges) != self.num_vars:
            raise ValueError(f"Expected {self.num_vars} challenges, got {len(challenges)}")
        self.challenges = [reduce(r) for r in challenges]

    def run(self, claimed_f2: Optional[int] = None) -> InteractiveResult:
        """
        Execute the protocol once.

        Args:
            claimed_f2: Moment to verify; defaults to the exact F2 of the data

        Returns:
            InteractiveResult with the transcript, outcome and timings
        """
        f2 = exact_f2(self.data)
        claimed = f2 if claimed_f2 is None else reduce(claimed_f2)

        if self.verbose:
            self._print_header()

        verifier = F2Verifier(self.challenges, self.width)
        fr, verif_time = time_it(verifier.extrapolate, self.data)

        rounds, prove_time = time_it(self._prove)

        messages = [rd.message for rd in rounds]
        verification, check_time = time_it(verifier.check, claimed, messages)

        if self.verbose:
            for rd in rounds:
                self._print_round(rd)
            self._print_final(claimed, fr, verification)

        report = ProtocolReport(
            stream_size=len(self.data),
            verifier_time=verif_time,
            prover_time=prove_time,
            check_time=check_time,
            verifier_size=verifier.message_count,
            proof_size=3 * self.num_vars + 1,
        )
        return InteractiveResult(
            claimed_f2=claimed,
            f2=f2,
            challenges=list(self.challenges),
            rounds=rounds,
            extrapolated_value=fr,
            verification=verification,
            report=report,
        )

    def _prove(self) -> List[RoundRecord]:
        prover = F2Prover(self.data)
        rounds = []
        for j, challenge in enumerate(self.challenges):
            size_before = prover.vector.size
            message = prover.round_message()
            prover.receive_challenge(challenge)
            rounds.append(RoundRecord(j, message, challenge, size_before,
                                      prover.vector.size))
        return rounds

    # =========================================================================
    # Verbose output
    # =========================================================================

    def _print_header(self):
        print("\n" + "═" * 70)
        print("              INTERACTIVE F2 PROTOCOL")
        print("═" * 70)
        print(f"\nStream size: 2^{self.num_vars} = {len(self.data)} entries")
        print(f"Rounds: {self.num_vars}")
        print(f"Data: {FrequencyVector(list(self.data))!r}")

    def _print_round(self, rd: RoundRecord):
        g = rd.message
        print(f"\n{'─' * 40}")
        print(f"ROUND {rd.round_num}")
        print(f"  g(0) = {g[0]}")
        print(f"  g(1) = {g[1]}")
        print(f"  g(2) = {g[2]}")
        print(f"  g(0) + g(1) = {g.boolean_sum()}")
        print(f"  challenge r_{rd.round_num} = {rd.challenge}")
        print(f"  2 * g(r_{rd.round_num}) = {g.doubled_at(rd.challenge)}")
        print(f"  Vector size: {rd.size_before} → {rd.size_after}")

    def _print_final(self, claimed: int, fr: int, verification: VerificationResult):
        print(f"\n{'═' * 70}")
        print(f"Claimed F2: {claimed}")
        print(f"Extrapolated value fr = {fr}")
        if verification.accepted:
            print("\n✓ VERIFICATION PASSED")
        else:
            print(f"\n✗ VERIFICATION FAILED ({verification.describe()})")
