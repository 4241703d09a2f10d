"""
Tabulated F2 Protocol Driver.

    1. Verifier builds its tables for point r and computes the check value
       from one pass over the data                            (VerifT)
    2. Prover builds its column tables and the 2H proof        (ProveT)
    3. Verifier extrapolates the proof to r and compares       (CheckT)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..common.field import reduce
from ..common.outcome import VerificationResult
from ..common.source import RandomSource
from ..report import ProtocolReport, time_it
from .prover import TabulatedProver, validate_matrix
from .verifier import TabulatedVerifier


def exact_matrix_f2(matrix: Sequence[Sequence[int]]) -> int:
    return reduce(sum(v * v for row in matrix for v in row))


@dataclass
class TabulatedResult:
    """Complete result of one tabulated run."""
    claimed_f2: int
    f2: int
    r: int
    proof: List[int]
    check_value: int
    verification: VerificationResult
    report: ProtocolReport

    @property
    def accepted(self) -> bool:
        return self.verification.accepted


class TabulatedProtocol:
    """
    Example:
        >>> protocol = TabulatedProtocol([[1, 2], [3, 4]], r=1000)
        >>> protocol.run().accepted
        True
    """

    def __init__(self, matrix: Sequence[Sequence[int]], r: Optional[int] = None,
                 source: Optional[RandomSource] = None, verbose: bool = False):
        self.width = validate_matrix(matrix)
        self.matrix = tuple(tuple(row) for row in matrix)
        self.verbose = verbose
        if r is None:
            r = (source or RandomSource()).challenge_point()
        self.r = reduce(r)

    def run(self, claimed_f2: Optional[int] = None) -> TabulatedResult:
        f2 = exact_matrix_f2(self.matrix)
        claimed = f2 if claimed_f2 is None else reduce(claimed_f2)

        def verifier_pass():
            verifier = TabulatedVerifier(self.width, self.r)
            verifier.compute_check(self.matrix)
            return verifier

        verifier, verif_time = time_it(verifier_pass)

        def prover_pass():
            prover = TabulatedProver(self.matrix)
            prover.build_tables()
            return prover.build_proof()

        proof, prove_time = time_it(prover_pass)
        verification, check_time = time_it(verifier.verify, proof, claimed)

        if self.verbose:
            self._print_summary(claimed, proof, verifier.check_value, verification)

        report = ProtocolReport(
            stream_size=len(self.matrix) * self.width,
            verifier_time=verif_time,
            prover_time=prove_time,
            check_time=check_time,
            verifier_size=verifier.message_count,
            proof_size=len(proof),
        )
        return TabulatedResult(
            claimed_f2=claimed,
            f2=f2,
            r=self.r,
            proof=proof,
            check_value=verifier.check_value,
            verification=verification,
            report=report,
        )

    def _print_summary(self, claimed: int, proof: List[int], check: int,
                       verification: VerificationResult):
        print("\n" + "═" * 70)
        print("              TABULATED F2 PROTOCOL")
        print("═" * 70)
        print(f"\nMatrix: {len(self.matrix)} x {self.width}")
        print(f"Random point r = {self.r}")
        if len(proof) <= 16:
            print(f"Proof: {proof}")
        else:
            print(f"Proof: [{proof[0]}, {proof[1]}, ..., {proof[-1]}] (size={len(proof)})")
        print(f"Check value: {check}")
        print(f"Claimed F2: {claimed}")
        if verification.accepted:
            print("\n✓ VERIFICATION PASSED")
        else:
            print(f"\n✗ VERIFICATION FAILED ({verification.describe()})")
