"""
Run report: phase timings and communication sizes.

Printed as one tab-separated header line and one data row:

    N   VerifT   ProveT   CheckT   VerifS   ProofS
"""

from __future__ import annotations
from dataclasses import dataclass
import time
from typing import Callable, Tuple, TypeVar


REPORT_HEADER = ("N", "VerifT", "ProveT", "CheckT", "VerifS", "ProofS")
SUCCESS_MESSAGE = "Protocol completed successfully!"
FAILURE_MESSAGE = "Protocol failed!"

T = TypeVar("T")


def time_it(func: Callable[..., T], *args, **kwargs) -> Tuple[T, float]:
    """Call func and return (result, elapsed seconds)."""
    start = time.perf_counter()
    result = func(*args, **kwargs)
    return result, time.perf_counter() - start


@dataclass
class ProtocolReport:
    """
    Attributes:
        stream_size: N, number of data entries
        verifier_time: Verifier's data pass and table building (seconds)
        prover_time: Proof construction (seconds)
        check_time: Verifier's transcript check (seconds)
        verifier_size: Field elements sent by the verifier
        proof_size: Field elements sent by the prover
    """
    stream_size: int
    verifier_time: float
    prover_time: float
    check_time: float
    verifier_size: int
    proof_size: int
    precision: int = 6

    def header(self) -> str:
        return "\t".join(REPORT_HEADER)

    def row(self) -> str:
        fmt = f"{{:.{self.precision}f}}"
        return "\t".join([
            str(self.stream_size),
            fmt.format(self.verifier_time),
            fmt.format(self.prover_time),
            fmt.format(self.check_time),
            str(self.verifier_size),
            str(self.proof_size),
        ])

    def format(self) -> str:
        return f"{self.header()}\n{self.row()}"
