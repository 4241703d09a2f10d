"""
Interactive F2 protocol (sum-check over the boolean hypercube).

Key Components:
    - FrequencyVector: data vector with pair extensions and compaction
    - F2Prover: round-by-round message construction
    - F2Verifier / verify: transcript consistency and final spot check
    - InteractiveProtocol: runs both parties and times each phase

Usage:
    >>> from streamproof.interactive import InteractiveProtocol
    >>> from streamproof.common import RandomSource
    >>> source = RandomSource(seed=1)
    >>> protocol = InteractiveProtocol(source.data_vector(2**10), source=source)
    >>> protocol.run().accepted
    True
"""

from .stream import FrequencyVector
from ..common.outcome import ProtocolStateError
from .prover import F2Prover
from .verifier import F2Verifier, verify
from .protocol import (
    InteractiveProtocol,
    InteractiveResult,
    RoundRecord,
    exact_f2,
)

__all__ = [
    "FrequencyVector",
    "F2Prover",
    "ProtocolStateError",
    "F2Verifier",
    "verify",
    "InteractiveProtocol",
    "InteractiveResult",
    "RoundRecord",
    "exact_f2",
]
