"""
streamproof
===========

Streaming interactive proofs for the second frequency moment
F2 = sum of squared frequencies (Cormode, Mitzenmacher, Thaler).

A verifier that sees the stream once, keeping a handful of field elements,
checks an untrusted prover's claimed F2 over GF(2^61 - 1).

Modules:
    - common: field arithmetic, lookup tables, extrapolation, data source
    - interactive: sum-check style d-round protocol
    - tabulated: one-shot protocol over a V x H matrix
    - config, report, main: run configuration, timing report and CLI

Quick Start:
    >>> from streamproof.interactive import InteractiveProtocol
    >>> InteractiveProtocol([1, 2, 3, 4, 5, 6, 7, 8], challenges=[3, 5, 7]).run().accepted
    True
"""

__version__ = "0.1.0"

from . import common
from . import interactive
from . import tabulated
