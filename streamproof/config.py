"""
Run configuration for the F2 protocols.

Key Parameters:
    - variant: "interactive" (sum-check rounds) or "tabulated" (one-shot)
    - dimension: log2 of the stream length (interactive) or the side of
      the square data matrix (tabulated)
    - seed: fixes the data and the challenges for a reproducible run
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .common.source import DEFAULT_VALUE_BOUND
from .common.tables import CHI_BLOCK_WIDTH


INTERACTIVE = "interactive"
TABULATED = "tabulated"
VARIANTS = (INTERACTIVE, TABULATED)

# Interactive runs below this dimension are raised to it.
MIN_INTERACTIVE_DIMENSION = 8


class MalformedInput(ValueError):
    """Raised for unusable run parameters (bad CLI arguments included)."""


@dataclass
class ProtocolConfig:
    """
    Configuration for one protocol run.

    Attributes:
        variant: Which protocol to run
        dimension: Size parameter, see module docstring
        seed: Random seed (None for fresh randomness)
        verbose: Print the transcript as the run progresses
        value_bound: Frequencies are drawn from [0, value_bound)
        chi_width: Index bits per chi table block

    Example:
        >>> config = ProtocolConfig(variant="interactive", dimension=10)
        >>> config.stream_size
        1024
    """

    variant: str = INTERACTIVE
    dimension: int = MIN_INTERACTIVE_DIMENSION
    seed: Optional[int] = None
    verbose: bool = False
    value_bound: int = DEFAULT_VALUE_BOUND
    chi_width: int = CHI_BLOCK_WIDTH

    def __post_init__(self):
        """Validate configuration."""
        if self.variant not in VARIANTS:
            raise MalformedInput(f"variant must be one of {VARIANTS}, got {self.variant!r}")
        if self.dimension < 1:
            raise MalformedInput(f"dimension must be at least 1, got {self.dimension}")
        if self.value_bound < 1:
            raise MalformedInput("value_bound must be at least 1")
        if self.chi_width < 1:
            raise MalformedInput("chi_width must be at least 1")

    @classmethod
    def for_cli(cls, variant: str, dimension: int, **kwargs) -> 'ProtocolConfig':
        """Build a config, raising interactive dimensions to the minimum."""
        if variant == INTERACTIVE and dimension >= 1:
            dimension = max(dimension, MIN_INTERACTIVE_DIMENSION)
        return cls(variant=variant, dimension=dimension, **kwargs)

    @property
    def stream_size(self) -> int:
        """N: number of frequency counts in the stream."""
        if self.variant == INTERACTIVE:
            return 1 << self.dimension
        return self.dimension * self.dimension

    @property
    def rounds(self) -> int:
        """Prover messages: d for interactive, one proof vector for tabulated."""
        return self.dimension if self.variant == INTERACTIVE else 1
