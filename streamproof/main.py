"""
streamproof - Command Line Entry Point

Generates a random stream, runs one F2 protocol over it and prints the
timing report:

    N   VerifT   ProveT   CheckT   VerifS   ProofS

Run with:
    streamproof 16                        # interactive, 2^16 entries
    streamproof --variant tabulated 100   # tabulated, 100 x 100 matrix
    python -m streamproof.main --seed 7 --verbose 8
"""

import argparse
import sys
from typing import List, Optional, Union

from .common.source import RandomSource
from .config import (
    INTERACTIVE,
    VARIANTS,
    MalformedInput,
    ProtocolConfig,
)
from .interactive.protocol import InteractiveProtocol, InteractiveResult
from .report import FAILURE_MESSAGE, SUCCESS_MESSAGE
from .tabulated.protocol import TabulatedProtocol, TabulatedResult


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises MalformedInput instead of exiting with 2."""

    def error(self, message):
        raise MalformedInput(message)


def build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog="streamproof",
        description="Verify the second frequency moment of a random stream "
                    "with a streaming interactive proof.")
    p.add_argument("dimension", type=int,
                   help="log2 of the stream length (interactive, minimum 8) "
                        "or the side of the data matrix (tabulated).")
    p.add_argument("--variant", choices=VARIANTS, default=INTERACTIVE,
                   help="Protocol variant. Default: interactive.")
    p.add_argument("--seed", type=int, default=None,
                   help="Seed for reproducible data and challenges.")
    p.add_argument("--verbose", action="store_true",
                   help="Print the protocol transcript.")
    return p


def parse_config(argv: Optional[List[str]] = None) -> ProtocolConfig:
    args = build_parser().parse_args(argv)
    return ProtocolConfig.for_cli(args.variant, args.dimension,
                                  seed=args.seed, verbose=args.verbose)


def run(config: ProtocolConfig) -> Union[InteractiveResult, TabulatedResult]:
    """Generate data from the config's seed and run the chosen protocol."""
    source = RandomSource(config.seed, value_bound=config.value_bound)

    if config.variant == INTERACTIVE:
        data = source.data_vector(config.stream_size)
        protocol = InteractiveProtocol(data, source=source, width=config.chi_width,
                                       verbose=config.verbose)
    else:
        data = source.data_matrix(config.dimension, config.dimension)
        protocol = TabulatedProtocol(data, source=source, verbose=config.verbose)
    return protocol.run()


def print_result(result: Union[InteractiveResult, TabulatedResult]):
    if not result.accepted:
        print("FAIL!")
        print(result.verification.describe())
    print(result.report.format())
    print(SUCCESS_MESSAGE if result.accepted else FAILURE_MESSAGE)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    parser = build_parser()
    try:
        config = parse_config(argv)
    except MalformedInput as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 1

    result = run(config)
    print_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
