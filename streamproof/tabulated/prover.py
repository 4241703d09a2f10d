"""
Tabulated F2 prover.

The data is a V x H matrix. Row i is read as the evaluations at x = 0..H-1
of a polynomial p_i of degree < H. The prover extends every row to
x = H..2H-1 and sends, for each of the 2H columns, the sum of squares down
that column. Those are the evaluations of q(x) = sum_i p_i(x)^2, a
polynomial of degree <= 2H - 2, so 2H values determine it.
"""

from __future__ import annotations
from typing import List, Sequence

from ..common.extrapolation import tabulated_extrapolate
from ..common.field import addmod, mulmod, to_field
from ..common.tables import inverse_factorial_table, lagrange_table


def validate_matrix(matrix: Sequence[Sequence[int]]) -> int:
    """Check the matrix is non-empty and rectangular; return its width H."""
    if not matrix or not matrix[0]:
        raise ValueError("Data matrix must have at least one row and one column")
    width = len(matrix[0])
    for i, row in enumerate(matrix):
        if len(row) != width:
            raise ValueError(f"Row {i} has {len(row)} entries, expected {width}")
    return width


class TabulatedProver:
    """
    Example:
        >>> prover = TabulatedProver([[1, 2], [3, 4]])
        >>> prover.build_tables()
        >>> proof = prover.build_proof()
        >>> proof[:2]          # column sums of squares: 1+9, 4+16
        [10, 20]
    """

    def __init__(self, matrix: Sequence[Sequence[int]]):
        self.width = validate_matrix(matrix)
        self.rows = [[to_field(v) for v in row] for row in matrix]
        self.itab: List[int] = []
        self.column_tables: List[List[int]] = []

    @property
    def proof_size(self) -> int:
        return 2 * self.width

    def build_tables(self):
        """Inverse factorials plus one r-table per destination column H..2H-1."""
        h = self.width
        self.itab = inverse_factorial_table(h)
        self.column_tables = [lagrange_table(h, h + k) for k in range(h)]

    def extend_row(self, row: Sequence[int]) -> List[int]:
        """Row followed by its extrapolation to the next H columns."""
        if not self.column_tables:
            self.build_tables()
        return list(row) + [
            tabulated_extrapolate(row, self.itab, rtab) for rtab in self.column_tables
        ]

    def build_proof(self) -> List[int]:
        """Column sums of squares over the extended matrix, length 2H."""
        proof = [0] * self.proof_size
        for row in self.rows:
            for j, value in enumerate(self.extend_row(row)):
                proof[j] = addmod(proof[j], mulmod(value, value))
        return proof
