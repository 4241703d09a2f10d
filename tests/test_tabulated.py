"""Tests for the tabulated F2 protocol."""

import pytest

from streamproof.common.field import PRIME, addmod
from streamproof.common.outcome import ProtocolStateError, RejectReason
from streamproof.tabulated import (
    TabulatedProtocol,
    TabulatedProver,
    TabulatedVerifier,
    exact_matrix_f2,
    validate_matrix,
)

MATRIX = [
    [3, 1, 4, 1],
    [5, 9, 2, 6],
    [5, 3, 5, 8],
    [9, 7, 9, 3],
]

# Far from the nodes 0..2H-1.
R = 10 ** 12


def proof_for(matrix):
    prover = TabulatedProver(matrix)
    prover.build_tables()
    return prover.build_proof()


class TestTabulatedProver:
    """Row extension and column sums."""

    def test_two_by_two(self) -> None:
        """Both rows are lines, so the extended columns are easy to check."""
        assert proof_for([[1, 2], [3, 4]]) == [10, 20, 34, 52]

    def test_extend_row(self) -> None:
        prover = TabulatedProver([[1, 4, 9]])
        assert prover.extend_row(prover.rows[0]) == [1, 4, 9, 16, 25, 36]

    def test_first_half_is_column_sums(self) -> None:
        proof = proof_for(MATRIX)
        assert len(proof) == 8
        for j in range(4):
            assert proof[j] == sum(row[j] ** 2 for row in MATRIX) % PRIME

    def test_proof_sums_to_f2(self) -> None:
        proof = proof_for(MATRIX)
        assert sum(proof[:4]) % PRIME == exact_matrix_f2(MATRIX)

    def test_input_not_mutated(self) -> None:
        matrix = [list(row) for row in MATRIX]
        proof_for(matrix)
        assert matrix == MATRIX

    def test_ragged_matrix(self) -> None:
        with pytest.raises(ValueError):
            validate_matrix([[1, 2], [3]])
        with pytest.raises(ValueError):
            TabulatedProver([])


class TestTabulatedVerifier:
    """Check value and proof comparison."""

    def test_honest_proof_accepts(self) -> None:
        verifier = TabulatedVerifier(4, R)
        verifier.compute_check(MATRIX)
        assert verifier.verify(proof_for(MATRIX), exact_matrix_f2(MATRIX)).accepted

    def test_verify_before_check(self) -> None:
        with pytest.raises(ProtocolStateError):
            TabulatedVerifier(4, R).verify([0] * 8, 0)

    def test_corrupted_proof(self) -> None:
        verifier = TabulatedVerifier(4, R)
        verifier.compute_check(MATRIX)
        proof = proof_for(MATRIX)
        proof[5] = addmod(proof[5], 1)
        result = verifier.verify(proof, exact_matrix_f2(MATRIX))
        assert result.reason is RejectReason.PROOF_MISMATCH

    def test_prover_saw_different_data(self) -> None:
        """A proof built from altered data does not match the check value."""
        altered = [list(row) for row in MATRIX]
        altered[2][1] += 1
        verifier = TabulatedVerifier(4, R)
        verifier.compute_check(MATRIX)
        result = verifier.verify(proof_for(altered), exact_matrix_f2(altered))
        assert result.reason is RejectReason.PROOF_MISMATCH

    def test_wrong_claim(self) -> None:
        verifier = TabulatedVerifier(4, R)
        verifier.compute_check(MATRIX)
        result = verifier.verify(proof_for(MATRIX), exact_matrix_f2(MATRIX) + 1)
        assert result.reason is RejectReason.MOMENT_MISMATCH

    def test_short_proof(self) -> None:
        verifier = TabulatedVerifier(4, R)
        verifier.compute_check(MATRIX)
        result = verifier.verify(proof_for(MATRIX)[:7], exact_matrix_f2(MATRIX))
        assert result.reason is RejectReason.TRANSCRIPT_LENGTH

    def test_width_mismatch(self) -> None:
        with pytest.raises(ValueError):
            TabulatedVerifier(3, R).compute_check(MATRIX)


class TestTabulatedProtocol:
    """End-to-end runs."""

    def test_fixed_matrix(self) -> None:
        result = TabulatedProtocol(MATRIX, r=R).run()
        assert result.accepted
        assert result.report.stream_size == 16
        assert result.report.verifier_size == 4
        assert result.report.proof_size == 8

    @pytest.mark.parametrize("r", [0, 1, 7, PRIME - 1])
    def test_node_and_edge_points(self, r: int) -> None:
        """Points among the nodes use the direct table path and still agree."""
        assert TabulatedProtocol(MATRIX, r=r).run().accepted

    @pytest.mark.parametrize("n", [1, 2, 3, 5, 6])
    def test_random_square(self, source, n: int) -> None:
        matrix = source.data_matrix(n, n)
        result = TabulatedProtocol(matrix, source=source).run()
        assert result.accepted
        assert result.f2 == sum(v * v for row in matrix for v in row) % PRIME

    def test_rectangular(self, source) -> None:
        matrix = source.data_matrix(7, 3)
        result = TabulatedProtocol(matrix, source=source).run()
        assert result.accepted
        assert result.report.stream_size == 21

    def test_false_claim(self) -> None:
        result = TabulatedProtocol(MATRIX, r=R).run(claimed_f2=1)
        assert not result.accepted
        assert result.verification.reason is RejectReason.MOMENT_MISMATCH

    def test_verbose_output(self, capsys) -> None:
        TabulatedProtocol(MATRIX, r=R, verbose=True).run()
        assert "VERIFICATION PASSED" in capsys.readouterr().out
