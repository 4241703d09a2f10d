"""Tests for the interactive F2 protocol."""

import pytest

from streamproof.common.field import PRIME, addmod
from streamproof.common.outcome import ProtocolStateError, RejectReason
from streamproof.common.polynomial import RoundPolynomial
from streamproof.interactive import (
    F2Prover,
    F2Verifier,
    FrequencyVector,
    InteractiveProtocol,
    exact_f2,
    verify,
)

DATA = [1, 2, 3, 4, 5, 6, 7, 8]
CHALLENGES = [3, 5, 7]


def honest_transcript(data, challenges):
    messages = F2Prover(data).prove(challenges)
    verifier = F2Verifier(challenges)
    fr = verifier.extrapolate(data)
    return messages, fr


class TestFrequencyVector:
    """Pair extensions, round messages and compaction."""

    def test_rejects_non_power_of_two(self) -> None:
        with pytest.raises(ValueError):
            FrequencyVector([1, 2, 3])
        with pytest.raises(ValueError):
            FrequencyVector([])

    def test_round_message(self) -> None:
        """g(0), g(1), g(2) for [1..8]."""
        g = FrequencyVector(DATA).round_message()
        assert g.evaluations == (84, 120, 164)
        assert g.boolean_sum() == 204

    def test_compact(self) -> None:
        """Every pair differs by one, so new[k] = a[2k] + r."""
        v = FrequencyVector(DATA).compact(3)
        assert v.values == [4, 6, 8, 10]

    def test_compact_leaves_original(self) -> None:
        v = FrequencyVector(DATA)
        v.compact(3)
        assert v.values == DATA

    def test_message_matches_extension_squares(self, source) -> None:
        """g(c) is the sum of squared pair extensions at c."""
        v = FrequencyVector(source.data_vector(32))
        g = v.round_message()
        for c in range(3):
            total = 0
            for k in range(v.size // 2):
                e = v.compute_extension(k, c)
                total = addmod(total, e * e % PRIME)
            assert g[c] == total

    def test_sum_of_squares(self) -> None:
        assert FrequencyVector(DATA).sum_of_squares() == 204


class TestF2Prover:
    """The round-reduction state machine."""

    def test_length_invariant(self, source) -> None:
        """After round j the vector has 2^(d-j-1) entries."""
        d = 6
        prover = F2Prover(source.data_vector(1 << d))
        for j, r in enumerate(source.challenge_vector(d)):
            assert prover.vector.size == 1 << (d - j)
            prover.round_message()
            prover.receive_challenge(r)
            assert prover.vector.size == 1 << (d - j - 1)
        assert prover.done

    def test_one_message_per_round(self) -> None:
        messages = F2Prover(DATA).prove(CHALLENGES)
        assert len(messages) == 3
        assert all(isinstance(m, RoundPolynomial) and m.degree == 2 for m in messages)

    def test_message_is_idempotent(self) -> None:
        prover = F2Prover(DATA)
        assert prover.round_message() is prover.round_message()

    def test_challenge_before_message(self) -> None:
        with pytest.raises(ProtocolStateError):
            F2Prover(DATA).receive_challenge(3)

    def test_past_last_round(self) -> None:
        prover = F2Prover(DATA)
        prover.prove(CHALLENGES)
        with pytest.raises(ProtocolStateError):
            prover.round_message()
        with pytest.raises(ProtocolStateError):
            prover.receive_challenge(3)

    def test_wrong_challenge_count(self) -> None:
        with pytest.raises(ValueError):
            F2Prover(DATA).prove([3, 5])

    def test_input_not_mutated(self) -> None:
        data = list(DATA)
        F2Prover(data).prove(CHALLENGES)
        assert data == DATA

    def test_final_value_is_extension(self, source) -> None:
        """The last compacted entry is the data's extension at r."""
        data = source.data_vector(256)
        r = source.challenge_vector(8)
        prover = F2Prover(data)
        prover.prove(r)
        assert prover.vector.values == [F2Verifier(r).extrapolate(data)]


class TestVerify:
    """Transcript checks and rejection reasons."""

    def test_honest_example_accepts(self) -> None:
        messages, fr = honest_transcript(DATA, CHALLENGES)
        assert verify(204, messages, CHALLENGES, fr).accepted

    @pytest.mark.parametrize("d", [1, 2, 5, 9, 10])
    def test_honest_random_accepts(self, source, d: int) -> None:
        data = source.data_vector(1 << d)
        challenges = source.challenge_vector(d)
        messages, fr = honest_transcript(data, challenges)
        assert verify(exact_f2(data), messages, challenges, fr).accepted

    def test_claim_in_other_zero_representation(self) -> None:
        """A claim equal mod p is accepted."""
        messages, fr = honest_transcript(DATA, CHALLENGES)
        assert verify(204 + PRIME, messages, CHALLENGES, fr).accepted

    def test_wrong_claim(self) -> None:
        messages, fr = honest_transcript(DATA, CHALLENGES)
        result = verify(205, messages, CHALLENGES, fr)
        assert not result.accepted
        assert result.reason is RejectReason.INITIAL_MISMATCH
        assert (result.expected, result.actual) == (205, 204)

    def test_wrong_extrapolation(self) -> None:
        messages, fr = honest_transcript(DATA, CHALLENGES)
        result = verify(204, messages, CHALLENGES, addmod(fr, 1))
        assert result.reason is RejectReason.FINAL_MISMATCH

    def test_missing_message(self) -> None:
        messages, fr = honest_transcript(DATA, CHALLENGES)
        result = verify(204, messages[:-1], CHALLENGES, fr)
        assert result.reason is RejectReason.TRANSCRIPT_LENGTH

    def test_inflated_claim_caught_next_round(self) -> None:
        """Raising g_0(0) to match a false claim breaks round 1."""
        messages, fr = honest_transcript(DATA, CHALLENGES)
        messages[0] = messages[0].replace(0, addmod(messages[0][0], 1))
        result = verify(205, messages, CHALLENGES, fr)
        assert result.reason is RejectReason.ROUND_MISMATCH
        assert result.round == 1

    @pytest.mark.parametrize("j", [0, 1, 2, 3])
    @pytest.mark.parametrize("c", [0, 1, 2])
    def test_single_corruption_detected(self, source, j: int, c: int) -> None:
        """Changing any one element of any one message rejects at a known place."""
        d = 4
        data = source.data_vector(1 << d)
        challenges = source.challenge_vector(d)
        messages, fr = honest_transcript(data, challenges)
        messages[j] = messages[j].replace(c, addmod(messages[j][c], 1))

        result = verify(exact_f2(data), messages, challenges, fr)

        assert not result.accepted
        if c in (0, 1) and j == 0:
            assert result.reason is RejectReason.INITIAL_MISMATCH
        elif c in (0, 1):
            assert result.reason is RejectReason.ROUND_MISMATCH
            assert result.round == j
        elif j < d - 1:
            assert result.reason is RejectReason.ROUND_MISMATCH
            assert result.round == j + 1
        else:
            assert result.reason is RejectReason.FINAL_MISMATCH


class TestF2Verifier:
    """The stateful verifier wrapper."""

    def test_check_requires_data_pass(self) -> None:
        with pytest.raises(ProtocolStateError):
            F2Verifier(CHALLENGES).check(204, [])

    def test_streaming_observe(self) -> None:
        """Observing each item's count equals one batch pass."""
        verifier = F2Verifier(CHALLENGES)
        for index, count in enumerate(DATA):
            verifier.observe(index, count)
        messages = F2Prover(DATA).prove(CHALLENGES)
        assert verifier.check(204, messages).accepted
        assert verifier.extrapolated_value == F2Verifier(CHALLENGES).extrapolate(DATA)

    def test_message_count(self) -> None:
        assert F2Verifier(CHALLENGES).message_count == 4


class TestInteractiveProtocol:
    """End-to-end runs."""

    def test_worked_example(self) -> None:
        """d = 3, data [1..8]: F2 = 204, VerifS = 4, ProofS = 10."""
        result = InteractiveProtocol(DATA, challenges=CHALLENGES).run()
        assert result.accepted
        assert result.f2 == 204
        assert result.report.stream_size == 8
        assert result.report.verifier_size == 4
        assert result.report.proof_size == 10
        assert len(result.messages) == 3

    def test_round_records(self) -> None:
        result = InteractiveProtocol(DATA, challenges=CHALLENGES).run()
        assert [(rd.size_before, rd.size_after) for rd in result.rounds] == [
            (8, 4), (4, 2), (2, 1)]
        assert [rd.challenge for rd in result.rounds] == CHALLENGES

    def test_random_run(self, source) -> None:
        data = source.data_vector(1 << 10)
        result = InteractiveProtocol(data, source=source).run()
        assert result.accepted
        assert result.f2 == sum(v * v for v in data) % PRIME
        assert all(2 <= r < PRIME for r in result.challenges)

    def test_false_claim_rejected_cleanly(self) -> None:
        result = InteractiveProtocol(DATA, challenges=CHALLENGES).run(claimed_f2=1)
        assert not result.accepted
        assert result.verification.reason is RejectReason.INITIAL_MISMATCH

    def test_verbose_output(self, capsys) -> None:
        InteractiveProtocol(DATA, challenges=CHALLENGES, verbose=True).run()
        out = capsys.readouterr().out
        assert "ROUND 2" in out
        assert "VERIFICATION PASSED" in out

    def test_bad_inputs(self) -> None:
        with pytest.raises(ValueError):
            InteractiveProtocol([1, 2, 3])
        with pytest.raises(ValueError):
            InteractiveProtocol(DATA, challenges=[3, 5])
