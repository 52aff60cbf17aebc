"""
PLONK Verifier & End-to-End Integration Tests
===============================================

전체 파이프라인 (circuit → compile → prove → verify)과
건전성(soundness)을 테스트한다.

테스트 범위:
  - xy + 3x² + xyz = 11 (출력 고정 / 공개 입력 포함)
  - x² + y² = z² (3, 4, 5) 및 잘못된 witness
  - xyz = 6
  - 조작된 증명 요소 (커밋먼트, 평가값, 분할 차수, u)
"""

import copy
import logging
import random

import pytest

from plonk_kzg import verifier
from plonk_kzg.errors import RejectionReason, VerificationRejected
from plonk_kzg.field import FR, from_affine
from plonk_kzg.kzg import Commitment
from plonk_kzg.polynomial import Polynomial, poly_div
from plonk_kzg.prover import Proof, round2
from plonk_kzg.transcript import Transcript
from plonk_kzg.verifier import VerificationResult, verify


def _tampered(proof, **changes):
    forged = copy.copy(proof)
    for name, value in changes.items():
        setattr(forged, name, value)
    return forged


# ─────────────────────────────────────────────────────────────────────
# 완전성 (Completeness)
# ─────────────────────────────────────────────────────────────────────

class TestCompleteness:
    def test_polynomial_circuit(self, polynomial_compiled, polynomial_proof):
        result = polynomial_compiled.verify(polynomial_proof)
        assert result
        assert result.accepted
        assert result.reasons == ()
        result.raise_for_rejection()

    def test_polynomial_circuit_pins_output(self, scenarios, polynomial_compiled):
        assert polynomial_compiled.size == 8
        assert len(scenarios.polynomial()) == 8
        # 출력이 11이 아니면 덧셈 게이트와 출력 고정 게이트가 모두 깨진다
        assert scenarios.polynomial(output=12).unsatisfied_gates() == [5, 7]

    def test_polynomial_circuit_unpinned_output(self, scenarios, srs):
        compiled = scenarios.polynomial(pin_output=False).compile(srs)
        assert compiled.size == 8
        proof = compiled.prove(rng=random.Random(11))
        assert compiled.verify(proof)

    def test_pythagorean_circuit(self, pythagorean_compiled):
        proof = pythagorean_compiled.prove(rng=random.Random(12))
        assert pythagorean_compiled.verify(proof)

    def test_product_circuit(self, product_compiled):
        assert product_compiled.size == 4
        proof = product_compiled.prove()
        assert verify(proof, product_compiled)

    def test_default_srs_round_trip(self, scenarios):
        compiled = scenarios.product().compile()
        assert compiled.verify(compiled.prove())

    def test_explicit_transcripts(self, product_compiled):
        proof = product_compiled.prove(transcript=Transcript(label=b"custom"))
        assert product_compiled.verify(proof, transcript=Transcript(label=b"custom"))
        assert not product_compiled.verify(proof, transcript=Transcript(label=b"other"))

    def test_public_input(self, scenarios, srs):
        compiled = scenarios.polynomial(output_public_input=11).compile(srs)
        proof = compiled.prove(rng=random.Random(13))
        assert compiled.verify(proof)

    def test_wrong_public_input_rejected(self, scenarios, srs):
        compiled = scenarios.polynomial(output_public_input=11).compile(srs)
        proof = compiled.prove(rng=random.Random(13))
        other = scenarios.polynomial(output_public_input=12).compile(srs)
        result = other.verify(proof)
        assert not result
        assert RejectionReason.PAIRING_FAILED in result.reasons

    def test_proof_for_other_circuit_rejected(self, product_compiled, pythagorean_compiled):
        proof = product_compiled.prove(rng=random.Random(14))
        assert not pythagorean_compiled.verify(proof)


# ─────────────────────────────────────────────────────────────────────
# 건전성 (Soundness)
# ─────────────────────────────────────────────────────────────────────

class TestSoundness:
    @pytest.mark.parametrize("field", Proof.COMMITMENT_FIELDS)
    def test_random_commitment_rejected(self, polynomial_compiled, polynomial_proof, field):
        forged = _tampered(polynomial_proof, **{field: Commitment.generator() * 987654321})
        result = polynomial_compiled.verify(forged)
        assert not result
        assert result.reasons == (RejectionReason.PAIRING_FAILED,)

    @pytest.mark.parametrize("field", Proof.COMMITMENT_FIELDS)
    def test_off_curve_commitment_rejected(self, polynomial_compiled, polynomial_proof, field):
        x, y = getattr(polynomial_proof, field).to_affine()
        forged = _tampered(polynomial_proof, **{field: Commitment(from_affine(x + 1, y))})
        result = polynomial_compiled.verify(forged)
        assert result.reasons == (RejectionReason.MALFORMED_PROOF,)

    @pytest.mark.parametrize("field", Proof.EVALUATION_FIELDS)
    def test_evaluation_rejected(self, polynomial_compiled, polynomial_proof, field):
        forged = _tampered(polynomial_proof, **{field: getattr(polynomial_proof, field) + 1})
        result = polynomial_compiled.verify(forged)
        assert not result
        assert RejectionReason.PAIRING_FAILED in result.reasons

    def test_missing_field_is_malformed(self, polynomial_compiled, polynomial_proof):
        result = polynomial_compiled.verify(_tampered(polynomial_proof, z_comm=None))
        assert result.reasons == (RejectionReason.MALFORMED_PROOF,)
        assert "z_comm" in result.details[RejectionReason.MALFORMED_PROOF]

    def test_non_field_evaluation_is_malformed(self, polynomial_compiled, polynomial_proof):
        result = polynomial_compiled.verify(_tampered(polynomial_proof, a_eval=5))
        assert result.reasons == (RejectionReason.MALFORMED_PROOF,)

    def test_degree_mismatch(self, polynomial_compiled, polynomial_proof):
        result = polynomial_compiled.verify(
            _tampered(polynomial_proof, degree=polynomial_proof.degree + 1)
        )
        assert not result
        assert result.reasons == (RejectionReason.DEGREE_MISMATCH,)

    def test_u_is_informational(self, polynomial_compiled, polynomial_proof, caplog):
        forged = _tampered(polynomial_proof, u=polynomial_proof.u + 1)
        with caplog.at_level(logging.WARNING, logger="plonk_kzg.verifier"):
            result = polynomial_compiled.verify(forged)
        assert result
        assert any("u" in record.getMessage() for record in caplog.records)

    @pytest.mark.parametrize("bad_u", ["garbage", 5, 1.5])
    def test_non_field_u_is_informational(self, polynomial_compiled, polynomial_proof,
                                          caplog, bad_u):
        forged = _tampered(polynomial_proof, u=bad_u)
        with caplog.at_level(logging.WARNING, logger="plonk_kzg.verifier"):
            result = polynomial_compiled.verify(forged)
        assert isinstance(result, VerificationResult)
        assert result
        assert any(record.levelno == logging.WARNING for record in caplog.records)

    def test_integer_coordinates_are_malformed(self, polynomial_compiled, polynomial_proof):
        # (1, 2, 1)은 정수 연산으로는 y² = x³ + 3 을 만족한다
        forged = _tampered(polynomial_proof, w_zeta_comm=Commitment((1, 2, 1)))
        result = polynomial_compiled.verify(forged)
        assert result.reasons == (RejectionReason.MALFORMED_PROOF,)
        assert "w_zeta_comm" in result.details[RejectionReason.MALFORMED_PROOF]

    def test_degenerate_challenge(self, polynomial_compiled, polynomial_proof, monkeypatch):
        real_replay = verifier.replay_transcript

        def replay_with_domain_zeta(proof, transcript):
            challenges = real_replay(proof, transcript)
            challenges.zeta = polynomial_compiled.domain[2]
            return challenges

        monkeypatch.setattr(verifier, "replay_transcript", replay_with_domain_zeta)
        result = polynomial_compiled.verify(polynomial_proof)
        assert result.reasons == (RejectionReason.DEGENERATE_CHALLENGE,)

    def test_forged_proof_for_false_statement(self, scenarios, srs, monkeypatch):
        """나눗셈 검사를 끈 Prover가 거짓 witness로 만든 증명은 거부된다."""
        compiled = scenarios.pythagorean(hypotenuse_square=20).compile(srs)

        def lenient_divide(self, divisor, context=None):
            return poly_div(self, divisor)[0]

        monkeypatch.setattr(Polynomial, "divide_exact", lenient_divide)
        monkeypatch.setattr(round2, "_check_closure", lambda values: None)
        proof = compiled.prove(rng=random.Random(15))
        monkeypatch.undo()

        result = compiled.verify(proof)
        assert not result
        assert RejectionReason.PAIRING_FAILED in result.reasons


# ─────────────────────────────────────────────────────────────────────
# VerificationResult
# ─────────────────────────────────────────────────────────────────────

class TestVerificationResult:
    def test_accepted(self):
        result = VerificationResult()
        assert result.accepted and bool(result)
        result.raise_for_rejection()

    def test_rejected_raises(self):
        result = VerificationResult([RejectionReason.PAIRING_FAILED])
        assert not result
        with pytest.raises(VerificationRejected) as exc:
            result.raise_for_rejection()
        assert exc.value.reasons == (RejectionReason.PAIRING_FAILED,)

    def test_repr(self):
        assert "accepted" in repr(VerificationResult())
        assert "pairing_failed" in repr(VerificationResult([RejectionReason.PAIRING_FAILED]))
