"""
PLONK Verifier
================

**검증 과정**:
  1. 증명 형식 검사 (커밋먼트가 G1 위의 점인지, 평가값이 FR인지)
  2. Fiat-Shamir 트랜스크립트 재생 → β, γ, α, ζ, v, u 챌린지 복원
  3. 분할 차수 d = n + 1 확인
  4. Z_H(ζ), L₁(ζ), PI(ζ) 계산
  5. r₀, [D]₁, [F]₁, [E]₁ 구성
  6. 페어링 검사

**핵심 방정식**:
  commit(r(x)) = [D']₁ + r₀·G₁ 이고, Prover의 두 열기 증명을 u로 묶으면

  r₀ = PI(ζ) - α²·L₁(ζ) - α·(ā+βs̄σ1+γ)(b̄+βs̄σ2+γ)(c̄+γ)·z̄ω

  [D]₁ = ā·b̄·[q_m] + ā·[q_l] + b̄·[q_r] + c̄·[q_o] + [q_c]
       + (α·(ā+βζ+γ)(b̄+βk1ζ+γ)(c̄+βk2ζ+γ) + α²·L₁(ζ) + u)·[z]
       - α·β·z̄ω·(ā+βs̄σ1+γ)(b̄+βs̄σ2+γ)·[S_σ3]
       - Z_H(ζ)·([t_lo] + ζ^{d+1}·[t_mid] + ζ^{2d+2}·[t_hi])

  [F]₁ = [D]₁ + v·[a] + v²·[b] + v³·[c] + v⁴·[S_σ1] + v⁵·[S_σ2]
  [E]₁ = (-r₀ + v·ā + v²·b̄ + v³·c̄ + v⁴·s̄σ1 + v⁵·s̄σ2 + u·z̄ω)·G₁

  e([W_ζ] + u·[W_ζω], [τ]₂) == e(ζ·[W_ζ] + u·ζω·[W_ζω] + [F] - [E], [1]₂)

거부 사유는 모두 모아 VerificationResult로 돌려준다. 잘못된 증명에
대해 예외를 던지지 않는다.

사용 예시:
    >>> from plonk_kzg.verifier import verify
    >>> result = verify(proof, compiled)
    >>> bool(result)
"""

import logging

from plonk_kzg.errors import RejectionReason, VerificationRejected
from plonk_kzg.field import FR, ec_pairing
from plonk_kzg.kzg import Commitment
from plonk_kzg.slicing import slice_degree
from plonk_kzg.transcript import Transcript

logger = logging.getLogger(__name__)


class VerificationResult:
    """검증 결과.

    속성:
        accepted: 수락 여부
        reasons: 거부 사유 (RejectionReason 튜플, 수락 시 빈 튜플)
        details: 사유별 설명 문자열
    """

    def __init__(self, reasons=(), details=None):
        self.reasons = tuple(reasons)
        self.details = dict(details or {})

    @property
    def accepted(self):
        return not self.reasons

    def __bool__(self):
        return self.accepted

    def raise_for_rejection(self):
        """거부된 경우 VerificationRejected를 던진다."""
        if self.reasons:
            raise VerificationRejected(self.reasons)

    def __repr__(self):
        if self.accepted:
            return "VerificationResult(accepted)"
        return f"VerificationResult(rejected: {', '.join(r.value for r in self.reasons)})"


def _malformed_fields(proof):
    bad = []
    for name in proof.COMMITMENT_FIELDS:
        value = getattr(proof, name, None)
        if not isinstance(value, Commitment) or not value.is_on_curve():
            bad.append(name)
    for name in proof.EVALUATION_FIELDS:
        if not isinstance(getattr(proof, name, None), FR):
            bad.append(name)
    return bad


class _Challenges:
    __slots__ = ("beta", "gamma", "alpha", "zeta", "v", "u")


def replay_transcript(proof, transcript):
    """Prover와 같은 순서로 feed하여 챌린지를 복원한다."""
    c = _Challenges()
    transcript.feed(proof.a_comm)
    transcript.feed(proof.b_comm)
    transcript.feed(proof.c_comm)
    c.beta, c.gamma = transcript.generate_challenges(2)

    transcript.feed(proof.z_comm)
    c.alpha = transcript.generate_challenge()

    transcript.feed(proof.t_lo_comm)
    transcript.feed(proof.t_mid_comm)
    transcript.feed(proof.t_hi_comm)
    c.zeta = transcript.generate_challenge()

    for name in proof.EVALUATION_FIELDS:
        transcript.feed_scalar(getattr(proof, name))
    c.v = transcript.generate_challenge()

    transcript.feed(proof.w_zeta_comm)
    transcript.feed(proof.w_zeta_omega_comm)
    c.u = transcript.generate_challenge()
    return c


def verify(proof, compiled, transcript=None):
    """PLONK 증명을 검증한다.

    Args:
        proof: Proof
        compiled: CompiledCircuit (전처리 커밋먼트, 도메인, SRS)
        transcript: 새 Transcript (None이면 기본 설정으로 생성)

    Returns:
        VerificationResult
    """
    reasons = []
    details = {}

    def reject(reason, message):
        logger.info("증명 거부: %s (%s)", reason.value, message)
        reasons.append(reason)
        details[reason] = message

    bad = _malformed_fields(proof)
    if bad:
        reject(RejectionReason.MALFORMED_PROOF, f"잘못된 필드: {', '.join(bad)}")
        return VerificationResult(reasons, details)

    if transcript is None:
        transcript = Transcript()
    ch = replay_transcript(proof, transcript)
    beta, gamma, alpha, zeta, v, u = ch.beta, ch.gamma, ch.alpha, ch.zeta, ch.v, ch.u

    # u는 참고용이다. 형식이 틀리거나 값이 달라도 재계산 값만 사용한다.
    if proof.u is not None and not isinstance(proof.u, FR):
        logger.warning("증명에 기록된 u가 FR 원소가 아닙니다: %s", type(proof.u).__name__)
    elif proof.u is not None and proof.u != u:
        logger.warning("증명에 기록된 u가 재계산한 값과 다릅니다 (무시하고 재계산 값 사용)")

    n = compiled.size
    d = slice_degree(n)
    if proof.degree != d:
        reject(RejectionReason.DEGREE_MISMATCH, f"분할 차수 {proof.degree} ≠ {d}")

    domain = compiled.domain
    zh_zeta = domain.evaluate_vanishing(zeta)
    if zh_zeta == 0:
        reject(RejectionReason.DEGENERATE_CHALLENGE, "ζ가 도메인 위의 점입니다")
        return VerificationResult(reasons, details)

    l1_zeta = domain.evaluate_lagrange_first(zeta)
    pi_zeta = domain.evaluate_public_input(compiled.public_inputs, zeta)

    pp = compiled.preprocessed
    k1, k2 = compiled.k1, compiled.k2
    a_bar, b_bar, c_bar = proof.a_eval, proof.b_eval, proof.c_eval
    s1_bar, s2_bar = proof.s_sigma1_eval, proof.s_sigma2_eval
    z_omega_bar = proof.z_omega_eval
    alpha_sq = alpha * alpha

    # (ā+βs̄σ1+γ)(b̄+βs̄σ2+γ)
    sigma_product = (a_bar + beta * s1_bar + gamma) * (b_bar + beta * s2_bar + gamma)

    r0 = pi_zeta - alpha_sq * l1_zeta - alpha * sigma_product * (c_bar + gamma) * z_omega_bar

    z_coeff = (alpha
               * (a_bar + beta * zeta + gamma)
               * (b_bar + beta * k1 * zeta + gamma)
               * (c_bar + beta * k2 * zeta + gamma)
               + alpha_sq * l1_zeta + u)
    s3_coeff = alpha * beta * z_omega_bar * sigma_product
    zeta_shift = zeta ** (d + 1)

    t_comm = (proof.t_lo_comm + proof.t_mid_comm * zeta_shift
              + proof.t_hi_comm * (zeta_shift * zeta_shift))
    d_comm = (pp.q_m * (a_bar * b_bar) + pp.q_l * a_bar + pp.q_r * b_bar
              + pp.q_o * c_bar + pp.q_c
              + proof.z_comm * z_coeff
              - pp.s_sigma_3 * s3_coeff
              - t_comm * zh_zeta)

    v2 = v * v
    v3 = v2 * v
    v4 = v3 * v
    v5 = v4 * v
    f_comm = (d_comm + proof.a_comm * v + proof.b_comm * v2 + proof.c_comm * v3
              + pp.s_sigma_1 * v4 + pp.s_sigma_2 * v5)
    e_scalar = (-r0 + v * a_bar + v2 * b_bar + v3 * c_bar + v4 * s1_bar + v5 * s2_bar
                + u * z_omega_bar)
    e_comm = compiled.scheme.commit_constant(e_scalar)

    zeta_omega = zeta * compiled.omega
    lhs_point = proof.w_zeta_comm + proof.w_zeta_omega_comm * u
    rhs_point = (proof.w_zeta_comm * zeta + proof.w_zeta_omega_comm * (u * zeta_omega)
                 + f_comm - e_comm)

    srs = compiled.srs
    if ec_pairing(srs.tau_g2, lhs_point.point) != ec_pairing(srs.g2, rhs_point.point):
        reject(RejectionReason.PAIRING_FAILED, "페어링 등식이 성립하지 않습니다")

    if not reasons:
        logger.info("증명 검증 성공 (n=%d)", n)
    return VerificationResult(reasons, details)
