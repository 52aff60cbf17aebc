"""
PLONK Prover Round 4: 다항식 평가값 산출
=========================================

  ┌─────────────────────────────────────────────────┐
  │  Verifier → Prover: ζ                          │
  │  Prover → Verifier: ā, b̄, c̄, s̄_σ1, s̄_σ2, z̄_ω │
  └─────────────────────────────────────────────────┘

  ā = a(ζ), b̄ = b(ζ), c̄ = c(ζ)
  s̄_σ1 = S_σ1(ζ), s̄_σ2 = S_σ2(ζ)
  z̄_ω = z(ζ·ω)

S_σ3(ζ)는 보내지 않는다. Verifier는 [S_σ3]를 선형화 커밋먼트에 직접 넣는다.
"""

import logging

logger = logging.getLogger(__name__)


def execute(state):
    """Round 4를 실행한다."""
    state.zeta = state.transcript.generate_challenge()
    zeta = state.zeta
    cc = state.compiled.copy_constraints
    proof = state.proof

    proof.a_eval = state.a_poly.evaluate(zeta)
    proof.b_eval = state.b_poly.evaluate(zeta)
    proof.c_eval = state.c_poly.evaluate(zeta)
    proof.s_sigma1_eval = cc.s_sigma_1.evaluate(zeta)
    proof.s_sigma2_eval = cc.s_sigma_2.evaluate(zeta)
    proof.z_omega_eval = state.z_poly.evaluate(zeta * state.omega)

    for name in proof.EVALUATION_FIELDS:
        state.transcript.feed_scalar(getattr(proof, name))
    logger.debug("Round 4 완료")
