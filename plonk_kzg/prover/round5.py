"""
PLONK Prover Round 5: 선형화 + KZG 열기 증명
=============================================

  ┌─────────────────────────────────────────────────┐
  │  Verifier → Prover: v                          │
  │  Prover → Verifier: [W_ζ]₁, [W_ζω]₁            │
  └─────────────────────────────────────────────────┘

**선형화 다항식 r(x)**:
  Round 4의 평가값을 상수로 대입하여, 남은 다항식이 선형(커밋먼트에
  대해)이 되도록 만든다.

  r(x) = ā·b̄·q_m + ā·q_l + b̄·q_r + c̄·q_o + q_c + PI(ζ)
       + α·[(ā+βζ+γ)(b̄+βk1ζ+γ)(c̄+βk2ζ+γ)·z(x)
            - (ā+βs̄σ1+γ)(b̄+βs̄σ2+γ)(c̄+βS_σ3(x)+γ)·z̄ω]
       + α²·(z(x) - 1)·L₁(ζ)
       - Z_H(ζ)·(t_lo + ζ^{d+1}·t_mid + ζ^{2d+2}·t_hi)

  구성상 r(ζ) = 0.

**일괄 열기 증명**:
  W_ζ(x)  = [r + v(a-ā) + v²(b-b̄) + v³(c-c̄) + v⁴(S_σ1-s̄σ1) + v⁵(S_σ2-s̄σ2)] / (x - ζ)
  W_ζω(x) = (z - z̄ω) / (x - ζω)
"""

import logging

from plonk_kzg.polynomial import Polynomial

logger = logging.getLogger(__name__)


def linearisation_polynomial(state):
    """r(x)를 계산한다."""
    compiled = state.compiled
    gc = compiled.gate_constraints
    cc = compiled.copy_constraints
    proof = state.proof
    beta, gamma, alpha, zeta = state.beta, state.gamma, state.alpha, state.zeta
    a_bar, b_bar, c_bar = proof.a_eval, proof.b_eval, proof.c_eval
    s1_bar, s2_bar = proof.s_sigma1_eval, proof.s_sigma2_eval
    z_omega_bar = proof.z_omega_eval

    pi_zeta = gc.pi.evaluate(zeta)
    gate_part = (gc.q_m * (a_bar * b_bar) + gc.q_l * a_bar + gc.q_r * b_bar
                 + gc.q_o * c_bar + gc.q_c + pi_zeta)

    identity_coeff = (alpha
                      * (a_bar + beta * zeta + gamma)
                      * (b_bar + beta * cc.k1 * zeta + gamma)
                      * (c_bar + beta * cc.k2 * zeta + gamma))
    permuted_coeff = (alpha * z_omega_bar
                      * (a_bar + beta * s1_bar + gamma)
                      * (b_bar + beta * s2_bar + gamma))
    permutation_part = (state.z_poly * identity_coeff
                        - (cc.s_sigma_3 * beta + (c_bar + gamma)) * permuted_coeff)

    l1_zeta = state.domain.evaluate_lagrange_first(zeta)
    boundary_part = (state.z_poly - 1) * (alpha * alpha * l1_zeta)

    zh_zeta = state.domain.evaluate_vanishing(zeta)
    quotient_part = state.quotient.compact(zeta) * zh_zeta

    return gate_part + permutation_part + boundary_part - quotient_part


def execute(state):
    """Round 5를 실행한다."""
    state.v = state.transcript.generate_challenge()
    v = state.v
    zeta = state.zeta
    proof = state.proof
    cc = state.compiled.copy_constraints

    r_poly = linearisation_polynomial(state)

    batched = r_poly
    v_power = v
    for poly, value in ((state.a_poly, proof.a_eval),
                        (state.b_poly, proof.b_eval),
                        (state.c_poly, proof.c_eval),
                        (cc.s_sigma_1, proof.s_sigma1_eval),
                        (cc.s_sigma_2, proof.s_sigma2_eval)):
        batched = batched + (poly - value) * v_power
        v_power = v_power * v

    w_zeta = batched.divide_exact(Polynomial.linear_root(zeta), context="opening at zeta")
    zeta_omega = zeta * state.omega
    w_zeta_omega = (state.z_poly - proof.z_omega_eval).divide_exact(
        Polynomial.linear_root(zeta_omega), context="opening at zeta*omega"
    )

    proof.w_zeta_comm = state.scheme.commit(w_zeta)
    proof.w_zeta_omega_comm = state.scheme.commit(w_zeta_omega)
    state.transcript.feed(proof.w_zeta_comm)
    state.transcript.feed(proof.w_zeta_omega_comm)

    state.u = state.transcript.generate_challenge()
    proof.u = state.u
    logger.debug("Round 5 완료")
