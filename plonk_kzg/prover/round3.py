"""
PLONK Prover Round 3: 몫 다항식 t(x) 커밋먼트
===============================================

  ┌─────────────────────────────────────────────────┐
  │  Verifier → Prover: α                          │
  │  Prover → Verifier: [t_lo]₁, [t_mid]₁, [t_hi]₁ │
  └─────────────────────────────────────────────────┘

세 제약식을 각각 Z_H(x)로 정확히 나누어 더한다.

  (1) 게이트:  a·b·q_m + a·q_l + b·q_r + c·q_o + q_c + pi
  (2) 순열:    α·[ z(x)·(a + βx + γ)(b + βk1x + γ)(c + βk2x + γ)
                   - z(ωx)·(a + βS_σ1 + γ)(b + βS_σ2 + γ)(c + βS_σ3 + γ) ]
  (3) 경계:    α²·(z(x) - 1)·L₁(x)

  t(x) = (1)/Z_H + (2)/Z_H + (3)/Z_H

어느 하나라도 나누어 떨어지지 않으면 witness가 회로를 만족하지 않는
것이므로 ConstraintViolation을 던진다.

**분할**:
  d = n + 1,  t = t_lo + x^{d+1}·t_mid + x^{2d+2}·t_hi
"""

import logging

from plonk_kzg.polynomial import Polynomial
from plonk_kzg.slicing import SlicedPolynomial

logger = logging.getLogger(__name__)


def gate_line(state):
    gc = state.compiled.gate_constraints
    return gc.gate_polynomial(state.a_poly, state.b_poly, state.c_poly)


def permutation_line(state):
    compiled = state.compiled
    cc = compiled.copy_constraints
    beta, gamma = state.beta, state.gamma
    x = Polynomial.x()

    identity = ((state.a_poly + x * beta + gamma)
                * (state.b_poly + x * (beta * cc.k1) + gamma)
                * (state.c_poly + x * (beta * cc.k2) + gamma)
                * state.z_poly)
    permuted = ((state.a_poly + cc.s_sigma_1 * beta + gamma)
                * (state.b_poly + cc.s_sigma_2 * beta + gamma)
                * (state.c_poly + cc.s_sigma_3 * beta + gamma)
                * state.z_poly.shift(state.omega))
    return (identity - permuted) * state.alpha


def boundary_line(state):
    l1 = state.domain.lagrange_first()
    return (state.z_poly - 1) * l1 * (state.alpha * state.alpha)


def execute(state):
    """Round 3을 실행한다."""
    state.alpha = state.transcript.generate_challenge()
    zh = state.domain.vanishing_polynomial()

    t = Polynomial.zero()
    for name, line in (("gate", gate_line), ("permutation", permutation_line),
                       ("boundary", boundary_line)):
        t = t + line(state).divide_exact(zh, context=name)

    state.quotient = SlicedPolynomial.for_domain(t, state.n)
    proof = state.proof
    proof.degree = state.quotient.degree
    proof.t_lo_comm, proof.t_mid_comm, proof.t_hi_comm = state.quotient.commit(state.scheme)

    state.transcript.feed(proof.t_lo_comm)
    state.transcript.feed(proof.t_mid_comm)
    state.transcript.feed(proof.t_hi_comm)
    logger.debug("Round 3 완료: 몫 차수 %d, 분할 차수 %d", t.degree, proof.degree)
