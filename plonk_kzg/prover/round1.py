"""
PLONK Prover Round 1: 배선(Witness) 다항식 커밋먼트
=====================================================

  ┌─────────────────────────────────────────────────┐
  │  Prover → Verifier: [a]₁, [b]₁, [c]₁          │
  └─────────────────────────────────────────────────┘

**과정**:
  1. 컴파일 시 보간된 a(x), b(x), c(x)를 가져온다.
  2. 블라인딩(blinding):
       a'(x) = a(x) + (b₁·x + b₂)·Z_H(x)
       b'(x) = b(x) + (b₃·x + b₄)·Z_H(x)
       c'(x) = c(x) + (b₅·x + b₆)·Z_H(x)
     도메인 위에서는 Z_H(ωⁱ) = 0이므로 값이 변하지 않는다.
  3. KZG 커밋 후 트랜스크립트에 [a], [b], [c] 순서로 feed.

사용:
    이 모듈은 직접 호출하지 않고, prover.prove()를 통해 실행된다.
"""

import logging

from plonk_kzg.polynomial import Polynomial

logger = logging.getLogger(__name__)


def blind(poly, blinders, n):
    """poly(x) + (b_k·x^k + ... + b_0)·Z_H(x).

    Args:
        blinders: [b_high, ..., b_low] 최고차 계수부터
    """
    mask = Polynomial(list(reversed(blinders)))
    return poly + mask.mul_by_vanishing(n)


def execute(state):
    """Round 1을 실행한다."""
    n = state.n
    gc = state.compiled.gate_constraints
    b = state.random_scalars(6)

    state.a_poly = blind(gc.a, b[0:2], n)
    state.b_poly = blind(gc.b, b[2:4], n)
    state.c_poly = blind(gc.c, b[4:6], n)

    proof = state.proof
    proof.a_comm = state.scheme.commit(state.a_poly)
    proof.b_comm = state.scheme.commit(state.b_poly)
    proof.c_comm = state.scheme.commit(state.c_poly)

    state.transcript.feed(proof.a_comm)
    state.transcript.feed(proof.b_comm)
    state.transcript.feed(proof.c_comm)
    logger.debug("Round 1 완료: 배선 다항식 차수 %d", state.a_poly.degree)
