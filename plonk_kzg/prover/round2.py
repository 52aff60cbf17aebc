"""
PLONK Prover Round 2: 순열 누적자 z(x) 커밋먼트
=================================================

  ┌─────────────────────────────────────────────────┐
  │  Verifier → Prover: β, γ                       │
  │  Prover → Verifier: [z]₁                       │
  └─────────────────────────────────────────────────┘

**순열 누적자 z(x)**:
  z(ω⁰) = 1
  z(ω^{i+1}) = z(ωⁱ) · ∏(wᵢ + β·idᵢ + γ) / ∏(wᵢ + β·σᵢ + γ)

  n+1개 값을 계산하고 마지막 값 z_n이 1인지 확인한다 (순환이 닫힘).
  처음 n개 값만 보간한다.

**블라인딩**:
  z'(x) = z(x) + (b₇·x² + b₈·x + b₉)·Z_H(x)
  z는 ζ와 ζω 두 점에서 열리므로 3개의 블라인딩 계수를 쓴다.
"""

import logging

from plonk_kzg.errors import ConstraintViolation
from plonk_kzg.permutation import compute_accumulator
from plonk_kzg.prover.round1 import blind

logger = logging.getLogger(__name__)


def _check_closure(values):
    """z_n == 1 인지 확인한다."""
    if values[-1] != 1:
        raise ConstraintViolation(
            "순열 누적자가 1로 닫히지 않습니다 (복사 제약 위반)", context="permutation"
        )


def execute(state):
    """Round 2를 실행한다."""
    compiled = state.compiled
    state.beta, state.gamma = state.transcript.generate_challenges(2)

    z_values = compute_accumulator(
        compiled.witness, compiled.sigma_evals, state.domain,
        compiled.k1, compiled.k2, state.beta, state.gamma,
    )
    _check_closure(z_values)

    z_poly = state.domain.interpolate(z_values[:state.n])
    state.z_poly = blind(z_poly, state.random_scalars(3), state.n)

    state.proof.z_comm = state.scheme.commit(state.z_poly)
    state.transcript.feed(state.proof.z_comm)
    logger.debug("Round 2 완료: 누적자 차수 %d", state.z_poly.degree)
