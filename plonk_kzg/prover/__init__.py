"""
PLONK Prover: 5-라운드 프로토콜 오케스트레이터
=================================================

  ┌─────────────────────────────────────────────────────┐
  │  Round 1: 배선(witness) 다항식 커밋                  │
  │  Prover → Verifier: [a]₁, [b]₁, [c]₁              │
  ├─────────────────────────────────────────────────────┤
  │  Round 2: 순열 누적자 z(x) 커밋                     │
  │  Verifier → Prover: β, γ                           │
  │  Prover → Verifier: [z]₁                           │
  ├─────────────────────────────────────────────────────┤
  │  Round 3: 몫 다항식 t(x) 커밋                       │
  │  Verifier → Prover: α                              │
  │  Prover → Verifier: [t_lo]₁, [t_mid]₁, [t_hi]₁    │
  ├─────────────────────────────────────────────────────┤
  │  Round 4: 다항식 평가값 산출                         │
  │  Verifier → Prover: ζ                              │
  │  Prover → Verifier: ā, b̄, c̄, s̄_σ1, s̄_σ2, z̄_ω    │
  ├─────────────────────────────────────────────────────┤
  │  Round 5: 선형화 + KZG 열기 증명                     │
  │  Verifier → Prover: v                              │
  │  Prover → Verifier: [W_ζ]₁, [W_ζω]₁  (→ u)        │
  └─────────────────────────────────────────────────────┘

Verifier 챌린지는 모두 Fiat-Shamir 트랜스크립트에서 뽑는다.
어느 라운드에서든 제약 위반이 발견되면 즉시 예외를 던지며,
부분적으로 채워진 증명은 반환하지 않는다.

사용 예시:
    >>> from plonk_kzg.prover import prove
    >>> proof = prove(compiled)
"""

import logging
import secrets

from plonk_kzg.field import FR, CURVE_ORDER
from plonk_kzg.transcript import Transcript
from plonk_kzg.prover import round1, round2, round3, round4, round5

logger = logging.getLogger(__name__)


class Proof:
    """PLONK 증명 데이터 컨테이너.

    Round 1: a_comm, b_comm, c_comm
    Round 2: z_comm
    Round 3: t_lo_comm, t_mid_comm, t_hi_comm
    Round 4: a_eval, b_eval, c_eval, s_sigma1_eval, s_sigma2_eval, z_omega_eval
    Round 5: w_zeta_comm, w_zeta_omega_comm, u

    degree는 몫 분할 차수 d (= n + 1)이다.
    """

    COMMITMENT_FIELDS = (
        "a_comm", "b_comm", "c_comm", "z_comm",
        "t_lo_comm", "t_mid_comm", "t_hi_comm",
        "w_zeta_comm", "w_zeta_omega_comm",
    )
    EVALUATION_FIELDS = (
        "a_eval", "b_eval", "c_eval",
        "s_sigma1_eval", "s_sigma2_eval", "z_omega_eval",
    )

    def __init__(self):
        # Round 1
        self.a_comm = None
        self.b_comm = None
        self.c_comm = None
        # Round 2
        self.z_comm = None
        # Round 3
        self.t_lo_comm = None
        self.t_mid_comm = None
        self.t_hi_comm = None
        self.degree = None
        # Round 4
        self.a_eval = None
        self.b_eval = None
        self.c_eval = None
        self.s_sigma1_eval = None
        self.s_sigma2_eval = None
        self.z_omega_eval = None
        # Round 5
        self.w_zeta_comm = None
        self.w_zeta_omega_comm = None
        self.u = None

    def commitments(self):
        return {name: getattr(self, name) for name in self.COMMITMENT_FIELDS}

    def evaluations(self):
        return {name: getattr(self, name) for name in self.EVALUATION_FIELDS}

    def __repr__(self):
        return f"Proof(degree={self.degree})"


class ProverState:
    """라운드 간 공유되는 Prover 상태.

    속성 (입력):
        compiled: CompiledCircuit
        transcript: Fiat-Shamir 트랜스크립트 (이 증명 전용)
        rng: randrange(r)를 제공하는 난수 생성기 (블라인딩)

    속성 (라운드 간 생성):
        a_poly, b_poly, c_poly: 블라인딩된 배선 다항식 (Round 1)
        z_poly: 블라인딩된 순열 누적자 (Round 2)
        quotient: SlicedPolynomial (Round 3)
        beta, gamma, alpha, zeta, v, u: 챌린지
    """

    def __init__(self, compiled, transcript, rng):
        self.compiled = compiled
        self.transcript = transcript
        self.rng = rng
        self.scheme = compiled.scheme

        self.n = compiled.size
        self.omega = compiled.omega
        self.domain = compiled.domain

        self.a_poly = None
        self.b_poly = None
        self.c_poly = None
        self.z_poly = None
        self.quotient = None

        self.beta = None
        self.gamma = None
        self.alpha = None
        self.zeta = None
        self.v = None
        self.u = None

        self.proof = Proof()

    def random_scalar(self):
        return FR(self.rng.randrange(CURVE_ORDER))

    def random_scalars(self, count):
        return [self.random_scalar() for _ in range(count)]


def prove(compiled, transcript=None, rng=None):
    """5-라운드 프로토콜을 실행하여 증명을 생성한다.

    Args:
        compiled: CompiledCircuit
        transcript: 새 Transcript (None이면 기본 설정으로 생성)
        rng: 블라인딩 난수원 (None이면 secrets.SystemRandom)

    Returns:
        Proof

    Raises:
        ConstraintViolation: witness가 게이트/복사 제약을 만족하지 않을 때
        DegreeOverflow: 몫 다항식이 분할 한계를 넘을 때
    """
    if transcript is None:
        transcript = Transcript()
    if rng is None:
        rng = secrets.SystemRandom()
    state = ProverState(compiled, transcript, rng)

    round1.execute(state)
    round2.execute(state)
    round3.execute(state)
    round4.execute(state)
    round5.execute(state)

    logger.info("증명 생성 완료 (n=%d)", state.n)
    return state.proof
