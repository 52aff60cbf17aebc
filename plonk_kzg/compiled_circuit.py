"""
컴파일된 회로 (Compiled Circuit)
=================================

Circuit.compile()의 결과. Prover와 Verifier가 공유하는 공개 파라미터를 담는다.

**전처리 커밋먼트 (PreprocessedData)**:
  회로 구조가 정해지면 셀렉터/순열 다항식을 한 번만 커밋한다.
    [q_l], [q_r], [q_m], [q_o], [q_c], [S_σ1], [S_σ2], [S_σ3]
  Verifier는 이 커밋먼트만으로 [D]₁를 조립한다. 처음 접근할 때 계산해
  캐시한다.

**Prover vs Verifier 사용**:
  - Prover: 다항식 원본과 witness 값
  - Verifier: 커밋먼트, k1, k2, 공개 입력, 도메인
"""

from plonk_kzg.kzg import KZGScheme
from plonk_kzg.prover import prove
from plonk_kzg.verifier import verify


class PreprocessedData:
    """회로 고정 다항식의 커밋먼트 묶음."""

    def __init__(self, q_l, q_r, q_m, q_o, q_c, s_sigma_1, s_sigma_2, s_sigma_3):
        self.q_l = q_l
        self.q_r = q_r
        self.q_m = q_m
        self.q_o = q_o
        self.q_c = q_c
        self.s_sigma_1 = s_sigma_1
        self.s_sigma_2 = s_sigma_2
        self.s_sigma_3 = s_sigma_3

    @classmethod
    def commit(cls, gate_constraints, copy_constraints, scheme):
        return cls(
            q_l=scheme.commit(gate_constraints.q_l),
            q_r=scheme.commit(gate_constraints.q_r),
            q_m=scheme.commit(gate_constraints.q_m),
            q_o=scheme.commit(gate_constraints.q_o),
            q_c=scheme.commit(gate_constraints.q_c),
            s_sigma_1=scheme.commit(copy_constraints.s_sigma_1),
            s_sigma_2=scheme.commit(copy_constraints.s_sigma_2),
            s_sigma_3=scheme.commit(copy_constraints.s_sigma_3),
        )


class CompiledCircuit:
    """컴파일된 회로.

    속성:
        gate_constraints: GateConstraints (9개 다항식)
        copy_constraints: CopyConstraints (S_σ1..3, k1, k2)
        domain: EvaluationDomain
        srs: SRS
        witness: 패딩된 (a_vals, b_vals, c_vals)
        public_inputs: 행별 PI 값 (-public_input)
    """

    def __init__(self, gate_constraints, copy_constraints, domain, srs, witness, public_inputs):
        self.gate_constraints = gate_constraints
        self.copy_constraints = copy_constraints
        self.domain = domain
        self.srs = srs
        self.witness = witness
        self.public_inputs = public_inputs
        self.scheme = KZGScheme(srs)
        self._preprocessed = None
        self._sigma_evals = None

    @staticmethod
    def required_degree(size):
        """증명에 필요한 최소 SRS 차수. 블라인딩된 z(x)의 차수 n + 2."""
        return size + 2

    @property
    def size(self):
        return self.domain.size

    @property
    def omega(self):
        return self.domain.omega

    @property
    def k1(self):
        return self.copy_constraints.k1

    @property
    def k2(self):
        return self.copy_constraints.k2

    @property
    def preprocessed(self):
        if self._preprocessed is None:
            self._preprocessed = PreprocessedData.commit(
                self.gate_constraints, self.copy_constraints, self.scheme
            )
        return self._preprocessed

    @property
    def sigma_evals(self):
        """S_σ1..3의 도메인 위 값 (누적자 계산용)."""
        if self._sigma_evals is None:
            self._sigma_evals = tuple(self.domain.evaluate(s) for s in self.copy_constraints.sigmas)
        return self._sigma_evals

    def prove(self, transcript=None, rng=None):
        return prove(self, transcript=transcript, rng=rng)

    def verify(self, proof, transcript=None):
        return verify(proof, self, transcript=transcript)

    def __repr__(self):
        return f"CompiledCircuit(size={self.size}, srs_degree={self.srs.max_degree})"
