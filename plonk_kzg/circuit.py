"""
PLONK 회로 빌더 (Circuit Builder)
==================================

게이트를 하나씩 추가하면서 배선 값(witness)과 순열 σ를 함께 기록한다.

각 게이트 인자 a, b, c는 (column, row, value) 튜플:
  - value: 이 위치의 배선 값
  - (column, row): 순열 σ가 이 위치를 보내는 대상 위치
    (같은 값을 공유하는 위치들이 하나의 순환(cycle)을 이루도록 지정)

**예제 회로**: x·y·z = 6 (x=1, y=2, z=3)
  | 게이트 | 유형  | a          | b          | c          |
  |--------|-------|------------|------------|------------|
  | 0      | mul   | (0,0,1)    | (1,0,2)    | (0,1,2)    |
  | 1      | mul   | (2,0,2)    | (1,1,3)    | (0,2,6)    |
  | 2      | const | (2,1,6)    | (1,2,0)    | (2,2,0)    |

  게이트0.c(=2)와 게이트1.a(=2)는 서로를 가리켜 순환 {c0, a1}을 이룬다.

사용 예시:
    >>> circuit = Circuit()
    >>> circuit.add_multiplication_gate((0, 0, 1), (1, 0, 2), (0, 1, 2))
    >>> ...
    >>> compiled = circuit.compile()
    >>> proof = compiled.prove()
    >>> compiled.verify(proof)
"""

import logging

from plonk_kzg.compiled_circuit import CompiledCircuit
from plonk_kzg.config import get_config
from plonk_kzg.constraints import CopyConstraints, GateConstraints
from plonk_kzg.domain import EvaluationDomain, next_power_of_2
from plonk_kzg.errors import CircuitError
from plonk_kzg.field import FR, to_fr
from plonk_kzg.gate import Gate, Wire
from plonk_kzg.srs import SRS

logger = logging.getLogger(__name__)


def _split_wire(spec, name):
    try:
        column, row, value = spec
    except (TypeError, ValueError):
        raise CircuitError(f"{name}는 (column, row, value) 튜플이어야 합니다: {spec!r}") from None
    return Wire(column, row), to_fr(value)


class Circuit:
    """PLONK 산술 회로 빌더.

    속성:
        gates: 추가된 Gate 리스트 (패딩 전)
        a_vals, b_vals, c_vals: 각 게이트의 배선 값
    """

    def __init__(self):
        self.gates = []
        self.a_vals = []
        self.b_vals = []
        self.c_vals = []
        self._compiled = False

    def __len__(self):
        return len(self.gates)

    @property
    def is_compiled(self):
        return self._compiled

    def _append(self, gate, a_val, b_val, c_val):
        if self._compiled:
            raise CircuitError("컴파일된 회로에는 게이트를 추가할 수 없습니다")
        self.gates.append(gate)
        self.a_vals.append(a_val)
        self.b_vals.append(b_val)
        self.c_vals.append(c_val)
        return len(self.gates) - 1

    def add_addition_gate(self, a, b, c, public_input=0):
        """덧셈 게이트: a + b = c (+ public_input)."""
        a_wire, a_val = _split_wire(a, "a")
        b_wire, b_val = _split_wire(b, "b")
        c_wire, c_val = _split_wire(c, "c")
        return self._append(Gate.addition(a_wire, b_wire, c_wire, public_input),
                            a_val, b_val, c_val)

    def add_multiplication_gate(self, a, b, c, public_input=0):
        """곱셈 게이트: a · b = c (+ public_input)."""
        a_wire, a_val = _split_wire(a, "a")
        b_wire, b_val = _split_wire(b, "b")
        c_wire, c_val = _split_wire(c, "c")
        return self._append(Gate.multiplication(a_wire, b_wire, c_wire, public_input),
                            a_val, b_val, c_val)

    def add_constant_gate(self, a, b, c, constant, public_input=0):
        """상수 게이트: a = constant. b, c 값은 제약되지 않는다."""
        a_wire, a_val = _split_wire(a, "a")
        b_wire, b_val = _split_wire(b, "b")
        c_wire, c_val = _split_wire(c, "c")
        return self._append(Gate.constant(a_wire, b_wire, c_wire, constant, public_input),
                            a_val, b_val, c_val)

    def add_dummy_gate(self):
        """셀렉터가 모두 0이고 배선이 자기 자신을 가리키는 게이트."""
        row = len(self.gates)
        return self._append(Gate.dummy(row), FR(0), FR(0), FR(0))

    def unsatisfied_gates(self):
        """게이트 방정식을 만족하지 않는 행 번호 목록 (디버깅용)."""
        return [i for i, gate in enumerate(self.gates)
                if not gate.check(self.a_vals[i], self.b_vals[i], self.c_vals[i])]

    def _padded(self):
        """2의 거듭제곱 길이로 패딩한 복사본 (원본은 그대로)."""
        size = next_power_of_2(len(self.gates))
        gates = list(self.gates)
        a_vals, b_vals, c_vals = list(self.a_vals), list(self.b_vals), list(self.c_vals)
        for row in range(len(gates), size):
            gates.append(Gate.dummy(row))
            a_vals.append(FR(0))
            b_vals.append(FR(0))
            c_vals.append(FR(0))
        return gates, (a_vals, b_vals, c_vals)

    def _build(self):
        if not self.gates:
            raise CircuitError("게이트가 없는 회로는 컴파일할 수 없습니다")
        gates, witness = self._padded()
        domain = EvaluationDomain(len(gates))
        copy_constraints = CopyConstraints.from_gates(gates, domain)
        gate_constraints = GateConstraints.from_gates(gates, witness, domain)
        return gates, witness, domain, gate_constraints, copy_constraints

    def compile_constraints(self):
        """게이트/복사 제약 다항식을 만든다.

        Returns:
            tuple: (GateConstraints, CopyConstraints, domain_size)

        Raises:
            CircuitError: 빈 회로, 잘못된 배선, 순열이 아닌 σ
        """
        _, _, domain, gate_constraints, copy_constraints = self._build()
        return gate_constraints, copy_constraints, domain.size

    def compile(self, srs=None):
        """회로를 컴파일한다. 이후 게이트 추가는 CircuitError.

        Args:
            srs: 사용할 SRS. None이면 n + srs_degree_margin 차수로 새로 생성한다.

        Raises:
            CircuitError: compile_constraints()와 같음
            DegreeOverflow: 주어진 SRS가 n + 2 차수를 지원하지 못할 때
        """
        gates, witness, domain, gate_constraints, copy_constraints = self._build()
        if srs is None:
            srs = SRS.generate(domain.size + get_config().srs_degree_margin)
        else:
            srs.ensure_degree(CompiledCircuit.required_degree(domain.size))
        self._compiled = True
        logger.info("회로 컴파일 완료: 게이트 %d개 → 도메인 %d", len(self.gates), domain.size)
        return CompiledCircuit(
            gate_constraints=gate_constraints,
            copy_constraints=copy_constraints,
            domain=domain,
            srs=srs,
            witness=witness,
            public_inputs=[g.pi for g in gates],
        )
