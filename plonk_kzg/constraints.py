"""
게이트 제약 / 복사 제약 (Gate & Copy Constraints)
==================================================

**GateConstraints**:
  패딩된 게이트 리스트의 각 열을 도메인 위에서 보간한 9개 다항식.
    a(x), b(x), c(x)                     배선 값 (witness)
    q_l(x), q_r(x), q_m(x), q_o(x), q_c(x)  셀렉터
    pi(x)                                공개 입력 (-public_input)

**CopyConstraints (순열 σ)**:
  3n개 배선 위치를 서로 다른 3개의 코셋에 매핑한다.
    a열 i행 → ωⁱ,  b열 i행 → k1·ωⁱ,  c열 i행 → k2·ωⁱ
  S_σj(ωⁱ) = (j열 i행 배선이 가리키는 위치의 라벨)

  k1, k2는 H, k1·H, k2·H가 서로소(disjoint)가 되도록 고른다:
    k1: Z_H(k1) ≠ 0           (k1 ∉ H)
    k2: Z_H(k2) ≠ 0 이고 Z_H(k2/k1) ≠ 0   (k2 ∉ H, k2 ∉ k1·H)
"""

import logging

from plonk_kzg.errors import CircuitError
from plonk_kzg.field import FR
from plonk_kzg.gate import NUM_COLUMNS

logger = logging.getLogger(__name__)


class GateConstraints:
    """9개 회로 다항식 묶음."""

    def __init__(self, a, b, c, q_l, q_r, q_m, q_o, q_c, pi):
        self.a = a
        self.b = b
        self.c = c
        self.q_l = q_l
        self.q_r = q_r
        self.q_m = q_m
        self.q_o = q_o
        self.q_c = q_c
        self.pi = pi

    @classmethod
    def from_gates(cls, gates, witness, domain):
        """게이트 리스트 + witness 열 → 보간된 다항식들."""
        a_vals, b_vals, c_vals = witness
        return cls(
            a=domain.interpolate(a_vals),
            b=domain.interpolate(b_vals),
            c=domain.interpolate(c_vals),
            q_l=domain.interpolate([g.q_l for g in gates]),
            q_r=domain.interpolate([g.q_r for g in gates]),
            q_m=domain.interpolate([g.q_m for g in gates]),
            q_o=domain.interpolate([g.q_o for g in gates]),
            q_c=domain.interpolate([g.q_c for g in gates]),
            pi=domain.interpolate([g.pi for g in gates]),
        )

    def gate_polynomial(self, a, b, c):
        """q_m·a·b + q_l·a + q_r·b + q_o·c + q_c + pi."""
        return (self.q_m * a * b + self.q_l * a + self.q_r * b
                + self.q_o * c + self.q_c + self.pi)


class CopyConstraints:
    """순열 다항식 S_σ1..3 과 코셋 상수 k1, k2."""

    def __init__(self, s_sigma_1, s_sigma_2, s_sigma_3, k1, k2):
        self.s_sigma_1 = s_sigma_1
        self.s_sigma_2 = s_sigma_2
        self.s_sigma_3 = s_sigma_3
        self.k1 = k1
        self.k2 = k2

    @property
    def sigmas(self):
        return (self.s_sigma_1, self.s_sigma_2, self.s_sigma_3)

    @classmethod
    def from_gates(cls, gates, domain):
        k1, k2 = find_coset_generators(domain)
        labels = sigma_evaluations(gates, domain, k1, k2)
        return cls(
            s_sigma_1=domain.interpolate(labels[0]),
            s_sigma_2=domain.interpolate(labels[1]),
            s_sigma_3=domain.interpolate(labels[2]),
            k1=k1,
            k2=k2,
        )


def find_coset_generators(domain):
    """k1, k2를 2, 3, 4, ... 순서로 탐색한다.

    bn128 스칼라 필드에서는 항상 (2, 3)이 선택되지만,
    작은 정수가 H에 속하는 필드도 있으므로 일반적으로 탐색한다.
    """
    candidate = 2
    while domain.evaluate_vanishing(FR(candidate)) == 0:
        candidate += 1
    k1 = FR(candidate)

    candidate += 1
    while True:
        k2 = FR(candidate)
        if (domain.evaluate_vanishing(k2) != 0
                and domain.evaluate_vanishing(k2 / k1) != 0):
            break
        candidate += 1

    logger.debug("코셋 생성자 선택: k1=%d, k2=%d", int(k1), int(k2))
    return k1, k2


def position_label(column, row, domain, k1, k2):
    """배선 위치 (column, row) → 필드 라벨 {ωⁱ, k1·ωⁱ, k2·ωⁱ}."""
    base = domain[row]
    if column == 0:
        return base
    if column == 1:
        return k1 * base
    return k2 * base


def validate_wiring(gates, size):
    """모든 배선이 도메인 안을 가리키고, σ가 전단사(bijection)인지 확인한다.

    Raises:
        CircuitError: 범위 밖 배선 또는 같은 위치를 두 번 가리키는 배선
    """
    seen = {}
    for row, gate in enumerate(gates):
        for column, wire in enumerate(gate.wires):
            target = (wire.column, wire.row)
            if not (0 <= wire.column < NUM_COLUMNS):
                raise CircuitError(f"게이트 {row}의 배선 {column}: 잘못된 열 {wire.column}")
            if not (0 <= wire.row < size):
                raise CircuitError(
                    f"게이트 {row}의 배선 {column}: 행 {wire.row}이 도메인 크기 {size}를 벗어납니다"
                )
            if target in seen:
                raise CircuitError(
                    f"배선 {target}을 두 위치 {seen[target]}, {(column, row)}가 가리킵니다 "
                    "(순열이 아닙니다)"
                )
            seen[target] = (column, row)


def sigma_evaluations(gates, domain, k1, k2):
    """S_σ1..3의 도메인 위 평가값 3열을 만든다."""
    validate_wiring(gates, domain.size)
    columns = [[], [], []]
    for gate in gates:
        for column, wire in enumerate(gate.wires):
            columns[column].append(position_label(wire.column, wire.row, domain, k1, k2))
    return columns
