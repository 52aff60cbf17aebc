"""
평가 도메인 (Evaluation Domain)
================================

곱셈 부분군 H = {1, ω, ω², ..., ω^(n-1)} (n은 2의 거듭제곱).

회로의 각 행(row) i는 점 ωⁱ에 대응한다. 배선 값, 셀렉터,
순열은 모두 이 도메인 위의 평가값으로 주어지고 IFFT로 보간된다.

Verifier 쪽 닫힌 형태(closed form) 평가:
  Z_H(ζ) = ζⁿ - 1
  L₁(ζ)  = Z_H(ζ) / (n·(ζ - 1))        (ω⁰ = 1 에서 1, 나머지 점에서 0)
  Lᵢ(ζ)  = ωⁱ·Z_H(ζ) / (n·(ζ - ωⁱ))
"""

from plonk_kzg.field import FR, get_root_of_unity, to_fr
from plonk_kzg.polynomial import Polynomial, fft, ifft


def next_power_of_2(n):
    """n 이상인 가장 작은 2의 거듭제곱."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


class EvaluationDomain:
    """크기 n의 단위근 도메인.

    속성:
        size: 도메인 크기 n
        omega: n차 원시 단위근
        elements: [1, ω, ..., ω^(n-1)]
    """

    def __init__(self, size):
        if size < 1 or (size & (size - 1)) != 0:
            raise ValueError(f"도메인 크기는 2의 거듭제곱이어야 합니다: {size}")
        self.size = size
        self.omega = get_root_of_unity(size)
        elements = []
        current = FR(1)
        for _ in range(size):
            elements.append(current)
            current = current * self.omega
        self.elements = elements
        self.size_inv = FR(1) / FR(size)

    def __len__(self):
        return self.size

    def __getitem__(self, i):
        return self.elements[i]

    def __iter__(self):
        return iter(self.elements)

    def __repr__(self):
        return f"EvaluationDomain(size={self.size})"

    def interpolate(self, evals):
        """도메인 위 평가값 → 다항식 (IFFT)."""
        if len(evals) != self.size:
            raise ValueError(f"평가값 개수 {len(evals)} ≠ 도메인 크기 {self.size}")
        return Polynomial(ifft([to_fr(v) for v in evals], self.omega))

    def evaluate(self, poly):
        """다항식 → 도메인 위 평가값 (FFT). 차수 < n 이어야 한다."""
        coeffs = list(poly.coeffs)
        if len(coeffs) > self.size:
            raise ValueError(f"차수 {poly.degree}인 다항식은 크기 {self.size} 도메인에서 FFT할 수 없습니다")
        coeffs += [FR(0)] * (self.size - len(coeffs))
        return fft(coeffs, self.omega)

    def vanishing_polynomial(self):
        """Z_H(x) = xⁿ - 1."""
        return Polynomial.vanishing(self.size)

    def evaluate_vanishing(self, point):
        """Z_H(ζ) = ζⁿ - 1."""
        return to_fr(point) ** self.size - FR(1)

    def lagrange_first(self):
        """L₁(x): ω⁰에서 1, 나머지 도메인 점에서 0인 다항식."""
        evals = [FR(0)] * self.size
        evals[0] = FR(1)
        return self.interpolate(evals)

    def evaluate_lagrange(self, i, point):
        """Lᵢ(ζ)를 닫힌 형태로 계산한다 (ζ ∉ H 가정, ζ ∈ H면 δ로 처리)."""
        point = to_fr(point)
        omega_i = self.elements[i]
        if point == omega_i:
            return FR(1)
        zh = self.evaluate_vanishing(point)
        if zh == 0:
            return FR(0)
        return omega_i * zh * self.size_inv / (point - omega_i)

    def evaluate_lagrange_first(self, point):
        """L₁(ζ) = (ζⁿ - 1) / (n·(ζ - 1))."""
        return self.evaluate_lagrange(0, point)

    def evaluate_public_input(self, pi_values, point):
        """PI(ζ) = Σ piᵢ·Lᵢ(ζ) (0이 아닌 항만 계산)."""
        total = FR(0)
        for i, value in enumerate(pi_values):
            if value == 0:
                continue
            total = total + value * self.evaluate_lagrange(i, point)
        return total
