"""
PLONK 기반 모듈: 다항식(Polynomial) 클래스 및 FFT
===================================================

**Polynomial 클래스**:
  계수(coefficient) 표현 기반 다항식. p(x) = c₀ + c₁·x + c₂·x² + ...
  산술 연산자(+, -, *, 스칼라곱)와 평가(evaluation)를 지원한다.

**FFT/IFFT (Number Theoretic Transform)**:
  유한체 위의 다항식을 평가 표현 ↔ 계수 표현으로 변환.
  재귀적 Cooley-Tukey radix-2 알고리즘을 사용한다.

**정확한 나눗셈 (divide_exact)**:
  Round 3의 t(x) = C(x) / Z_H(x), Round 5의 W(x) = (…) / (x - ζ)는
  나머지가 0이어야 한다. 나머지가 남으면 witness가 제약을 만족하지
  않는다는 뜻이므로 ConstraintViolation을 던진다.

사용 예시:
    >>> from plonk_kzg.polynomial import Polynomial, fft, ifft
    >>> p = Polynomial([FR(1), FR(2), FR(3)])  # 1 + 2x + 3x²
    >>> p.evaluate(FR(2))  # 1 + 4 + 12 = FR(17)
"""

from plonk_kzg.errors import ConstraintViolation
from plonk_kzg.field import FR, to_fr


# ─────────────────────────────────────────────────────────────────────
# Polynomial 클래스
# ─────────────────────────────────────────────────────────────────────

class Polynomial:
    """유한체 FR 위의 다항식.

    계수 리스트로 표현: coeffs = [c₀, c₁, c₂, ...] → c₀ + c₁x + c₂x² + ...
    최고차 0 계수는 항상 제거된다. 영 다항식은 [0]이며 차수는 0이다.

    예시:
        >>> p = Polynomial([FR(1), FR(2)])  # 1 + 2x
        >>> q = Polynomial([FR(3), FR(4)])  # 3 + 4x
        >>> p * q                            # 3 + 10x + 8x²
    """

    def __init__(self, coeffs=None):
        if coeffs is None:
            self.coeffs = [FR(0)]
        else:
            self.coeffs = [c if isinstance(c, FR) else FR(c) for c in coeffs]
            if not self.coeffs:
                self.coeffs = [FR(0)]
        self._trim()

    def _trim(self):
        """최고차 계수가 0인 항을 제거한다. 예: [1, 2, 0, 0] → [1, 2]"""
        while len(self.coeffs) > 1 and self.coeffs[-1] == 0:
            self.coeffs.pop()

    @property
    def degree(self):
        """다항식의 차수. 영 다항식의 차수는 0으로 정의한다."""
        return len(self.coeffs) - 1

    def is_zero(self):
        return len(self.coeffs) == 1 and self.coeffs[0] == 0

    def evaluate(self, point):
        """Horner's method로 p(point)를 계산한다."""
        if not isinstance(point, FR):
            point = FR(point)
        result = FR(0)
        for coeff in reversed(self.coeffs):
            result = result * point + coeff
        return result

    def __add__(self, other):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        max_len = max(len(self.coeffs), len(other.coeffs))
        result = []
        for i in range(max_len):
            a = self.coeffs[i] if i < len(self.coeffs) else FR(0)
            b = other.coeffs[i] if i < len(other.coeffs) else FR(0)
            result.append(a + b)
        return Polynomial(result)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        return self + (-other)

    def __rsub__(self, other):
        return (-self) + other

    def __neg__(self):
        return Polynomial([-c for c in self.coeffs])

    def __mul__(self, other):
        """다항식 × 다항식 (O(n²) 나이브 곱셈) 또는 스칼라곱."""
        if isinstance(other, (int, FR)):
            other = FR(other) if isinstance(other, int) else other
            return Polynomial([c * other for c in self.coeffs])
        if self.is_zero() or other.is_zero():
            return Polynomial.zero()
        result = [FR(0)] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            if a == 0:
                continue
            for j, b in enumerate(other.coeffs):
                result[i + j] = result[i + j] + a * b
        return Polynomial(result)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __eq__(self, other):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.coeffs == other.coeffs

    def __hash__(self):
        return hash(tuple(int(c) for c in self.coeffs))

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coeffs):
            if c == 0:
                continue
            if i == 0:
                terms.append(str(int(c)))
            elif i == 1:
                terms.append(f"{int(c)}*x")
            else:
                terms.append(f"{int(c)}*x^{i}")
        return "Poly(" + " + ".join(terms) + ")" if terms else "Poly(0)"

    def __len__(self):
        """계수 개수 반환 (차수 + 1)."""
        return len(self.coeffs)

    def shift(self, factor):
        """입력을 스케일한 다항식 p(factor·x)를 반환한다.

        Round 2/3에서 z(ωx)를 만들 때 사용: 계수 cᵢ → cᵢ·ωⁱ.
        """
        factor = factor if isinstance(factor, FR) else FR(factor)
        result = []
        power = FR(1)
        for c in self.coeffs:
            result.append(c * power)
            power = power * factor
        return Polynomial(result)

    def mul_by_vanishing(self, n):
        """p(x)·(x^n - 1)을 계수 이동으로 계산한다."""
        if self.is_zero():
            return Polynomial.zero()
        shifted = [FR(0)] * n + list(self.coeffs)
        return Polynomial(shifted) - self

    def divide_exact(self, divisor, context=None):
        """나머지 없이 나누어 떨어지는 나눗셈.

        Args:
            divisor: 제수 다항식
            context: 오류 메시지에 표시할 제약식 이름

        Returns:
            Polynomial: 몫

        Raises:
            ConstraintViolation: 나머지가 0이 아닐 때
        """
        quotient, remainder = poly_div(self, divisor)
        if not remainder.is_zero():
            label = f" ({context})" if context else ""
            raise ConstraintViolation(
                f"나누어 떨어지지 않습니다{label}: 제약이 만족되지 않습니다",
                context=context,
            )
        return quotient

    @classmethod
    def zero(cls):
        return cls([FR(0)])

    @classmethod
    def x(cls):
        """항등 다항식 p(x) = x."""
        return cls([FR(0), FR(1)])

    @classmethod
    def linear_root(cls, point):
        """(x - point)."""
        return cls([-to_fr(point), FR(1)])

    @classmethod
    def vanishing(cls, n):
        """소거 다항식 Z_H(x) = x^n - 1.

        도메인 H = {1, ω, ..., ω^(n-1)} 위의 모든 점에서 0이 된다.
        """
        coeffs = [FR(0)] * (n + 1)
        coeffs[0] = FR(-1)
        coeffs[n] = FR(1)
        return cls(coeffs)


# ─────────────────────────────────────────────────────────────────────
# FFT / IFFT (Number Theoretic Transform)
# ─────────────────────────────────────────────────────────────────────

def fft(coeffs, omega):
    """Fast Fourier Transform (NTT): 계수 → 평가값.

    입력 다항식 p(x) = c₀ + c₁x + ... + c_{n-1}x^{n-1}을
    n개의 단위근 {1, ω, ω², ..., ω^{n-1}}에서 평가한다.

    알고리즘:
        1. n=1이면 계수를 그대로 반환
        2. 짝수/홀수 인덱스로 분리
        3. 재귀 호출: FFT(even, ω²), FFT(odd, ω²)
        4. 버터플라이 결합: y[k] = even[k] + ω^k · odd[k]
                           y[k+n/2] = even[k] - ω^k · odd[k]

    Args:
        coeffs: FR 원소 리스트 (길이는 2의 거듭제곱)
        omega: n차 원시 단위근

    Returns:
        list[FR]: [p(1), p(ω), ..., p(ω^{n-1})]
    """
    n = len(coeffs)
    if n == 1:
        return [coeffs[0] if isinstance(coeffs[0], FR) else FR(coeffs[0])]

    even = [coeffs[i] for i in range(0, n, 2)]
    odd = [coeffs[i] for i in range(1, n, 2)]

    omega_sq = omega * omega
    even_vals = fft(even, omega_sq)
    odd_vals = fft(odd, omega_sq)

    result = [FR(0)] * n
    omega_k = FR(1)
    half = n // 2
    for k in range(half):
        t = omega_k * odd_vals[k]
        result[k] = even_vals[k] + t
        result[k + half] = even_vals[k] - t
        omega_k = omega_k * omega

    return result


def ifft(evals, omega):
    """Inverse FFT: 평가값 → 계수.

    역 단위근 ω^{-1}로 FFT를 수행한 후 n으로 나눈다.
    """
    n = len(evals)
    omega_inv = FR(1) / omega
    coeffs = fft(evals, omega_inv)
    n_inv = FR(1) / FR(n)
    return [c * n_inv for c in coeffs]


# ─────────────────────────────────────────────────────────────────────
# 다항식 나눗셈 (Polynomial Long Division)
# ─────────────────────────────────────────────────────────────────────

def poly_div(a, b):
    """다항식 나눗셈: a(x) = b(x) · q(x) + r(x).

    Returns:
        tuple: (몫 Polynomial, 나머지 Polynomial)

    Raises:
        ZeroDivisionError: 제수가 영 다항식인 경우

    예시:
        >>> a = Polynomial([FR(-1), FR(0), FR(1)])  # x² - 1
        >>> b = Polynomial([FR(-1), FR(1)])          # x - 1
        >>> poly_div(a, b)  # (x + 1, 0)
    """
    if b.is_zero():
        raise ZeroDivisionError("영 다항식으로 나눌 수 없습니다")

    remainder = list(a.coeffs)
    divisor = b.coeffs
    deg_b = len(divisor) - 1
    deg_a = len(remainder) - 1

    if deg_a < deg_b:
        return Polynomial.zero(), Polynomial(remainder)

    quotient = [FR(0)] * (deg_a - deg_b + 1)
    lead_inv = FR(1) / divisor[-1]

    for i in range(deg_a - deg_b, -1, -1):
        coeff = remainder[i + deg_b] * lead_inv
        if coeff == 0:
            continue
        quotient[i] = coeff
        for j in range(deg_b + 1):
            remainder[i + j] = remainder[i + j] - coeff * divisor[j]

    return Polynomial(quotient), Polynomial(remainder[:deg_b] if deg_b > 0 else [FR(0)])
