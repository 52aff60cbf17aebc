"""
몫 다항식 분할 (Quotient Slicing)
==================================

t(x)의 차수(≈ 3n+5)는 SRS 최대 차수(≈ n+5)를 넘으므로
세 조각으로 나누어 각각 커밋한다.

  t(x) = t_lo(x) + x^{d+1}·t_mid(x) + x^{2d+2}·t_hi(x)

각 조각은 d+1개 계수 (차수 ≤ d). PLONK에서는 d = n + 1.

Verifier는 커밋먼트의 동형성으로 [t]를 조립한다:
  [t_lo] + ζ^{d+1}·[t_mid] + ζ^{2d+2}·[t_hi]
"""

from plonk_kzg.errors import DegreeOverflow
from plonk_kzg.field import FR, to_fr
from plonk_kzg.polynomial import Polynomial

NUM_SLICES = 3


def slice_degree(domain_size):
    """도메인 크기 n에 대한 분할 차수 d = n + 1."""
    return domain_size + 1


class SlicedPolynomial:
    """d+1개 계수씩 세 조각으로 분할된 다항식.

    Raises:
        DegreeOverflow: 다항식 차수가 3d + 2를 넘을 때
    """

    def __init__(self, poly, degree):
        if degree < 0:
            raise ValueError(f"분할 차수는 0 이상이어야 합니다: {degree}")
        if poly.degree > NUM_SLICES * degree + 2:
            raise DegreeOverflow(
                f"차수 {poly.degree} 다항식은 d={degree}로 세 조각에 담을 수 없습니다"
            )
        self.degree = degree
        width = degree + 1
        coeffs = list(poly.coeffs)
        self.slices = [Polynomial(coeffs[i * width:(i + 1) * width])
                       for i in range(NUM_SLICES)]

    @classmethod
    def for_domain(cls, poly, domain_size):
        return cls(poly, slice_degree(domain_size))

    @property
    def lo(self):
        return self.slices[0]

    @property
    def mid(self):
        return self.slices[1]

    @property
    def hi(self):
        return self.slices[2]

    def commit(self, scheme):
        """세 조각의 커밋먼트 [t_lo], [t_mid], [t_hi]."""
        return [scheme.commit(s) for s in self.slices]

    def compact(self, point):
        """t_lo(x) + p^{d+1}·t_mid(x) + p^{2d+2}·t_hi(x) (x에 대한 다항식)."""
        point = to_fr(point)
        shift = point ** (self.degree + 1)
        return self.lo + self.mid * shift + self.hi * (shift * shift)

    def recombine(self):
        """원래 다항식을 복원한다."""
        width = self.degree + 1
        coeffs = []
        for s in self.slices:
            part = list(s.coeffs)
            part += [FR(0)] * (width - len(part))
            coeffs.extend(part)
        return Polynomial(coeffs)

    def evaluate(self, point):
        return self.compact(point).evaluate(point)
