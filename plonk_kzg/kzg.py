"""
KZG 다항식 커밋먼트 스킴
=========================

Kate-Zaverucha-Goldberg (KZG) 커밋먼트는 PLONK의 핵심 빌딩 블록이다.

  - 커밋먼트: C = p(τ)·G1 = Σᵢ cᵢ·[τⁱ]₁
  - 열기 증명: q(x) = (p(x) - y) / (x - z),  π = [q(τ)]₁
  - 검증:     e(π, [τ]₂) == e(z·π + C - y·G1, [1]₂)

커밋먼트는 덧셈 동형(additively homomorphic)이다:
  [p]₁ + [q]₁ = [p + q]₁,  s·[p]₁ = [s·p]₁
Verifier는 이 성질로 다항식 없이 선형화 커밋먼트 [D]₁를 조립한다.

사용 예시:
    >>> scheme = KZGScheme(srs)
    >>> C = scheme.commit(poly)
    >>> opening = scheme.open(poly, FR(7))
    >>> scheme.verify(C, opening, FR(7))  # True
"""

from plonk_kzg.errors import DegreeOverflow
from plonk_kzg.field import (
    FR, G1, Z1, ec_add, ec_mul, ec_neg, ec_eq, ec_pairing,
    is_on_g1, is_infinity, to_affine, to_fr,
)
from plonk_kzg.polynomial import Polynomial


class Commitment:
    """G1 점을 감싼 커밋먼트 값.

    +, -, 스칼라곱(FR/int)과 동등 비교를 지원한다.
    """

    __slots__ = ("point",)

    def __init__(self, point):
        self.point = point

    @classmethod
    def identity(cls):
        return cls(Z1)

    @classmethod
    def generator(cls):
        return cls(G1)

    def __add__(self, other):
        if not isinstance(other, Commitment):
            return NotImplemented
        return Commitment(ec_add(self.point, other.point))

    def __sub__(self, other):
        if not isinstance(other, Commitment):
            return NotImplemented
        return Commitment(ec_add(self.point, ec_neg(other.point)))

    def __neg__(self):
        return Commitment(ec_neg(self.point))

    def __mul__(self, scalar):
        if not isinstance(scalar, (int, FR)):
            return NotImplemented
        return Commitment(ec_mul(self.point, scalar))

    __rmul__ = __mul__

    def __eq__(self, other):
        if not isinstance(other, Commitment):
            return NotImplemented
        return ec_eq(self.point, other.point)

    def __hash__(self):
        return hash(to_affine(self.point))

    def is_on_curve(self):
        return is_on_g1(self.point)

    def is_identity(self):
        return is_infinity(self.point)

    def to_affine(self):
        return to_affine(self.point)

    def to_bytes(self):
        """x‖y 각각 32바이트 빅엔디안. 무한원점은 64바이트 0."""
        affine = to_affine(self.point)
        if affine is None:
            return b"\x00" * 64
        x, y = affine
        return x.to_bytes(32, "big") + y.to_bytes(32, "big")

    def __repr__(self):
        affine = to_affine(self.point)
        if affine is None:
            return "Commitment(∞)"
        return f"Commitment(x={hex(affine[0])[:12]}…)"


class Opening:
    """열기 증명: p(z) = value, witness = [(p(x) - value)/(x - z)]₁."""

    __slots__ = ("value", "witness")

    def __init__(self, value, witness):
        self.value = value
        self.witness = witness

    def __repr__(self):
        return f"Opening(value={int(self.value)}, witness={self.witness!r})"


class KZGScheme:
    """SRS에 묶인 KZG 커밋먼트 스킴."""

    def __init__(self, srs):
        self.srs = srs

    @property
    def max_degree(self):
        return self.srs.max_degree

    def commit(self, poly):
        """C = Σ cᵢ · [τⁱ]₁.

        Raises:
            DegreeOverflow: 다항식 차수가 SRS 최대 차수를 초과할 때
        """
        if poly.degree > self.srs.max_degree:
            raise DegreeOverflow(
                f"다항식 차수 {poly.degree}가 SRS 최대 차수 {self.srs.max_degree}를 초과합니다"
            )
        result = Z1
        for coeff, base in zip(poly.coeffs, self.srs.g1_powers):
            if coeff == 0:
                continue
            result = ec_add(result, ec_mul(base, coeff))
        return Commitment(result)

    def commit_constant(self, scalar):
        """상수 다항식 s의 커밋먼트 s·G1."""
        return Commitment(ec_mul(G1, to_fr(scalar)))

    def open(self, poly, point):
        """p(point)와 그 열기 증명을 계산한다."""
        point = to_fr(point)
        value = poly.evaluate(point)
        quotient = (poly - value).divide_exact(Polynomial.linear_root(point), context="opening")
        return Opening(value, self.commit(quotient))

    def verify(self, commitment, opening, point):
        """e(π, [τ]₂) == e(z·π + C - y·G1, [1]₂)."""
        point = to_fr(point)
        witness = opening.witness
        rhs_point = witness * point + commitment - self.commit_constant(opening.value)
        lhs = ec_pairing(self.srs.tau_g2, witness.point)
        rhs = ec_pairing(self.srs.g2, rhs_point.point)
        return lhs == rhs
