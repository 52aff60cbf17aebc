"""
PLONK 기반 모듈: 유한체(Finite Field) 및 타원곡선 연산
========================================================

이 모듈은 프로토콜 전체에서 사용되는 기본 대수적 도구를 정의한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드 (scalar field). 모든 다항식 연산과
  증명 생성/검증에서 사용되는 기본 산술 단위이다.
  - 위수(order) r ≈ 2^254, 소수체(prime field)
  - r - 1 = 2^28 × m (m은 홀수) → 최대 2^28차 단위근(root of unity)을 지원

**타원곡선 연산**:
  커밋먼트 계산은 수백 번의 스칼라 곱을 수행하므로
  py_ecc.optimized_bn128 (사영 좌표, projective coordinates)을 사용한다.
  점은 (x, y, z) 3-튜플이며, 무한원점은 z = 0 으로 표현된다.
  좌표 비교나 직렬화가 필요할 때는 to_affine()으로 정규화한다.

사용 예시:
    >>> from plonk_kzg.field import FR, G1, ec_mul
    >>> a = FR(3)
    >>> b = FR(7)
    >>> c = a * b        # FR(21)
    >>> P = ec_mul(G1, 5)  # 5·G1
"""

from py_ecc.fields import bn128_FQ
from py_ecc import optimized_bn128 as curve


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(bn128_FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> FR(1) / FR(3)   # 3의 모듈러 역원
    """
    field_modulus = curve.curve_order


# 곡선 위수 (스칼라 필드 크기)
CURVE_ORDER = curve.curve_order

# r - 1 = 2^TWO_ADICITY × (홀수)
TWO_ADICITY = 28

# FR*의 곱셈 생성자
MULTIPLICATIVE_GENERATOR = 5


def to_fr(value):
    """정수/FR을 FR로 변환한다."""
    return value if isinstance(value, FR) else FR(value)


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 상수 및 연산
# ─────────────────────────────────────────────────────────────────────

G1 = curve.G1
G2 = curve.G2

# 항등원 (point at infinity)
Z1 = curve.Z1
Z2 = curve.Z2

# 좌표 필드 원소 (사영 좌표용)
FQ = curve.FQ
FQ2 = curve.FQ2


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point.

    Args:
        point: G1 또는 G2 위의 점 (사영 좌표)
        scalar: 정수 또는 FR 원소. r로 축소된 후 곱한다.
    """
    return curve.multiply(point, int(scalar) % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2."""
    return curve.add(p1, p2)


def ec_neg(point):
    """점의 역원: -point."""
    return curve.neg(point)


def ec_eq(p1, p2):
    """사영 좌표를 고려한 점 동등 비교."""
    return curve.eq(p1, p2)


def is_infinity(point):
    return curve.is_inf(point)


def is_on_g1(point):
    """G1 곡선 y² = x³ + 3 위의 점인지 확인한다 (무한원점 포함).

    좌표는 모두 FQ 원소여야 한다. 정수 좌표는 곡선 방정식을 우연히
    만족하더라도 거부한다.
    """
    if not isinstance(point, tuple) or len(point) != 3:
        return False
    if not all(isinstance(coord, FQ) for coord in point):
        return False
    try:
        return curve.is_on_curve(point, curve.b)
    except (TypeError, ValueError, AttributeError):
        return False


def to_affine(point):
    """사영 좌표 점을 아핀 좌표 정수 쌍 (x, y)로 변환한다.

    무한원점은 None을 반환한다.
    """
    if curve.is_inf(point):
        return None
    x, y = curve.normalize(point)
    return int(x), int(y)


def from_affine(x, y):
    """아핀 좌표 정수 쌍을 사영 좌표 G1 점으로 만든다.

    곡선 위에 있는지는 확인하지 않는다 (is_on_g1 사용).
    """
    return (FQ(x), FQ(y), FQ.one())


def g2_to_affine(point):
    """G2 점 → ((x0, x1), (y0, y1)) 정수 쌍. 무한원점은 None."""
    if curve.is_inf(point):
        return None
    x, y = curve.normalize(point)
    return tuple(int(c) for c in x.coeffs), tuple(int(c) for c in y.coeffs)


def g2_from_affine(x, y):
    return (FQ2(list(x)), FQ2(list(y)), FQ2.one())


def ec_pairing(g2_point, g1_point):
    """쌍선형 페어링 e(G1, G2) → GT.

    주의:
        py_ecc의 인자 순서는 (G2, G1)이다.
    """
    return curve.pairing(g2_point, g1_point)


# ─────────────────────────────────────────────────────────────────────
# 단위근 (Roots of Unity)
# ─────────────────────────────────────────────────────────────────────

def get_root_of_unity(n):
    """n차 원시 단위근(primitive n-th root of unity) ω를 반환한다.

    생성자 g = 5를 사용하여 ω = g^((r-1)/n)으로 계산한다.
    ω^n = g^(r-1) = 1 (페르마 소정리).

    Args:
        n: 단위근의 차수 (2의 거듭제곱, ≤ 2^28)

    Raises:
        ValueError: n이 2의 거듭제곱이 아니거나 2^28을 초과할 때
    """
    if n < 1 or (n & (n - 1)) != 0:
        raise ValueError(f"n은 2의 거듭제곱이어야 합니다: {n}")
    if n > (1 << TWO_ADICITY):
        raise ValueError(f"n은 2^{TWO_ADICITY} 이하여야 합니다: {n}")
    if n == 1:
        return FR(1)
    return FR(MULTIPLICATIVE_GENERATOR) ** ((CURVE_ORDER - 1) // n)


def get_roots_of_unity(n):
    """[1, ω, ω², ..., ω^(n-1)]을 반환한다."""
    omega = get_root_of_unity(n)
    roots = []
    current = FR(1)
    for _ in range(n):
        roots.append(current)
        current = current * omega
    return roots
