"""
Structured Reference String (SRS)
==================================

범용(universal) 신뢰 설정(trusted setup).

  SRS = {
      G1 powers: [G1, τ·G1, τ²·G1, ..., τ^d·G1]
      G2 points: [G2, τ·G2]
  }

한 번 생성하면 최대 차수 d 이하의 모든 회로에 재사용 가능하다.
τ("toxic waste")를 아는 사람은 거짓 증명을 만들 수 있으므로,
여기서의 생성 함수는 교육/테스트 용도이다.

사용 예시:
    >>> srs = SRS.generate(max_degree=16, seed=42)
    >>> len(srs.g1_powers)  # 17
"""

import hashlib
import logging
import secrets

from plonk_kzg.errors import DegreeOverflow
from plonk_kzg.field import FR, G1, G2, CURVE_ORDER, ec_mul

logger = logging.getLogger(__name__)


class SRS:
    """KZG 커밋먼트용 공개 파라미터.

    속성:
        g1_powers: [G1, τ·G1, ..., τ^d·G1]
        g2_powers: [G2, τ·G2]
        max_degree: 지원하는 최대 다항식 차수 d
    """

    def __init__(self, g1_powers, g2_powers):
        if len(g2_powers) != 2:
            raise ValueError("G2 점은 [G2, τ·G2] 두 개여야 합니다")
        self.g1_powers = list(g1_powers)
        self.g2_powers = list(g2_powers)
        self.max_degree = len(self.g1_powers) - 1

    @property
    def g2(self):
        """[1]₂"""
        return self.g2_powers[0]

    @property
    def tau_g2(self):
        """[τ]₂"""
        return self.g2_powers[1]

    def ensure_degree(self, degree):
        if degree > self.max_degree:
            raise DegreeOverflow(
                f"SRS 최대 차수 {self.max_degree}는 필요한 차수 {degree}보다 작습니다"
            )

    @classmethod
    def from_tau(cls, tau, max_degree):
        """주어진 τ로 SRS를 만든다 (테스트 전용)."""
        tau = tau if isinstance(tau, FR) else FR(tau)
        g1_powers = []
        tau_power = FR(1)
        for _ in range(max_degree + 1):
            g1_powers.append(ec_mul(G1, tau_power))
            tau_power = tau_power * tau
        return cls(g1_powers, [G2, ec_mul(G2, tau)])

    @classmethod
    def generate(cls, max_degree, seed=None):
        """SRS를 생성한다.

        Args:
            max_degree: 지원할 최대 다항식 차수 (n개 게이트 회로에는 n + 2 이상)
            seed: 결정론적 생성을 위한 시드. None이면 secrets로 τ를 뽑는다.
        """
        if max_degree < 1:
            raise ValueError(f"max_degree는 1 이상이어야 합니다: {max_degree}")
        if seed is not None:
            h = hashlib.sha256(str(seed).encode()).digest()
            tau_int = int.from_bytes(h, "big") % (CURVE_ORDER - 1) + 1
        else:
            tau_int = secrets.randbelow(CURVE_ORDER - 1) + 1
        logger.debug("SRS 생성: max_degree=%d, seeded=%s", max_degree, seed is not None)
        return cls.from_tau(FR(tau_int), max_degree)
