"""
순열 누적자 (Grand Product Accumulator)
========================================

Copy constraint가 만족됨을 증명하는 z(x)의 도메인 위 값.

  z₀ = 1
  z_{i+1} = zᵢ ·
      (aᵢ + β·ωⁱ + γ)(bᵢ + β·k1·ωⁱ + γ)(cᵢ + β·k2·ωⁱ + γ)
      ─────────────────────────────────────────────────────────
      (aᵢ + β·σ1ᵢ + γ)(bᵢ + β·σ2ᵢ + γ)(cᵢ + β·σ3ᵢ + γ)

σ가 올바르고 같은 값끼리 연결되어 있으면 전체 곱이 1이 되어
z_n = 1 (순환이 닫힌다).
"""

from plonk_kzg.errors import ConstraintViolation
from plonk_kzg.field import FR


def compute_accumulator(witness, sigma_evals, domain, k1, k2, beta, gamma):
    """z₀..z_n (n+1개)을 계산한다.

    Args:
        witness: (a_vals, b_vals, c_vals) 도메인 크기 길이
        sigma_evals: (σ1, σ2, σ3) 도메인 위 평가값
        domain: EvaluationDomain
        k1, k2: 코셋 상수
        beta, gamma: Round 2 챌린지

    Returns:
        list[FR]: 길이 n+1. 마지막 값이 1이면 순열이 닫힌다.

    Raises:
        ConstraintViolation: 분모가 0이 되는 경우 (β, γ가 퇴화)
    """
    a_vals, b_vals, c_vals = witness
    s1, s2, s3 = sigma_evals
    z = [FR(1)]
    for i, root in enumerate(domain):
        numerator = ((a_vals[i] + beta * root + gamma)
                     * (b_vals[i] + beta * k1 * root + gamma)
                     * (c_vals[i] + beta * k2 * root + gamma))
        denominator = ((a_vals[i] + beta * s1[i] + gamma)
                       * (b_vals[i] + beta * s2[i] + gamma)
                       * (c_vals[i] + beta * s3[i] + gamma))
        if denominator == 0:
            raise ConstraintViolation(
                f"누적자 분모가 {i}행에서 0입니다", context="permutation"
            )
        z.append(z[-1] * numerator / denominator)
    return z
