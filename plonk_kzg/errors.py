"""
PLONK 예외 계층
================

증명 생성/검증 과정에서 발생하는 오류를 유형별로 구분한다.

  PlonkError
  ├── CircuitError          회로 구성 오류 (빈 회로, 잘못된 배선, 컴파일 후 수정)
  ├── ConstraintViolation   witness가 제약을 만족하지 않음 (나머지 ≠ 0)
  ├── DegreeOverflow        SRS 또는 몫 분할 차수 한계 초과
  ├── TranscriptMisuse      feed 없이 챌린지를 뽑으려 함
  └── VerificationRejected  검증 거부 (VerificationResult.raise_for_rejection)

값 관련 오류는 ValueError도 함께 상속하므로, 기존의
``except ValueError`` 코드와도 호환된다.
"""

import enum


class PlonkError(Exception):
    """모든 PLONK 오류의 기반 클래스."""


class CircuitError(PlonkError, ValueError):
    """회로 빌더/컴파일러가 잘못된 입력을 받았을 때."""


class ConstraintViolation(PlonkError, ValueError):
    """정확한 나눗셈이 실패했을 때 (witness가 회로를 만족하지 않음).

    속성:
        context: 실패한 제약식 이름 (예: "gate", "permutation")
    """

    def __init__(self, message, context=None):
        super().__init__(message)
        self.context = context


class DegreeOverflow(PlonkError, ValueError):
    """다항식 차수가 허용 범위를 넘었을 때."""


class TranscriptMisuse(PlonkError, RuntimeError):
    """트랜스크립트 사용 순서가 잘못되었을 때."""


class RejectionReason(enum.Enum):
    """Verifier가 증명을 거부하는 이유."""

    MALFORMED_PROOF = "malformed_proof"
    DEGREE_MISMATCH = "degree_mismatch"
    DEGENERATE_CHALLENGE = "degenerate_challenge"
    PAIRING_FAILED = "pairing_failed"


class VerificationRejected(PlonkError):
    """검증 거부를 예외로 전환할 때 사용한다."""

    def __init__(self, reasons):
        self.reasons = tuple(reasons)
        names = ", ".join(r.value for r in self.reasons) or "unknown"
        super().__init__(f"증명이 거부되었습니다: {names}")
