"""
Fiat-Shamir Transcript
=======================

대화식 프로토콜의 Verifier 챌린지를 해시로 대체한다.
Prover와 Verifier가 같은 순서로 같은 값을 feed하면 같은 챌린지를 얻는다.

**상태 체이닝**:
  digest₀ = H(label)
  feed:      digest ← H(digest ‖ b"point"  ‖ x ‖ y)
  feed_scalar: digest ← H(digest ‖ b"scalar" ‖ s)
  챌린지 i:   H(digest ‖ b"challenge" ‖ i) mod r
  뽑은 뒤:    digest ← H(digest ‖ b"squeeze" ‖ count)

**오용 방지**:
  마지막 챌린지 이후 아무것도 feed하지 않고 다시 뽑으면 (또는 처음부터
  feed 없이 뽑으면) TranscriptMisuse. 같은 챌린지가 두 번 나오는 것을 막는다.

**PLONK 챌린지 순서**:
  [a],[b],[c] → β, γ → [z] → α → [t_lo],[t_mid],[t_hi] → ζ
  → ā, b̄, c̄, s̄σ1, s̄σ2, z̄ω → v → [W_ζ],[W_ζω] → u
"""

import logging

from plonk_kzg.config import get_config
from plonk_kzg.errors import TranscriptMisuse
from plonk_kzg.field import FR, CURVE_ORDER, to_fr
from plonk_kzg.kzg import Commitment

logger = logging.getLogger(__name__)


class Transcript:
    """해시 함수를 주입받는 Fiat-Shamir 트랜스크립트.

    Args:
        hash_fn: 인자 없이 호출하면 hashlib 스타일 객체(update/digest)를 반환하는 함수.
                 None이면 설정(PLONK_KZG_HASH, 기본 sha256)을 따른다.
        label: 도메인 분리 레이블 (bytes)
    """

    def __init__(self, hash_fn=None, label=None):
        config = get_config()
        self._hash_fn = hash_fn if hash_fn is not None else config.hash_function()
        if label is None:
            label = config.transcript_label
        elif isinstance(label, str):
            label = label.encode()
        self._digest = self._hash(label)
        self._fresh_input = False
        self._squeezes = 0

    def _hash(self, *parts):
        h = self._hash_fn()
        for part in parts:
            h.update(part)
        return h.digest()

    def feed(self, commitment):
        """G1 커밋먼트를 흡수한다."""
        if not isinstance(commitment, Commitment):
            raise TypeError(f"Commitment가 필요합니다: {type(commitment).__name__}")
        self._digest = self._hash(self._digest, b"point", commitment.to_bytes())
        self._fresh_input = True

    def feed_scalar(self, value):
        """FR 스칼라를 32바이트 빅엔디안으로 흡수한다."""
        value = to_fr(value)
        self._digest = self._hash(self._digest, b"scalar", int(value).to_bytes(32, "big"))
        self._fresh_input = True

    def generate_challenges(self, count):
        """count개의 챌린지를 뽑는다.

        Raises:
            TranscriptMisuse: 마지막 추출 이후 feed가 없을 때
        """
        if count < 1:
            raise ValueError(f"챌린지 개수는 1 이상이어야 합니다: {count}")
        if not self._fresh_input:
            raise TranscriptMisuse("새로운 입력 없이 챌린지를 생성할 수 없습니다")

        challenges = []
        for i in range(count):
            raw = self._hash(self._digest, b"challenge", i.to_bytes(4, "big"))
            challenges.append(FR(int.from_bytes(raw, "big") % CURVE_ORDER))

        self._squeezes += 1
        self._digest = self._hash(self._digest, b"squeeze", self._squeezes.to_bytes(4, "big"))
        self._fresh_input = False
        logger.debug("챌린지 %d개 생성 (squeeze #%d)", count, self._squeezes)
        return challenges

    def generate_challenge(self):
        return self.generate_challenges(1)[0]
