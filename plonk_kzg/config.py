"""
PLONK 설정 (Configuration)
============================

트랜스크립트 해시 함수, 도메인 분리 레이블, 기본 SRS 여유 차수,
로그 레벨을 한 곳에서 관리한다.

환경 변수:
  PLONK_KZG_HASH        hashlib 알고리즘 이름 (기본값: sha256)
  PLONK_KZG_LABEL       트랜스크립트 레이블 (기본값: plonk-kzg)
  PLONK_KZG_SRS_MARGIN  기본 SRS 생성 시 n에 더할 여유 차수 (기본값: 5)
  PLONK_KZG_LOG_LEVEL   로그 레벨 (기본값: WARNING)

사용 예시:
    >>> from plonk_kzg.config import get_config, configure_logging
    >>> configure_logging("DEBUG")
    >>> get_config().hash_function()
"""

import hashlib
import logging
import os


DEFAULT_HASH = "sha256"
DEFAULT_LABEL = b"plonk-kzg"
DEFAULT_SRS_MARGIN = 5
DEFAULT_LOG_LEVEL = "WARNING"

# 최소 32바이트 다이제스트를 내는 알고리즘만 허용 (FR ≈ 2^254)
_MIN_DIGEST_SIZE = 32


class PlonkConfig:
    """런타임 설정 값 묶음.

    속성:
        hash_name: 트랜스크립트에서 사용할 hashlib 알고리즘 이름
        transcript_label: 트랜스크립트 초기 상태 (도메인 분리)
        srs_degree_margin: compile()이 SRS를 직접 만들 때의 여유 차수
        log_level: configure_logging() 기본 레벨
    """

    def __init__(self, hash_name=DEFAULT_HASH, transcript_label=DEFAULT_LABEL,
                 srs_degree_margin=DEFAULT_SRS_MARGIN, log_level=DEFAULT_LOG_LEVEL):
        if hash_name not in hashlib.algorithms_available:
            raise ValueError(f"지원하지 않는 해시 알고리즘입니다: {hash_name}")
        if hashlib.new(hash_name).digest_size < _MIN_DIGEST_SIZE:
            raise ValueError(f"다이제스트가 너무 짧습니다: {hash_name}")
        if srs_degree_margin < 2:
            raise ValueError(f"SRS 여유 차수는 2 이상이어야 합니다: {srs_degree_margin}")
        if isinstance(transcript_label, str):
            transcript_label = transcript_label.encode()
        self.hash_name = hash_name
        self.transcript_label = transcript_label
        self.srs_degree_margin = srs_degree_margin
        self.log_level = log_level.upper()

    def hash_function(self):
        """인자 없이 호출 가능한 해시 생성자를 반환한다."""
        name = self.hash_name
        constructor = getattr(hashlib, name, None)
        if constructor is not None:
            return constructor
        return lambda: hashlib.new(name)

    def __repr__(self):
        return (f"PlonkConfig(hash_name={self.hash_name!r}, "
                f"transcript_label={self.transcript_label!r}, "
                f"srs_degree_margin={self.srs_degree_margin}, "
                f"log_level={self.log_level!r})")


def load_config(environ=None):
    """환경 변수에서 설정을 읽는다.

    Args:
        environ: 매핑 (기본값: os.environ)

    Returns:
        PlonkConfig

    Raises:
        ValueError: 알 수 없는 해시 이름이나 정수가 아닌 여유 차수
    """
    if environ is None:
        environ = os.environ
    margin_raw = environ.get("PLONK_KZG_SRS_MARGIN", str(DEFAULT_SRS_MARGIN))
    try:
        margin = int(margin_raw)
    except ValueError:
        raise ValueError(f"PLONK_KZG_SRS_MARGIN은 정수여야 합니다: {margin_raw!r}") from None
    return PlonkConfig(
        hash_name=environ.get("PLONK_KZG_HASH", DEFAULT_HASH),
        transcript_label=environ.get("PLONK_KZG_LABEL", DEFAULT_LABEL),
        srs_degree_margin=margin,
        log_level=environ.get("PLONK_KZG_LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )


_config = None


def get_config():
    """프로세스 전역 설정 (최초 호출 시 환경 변수에서 로드)."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config):
    """전역 설정을 교체한다. None이면 다음 호출 때 다시 로드한다."""
    global _config
    _config = config


def configure_logging(level=None):
    """plonk_kzg 로거 출력을 설정한다.

    라이브러리는 import 시 로깅을 설정하지 않는다. 애플리케이션이나
    스크립트에서 명시적으로 호출해야 한다.
    """
    if level is None:
        level = get_config().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("plonk_kzg").setLevel(level)
