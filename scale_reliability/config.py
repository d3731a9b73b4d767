"""
Reliability Analysis Configuration Module

신뢰도 분석에 사용되는 설정값(분산 추정 방식, 반분 규칙, 판정 기준)과
로깅 설정을 관리합니다.
"""

import logging
from dataclasses import dataclass
from typing import Optional

# 신뢰도 판정 기준값
RELIABILITY_THRESHOLDS = {
    'cronbach_alpha': 0.7,
    'composite_reliability': 0.7,
    'ave': 0.5
}

# 로그 설정
LOGGING_CONFIG = {
    "log_level": "INFO",
    "log_format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
}

SPLIT_RULES = ('odd_even', 'first_last', 'random')


@dataclass
class ReliabilityConfig:
    """신뢰도 분석 설정을 저장하는 데이터클래스"""

    # 분산 추정 (1 = 표본분산, 0 = 모분산)
    ddof: int = 1

    # 문항-총점 상관: True이면 해당 문항을 제외한 총점(corrected) 사용
    exclude_self: bool = False

    # 반분 신뢰도 설정
    split_rule: str = 'odd_even'
    random_seed: Optional[int] = None

    # 확인적 요인분석 설정
    factor_name: str = 'F'
    optimizer: str = 'SLSQP'

    # 판정 기준
    alpha_threshold: float = RELIABILITY_THRESHOLDS['cronbach_alpha']
    cr_threshold: float = RELIABILITY_THRESHOLDS['composite_reliability']
    ave_threshold: float = RELIABILITY_THRESHOLDS['ave']

    def __post_init__(self):
        """초기화 후 검증"""
        if self.ddof not in (0, 1):
            raise ValueError(f"지원되지 않는 ddof 값: {self.ddof}")

        if self.split_rule not in SPLIT_RULES:
            raise ValueError(f"지원되지 않는 반분 규칙: {self.split_rule}")

        valid_optimizers = ['SLSQP', 'L-BFGS-B', 'trust-constr']
        if self.optimizer not in valid_optimizers:
            raise ValueError(f"지원되지 않는 최적화 방법: {self.optimizer}")

        if not self.factor_name:
            raise ValueError("잠재요인 이름이 비어 있습니다")

        for name in ('alpha_threshold', 'cr_threshold', 'ave_threshold'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name}은 0과 1 사이여야 합니다: {value}")


def get_default_config() -> ReliabilityConfig:
    """기본 설정을 반환하는 편의 함수"""
    return ReliabilityConfig()


def create_custom_config(**kwargs) -> ReliabilityConfig:
    """사용자 정의 설정을 생성하는 편의 함수"""
    return ReliabilityConfig(**kwargs)


def setup_logging(level: Optional[str] = None) -> None:
    """실행 스크립트용 로깅 설정 (라이브러리 코드에서는 호출하지 않음)"""
    logging.basicConfig(
        level=getattr(logging, (level or LOGGING_CONFIG["log_level"]).upper()),
        format=LOGGING_CONFIG["log_format"]
    )
