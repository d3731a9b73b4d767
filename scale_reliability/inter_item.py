"""
평균 문항간 상관 (Average Inter-Item Correlation)
"""

import logging
from dataclasses import dataclass

import pandas as pd

from .correlation import correlation_matrix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterItemResult:
    """문항간 상관 결과"""
    per_item: pd.Series
    mean: float
    matrix: pd.DataFrame


def average_inter_item_correlation(data: pd.DataFrame) -> InterItemResult:
    """
    평균 문항간 상관 계산

    각 문항에 대해 다른 모든 문항과의 상관계수 평균을 구하고,
    이를 다시 문항 전체에 대해 평균합니다. 문항이 2개이면 문항별 평균은
    두 문항의 상관계수 하나와 같습니다.

    Args:
        data (pd.DataFrame): 응답 행렬 (문항 2개 이상)

    Returns:
        InterItemResult: 문항별 평균 상관, 전체 평균, 상관행렬
    """
    matrix = correlation_matrix(data)

    # 대각선이 NaN이므로 자기 상관은 평균에서 제외됨
    per_item = matrix.mean(axis=1, skipna=True)
    per_item.name = 'inter_item_r'
    grand_mean = float(per_item.mean())

    logger.info(f"평균 문항간 상관 계산 완료: {grand_mean:.4f} (문항 {len(per_item)}개)")
    return InterItemResult(per_item=per_item, mean=grand_mean, matrix=matrix)
