"""
평균 문항-총점 상관 (Average Item-Total Correlation)

기본값은 해당 문항을 포함한 총점과의 상관입니다. 문항이 자기 자신이 포함된
총점과 상관되므로 수정된(corrected) 문항-총점 상관보다 높게 추정됩니다.
exclude_self=True이면 해당 문항을 제외한 총점을 사용합니다.
"""

import logging
from dataclasses import dataclass

import pandas as pd

from .correlation import check_variance, pearson_r, total_score
from .data_loader import validate_response_matrix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemTotalResult:
    """문항-총점 상관 결과"""
    per_item: pd.Series
    mean: float
    exclude_self: bool


def average_item_total_correlation(data: pd.DataFrame,
                                   exclude_self: bool = False) -> ItemTotalResult:
    """
    평균 문항-총점 상관 계산

    Args:
        data (pd.DataFrame): 응답 행렬
        exclude_self (bool): True이면 문항 자신을 뺀 총점(leave-one-out) 사용

    Returns:
        ItemTotalResult: 문항별 상관과 평균
    """
    validate_response_matrix(data, min_items=2 if exclude_self else 1)
    check_variance(data)

    inclusive_total = None if exclude_self else total_score(data)

    correlations = {}
    for item in data.columns:
        total = total_score(data, exclude=item) if exclude_self else inclusive_total
        correlations[item] = pearson_r(data[item], total)

    per_item = pd.Series(correlations, name='item_total_r')
    mean_r = float(per_item.mean())

    mode = "corrected" if exclude_self else "inclusive"
    logger.info(f"평균 문항-총점 상관 계산 완료 ({mode}): {mean_r:.4f}")
    return ItemTotalResult(per_item=per_item, mean=mean_r, exclude_self=exclude_self)
