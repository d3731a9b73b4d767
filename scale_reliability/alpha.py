"""
크론바흐 알파 (Cronbach's Alpha)

alpha = (k / (k - 1)) * (1 - Σ문항분산 / 총점분산)

총점은 문항 합계이며, 문항분산과 총점분산은 같은 ddof로 계산합니다
(기본값 ddof=1, 표본분산). 결과는 [0, 1]로 잘라내지 않습니다.
"""

import logging

import numpy as np
import pandas as pd

from .correlation import check_variance
from .data_loader import validate_response_matrix
from .exceptions import DegenerateInputError, ShapeMismatchError

logger = logging.getLogger(__name__)


def cronbach_alpha(data: pd.DataFrame, ddof: int = 1) -> float:
    """
    크론바흐 알파 계산

    Args:
        data (pd.DataFrame): 응답 행렬 (문항 2개 이상)
        ddof (int): 분산 추정 자유도 보정 (1 = 표본분산, 0 = 모분산)

    Returns:
        float: 크론바흐 알파 값 (음수 또는 1 초과도 그대로 반환)
    """
    k = data.shape[1]
    if k < 2:
        raise ShapeMismatchError(
            f"크론바흐 알파 계산을 위해서는 최소 2개 문항이 필요합니다 (현재 {k}개)"
        )
    validate_response_matrix(data, min_items=2)
    check_variance(data)

    # 각 문항의 분산
    item_variances = data.var(axis=0, ddof=ddof)
    sum_item_var = float(item_variances.sum())

    # 전체 점수의 분산
    total_scores = data.sum(axis=1)
    total_var = float(total_scores.var(ddof=ddof))

    # 문항분산 합 대비 상대 기준 (척도 단위와 무관)
    if total_var <= np.finfo(float).eps * sum_item_var:
        raise DegenerateInputError("총점 분산이 0입니다 (크론바흐 알파 정의 불가)")

    alpha = (k / (k - 1)) * (1 - sum_item_var / total_var)

    if not 0.0 <= alpha <= 1.0:
        logger.warning(f"크론바흐 알파가 [0, 1] 범위를 벗어났습니다: {alpha:.4f} (문항 일관성 확인 필요)")

    logger.info(f"크론바흐 알파 계산 완료: {alpha:.4f}")
    return float(alpha)


def alpha_if_item_deleted(data: pd.DataFrame, ddof: int = 1) -> pd.Series:
    """
    문항 제거 시 크론바흐 알파

    Args:
        data (pd.DataFrame): 응답 행렬 (문항 3개 이상)
        ddof (int): 분산 추정 자유도 보정

    Returns:
        pd.Series: {제거 문항: 남은 문항들의 알파}
    """
    if data.shape[1] < 3:
        raise ShapeMismatchError("문항 제거 분석을 위해서는 최소 3개 문항이 필요합니다")

    results = {}
    for item in data.columns:
        results[item] = cronbach_alpha(data.drop(columns=item), ddof=ddof)

    return pd.Series(results, name='alpha_if_deleted')
