"""
합성신뢰도 (Composite Reliability, omega)와 평균분산추출 (AVE)

단일 요인 확인적 요인분석의 표준화 요인부하량(λ)으로부터 계산합니다.
오차분산은 1 - λ²로 둡니다.

    CR  = (Σλ)² / [(Σλ)² + Σ(1 - λ²)]
    AVE = Σλ² / [Σλ² + Σ(1 - λ²)]
"""

import logging
from typing import Mapping, Sequence, Union

import numpy as np
import pandas as pd

from .exceptions import InvalidLoadingsError

logger = logging.getLogger(__name__)

Loadings = Union[pd.Series, Mapping[str, float], Sequence[float]]


def _validated_loadings(loadings: Loadings) -> np.ndarray:
    """요인부하량 검증 후 배열로 변환"""
    if loadings is None or len(loadings) == 0:
        raise InvalidLoadingsError("요인부하량이 비어 있습니다")

    series = loadings if isinstance(loadings, pd.Series) else pd.Series(loadings)
    try:
        values = series.to_numpy(dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidLoadingsError(f"수치형이 아닌 요인부하량: {e}") from e

    if not np.isfinite(values).all():
        raise InvalidLoadingsError("결측치 또는 무한대 요인부하량이 있습니다")

    out_of_range = series[np.abs(values) > 1.0]
    if len(out_of_range) > 0:
        raise InvalidLoadingsError(
            f"표준화 요인부하량은 [-1, 1] 범위여야 합니다: {out_of_range.to_dict()}"
        )

    return values


def error_variances(loadings: Loadings) -> np.ndarray:
    """표준화 요인부하량의 오차분산 (1 - λ²)"""
    values = _validated_loadings(loadings)
    return 1 - values ** 2


def composite_reliability(loadings: Loadings) -> float:
    """
    합성신뢰도 (CR) 계산

    Args:
        loadings (Loadings): 문항별 표준화 요인부하량

    Returns:
        float: 합성신뢰도 값
    """
    values = _validated_loadings(loadings)
    residuals = 1 - values ** 2

    # CR 계산: (Σλ)² / [(Σλ)² + Σδ]
    numerator = np.sum(values) ** 2
    denominator = numerator + np.sum(residuals)

    if np.isclose(denominator, 0.0):
        raise InvalidLoadingsError("요인부하량 합과 오차분산이 모두 0입니다")

    cr = float(numerator / denominator)

    logger.info(f"합성신뢰도 계산 완료: {cr:.4f}")
    return cr


def average_variance_extracted(loadings: Loadings) -> float:
    """
    평균분산추출 (AVE) 계산

    Args:
        loadings (Loadings): 문항별 표준화 요인부하량

    Returns:
        float: AVE 값
    """
    values = _validated_loadings(loadings)

    sum_loadings_squared = np.sum(values ** 2)
    sum_error_var = np.sum(1 - values ** 2)

    # 분모는 항상 문항 수와 같음
    ave = float(sum_loadings_squared / (sum_loadings_squared + sum_error_var))

    logger.info(f"AVE 계산 완료: {ave:.4f}")
    return ave
