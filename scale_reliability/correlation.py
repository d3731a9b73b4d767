"""
문항 상관관계 유틸리티

문항간 Pearson 상관행렬과 응답자별 총점(평균) 계산을 제공합니다.
상관행렬의 대각선(자기 상관)은 NaN으로 두어 이후 평균 계산에서 제외됩니다.
"""

import logging
from typing import List, Optional, Sequence, Union

import numpy as np
import pandas as pd
from scipy import stats

from .data_loader import validate_response_matrix
from .exceptions import DegenerateInputError, ShapeMismatchError

logger = logging.getLogger(__name__)


def check_variance(data: pd.DataFrame) -> None:
    """분산이 0인 문항이 있으면 오류"""
    constant_cols = data.columns[data.nunique() <= 1].tolist()
    if constant_cols:
        raise DegenerateInputError(f"분산이 0인 문항 (상관계수 정의 불가): {constant_cols}")


def correlation_matrix(data: pd.DataFrame) -> pd.DataFrame:
    """
    문항간 Pearson 상관행렬 계산

    Args:
        data (pd.DataFrame): 응답 행렬

    Returns:
        pd.DataFrame: 대칭 상관행렬 (대각선은 NaN)
    """
    validate_response_matrix(data, min_items=2)
    check_variance(data)

    corr = data.corr(method='pearson')
    diagonal = np.eye(len(corr), dtype=bool)
    return corr.mask(diagonal)


def off_diagonal_values(matrix: pd.DataFrame) -> np.ndarray:
    """상관행렬의 상삼각 (대각선 제외) 값들을 1차원 배열로 반환"""
    values = matrix.to_numpy(dtype=float)
    upper = np.triu_indices(values.shape[0], k=1)
    return values[upper]


def total_score(data: pd.DataFrame,
                exclude: Optional[Union[str, Sequence[str]]] = None) -> pd.Series:
    """
    응답자별 총점 (문항 평균) 계산

    Args:
        data (pd.DataFrame): 응답 행렬
        exclude (Optional[Union[str, Sequence[str]]]): 총점에서 제외할 문항

    Returns:
        pd.Series: 행별 평균 점수
    """
    if exclude is None:
        excluded: List[str] = []
    elif isinstance(exclude, str):
        excluded = [exclude]
    else:
        excluded = list(exclude)

    unknown = [item for item in excluded if item not in data.columns]
    if unknown:
        raise ShapeMismatchError(f"데이터에 없는 문항: {unknown}")

    remaining = data.drop(columns=excluded)
    if remaining.shape[1] == 0:
        raise ShapeMismatchError("총점 계산에 사용할 문항이 없습니다")

    return remaining.mean(axis=1)


def pearson_r(x: Sequence[float], y: Sequence[float]) -> float:
    """
    두 점수 벡터의 Pearson 상관계수

    Args:
        x, y: 같은 길이의 점수 벡터

    Returns:
        float: 상관계수
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    if x.shape != y.shape:
        raise ShapeMismatchError(f"점수 벡터 길이가 다릅니다: {x.shape} vs {y.shape}")
    if len(x) < 2:
        raise DegenerateInputError("상관계수 계산에는 최소 2개의 관측치가 필요합니다")
    if np.ptp(x) == 0 or np.ptp(y) == 0:
        raise DegenerateInputError("분산이 0인 점수 벡터 (상관계수 정의 불가)")

    r, _ = stats.pearsonr(x, y)
    return float(r)
