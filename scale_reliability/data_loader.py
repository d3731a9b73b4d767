"""
Response Matrix Data Loader Module

이 모듈은 설문 응답 CSV 파일을 불러와 신뢰도 분석용 응답 행렬
(행 = 응답자, 열 = 문항)로 정리하고, 역문항을 역코딩하는 기능을 제공합니다.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from .exceptions import DegenerateInputError, ShapeMismatchError

logger = logging.getLogger(__name__)


def validate_response_matrix(data: pd.DataFrame, min_items: int = 1) -> pd.DataFrame:
    """
    응답 행렬 유효성 검증

    Args:
        data (pd.DataFrame): 응답 데이터 (행 = 응답자, 열 = 문항)
        min_items (int): 필요한 최소 문항 수

    Returns:
        pd.DataFrame: 검증된 데이터 (입력 객체 그대로)
    """
    if not isinstance(data, pd.DataFrame):
        raise TypeError(f"pandas DataFrame이 필요합니다: {type(data).__name__}")

    if data.columns.has_duplicates:
        duplicated = sorted(set(data.columns[data.columns.duplicated()]))
        raise ShapeMismatchError(f"중복된 문항 이름: {duplicated}")

    if data.shape[1] < min_items:
        raise ShapeMismatchError(
            f"최소 {min_items}개 문항이 필요합니다 (현재 {data.shape[1]}개)"
        )

    if len(data) < 2:
        raise DegenerateInputError(f"최소 2명의 응답자가 필요합니다 (현재 {len(data)}명)")

    non_numeric = [col for col in data.columns if not pd.api.types.is_numeric_dtype(data[col])]
    if non_numeric:
        raise DegenerateInputError(f"수치형이 아닌 문항: {non_numeric}")

    if not np.isfinite(data.to_numpy(dtype=float)).all():
        bad_cols = [col for col in data.columns if not np.isfinite(data[col].to_numpy(dtype=float)).all()]
        raise DegenerateInputError(f"결측치 또는 무한대 값이 있는 문항: {bad_cols}")

    return data


def load_response_matrix(file_path: Union[str, Path],
                         items: Optional[List[str]] = None,
                         id_column: Optional[str] = 'no') -> pd.DataFrame:
    """
    CSV 파일에서 응답 행렬 로딩

    Args:
        file_path (Union[str, Path]): CSV 파일 경로
        items (Optional[List[str]]): 사용할 문항 목록 (None이면 전체)
        id_column (Optional[str]): 응답자 ID 컬럼 (분석에서 제외)

    Returns:
        pd.DataFrame: 검증된 응답 행렬
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"데이터 파일을 찾을 수 없습니다: {file_path}")

    df = pd.read_csv(file_path, encoding='utf-8-sig')
    logger.info(f"{file_path.name} 로딩 완료: {df.shape}")

    # 'no' 컬럼 제거 (응답자 ID는 분석에 불필요)
    if id_column and id_column in df.columns:
        df = df.drop(id_column, axis=1)

    if items is not None:
        missing = [item for item in items if item not in df.columns]
        if missing:
            raise ShapeMismatchError(f"데이터에 없는 문항: {missing}")
        df = df[list(items)]

    return validate_response_matrix(df)


def reverse_score(data: pd.DataFrame, items: Iterable[str],
                  scale_min: float, scale_max: float) -> pd.DataFrame:
    """
    역문항 역코딩

    각 문항 값 x를 (scale_max + scale_min) - x로 변환한 복사본을 반환합니다.

    Args:
        data (pd.DataFrame): 응답 데이터
        items (Iterable[str]): 역코딩할 문항들
        scale_min (float): 척도 최솟값
        scale_max (float): 척도 최댓값

    Returns:
        pd.DataFrame: 역코딩된 데이터 복사본
    """
    if scale_min >= scale_max:
        raise ValueError(f"척도 범위가 잘못되었습니다: {scale_min}-{scale_max}")

    items = list(items)
    missing = [item for item in items if item not in data.columns]
    if missing:
        raise ShapeMismatchError(f"데이터에 없는 역문항: {missing}")

    reversed_data = data.copy()
    for item in items:
        values = reversed_data[item]
        out_of_range = (values < scale_min) | (values > scale_max)
        if out_of_range.any():
            logger.warning(f"{item}: 척도 범위({scale_min}-{scale_max})를 벗어난 값 {int(out_of_range.sum())}개")
        reversed_data[item] = (scale_max + scale_min) - values

    logger.info(f"역문항 처리 완료: {items}")
    return reversed_data
