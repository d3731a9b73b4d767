"""
반분 신뢰도 (Split-Half Reliability)와 Spearman-Brown 교정

문항을 두 묶음으로 나누고, 각 묶음의 응답자 점수를 계산한 뒤
두 점수의 상관(r)을 Spearman-Brown 공식으로 전체 검사 길이에 맞게 교정합니다.
묶음 점수는 기본적으로 문항 평균이지만 임의의 점수 함수를 넘길 수 있습니다.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .correlation import pearson_r
from .data_loader import validate_response_matrix
from .exceptions import DegenerateInputError, ShapeMismatchError

logger = logging.getLogger(__name__)

Scorer = Callable[[pd.DataFrame], pd.Series]
Partition = Tuple[Sequence[str], Sequence[str]]


@dataclass(frozen=True)
class SplitHalfResult:
    """반분 신뢰도 결과"""
    r: float
    adjusted: float
    half_a: Tuple[str, ...]
    half_b: Tuple[str, ...]


def spearman_brown(r: float, length_factor: float = 2.0) -> float:
    """
    Spearman-Brown 예언 공식

    n * r / (1 + (n - 1) * r). 반분 신뢰도 교정은 n = 2인 경우로 2r / (1 + r)입니다.

    Args:
        r (float): 원래 길이에서의 신뢰도 (상관계수)
        length_factor (float): 검사 길이 배수 n

    Returns:
        float: 교정된 신뢰도
    """
    if length_factor <= 0:
        raise ValueError(f"검사 길이 배수는 양수여야 합니다: {length_factor}")

    denominator = 1 + (length_factor - 1) * r
    if np.isclose(denominator, 0.0):
        raise DegenerateInputError(f"Spearman-Brown 분모가 0입니다 (r = {r})")

    return float(length_factor * r / denominator)


def split_items(items: Sequence[str], rule: str = 'odd_even',
                random_seed: Optional[int] = None) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """
    규칙에 따라 문항을 두 묶음으로 분할

    Args:
        items (Sequence[str]): 문항 목록 (짝수 개)
        rule (str): 'odd_even' (번갈아), 'first_last' (앞/뒤 절반), 'random'
        random_seed (Optional[int]): 'random' 규칙의 시드

    Returns:
        Tuple: (묶음 A, 묶음 B)
    """
    items = list(items)
    if len(items) < 2 or len(items) % 2 != 0:
        raise ShapeMismatchError(
            f"규칙 기반 반분에는 짝수 개(2개 이상)의 문항이 필요합니다 (현재 {len(items)}개). "
            "명시적인 분할을 지정하세요"
        )

    half = len(items) // 2
    if rule == 'odd_even':
        return tuple(items[0::2]), tuple(items[1::2])
    elif rule == 'first_last':
        return tuple(items[:half]), tuple(items[half:])
    elif rule == 'random':
        rng = np.random.default_rng(random_seed)
        shuffled = [items[i] for i in rng.permutation(len(items))]
        return tuple(shuffled[:half]), tuple(shuffled[half:])
    else:
        raise ValueError(f"지원되지 않는 반분 규칙: {rule}")


def _validate_partition(columns: Sequence[str], partition: Partition) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    half_a, half_b = tuple(partition[0]), tuple(partition[1])

    if not half_a or not half_b:
        raise ShapeMismatchError("반분 묶음이 비어 있습니다")

    unknown = [item for item in half_a + half_b if item not in columns]
    if unknown:
        raise ShapeMismatchError(f"데이터에 없는 문항: {unknown}")

    overlap = set(half_a) & set(half_b)
    if overlap or len(set(half_a)) != len(half_a) or len(set(half_b)) != len(half_b):
        raise ShapeMismatchError(f"반분 묶음이 서로소가 아닙니다: {sorted(overlap)}")

    return half_a, half_b


def mean_score(half: pd.DataFrame) -> pd.Series:
    """기본 묶음 점수: 문항 평균"""
    return half.mean(axis=1)


def split_half_reliability(data: pd.DataFrame,
                           partition: Optional[Partition] = None,
                           rule: str = 'odd_even',
                           scorer: Optional[Scorer] = None,
                           random_seed: Optional[int] = None) -> SplitHalfResult:
    """
    반분 신뢰도 계산

    Args:
        data (pd.DataFrame): 응답 행렬
        partition (Optional[Partition]): 명시적 분할 (묶음 A, 묶음 B)
        rule (str): partition이 없을 때 사용할 분할 규칙
        scorer (Optional[Scorer]): 묶음 데이터 -> 응답자 점수 함수 (기본: 평균)
        random_seed (Optional[int]): 'random' 규칙의 시드

    Returns:
        SplitHalfResult: 반분 상관 r과 교정된 신뢰도
    """
    validate_response_matrix(data, min_items=2)

    if partition is None:
        half_a, half_b = split_items(list(data.columns), rule=rule, random_seed=random_seed)
    else:
        half_a, half_b = _validate_partition(list(data.columns), partition)

    scorer = scorer or mean_score
    score_a = scorer(data[list(half_a)])
    score_b = scorer(data[list(half_b)])

    r = pearson_r(score_a, score_b)
    if np.isclose(r, -1.0):
        raise DegenerateInputError("반분 상관이 -1입니다 (Spearman-Brown 교정 정의 불가)")

    adjusted = spearman_brown(r)

    logger.info(f"반분 신뢰도 계산 완료: r = {r:.4f}, Spearman-Brown = {adjusted:.4f}")
    return SplitHalfResult(r=r, adjusted=adjusted, half_a=half_a, half_b=half_b)
