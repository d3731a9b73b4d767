"""
공통 테스트 픽스처

단일 요인 + 독립 오차 구조의 모의 응답 데이터를 생성합니다.
"""

import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

# 프로젝트 루트를 Python path에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def make_factor_data(n_obs: int = 500, n_items: int = 6, loading: float = 0.8,
                     seed: int = 42) -> pd.DataFrame:
    """표준화 요인부하량이 loading인 단일 요인 모의 데이터"""
    rng = np.random.default_rng(seed)
    factor = rng.normal(size=n_obs)
    noise = rng.normal(size=(n_obs, n_items))
    values = loading * factor[:, None] + np.sqrt(1 - loading ** 2) * noise
    return pd.DataFrame(values, columns=[f"q{i}" for i in range(1, n_items + 1)])


def make_likert_data(n_obs: int = 300, n_items: int = 6, seed: int = 7) -> pd.DataFrame:
    """1-5점 리커트 척도 모의 데이터"""
    rng = np.random.default_rng(seed)
    factor = rng.normal(size=n_obs)
    noise = rng.normal(scale=0.7, size=(n_obs, n_items))
    values = np.clip(np.round(3 + factor[:, None] + noise), 1, 5).astype(int)
    return pd.DataFrame(values, columns=[f"q{i}" for i in range(1, n_items + 1)])


@pytest.fixture
def factor_data():
    return make_factor_data()


@pytest.fixture
def likert_data():
    return make_likert_data()


@pytest.fixture
def small_data():
    """손으로 검산 가능한 소규모 데이터"""
    return pd.DataFrame({
        'q1': [1, 2, 3, 4, 5],
        'q2': [2, 3, 4, 5, 6],
        'q3': [1, 3, 2, 5, 4],
        'q4': [2, 2, 3, 4, 5]
    })
