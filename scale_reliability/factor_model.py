"""
Factor Model Fitter Module using semopy

합성신뢰도 계산에 필요한 표준화 요인부하량을 단일 요인 확인적 요인분석(CFA)으로
추정합니다. 요인분석 자체는 semopy에 위임하며, 다른 추정 방법을 쓰려면
FactorModelFitter를 상속해 fit()을 구현하면 됩니다.
"""

import logging
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

try:
    from semopy import Model
except ImportError as e:
    logging.error("semopy 라이브러리를 찾을 수 없습니다. pip install semopy로 설치해주세요.")
    raise e

from .config import ReliabilityConfig, get_default_config
from .correlation import check_variance
from .data_loader import validate_response_matrix
from .exceptions import ShapeMismatchError

logger = logging.getLogger(__name__)


def build_single_factor_spec(factor_name: str, items: Sequence[str]) -> str:
    """
    단일 요인에 대한 semopy 모델 스펙 생성

    Args:
        factor_name (str): 잠재요인 이름
        items (Sequence[str]): 요인에 적재되는 문항들

    Returns:
        str: semopy 모델 스펙 문자열
    """
    items = list(items)
    if len(items) < 2:
        raise ShapeMismatchError(f"단일 요인 모델에는 최소 2개 문항이 필요합니다 (현재 {len(items)}개)")
    if factor_name in items:
        raise ShapeMismatchError(f"잠재요인 이름이 문항 이름과 겹칩니다: {factor_name}")

    spec_lines = []
    spec_lines.append(f"# {factor_name} Factor Model")
    spec_lines.append(f"{factor_name} =~ " + " + ".join(items))
    return "\n".join(spec_lines)


class FactorModelFitter(ABC):
    """단일 요인 모델 적합 인터페이스"""

    @abstractmethod
    def fit(self, data: pd.DataFrame, items: Optional[Sequence[str]] = None) -> pd.Series:
        """
        단일 요인 모델을 적합하고 표준화 요인부하량 반환

        Args:
            data (pd.DataFrame): 응답 행렬
            items (Optional[Sequence[str]]): 요인에 적재되는 문항 (None이면 전체 컬럼)

        Returns:
            pd.Series: {문항: 표준화 요인부하량}
        """


class SemopyFactorModelFitter(FactorModelFitter):
    """semopy를 사용한 단일 요인 CFA"""

    def __init__(self, config: Optional[ReliabilityConfig] = None):
        self.config = config if config is not None else get_default_config()
        self.model = None
        self.fit_info: Dict[str, Any] = {}

    def fit(self, data: pd.DataFrame, items: Optional[Sequence[str]] = None) -> pd.Series:
        items = list(data.columns) if items is None else list(items)

        missing = [item for item in items if item not in data.columns]
        if missing:
            raise ShapeMismatchError(f"데이터에 없는 문항: {missing}")

        item_data = validate_response_matrix(data[items], min_items=2)
        check_variance(item_data)

        model_spec = build_single_factor_spec(self.config.factor_name, items)
        self.model = Model(model_spec)

        logger.info(f"SEM 최적화 시작 (solver={self.config.optimizer})...")
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            self.model.fit(item_data, solver=self.config.optimizer)

        self.fit_info = self._collect_fit_info()
        if self.fit_info.get('success') is False:
            logger.warning(f"SEM 최적화가 수렴하지 않았습니다: {self.fit_info.get('message')}")

        loadings = self._extract_standardized_loadings(items)
        logger.info(f"{self.config.factor_name} 요인부하량 추정 완료: {len(loadings)}개 문항")
        return loadings

    def _collect_fit_info(self) -> Dict[str, Any]:
        """최적화 결과 요약"""
        info: Dict[str, Any] = {}
        last_result = getattr(self.model, 'last_result', None)
        if last_result is None:
            return info

        for key in ('n_it', 'nit', 'n_fev', 'nfev', 'fun', 'success', 'message'):
            if hasattr(last_result, key):
                info[key] = getattr(last_result, key)
        return info

    def _extract_standardized_loadings(self, items: List[str]) -> pd.Series:
        """inspect(std_est=True) 결과에서 측정모형 표준화 부하량 추출"""
        params = self.model.inspect(std_est=True)

        # semopy에서는 lval이 item, rval이 factor
        measurement = params[(params['op'] == '~') & (params['rval'] == self.config.factor_name)]

        std_col = None
        for col in ['Est. Std', 'Std. Estimate', 'std_est', 'standardized']:
            if col in params.columns:
                std_col = col
                break
        if std_col is None:
            raise RuntimeError(f"semopy 결과에 표준화 추정치 컬럼이 없습니다: {list(params.columns)}")

        loadings = pd.to_numeric(measurement.set_index('lval')[std_col], errors='coerce')
        loadings = loadings.reindex(items)
        loadings.name = 'loading'
        loadings.index.name = 'item'

        if loadings.isna().any():
            raise RuntimeError(f"요인부하량을 추출하지 못한 문항: {loadings[loadings.isna()].index.tolist()}")

        return loadings


def fit_single_factor(data: pd.DataFrame, items: Optional[Sequence[str]] = None,
                      config: Optional[ReliabilityConfig] = None) -> pd.Series:
    """단일 요인 CFA 편의 함수"""
    return SemopyFactorModelFitter(config).fit(data, items)


__all__ = [
    'FactorModelFitter',
    'SemopyFactorModelFitter',
    'build_single_factor_spec',
    'fit_single_factor'
]
