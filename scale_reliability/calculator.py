"""
신뢰도 통합 계산 모듈

하나의 척도(응답 행렬)에 대해 다음을 계산하고 요약 테이블을 생성합니다:
- 평균 문항간 상관 (Average Inter-Item Correlation)
- 평균 문항-총점 상관 (Average Item-Total Correlation)
- Cronbach's Alpha (크론바흐 알파)
- 반분 신뢰도 (Split-Half, Spearman-Brown 교정)
- Composite Reliability (CR, 합성신뢰도)와 AVE (평균분산추출)
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

import numpy as np
import pandas as pd

from .alpha import alpha_if_item_deleted, cronbach_alpha
from .composite import Loadings, average_variance_extracted, composite_reliability
from .config import ReliabilityConfig, get_default_config
from .data_loader import validate_response_matrix
from .exceptions import ShapeMismatchError
from .factor_model import FactorModelFitter
from .inter_item import InterItemResult, average_inter_item_correlation
from .item_total import ItemTotalResult, average_item_total_correlation
from .split_half import Partition, Scorer, SplitHalfResult, split_half_reliability

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReliabilityReport:
    """단일 척도의 신뢰도 분석 결과"""
    scale_name: str
    n_items: int
    n_observations: int
    inter_item: InterItemResult
    item_total: ItemTotalResult
    cronbach_alpha: float
    split_half: SplitHalfResult
    alpha_if_deleted: Optional[pd.Series] = None
    loadings: Optional[pd.Series] = None
    composite_reliability: float = np.nan
    ave: float = np.nan
    notes: Dict[str, str] = field(default_factory=dict)


class ReliabilityCalculator:
    """신뢰도 계산 클래스"""

    def __init__(self, config: Optional[ReliabilityConfig] = None,
                 fitter: Optional[FactorModelFitter] = None):
        """
        신뢰도 계산기 초기화

        Args:
            config (Optional[ReliabilityConfig]): 분석 설정
            fitter (Optional[FactorModelFitter]): 요인부하량 추정기 (None이면 CR/AVE 생략)
        """
        self.config = config if config is not None else get_default_config()
        self.fitter = fitter

        logger.info("Reliability Calculator 초기화 완료")

    def calculate(self, data: pd.DataFrame, scale_name: str = 'scale',
                  loadings: Optional[Loadings] = None,
                  partition: Optional[Partition] = None, scorer: Optional[Scorer] = None) -> ReliabilityReport:
        """
        척도 하나에 대한 전체 신뢰도 계산

        Args:
            data (pd.DataFrame): 응답 행렬 (역문항 처리 완료)
            scale_name (str): 척도 이름
            loadings (Optional[Loadings]): 외부에서 추정한 표준화 요인부하량
            partition: 반분 신뢰도용 명시적 분할 (홀수 문항일 때 필요)
            scorer (Optional[Scorer]): 반분 묶음 점수 함수

        Returns:
            ReliabilityReport: 신뢰도 분석 결과
        """
        validate_response_matrix(data, min_items=2)
        notes = {}

        inter_item = average_inter_item_correlation(data)
        item_total = average_item_total_correlation(data, exclude_self=self.config.exclude_self)
        alpha = cronbach_alpha(data, ddof=self.config.ddof)
        split = split_half_reliability(
            data,
            partition=partition,
            rule=self.config.split_rule,
            scorer=scorer,
            random_seed=self.config.random_seed
        )

        alpha_deleted = None
        if data.shape[1] >= 3:
            alpha_deleted = alpha_if_item_deleted(data, ddof=self.config.ddof)

        if loadings is None and self.fitter is not None:
            loadings = self.fitter.fit(data)

        cr = ave = np.nan
        loadings_series = None
        if loadings is not None:
            loadings_series = self._align_loadings(loadings, data)
            cr = composite_reliability(loadings_series)
            ave = average_variance_extracted(loadings_series)
        else:
            notes['composite_reliability'] = '요인부하량이 없어 CR/AVE를 계산하지 않았습니다'

        logger.info(f"{scale_name} 신뢰도 통계 계산 완료")
        return ReliabilityReport(
            scale_name=scale_name,
            n_items=data.shape[1],
            n_observations=len(data),
            inter_item=inter_item,
            item_total=item_total,
            cronbach_alpha=alpha,
            split_half=split,
            alpha_if_deleted=alpha_deleted,
            loadings=loadings_series,
            composite_reliability=cr,
            ave=ave,
            notes=notes
        )

    @staticmethod
    def _align_loadings(loadings: Loadings, data: pd.DataFrame) -> pd.Series:
        """요인부하량을 응답 행렬의 문항 순서에 맞춤 (문항 집합이 같아야 함)"""
        if isinstance(loadings, (Mapping, pd.Series)):
            series = loadings if isinstance(loadings, pd.Series) else pd.Series(loadings)
            unknown = set(series.index) - set(data.columns)
            missing = set(data.columns) - set(series.index)
            if unknown or missing:
                raise ShapeMismatchError(
                    f"요인부하량 문항과 응답 문항이 다릅니다 "
                    f"(데이터에 없음: {sorted(unknown)}, 부하량 없음: {sorted(missing)})"
                )
            return series.reindex(data.columns)

        if len(loadings) != data.shape[1]:
            raise ShapeMismatchError(
                f"요인부하량 개수({len(loadings)})와 문항 수({data.shape[1]})가 다릅니다"
            )
        return pd.Series(list(loadings), index=data.columns)

    def create_summary_table(self, reports: Iterable[ReliabilityReport]) -> pd.DataFrame:
        """
        신뢰도 요약 테이블 생성

        Args:
            reports (Iterable[ReliabilityReport]): 척도별 신뢰도 결과

        Returns:
            pd.DataFrame: 신뢰도 요약 테이블
        """
        rows = []
        for report in reports:
            rows.append({
                'Scale': report.scale_name,
                'Items': report.n_items,
                'N': report.n_observations,
                'Inter_Item_r': report.inter_item.mean,
                'Item_Total_r': report.item_total.mean,
                'Cronbach_Alpha': report.cronbach_alpha,
                'Split_Half_r': report.split_half.r,
                'Spearman_Brown': report.split_half.adjusted,
                'Composite_Reliability': report.composite_reliability,
                'AVE': report.ave
            })

        df = pd.DataFrame(rows, columns=[
            'Scale', 'Items', 'N', 'Inter_Item_r', 'Item_Total_r', 'Cronbach_Alpha',
            'Split_Half_r', 'Spearman_Brown', 'Composite_Reliability', 'AVE'
        ])

        # 신뢰도 기준 추가
        df['Alpha_Acceptable'] = df['Cronbach_Alpha'] >= self.config.alpha_threshold
        df['CR_Acceptable'] = df['Composite_Reliability'] >= self.config.cr_threshold
        df['AVE_Acceptable'] = df['AVE'] >= self.config.ave_threshold

        logger.info("신뢰도 요약 테이블 생성 완료")
        return df


def calculate_reliability(data: pd.DataFrame, scale_name: str = 'scale',
                          config: Optional[ReliabilityConfig] = None,
                          fitter: Optional[FactorModelFitter] = None,
                          loadings: Optional[Loadings] = None,
                          partition: Optional[Partition] = None,
                          scorer: Optional[Scorer] = None) -> ReliabilityReport:
    """
    신뢰도 분석 실행 편의 함수

    Args:
        data (pd.DataFrame): 응답 행렬
        scale_name (str): 척도 이름
        config (Optional[ReliabilityConfig]): 분석 설정
        fitter (Optional[FactorModelFitter]): 요인부하량 추정기
        loadings (Optional[Loadings]): 외부 요인부하량
        partition (Optional[Partition]): 반분 신뢰도용 명시적 분할
        scorer (Optional[Scorer]): 반분 묶음 점수 함수

    Returns:
        ReliabilityReport: 신뢰도 분석 결과
    """
    calculator = ReliabilityCalculator(config, fitter)
    return calculator.calculate(data, scale_name=scale_name, loadings=loadings,
                                partition=partition, scorer=scorer)
