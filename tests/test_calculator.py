"""
ReliabilityCalculator 통합 테스트
"""

from typing import Optional, Sequence

import numpy as np
import pandas as pd
import pytest

from scale_reliability import (
    FactorModelFitter,
    InvalidLoadingsError,
    ReliabilityCalculator,
    ReliabilityConfig,
    ShapeMismatchError,
    calculate_reliability,
    composite_reliability,
    cronbach_alpha
)


class FixedLoadingsFitter(FactorModelFitter):
    """모든 문항에 같은 부하량을 돌려주는 테스트용 추정기"""

    def __init__(self, loading: float = 0.7):
        self.loading = loading
        self.calls = 0

    def fit(self, data: pd.DataFrame, items: Optional[Sequence[str]] = None) -> pd.Series:
        self.calls += 1
        items = list(data.columns) if items is None else list(items)
        return pd.Series(self.loading, index=items)


class TestReliabilityCalculator:
    """신뢰도 통합 계산 테스트"""

    def test_full_report(self, likert_data):
        fitter = FixedLoadingsFitter(0.7)
        calculator = ReliabilityCalculator(fitter=fitter)

        report = calculator.calculate(likert_data, scale_name='health_concern')

        assert fitter.calls == 1
        assert report.scale_name == 'health_concern'
        assert report.n_items == 6
        assert report.n_observations == len(likert_data)
        assert report.cronbach_alpha == pytest.approx(cronbach_alpha(likert_data))
        assert report.split_half.half_a == ('q1', 'q3', 'q5')
        assert report.composite_reliability == pytest.approx(composite_reliability([0.7] * 6))
        assert report.ave == pytest.approx(0.49)
        assert list(report.alpha_if_deleted.index) == list(likert_data.columns)
        assert report.notes == {}

    def test_without_fitter(self, likert_data):
        report = ReliabilityCalculator().calculate(likert_data)

        assert np.isnan(report.composite_reliability)
        assert np.isnan(report.ave)
        assert 'composite_reliability' in report.notes

    def test_external_loadings(self, likert_data):
        loadings = {col: 0.8 for col in likert_data.columns}
        report = calculate_reliability(likert_data, loadings=loadings)
        assert report.composite_reliability == pytest.approx(composite_reliability(loadings))

    def test_loadings_for_unknown_items(self, likert_data):
        with pytest.raises(ShapeMismatchError):
            calculate_reliability(likert_data, loadings={'q1': 0.7, 'x9': 0.7})

    def test_loadings_for_subset_of_items(self, likert_data):
        with pytest.raises(ShapeMismatchError):
            ReliabilityCalculator().calculate(likert_data, loadings={'q1': 0.7, 'q2': 0.7})

    def test_loadings_sequence_length(self, likert_data):
        with pytest.raises(ShapeMismatchError):
            calculate_reliability(likert_data, loadings=[0.7, 0.7, 0.7])

    def test_loadings_sequence_follows_column_order(self, likert_data):
        report = calculate_reliability(likert_data, loadings=[0.6, 0.7, 0.8, 0.6, 0.7, 0.8])
        assert list(report.loadings.index) == list(likert_data.columns)

    def test_loadings_mapping_reordered(self, likert_data):
        loadings = {col: 0.7 for col in reversed(likert_data.columns)}
        report = calculate_reliability(likert_data, loadings=loadings)
        assert list(report.loadings.index) == list(likert_data.columns)

    def test_convenience_function_forwards_partition_and_scorer(self, likert_data):
        data = likert_data[['q1', 'q2', 'q3']]
        report = calculate_reliability(
            data,
            partition=(['q1'], ['q2', 'q3']),
            scorer=lambda half: half.sum(axis=1)
        )

        assert report.split_half.half_a == ('q1',)
        expected = np.corrcoef(data['q1'], data[['q2', 'q3']].sum(axis=1))[0, 1]
        assert report.split_half.r == pytest.approx(expected)

    def test_invalid_loadings_propagate(self, likert_data):
        with pytest.raises(InvalidLoadingsError):
            ReliabilityCalculator(fitter=FixedLoadingsFitter(1.3)).calculate(likert_data)

    def test_exclude_self_config(self, likert_data):
        inclusive = calculate_reliability(likert_data)
        corrected = calculate_reliability(likert_data, config=ReliabilityConfig(exclude_self=True))

        assert corrected.item_total.exclude_self is True
        assert corrected.item_total.mean < inclusive.item_total.mean

    def test_odd_items_need_partition(self, likert_data):
        data = likert_data[['q1', 'q2', 'q3']]
        calculator = ReliabilityCalculator()

        with pytest.raises(ShapeMismatchError):
            calculator.calculate(data)

        report = calculator.calculate(data, partition=(['q1', 'q3'], ['q2']))
        assert report.split_half.half_b == ('q2',)


class TestSummaryTable:
    """요약 테이블 테스트"""

    def test_summary_columns_and_flags(self, likert_data):
        calculator = ReliabilityCalculator(fitter=FixedLoadingsFitter(0.75))
        reports = [
            calculator.calculate(likert_data, scale_name='scale_a'),
            calculator.calculate(likert_data[['q1', 'q2', 'q3', 'q4']], scale_name='scale_b')
        ]

        summary = calculator.create_summary_table(reports)

        assert summary['Scale'].tolist() == ['scale_a', 'scale_b']
        assert summary['Items'].tolist() == [6, 4]
        for col in ['Inter_Item_r', 'Item_Total_r', 'Cronbach_Alpha', 'Split_Half_r',
                    'Spearman_Brown', 'Composite_Reliability', 'AVE',
                    'Alpha_Acceptable', 'CR_Acceptable', 'AVE_Acceptable']:
            assert col in summary.columns
        # 0.75^2 = 0.5625 >= 0.5
        assert summary['AVE_Acceptable'].all()

    def test_missing_cr_is_not_acceptable(self, likert_data):
        calculator = ReliabilityCalculator()
        summary = calculator.create_summary_table([calculator.calculate(likert_data)])
        assert not summary['CR_Acceptable'].iloc[0]


class TestReliabilityConfig:
    """설정 검증 테스트"""

    def test_defaults(self):
        config = ReliabilityConfig()
        assert config.ddof == 1
        assert config.split_rule == 'odd_even'
        assert config.exclude_self is False

    def test_invalid_split_rule(self):
        with pytest.raises(ValueError):
            ReliabilityConfig(split_rule='zigzag')

    def test_invalid_ddof(self):
        with pytest.raises(ValueError):
            ReliabilityConfig(ddof=2)

    def test_invalid_threshold(self):
        with pytest.raises(ValueError):
            ReliabilityConfig(alpha_threshold=1.5)
