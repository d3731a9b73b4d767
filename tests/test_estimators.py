"""
문항간 상관, 문항-총점 상관, 크론바흐 알파 테스트
"""

import numpy as np
import pandas as pd
import pytest

from scale_reliability import (
    DegenerateInputError,
    ShapeMismatchError,
    alpha_if_item_deleted,
    average_inter_item_correlation,
    average_item_total_correlation,
    cronbach_alpha
)

from conftest import make_factor_data


class TestInterItemCorrelation:
    """평균 문항간 상관 테스트"""

    def test_duplicated_items(self):
        base = np.array([1, 3, 2, 5, 4, 4, 2])
        data = pd.DataFrame({'a': base, 'b': base, 'c': base})

        result = average_inter_item_correlation(data)

        assert result.mean == pytest.approx(1.0)
        assert result.per_item.tolist() == pytest.approx([1.0, 1.0, 1.0])

    def test_two_items(self, small_data):
        data = small_data[['q1', 'q3']]
        result = average_inter_item_correlation(data)
        expected = data['q1'].corr(data['q3'])

        assert result.per_item['q1'] == pytest.approx(expected)
        assert result.per_item['q3'] == pytest.approx(expected)
        assert result.mean == pytest.approx(expected)

    def test_grand_mean_equals_off_diagonal_mean(self, factor_data):
        result = average_inter_item_correlation(factor_data)
        corr = factor_data.corr().to_numpy()
        upper = corr[np.triu_indices(corr.shape[0], k=1)]

        assert result.mean == pytest.approx(upper.mean())
        # loading 0.8 -> 기대 상관 0.64
        assert result.mean == pytest.approx(0.64, abs=0.06)

    def test_column_order_independent(self, factor_data):
        reordered = factor_data[list(reversed(factor_data.columns))]
        assert average_inter_item_correlation(reordered).mean == pytest.approx(
            average_inter_item_correlation(factor_data).mean
        )

    def test_input_not_modified(self, small_data):
        before = small_data.copy()
        average_inter_item_correlation(small_data)
        pd.testing.assert_frame_equal(small_data, before)


class TestItemTotalCorrelation:
    """평균 문항-총점 상관 테스트"""

    def test_inclusive_total(self, small_data):
        result = average_item_total_correlation(small_data)
        total = small_data.mean(axis=1)

        assert result.exclude_self is False
        for item in small_data.columns:
            assert result.per_item[item] == pytest.approx(small_data[item].corr(total))
        assert result.mean == pytest.approx(result.per_item.mean())

    def test_corrected_total_two_items(self, small_data):
        data = small_data[['q1', 'q3']]
        result = average_item_total_correlation(data, exclude_self=True)

        assert result.exclude_self is True
        assert result.mean == pytest.approx(data['q1'].corr(data['q3']))

    def test_inclusive_is_higher_than_corrected(self, factor_data):
        inclusive = average_item_total_correlation(factor_data)
        corrected = average_item_total_correlation(factor_data, exclude_self=True)
        assert inclusive.mean > corrected.mean

    def test_noise_item_lowers_mean(self):
        clean = make_factor_data(n_items=5, loading=0.9, seed=1)
        noisy = clean.copy()
        noisy['q5'] = np.random.default_rng(99).normal(size=len(noisy))

        assert average_item_total_correlation(noisy).mean < average_item_total_correlation(clean).mean

    def test_constant_item(self, small_data):
        with pytest.raises(DegenerateInputError):
            average_item_total_correlation(small_data.assign(q5=1))


class TestCronbachAlpha:
    """크론바흐 알파 테스트"""

    def test_perfectly_consistent_items(self, small_data):
        # 문항분산 2.5 + 2.5, 총점분산 10 -> alpha = 2 * (1 - 5 / 10)
        assert cronbach_alpha(small_data[['q1', 'q2']]) == pytest.approx(1.0)

    def test_negative_alpha_is_not_clamped(self):
        data = pd.DataFrame({'q1': [1, 2, 3, 4, 5], 'q2': [4, 5, 3, 1, 2]})
        # 문항분산 합 5, 총점분산 1 -> alpha = 2 * (1 - 5) = -8
        assert cronbach_alpha(data) == pytest.approx(-8.0)

    def test_population_variance(self):
        data = pd.DataFrame({'q1': [1, 2, 3, 4, 5], 'q2': [4, 5, 3, 1, 2]})
        assert cronbach_alpha(data, ddof=0) == pytest.approx(-8.0)

    def test_matches_formula(self, likert_data):
        k = likert_data.shape[1]
        expected = (k / (k - 1)) * (
            1 - likert_data.var(ddof=1).sum() / likert_data.sum(axis=1).var(ddof=1)
        )
        assert cronbach_alpha(likert_data) == pytest.approx(expected)

    def test_rescaling_invariance(self, likert_data):
        assert cronbach_alpha(likert_data * 2.5) == pytest.approx(cronbach_alpha(likert_data))

    def test_small_scale_rescaling(self, likert_data):
        # 총점분산이 1e-8보다 작아도 퇴화 입력이 아님
        assert cronbach_alpha(likert_data * 1e-5) == pytest.approx(cronbach_alpha(likert_data))

    def test_column_order_independent(self, likert_data):
        reordered = likert_data[list(reversed(likert_data.columns))]
        assert cronbach_alpha(reordered) == pytest.approx(cronbach_alpha(likert_data))

    def test_constant_column(self, small_data):
        with pytest.raises(DegenerateInputError):
            cronbach_alpha(small_data.assign(q5=3))

    def test_constant_total(self):
        data = pd.DataFrame({'q1': [1, 2, 3, 4, 5], 'q2': [5, 4, 3, 2, 1]})
        with pytest.raises(DegenerateInputError):
            cronbach_alpha(data)

    def test_single_item(self, small_data):
        with pytest.raises(ShapeMismatchError):
            cronbach_alpha(small_data[['q1']])


class TestAlphaIfItemDeleted:
    """문항 제거 시 알파 테스트"""

    def test_each_item(self, small_data):
        result = alpha_if_item_deleted(small_data)

        assert list(result.index) == list(small_data.columns)
        assert result['q3'] == pytest.approx(cronbach_alpha(small_data[['q1', 'q2', 'q4']]))

    def test_noise_item_raises_alpha_when_deleted(self):
        data = make_factor_data(n_items=5, loading=0.8, seed=3)
        data['q5'] = np.random.default_rng(5).normal(size=len(data))

        result = alpha_if_item_deleted(data)
        assert result.idxmax() == 'q5'
        assert result['q5'] > cronbach_alpha(data)

    def test_requires_three_items(self, small_data):
        with pytest.raises(ShapeMismatchError):
            alpha_if_item_deleted(small_data[['q1', 'q2']])
