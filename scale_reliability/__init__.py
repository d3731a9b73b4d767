"""
Scale Reliability 패키지

설문 척도의 내적 일관성(신뢰도)을 계산하는 모듈들을 제공합니다:
- 평균 문항간 상관 (Average Inter-Item Correlation)
- 평균 문항-총점 상관 (Average Item-Total Correlation)
- Cronbach's Alpha (크론바흐 알파)
- 반분 신뢰도 (Split-Half, Spearman-Brown 교정)
- Composite Reliability (CR, 합성신뢰도) - semopy 단일 요인 CFA 기반

Author: Sugar Substitute Research Team
"""

from .exceptions import (
    ReliabilityError,
    DegenerateInputError,
    InvalidLoadingsError,
    ShapeMismatchError
)
from .config import ReliabilityConfig, get_default_config, create_custom_config, setup_logging
from .data_loader import load_response_matrix, validate_response_matrix, reverse_score
from .correlation import correlation_matrix, total_score, off_diagonal_values, pearson_r
from .inter_item import InterItemResult, average_inter_item_correlation
from .item_total import ItemTotalResult, average_item_total_correlation
from .alpha import cronbach_alpha, alpha_if_item_deleted
from .split_half import (
    SplitHalfResult,
    split_half_reliability,
    split_items,
    spearman_brown
)
from .composite import composite_reliability, average_variance_extracted, error_variances
from .factor_model import (
    FactorModelFitter,
    SemopyFactorModelFitter,
    build_single_factor_spec,
    fit_single_factor
)
from .calculator import ReliabilityCalculator, ReliabilityReport, calculate_reliability

__version__ = "1.0.0"
__author__ = "Sugar Substitute Research Team"

__all__ = [
    # Errors
    'ReliabilityError',
    'DegenerateInputError',
    'InvalidLoadingsError',
    'ShapeMismatchError',

    # Configuration
    'ReliabilityConfig',
    'get_default_config',
    'create_custom_config',
    'setup_logging',

    # Data loading
    'load_response_matrix',
    'validate_response_matrix',
    'reverse_score',

    # Correlation utilities
    'correlation_matrix',
    'total_score',
    'off_diagonal_values',
    'pearson_r',

    # Estimators
    'InterItemResult',
    'average_inter_item_correlation',
    'ItemTotalResult',
    'average_item_total_correlation',
    'cronbach_alpha',
    'alpha_if_item_deleted',
    'SplitHalfResult',
    'split_half_reliability',
    'split_items',
    'spearman_brown',
    'composite_reliability',
    'average_variance_extracted',
    'error_variances',

    # Factor model
    'FactorModelFitter',
    'SemopyFactorModelFitter',
    'build_single_factor_spec',
    'fit_single_factor',

    # Calculator
    'ReliabilityCalculator',
    'ReliabilityReport',
    'calculate_reliability'
]
