#!/usr/bin/env python3
"""
신뢰도 분석 실행 스크립트

응답 CSV 파일을 불러와 역문항을 처리한 뒤 5가지 내적 일관성 지표를 계산하고
요약 테이블을 출력합니다.

사용 예:
    scale-reliability data.csv --reverse q2 q5 --scale-min 1 --scale-max 5
"""

import argparse
import logging
import sys
from typing import List, Optional

import pandas as pd

from .calculator import ReliabilityCalculator
from .config import LOGGING_CONFIG, SPLIT_RULES, create_custom_config, setup_logging
from .data_loader import load_response_matrix, reverse_score
from .factor_model import SemopyFactorModelFitter

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='설문 척도 내적 일관성(신뢰도) 분석'
    )
    parser.add_argument('data', help='응답 CSV 파일 경로')
    parser.add_argument('--items', nargs='+', help='분석할 문항 (기본: ID 컬럼 제외 전체)')
    parser.add_argument('--id-column', default='no', help='응답자 ID 컬럼 (기본: no)')
    parser.add_argument('--reverse', nargs='+', default=[], help='역코딩할 문항')
    parser.add_argument('--scale-min', type=float, default=1, help='척도 최솟값')
    parser.add_argument('--scale-max', type=float, default=5, help='척도 최댓값')
    parser.add_argument('--scale-name', default='scale', help='척도 이름')
    parser.add_argument('--exclude-self', action='store_true',
                        help='문항-총점 상관에서 문항 자신을 제외한 총점 사용')
    parser.add_argument('--split-rule', choices=SPLIT_RULES, default='odd_even',
                        help='반분 규칙')
    parser.add_argument('--half-a', nargs='+', help='반분 묶음 A 문항 (나머지는 묶음 B)')
    parser.add_argument('--seed', type=int, default=None, help='random 반분 규칙 시드')
    parser.add_argument('--ddof', type=int, choices=(0, 1), default=1,
                        help='분산 자유도 보정 (1 = 표본분산)')
    parser.add_argument('--no-cfa', action='store_true', help='CFA(CR/AVE) 계산 생략')
    parser.add_argument('--log-level', default=LOGGING_CONFIG['log_level'],
                        help='로그 레벨 (기본: INFO)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """메인 실행 함수"""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = create_custom_config(
            ddof=args.ddof,
            exclude_self=args.exclude_self,
            split_rule=args.split_rule,
            random_seed=args.seed
        )

        data = load_response_matrix(args.data, items=args.items, id_column=args.id_column)
        if args.reverse:
            data = reverse_score(data, args.reverse, args.scale_min, args.scale_max)

        partition = None
        if args.half_a:
            half_b = [col for col in data.columns if col not in args.half_a]
            partition = (args.half_a, half_b)

        fitter = None if args.no_cfa else SemopyFactorModelFitter(config)
        calculator = ReliabilityCalculator(config, fitter)
        report = calculator.calculate(data, scale_name=args.scale_name, partition=partition)

    except (ValueError, RuntimeError, FileNotFoundError) as e:
        logger.error(f"신뢰도 분석 실패: {e}")
        return 1

    summary = calculator.create_summary_table([report])
    with pd.option_context('display.width', 160, 'display.max_columns', None):
        print("\n=== 신뢰도 요약 테이블 ===")
        print(summary.round(4).to_string(index=False))

        print("\n=== 문항별 통계 ===")
        items = pd.DataFrame({
            'Inter_Item_r': report.inter_item.per_item,
            'Item_Total_r': report.item_total.per_item
        })
        if report.alpha_if_deleted is not None:
            items['Alpha_If_Deleted'] = report.alpha_if_deleted
        if report.loadings is not None:
            items['Loading'] = report.loadings
        print(items.round(4).to_string())

    return 0


if __name__ == "__main__":
    sys.exit(main())
