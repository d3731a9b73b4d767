#!/usr/bin/env python3
"""
신뢰도 분석 실행 스크립트

이 스크립트는 응답 CSV 파일 하나(척도 하나)에 대해 다음을 계산합니다:
- 평균 문항간 상관 / 평균 문항-총점 상관
- Cronbach's Alpha (크론바흐 알파)
- 반분 신뢰도 (Spearman-Brown 교정)
- Composite Reliability (CR, 합성신뢰도), AVE

예:
    python run_reliability_analysis.py processed_data/survey_data/health_concern.csv
"""

import sys

from scale_reliability.cli import main


if __name__ == "__main__":
    sys.exit(main())
