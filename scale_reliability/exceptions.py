"""
신뢰도 계산 오류 정의

모든 추정 함수는 계산이 정의되지 않는 입력을 받으면 NaN을 반환하지 않고
아래 예외를 즉시 발생시킵니다.
"""


class ReliabilityError(ValueError):
    """신뢰도 계산 관련 오류의 기본 클래스"""


class DegenerateInputError(ReliabilityError):
    """분산 또는 상관계수가 정의되지 않는 입력 (분산 0, r = -1 등)"""


class InvalidLoadingsError(ReliabilityError):
    """요인부하량이 비어 있거나 [-1, 1] 범위를 벗어난 경우"""


class ShapeMismatchError(ReliabilityError):
    """문항 수 또는 문항 이름 구성이 계산 조건과 맞지 않는 경우"""
