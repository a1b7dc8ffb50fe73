"""
시뮬레이션 예외 정의
"""


class SimulationError(Exception):
    """시뮬레이션 엔진 공통 예외"""


class InvalidInputError(SimulationError, ValueError):
    """잘못된 입력 (빈 프로세스 목록, 잘못된 필드 값 등)"""


class UnknownAlgorithmError(InvalidInputError):
    """지원하지 않는 알고리즘 이름"""

    def __init__(self, algorithm):
        super().__init__(f"Unknown algorithm: {algorithm}")
        self.algorithm = algorithm


class EmptyResultError(SimulationError):
    """스케줄러가 스텝을 하나도 생성하지 못한 경우"""
