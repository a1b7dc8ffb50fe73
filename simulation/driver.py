"""
시뮬레이션 드라이버
알고리즘 이름으로 스케줄러를 선택하고 실행한다 (스케줄링 로직 없음)
"""

import logging
from enum import Enum
from typing import List, Dict, Optional, Union

from core.errors import InvalidInputError, UnknownAlgorithmError, EmptyResultError
from core.process import Process
from core.scheduler_base import SchedulerConfig, normalize_quantum
from core.statistics import SchedulerStats, build_gantt_chart
from core.step_log import StepLog
from schedulers import (FCFSScheduler, SJFScheduler, RoundRobinScheduler,
                        PriorityPreemptiveScheduler)

logger = logging.getLogger(__name__)


class Algorithm(Enum):
    """지원 알고리즘"""
    FCFS = "FCFS"
    SJF = "SJF"
    PRIORITY = "Priority"
    ROUND_ROBIN = "RoundRobin"

    @classmethod
    def parse(cls, value: Union['Algorithm', str]) -> 'Algorithm':
        """Enum 또는 문자열(대소문자 무시, RR 허용)을 Algorithm으로 변환"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace('_', '').replace('-', '').replace(' ', '')
            for algorithm in cls:
                if algorithm.value.lower() == key:
                    return algorithm
            if key == 'rr':
                return cls.ROUND_ROBIN
        raise UnknownAlgorithmError(value)


# 알고리즘 매핑
ALGORITHMS = {
    Algorithm.FCFS: {
        'name': 'FCFS (First-Come, First-Served)',
        'class': FCFSScheduler,
        'preemptive': False
    },
    Algorithm.SJF: {
        'name': 'SJF (Shortest Job First - Non-Preemptive)',
        'class': SJFScheduler,
        'preemptive': False
    },
    Algorithm.PRIORITY: {
        'name': 'Priority (Preemptive)',
        'class': PriorityPreemptiveScheduler,
        'preemptive': True
    },
    Algorithm.ROUND_ROBIN: {
        'name': 'Round Robin',
        'class': RoundRobinScheduler,
        'preemptive': True
    },
}


def validate_processes(processes: List[Process]):
    """
    입력 프로세스 검증

    Raises:
        InvalidInputError: 빈 목록, 중복 PID, 잘못된 필드 값
    """
    if not processes:
        raise InvalidInputError("At least one process is required")

    seen = set()
    for p in processes:
        if p.pid in seen:
            raise InvalidInputError(f"Duplicate process id: {p.pid}")
        seen.add(p.pid)

        if not isinstance(p.name, str) or not p.name.strip():
            raise InvalidInputError(f"Process {p.pid} must have a name")
        for field in ('arrival_time', 'burst_time', 'priority'):
            value = getattr(p, field)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInputError(f"{p.name}: {field} must be an integer, got {value!r}")
        if p.arrival_time < 0:
            raise InvalidInputError(f"{p.name}: arrival time must be >= 0")
        if p.burst_time <= 0:
            raise InvalidInputError(f"{p.name}: burst time must be > 0")
        if p.priority < 1:
            raise InvalidInputError(f"{p.name}: priority must be >= 1")


def simulate(algorithm: Union[Algorithm, str], processes: List[Process],
             quantum: Optional[int] = None) -> StepLog:
    """
    선택한 알고리즘으로 시뮬레이션 실행

    Args:
        algorithm: 알고리즘 (Algorithm 또는 이름)
        processes: 입력 프로세스 (변경되지 않음)
        quantum: Round Robin 타임 퀀텀 (잘못된 값이면 기본값 2)

    Returns:
        완성된 스텝 로그
    """
    algorithm = Algorithm.parse(algorithm)
    validate_processes(processes)

    config = SchedulerConfig()
    if algorithm == Algorithm.ROUND_ROBIN:
        config = SchedulerConfig(quantum=normalize_quantum(quantum))

    scheduler = ALGORITHMS[algorithm]['class'](processes, config)
    steps = scheduler.run()

    if len(steps) == 0:
        raise EmptyResultError(f"{algorithm.value} produced no simulation steps")

    logger.info("%s simulation finished: %d steps, end time %d",
                algorithm.value, len(steps), steps.last.time)
    return steps


def summarize(algorithm: Union[Algorithm, str], steps: StepLog) -> Dict:
    """스텝 로그에서 결과 딕셔너리 생성 (통계, Gantt Chart 등)"""
    algorithm = Algorithm.parse(algorithm)
    stats = SchedulerStats.from_steps(steps)
    return {
        'algorithm': algorithm.value,
        'statistics': stats.calculate_averages(),
        'gantt_chart': build_gantt_chart(steps),
        'steps': steps,
        'processes': stats.results
    }


def run_algorithm(algorithm: Union[Algorithm, str], processes: List[Process],
                  quantum: Optional[int] = None) -> Dict:
    """시뮬레이션 실행 후 결과 딕셔너리 반환"""
    steps = simulate(algorithm, processes, quantum)
    return summarize(algorithm, steps)
