"""
프로세스 및 상태 스냅샷 관리 모듈
"""

from enum import Enum
from typing import Dict, Any
from dataclasses import dataclass
from copy import deepcopy


class ProcessState(Enum):
    """프로세스 상태"""
    NEW = "New"
    READY = "Ready"
    RUNNING = "Running"
    WAITING = "Waiting"  # 예약됨: 어떤 스케줄러도 할당하지 않음
    TERMINATED = "Terminated"


@dataclass(frozen=True)
class ProcessSnapshot:
    """특정 시점의 프로세스 공개 필드 복사본 (불변)"""
    pid: int
    name: str
    arrival_time: int
    burst_time: int
    remaining_time: int
    priority: int
    state: ProcessState

    def to_dict(self) -> Dict[str, Any]:
        return {
            'pid': self.pid,
            'name': self.name,
            'arrival_time': self.arrival_time,
            'burst_time': self.burst_time,
            'remaining_time': self.remaining_time,
            'priority': self.priority,
            'state': self.state.value,
        }


class Process:
    """
    스케줄링 단위 하나를 표현
    arrival_time, burst_time, priority는 생성 후 변하지 않고
    remaining_time과 state만 시뮬레이션 중에 바뀐다
    """

    def __init__(self, pid: int, name: str, arrival_time: int, burst_time: int,
                 priority: int = 1):
        """
        Args:
            pid: 프로세스 ID (고유, 재사용 안 함)
            name: 표시 이름
            arrival_time: 도착 시간 (0 이상)
            burst_time: 총 CPU 시간 (양수)
            priority: 우선순위 (낮을수록 높은 우선순위, 1 이상)
        """
        self.pid = pid
        self.name = name
        self.arrival_time = arrival_time
        self.burst_time = burst_time
        self.priority = priority

        self.remaining_time = burst_time
        self.state = ProcessState.NEW

    def execute(self, time_units: int = 1) -> bool:
        """
        프로세스 실행 (남은 시간 감소)

        Returns:
            실행이 완료되었는지 여부
        """
        if self.state != ProcessState.RUNNING:
            raise ValueError(f"{self.name} is not running (state={self.state.value})")
        self.remaining_time = max(0, self.remaining_time - time_units)
        return self.remaining_time == 0

    def is_completed(self) -> bool:
        return self.state == ProcessState.TERMINATED

    def has_arrived(self, current_time: int) -> bool:
        return self.arrival_time <= current_time

    def snapshot(self) -> ProcessSnapshot:
        return ProcessSnapshot(
            pid=self.pid,
            name=self.name,
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            remaining_time=self.remaining_time,
            priority=self.priority,
            state=self.state,
        )

    def __repr__(self):
        return f"{self.name}[{self.state.value}]"

    def __str__(self):
        return f"Process {self.name} (pid={self.pid}): State={self.state.value}, " \
               f"Priority={self.priority}, Remaining={self.remaining_time}/{self.burst_time}"


def create_process_copy(process: Process) -> Process:
    """
    프로세스의 깊은 복사본 생성 (New 상태, 남은 시간 = burst_time)
    각 스케줄링 알고리즘 시뮬레이션을 원본과 독립적으로 수행하기 위함
    """
    copy = deepcopy(process)
    copy.remaining_time = copy.burst_time
    copy.state = ProcessState.NEW
    return copy
