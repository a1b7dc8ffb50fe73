"""
시뮬레이션 스텝 로그
각 스텝은 해당 시점의 전체 프로세스 스냅샷을 가지므로
어떤 인덱스든 스케줄러 재실행 없이 바로 재생할 수 있다
"""

from enum import Enum
from typing import List, Optional, Tuple, Iterator, Dict, Any
from dataclasses import dataclass

from .errors import SimulationError
from .process import ProcessSnapshot


class StepEvent(Enum):
    """스텝 이벤트 종류"""
    START = "Start"
    ARRIVAL = "Arrival"
    IDLE = "Idle"
    SELECT = "Select"
    EXECUTE = "Execute"
    PREEMPT = "Preempt"
    QUANTUM_EXPIRED = "Quantum Expired"
    TERMINATE = "Terminate"
    COMPLETE = "Complete"


@dataclass(frozen=True)
class Step:
    """스텝 로그 엔트리"""
    time: int
    description: str
    processes: Tuple[ProcessSnapshot, ...]
    event: StepEvent
    process_id: Optional[int] = None

    def find(self, pid: int) -> Optional[ProcessSnapshot]:
        for snapshot in self.processes:
            if snapshot.pid == pid:
                return snapshot
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'time': self.time,
            'description': self.description,
            'event': self.event.value,
            'process_id': self.process_id,
            'processes': [p.to_dict() for p in self.processes],
        }


class StepLog:
    """
    추가만 가능한 스텝 시퀀스
    time은 단조 비감소이며 freeze() 이후에는 더 이상 추가할 수 없다
    """

    def __init__(self):
        self._steps: List[Step] = []
        self._frozen = False

    def append(self, step: Step):
        if self._frozen:
            raise SimulationError("Step log is frozen")
        if self._steps and step.time < self._steps[-1].time:
            raise SimulationError(
                f"Step time went backwards: {self._steps[-1].time} -> {step.time}")
        self._steps.append(step)

    def freeze(self) -> 'StepLog':
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def first(self) -> Step:
        return self._steps[0]

    @property
    def last(self) -> Step:
        return self._steps[-1]

    def times(self) -> List[int]:
        return [step.time for step in self._steps]

    def to_list(self) -> List[Dict[str, Any]]:
        return [step.to_dict() for step in self._steps]

    def __len__(self) -> int:
        return len(self._steps)

    def __getitem__(self, index):
        return self._steps[index]

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    def __repr__(self):
        end = self._steps[-1].time if self._steps else 0
        return f"StepLog(steps={len(self._steps)}, end_time={end})"
